"""
Snapshot records returned to front ends.

All records are frozen and serialize to camelCase JSON.
"""

from __future__ import annotations

from typing import Any

from crypto_dht.types import StrictBaseModel


class MinerInfo(StrictBaseModel):
    """Miner status at snapshot time."""

    hashrate: int
    """Latest hash-rate sample, 0 when none was taken yet."""

    running: bool
    """Whether the miner is running."""

    waiting_transactions: int
    """Transactions queued for mining."""

    processing_transactions: int
    """Transactions in the block being mined."""


class WalletClient(StrictBaseModel):
    """
    Display-only view of a wallet.

    Holds no key material beyond the sanitized public address.
    """

    name: str
    """Wallet name."""

    address: str
    """Sanitized public address."""

    amount: int
    """Available funds."""


class BaseInfo(StrictBaseModel):
    """
    Point-in-time aggregate of a ledger node's state.

    Built fresh for every request and never mutated afterwards.
    """

    miner_info: MinerInfo
    """Miner status."""

    wallets: tuple[WalletClient, ...]
    """Wallet views, in the order the node lists its wallets."""

    nodes_nb: int
    """Connected peers."""

    synced: bool
    """Whether the local chain is caught up."""

    blocks_height: int
    """Height of the local chain."""

    difficulty: int
    """Current mining difficulty."""

    next_difficulty: int
    """Difficulty of the next block."""

    time_since_last_block: int
    """Time elapsed since the last block."""

    stored_keys: int
    """DHT keys stored locally."""

    history: tuple[Any, ...]
    """Confirmed transactions involving our wallets."""

    own_waiting_tx: tuple[Any, ...]
    """Our transactions not yet included in a block."""

    def to_json(self) -> dict[str, Any]:
        """Serialize with the camelCase names front ends expect."""
        return self.model_dump(mode="json", by_alias=True)
