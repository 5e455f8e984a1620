"""
Contract the node shell consumes from the ledger node.

The ledger node owns DHT networking, block validation, mining and wallets.
The shell treats it as opaque and only calls the operations listed here.

Failures are reported by raising. The shell never inspects exception types
beyond their message.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from crypto_dht.options import NodeOptions


@runtime_checkable
class Wallet(Protocol):
    """A wallet held by the ledger node. Private key material is never read."""

    @property
    def name(self) -> str:
        """Wallet name, e.g. 'main'."""
        ...

    @property
    def public_key(self) -> Any:
        """Raw public key. Only ever passed back to the ledger node."""
        ...


@runtime_checkable
class LedgerStats(Protocol):
    """Miner statistics."""

    @property
    def hashes_per_sec(self) -> Sequence[int]:
        """Hash-rate samples, oldest first."""
        ...


@runtime_checkable
class LedgerNode(Protocol):
    """
    One running ledger node instance.

    Reads may be called from several tasks while the node runs its own
    background activity. The node is responsible for its own thread safety.
    """

    async def start(self) -> None:
        """
        Bind the listen address, open storage and join the network.

        Raises:
            Exception: If binding or storage initialization fails.
        """
        ...

    def stop(self) -> None:
        """Stop all node activity."""
        ...

    async def wait(self) -> None:
        """Suspend until the node has finished."""
        ...

    def wallets(self) -> Sequence[Wallet]:
        """Wallets loaded from the storage folder."""
        ...

    def stats(self) -> LedgerStats:
        """Current miner statistics."""
        ...

    def connected_nodes_count(self) -> int:
        """Number of connected peers."""
        ...

    def synced(self) -> bool:
        """Whether the local chain is caught up with the network."""
        ...

    def blocks_height(self) -> int:
        """Height of the local chain."""
        ...

    def difficulty(self) -> int:
        """Current mining difficulty."""
        ...

    def next_difficulty(self) -> int:
        """Difficulty of the next block."""
        ...

    def stored_keys(self) -> int:
        """Number of DHT keys stored locally."""
        ...

    def time_since_last_block(self) -> int:
        """Time elapsed since the last block."""
        ...

    def own_history(self) -> Sequence[Any]:
        """Confirmed transactions involving our wallets."""
        ...

    def own_waiting_tx(self) -> Sequence[Any]:
        """Our transactions not yet included in a block."""
        ...

    def running(self) -> bool:
        """Whether the miner is running."""
        ...

    def waiting_transaction_count(self) -> int:
        """Transactions queued for mining."""
        ...

    def processing_transaction_count(self) -> int:
        """Transactions in the block being mined."""
        ...

    def send_to(self, instruction: str) -> None:
        """
        Submit a transaction described by 'amount:destAddress'.

        Raises:
            Exception: If the ledger node rejects the transaction.
        """
        ...

    def available_funds(self, public_key: Any) -> int:
        """Spendable funds for a wallet's raw public key."""
        ...

    def sanitized_address(self, public_key: Any) -> str:
        """Display form of a raw public key."""
        ...


LedgerFactory = Callable[["NodeOptions"], LedgerNode]
"""Builds a ledger node from resolved launch options."""
