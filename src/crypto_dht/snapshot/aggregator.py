"""Assemble a snapshot of a live ledger node."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from crypto_dht import metrics
from crypto_dht.ledger import LedgerNode

from .models import BaseInfo, MinerInfo, WalletClient


def latest_hash_rate(samples: Sequence[int]) -> int:
    """
    Pick the hash rate to report from the miner's samples.

    The latest sample is reported as is, with no averaging. An empty sequence reports 0.
    """
    if not samples:
        return 0
    return int(samples[-1])


@dataclass(frozen=True, slots=True)
class SnapshotAggregator:
    """
    Reads a ledger node's state into a BaseInfo.

    Holds nothing but the node reference.
    Every call re-reads all node state.
    """

    node: LedgerNode
    """Node to read from."""

    def wallet_views(self) -> tuple[WalletClient, ...]:
        """Project each wallet to its name, sanitized address and available funds."""
        return tuple(
            WalletClient(
                name=wallet.name,
                address=self.node.sanitized_address(wallet.public_key),
                amount=self.node.available_funds(wallet.public_key),
            )
            for wallet in self.node.wallets()
        )

    def miner_info(self) -> MinerInfo:
        """Read the miner status."""
        return MinerInfo(
            hashrate=latest_hash_rate(self.node.stats().hashes_per_sec),
            running=self.node.running(),
            waiting_transactions=self.node.waiting_transaction_count(),
            processing_transactions=self.node.processing_transaction_count(),
        )

    def snapshot(self) -> BaseInfo:
        """Build a fresh snapshot of the node."""
        node = self.node
        info = BaseInfo(
            miner_info=self.miner_info(),
            wallets=self.wallet_views(),
            nodes_nb=node.connected_nodes_count(),
            synced=node.synced(),
            blocks_height=node.blocks_height(),
            difficulty=node.difficulty(),
            next_difficulty=node.next_difficulty(),
            time_since_last_block=node.time_since_last_block(),
            stored_keys=node.stored_keys(),
            history=tuple(node.own_history()),
            own_waiting_tx=tuple(node.own_waiting_tx()),
        )

        metrics.blocks_height.set(info.blocks_height)
        metrics.connected_nodes.set(info.nodes_nb)
        metrics.hash_rate.set(info.miner_info.hashrate)
        metrics.stored_keys.set(info.stored_keys)

        return info
