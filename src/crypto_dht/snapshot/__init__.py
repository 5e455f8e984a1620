"""Point-in-time snapshots of ledger node state."""

from .aggregator import SnapshotAggregator, latest_hash_rate
from .models import BaseInfo, MinerInfo, WalletClient

__all__ = ["BaseInfo", "MinerInfo", "SnapshotAggregator", "WalletClient", "latest_hash_rate"]
