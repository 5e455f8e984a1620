"""Tests for snapshot aggregation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from crypto_dht.snapshot import BaseInfo, SnapshotAggregator, WalletClient, latest_hash_rate
from tests.crypto_dht.helpers import MockLedger, MockWallet


class TestLatestHashRate:
    """Tests for hash-rate selection."""

    @pytest.mark.parametrize(
        ("samples", "expected"),
        [
            ([10, 12, 15], 15),
            ([7], 7),
            ([], 0),
            ([15, 12, 10], 10),
        ],
    )
    def test_reports_last_sample(self, samples: list[int], expected: int) -> None:
        """The latest sample is reported as is, 0 when there is none."""
        assert latest_hash_rate(samples) == expected


class TestSnapshot:
    """Tests for building snapshots from a live node."""

    def test_wallet_view(self, ledger: MockLedger) -> None:
        """Each wallet is shown with its sanitized address and available funds."""
        info = SnapshotAggregator(ledger).snapshot()

        assert info.wallets == (WalletClient(name="main", address="0xabc", amount=5),)

    def test_wallet_funds_are_looked_up_by_raw_key(self) -> None:
        """Funds come from the raw public key, not the sanitized address."""
        ledger = MockLedger(
            wallets=[MockWallet("main", "k1"), MockWallet("savings", "k2")],
            funds={"k1": 3, "k2": 40, "0xk2": 999},
        )

        info = SnapshotAggregator(ledger).snapshot()

        assert [(w.name, w.address, w.amount) for w in info.wallets] == [
            ("main", "0xk1", 3),
            ("savings", "0xk2", 40),
        ]

    def test_reads_every_field(self, ledger: MockLedger) -> None:
        """Every piece of node state lands in its snapshot field."""
        ledger.hashes = [10, 12, 15]
        ledger.miner_running = True
        ledger.waiting = 4
        ledger.processing = 2
        ledger.peers = 8
        ledger.is_synced = True
        ledger.height = 1200
        ledger.current_difficulty = 21
        ledger.upcoming_difficulty = 22
        ledger.since_last_block = 35
        ledger.keys = 640
        ledger.history = [{"amount": 3, "address": "dest"}]
        ledger.waiting_tx = [{"amount": 1, "address": "other"}]

        info = SnapshotAggregator(ledger).snapshot()

        assert info.miner_info.hashrate == 15
        assert info.miner_info.running is True
        assert info.miner_info.waiting_transactions == 4
        assert info.miner_info.processing_transactions == 2
        assert info.nodes_nb == 8
        assert info.synced is True
        assert info.blocks_height == 1200
        assert info.difficulty == 21
        assert info.next_difficulty == 22
        assert info.time_since_last_block == 35
        assert info.stored_keys == 640
        assert info.history == ({"amount": 3, "address": "dest"},)
        assert info.own_waiting_tx == ({"amount": 1, "address": "other"},)

    def test_no_samples_reports_zero_hash_rate(self, ledger: MockLedger) -> None:
        """A miner with no samples yet reports 0."""
        assert SnapshotAggregator(ledger).snapshot().miner_info.hashrate == 0

    def test_every_call_rereads_node_state(self, ledger: MockLedger) -> None:
        """Snapshots are never cached."""
        aggregator = SnapshotAggregator(ledger)

        first = aggregator.snapshot()
        ledger.height = 5
        ledger.funds["abc"] = 9
        second = aggregator.snapshot()

        assert first.blocks_height == 0
        assert second.blocks_height == 5
        assert second.wallets[0].amount == 9

    def test_snapshot_is_immutable(self, ledger: MockLedger) -> None:
        """A snapshot cannot be mutated after construction."""
        info = SnapshotAggregator(ledger).snapshot()

        with pytest.raises(ValidationError):
            info.blocks_height = 10  # type: ignore[misc]

    def test_snapshot_does_not_share_node_lists(self, ledger: MockLedger) -> None:
        """Later changes to the node's history do not leak into an earlier snapshot."""
        ledger.history = ["tx1"]
        info = SnapshotAggregator(ledger).snapshot()

        ledger.history.append("tx2")

        assert info.history == ("tx1",)


class TestSerialization:
    """Tests for the JSON form front ends consume."""

    def test_uses_camel_case_keys(self, ledger: MockLedger) -> None:
        """Keys match the names front ends expect."""
        data = SnapshotAggregator(ledger).snapshot().to_json()

        assert set(data) == {
            "minerInfo",
            "wallets",
            "nodesNb",
            "synced",
            "blocksHeight",
            "difficulty",
            "nextDifficulty",
            "timeSinceLastBlock",
            "storedKeys",
            "history",
            "ownWaitingTx",
        }
        assert set(data["minerInfo"]) == {
            "hashrate",
            "running",
            "waitingTransactions",
            "processingTransactions",
        }
        assert data["wallets"] == [{"name": "main", "address": "0xabc", "amount": 5}]

    def test_round_trips_through_json(self, ledger: MockLedger) -> None:
        """The camelCase form validates back into an equal snapshot."""
        info = SnapshotAggregator(ledger).snapshot()

        assert BaseInfo.model_validate_json(info.model_dump_json(by_alias=True)) == info
