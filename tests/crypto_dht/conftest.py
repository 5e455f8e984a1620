"""
Shared pytest fixtures for crypto_dht tests.

Import these fixtures automatically via pytest discovery.
"""

from __future__ import annotations

import pytest

from crypto_dht.node import ShutdownLatch
from crypto_dht.options import NodeOptions
from tests.crypto_dht.helpers import LedgerRecorder, MockLedger, MockWallet


@pytest.fixture
def options() -> NodeOptions:
    """Resolved single-node options without front end."""
    return NodeOptions(listen="127.0.0.1:3000", folder="/tmp/x", no_gui=True).resolve()


@pytest.fixture
def latch() -> ShutdownLatch:
    """Fresh shutdown latch."""
    return ShutdownLatch()


@pytest.fixture
def ledger() -> MockLedger:
    """Mock ledger node with one funded wallet."""
    return MockLedger(
        wallets=[MockWallet(name="main", public_key="abc")],
        funds={"abc": 5},
    )


@pytest.fixture
def recorder() -> LedgerRecorder:
    """Ledger factory that records the nodes it builds."""
    return LedgerRecorder()
