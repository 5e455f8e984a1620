"""Test helpers for crypto_dht unit tests."""

from .mocks import (
    BrokenLedger,
    CrashingLedger,
    FinishedLedger,
    LedgerRecorder,
    MockLedger,
    MockStats,
    MockWallet,
)

__all__ = [
    "BrokenLedger",
    "CrashingLedger",
    "FinishedLedger",
    "LedgerRecorder",
    "MockLedger",
    "MockStats",
    "MockWallet",
]
