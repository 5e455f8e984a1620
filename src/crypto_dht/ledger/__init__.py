"""Ledger node contract and factory loading."""

from .loader import load_ledger_factory
from .protocol import LedgerFactory, LedgerNode, LedgerStats, Wallet

__all__ = ["LedgerFactory", "LedgerNode", "LedgerStats", "Wallet", "load_ledger_factory"]
