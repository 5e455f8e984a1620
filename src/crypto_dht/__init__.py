"""Orchestration shell for the Crypto-Dht ledger node."""

__version__ = "0.1.0"
