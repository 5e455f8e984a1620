"""
Application context.

Built once at startup from the resolved options and passed by reference to
whatever needs process-wide state. Frozen afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from crypto_dht.api import ApiServerConfig
from crypto_dht.ledger import LedgerFactory
from crypto_dht.node import ShutdownLatch
from crypto_dht.options import NodeOptions


@dataclass(frozen=True, slots=True)
class AppContext:
    """Everything a running process shares across components."""

    options: NodeOptions
    """Resolved launch options."""

    factory: LedgerFactory
    """Builds ledger nodes."""

    latch: ShutdownLatch = field(default_factory=ShutdownLatch)
    """The process's single shutdown latch."""

    api_config: ApiServerConfig = field(default_factory=ApiServerConfig)
    """Bridge API server settings. Only used in single-node mode with the front end enabled."""
