"""Ledger node supervision and shutdown handling."""

from .shutdown import (
    TERMINATION_SIGNALS,
    ShutdownLatch,
    install_signal_handlers,
    remove_signal_handlers,
)
from .supervisor import NodeSupervisor

__all__ = [
    "TERMINATION_SIGNALS",
    "NodeSupervisor",
    "ShutdownLatch",
    "install_signal_handlers",
    "remove_signal_handlers",
]
