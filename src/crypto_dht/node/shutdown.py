"""
One-shot shutdown latch and termination signal wiring.

A process runs exactly one latch. SIGINT and SIGTERM trigger it.
Everything that must stop on shutdown waits on the latch instead of
installing its own handlers.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)
"""Signals that request a graceful shutdown."""


@dataclass(slots=True)
class ShutdownLatch:
    """
    Shutdown request that can fire only once.

    The first trigger records its reason and releases every waiter.
    Later triggers are ignored.
    """

    _event: asyncio.Event = field(default_factory=asyncio.Event)
    """Set once shutdown has been requested."""

    _reason: str | None = field(default=None)
    """What triggered the shutdown, e.g. 'SIGINT'."""

    def trigger(self, reason: str = "requested") -> bool:
        """
        Request shutdown.

        Returns:
            True for the first call, False for every later call.
        """
        if self._event.is_set():
            logger.debug("Ignoring repeated shutdown request (%s)", reason)
            return False

        self._reason = reason
        self._event.set()
        logger.info("Shutdown requested (%s)", reason)
        return True

    @property
    def is_set(self) -> bool:
        """Whether shutdown has been requested."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Reason given by the first trigger, None before it."""
        return self._reason

    async def wait(self) -> None:
        """Suspend until shutdown is requested."""
        await self._event.wait()


def install_signal_handlers(latch: ShutdownLatch) -> bool:
    """
    Route SIGINT and SIGTERM to the latch.

    Must be called from the thread running the event loop.

    Returns:
        True if the handlers were installed. False outside the main thread
        or on platforms without loop signal support.
    """
    try:
        loop = asyncio.get_running_loop()
        for sig in TERMINATION_SIGNALS:
            loop.add_signal_handler(sig, latch.trigger, sig.name)
    except (ValueError, RuntimeError, NotImplementedError):
        # Cannot add handlers outside main thread.
        logger.debug("Signal handlers not installed")
        return False
    return True


def remove_signal_handlers() -> None:
    """Restore default handling for SIGINT and SIGTERM on the running loop."""
    loop = asyncio.get_running_loop()
    for sig in TERMINATION_SIGNALS:
        loop.remove_signal_handler(sig)
