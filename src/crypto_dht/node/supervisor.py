"""
Lifecycle owner for one ledger node.

A supervisor builds its node from resolved options, starts it, waits for it,
and stops it exactly once when the shared shutdown latch fires.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from crypto_dht.exceptions import NodeFailure, ShutdownError, StartupError
from crypto_dht.ledger import LedgerFactory, LedgerNode
from crypto_dht.logs import NOTICE
from crypto_dht.metrics import node_failures, node_start_failures, nodes_running
from crypto_dht.options import NodeOptions

from .shutdown import ShutdownLatch

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NodeSupervisor:
    """
    Owns exactly one ledger node instance.

    The node handle is created by start() and never shared with another supervisor.
    """

    options: NodeOptions
    """Resolved options the node is built from."""

    factory: LedgerFactory
    """Builds the ledger node from options."""

    latch: ShutdownLatch = field(default_factory=ShutdownLatch)
    """Shutdown latch, shared by every supervisor in the process."""

    name: str = field(default="node")
    """Label used in log lines."""

    _node: LedgerNode | None = field(default=None, init=False, repr=False)
    """Running node, set by a successful start()."""

    _stopped: bool = field(default=False, init=False, repr=False)
    """Whether stop() has already been invoked through the shutdown path."""

    @property
    def node(self) -> LedgerNode:
        """
        The running node.

        Raises:
            RuntimeError: If start() has not succeeded.
        """
        if self._node is None:
            raise RuntimeError(f"{self.name} has not been started")
        return self._node

    @property
    def is_started(self) -> bool:
        """Whether start() succeeded."""
        return self._node is not None

    @property
    def is_stopped(self) -> bool:
        """Whether the node has been stopped through the shutdown path."""
        return self._stopped

    async def start(self) -> LedgerNode:
        """
        Build the node and start it.

        Raises:
            StartupError: If the node cannot be built, cannot bind its listen
                address, or cannot initialize its storage folder. Logged at
                CRITICAL before propagating.
        """
        try:
            node = self.factory(self.options)
            await node.start()
        except Exception as e:
            node_start_failures.inc()
            logger.critical("%s failed to start on %s: %s", self.name, self.options.listen, e)
            raise StartupError(self.options.listen, str(e)) from e

        self._node = node
        nodes_running.inc()
        logger.log(
            NOTICE,
            "%s listening on %s (bootstrap=%s, folder=%s)",
            self.name,
            self.options.listen,
            self.options.connect or "self",
            self.options.folder,
        )
        return node

    def stop(self) -> None:
        """
        Stop the node.

        Not idempotent. Call through shutdown() so it runs at most once.

        Raises:
            ShutdownError: If the node's stop operation fails.
        """
        try:
            self.node.stop()
        except Exception as e:
            raise ShutdownError(f"{self.name} failed to stop: {e}") from e
        finally:
            nodes_running.dec()
        logger.log(NOTICE, "%s stopped", self.name)

    async def wait(self) -> None:
        """
        Suspend until the node finishes or shutdown is requested.

        When shutdown wins, the node is stopped exactly once before returning.
        Repeated triggers of the latch never stop it again.

        Raises:
            NodeFailure: If the node's own wait raised. Logged at CRITICAL
                before propagating.
        """
        completion = asyncio.ensure_future(self.node.wait())
        requested = asyncio.ensure_future(self.latch.wait())
        try:
            done, _ = await asyncio.wait(
                {completion, requested},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (completion, requested):
                if not task.done():
                    task.cancel()

        if completion in done and not completion.cancelled():
            error = completion.exception()
            if error is not None:
                node_failures.inc()
                logger.critical("%s failed while running: %s", self.name, error)
                raise NodeFailure(self.name, str(error)) from error

        if requested in done:
            self.shutdown()
        else:
            logger.info("%s finished", self.name)

    def shutdown(self) -> None:
        """Run stop() unless it already ran. Stop failures are logged, never raised."""
        if self._stopped:
            return
        self._stopped = True

        try:
            self.stop()
        except ShutdownError as e:
            logger.error("%s", e)
