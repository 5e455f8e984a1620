"""
Local cluster spawning.

Starts every member of a derived topology in index order, then hosts them
until they finish or shutdown is requested.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from crypto_dht.context import AppContext
from crypto_dht.exceptions import NodeFailure, StartupError
from crypto_dht.node import NodeSupervisor

from .topology import ClusterTopology, derive_topology

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ClusterBootstrapper:
    """
    Spawns a local cluster of ledger nodes.

    A member that fails to start is logged and skipped.
    The remaining members still start.
    """

    context: AppContext
    """Shared context. Its options are the cluster's base options."""

    supervisors: list[NodeSupervisor] = field(default_factory=list)
    """Supervisors of the members that started, in index order."""

    failed: list[int] = field(default_factory=list)
    """Indices of members that failed to start."""

    crashed: list[str] = field(default_factory=list)
    """Names of members that failed while running."""

    def topology(self) -> ClusterTopology:
        """Derive the topology from the context's options."""
        return derive_topology(self.context.options, self.context.options.network)

    async def start_all(self) -> list[NodeSupervisor]:
        """
        Start every member sequentially in index order.

        A member only needs the bootstrap address to be known before it
        starts, not reachable, so no member waits for the previous one to
        accept connections.

        Returns:
            Supervisors of the members that started.
        """
        topology = self.topology()
        logger.info(
            "Spawning %d nodes bootstrapping off %s", len(topology), topology.bootstrap_addr
        )

        for member in topology:
            supervisor = NodeSupervisor(
                options=member.options,
                factory=self.context.factory,
                latch=self.context.latch,
                name=f"node-{member.index}",
            )
            try:
                await supervisor.start()
            except StartupError:
                # Already logged at CRITICAL by the supervisor.
                self.failed.append(member.index)
                continue

            self.supervisors.append(supervisor)

        if self.failed:
            logger.warning("%d of %d nodes failed to start", len(self.failed), len(topology))

        return self.supervisors

    async def wait_all(self) -> None:
        """Suspend until every started member has finished or been stopped."""
        if not self.supervisors:
            return

        async with asyncio.TaskGroup() as tg:
            for supervisor in self.supervisors:
                tg.create_task(self._host(supervisor), name=supervisor.name)

        logger.info("All cluster nodes finished")

    async def _host(self, supervisor: NodeSupervisor) -> None:
        """Wait on one member. A member failure never cancels its siblings."""
        try:
            await supervisor.wait()
        except NodeFailure:
            # Already logged at CRITICAL by the supervisor.
            self.crashed.append(supervisor.name)

    async def run(self) -> None:
        """Start the cluster and host it until it finishes."""
        await self.start_all()
        await self.wait_all()
