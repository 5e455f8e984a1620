"""
Top-level run modes.

Single-node mode supervises one ledger node. The bridge API server runs
beside it unless the front end is disabled. Cluster mode spawns a local
cluster and hosts it with no front end.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Final

from crypto_dht.api import ApiServer
from crypto_dht.bridge import Bridge
from crypto_dht.cluster import ClusterBootstrapper
from crypto_dht.context import AppContext
from crypto_dht.exceptions import NodeFailure, StartupError
from crypto_dht.node import (
    NodeSupervisor,
    ShutdownLatch,
    install_signal_handlers,
    remove_signal_handlers,
)

logger = logging.getLogger(__name__)

EXIT_OK: Final = 0
"""Normal completion, including shutdown by signal."""

EXIT_STARTUP_FAILURE: Final = 1
"""The single node, or its bridge API server, failed to start."""

EXIT_INVALID_OPTIONS: Final = 2
"""Launch options failed validation."""

EXIT_NODE_FAILURE: Final = 3
"""The single node failed while running."""


async def _release_on_completion(supervisor: NodeSupervisor, latch: ShutdownLatch) -> int:
    """Wait for the node, then release everything else waiting on the latch."""
    try:
        await supervisor.wait()
    except NodeFailure:
        return EXIT_NODE_FAILURE
    finally:
        latch.trigger(f"{supervisor.name} finished")
    return EXIT_OK


async def _host_single(context: AppContext, supervisor: NodeSupervisor) -> int:
    """Host a started node, with the bridge API beside it unless the front end is off."""
    if context.options.no_gui:
        try:
            await supervisor.wait()
        except NodeFailure:
            return EXIT_NODE_FAILURE
        return EXIT_OK

    server = ApiServer(config=context.api_config, bridge=Bridge(supervisor.node))
    try:
        await server.start()
    except OSError as e:
        logger.critical(
            "Bridge API failed to start on %s:%d: %s",
            context.api_config.host,
            context.api_config.port,
            e,
        )
        context.latch.trigger("bridge API failure")
        await _release_on_completion(supervisor, context.latch)
        return EXIT_STARTUP_FAILURE

    async with asyncio.TaskGroup() as tg:
        tg.create_task(server.serve_until(context.latch))
        release = tg.create_task(_release_on_completion(supervisor, context.latch))

    return release.result()


async def run_single(context: AppContext, *, install_handlers: bool = True) -> int:
    """
    Run one ledger node until it finishes or shutdown is requested.

    Args:
        context: Application context with resolved single-node options.
        install_handlers: Whether to route SIGINT/SIGTERM to the latch.
            Disable for testing or non-main threads.

    Returns:
        Process exit code.
    """
    supervisor = NodeSupervisor(
        options=context.options,
        factory=context.factory,
        latch=context.latch,
    )

    try:
        await supervisor.start()
    except StartupError:
        # Already logged at CRITICAL by the supervisor.
        return EXIT_STARTUP_FAILURE

    installed = install_handlers and install_signal_handlers(context.latch)
    try:
        return await _host_single(context, supervisor)
    finally:
        if installed:
            remove_signal_handlers()


async def run_cluster(context: AppContext, *, install_handlers: bool = True) -> int:
    """
    Spawn a local cluster and host it until every node finishes or shutdown is requested.

    Member failures, at startup or while running, are logged and do not
    change the exit code.

    Returns:
        Process exit code.
    """
    bootstrapper = ClusterBootstrapper(context=context)
    await bootstrapper.start_all()

    installed = install_handlers and install_signal_handlers(context.latch)
    try:
        await bootstrapper.wait_all()
    finally:
        if installed:
            remove_signal_handlers()

    if bootstrapper.crashed:
        logger.warning("%d cluster nodes failed while running", len(bootstrapper.crashed))
    return EXIT_OK


async def run(context: AppContext, *, install_handlers: bool = True) -> int:
    """Run the mode selected by the context's options."""
    if context.options.is_cluster:
        return await run_cluster(context, install_handlers=install_handlers)
    return await run_single(context, install_handlers=install_handlers)
