"""
API server connecting a front end to the bridge.

Provides HTTP endpoints for:
- POST /bridge/{name} - Dispatch a front-end request (body is the JSON payload)
- GET /health - Health check endpoint
- GET /metrics - Prometheus metrics endpoint
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from aiohttp import web

from crypto_dht.config import DEFAULT_API_HOST, DEFAULT_API_PORT
from crypto_dht.metrics import generate_metrics

if TYPE_CHECKING:
    from crypto_dht.bridge import Bridge
    from crypto_dht.node import ShutdownLatch

logger = logging.getLogger(__name__)

SERVICE_NAME: Final = "crypto-dht-bridge"
"""Fixed service identifier returned by the health endpoint."""


async def _handle_health(_request: web.Request) -> web.Response:
    """Handle health check endpoint."""
    return web.json_response({"status": "healthy", "service": SERVICE_NAME})


async def _handle_metrics(_request: web.Request) -> web.Response:
    """Handle Prometheus metrics endpoint."""
    return web.Response(
        body=generate_metrics(),
        content_type="text/plain; version=0.0.4",
        charset="utf-8",
    )


@dataclass(frozen=True, slots=True)
class ApiServerConfig:
    """Configuration for the API server."""

    host: str = DEFAULT_API_HOST
    """Host address to bind to."""

    port: int = DEFAULT_API_PORT
    """Port to listen on."""

    enabled: bool = True
    """Whether the API server is enabled."""


@dataclass(slots=True)
class ApiServer:
    """
    HTTP transport for the front-end bridge.

    Every bridge answer is returned with status 200, faults included:
    front ends read the error field rather than the status code.

    Uses aiohttp to handle HTTP protocol details efficiently.
    """

    config: ApiServerConfig
    """Server configuration."""

    bridge: Bridge | None = None
    """Bridge requests are dispatched to. None until a node is running."""

    _runner: web.AppRunner | None = field(default=None, init=False)
    """The aiohttp application runner."""

    _site: web.TCPSite | None = field(default=None, init=False)
    """The TCP site for the server."""

    @property
    def is_running(self) -> bool:
        """Whether the server is accepting connections."""
        return self._runner is not None

    def build_app(self) -> web.Application:
        """Build the aiohttp application with every route registered."""
        app = web.Application()
        app.add_routes(
            [
                web.get("/health", _handle_health),
                web.get("/metrics", _handle_metrics),
                web.post("/bridge/{name}", self._handle_bridge),
            ]
        )
        return app

    async def start(self) -> None:
        """
        Start the API server in the background.

        Raises:
            OSError: If the address cannot be bound.
        """
        if not self.config.enabled:
            logger.info("API server is disabled")
            return

        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.config.host, self.config.port)
        try:
            await self._site.start()
        except OSError:
            await self.stop()
            raise

        logger.info("Bridge API listening on %s:%d", self.config.host, self.config.port)

    async def serve_until(self, latch: ShutdownLatch) -> None:
        """Keep serving until shutdown is requested, then stop."""
        try:
            await latch.wait()
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Gracefully stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._site = None
            logger.info("Bridge API stopped")

    async def _handle_bridge(self, request: web.Request) -> web.Response:
        """
        Dispatch a front-end request to the bridge.

        Response format:
        {
            "name": "<request name>",
            "payload": <snapshot object, string, or null>,
            "error": "<reason>" or null
        }
        """
        if self.bridge is None:
            raise web.HTTPServiceUnavailable(reason="Node not running")

        name = request.match_info["name"]
        body = await request.read()

        response = await self.bridge.dispatch(name, body or None)
        return web.json_response(response.to_json())
