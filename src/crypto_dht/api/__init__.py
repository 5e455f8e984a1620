"""
API server module for the front-end bridge.

Provides HTTP endpoints for:
- /bridge/{name} - Front-end requests (getInfos, send)
- /health - Health check endpoint
- /metrics - Prometheus metrics endpoint
"""

from .server import SERVICE_NAME, ApiServer, ApiServerConfig

__all__ = ["SERVICE_NAME", "ApiServer", "ApiServerConfig"]
