"""
Metrics module for observability.

Provides counters and gauges for tracking node lifecycle, ledger state and bridge traffic.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    blocks_height,
    bridge_errors,
    bridge_requests,
    connected_nodes,
    generate_metrics,
    hash_rate,
    node_failures,
    node_start_failures,
    nodes_running,
    stored_keys,
)

__all__ = [
    "REGISTRY",
    "blocks_height",
    "bridge_errors",
    "bridge_requests",
    "connected_nodes",
    "generate_metrics",
    "hash_rate",
    "node_failures",
    "node_start_failures",
    "nodes_running",
    "stored_keys",
]
