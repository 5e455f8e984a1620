"""
Metric registry using prometheus_client.

Provides pre-defined metrics for the node shell.
Exposes metrics in Prometheus text format via the /metrics endpoint.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)

# Create a dedicated registry for crypto-dht metrics.
#
# Using a dedicated registry avoids pollution from default Python process metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Node Lifecycle
# -----------------------------------------------------------------------------

nodes_running = Gauge(
    "crypto_dht_nodes_running",
    "Ledger nodes started and not yet stopped",
    registry=REGISTRY,
)

node_start_failures = Counter(
    "crypto_dht_node_start_failures_total",
    "Ledger nodes that failed to start",
    registry=REGISTRY,
)

node_failures = Counter(
    "crypto_dht_node_failures_total",
    "Ledger nodes that failed while running",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Ledger State (sampled on each snapshot)
# -----------------------------------------------------------------------------

blocks_height = Gauge(
    "crypto_dht_blocks_height",
    "Height of the local chain",
    registry=REGISTRY,
)

connected_nodes = Gauge(
    "crypto_dht_connected_nodes",
    "Connected peers",
    registry=REGISTRY,
)

hash_rate = Gauge(
    "crypto_dht_hash_rate",
    "Latest miner hash-rate sample",
    registry=REGISTRY,
)

stored_keys = Gauge(
    "crypto_dht_stored_keys",
    "DHT keys stored locally",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Bridge
# -----------------------------------------------------------------------------

bridge_requests = Counter(
    "crypto_dht_bridge_requests_total",
    "Front-end requests handled by the bridge",
    ["request"],
    registry=REGISTRY,
)

bridge_errors = Counter(
    "crypto_dht_bridge_errors_total",
    "Front-end requests rejected before dispatch",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
