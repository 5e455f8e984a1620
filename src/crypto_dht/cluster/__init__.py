"""Local cluster topology and spawning."""

from .bootstrapper import ClusterBootstrapper
from .topology import ClusterNode, ClusterTopology, derive_node_options, derive_topology

__all__ = [
    "ClusterBootstrapper",
    "ClusterNode",
    "ClusterTopology",
    "derive_node_options",
    "derive_topology",
]
