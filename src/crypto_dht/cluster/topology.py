"""
Bootstrap topology for a local cluster.

Every node of a local cluster runs on the same host. Each one gets its own
port and storage folder, both derived from the base options by index.

Without an external bootstrap address, node 0 is the bootstrap root::

    node 0  127.0.0.1:3000  /tmp/x   (root)
    node 1  127.0.0.1:3001  /tmp/x1  -> 127.0.0.1:3000
    node 2  127.0.0.1:3002  /tmp/x2  -> 127.0.0.1:3000

With an external bootstrap address, every node joins it, node 0 included.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from crypto_dht.options import NodeOptions, join_host_port, split_host_port
from crypto_dht.options.options import MAX_PORT


@dataclass(frozen=True, slots=True)
class ClusterNode:
    """One member of a local cluster."""

    index: int
    """Position in start order."""

    options: NodeOptions
    """Options the member is started with."""

    @property
    def listen(self) -> str:
        """Listen address of this member."""
        return self.options.listen

    @property
    def bootstrap_addr(self) -> str:
        """
        Address this member bootstraps off.

        A root member bootstraps off itself.
        """
        return self.options.connect or self.options.listen


@dataclass(frozen=True, slots=True)
class ClusterTopology:
    """Ordered members of a local cluster sharing one bootstrap address."""

    nodes: tuple[ClusterNode, ...]
    """Members in start order."""

    bootstrap_addr: str
    """Address every non-root member joins."""

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[ClusterNode]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> ClusterNode:
        return self.nodes[index]


def derive_node_options(base: NodeOptions, index: int, bootstrap_addr: str) -> NodeOptions:
    """
    Derive the options of cluster member index from the base options.

    The port is the base port plus index, and the host is kept.
    The folder is the base folder with the decimal index appended; index 0 keeps the base folder.

    Raises:
        ValueError: If the derived port is out of range.
    """
    host, port = split_host_port(base.listen)
    if port + index > MAX_PORT:
        raise ValueError(f"Port {port + index} for node {index} exceeds {MAX_PORT}")

    folder = base.folder if index == 0 else f"{base.folder}{index}"

    return base.model_copy(
        update={
            "listen": join_host_port(host, port + index),
            "folder": folder,
            "connect": bootstrap_addr,
        }
    )


def derive_topology(base: NodeOptions, count: int) -> ClusterTopology:
    """
    Derive the options of every member of a count-node local cluster.

    Args:
        base: Resolved base options.
        count: Number of nodes, at least 1.

    Raises:
        ValueError: If count is not positive or a derived port is out of range.
    """
    if count <= 0:
        raise ValueError(f"Cluster size must be positive, got {count}")

    nodes: list[ClusterNode] = []
    bootstrap_addr = base.connect
    first = 0

    # No external network to join: node 0 becomes the root, unmodified.
    if bootstrap_addr is None:
        nodes.append(ClusterNode(index=0, options=base))
        bootstrap_addr = base.listen
        first = 1

    for i in range(first, count):
        nodes.append(ClusterNode(index=i, options=derive_node_options(base, i, bootstrap_addr)))

    return ClusterTopology(nodes=tuple(nodes), bootstrap_addr=bootstrap_addr)
