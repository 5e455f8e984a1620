"""
Launch options and their resolution.

Raw options come from the command line and, optionally, a YAML file.
They are validated into one immutable record and then resolved.

Some modes exclude each other:

- Cluster mode spawns several local nodes and never shows a front end.
- Send mode submits one transaction and exits through the ledger node.
- Stats mode prints live statistics instead of showing a front end.

Conflicting flags are not an error. Resolution applies a fixed precedence
and silently drops whatever loses.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator, model_validator

from crypto_dht.config import DEFAULT_FOLDER, DEFAULT_LISTEN, DEFAULT_VERBOSE
from crypto_dht.types import StrictBaseModel

MAX_PORT = 65535
"""Highest valid TCP port."""


def split_host_port(address: str) -> tuple[str, int]:
    """
    Split a 'host:port' address into its host and integer port.

    The split happens on the last colon so bracketed IPv6 hosts survive.

    Raises:
        ValueError: If the address has no port or the port is not in range.
    """
    host, sep, port_str = address.rpartition(":")
    if not sep or not port_str:
        raise ValueError(f"Address {address!r} is not of the form host:port")

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Address {address!r} has a non-numeric port") from None

    if not 0 <= port <= MAX_PORT:
        raise ValueError(f"Address {address!r} has port outside [0, {MAX_PORT}]")

    return host, port


def join_host_port(host: str, port: int) -> str:
    """Build a 'host:port' address."""
    return f"{host}:{port}"


class NodeOptions(StrictBaseModel):
    """
    Launch configuration for one ledger node.

    Field names match the long command-line flags.
    The record is frozen: resolution and cluster derivation return new copies.
    """

    listen: str = DEFAULT_LISTEN
    """Listening address and port."""

    connect: str | None = None
    """
    Bootstrap address to join an existing network.

    None means this node is a bootstrap root.
    """

    folder: str = DEFAULT_FOLDER
    """Storage folder handed to the ledger node."""

    send: str = ""
    """Send instruction of the form 'amount:destAddress'. Empty when not sending."""

    verbose: int = Field(default=DEFAULT_VERBOSE, ge=0, le=5)
    """Verbosity level, 0 for CRITICAL and 5 for DEBUG."""

    stats: bool = False
    """Stats mode."""

    wallets: bool = False
    """Show wallets and amounts."""

    no_gui: bool = False
    """Run without the front end."""

    mine: bool = False
    """Enable mining."""

    network: int = Field(default=0, ge=0)
    """Number of nodes to spawn in cluster mode. 0 selects single-node mode."""

    @field_validator("connect", mode="before")
    @classmethod
    def empty_connect_is_none(cls, v: Any) -> Any:
        """Treat an empty bootstrap address as absent."""
        if v == "":
            return None
        return v

    @field_validator("listen")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        """The listen address must split into a host and a valid port."""
        split_host_port(v)
        return v

    @model_validator(mode="after")
    def cluster_ports_in_range(self) -> NodeOptions:
        """Every member of a local cluster must get a port within range."""
        if self.network > 0:
            _, port = split_host_port(self.listen)
            last = port + self.network - 1
            if last > MAX_PORT:
                raise ValueError(
                    f"Cluster of {self.network} nodes from port {port} needs port {last}, "
                    f"which exceeds {MAX_PORT}"
                )
        return self

    @property
    def is_cluster(self) -> bool:
        """Whether these options select cluster mode."""
        return self.network > 0

    @property
    def is_bootstrap_root(self) -> bool:
        """Whether the node starts a new network instead of joining one."""
        return self.connect is None

    def resolve(self) -> NodeOptions:
        """
        Apply mode precedence and return the normalized options.

        Precedence, highest first:

        1. Cluster mode clears send, stats and wallets, and disables the front end.
        2. Stats or send mode disables the front end and the wallet display.
        3. Send mode clears stats.

        Resolving already-resolved options returns equal options.
        """
        if self.is_cluster:
            return self.model_copy(
                update={"send": "", "stats": False, "wallets": False, "no_gui": True}
            )

        update: dict[str, Any] = {}
        if self.stats or self.send:
            update["no_gui"] = True
            update["wallets"] = False

        if self.send:
            update["stats"] = False

        return self.model_copy(update=update)

    def with_overrides(self, overrides: dict[str, Any]) -> NodeOptions:
        """
        Return a validated copy with the given fields replaced.

        Unlike model_copy, the result goes through validation again.
        """
        return type(self).model_validate(self.model_dump() | overrides)

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> NodeOptions:
        """
        Load options from a YAML file.

        Keys are the field names. Missing keys take their defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})


def resolve_options(**raw: Any) -> NodeOptions:
    """
    Validate raw option values and resolve mode precedence.

    Raises:
        pydantic.ValidationError: If a value is malformed.
    """
    return NodeOptions.model_validate(raw).resolve()
