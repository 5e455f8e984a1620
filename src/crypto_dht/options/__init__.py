"""Launch options: validation and mode precedence."""

from .options import NodeOptions, join_host_port, resolve_options, split_host_port

__all__ = ["NodeOptions", "join_host_port", "resolve_options", "split_host_port"]
