"""Resolve the ledger node factory from an import path."""

from __future__ import annotations

import importlib
import logging

from crypto_dht.exceptions import LedgerLoadError

from .protocol import LedgerFactory

logger = logging.getLogger(__name__)


def load_ledger_factory(path: str) -> LedgerFactory:
    """
    Import the ledger node factory named by path.

    Accepts 'package.module:attribute' or 'package.module.attribute'.
    The attribute is usually the ledger node class itself.

    Raises:
        LedgerLoadError: If the path is empty, malformed, or does not resolve
            to a callable.
    """
    if not path:
        raise LedgerLoadError(
            "No ledger node factory configured. Pass --ledger or set CRYPTO_DHT_LEDGER."
        )

    if ":" in path:
        module_name, attr_name = path.split(":", 1)
    else:
        module_name, _, attr_name = path.rpartition(".")

    if not module_name or not attr_name:
        raise LedgerLoadError(
            f"Invalid ledger factory path {path!r}. Use 'package.module:attribute'."
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LedgerLoadError(f"Could not import module {module_name!r}: {e}") from e

    try:
        factory = getattr(module, attr_name)
    except AttributeError as e:
        raise LedgerLoadError(f"Module {module_name!r} has no attribute {attr_name!r}") from e

    if not callable(factory):
        raise LedgerLoadError(f"Ledger factory {path!r} is not callable")

    logger.debug("Loaded ledger factory %s", path)
    return factory
