"""
Process-wide configuration for the node shell.

This module contains environment-specific settings that apply across all components.
"""

import os

DEFAULT_LISTEN = "0.0.0.0:3000"
"""Listen address used when none is given."""

DEFAULT_VERBOSE = 3
"""Verbosity level used when none is given (NOTICE)."""

DEFAULT_FOLDER = os.path.join(os.environ.get("HOME", "."), ".crypto-dht")
"""Storage folder used when none is given. Lives under the user's home directory."""

LEDGER_FACTORY = os.environ.get("CRYPTO_DHT_LEDGER", "")
"""Import path of the ledger node factory ('package.module:attribute'). Empty when unset."""

DEFAULT_API_HOST = os.environ.get("CRYPTO_DHT_API_HOST", "127.0.0.1")
"""Host the bridge API server binds to."""

DEFAULT_API_PORT = int(os.environ.get("CRYPTO_DHT_API_PORT", "3999"))
"""Port the bridge API server binds to."""
