"""
Crypto-Dht node CLI entry point.

Run an experimental blockchain node over a DHT, or a local cluster of them.

Usage::

    python -m crypto_dht --ledger mypkg.blockchain:Blockchain
    python -m crypto_dht -c 10.0.0.1:3000 -l 0.0.0.0:3001 -m
    python -m crypto_dht -S 10:1xA2b3C4d5
    python -m crypto_dht -n 5 -l 127.0.0.1:3000 -f /tmp/cluster

Options:
    -c, --connect   Connect to node ip:port. If not set, startup a bootstrap node.
    -l, --listen    Listening address and port (default: 0.0.0.0:3000)
    -f, --folder    Config folder (default: $HOME/.crypto-dht)
    -s              Stat mode
    -m              Mine
    -w              Show wallets and amount
    -g              Deactivate GUI
    -S, --send      Send coins from main.key, 'amount:destAddress'
    -n, --network   Spawn X new nodes network (default: 0)
    -v, --verbose   Verbose level, 0 for CRITICAL and 5 for DEBUG (default: 3)
    --config        YAML file with options; command-line flags take precedence
    --ledger        Ledger node factory import path (default: $CRYPTO_DHT_LEDGER)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

import yaml
from pydantic import ValidationError

from crypto_dht import __version__
from crypto_dht.api import ApiServerConfig
from crypto_dht.app import EXIT_INVALID_OPTIONS, EXIT_OK, run
from crypto_dht.config import (
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_FOLDER,
    DEFAULT_LISTEN,
    DEFAULT_VERBOSE,
    LEDGER_FACTORY,
)
from crypto_dht.context import AppContext
from crypto_dht.exceptions import LedgerLoadError
from crypto_dht.ledger import load_ledger_factory
from crypto_dht.logs import setup_logging
from crypto_dht.options import NodeOptions

logger = logging.getLogger(__name__)

OPTION_FIELDS = (
    "connect",
    "listen",
    "folder",
    "stats",
    "mine",
    "wallets",
    "no_gui",
    "send",
    "network",
    "verbose",
)
"""Parsed arguments that map onto NodeOptions fields."""


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Option flags default to SUPPRESS so only flags actually given override
    values loaded from a config file.
    """
    parser = argparse.ArgumentParser(
        prog="crypto-dht",
        description="Experimental Blockchain over DHT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-c",
        "--connect",
        help="Connect to node ip:port. If not set, startup a bootstrap node.",
    )
    parser.add_argument(
        "-l",
        "--listen",
        help=f"Listening address and port (default: {DEFAULT_LISTEN})",
    )
    parser.add_argument(
        "-f",
        "--folder",
        help=f"Config folder (default: {DEFAULT_FOLDER})",
    )
    parser.add_argument("-s", dest="stats", action="store_true", help="Stat mode")
    parser.add_argument("-m", dest="mine", action="store_true", help="Mine")
    parser.add_argument("-w", dest="wallets", action="store_true", help="Show wallets and amount")
    parser.add_argument("-g", dest="no_gui", action="store_true", help="Deactivate GUI")
    parser.add_argument(
        "-S",
        "--send",
        help="Send coins from main.key. Must be of the form 'amount:destAddress'",
    )
    parser.add_argument(
        "-n",
        "--network",
        type=int,
        metavar="NODES",
        help="Spawn X new nodes network. If -c is not specified, a new network is created.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        type=int,
        metavar="LEVEL",
        help=f"Verbose level, 0 for CRITICAL and 5 for DEBUG (default: {DEFAULT_VERBOSE})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML file with options. Command-line flags take precedence.",
    )
    parser.add_argument(
        "--ledger",
        default=LEDGER_FACTORY,
        help="Ledger node factory, 'package.module:attribute' (default: $CRYPTO_DHT_LEDGER)",
    )
    parser.add_argument(
        "--api-host",
        default=DEFAULT_API_HOST,
        help=f"Bridge API host (default: {DEFAULT_API_HOST})",
    )
    parser.add_argument(
        "--api-port",
        type=int,
        default=DEFAULT_API_PORT,
        help=f"Bridge API port (default: {DEFAULT_API_PORT})",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored logging output",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version",
    )
    return parser


def load_options(args: argparse.Namespace) -> NodeOptions:
    """
    Merge the config file and command-line flags, then resolve mode precedence.

    Raises:
        pydantic.ValidationError: If a value is malformed.
        OSError: If the config file cannot be read.
        yaml.YAMLError: If the config file is not valid YAML.
    """
    overrides: dict[str, Any] = {
        name: getattr(args, name) for name in OPTION_FIELDS if hasattr(args, name)
    }

    if args.config is not None:
        base = NodeOptions.from_yaml_file(args.config)
        return base.with_overrides(overrides).resolve()

    return NodeOptions.model_validate(overrides).resolve()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        options = load_options(args)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        setup_logging(DEFAULT_VERBOSE, args.no_color)
        logger.critical("Invalid options: %s", e)
        sys.exit(EXIT_INVALID_OPTIONS)

    setup_logging(options.verbose, args.no_color)

    try:
        factory = load_ledger_factory(args.ledger)
    except LedgerLoadError as e:
        logger.critical("%s", e)
        sys.exit(EXIT_INVALID_OPTIONS)

    context = AppContext(
        options=options,
        factory=factory,
        api_config=ApiServerConfig(host=args.api_host, port=args.api_port),
    )

    try:
        code = asyncio.run(run(context))
    except KeyboardInterrupt:
        # Interrupted before the signal handlers were installed.
        logger.info("Shutting down...")
        code = EXIT_OK

    sys.exit(code)


if __name__ == "__main__":
    main()
