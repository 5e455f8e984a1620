"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from crypto_dht.__main__ import build_parser, load_options, main
from crypto_dht.app import (
    EXIT_INVALID_OPTIONS,
    EXIT_NODE_FAILURE,
    EXIT_OK,
    EXIT_STARTUP_FAILURE,
)


def run_main(argv: list[str]) -> int:
    """Run the CLI without touching the root logger and return the exit code."""
    with patch("crypto_dht.__main__.setup_logging"), pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestBuildParser:
    """Tests for flag parsing."""

    def test_flags_map_to_option_fields(self) -> None:
        """Short flags land on the option field names."""
        args = build_parser().parse_args(
            ["-c", "10.0.0.1:3000", "-l", "0.0.0.0:3001", "-f", "/tmp/n", "-s", "-m", "-w", "-g"]
            + ["-S", "3:dest", "-n", "4", "-v", "5"]
        )

        assert args.connect == "10.0.0.1:3000"
        assert args.listen == "0.0.0.0:3001"
        assert args.folder == "/tmp/n"
        assert args.stats and args.mine and args.wallets and args.no_gui
        assert args.send == "3:dest"
        assert args.network == 4
        assert args.verbose == 5

    def test_unset_flags_are_absent(self) -> None:
        """Flags not given do not appear, so they never override a config file."""
        args = build_parser().parse_args([])

        assert not hasattr(args, "listen")
        assert not hasattr(args, "mine")
        assert args.config is None
        assert args.no_color is False

    def test_rejects_non_integer_network(self) -> None:
        """The cluster size must be an integer."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-n", "many"])


class TestLoadOptions:
    """Tests for merging and resolving options."""

    def test_defaults(self) -> None:
        """With no flags, a single bootstrap node on the default address."""
        options = load_options(build_parser().parse_args([]))

        assert options.listen == "0.0.0.0:3000"
        assert options.connect is None
        assert options.verbose == 3
        assert not options.is_cluster

    def test_resolves_precedence(self) -> None:
        """Send wins over stats and disables the front end."""
        options = load_options(build_parser().parse_args(["-S", "3:dest", "-s", "-w"]))

        assert options.send == "3:dest"
        assert options.stats is False
        assert options.wallets is False
        assert options.no_gui is True

    def test_flags_override_config_file(self, tmp_path: Path) -> None:
        """Values from the YAML file are kept unless a flag overrides them."""
        config = tmp_path / "node.yaml"
        config.write_text("listen: 127.0.0.1:4000\nfolder: /srv/node\nmine: true\n")

        options = load_options(
            build_parser().parse_args(["--config", str(config), "-l", "127.0.0.1:5000"])
        )

        assert options.listen == "127.0.0.1:5000"
        assert options.folder == "/srv/node"
        assert options.mine is True

    def test_invalid_listen(self) -> None:
        """A malformed listen address fails validation."""
        with pytest.raises(ValidationError):
            load_options(build_parser().parse_args(["-l", "nowhere"]))


class TestMain:
    """Tests for the process entry point."""

    def test_invalid_listen_exits_with_usage_code(self) -> None:
        """Invalid options exit before any node is built."""
        code = run_main(["-l", "nowhere", "--ledger", "tests.crypto_dht.helpers:FinishedLedger"])

        assert code == EXIT_INVALID_OPTIONS

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """An unreadable config file is an options error."""
        code = run_main(
            [
                "--config",
                str(tmp_path / "absent.yaml"),
                "--ledger",
                "tests.crypto_dht.helpers:FinishedLedger",
            ]
        )

        assert code == EXIT_INVALID_OPTIONS

    def test_cluster_port_overflow_exits_with_usage_code(self) -> None:
        """A cluster that would run past port 65535 is an options error, not a crash."""
        code = run_main(
            [
                "-n",
                "3",
                "-l",
                "127.0.0.1:65534",
                "--ledger",
                "tests.crypto_dht.helpers:FinishedLedger",
            ]
        )

        assert code == EXIT_INVALID_OPTIONS

    def test_missing_ledger(self) -> None:
        """Without a ledger factory nothing can run."""
        assert run_main(["--ledger", "", "-g"]) == EXIT_INVALID_OPTIONS

    def test_unimportable_ledger(self) -> None:
        """A ledger factory that cannot be imported is reported, not raised."""
        code = run_main(["--ledger", "no_such_package.ledger:Node", "-g"])

        assert code == EXIT_INVALID_OPTIONS

    def test_runs_node_until_it_finishes(self) -> None:
        """A node that finishes ends the process normally."""
        code = run_main(
            [
                "--ledger",
                "tests.crypto_dht.helpers:FinishedLedger",
                "-g",
                "-l",
                "127.0.0.1:3000",
                "-f",
                "/tmp/crypto-dht-cli",
            ]
        )

        assert code == EXIT_OK

    def test_node_start_failure(self) -> None:
        """A node that cannot start fails the process."""
        code = run_main(
            [
                "--ledger",
                "tests.crypto_dht.helpers:BrokenLedger",
                "-g",
                "-l",
                "127.0.0.1:3000",
            ]
        )

        assert code == EXIT_STARTUP_FAILURE

    def test_node_failure_while_running(self) -> None:
        """A node that fails after starting fails the process."""
        code = run_main(
            [
                "--ledger",
                "tests.crypto_dht.helpers:CrashingLedger",
                "-g",
                "-l",
                "127.0.0.1:3000",
            ]
        )

        assert code == EXIT_NODE_FAILURE
