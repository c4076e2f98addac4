"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m beaconroot_cli catalog [--json]
    python -m beaconroot_cli index <field>
    python -m beaconroot_cli root (--record PATH | --rpc [--block TAG]) [--seed N]
    python -m beaconroot_cli proof <field> (--record PATH | --rpc) [--out PATH]
    python -m beaconroot_cli verify <proof_path> [--root HEX]
    python -m beaconroot_cli publish (--record PATH --timestamp N | --rpc) [--store PATH]
    python -m beaconroot_cli check <proof_path> [--timestamp N] [--store PATH]
    python -m beaconroot_cli demo [--blocks N] [--seed N]
    python -m beaconroot_cli config --init

Environment Variables:
    BEACONROOT_RPC_URL            Execution-layer JSON-RPC endpoint
    BEACONROOT_RPC_TIMEOUT        RPC timeout in seconds (default: 30)
    BEACONROOT_STORE_PATH         Commitment store file
    BEACONROOT_PLACEHOLDER_SEED   Seed for deterministic placeholders
    BEACONROOT_TOKEN_WIDTH        Token width in characters (default: 32)
    BEACONROOT_LOG_LEVEL          Log level (default: INFO)
    BEACONROOT_LOG_FILE           Also log to this file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.schemas.errors import BeaconRootException

from beaconroot_cli import __version__
from beaconroot_cli.commands import commitments, merkle
from beaconroot_cli.config import DEFAULT_CONFIG_NAME, get_default_config_template, load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--record", "-r",
        type=str,
        default=None,
        help="JSON file mapping field names to raw values",
    )
    group.add_argument(
        "--rpc",
        action="store_true",
        default=False,
        help="Fetch the block header from the configured RPC endpoint",
    )
    parser.add_argument(
        "--block",
        type=str,
        default=None,
        help="Block tag or number for --rpc (default: from config or latest)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for deterministic placeholders",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="beaconroot",
        description="BeaconRoot CLI - Commit block fields to a Merkle root and verify single-field proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: ./{DEFAULT_CONFIG_NAME} or ~/.config/beaconroot/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- catalog command ---
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List catalog fields and leaf indices",
    )
    catalog_parser.add_argument("--json", action="store_true", help="JSON output")
    catalog_parser.set_defaults(func=merkle.catalog_cmd)

    # --- index command ---
    index_parser = subparsers.add_parser(
        "index",
        help="Print the leaf index of a field",
    )
    index_parser.add_argument("field", type=str, help="Catalog field name")
    index_parser.add_argument("--json", action="store_true", help="JSON output")
    index_parser.set_defaults(func=merkle.index_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Derive a record and print its Merkle root",
    )
    _add_source_args(root_parser)
    root_parser.add_argument("--json", action="store_true", help="JSON output")
    root_parser.set_defaults(func=merkle.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Build a single-field proof bundle",
        description="Derive a record and write value, index, siblings and root for one field.",
    )
    proof_parser.add_argument("field", type=str, help="Catalog field to prove")
    _add_source_args(proof_parser)
    proof_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof bundle here instead of stdout",
    )
    proof_parser.add_argument("--json", action="store_true", help="JSON output")
    proof_parser.set_defaults(func=merkle.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a proof bundle against a root",
    )
    verify_parser.add_argument("proof_path", type=str, help="Proof bundle JSON file")
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root (default: the root carried by the proof)",
    )
    verify_parser.add_argument("--json", action="store_true", help="JSON output")
    verify_parser.set_defaults(func=merkle.verify_cmd)

    # --- publish command ---
    publish_parser = subparsers.add_parser(
        "publish",
        help="Commit a record's root under a timestamp",
    )
    _add_source_args(publish_parser)
    publish_parser.add_argument(
        "--timestamp", "-t",
        type=int,
        default=None,
        help="Commitment timestamp (default: block time with --rpc)",
    )
    publish_parser.add_argument("--store", type=str, default=None, help="Commitment store file")
    publish_parser.add_argument("--json", action="store_true", help="JSON output")
    publish_parser.set_defaults(func=commitments.publish_cmd)

    # --- check command ---
    check_parser = subparsers.add_parser(
        "check",
        help="Verify a proof bundle against the committed root",
    )
    check_parser.add_argument("proof_path", type=str, help="Proof bundle JSON file")
    check_parser.add_argument(
        "--timestamp", "-t",
        type=int,
        default=None,
        help="Commitment timestamp (default: the proof's timestamp)",
    )
    check_parser.add_argument("--store", type=str, default=None, help="Commitment store file")
    check_parser.add_argument("--json", action="store_true", help="JSON output")
    check_parser.set_defaults(func=commitments.check_cmd)

    # --- demo command ---
    demo_parser = subparsers.add_parser(
        "demo",
        help="Publish synthetic blocks and replay the verification scenarios",
    )
    demo_parser.add_argument("--blocks", type=int, default=5, help="Blocks to publish (default: 5)")
    demo_parser.add_argument("--seed", type=int, default=None, help="Seed for blocks and placeholders")
    demo_parser.add_argument("--start", type=int, default=None, help="First timestamp (default: now)")
    demo_parser.add_argument("--json", action="store_true", help="JSON output")
    demo_parser.set_defaults(func=commitments.demo_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (BEACONROOT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: beaconroot config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except BeaconRootException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
