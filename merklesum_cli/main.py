"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merklesum_cli root LEAF... | --sequence N
    python -m merklesum_cli prove INDEX LEAF... | --sequence N
    python -m merklesum_cli config --show

Environment Variables:
    MERKLESUM_PARALLEL              Enable parallel tree construction (default: false)
    MERKLESUM_MAX_WORKERS           Thread pool size for parallel construction
    MERKLESUM_PARALLEL_THRESHOLD    Minimum leaf count for parallel construction
    MERKLESUM_LOG_LEVEL             Log level (default: INFO)
    MERKLESUM_LOG_FILE              Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merklesum.config.runtime import RuntimeConfig
from merklesum_cli.commands import prove, root


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


def load_config(path: Path | None) -> RuntimeConfig:
    """Load runtime config from a YAML file (if given) with env overrides on top."""
    if path is None:
        return RuntimeConfig.from_env()
    return RuntimeConfig.from_yaml(path).with_env_overrides()


def _add_leaf_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "leaves",
        nargs="*",
        help="Leaves as VALUE:0xDATA (DATA is 32 bytes of hex)",
    )
    parser.add_argument(
        "--sequence", "-n",
        type=int,
        default=None,
        help="Generate N leaves with values[i] = i and data[i] = uint256(i)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=False,
        help="Hash leaves and levels on a thread pool",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merklesum",
        description="Build sum Merkle trees, roots and audit proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the root hash and sum of a set of leaves",
        description="Build a sum Merkle tree and print its root.",
    )
    _add_leaf_arguments(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print and check the audit proof for one leaf",
        description="Build a sum Merkle tree, print the proof for a leaf and verify it.",
    )
    prove_parser.add_argument(
        "index",
        type=int,
        help="0-based index of the leaf to prove",
    )
    _add_leaf_arguments(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show runtime configuration",
        description="Display the effective configuration.",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merklesum config --show")
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

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if getattr(args, "parallel", False):
        config.build.parallel = True

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.log_file)

    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
