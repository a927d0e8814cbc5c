"""
Slotwise

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import logging
import os
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any

from rich.markup import escape
from rich.table import Table

from slotwise.config import loader
from slotwise.console import console
from slotwise.exceptions import SlotwiseError
from slotwise.positional.parser import PositionalParser
from slotwise.utils import setup_logging


def find_slotwise_config() -> Path | None:
    candidates = [
        Path.cwd() / "slotwise.yaml",
        Path.cwd() / "slotwise.toml",
        Path(os.environ.get("SLOTWISE_CONFIG", "slotwise.yaml")),
        Path.home() / ".config" / "slotwise" / "slotwise.yaml",
        Path.home() / ".config" / "slotwise" / "slotwise.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def get_root_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="slotwise",
        description="Allocate positional tokens against a configured slot table.",
        epilog="Pass '--' before tokens that start with a dash.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML or TOML slot table (default: search for slotwise.yaml).",
    )
    parser.add_argument(
        "--complete",
        action="store_true",
        help="Print the candidates for the next token instead of parsing.",
    )
    parser.add_argument(
        "--usage",
        action="store_true",
        help="Print the help for the configured positionals and exit.",
    )
    parser.add_argument(
        "--log-mode",
        choices=["cli", "json"],
        default=None,
        help="Logging output mode (default: SLOTWISE_LOG_MODE or autodetect).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    parser.add_argument("tokens", nargs="*", help="Positional tokens to allocate.")
    return parser


def render_values(values: dict[str, Any], remainder: list[str]) -> None:
    table = Table(title="Bound positionals", show_header=True, header_style="bold")
    table.add_column("Name", style="cyan")
    table.add_column("Value")
    for name, value in values.items():
        table.add_row(escape(name), escape(repr(value)))
    console.print(table)
    if remainder:
        console.print(f"[dim]remainder:[/] {escape(' '.join(remainder))}")


def run(args: Namespace, parser: PositionalParser) -> int:
    if args.usage:
        parser.render_help()
        return 0
    if args.complete:
        for candidate in asyncio.run(parser.suggest_next(args.tokens)):
            console.print(escape(candidate), highlight=False)
        return 0
    values, remainder = parser.parse_args_split(args.tokens)
    render_values(values, remainder)
    return 0


def main(argv: list[str] | None = None) -> Any:
    args = get_root_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        console_log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    config_path = args.config or find_slotwise_config()
    if config_path is None:
        console.print("[bold red]error:[/] no slot table config found.")
        return 2

    try:
        parser = loader(config_path)
        return run(args, parser)
    except SlotwiseError as error:
        console.print(f"[bold red]error:[/] {escape(str(error))}")
        return 1
    except (FileNotFoundError, ValueError) as error:
        console.print(f"[bold red]config error:[/] {escape(str(error))}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
