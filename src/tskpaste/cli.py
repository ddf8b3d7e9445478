# src/tskpaste/cli.py

"""
Command-line interface for tskpaste.

This module:
- defines argument parsing and subcommands,
- sets up logging from flags and config,
- delegates parsing, rendering and delivery to engine modules.

KISS rule: keep commands small and predictable.
"""

import argparse
import logging
import sys

from tskpaste.engine.config import Config, ConfigError, load_config
from tskpaste.engine.deliver import CallbackUrlDeliverer, Deliverer, EchoDeliverer
from tskpaste.engine.ops import InputError, convert_text, paste, read_input
from tskpaste.engine.parse import parse_document
from tskpaste.engine.render import render_task_detail

log = logging.getLogger("tskpaste")


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _add_source_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "source",
        nargs="?",
        default="-",
        help="Shorthand file to read (default: stdin)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tskpaste",
        description="Convert task shorthand into TaskPaper and paste it into OmniFocus.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: $TSKPASTE_CONFIG or ~/.config/tskpaste/config.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_convert = sub.add_parser(
        "convert",
        help="Print TaskPaper for the shorthand input",
    )
    _add_source_argument(p_convert)
    p_convert.set_defaults(func=cmd_convert)

    p_paste = sub.add_parser(
        "paste",
        help="Convert and paste into OmniFocus via its callback URL",
    )
    _add_source_argument(p_paste)
    p_paste.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the callback URL instead of opening it",
    )
    p_paste.set_defaults(func=cmd_paste)

    p_show = sub.add_parser(
        "show",
        help="List parsed tasks in a readable form",
    )
    _add_source_argument(p_show)
    p_show.set_defaults(func=cmd_show)

    return parser


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_convert(args: argparse.Namespace, config: Config) -> int:
    try:
        text = read_input(args.source)
    except InputError as e:
        print(f"Error: {e}")
        return 1

    sys.stdout.write(convert_text(text))
    return 0


def cmd_paste(args: argparse.Namespace, config: Config) -> int:
    try:
        text = read_input(args.source)
    except InputError as e:
        print(f"Error: {e}")
        return 1

    deliverer = _make_deliverer(config, dry_run=bool(args.dry_run))
    if not paste(text, deliverer):
        print("Error: could not hand TaskPaper over to OmniFocus")
        return 1

    return 0


def cmd_show(args: argparse.Namespace, config: Config) -> int:
    try:
        text = read_input(args.source)
    except InputError as e:
        print(f"Error: {e}")
        return 1

    render_task_detail(parse_document(text))
    return 0


def _make_deliverer(config: Config, *, dry_run: bool) -> Deliverer:
    if dry_run:
        return EchoDeliverer(base_url=config.base_url, param=config.param)

    return CallbackUrlDeliverer(
        base_url=config.base_url,
        param=config.param,
        opener=config.opener,
    )


# ---------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------

def _setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("tskpaste").setLevel(level)


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    _setup_logging(logging.DEBUG if args.verbose else config.log_level_value)
    log.debug("config: %s", config)

    return func(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
