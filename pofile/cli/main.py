"""Entry point for the command-line interface."""

from __future__ import annotations

import argparse
import logging

from pofile.log import configure_logging, logger
from pofile.settings import AppSettings, load_app_settings

from .commands import COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Construct argument parser for CLI commands."""
    parser = argparse.ArgumentParser(prog="pofile", description="PO catalog tool")
    parser.add_argument(
        "--settings",
        help="path to JSON/TOML settings",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    for name, cmd in COMMANDS.items():
        p = sub.add_parser(name, help=cmd.help)
        cmd.add_arguments(p)
        p.set_defaults(func=cmd.func)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = AppSettings()
    if args.settings:
        try:
            settings = load_app_settings(args.settings)
        except (OSError, ValueError) as exc:
            configure_logging()
            logger.error("Cannot load settings from %s: %s", args.settings, exc)
            return 1
    configure_logging(logging.DEBUG if args.verbose else settings.log_level)
    args.app_settings = settings
    try:
        args.func(args)
    except (OSError, UnicodeDecodeError, ValueError, TypeError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
