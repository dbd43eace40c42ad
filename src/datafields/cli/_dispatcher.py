"""
Auto-discovery CLI dispatcher for datafields.

Scans ``commands/`` for top-level commands and subfolders for command domains.
Adding a new command = adding a .py file that defines SUMMARY,
``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from collections.abc import Callable
from functools import lru_cache
from pathlib import Path
from typing import Any

from datafields.core.config import ConfigManager
from datafields.core.exceptions import DatafieldsError
from datafields.core.logging import configure_stdlib_logging, suppress_lastresort


def _load_command(module_name: str, fallback_summary: str) -> dict[str, Any]:
    module = importlib.import_module(module_name)
    return {
        "module": module,
        "summary": getattr(module, "SUMMARY", fallback_summary),
        "register_args": getattr(module, "register_args", None),
        "main": getattr(module, "main", None),
    }


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Discover CLI domain subfolders (e.g. ``config``)."""
    cli_dir = Path(__file__).parent
    domains = {}
    for item in cli_dir.iterdir():
        if item.name == "commands" or item.name.startswith("_"):
            continue
        if item.is_dir() and any(
            f.suffix == ".py" and not f.name.startswith("_") for f in item.iterdir()
        ):
            domains[item.name] = item
    return domains


@lru_cache(maxsize=1)
def discover_root_commands() -> dict[str, dict[str, Any]]:
    """Discover top-level commands under cli/commands (no domain prefix)."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}
    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        commands[item.stem] = _load_command(f"datafields.cli.commands.{item.stem}", item.stem)
    return commands


@lru_cache(maxsize=8)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Discover all commands in a domain subfolder."""
    domain_dir = Path(__file__).parent / domain
    commands: dict[str, dict[str, Any]] = {}
    for item in sorted(domain_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        commands[item.stem] = _load_command(
            f"datafields.cli.{domain}.{item.stem}", f"{domain} {item.stem}"
        )
    return commands


def _register(subparsers: Any, name: str, info: dict[str, Any]) -> None:
    primary_name = name.replace("_", "-")
    aliases = [name] if primary_name != name else []
    cmd_parser = subparsers.add_parser(primary_name, aliases=aliases, help=info["summary"])
    if info["register_args"]:
        info["register_args"](cmd_parser)
    if info["main"]:
        cmd_parser.set_defaults(_func=info["main"])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered domains and commands."""
    parser = argparse.ArgumentParser(
        prog="datafields",
        description="Datafields - event data aggregation and placeholder rendering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        type=str,
        help="Write logs to this file (overrides logging.file)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides logging.level)",
    )

    subparsers = parser.add_subparsers(
        dest="domain",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_root_commands().items()):
        _register(subparsers, cmd_name, cmd_info)

    for domain_name in sorted(discover_domains()):
        domain_commands = discover_commands(domain_name)
        if not domain_commands:
            continue
        domain_parser = subparsers.add_parser(
            domain_name, help=f"{domain_name.title()} commands"
        )
        cmd_subparsers = domain_parser.add_subparsers(
            dest="command",
            title="commands",
            metavar="<command>",
        )
        for cmd_name, cmd_info in sorted(domain_commands.items()):
            _register(cmd_subparsers, cmd_name, cmd_info)

    return parser


def _get_version() -> str:
    from datafields import __version__

    return __version__


def _configure_logging(args: argparse.Namespace) -> None:
    """Route logs to a file when one is configured; otherwise keep them quiet."""
    log_file = getattr(args, "log_file", None)
    level = getattr(args, "log_level", None)
    if not log_file or not level:
        try:
            config = ConfigManager(Path.cwd(), _config_file(args))
            log_file = log_file or config.get("logging.file")
            level = level or config.get("logging.level", "WARNING")
        except DatafieldsError:
            # The command reports config errors itself.
            pass
    if log_file:
        configure_stdlib_logging(log_path=Path(log_file), level=level or "WARNING")
    else:
        suppress_lastresort()


def _config_file(args: argparse.Namespace) -> Path | None:
    raw = getattr(args, "config_file", None)
    return Path(raw) if raw else None


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the datafields CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        domain_parser = parser._subparsers._group_actions[0].choices.get(args.domain)
        if domain_parser:
            domain_parser.print_help()
        return 0

    _configure_logging(args)

    try:
        return func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
