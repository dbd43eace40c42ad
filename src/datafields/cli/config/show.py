"""
Datafields config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, the project file, an
explicit --config file, and DATAFIELDS_* environment variables.
"""

from __future__ import annotations

import argparse
import sys

from datafields.cli import OutputFormatter, add_config_flag, add_json_flag, get_config_manager
from datafields.core.exceptions import DatafieldsError
from datafields.core.io import dump_yaml_string

SUMMARY = "Show current configuration"


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML-friendly mapping."""
    out = value
    for part in reversed([p for p in str(key).split(".") if p]):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'templating.open_delimiter')",
    )
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = get_config_manager(args)
        if args.key:
            missing = object()
            value = config.get(args.key, missing)
            if value is missing:
                formatter.error(
                    DatafieldsError(f"Key not found: {args.key}", context={"key": args.key}),
                    error_code="config_show_error",
                )
                return 1
            data = {args.key: value}
            nested = _nest_key(args.key, value)
        else:
            data = nested = config.get_all()
    except DatafieldsError as e:
        formatter.error(e, error_code="config_show_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(data)
    else:
        formatter.text(dump_yaml_string(nested).rstrip())
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
