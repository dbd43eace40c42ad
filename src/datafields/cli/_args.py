"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse

from datafields.core.transforms import TRANSFORMS


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config flag for an explicit config file."""
    parser.add_argument(
        "--config",
        dest="config_file",
        type=str,
        help="YAML config file layered over .datafields.yml",
    )


def add_source_args(parser: argparse.ArgumentParser) -> None:
    """Add the datafield sources: event document, step data, inline values.

    Args:
        parser: ArgumentParser to add the arguments to
    """
    parser.add_argument(
        "--event",
        type=str,
        help="Event document (YAML or JSON mapping, '-' for stdin)",
    )
    parser.add_argument(
        "--step-data",
        dest="step_data",
        type=str,
        help="Step data document (YAML or JSON mapping)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra step data value (repeatable, applied after --step-data)",
    )


def add_delimiter_args(parser: argparse.ArgumentParser) -> None:
    """Add placeholder delimiter and transform overrides."""
    parser.add_argument(
        "--open-delimiter",
        dest="open_delimiter",
        type=str,
        help="Opening placeholder delimiter (default from config, '{')",
    )
    parser.add_argument(
        "--close-delimiter",
        dest="close_delimiter",
        type=str,
        help="Closing placeholder delimiter (default from config, '}')",
    )
    parser.add_argument(
        "--transform",
        choices=sorted(TRANSFORMS),
        help="Transform applied to each value before insertion",
    )


__all__ = [
    "add_json_flag",
    "add_config_flag",
    "add_source_args",
    "add_delimiter_args",
]
