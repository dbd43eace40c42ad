"""
Datafields fields command.

SUMMARY: Show the datafields built from an event and step data
"""

from __future__ import annotations

import argparse
import sys

from datafields.cli import (
    OutputFormatter,
    add_config_flag,
    add_json_flag,
    add_source_args,
    build_store,
    get_config_manager,
)
from datafields.core.exceptions import DatafieldsError

SUMMARY = "Show the datafields built from an event and step data"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_source_args(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        store = build_store(args, get_config_manager(args))
    except DatafieldsError as e:
        formatter.error(e, error_code="fields_error")
        return 1

    datafields = store.get_datafields()
    if formatter.json_mode:
        formatter.json_output(datafields)
        return 0

    if not datafields:
        formatter.text("No datafields.")
        return 0
    for key in sorted(datafields):
        formatter.text_kv(key, datafields[key], prefix="")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
