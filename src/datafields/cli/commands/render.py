"""
Datafields render command.

SUMMARY: Render a template with datafields from an event and step data

Placeholders for fields that are not available are left in place, so a
template can be written for more fields than a given event provides. Use
--strict to fail instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from datafields.cli import (
    OutputFormatter,
    add_config_flag,
    add_delimiter_args,
    add_json_flag,
    add_source_args,
    build_store,
    get_config_manager,
)
from datafields.core.exceptions import DatafieldsError, DocumentError
from datafields.core.templating import find_placeholders
from datafields.core.transforms import get_transform

SUMMARY = "Render a template with datafields from an event and step data"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "template",
        nargs="?",
        help="Template file ('-' for stdin)",
    )
    parser.add_argument(
        "--template-text",
        dest="template_text",
        type=str,
        help="Template given inline instead of as a file",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when placeholders remain unresolved",
    )
    add_source_args(parser)
    add_delimiter_args(parser)
    add_config_flag(parser)
    add_json_flag(parser)


def _read_template(args: argparse.Namespace) -> str:
    if args.template_text is not None:
        return args.template_text
    if not args.template:
        raise DocumentError("No template given: pass a file, '-' or --template-text")
    path = Path(args.template)
    if args.template != "-" and not path.is_file():
        raise DocumentError(f"Template not found: {path}", context={"path": str(path)})
    try:
        if args.template == "-":
            return sys.stdin.read()
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(
            f"Template could not be read: {args.template}", context={"path": str(args.template)}
        ) from exc


def main(args: argparse.Namespace) -> int:
    """Render a template - delegates to DatafieldStore."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        config = get_config_manager(args)
        template = _read_template(args)
        store = build_store(args, config)

        transform_name = args.transform or config.get("templating.transform")
        transform = get_transform(transform_name) if transform_name else None

        rendered = store.render_datafields(template, transform=transform)
    except DatafieldsError as e:
        formatter.error(e, error_code="render_error")
        return 1

    datafields = store.get_datafields()
    unresolved = sorted(
        {
            key
            for key in find_placeholders(template, store.open_delimiter, store.close_delimiter)
            if key not in datafields
        }
    )

    if formatter.json_mode:
        formatter.json_output({"rendered": rendered, "unresolved": unresolved})
    else:
        sys.stdout.write(rendered)
        if rendered and not rendered.endswith("\n"):
            sys.stdout.write("\n")

    if args.strict and unresolved:
        if not formatter.json_mode:
            print(f"Unresolved placeholders: {', '.join(unresolved)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
