"""
Datafields CLI package.

Provides the command-line interface with auto-discovery of commands from
``commands/`` (top level) and domain subfolders (``config/``).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_config_flag,
    add_delimiter_args,
    add_json_flag,
    add_source_args,
)
from ._utils import build_store, get_config_manager, parse_assignments

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_config_flag",
    "add_source_args",
    "add_delimiter_args",
    # Utilities
    "get_config_manager",
    "build_store",
    "parse_assignments",
]
