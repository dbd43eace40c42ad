"""Layered configuration: bundled defaults, project file, explicit file, env."""
from __future__ import annotations

from .manager import ENV_PREFIX, PROJECT_CONFIG_FILENAMES, ConfigManager
from .merge import deep_merge

__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_FILENAMES", "deep_merge"]
