"""
Datafields configuration management (YAML only).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema

from datafields.core.config.merge import deep_merge
from datafields.core.exceptions import ConfigError
from datafields.core.io import read_yaml
from datafields.data import get_data_path
from datafields.data import read_yaml as read_bundled_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATAFIELDS_"
PROJECT_CONFIG_FILENAMES = (".datafields.yml", ".datafields.yaml")
SCHEMA_FILENAME = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate datafields configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: DATAFIELDS_<section>__<key>
    2. Explicit config file passed by the caller (``--config``)
    3. Project config: <root>/.datafields.yml (or .yaml)
    4. Bundled defaults: datafields.data/config/defaults.yaml
    """

    def __init__(self, root: Optional[Path] = None, config_file: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()
        self.config_file = Path(config_file) if config_file is not None else None
        self.defaults_path = get_data_path("config", "defaults.yaml")
        self._config: Optional[Dict[str, Any]] = None

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except FileNotFoundError as exc:
            raise ConfigError(f"Config file not found: {path}", context={"path": str(path)}) from exc
        except Exception as exc:
            raise ConfigError(f"Invalid YAML in config file: {path}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file must contain a mapping: {path}",
                context={"path": str(path)},
            )
        return data

    def project_config_path(self) -> Optional[Path]:
        for name in PROJECT_CONFIG_FILENAMES:
            candidate = self.root / name
            if candidate.exists():
                return candidate
        return None

    # ========== Environment overrides ==========

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                # Delimiters such as "{" or "{{" are plain strings.
                return s
        return s

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": f"{ENV_PREFIX}{raw}"},
            )
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = cur[part] = {}
            elif not isinstance(nxt, dict):
                raise ConfigError(
                    f"Cannot override '{'.'.join(path)}': '{part}' is not a section",
                    context={"path": path},
                )
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_bundled_yaml("schemas", SCHEMA_FILENAME)
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {location}: {exc.message}",
                context={"path": location},
            ) from exc

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge every configuration source (cached per instance)."""
        if self._config is not None:
            return self._config

        cfg = deep_merge({}, self.load_yaml(self.defaults_path))

        project_path = self.project_config_path()
        if project_path is not None:
            logger.debug("Loading project config %s", project_path)
            cfg = deep_merge(cfg, self.load_yaml(project_path))

        if self.config_file is not None:
            logger.debug("Loading config file %s", self.config_file)
            cfg = deep_merge(cfg, self.load_yaml(self.config_file))

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)

        self._config = cfg
        return cfg

    def get_all(self) -> Dict[str, Any]:
        """Get full merged configuration."""
        return self.load_config()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value by dot-notation key.

        Example:
            >>> manager.get('templating.open_delimiter')
            '{'
            >>> manager.get('nonexistent.key', 'fallback')
            'fallback'
        """
        current: Any = self.load_config()
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def store_options(self) -> Dict[str, str]:
        """Delimiter keyword arguments for a DatafieldStore."""
        return {
            "open_delimiter": self.get("templating.open_delimiter"),
            "close_delimiter": self.get("templating.close_delimiter"),
        }


__all__ = ["ConfigManager", "ENV_PREFIX", "PROJECT_CONFIG_FILENAMES"]
