"""Service settings.

Layering (highest wins): ``APIKEYGATE_<SECTION>__<NAME>`` env vars, then the
YAML file (default ``config/apikeygate.yaml``), then the Settings defaults.

YAML layout::

    server:
      host: 0.0.0.0
      port: 8081
    auth:
      keys_path: /data/keys.yaml
    logging:
      level: INFO
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("config/apikeygate.yaml")
ENV_PREFIX = "APIKEYGATE_"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8081
    keys_path: Path = Path("/data/keys.yaml")
    log_level: str = "INFO"


def _log_level(value: Any) -> str:
    return str(value).upper()


# field -> (yaml section, yaml name, converter)
_FIELDS: dict[str, tuple[str, str, Callable[[Any], Any]]] = {
    "host": ("server", "host", str),
    "port": ("server", "port", int),
    "keys_path": ("auth", "keys_path", Path),
    "log_level": ("logging", "level", _log_level),
}


def env_var_name(field: str) -> str:
    section, name, _ = _FIELDS[field]
    return f"{ENV_PREFIX}{section.upper()}__{name.upper()}"


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"Config root must be a mapping: {path}")

    values: dict[str, Any] = {}
    for field, (section, name, _) in _FIELDS.items():
        block = doc.get(section) or {}
        if not isinstance(block, dict):
            raise ValueError(f"Config section '{section}' must be a mapping: {path}")
        if name in block:
            values[field] = block[name]
    return values


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Build Settings from defaults, the YAML file and the environment.

    A missing file is not an error. Values that do not convert to the field's
    type raise ValueError naming the field.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    values = _read_yaml(path) if path.exists() else {}

    env = os.environ if environ is None else environ
    for field in _FIELDS:
        var = env_var_name(field)
        if var in env:
            values[field] = env[var]

    converted: dict[str, Any] = {}
    for field, raw in values.items():
        convert = _FIELDS[field][2]
        try:
            converted[field] = convert(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {field}: {raw!r}") from exc
    return Settings(**converted)
