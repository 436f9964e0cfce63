"""
Configuration for zenith-run hosts.

The resolved configuration is the defaults from settings.py with the user's
YAML file merged over them. Sections:

    server:      host, port of the HTTP service
    execution:   output_mode (quiet/normal/debug), trace_level
                 (none/errors/calls/detailed)
    components:  packages, extra importable packages whose modules register
                 components on import
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from . import settings
from .core.tracing import OutputMode, TraceLevel


logger = logging.getLogger(__name__)

OUTPUT_MODES = {mode.name.lower(): mode for mode in OutputMode}
TRACE_LEVELS = {level.name.lower(): level for level in TraceLevel}

DEFAULT_CONFIG = {
    "server": {
        "host": settings.server_host,
        "port": settings.server_port,
    },
    "execution": {
        "output_mode": settings.execution_output_mode,
        "trace_level": settings.execution_trace_level,
    },
    "components": {
        "packages": list(settings.component_packages),
    },
}

SECTION_KEYS = {
    "server": {"host", "port"},
    "execution": {"output_mode", "trace_level"},
    "components": {"packages"},
}


def config_defaults() -> dict:
    """Return default configuration values."""
    return copy.deepcopy(DEFAULT_CONFIG)


def config_schema() -> dict:
    """Return JSON Schema for configuration."""
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": {
            "server": {
                "type": "object",
                "properties": {
                    "host": {"type": "string"},
                    "port": {"type": "integer", "minimum": 1, "maximum": 65535},
                },
                "additionalProperties": False,
            },
            "execution": {
                "type": "object",
                "properties": {
                    "output_mode": {"enum": sorted(OUTPUT_MODES)},
                    "trace_level": {"enum": sorted(TRACE_LEVELS)},
                },
                "additionalProperties": False,
            },
            "components": {
                "type": "object",
                "properties": {
                    "packages": {"type": "array", "items": {"type": "string"}},
                },
                "additionalProperties": False,
            },
        },
        "additionalProperties": False,
    }


def _deep_merge(base: dict, update: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return {}
    return data


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load resolved configuration (defaults merged with config file)."""
    path = config_path or settings.config_path
    return _deep_merge(config_defaults(), _load_config_file(path))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_server(section: dict) -> Iterator[str]:
    host = section.get("host")
    if host is not None and not isinstance(host, str):
        yield "server.host must be a string"
    port = section.get("port")
    if port is not None and not (_is_int(port) and 1 <= port <= 65535):
        yield "server.port must be an integer between 1 and 65535"


def _check_execution(section: dict) -> Iterator[str]:
    for key, choices in (("output_mode", OUTPUT_MODES), ("trace_level", TRACE_LEVELS)):
        if key in section and section[key] not in choices:
            yield f"execution.{key} must be one of {sorted(choices)}"


def _check_components(section: dict) -> Iterator[str]:
    packages = section.get("packages", [])
    if not isinstance(packages, list) or not all(isinstance(p, str) for p in packages):
        yield "components.packages must be a list of module names"


_SECTION_CHECKS: dict[str, Callable[[dict], Iterator[str]]] = {
    "server": _check_server,
    "execution": _check_execution,
    "components": _check_components,
}


def validate_config_dict(data: Any) -> list[str]:
    """Validate a config dict. Returns list of errors (empty = valid)."""
    if not isinstance(data, dict):
        return ["Config must be a mapping/object"]

    errors = [f"Unknown config key: {key}" for key in data if key not in SECTION_KEYS]
    for name, allowed in SECTION_KEYS.items():
        if name not in data:
            continue
        section = data[name]
        if not isinstance(section, dict):
            errors.append(f"{name} must be an object")
            continue
        errors.extend(f"Unknown {name} key: {key}" for key in section if key not in allowed)
        errors.extend(_SECTION_CHECKS[name](section))
    return errors


def validate_config_file(config_path: Optional[Path] = None) -> list[str]:
    """Validate the config file. Returns list of errors (empty = valid)."""
    path = config_path or settings.config_path
    if not path.exists():
        return []
    return validate_config_dict(_load_config_file(path))


def output_mode(config: dict) -> OutputMode:
    """Resolve execution.output_mode, falling back to NORMAL."""
    value = str(config.get("execution", {}).get("output_mode", "normal")).lower()
    return OUTPUT_MODES.get(value, OutputMode.NORMAL)


def trace_level(config: dict) -> TraceLevel:
    """Resolve execution.trace_level, falling back to ERRORS."""
    value = str(config.get("execution", {}).get("trace_level", "errors")).lower()
    return TRACE_LEVELS.get(value, TraceLevel.ERRORS)


def component_packages(config: dict) -> list[str]:
    """Extra component packages to discover besides the standard ones."""
    return list(config.get("components", {}).get("packages", []))
