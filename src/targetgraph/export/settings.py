"""
Export settings.

Defaults first, then optionally overridden from a YAML options file read
through a fallback chain (primary path, then fallback path).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import structlog
import yaml

from targetgraph.core.errors import ConfigurationError
from targetgraph.model.models import TargetType

logger = structlog.get_logger()

DEFAULT_SETTINGS_FILENAME = "TargetGraphOptions.yaml"

_FALSE_WORDS = frozenset({"", "0", "OFF", "NO", "FALSE", "N", "IGNORE", "NOTFOUND"})
_TRUE_WORDS = frozenset({"1", "ON", "YES", "TRUE", "Y"})


@dataclass
class TargetTypeToggles:
    """Which target kinds get a node in the exported graph."""

    executables: bool = True
    static_libs: bool = True
    shared_libs: bool = True
    module_libs: bool = True
    interface_libs: bool = True
    object_libs: bool = True
    unknown_libs: bool = True
    custom_targets: bool = False
    # Built-in targets like edit_cache; not configurable
    global_targets: bool = False

    def is_enabled(self, target_type: TargetType) -> bool:
        return {
            TargetType.EXECUTABLE: self.executables,
            TargetType.STATIC_LIBRARY: self.static_libs,
            TargetType.SHARED_LIBRARY: self.shared_libs,
            TargetType.MODULE_LIBRARY: self.module_libs,
            TargetType.INTERFACE_LIBRARY: self.interface_libs,
            TargetType.OBJECT_LIBRARY: self.object_libs,
            TargetType.UNKNOWN_LIBRARY: self.unknown_libs,
            TargetType.UTILITY: self.custom_targets,
            TargetType.GLOBAL_TARGET: self.global_targets,
        }[target_type]


@dataclass
class ExportSettings:
    """Settings controlling filtering and document formatting."""

    indent_length: int = 2
    indent_use_spaces: bool = True
    ignore_patterns: list[re.Pattern[str]] = field(default_factory=list)
    target_types: TargetTypeToggles = field(default_factory=TargetTypeToggles)
    show_external_targets: bool = False
    show_indirect_links: bool = False

    # File the overrides were read from, if any
    loaded_from: Path | None = None

    @property
    def indent(self) -> str | None:
        """Indentation unit for the serializer, None for compact output."""
        if self.indent_length <= 0:
            return None
        return (" " if self.indent_use_spaces else "\t") * self.indent_length

    def add_ignore_pattern(self, pattern: str) -> None:
        try:
            self.ignore_patterns.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(
                f"Invalid ignore pattern {pattern!r}: {e}", {"pattern": pattern}
            ) from e


def coerce_bool(value: Any) -> bool:
    """
    Coerce a settings value to a boolean.

    Accepts YAML booleans, numbers and the build system's truth words
    (ON/OFF, YES/NO, TRUE/FALSE, Y/N, IGNORE, NOTFOUND, *-NOTFOUND).
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        word = value.strip().upper()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS or word.endswith("-NOTFOUND"):
            return False
        try:
            return float(word) != 0
        except ValueError:
            pass
    raise ConfigurationError(f"Expected a boolean, got {value!r}")


def coerce_int(value: Any) -> int:
    """Coerce a settings value to a non-negative integer."""
    if isinstance(value, bool):
        raise ConfigurationError(f"Expected an integer, got {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError as e:
        raise ConfigurationError(f"Expected an integer, got {value!r}") from e
    if number < 0:
        raise ConfigurationError(f"Expected a non-negative integer, got {number}")
    return number


def _coerce_patterns(value: Any) -> list[str]:
    if isinstance(value, str):
        return [p for p in value.split(";") if p]
    if isinstance(value, list):
        return [str(p) for p in value if str(p)]
    raise ConfigurationError(f"Expected a list of patterns, got {value!r}")


def _toggle(attr: str) -> Callable[[ExportSettings, Any], None]:
    def apply(settings: ExportSettings, value: Any) -> None:
        setattr(settings.target_types, attr, coerce_bool(value))

    return apply


def _set_ignore_patterns(settings: ExportSettings, value: Any) -> None:
    settings.ignore_patterns = []
    for pattern in _coerce_patterns(value):
        settings.add_ignore_pattern(pattern)


# Recognized keys, applied in this order
SETTINGS_KEYS: dict[str, Callable[[ExportSettings, Any], None]] = {
    "DEPENDENCIES_INDENT_LENGTH": lambda s, v: setattr(s, "indent_length", coerce_int(v)),
    "DEPENDENCIES_INDENT_USE_SPACES": lambda s, v: setattr(
        s, "indent_use_spaces", coerce_bool(v)
    ),
    "DEPENDENCIES_IGNORE_TARGETS": _set_ignore_patterns,
    "DEPENDENCIES_EXTERNAL_LIBS": lambda s, v: setattr(
        s, "show_external_targets", coerce_bool(v)
    ),
    "DEPENDENCIES_INDIRECT_LINKS": lambda s, v: setattr(s, "show_indirect_links", coerce_bool(v)),
    "DEPENDENCIES_EXECUTABLES": _toggle("executables"),
    "DEPENDENCIES_STATIC_LIBS": _toggle("static_libs"),
    "DEPENDENCIES_SHARED_LIBS": _toggle("shared_libs"),
    "DEPENDENCIES_MODULE_LIBS": _toggle("module_libs"),
    "DEPENDENCIES_INTERFACE_LIBS": _toggle("interface_libs"),
    "DEPENDENCIES_OBJECT_LIBS": _toggle("object_libs"),
    "DEPENDENCIES_UNKNOWN_LIBS": _toggle("unknown_libs"),
    "DEPENDENCIES_CUSTOM_TARGETS": _toggle("custom_targets"),
}


def find_settings_file(
    primary: str | Path | None,
    fallback: str | Path | None = None,
) -> Path | None:
    """
    Find the options file to use.

    Search order:
    1. Primary path
    2. Fallback path

    Returns:
        Path to the options file or None if neither exists
    """
    for candidate in (primary, fallback):
        if candidate and Path(candidate).is_file():
            return Path(candidate)
    return None


def load_export_settings(
    settings: ExportSettings,
    primary: str | Path | None,
    fallback: str | Path | None = None,
) -> ExportSettings:
    """
    Override settings in place from the first options file that exists.

    A missing file is not an error. A file that cannot be read or parsed,
    or a value that cannot be coerced, is logged as an error; values applied
    before the failure are kept and the rest of that file is skipped.

    Returns:
        The same settings instance, for chaining
    """
    path = find_settings_file(primary, fallback)
    if path is None:
        logger.debug("no_export_settings_file", primary=str(primary), fallback=str(fallback))
        return settings

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("failed_to_load_export_settings", path=str(path), error=str(e))
        return settings

    if not isinstance(data, dict):
        logger.error(
            "failed_to_load_export_settings",
            path=str(path),
            error="expected a mapping of option names to values",
        )
        return settings

    for key, apply in SETTINGS_KEYS.items():
        if key not in data:
            continue
        try:
            apply(settings, data[key])
        except ConfigurationError as e:
            logger.error(
                "failed_to_load_export_settings",
                path=str(path),
                key=key,
                error=e.message,
            )
            return settings

    settings.loaded_from = path
    logger.info("loaded_export_settings", path=str(path))
    return settings
