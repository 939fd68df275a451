"""
Target model loader.

Reads a YAML (or JSON) description of a configured project:

    project: demo
    definitions:
      CMAKE_BUILD_TYPE: Release
    aliases:
      Demo::core: core
    directories:
      - path: src
        targets:
          - name: app
            type: EXECUTABLE
            properties:
              SOURCES: main.cpp;cli.cpp
            links:
              - name: core
                kind: private
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml

from targetgraph.core.errors import ModelError
from targetgraph.model.models import (
    DependencyType,
    Generator,
    LinkDependency,
    Project,
    Target,
    TargetType,
)

logger = structlog.get_logger()


def load_project(file_path: str | Path) -> Project:
    """
    Load a project model description.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ModelError: If the file is not a valid model description
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {file_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ModelError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ModelError(f"Expected a mapping in {file_path}")

    project = parse_project(data)
    logger.debug(
        "loaded_project_model",
        path=str(path),
        project=project.name,
        directories=len(project.generators),
    )
    return project


def parse_project(data: dict[str, Any]) -> Project:
    """Build a Project from an already-parsed mapping."""
    name = data.get("project")
    if not name:
        raise ModelError("Model is missing the 'project' name")

    project = Project(
        name=str(name),
        definitions=_string_mapping(data.get("definitions"), "definitions"),
        aliases=_string_mapping(data.get("aliases"), "aliases"),
    )

    directories = data.get("directories") or []
    if not isinstance(directories, list):
        raise ModelError("'directories' must be a list")

    for entry in directories:
        if not isinstance(entry, dict):
            raise ModelError("Each directory entry must be a mapping")
        generator = Generator(directory=str(entry.get("path", ".")))
        for target_data in entry.get("targets") or []:
            generator.add_target(_parse_target(target_data))
        project.generators.append(generator)

    return project


def _parse_target(data: Any) -> Target:
    if not isinstance(data, dict) or "name" not in data:
        raise ModelError("Each target must be a mapping with a 'name'")

    name = str(data["name"])
    raw_type = str(data.get("type", TargetType.UNKNOWN_LIBRARY.value))
    try:
        target_type = TargetType(raw_type.upper())
    except ValueError as e:
        raise ModelError(f"Unknown target type {raw_type!r}", {"target": name}) from e

    links: list[LinkDependency] = []
    for link in data.get("links") or []:
        links.append(_parse_link(link, name))

    return Target(
        name=name,
        type=target_type,
        imported=bool(data.get("imported", False)),
        properties=_string_mapping(data.get("properties"), f"properties of {name}"),
        links=links,
    )


def _parse_link(data: Any, owner: str) -> LinkDependency:
    # Bare strings are private links, the build system's default
    if isinstance(data, str):
        return LinkDependency(name=data)
    if not isinstance(data, dict) or "name" not in data:
        raise ModelError("Each link must be a name or a mapping with a 'name'", {"target": owner})

    kind = data.get("kind", DependencyType.LINK_PRIVATE.value)
    try:
        dep_type = DependencyType.parse(str(kind))
    except ValueError as e:
        raise ModelError(str(e), {"target": owner}) from e
    return LinkDependency(name=str(data["name"]), kind=dep_type)


def _string_mapping(data: Any, what: str) -> dict[str, str]:
    """Coerce a mapping of scalars (or lists) to a mapping of strings."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ModelError(f"'{what}' must be a mapping")

    result: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, list):
            result[str(key)] = ";".join(str(v) for v in value)
        elif isinstance(value, bool):
            result[str(key)] = "ON" if value else "OFF"
        elif value is None:
            result[str(key)] = ""
        else:
            result[str(key)] = str(value)
    return result
