"""
Build target model consumed by the graph exporter.

Projects, their directories (generators) and targets, loaded from a model
description file or built in code.
"""

from targetgraph.model.demo import create_demo_project
from targetgraph.model.loader import load_project, parse_project
from targetgraph.model.models import (
    RESERVED_TARGETS,
    DependencyType,
    Generator,
    LinkDependency,
    LinkItem,
    Project,
    Target,
    TargetType,
    is_reserved_target,
)

__all__ = [
    # Models
    "TargetType",
    "DependencyType",
    "LinkDependency",
    "Target",
    "LinkItem",
    "Generator",
    "Project",
    "RESERVED_TARGETS",
    "is_reserved_target",
    # Loading
    "load_project",
    "parse_project",
    "create_demo_project",
]
