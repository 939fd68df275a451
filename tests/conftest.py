"""Root test configuration."""

import logging

import pytest
import structlog

from targetgraph.model import (
    DependencyType,
    Generator,
    LinkDependency,
    Project,
    Target,
    TargetType,
)


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def scenario_project() -> Project:
    """app -> libA (private), libA -> libB (interface), plus ALL_BUILD."""
    root = Generator(directory=".")
    root.add_target(
        Target(
            name="app",
            type=TargetType.EXECUTABLE,
            links=[LinkDependency("libA", DependencyType.LINK_PRIVATE)],
        )
    )
    root.add_target(
        Target(
            name="libA",
            type=TargetType.STATIC_LIBRARY,
            links=[LinkDependency("libB", DependencyType.LINK_INTERFACE)],
        )
    )
    root.add_target(Target(name="libB", type=TargetType.INTERFACE_LIBRARY))
    root.add_target(
        Target(
            name="ALL_BUILD",
            type=TargetType.GLOBAL_TARGET,
            links=[LinkDependency("app", DependencyType.UTILITY)],
        )
    )
    return Project(name="scenario", generators=[root])
