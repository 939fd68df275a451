"""Sample project model for demos and smoke tests."""

from __future__ import annotations

from targetgraph.model.models import (
    DependencyType,
    Generator,
    LinkDependency,
    Project,
    Target,
    TargetType,
)


def create_demo_project() -> Project:
    """
    Create a small project with the usual mix of target kinds.

    ``app`` links privately to ``libA``, which forwards ``libB`` through
    its interface. The tree also carries a reserved aggregate target, a
    dashboard utility, an imported third-party library and a bare system
    library name.
    """
    root = Generator(directory=".")
    root.add_target(
        Target(
            name="app",
            type=TargetType.EXECUTABLE,
            properties={"SOURCES": "main.cpp;cli.cpp", "OUTPUT_NAME": "demo-app"},
            links=[
                LinkDependency("libA", DependencyType.LINK_PRIVATE),
                LinkDependency("ThirdPartyLib", DependencyType.LINK_PRIVATE),
                LinkDependency("m", DependencyType.LINK_PRIVATE),
            ],
        )
    )
    root.add_target(Target(name="ALL_BUILD", type=TargetType.GLOBAL_TARGET))
    root.add_target(Target(name="NightlyMemCheck", type=TargetType.UTILITY))
    root.add_target(
        Target(name="ThirdPartyLib", type=TargetType.UNKNOWN_LIBRARY, imported=True)
    )

    libs = Generator(directory="libs")
    libs.add_target(
        Target(
            name="libA",
            type=TargetType.STATIC_LIBRARY,
            properties={"SOURCES": "a.cpp", "POSITION_INDEPENDENT_CODE": "ON"},
            links=[LinkDependency("libB", DependencyType.LINK_INTERFACE)],
        )
    )
    libs.add_target(
        Target(
            name="libB",
            type=TargetType.INTERFACE_LIBRARY,
            properties={"INTERFACE_INCLUDE_DIRECTORIES": "include;generated/include"},
        )
    )

    return Project(
        name="demo",
        generators=[root, libs],
        definitions={
            "CMAKE_BUILD_TYPE": "Release",
            "CMAKE_CXX_STANDARD": "17",
            "CONAN_DEPENDENCIES": "zlib/1.3;fmt/10.2.1",
        },
        aliases={"Demo::libA": "libA"},
    )
