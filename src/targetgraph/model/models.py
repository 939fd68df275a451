"""
Build target model.

Read-only view of a configured project: directories (generators), their
targets, each target's properties and declared link dependencies.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

# Synthetic targets generated by the build system itself. Their spelling
# varies per platform ('all' vs 'ALL_BUILD'), so they never reach the graph.
RESERVED_TARGETS = frozenset(
    {
        "all",
        "ALL_BUILD",
        "help",
        "install",
        "INSTALL",
        "preinstall",
        "clean",
        "edit_cache",
        "rebuild_cache",
        "ZERO_CHECK",
    }
)


def is_reserved_target(name: str) -> bool:
    """Check whether a target name is reserved by the build system."""
    return name in RESERVED_TARGETS


class TargetType(Enum):
    """Classification of build targets."""

    EXECUTABLE = "EXECUTABLE"
    STATIC_LIBRARY = "STATIC_LIBRARY"
    SHARED_LIBRARY = "SHARED_LIBRARY"
    MODULE_LIBRARY = "MODULE_LIBRARY"
    OBJECT_LIBRARY = "OBJECT_LIBRARY"
    INTERFACE_LIBRARY = "INTERFACE_LIBRARY"
    UNKNOWN_LIBRARY = "UNKNOWN_LIBRARY"
    UTILITY = "UTILITY"
    GLOBAL_TARGET = "GLOBAL_TARGET"


class DependencyType(Enum):
    """Classification of link relationships."""

    LINK_PRIVATE = "private-link"
    LINK_PUBLIC = "public-link"
    LINK_INTERFACE = "interface-link"
    OBJECT = "object-link"
    UTILITY = "utility-order-only"

    @classmethod
    def parse(cls, value: str) -> DependencyType:
        """Parse a symbolic name or its short form (``private``, ``object``...)."""
        normalized = value.strip().lower()
        for member in cls:
            if normalized in (member.value, member.value.split("-")[0]):
                return member
        raise ValueError(f"Unknown dependency type: {value!r}")


@dataclass(frozen=True)
class LinkDependency:
    """A link dependency as declared on the depending target."""

    name: str
    kind: DependencyType = DependencyType.LINK_PRIVATE


@dataclass
class Target:
    """A build target defined in the project."""

    name: str
    type: TargetType
    imported: bool = False
    properties: dict[str, str] = field(default_factory=dict)
    links: list[LinkDependency] = field(default_factory=list)
    directory: str = "."

    def get_property(self, key: str) -> str | None:
        """Get a property value, or None when unset."""
        return self.properties.get(key)


@dataclass(frozen=True)
class LinkItem:
    """
    One item of the link graph.

    Either a target defined (or imported) by the project, or a bare link
    name the project could not resolve to a target, such as ``-lm`` or a
    system library path.
    """

    name: str
    target: Target | None = field(default=None, compare=False, hash=False)

    @property
    def type(self) -> TargetType:
        if self.target is None:
            return TargetType.UNKNOWN_LIBRARY
        return self.target.type

    @property
    def is_external(self) -> bool:
        return self.target is None

    @property
    def is_imported(self) -> bool:
        return self.target is not None and self.target.imported


@dataclass
class Generator:
    """Targets owned by one configured directory."""

    directory: str
    targets: list[Target] = field(default_factory=list)

    def add_target(self, target: Target) -> None:
        target.directory = self.directory
        self.targets.append(target)


@dataclass
class Project:
    """Complete configured project."""

    name: str
    generators: list[Generator] = field(default_factory=list)
    definitions: dict[str, str] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)  # alias -> real name

    def iter_targets(self) -> Iterator[Target]:
        """Iterate every target of every generator."""
        for generator in self.generators:
            yield from generator.targets

    def find_target(self, name: str) -> Target | None:
        """Find a target by name or alias."""
        real_name = self.aliases.get(name, name)
        for target in self.iter_targets():
            if target.name == real_name:
                return target
        return None

    def resolve(self, name: str) -> LinkItem:
        """Resolve a link name to a LinkItem, external when unknown."""
        target = self.find_target(name)
        if target is None:
            return LinkItem(name=name)
        return LinkItem(name=target.name, target=target)

    def aliases_of(self, name: str) -> list[str]:
        """All aliases pointing at a target, sorted."""
        return sorted(alias for alias, real in self.aliases.items() if real == name)

    def get_definition(self, key: str, default: str = "") -> str:
        return self.definitions.get(key, default)
