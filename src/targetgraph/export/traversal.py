"""
Deterministic traversal of a project's link graph.

Visits every target once, in a platform-independent order, and reports
nodes, direct links and transitive links to a GraphObserver.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import structlog

from targetgraph.model.models import DependencyType, LinkItem, is_reserved_target

if TYPE_CHECKING:
    from targetgraph.export.observer import GraphObserver
    from targetgraph.model.models import Project, Target

logger = structlog.get_logger()


class GraphTraversal:
    """Single read-only pass over all targets of a project."""

    def __init__(self, project: Project):
        self.project = project
        self._targets_by_name: dict[str, Target] = {}

    def sorted_targets(self) -> list[Target]:
        """
        Every non-reserved target, deduplicated by name.

        Ordered by (name, directory). Reserved names are dropped before
        sorting since their spelling differs per platform.
        """
        candidates = [
            target
            for target in self.project.iter_targets()
            if not is_reserved_target(target.name)
        ]
        candidates.sort(key=lambda t: (t.name, t.directory))

        seen: set[str] = set()
        result: list[Target] = []
        for target in candidates:
            if target.name in seen:
                continue
            seen.add(target.name)
            result.append(target)
        return result

    def run(self, observer: GraphObserver) -> None:
        """Drive the observer through the whole graph."""
        targets = self.sorted_targets()
        self._targets_by_name = {t.name: t for t in targets}
        items = [LinkItem(name=t.name, target=t) for t in targets]
        visited: set[str] = set()
        direct_count = 0
        indirect_count = 0

        observer.on_graph_start(self.project.name)

        for item in items:
            visited.add(item.name)
            observer.on_node(item)

        for item in items:
            for dependee, kind in self._direct_dependencies(item):
                # Link names without a target of their own show up here first
                if dependee.name not in visited:
                    visited.add(dependee.name)
                    observer.on_node(dependee)
                observer.on_direct_edge(item, dependee, kind)
                direct_count += 1

        for item in items:
            for dependee in self._indirect_dependencies(item):
                if dependee.name not in visited:
                    visited.add(dependee.name)
                    observer.on_node(dependee)
                observer.on_indirect_edge(item, dependee)
                indirect_count += 1

        logger.debug(
            "graph_traversal_complete",
            project=self.project.name,
            nodes=len(visited),
            direct_edges=direct_count,
            indirect_edges=indirect_count,
        )

    def _resolve(self, name: str) -> LinkItem:
        """
        Resolve a link name against the deduplicated targets.

        A name always maps to the target that got its node, even when
        several directories define it.
        """
        real_name = self.project.aliases.get(name, name)
        target = self._targets_by_name.get(real_name)
        if target is not None:
            return LinkItem(name=target.name, target=target)
        return self.project.resolve(name)

    def _direct_dependencies(self, item: LinkItem) -> list[tuple[LinkItem, DependencyType]]:
        # Reserved targets never contribute links
        if item.target is None or is_reserved_target(item.name):
            return []
        return [(self._resolve(link.name), link.kind) for link in item.target.links]

    def _indirect_dependencies(self, item: LinkItem) -> list[LinkItem]:
        """Link items reachable through two or more hops, in BFS order."""
        direct = {dependee.name for dependee, _ in self._direct_dependencies(item)}
        seen: set[str] = {item.name} | direct
        result: list[LinkItem] = []

        queue: deque[LinkItem] = deque(
            dependee
            for dependee, kind in self._direct_dependencies(item)
            if kind != DependencyType.UTILITY
        )
        expanded: set[str] = set()
        while queue:
            current = queue.popleft()
            if current.name in expanded:
                continue
            expanded.add(current.name)
            for dependee, kind in self._direct_dependencies(current):
                # Order-only dependencies do not propagate
                if kind == DependencyType.UTILITY:
                    continue
                if dependee.name not in seen:
                    seen.add(dependee.name)
                    result.append(dependee)
                queue.append(dependee)

        return result
