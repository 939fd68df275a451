"""
Graph observer interface.

The traversal drives an observer; exporters implement it. Swapping the
observer swaps the output format without touching traversal logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from targetgraph.model.models import DependencyType, LinkItem


class GraphObserver(ABC):
    """Callbacks invoked by GraphTraversal.run()."""

    @abstractmethod
    def on_graph_start(self, name: str) -> None:
        """Called once, before any node, with the project name."""

    @abstractmethod
    def on_node(self, item: LinkItem) -> None:
        """Called once per distinct link item."""

    @abstractmethod
    def on_direct_edge(
        self,
        depender: LinkItem,
        dependee: LinkItem,
        kind: DependencyType,
    ) -> None:
        """Called for each link declared on the depender."""

    @abstractmethod
    def on_indirect_edge(self, depender: LinkItem, dependee: LinkItem) -> None:
        """Called for each transitively reachable, non-direct dependency."""
