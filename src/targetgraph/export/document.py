"""
Exported graph document.

In-memory node/edge graph built during traversal and serialized once by
the writer. Multi-valued build properties (``a;b;c``) become lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

LIST_SEPARATOR = ";"

MetadataValue = Union[str, list[str]]


def split_list_value(value: str) -> MetadataValue:
    """
    Represent a build property value in the document.

    Values containing the list separator become the ordered list of their
    elements (empty elements kept, so joining restores the value); other
    values stay plain strings.
    """
    if LIST_SEPARATOR in value:
        return value.split(LIST_SEPARATOR)
    return value


def join_list_value(value: MetadataValue) -> str:
    """Inverse of split_list_value()."""
    if isinstance(value, list):
        return LIST_SEPARATOR.join(value)
    return value


def shape_metadata(values: dict[str, str]) -> dict[str, MetadataValue]:
    """Apply split_list_value() to every entry, keys sorted."""
    return {key: split_list_value(values[key]) for key in sorted(values)}


@dataclass
class NodeRecord:
    """One node of the exported graph."""

    name: str
    label: str
    type: str = "target"
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "type": self.type,
            "label": self.label,
            "metadata": self.metadata,
        }


@dataclass
class EdgeRecord:
    """A directed edge, depender -> dependee."""

    source: str
    target: str
    relation: str
    dependency_type: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "source": self.source,
            "target": self.target,
            "relation": self.relation,
            "metadata": {"dependency_type": self.dependency_type},
        }


@dataclass
class GraphDocument:
    """Complete export model."""

    label: str
    type: str = "build-targets"
    directed: bool = True
    metadata: dict[str, MetadataValue] = field(default_factory=dict)
    nodes: dict[str, NodeRecord] = field(default_factory=dict)
    edges: list[EdgeRecord] = field(default_factory=list)

    def set_node(self, node: NodeRecord) -> None:
        """Add a node, replacing any previous record of the same name."""
        self.nodes[node.name] = node

    def add_edge(self, edge: EdgeRecord) -> None:
        """Append an edge; both endpoints must already be nodes."""
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise ValueError(f"Edge {edge.source} -> {edge.target} has a missing endpoint")
        self.edges.append(edge)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "graph": {
                "directed": self.directed,
                "type": self.type,
                "label": self.label,
                "metadata": self.metadata,
                "nodes": {name: node.to_dict() for name, node in self.nodes.items()},
                "edges": [e.to_dict() for e in self.edges],
            }
        }
