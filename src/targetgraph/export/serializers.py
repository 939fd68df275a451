"""
Text graph exporters: Graphviz DOT and Mermaid.

Alternative observers over the same traversal and filter as the JSON
document exporter. Output is rendered in memory and written on close().
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from targetgraph.export.exporter import BaseExporter, DependencyDocumentExporter
from targetgraph.model.models import DependencyType, TargetType

if TYPE_CHECKING:
    from pathlib import Path

    from targetgraph.export.settings import ExportSettings
    from targetgraph.model.models import LinkItem, Project

NODE_SHAPES = {
    TargetType.EXECUTABLE: "egg",
    TargetType.STATIC_LIBRARY: "octagon",
    TargetType.SHARED_LIBRARY: "doubleoctagon",
    TargetType.MODULE_LIBRARY: "tripleoctagon",
    TargetType.INTERFACE_LIBRARY: "pentagon",
    TargetType.OBJECT_LIBRARY: "hexagon",
    TargetType.UNKNOWN_LIBRARY: "septagon",
    TargetType.UTILITY: "box",
}
EXTERNAL_SHAPE = "septagon"

EDGE_STYLES = {
    DependencyType.LINK_PUBLIC: "solid",
    DependencyType.LINK_INTERFACE: "dashed",
    DependencyType.LINK_PRIVATE: "dotted",
}


@dataclass
class _TextNode:
    node_id: str
    label: str
    item: LinkItem


@dataclass
class _TextEdge:
    source_id: str
    target_id: str
    kind: DependencyType | None  # None for indirect links


class TextGraphExporter(BaseExporter):
    """Collects visible nodes and edges, rendered by a subclass."""

    def __init__(
        self,
        file_name: str | Path | None,
        project: Project,
        settings: ExportSettings | None = None,
    ):
        super().__init__(file_name, project, settings)
        self.graph_name = project.name
        self.nodes: dict[str, _TextNode] = {}
        self.edges: list[_TextEdge] = []

    def on_graph_start(self, name: str) -> None:
        self.graph_name = name

    def on_node(self, item: LinkItem) -> None:
        if self.filter.is_excluded(item):
            return
        existing = self.nodes.get(item.name)
        node_id = existing.node_id if existing else f"node{len(self.nodes)}"
        self.nodes[item.name] = _TextNode(node_id=node_id, label=self.item_label(item), item=item)

    def on_direct_edge(
        self,
        depender: LinkItem,
        dependee: LinkItem,
        kind: DependencyType,
    ) -> None:
        if not self.filter.is_link_visible(depender, dependee):
            return
        self.edges.append(
            _TextEdge(
                source_id=self.nodes[depender.name].node_id,
                target_id=self.nodes[dependee.name].node_id,
                kind=kind,
            )
        )

    def on_indirect_edge(self, depender: LinkItem, dependee: LinkItem) -> None:
        if not self.settings.show_indirect_links:
            return
        if not self.filter.is_link_visible(depender, dependee):
            return
        self.edges.append(
            _TextEdge(
                source_id=self.nodes[depender.name].node_id,
                target_id=self.nodes[dependee.name].node_id,
                kind=None,
            )
        )


class DotExporter(TextGraphExporter):
    """
    Graphviz DOT digraph.

    Node shapes follow the target type; link edges are solid (public),
    dashed (interface) or dotted (private); indirect links are grey.
    """

    def item_label(self, item: LinkItem) -> str:
        aliases = self.project.aliases_of(item.name)
        return "".join([item.name, *(f"\\n({alias})" for alias in aliases)])

    def render(self) -> str:
        lines: list[str] = [
            f'digraph "{escape_dot(self.graph_name)}" {{',
            '    node [fontname="sans-serif"];',
            "",
        ]

        for node in self.nodes.values():
            if node.item.is_external:
                shape = EXTERNAL_SHAPE
            else:
                shape = NODE_SHAPES.get(node.item.type, "box")
            lines.append(f'    "{node.node_id}" [label="{escape_dot(node.label)}", shape={shape}];')

        if self.edges:
            lines.append("")

        for edge in self.edges:
            attrs: list[str] = []
            if edge.kind is None:
                attrs.append('color="grey"')
                attrs.append("style=dashed")
            elif edge.kind in EDGE_STYLES:
                attrs.append(f"style={EDGE_STYLES[edge.kind]}")
            attr_str = f" [{', '.join(attrs)}]" if attrs else ""
            lines.append(f'    "{edge.source_id}" -> "{edge.target_id}"{attr_str};')

        lines.append("}")
        return "\n".join(lines)


class MermaidExporter(TextGraphExporter):
    """Mermaid flowchart; private and indirect links use dotted arrows."""

    def render(self) -> str:
        lines: list[str] = ["graph LR"]

        for node in self.nodes.values():
            lines.append(f'    {node.node_id}["{escape_mermaid(node.label)}"]')

        if self.edges:
            lines.append("")

        for edge in self.edges:
            if edge.kind is None:
                lines.append(f"    {edge.source_id} -.->|indirect| {edge.target_id}")
            elif edge.kind == DependencyType.LINK_PRIVATE:
                lines.append(f"    {edge.source_id} -.-> {edge.target_id}")
            else:
                lines.append(f"    {edge.source_id} --> {edge.target_id}")

        return "\n".join(lines)


def escape_dot(text: str) -> str:
    """Escape double quotes for a DOT string literal."""
    return re.sub(r'(?<!\\)"', r'\\"', text)


def escape_mermaid(text: str) -> str:
    """Replace characters Mermaid labels cannot carry."""
    return text.replace('"', "#quot;")


EXPORTERS: dict[str, type[BaseExporter]] = {
    "json": DependencyDocumentExporter,
    "dot": DotExporter,
    "mermaid": MermaidExporter,
}
