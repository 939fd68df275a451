"""
Graph exporters: observers that build an output and write it once.

DependencyDocumentExporter builds the structured JSON document; the text
exporters in targetgraph.export.serializers share the same lifecycle.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING

from targetgraph.export.document import (
    EdgeRecord,
    GraphDocument,
    MetadataValue,
    NodeRecord,
    shape_metadata,
)
from targetgraph.export.filter import TargetFilter
from targetgraph.export.observer import GraphObserver
from targetgraph.export.settings import ExportSettings
from targetgraph.export.traversal import GraphTraversal
from targetgraph.export.writer import (
    WriteResult,
    render_document,
    write_document,
    write_text,
)
from targetgraph.model.models import DependencyType

if TYPE_CHECKING:
    from targetgraph.model.models import LinkItem, Project

INDIRECT_DEPENDENCY_TYPE = "indirect-link"


class BaseExporter(GraphObserver):
    """
    Lifecycle shared by all exporters.

    Construct, call write() once to run the traversal, then close() (or
    leave the ``with`` block) to write the output file exactly once.
    """

    def __init__(
        self,
        file_name: str | Path | None,
        project: Project,
        settings: ExportSettings | None = None,
    ):
        self.file_name = Path(file_name) if file_name is not None else None
        self.project = project
        self.settings = settings or ExportSettings()
        self.filter = TargetFilter(self.settings)
        self._traversed = False
        self._result: WriteResult | None = None

    def write(self) -> None:
        """Populate the output with a single traversal pass."""
        if self._traversed:
            raise RuntimeError("Graph already written; create a new exporter to re-export")
        GraphTraversal(self.project).run(self)
        self._traversed = True

    def close(self) -> WriteResult:
        """Write the output file. Later calls return the first result."""
        if self.file_name is None:
            raise ValueError("Exporter has no output file; use render() instead")
        if self._result is None:
            self._result = self._finalize(self.file_name)
        return self._result

    @property
    def result(self) -> WriteResult | None:
        return self._result

    def __enter__(self) -> BaseExporter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.file_name is not None:
            self.close()

    def item_label(self, item: LinkItem) -> str:
        """Item name followed by any aliases pointing at it."""
        aliases = self.project.aliases_of(item.name)
        if not aliases:
            return item.name
        return f"{item.name} ({', '.join(aliases)})"

    @abstractmethod
    def render(self) -> str:
        """Render the collected graph."""

    def _finalize(self, path: Path) -> WriteResult:
        return write_text(self.render(), path)


class DependencyDocumentExporter(BaseExporter):
    """Builds a GraphDocument and writes it as JSON."""

    def __init__(
        self,
        file_name: str | Path | None,
        project: Project,
        settings: ExportSettings | None = None,
    ):
        super().__init__(file_name, project, settings)
        self.document = GraphDocument(
            label=project.name,
            metadata=self._graph_metadata(),
        )

    def _graph_metadata(self) -> dict[str, MetadataValue]:
        metadata: dict[str, MetadataValue] = {"project_name": self.project.name}
        for key, value in shape_metadata(self.project.definitions).items():
            metadata.setdefault(key, value)
        return metadata

    def on_graph_start(self, name: str) -> None:
        self.document.label = name

    def on_node(self, item: LinkItem) -> None:
        if self.filter.is_excluded(item):
            return

        metadata: dict[str, MetadataValue] = {"target_type": item.type.value}
        if item.target is not None:
            for key, value in shape_metadata(item.target.properties).items():
                metadata.setdefault(key, value)

        if item.is_external:
            node_type = "external"
        elif item.is_imported:
            node_type = "imported"
        else:
            node_type = "target"

        self.document.set_node(
            NodeRecord(
                name=item.name,
                label=self.item_label(item),
                type=node_type,
                metadata=metadata,
            )
        )

    def on_direct_edge(
        self,
        depender: LinkItem,
        dependee: LinkItem,
        kind: DependencyType,
    ) -> None:
        if not self.filter.is_link_visible(depender, dependee):
            return

        relation = "depends" if kind == DependencyType.UTILITY else "links"
        self.document.add_edge(
            EdgeRecord(
                source=depender.name,
                target=dependee.name,
                relation=relation,
                dependency_type=kind.value,
            )
        )

    def on_indirect_edge(self, depender: LinkItem, dependee: LinkItem) -> None:
        if not self.settings.show_indirect_links:
            return
        if not self.filter.is_link_visible(depender, dependee):
            return

        self.document.add_edge(
            EdgeRecord(
                source=depender.name,
                target=dependee.name,
                relation="links-indirectly",
                dependency_type=INDIRECT_DEPENDENCY_TYPE,
            )
        )

    def render(self) -> str:
        return render_document(self.document, self.settings)

    def _finalize(self, path: Path) -> WriteResult:
        return write_document(self.document, path, self.settings)
