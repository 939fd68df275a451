"""
Dependency graph export for build targets.

Traverses a project's targets, filters them, and writes the link graph as
a structured JSON document (or as DOT / Mermaid text).
"""

from targetgraph.export.document import (
    EdgeRecord,
    GraphDocument,
    NodeRecord,
    join_list_value,
    split_list_value,
)
from targetgraph.export.exporter import BaseExporter, DependencyDocumentExporter
from targetgraph.export.filter import TargetFilter
from targetgraph.export.observer import GraphObserver
from targetgraph.export.serializers import EXPORTERS, DotExporter, MermaidExporter
from targetgraph.export.settings import (
    DEFAULT_SETTINGS_FILENAME,
    ExportSettings,
    TargetTypeToggles,
    load_export_settings,
)
from targetgraph.export.traversal import GraphTraversal
from targetgraph.export.writer import WriteResult, render_document, write_document

__all__ = [
    # Settings
    "ExportSettings",
    "TargetTypeToggles",
    "DEFAULT_SETTINGS_FILENAME",
    "load_export_settings",
    # Filtering and traversal
    "TargetFilter",
    "GraphTraversal",
    "GraphObserver",
    # Document
    "GraphDocument",
    "NodeRecord",
    "EdgeRecord",
    "split_list_value",
    "join_list_value",
    # Exporters
    "BaseExporter",
    "DependencyDocumentExporter",
    "DotExporter",
    "MermaidExporter",
    "EXPORTERS",
    # Writer
    "WriteResult",
    "render_document",
    "write_document",
]
