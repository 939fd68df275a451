"""
Document writer.

The single point where an exported graph becomes a file. Failures are
reported and returned, never raised, so the host can carry on.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from targetgraph.export.document import GraphDocument
    from targetgraph.export.settings import ExportSettings

logger = structlog.get_logger()


@dataclass
class WriteResult:
    """Outcome of writing an exported graph."""

    path: Path
    success: bool
    error: str | None = None


def render_document(document: GraphDocument, settings: ExportSettings) -> str:
    """Serialize a document as JSON using the configured indentation."""
    return json.dumps(document.to_dict(), indent=settings.indent, ensure_ascii=False)


def write_text(text: str, destination: str | Path) -> WriteResult:
    """
    Write already-rendered output to a file.

    If the file cannot be opened or written, the error is logged and
    reported in the result.
    """
    path = Path(destination)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
            if not text.endswith("\n"):
                f.write("\n")
    except OSError as e:
        logger.error("failed_to_write_document", path=str(path), error=str(e))
        return WriteResult(
            path=path,
            success=False,
            error=f"Problem writing dependencies to file: {path}",
        )

    logger.info("document_written", path=str(path), bytes=len(text))
    return WriteResult(path=path, success=True)


def write_document(
    document: GraphDocument,
    destination: str | Path,
    settings: ExportSettings,
) -> WriteResult:
    """Serialize a document to a JSON file."""
    return write_text(render_document(document, settings), destination)
