"""
CLI command for dependency graph export.

Commands:
    targetgraph export <model>                  - Export as JSON to stdout
    targetgraph export <model> -o graph.json    - Export to a file
    targetgraph export <model> --format dot     - Export as Graphviz DOT
    targetgraph export --demo                   - Demo with sample data
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from targetgraph.cli.ux import error, info, success
from targetgraph.config import AppSettings
from targetgraph.core.errors import ExitCode, ModelError, OutputError, format_error_message
from targetgraph.export.exporter import BaseExporter
from targetgraph.export.serializers import EXPORTERS
from targetgraph.export.settings import (
    DEFAULT_SETTINGS_FILENAME,
    ExportSettings,
    load_export_settings,
)
from targetgraph.model import Project, create_demo_project, load_project


def export_command(
    model_file: str | None = None,
    output_format: str = "json",
    output_file: Optional[str] = None,
    settings_file: Optional[str] = None,
    fallback_settings_file: Optional[str] = None,
    show_externals: bool = False,
    show_indirect: bool = False,
    demo: bool = False,
) -> int:
    """
    Export the build target dependency graph.

    Args:
        model_file: Path to the project model description (YAML or JSON)
        output_format: Output format (json, dot, mermaid)
        output_file: Optional file path for output, stdout otherwise
        settings_file: Primary options file
        fallback_settings_file: Options file used when the primary is missing
        show_externals: Force externally-imported targets visible
        show_indirect: Force indirect links visible
        demo: If True, use the built-in demo project

    Returns:
        Exit code (0 on success)
    """
    exporter_cls = EXPORTERS.get(output_format)
    if exporter_cls is None:
        error(f"Unknown format: {output_format}")
        return ExitCode.CONFIG_ERROR

    if demo:
        project = create_demo_project()
    elif model_file is None:
        error("Model file is required (or use --demo)")
        return ExitCode.CONFIG_ERROR
    else:
        try:
            project = load_project(model_file)
        except FileNotFoundError as e:
            error(str(e))
            return ExitCode.MODEL_ERROR
        except ModelError as e:
            error(f"Error loading model: {format_error_message(e)}")
            return ExitCode.MODEL_ERROR

    settings = _load_settings(model_file, settings_file, fallback_settings_file)
    if settings.loaded_from is not None:
        info(f"Using options from {settings.loaded_from}")
    if show_externals:
        settings.show_external_targets = True
    if show_indirect:
        settings.show_indirect_links = True

    if output_file:
        try:
            _export_to_file(exporter_cls, project, settings, output_file)
        except OutputError as e:
            error(format_error_message(e))
            return e.exit_code
        success(f"Wrote {output_format} output to {output_file}")
        return ExitCode.SUCCESS
    return _export_to_stdout(exporter_cls, project, settings)


def _load_settings(
    model_file: str | None,
    settings_file: str | None,
    fallback_settings_file: str | None,
) -> ExportSettings:
    primary = settings_file or str(Path.cwd() / DEFAULT_SETTINGS_FILENAME)
    fallback = fallback_settings_file
    if fallback is None and model_file is not None:
        fallback = str(Path(model_file).parent / DEFAULT_SETTINGS_FILENAME)
    return load_export_settings(ExportSettings(), primary, fallback)


def _export_to_file(
    exporter_cls: type[BaseExporter],
    project: Project,
    settings: ExportSettings,
    output_file: str,
) -> None:
    with exporter_cls(output_file, project, settings) as exporter:
        exporter.write()

    result = exporter.close()
    if not result.success:
        raise OutputError(result.error or f"Problem writing dependencies to file: {output_file}")


def _export_to_stdout(
    exporter_cls: type[BaseExporter],
    project: Project,
    settings: ExportSettings,
) -> int:
    exporter = exporter_cls(None, project, settings)
    exporter.write()

    # Use print() not console.print(): output is machine-readable
    # and may contain brackets that rich would interpret as markup
    print(exporter.render())
    return ExitCode.SUCCESS


def register_export_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the export subcommand parser."""
    export_parser = subparsers.add_parser(
        "export",
        help="Export the build target dependency graph",
    )
    export_parser.add_argument(
        "model_file",
        nargs="?",
        help="Path to the project model description (YAML or JSON)",
    )
    export_parser.add_argument(
        "--format",
        "-f",
        dest="output_format",
        choices=sorted(EXPORTERS),
        default=None,
        help="Output format (default: json, or TARGETGRAPH_OUTPUT_FORMAT)",
    )
    export_parser.add_argument(
        "--output",
        "-o",
        dest="output_file",
        help="Write output to file instead of stdout",
    )
    export_parser.add_argument(
        "--settings",
        dest="settings_file",
        help=f"Options file (default: ./{DEFAULT_SETTINGS_FILENAME})",
    )
    export_parser.add_argument(
        "--fallback-settings",
        dest="fallback_settings_file",
        help="Options file used when --settings does not exist "
        f"(default: {DEFAULT_SETTINGS_FILENAME} beside the model file)",
    )
    export_parser.add_argument(
        "--externals",
        dest="show_externals",
        action="store_true",
        help="Include imported targets and unresolved link names",
    )
    export_parser.add_argument(
        "--indirect",
        dest="show_indirect",
        action="store_true",
        help="Include transitive (indirect) links",
    )
    export_parser.add_argument(
        "--demo",
        action="store_true",
        help="Use demo data for sample output",
    )


def handle_export_command(
    args: argparse.Namespace,
    app_settings: AppSettings | None = None,
) -> int:
    """Handle export command from CLI args, environment settings as defaults."""
    app_settings = app_settings or AppSettings()
    return export_command(
        model_file=getattr(args, "model_file", None),
        output_format=getattr(args, "output_format", None) or app_settings.output_format,
        output_file=getattr(args, "output_file", None),
        settings_file=getattr(args, "settings_file", None) or app_settings.settings_file,
        fallback_settings_file=(
            getattr(args, "fallback_settings_file", None) or app_settings.fallback_settings_file
        ),
        show_externals=getattr(args, "show_externals", False),
        show_indirect=getattr(args, "show_indirect", False),
        demo=getattr(args, "demo", False),
    )
