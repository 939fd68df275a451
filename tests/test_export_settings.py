"""Tests for export/settings.py.

Tests for option defaults, value coercion and the options file fallback chain.
"""

from pathlib import Path

import pytest
import yaml
from targetgraph.core.errors import ConfigurationError
from targetgraph.export.settings import (
    ExportSettings,
    TargetTypeToggles,
    coerce_bool,
    coerce_int,
    find_settings_file,
    load_export_settings,
)
from targetgraph.model import TargetType


def _write(path: Path, data: dict) -> Path:
    path.write_text(yaml.dump(data))
    return path


class TestDefaults:
    """Tests for default settings values."""

    def test_default_values(self):
        settings = ExportSettings()

        assert settings.indent_length == 2
        assert settings.indent_use_spaces is True
        assert settings.ignore_patterns == []
        assert settings.show_external_targets is False
        assert settings.show_indirect_links is False
        assert settings.loaded_from is None

    def test_default_type_table(self):
        toggles = TargetTypeToggles()

        for enabled in (
            TargetType.EXECUTABLE,
            TargetType.STATIC_LIBRARY,
            TargetType.SHARED_LIBRARY,
            TargetType.MODULE_LIBRARY,
            TargetType.INTERFACE_LIBRARY,
            TargetType.OBJECT_LIBRARY,
            TargetType.UNKNOWN_LIBRARY,
        ):
            assert toggles.is_enabled(enabled) is True
        assert toggles.is_enabled(TargetType.UTILITY) is False
        assert toggles.is_enabled(TargetType.GLOBAL_TARGET) is False

    def test_indent_spaces(self):
        assert ExportSettings(indent_length=3).indent == "   "

    def test_indent_tabs(self):
        assert ExportSettings(indent_length=2, indent_use_spaces=False).indent == "\t\t"

    def test_indent_zero_is_compact(self):
        assert ExportSettings(indent_length=0).indent is None


class TestCoercion:
    """Tests for value coercion helpers."""

    @pytest.mark.parametrize("value", [True, 1, 2.5, "ON", "yes", "TRUE", "y", "1", "42"])
    def test_truthy(self, value):
        assert coerce_bool(value) is True

    @pytest.mark.parametrize(
        "value", [False, 0, "OFF", "no", "false", "N", "", "IGNORE", "NOTFOUND", "Foo-NOTFOUND", "0"]
    )
    def test_falsy(self, value):
        assert coerce_bool(value) is False

    @pytest.mark.parametrize("value", ["maybe", None, [1]])
    def test_bool_rejects(self, value):
        with pytest.raises(ConfigurationError):
            coerce_bool(value)

    def test_int_from_string(self):
        assert coerce_int(" 4 ") == 4

    def test_int_from_int(self):
        assert coerce_int(0) == 0

    @pytest.mark.parametrize("value", ["four", -1, True, None])
    def test_int_rejects(self, value):
        with pytest.raises(ConfigurationError):
            coerce_int(value)


class TestFindSettingsFile:
    """Tests for the primary/fallback lookup."""

    def test_primary_preferred(self, tmp_path):
        primary = _write(tmp_path / "primary.yaml", {})
        fallback = _write(tmp_path / "fallback.yaml", {})
        assert find_settings_file(primary, fallback) == primary

    def test_fallback_used(self, tmp_path):
        fallback = _write(tmp_path / "fallback.yaml", {})
        assert find_settings_file(tmp_path / "missing.yaml", fallback) == fallback

    def test_neither(self, tmp_path):
        assert find_settings_file(tmp_path / "a.yaml", tmp_path / "b.yaml") is None

    def test_directory_is_not_a_file(self, tmp_path):
        assert find_settings_file(tmp_path) is None


class TestLoadExportSettings:
    """Tests for load_export_settings()."""

    def test_neither_exists_keeps_defaults(self, tmp_path):
        settings = load_export_settings(
            ExportSettings(), tmp_path / "a.yaml", tmp_path / "b.yaml"
        )
        assert settings == ExportSettings()

    def test_fallback_applied(self, tmp_path):
        fallback = _write(tmp_path / "fallback.yaml", {"DEPENDENCIES_INDENT_LENGTH": 7})

        settings = load_export_settings(ExportSettings(), tmp_path / "missing.yaml", fallback)

        assert settings.indent_length == 7
        assert settings.loaded_from == fallback

    def test_primary_shadows_fallback(self, tmp_path):
        primary = _write(tmp_path / "primary.yaml", {"DEPENDENCIES_INDENT_LENGTH": 1})
        fallback = _write(tmp_path / "fallback.yaml", {"DEPENDENCIES_INDENT_LENGTH": 7})

        settings = load_export_settings(ExportSettings(), primary, fallback)

        assert settings.indent_length == 1

    def test_mutates_in_place(self, tmp_path):
        primary = _write(tmp_path / "primary.yaml", {"DEPENDENCIES_INDIRECT_LINKS": True})
        settings = ExportSettings()

        returned = load_export_settings(settings, primary)

        assert returned is settings
        assert settings.show_indirect_links is True

    def test_all_keys(self, tmp_path):
        primary = tmp_path / "opts.yaml"
        primary.write_text(
            "DEPENDENCIES_INDENT_LENGTH: '3'\n"
            "DEPENDENCIES_INDENT_USE_SPACES: OFF\n"
            "DEPENDENCIES_IGNORE_TARGETS: '^test_;_bench$'\n"
            "DEPENDENCIES_EXTERNAL_LIBS: ON\n"
            "DEPENDENCIES_INDIRECT_LINKS: 'YES'\n"
            "DEPENDENCIES_EXECUTABLES: 0\n"
            "DEPENDENCIES_STATIC_LIBS: false\n"
            "DEPENDENCIES_SHARED_LIBS: 'OFF'\n"
            "DEPENDENCIES_MODULE_LIBS: 'N'\n"
            "DEPENDENCIES_INTERFACE_LIBS: no\n"
            "DEPENDENCIES_OBJECT_LIBS: 'NOTFOUND'\n"
            "DEPENDENCIES_UNKNOWN_LIBS: ''\n"
            "DEPENDENCIES_CUSTOM_TARGETS: 'ON'\n"
        )

        settings = load_export_settings(ExportSettings(), primary)

        assert settings.indent_length == 3
        assert settings.indent_use_spaces is False
        assert [p.pattern for p in settings.ignore_patterns] == ["^test_", "_bench$"]
        assert settings.show_external_targets is True
        assert settings.show_indirect_links is True
        toggles = settings.target_types
        assert toggles.executables is False
        assert toggles.static_libs is False
        assert toggles.shared_libs is False
        assert toggles.module_libs is False
        assert toggles.interface_libs is False
        assert toggles.object_libs is False
        assert toggles.unknown_libs is False
        assert toggles.custom_targets is True

    def test_ignore_targets_as_list(self, tmp_path):
        primary = _write(tmp_path / "opts.yaml", {"DEPENDENCIES_IGNORE_TARGETS": ["^gtest", "mock"]})

        settings = load_export_settings(ExportSettings(), primary)

        assert [p.pattern for p in settings.ignore_patterns] == ["^gtest", "mock"]

    def test_unknown_keys_ignored(self, tmp_path):
        primary = _write(
            tmp_path / "opts.yaml",
            {"DEPENDENCIES_FUTURE_OPTION": "whatever", "DEPENDENCIES_INDENT_LENGTH": 5},
        )

        settings = load_export_settings(ExportSettings(), primary)

        assert settings.indent_length == 5
        assert settings.loaded_from == primary

    def test_unparseable_file_keeps_prior_values(self, tmp_path):
        primary = tmp_path / "opts.yaml"
        primary.write_text("DEPENDENCIES_INDENT_LENGTH: [unclosed")
        settings = ExportSettings(indent_length=9)

        load_export_settings(settings, primary)

        assert settings.indent_length == 9
        assert settings.loaded_from is None

    def test_non_mapping_file_keeps_defaults(self, tmp_path):
        primary = tmp_path / "opts.yaml"
        primary.write_text("- one\n- two\n")

        settings = load_export_settings(ExportSettings(), primary)

        assert settings == ExportSettings()

    def test_bad_value_aborts_rest_of_file(self, tmp_path):
        primary = _write(
            tmp_path / "opts.yaml",
            {
                "DEPENDENCIES_INDENT_LENGTH": 3,
                "DEPENDENCIES_INDENT_USE_SPACES": "maybe",
                "DEPENDENCIES_EXTERNAL_LIBS": True,
            },
        )

        settings = load_export_settings(ExportSettings(), primary)

        # Applied before the failure
        assert settings.indent_length == 3
        # Failed and skipped
        assert settings.indent_use_spaces is True
        assert settings.show_external_targets is False
        assert settings.loaded_from is None

    def test_invalid_ignore_pattern_aborts(self, tmp_path):
        primary = _write(
            tmp_path / "opts.yaml",
            {"DEPENDENCIES_IGNORE_TARGETS": ["("], "DEPENDENCIES_INDIRECT_LINKS": True},
        )

        settings = load_export_settings(ExportSettings(), primary)

        assert settings.show_indirect_links is False

    def test_empty_file_is_fine(self, tmp_path):
        primary = tmp_path / "opts.yaml"
        primary.write_text("")

        settings = load_export_settings(ExportSettings(), primary)

        assert settings.loaded_from == primary
        assert settings.indent_length == 2
