"""
Tests for export.config

Test Coverage:
- ExportConfig defaults, validation and derived specs
- with_overrides() ignores None values
- load_export_config() falls back to defaults on bad input
"""
import json
import logging
from pathlib import Path

import pytest

from report_export.export.config import ExportConfig, load_export_config


class TestExportConfig:

    def test_defaults(self):
        config = ExportConfig()

        assert config.page_spec.width == 210.0
        assert config.page_spec.height == 297.0
        assert config.filename == "dashboard.pdf"
        assert config.capture_options.scale_factor == 2.0
        assert config.output_dir is None

    def test_landscape_page_spec(self):
        config = ExportConfig(page_size="letter", orientation="landscape")

        assert (config.page_spec.width, config.page_spec.height) == (279.4, 215.9)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page_size": "b7"},
            {"orientation": "sideways"},
            {"filename": "  "},
            {"scale_factor": 0},
            {"background_color": "nope"},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ExportConfig(**kwargs)

    def test_output_dir_coerced_to_path(self):
        config = ExportConfig(output_dir="exports")

        assert config.output_dir == Path("exports")

    def test_with_overrides_skips_none(self):
        config = ExportConfig().with_overrides(page_size="a3", title=None)

        assert config.page_size == "a3"
        assert config.title == "Sales Dashboard"

    def test_with_no_overrides_returns_same_instance(self):
        config = ExportConfig()

        assert config.with_overrides(title=None) is config

    def test_is_immutable(self):
        config = ExportConfig()

        with pytest.raises(AttributeError):
            config.page_size = "a3"


class TestLoadExportConfig:

    def test_none_gives_defaults(self):
        assert load_export_config(None) == ExportConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_export_config(tmp_path / "missing.json") == ExportConfig()

    def test_reads_values(self, tmp_path):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({
            "page_size": "letter",
            "scale_factor": 1.5,
            "crop_slices": True,
            "output_dir": str(tmp_path / "out"),
        }))

        config = load_export_config(path)

        assert config.page_size == "letter"
        assert config.scale_factor == 1.5
        assert config.crop_slices is True
        assert config.output_dir == tmp_path / "out"

    def test_unknown_keys_ignored_with_warning(self, tmp_path, caplog):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"page_size": "a5", "colour_scheme": "dark"}))

        with caplog.at_level(logging.WARNING):
            config = load_export_config(path)

        assert config.page_size == "a5"
        assert "colour_scheme" in caplog.text

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[1, 2, 3]",
            json.dumps({"page_size": "b7"}),
            json.dumps({"scale_factor": "big"}),
        ],
    )
    def test_bad_content_falls_back_to_defaults(self, tmp_path, caplog, content):
        path = tmp_path / "export.json"
        path.write_text(content)

        with caplog.at_level(logging.WARNING):
            config = load_export_config(path)

        assert config == ExportConfig()
        assert caplog.records
