"""Unit tests for configuration and constants."""

from __future__ import annotations

from pathlib import Path

import pytest

from gpkg_conformance.config import ConfigLoader, ConformanceConfig
from gpkg_conformance.constants import Defaults


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GPKG_CHUNK_SIZE",
        "GPKG_SAMPLE_LIMIT",
        "GPKG_ALLOWED_VALUE_EXTENSIONS",
        "GPKG_REPORT_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConformanceConfig:
    """Test suite for ConformanceConfig class."""

    def test_default_config(self):
        config = ConformanceConfig()

        assert config.chunk_size == Defaults.CHUNK_SIZE
        assert config.sample_limit == Defaults.SAMPLE_LIMIT
        assert config.allowed_value_extensions == ("gpkg_2d_gridded_coverage",)
        assert config.report_dir == Path(".")

    @pytest.mark.parametrize("field", ["chunk_size", "sample_limit"])
    def test_rejects_non_positive(self, field):
        with pytest.raises(ValueError, match=field):
            ConformanceConfig(**{field: 0})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GPKG_CHUNK_SIZE", "50")
        monkeypatch.setenv("GPKG_SAMPLE_LIMIT", "2")
        monkeypatch.setenv("GPKG_ALLOWED_VALUE_EXTENSIONS", "acme_a, acme_b")
        monkeypatch.setenv("GPKG_REPORT_DIR", "/tmp/reports")

        config = ConformanceConfig.from_env()

        assert config.chunk_size == 50
        assert config.sample_limit == 2
        assert config.allowed_value_extensions == ("acme_a", "acme_b")
        assert config.report_dir == Path("/tmp/reports")

    def test_empty_allowed_extensions_env(self, monkeypatch):
        monkeypatch.setenv("GPKG_ALLOWED_VALUE_EXTENSIONS", "")

        assert ConformanceConfig.from_env().allowed_value_extensions == ()

    def test_evaluation_settings(self):
        settings = ConformanceConfig(
            sample_limit=3, allowed_value_extensions=("acme_a",)
        ).evaluation_settings()

        assert settings.sample_limit == 3
        assert settings.allowed_value_extensions == frozenset({"acme_a"})


class TestConfigLoader:
    """Test suite for ConfigLoader class."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = ConfigLoader.load(tmp_path / "absent.toml")

        assert config == ConformanceConfig()

    def test_load_from_toml(self, tmp_path):
        config_file = tmp_path / "gpkg_conformance.toml"
        config_file.write_text(
            '[paths]\nreport_dir = "out"\n\n'
            "[run]\nchunk_size = 10\nsample_limit = \"7\"\n"
            'allowed_value_extensions = ["acme_scope"]\n',
            encoding="utf-8",
        )

        config = ConfigLoader.load(config_file)

        assert config.report_dir == Path("out")
        assert config.chunk_size == 10
        assert config.sample_limit == 7
        assert config.allowed_value_extensions == ("acme_scope",)

    def test_toml_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GPKG_CHUNK_SIZE", "50")
        monkeypatch.setenv("GPKG_SAMPLE_LIMIT", "9")
        config_file = tmp_path / "gpkg_conformance.toml"
        config_file.write_text("[run]\nchunk_size = 20\n", encoding="utf-8")

        config = ConfigLoader.load(config_file)

        assert config.chunk_size == 20
        assert config.sample_limit == 9

    def test_invalid_toml_warns(self, tmp_path):
        config_file = tmp_path / "gpkg_conformance.toml"
        config_file.write_text("[run\nchunk_size = ", encoding="utf-8")

        with pytest.warns(UserWarning, match="Failed to load config"):
            config = ConfigLoader.load(config_file)

        assert config == ConformanceConfig()

    def test_invalid_value_warns(self, tmp_path):
        config_file = tmp_path / "gpkg_conformance.toml"
        config_file.write_text("[run]\nchunk_size = true\n", encoding="utf-8")

        with pytest.warns(UserWarning):
            config = ConfigLoader.load(config_file)

        assert config.chunk_size == Defaults.CHUNK_SIZE
