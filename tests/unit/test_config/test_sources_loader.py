"""Tests for the source registry and sources.yaml loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from musive.config.loader import ConfigValidationError, load_sources
from musive.config.registry import DEFAULT_SOURCES, default_sources_config
from musive.config.schemas.sources import SourceConfig, SourcesConfig


VALID_YAML = """
version: "1.0"
sources:
  - id: billboard
    name: Billboard
    url: https://www.billboard.com/feed/
  - id: nme
    name: NME
    url: https://www.nme.com/feed
    enabled: false
"""


@pytest.mark.unit
class TestDefaultRegistry:
    """Tests for the built-in feeds."""

    def test_five_sources_in_order(self) -> None:
        """The registry lists the five music outlets in digest order."""
        assert [s.name for s in DEFAULT_SOURCES] == [
            "Billboard",
            "Rolling Stone",
            "NME",
            "Pitchfork",
            "Variety Music",
        ]

    def test_all_enabled(self) -> None:
        """Every built-in source is collected."""
        config = default_sources_config()
        assert len(config.enabled_sources) == 5


@pytest.mark.unit
class TestSourceSchemas:
    """Tests for SourceConfig and SourcesConfig validation."""

    def test_rejects_non_http_url(self) -> None:
        """Only http and https feeds are accepted."""
        with pytest.raises(ValidationError, match="URL must start"):
            SourceConfig(id="x", name="X", url="ftp://example.com/feed")

    def test_rejects_bad_id(self) -> None:
        """Ids are lowercase slugs."""
        with pytest.raises(ValidationError):
            SourceConfig(id="Bad Id", name="X", url="https://example.com/feed")

    def test_rejects_auth_header(self) -> None:
        """Credentials never live in config files."""
        with pytest.raises(ValidationError, match="must not be stored"):
            SourceConfig(
                id="x",
                name="X",
                url="https://example.com/feed",
                headers={"Authorization": "Bearer secret"},
            )

    def test_rejects_duplicate_ids(self) -> None:
        """Source ids are unique."""
        source = SourceConfig(id="x", name="X", url="https://example.com/feed")
        with pytest.raises(ValidationError, match="Duplicate source id"):
            SourcesConfig(sources=[source, source])


@pytest.mark.unit
class TestLoadSources:
    """Tests for load_sources."""

    def test_loads_valid_file(self, tmp_path: Path) -> None:
        """A valid file is parsed, keeping disabled sources."""
        path = tmp_path / "sources.yaml"
        path.write_text(VALID_YAML)

        config = load_sources(path)

        assert [s.id for s in config.sources] == ["billboard", "nme"]
        assert [s.id for s in config.enabled_sources] == ["billboard"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a ConfigValidationError."""
        with pytest.raises(ConfigValidationError) as exc_info:
            load_sources(tmp_path / "missing.yaml")
        assert exc_info.value.errors[0]["type"] == "file_not_found"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Broken YAML is a ConfigValidationError."""
        path = tmp_path / "sources.yaml"
        path.write_text("sources: [unclosed")

        with pytest.raises(ConfigValidationError) as exc_info:
            load_sources(path)
        assert exc_info.value.errors[0]["type"] == "yaml_parse_error"

    def test_schema_errors_are_formatted(self, tmp_path: Path) -> None:
        """Validation errors carry their location."""
        path = tmp_path / "sources.yaml"
        path.write_text("sources:\n  - id: x\n    name: X\n    url: gopher://x\n")

        with pytest.raises(ConfigValidationError) as exc_info:
            load_sources(path)

        lines = exc_info.value.formatted()
        assert any(line.startswith("sources.0.url") for line in lines)

    def test_empty_file_is_empty_registry(self, tmp_path: Path) -> None:
        """An empty file validates to no sources."""
        path = tmp_path / "sources.yaml"
        path.write_text("")

        assert load_sources(path).sources == []
