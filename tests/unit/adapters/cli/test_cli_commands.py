"""
Tests unitaires des commandes CLI.

Tests couvrant:
- sources list/configure/test/enable/disable
- check: verification d'un titre dans les sources actives
- scan: detection des films d'une page enregistree
- info/version

Chaque Container() lit le fichier d'identifiants redirige par la
fixture credentials_file.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import typer
from typer.testing import CliRunner

from cineradar.adapters.cli.helpers import parse_assignments
from cineradar.main import app
from cineradar.services.source_registry import SourceRegistry
from tests.fixtures.pages import IMDB_TITLE_PAGE

runner = CliRunner()


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def library(tmp_path: Path) -> Path:
    movies = tmp_path / "movies"
    movies.mkdir()
    (movies / "Heat (1995).mkv").write_bytes(b"")
    (movies / "Inception.2010.1080p.BluRay.mkv").write_bytes(b"")
    return movies


@pytest.fixture
def local_enabled(credentials_file: Path, library: Path) -> Path:
    """Source locale enregistree et activee dans le fichier d'identifiants."""
    credentials_file.write_text(
        json.dumps(
            {"sources": {"local": {"paths": str(library), "recursive": False, "enabled": True}}}
        ),
        encoding="utf-8",
    )
    return credentials_file


def _stored(credentials_file: Path) -> dict:
    return json.loads(credentials_file.read_text(encoding="utf-8"))["sources"]


# ============================================================================
# Helpers
# ============================================================================


class TestParseAssignments:
    def test_key_values(self) -> None:
        assert parse_assignments(["serverUrl=http://emby:8096", "apiKey=a=b"]) == {
            "serverUrl": "http://emby:8096",
            "apiKey": "a=b",
        }

    def test_booleans(self) -> None:
        assert parse_assignments(["recursive=TRUE"]) == {"recursive": True}

    def test_repeated_key_is_joined_by_lines(self) -> None:
        assert parse_assignments(["paths=/a", "paths=/b"]) == {"paths": "/a\n/b"}

    def test_rejects_malformed_argument(self) -> None:
        with pytest.raises(typer.BadParameter):
            parse_assignments(["serverUrl"])


# ============================================================================
# sources
# ============================================================================


class TestSourcesCommands:
    def test_list_shows_builtin_sources(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["sources", "list"])

        assert result.exit_code == 0
        for source_id in ("emby", "jellyfin", "plex", "local", "network"):
            assert source_id in result.output

    def test_configure_saves_and_enables(self, credentials_file: Path, library: Path) -> None:
        result = runner.invoke(
            app, ["sources", "configure", "local", f"paths={library}", "recursive=true"]
        )

        assert result.exit_code == 0
        assert "activee" in result.output
        assert _stored(credentials_file)["local"] == {
            "paths": str(library),
            "recursive": True,
            "enabled": True,
        }

    def test_configure_with_disable_flag(self, credentials_file: Path, library: Path) -> None:
        result = runner.invoke(
            app, ["sources", "configure", "local", f"paths={library}", "--disable"]
        )

        assert result.exit_code == 0
        assert _stored(credentials_file)["local"]["enabled"] is False

    def test_configure_rejects_invalid_credentials(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["sources", "configure", "emby", "serverUrl=not a url"])

        assert result.exit_code == 1
        assert "Invalid Server URL" in result.output
        assert not credentials_file.exists()

    def test_configure_unknown_source(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["sources", "configure", "dvd", "token=x"])
        assert result.exit_code == 1

    def test_disable_then_enable(self, local_enabled: Path) -> None:
        result = runner.invoke(app, ["sources", "disable", "local"])
        assert result.exit_code == 0
        assert _stored(local_enabled)["local"]["enabled"] is False

        result = runner.invoke(app, ["sources", "enable", "local"])
        assert result.exit_code == 0
        assert _stored(local_enabled)["local"]["enabled"] is True

    def test_enable_unknown_source(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["sources", "enable", "dvd"])
        assert result.exit_code == 1
        assert 'Source "dvd" not found' in result.output

    def test_test_connection(self, local_enabled: Path) -> None:
        result = runner.invoke(app, ["sources", "test", "local"])
        assert result.exit_code == 0
        assert "Connexion reussie" in result.output

    def test_test_without_credentials(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["sources", "test", "plex"])
        assert result.exit_code == 1

    def test_unreadable_credentials_file(self, credentials_file: Path) -> None:
        credentials_file.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["sources", "list"])

        assert result.exit_code == 1
        assert "Unreadable credentials" in result.output

    def test_sources_are_closed_after_command(
        self, credentials_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        close = AsyncMock()
        monkeypatch.setattr(SourceRegistry, "close", close)

        result = runner.invoke(app, ["sources", "list"])

        assert result.exit_code == 0
        close.assert_awaited_once()


# ============================================================================
# check / scan
# ============================================================================


class TestCheckCommand:
    def test_found_in_local_library(self, local_enabled: Path) -> None:
        result = runner.invoke(app, ["check", "Heat", "--year", "1995"])

        assert result.exit_code == 0
        assert "Local Files" in result.output
        assert "trouve" in result.output

    def test_not_found_exits_with_error(self, local_enabled: Path) -> None:
        result = runner.invoke(app, ["check", "Ronin", "--year", "1998"])

        assert result.exit_code == 1
        assert "absent" in result.output

    def test_without_active_source(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["check", "Heat"])

        assert result.exit_code == 1
        assert "Aucune source active" in result.output

    def test_unreadable_credentials_file_starts_without_sources(
        self, credentials_file: Path
    ) -> None:
        credentials_file.write_text("{not json", encoding="utf-8")

        result = runner.invoke(app, ["check", "Heat"])

        assert result.exit_code == 1
        assert "Aucune source active" in result.output


class TestScanCommand:
    def test_writes_annotated_page(self, local_enabled: Path, tmp_path: Path) -> None:
        page = tmp_path / "inception.html"
        page.write_text(IMDB_TITLE_PAGE, encoding="utf-8")
        output = tmp_path / "annotated.html"

        result = runner.invoke(
            app, ["scan", str(page), "--host", "www.imdb.com", "--output", str(output)]
        )

        assert result.exit_code == 0
        annotated = output.read_text(encoding="utf-8")
        assert annotated.count("cineradar-badge") == 1
        assert annotated.count('data-cineradar-checked="true"') == 3

    def test_prints_found_titles(self, local_enabled: Path, tmp_path: Path) -> None:
        page = tmp_path / "inception.html"
        page.write_text(IMDB_TITLE_PAGE, encoding="utf-8")

        result = runner.invoke(app, ["scan", str(page), "--host", "www.imdb.com"])

        assert result.exit_code == 0
        assert "Inception" in result.output
        assert "Interstellar" not in result.output

    def test_unsupported_host(self, credentials_file: Path, tmp_path: Path) -> None:
        page = tmp_path / "page.html"
        page.write_text("<html></html>", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(page), "--host", "example.org"])

        assert result.exit_code == 1
        assert "example.org" in result.output


class TestInfoCommands:
    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "CineRadar v0.1.0" in result.output

    def test_info(self, credentials_file: Path) -> None:
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "Niveau de log" in result.output
