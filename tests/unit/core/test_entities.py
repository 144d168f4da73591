"""
Tests des entites du domaine : resultats, correspondances, erreurs.
"""

from cineradar.core.entities import (
    CheckResult,
    MediaItem,
    MediaMatch,
    MediaQuery,
    QueryResult,
    RegisteredSource,
    SourceKind,
    ValidationResult,
)
from cineradar.core.errors import ConfigError, DuplicateSourceError, SourceNotFoundError
from tests.fixtures.sources import FakeSourceAdapter


class TestValidationResult:
    def test_no_errors_is_valid(self) -> None:
        result = ValidationResult.from_errors([])
        assert result.valid is True
        assert result.errors == ()

    def test_errors_make_result_invalid(self) -> None:
        result = ValidationResult.from_errors(["Server URL is required"])
        assert result.valid is False
        assert result.errors == ("Server URL is required",)


class TestCheckResult:
    def test_not_found_has_no_movie(self) -> None:
        result = CheckResult.not_found()
        assert result.found is False
        assert result.movie is None
        assert result.error is None

    def test_not_found_keeps_error(self) -> None:
        result = CheckResult.not_found(error="HTTP 401: Unauthorized")
        assert result.error == "HTTP 401: Unauthorized"


class TestMediaMatch:
    """Serialisation des MediaMatch dans les reponses CHECK_MOVIE."""

    def test_to_dict_uses_wire_keys(self) -> None:
        match = MediaMatch(
            source_id="plex",
            source_name="Plex",
            found=True,
            item=MediaItem(id="1234", name="Inception", year=2010),
        )
        assert match.to_dict() == {
            "sourceId": "plex",
            "sourceName": "Plex",
            "found": True,
            "item": {"id": "1234", "name": "Inception", "year": 2010},
        }

    def test_to_dict_includes_error_only_when_set(self) -> None:
        match = MediaMatch(source_id="emby", source_name="Emby", found=False, error="boom")
        data = match.to_dict()
        assert data["error"] == "boom"
        assert "item" not in data

    def test_from_dict_restores_item(self) -> None:
        match = MediaMatch.from_dict(
            {
                "sourceId": "local",
                "sourceName": "Local Files",
                "found": True,
                "item": {"id": "Heat (1995).mkv", "name": "Heat", "year": 1995},
            }
        )
        assert match.source_id == "local"
        assert match.item == MediaItem(id="Heat (1995).mkv", name="Heat", year=1995)


class TestQueryResult:
    def test_found_when_any_source_matches(self) -> None:
        result = QueryResult(
            query=MediaQuery(title="Heat", year=1995),
            matches=[
                MediaMatch(source_id="a", source_name="A", found=False),
                MediaMatch(source_id="b", source_name="B", found=True),
            ],
        )
        assert result.found is True
        assert [m.source_id for m in result.matching_sources] == ["b"]

    def test_empty_result_is_not_found(self) -> None:
        result = QueryResult(query=MediaQuery(title="Heat"))
        assert result.found is False
        assert result.matching_sources == []


class TestRegisteredSource:
    def test_descriptor_exposes_adapter_identity(self) -> None:
        source = RegisteredSource(id="fake", adapter=FakeSourceAdapter(name="Fake"))
        descriptor = source.descriptor
        assert descriptor.id == "fake"
        assert descriptor.kind is SourceKind.API
        assert descriptor.display_name == "Fake"


class TestErrors:
    def test_config_error_lists_messages(self) -> None:
        error = ConfigError(["Server URL is required", "API Key is required"])
        assert error.errors == ["Server URL is required", "API Key is required"]
        assert str(error) == "Invalid credentials: Server URL is required, API Key is required"

    def test_source_not_found_message(self) -> None:
        assert str(SourceNotFoundError("unknown")) == 'Source "unknown" not found'

    def test_duplicate_source_message(self) -> None:
        assert "emby" in str(DuplicateSourceError("emby"))
