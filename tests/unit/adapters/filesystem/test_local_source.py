"""
Tests de LocalSourceAdapter sur une arborescence temporaire.
"""

from pathlib import Path

import pytest

from cineradar.adapters.filesystem import LocalSourceAdapter
from cineradar.core.entities import SourceKind
from cineradar.core.errors import ConfigError


@pytest.fixture
def library(tmp_path: Path) -> Path:
    """Videotheque : films a la racine et dans un sous-repertoire."""
    movies = tmp_path / "movies"
    (movies / "Nolan").mkdir(parents=True)
    (movies / "Heat (1995).mkv").write_bytes(b"")
    (movies / "Heat (1995).srt").write_bytes(b"")
    (movies / "Nolan" / "Inception (2010).mkv").write_bytes(b"")
    (movies / "Nolan" / "Inception.2010.sample.mkv").write_bytes(b"")
    return movies


def _configured(library: Path, recursive: bool) -> LocalSourceAdapter:
    adapter = LocalSourceAdapter()
    adapter.configure({"paths": str(library), "recursive": recursive})
    return adapter


class TestLocalCredentials:
    def test_identity(self) -> None:
        adapter = LocalSourceAdapter()
        assert adapter.name == "Local Files"
        assert adapter.kind is SourceKind.FILESYSTEM
        assert adapter.is_configured is False

    def test_paths_are_required(self) -> None:
        result = LocalSourceAdapter().validate_credentials({"paths": " \n "})
        assert result.errors == ("At least one directory path is required",)

    def test_configure_rejects_empty_paths(self) -> None:
        with pytest.raises(ConfigError, match="Invalid configuration"):
            LocalSourceAdapter().configure({"paths": ""})

    def test_recursive_accepts_text(self, library: Path) -> None:
        adapter = LocalSourceAdapter()
        adapter.configure({"paths": [str(library)], "recursive": "true"})
        assert adapter.recursive is True


class TestLocalCheckMovie:
    @pytest.mark.asyncio
    async def test_finds_top_level_file(self, library: Path) -> None:
        result = await _configured(library, recursive=False).check_movie("Heat", 1995)

        assert result.found is True
        assert result.movie.id == "Heat (1995).mkv"
        assert result.movie.name == "Heat"
        assert result.movie.year == 1995

    @pytest.mark.asyncio
    async def test_subdirectories_need_recursive(self, library: Path) -> None:
        flat = await _configured(library, recursive=False).check_movie("Inception", 2010)
        deep = await _configured(library, recursive=True).check_movie("Inception", 2010)

        assert flat.found is False
        assert deep.found is True

    @pytest.mark.asyncio
    async def test_samples_and_subtitles_are_ignored(self, library: Path) -> None:
        adapter = _configured(library, recursive=True)
        files = await adapter.get_all_movie_files()
        assert sorted(f.file_name for f in files) == ["Heat (1995).mkv", "Inception (2010).mkv"]

    @pytest.mark.asyncio
    async def test_listing_is_cached_until_reconfigure(self, library: Path) -> None:
        adapter = _configured(library, recursive=False)
        assert (await adapter.check_movie("Ronin", 1998)).found is False

        (library / "Ronin (1998).mkv").write_bytes(b"")
        assert (await adapter.check_movie("Ronin", 1998)).found is False

        adapter.configure({"paths": str(library), "recursive": False})
        assert (await adapter.check_movie("Ronin", 1998)).found is True

    @pytest.mark.asyncio
    async def test_missing_directory_is_skipped(self, library: Path, tmp_path: Path) -> None:
        adapter = LocalSourceAdapter()
        adapter.configure({"paths": f"{tmp_path / 'gone'}\n{library}"})

        result = await adapter.check_movie("Heat", 1995)

        assert result.found is True


class TestLocalConnection:
    @pytest.mark.asyncio
    async def test_existing_directories(self, library: Path) -> None:
        result = await _configured(library, recursive=False).test_connection()
        assert result.success is True

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path: Path) -> None:
        adapter = LocalSourceAdapter()
        adapter.configure({"paths": str(tmp_path / "gone")})

        result = await adapter.test_connection()

        assert result.success is False
        assert result.error.startswith("Directory not found:")
