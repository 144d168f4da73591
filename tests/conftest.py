"""
Fixtures pytest partagees pour les tests CineRadar.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Stockage d'identifiants en memoire et registre de sources
- Isolation du fichier d'identifiants pour les tests CLI/web
"""

from pathlib import Path

import pytest

from cineradar.adapters.storage import InMemoryCredentialStore
from cineradar.config import Settings
from cineradar.services.source_registry import SourceRegistry


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings avec des chemins temporaires (aucun acces a ~/.config)."""
    return Settings(
        credentials_file=tmp_path / "sources.json",
        log_file=tmp_path / "logs" / "cineradar.log",
    )


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    """Stockage d'identifiants vide."""
    return InMemoryCredentialStore()


@pytest.fixture
def registry(credential_store: InMemoryCredentialStore) -> SourceRegistry:
    """Registre de sources vide adosse au stockage en memoire."""
    return SourceRegistry(credential_store=credential_store)


@pytest.fixture
def credentials_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Redirige le fichier d'identifiants vers tmp_path.

    Chaque Container() cree pendant le test lit CINERADAR_CREDENTIALS_FILE.
    """
    path = tmp_path / "sources.json"
    monkeypatch.setenv("CINERADAR_CREDENTIALS_FILE", str(path))
    return path
