"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINERADAR_,
et peut optionnellement être fournie via un fichier .env.

Les identifiants des sources ne sont PAS ici : ils sont dans le fichier
credentials_file, géré par le registre des sources.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cineradar/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINERADAR_.
    Exemple : CINERADAR_REQUEST_TIMEOUT=5

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINERADAR_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Stockage des identifiants de sources
    credentials_file: Path = Field(default=Path("~/.config/cineradar/sources.json"))

    # Sources serveur media
    request_timeout: float = Field(default=10.0, gt=0)
    retry_attempts: int = Field(default=3, ge=1)

    # Sources fichiers
    file_cache_ttl: float = Field(default=300.0, ge=0)
    share_probe_timeout: float = Field(default=5.0, gt=0)

    # Registre
    allow_source_replace: bool = Field(default=False)
    refresh_on_enable: bool = Field(default=False)

    # Canal HTTP (cineradar serve)
    background_url: str = Field(default="http://127.0.0.1:8765")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cineradar.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("credentials_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()
