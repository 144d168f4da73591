"""
Source fichiers locaux : videotheque sous forme de repertoires sur disque.

Identifiants:
    {"paths": "/movies\n/films" | ["/movies", "/films"], "recursive": bool}
"""

import asyncio
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, field_validator

from cineradar.adapters.cache import TTLCache
from cineradar.adapters.filesystem.base import DirectorySourceAdapter, parse_bool
from cineradar.core.entities import (
    ConnectionResult,
    CredentialField,
    SourceKind,
    ValidationResult,
)
from cineradar.core.errors import ConfigError


def split_paths(value: Any) -> list[str]:
    """Liste de chemins depuis un texte (un par ligne) ou une liste."""
    if value is None:
        return []
    raw = value.split("\n") if isinstance(value, str) else list(value)
    return [str(p).strip() for p in raw if str(p).strip()]


class LocalCredentials(BaseModel):
    """Identifiants normalises d'une source locale."""

    paths: list[str]
    recursive: bool = False

    @field_validator("paths", mode="before")
    @classmethod
    def split(cls, v: Any) -> list[str]:
        return split_paths(v)

    @field_validator("recursive", mode="before")
    @classmethod
    def to_bool(cls, v: Any) -> bool:
        return parse_bool(v)


class LocalSourceAdapter(DirectorySourceAdapter):
    """Adaptateur de source pour des repertoires locaux."""

    def __init__(self, cache_ttl: float = TTLCache.DEFAULT_TTL) -> None:
        super().__init__(cache_ttl=cache_ttl)
        self._credentials: Optional[LocalCredentials] = None

    @property
    def name(self) -> str:
        return "Local Files"

    @property
    def kind(self) -> SourceKind:
        return SourceKind.FILESYSTEM

    @property
    def is_configured(self) -> bool:
        return self._credentials is not None

    @property
    def recursive(self) -> bool:
        return bool(self._credentials and self._credentials.recursive)

    def _directories(self) -> list[Path]:
        if self._credentials is None:
            return []
        return [Path(p).expanduser() for p in self._credentials.paths]

    def get_required_fields(self) -> list[CredentialField]:
        return [
            CredentialField(
                key="paths",
                label="Movie Directories (one per line)",
                input_kind="textarea",
            ),
            CredentialField(
                key="recursive",
                label="Search Subdirectories",
                input_kind="checkbox",
                required=False,
            ),
        ]

    def validate_credentials(self, candidate: dict[str, Any]) -> ValidationResult:
        errors: list[str] = []
        if not split_paths(candidate.get("paths")):
            errors.append("At least one directory path is required")
        return ValidationResult.from_errors(errors)

    def configure(self, credentials: dict[str, Any]) -> None:
        validation = self.validate_credentials(credentials)
        if not validation.valid:
            raise ConfigError(list(validation.errors), prefix="Invalid configuration")

        self._credentials = LocalCredentials(
            paths=credentials.get("paths"),
            recursive=credentials.get("recursive", False),
        )
        # Vider le cache a chaque reconfiguration
        self.invalidate_cache()
        logger.debug(f"Source locale configuree: {len(self._credentials.paths)} repertoire(s)")

    async def test_connection(self) -> ConnectionResult:
        if not self.is_configured:
            return ConnectionResult(success=False, error="Source not configured")
        try:
            missing = await asyncio.to_thread(
                lambda: [str(d) for d in self._directories() if not d.is_dir()]
            )
        except OSError as e:
            return ConnectionResult(success=False, error=str(e))
        if missing:
            return ConnectionResult(
                success=False, error=f"Directory not found: {', '.join(missing)}"
            )
        return ConnectionResult(success=True)
