"""
Source partage reseau : videotheque sur un partage SMB/NFS monte localement.

Le partage est lu via son point de montage ; host/share servent a
l'identification et aux messages. Le test de connexion verifie que le
point de montage repond dans le delai imparti (un partage deconnecte
peut bloquer les appels systeme).

Identifiants:
    {"host": "nas.local", "share": "movies", "mountPath": "/mnt/movies", "recursive": true}
"""

import asyncio
import os
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cineradar.adapters.cache import TTLCache
from cineradar.adapters.filesystem.base import DirectorySourceAdapter, parse_bool
from cineradar.core.entities import (
    ConnectionResult,
    CredentialField,
    SourceKind,
    ValidationResult,
)
from cineradar.core.errors import ConfigError

DEFAULT_PROBE_TIMEOUT = 5.0
DEFAULT_SCAN_TIMEOUT = 60.0


class NetworkShareCredentials(BaseModel):
    """Identifiants normalises d'un partage reseau."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    host: str
    share: str
    mount_path: str = Field(alias="mountPath")
    recursive: bool = True

    @field_validator("host", "share")
    @classmethod
    def strip_separators(cls, v: str) -> str:
        return v.strip().strip("/\\")

    @field_validator("mount_path")
    @classmethod
    def strip_path(cls, v: str) -> str:
        return v.strip()

    @field_validator("recursive", mode="before")
    @classmethod
    def to_bool(cls, v: Any) -> bool:
        return parse_bool(v)

    @property
    def unc(self) -> str:
        """Nom du partage au format //host/share."""
        return f"//{self.host}/{self.share}"


class NetworkShareSourceAdapter(DirectorySourceAdapter):
    """Adaptateur de source pour un partage reseau monte."""

    def __init__(
        self,
        cache_ttl: float = TTLCache.DEFAULT_TTL,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        scan_timeout: float = DEFAULT_SCAN_TIMEOUT,
    ) -> None:
        super().__init__(cache_ttl=cache_ttl)
        self._probe_timeout = probe_timeout
        self._scan_timeout = scan_timeout
        self._credentials: Optional[NetworkShareCredentials] = None
        # Partages dont le dernier scan a expire, ecartes pendant le TTL du cache
        self._unreachable = TTLCache(ttl=cache_ttl)

    @property
    def name(self) -> str:
        return "Network Share"

    @property
    def kind(self) -> SourceKind:
        return SourceKind.NETWORK

    @property
    def is_configured(self) -> bool:
        return self._credentials is not None

    @property
    def recursive(self) -> bool:
        return bool(self._credentials and self._credentials.recursive)

    def _directories(self) -> list[Path]:
        if self._credentials is None:
            return []
        return [Path(self._credentials.mount_path).expanduser()]

    def get_required_fields(self) -> list[CredentialField]:
        return [
            CredentialField(key="host", label="Host", input_kind="text"),
            CredentialField(key="share", label="Share Name", input_kind="text"),
            CredentialField(key="mountPath", label="Mount Path", input_kind="text"),
            CredentialField(
                key="recursive",
                label="Search Subdirectories",
                input_kind="checkbox",
                required=False,
            ),
        ]

    def validate_credentials(self, candidate: dict[str, Any]) -> ValidationResult:
        errors: list[str] = []
        for key, label in (("host", "Host"), ("share", "Share name"), ("mountPath", "Mount path")):
            value = candidate.get(key)
            if not value or not str(value).strip():
                errors.append(f"{label} is required")
        return ValidationResult.from_errors(errors)

    def configure(self, credentials: dict[str, Any]) -> None:
        validation = self.validate_credentials(credentials)
        if not validation.valid:
            raise ConfigError(list(validation.errors), prefix="Invalid configuration")

        self._credentials = NetworkShareCredentials(
            host=str(credentials["host"]),
            share=str(credentials["share"]),
            mountPath=str(credentials["mountPath"]),
            recursive=credentials.get("recursive", True),
        )
        self.invalidate_cache()
        logger.debug(f"Partage configure: {self._credentials.unc}")

    def invalidate_cache(self) -> None:
        super().invalidate_cache()
        self._unreachable.clear()

    async def _scan(self, directories: list[Path]) -> list[str]:
        """
        Scan borne par le timeout de scan.

        Le thread d'un scan expire ne peut pas etre interrompu : le partage
        est marque injoignable jusqu'a expiration du TTL pour ne pas empiler
        de nouveaux scans bloques.

        Raises:
            TimeoutError: Si le scan expire ou a expire recemment
        """
        key = self._cache_key()
        unc = self._credentials.unc if self._credentials else ""
        if key in self._unreachable:
            raise TimeoutError(f"Share {unc} not reachable (scan timeout)")
        try:
            return await asyncio.wait_for(
                super()._scan(directories), timeout=self._scan_timeout
            )
        except asyncio.TimeoutError:
            self._unreachable.set(key, True)
            logger.warning(f"Scan du partage {unc} expire, ignore jusqu'a expiration du cache")
            raise TimeoutError(f"Share {unc} not reachable (scan timeout)") from None

    async def test_connection(self) -> ConnectionResult:
        if self._credentials is None:
            return ConnectionResult(success=False, error="Source not configured")

        mount = self._directories()[0]
        try:
            is_dir, is_mount = await asyncio.wait_for(
                asyncio.to_thread(lambda: (mount.is_dir(), os.path.ismount(mount))),
                timeout=self._probe_timeout,
            )
        except asyncio.TimeoutError:
            return ConnectionResult(
                success=False,
                error=f"Share {self._credentials.unc} not reachable (timeout)",
            )
        except OSError as e:
            return ConnectionResult(success=False, error=str(e))

        if not is_dir:
            return ConnectionResult(success=False, error=f"Mount point not found: {mount}")
        if not is_mount:
            return ConnectionResult(
                success=True,
                warning=f"{mount} is not a mount point for {self._credentials.unc}",
            )
        return ConnectionResult(success=True)
