"""
Base commune des sources de type serveur media (API REST + JSON).

Factorise pour Emby, Jellyfin et Plex:
- Schema d'identifiants (URL du serveur + jeton) et sa validation
- Normalisation de l'URL (trim, sans slash final)
- Client httpx paresseux, recree quand la configuration change
- Conversion des erreurs reseau/HTTP en resultats (jamais d'exception)
- Selection du meilleur candidat via le fuzzy matcher
"""

from abc import abstractmethod
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cineradar.adapters.api.retry import RateLimitError, request_with_retry
from cineradar.core.entities import (
    CheckResult,
    ConnectionResult,
    CredentialField,
    MediaItem,
    SourceKind,
    ValidationResult,
)
from cineradar.core.errors import ConfigError, SourceConnectionError
from cineradar.core.ports.sources import ISourceAdapter
from cineradar.services.fuzzy_matcher import best_match

# Erreurs backend absorbees par test_connection() et check_movie()
BACKEND_ERRORS = (httpx.HTTPError, RateLimitError, SourceConnectionError, ValueError, KeyError)

NOT_CONFIGURED = "Source not configured"


class ServerCredentials(BaseModel):
    """Identifiants normalises d'un serveur media."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    server_url: str = Field(alias="serverUrl")
    token: str

    @field_validator("server_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Supprime les espaces et le slash final de l'URL."""
        return v.strip().rstrip("/")

    @field_validator("token")
    @classmethod
    def strip_token(cls, v: str) -> str:
        return v.strip()


def is_valid_url(value: str) -> bool:
    """True si value est une URL http(s) avec un hote."""
    try:
        url = httpx.URL(value.strip())
    except (httpx.InvalidURL, TypeError):
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def describe_error(error: Exception) -> str:
    """Message lisible pour une erreur backend."""
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"HTTP {response.status_code}: {response.reason_phrase}"
    if isinstance(error, httpx.TimeoutException):
        return f"Timeout: {error}" if str(error) else "Timeout"
    return str(error) or error.__class__.__name__


class HttpSourceAdapter(ISourceAdapter):
    """
    Adaptateur abstrait pour les serveurs media interroges en HTTP.

    Les sous-classes definissent le nom, le champ jeton, les en-tetes
    d'authentification, la sonde de test_connection() et la recherche.

    Attributes:
        TOKEN_FIELD: Cle du jeton dans les identifiants bruts
        TOKEN_LABEL: Libelle du jeton (utilise dans les messages d'erreur)
    """

    TOKEN_FIELD = "apiKey"
    TOKEN_LABEL = "API Key"

    def __init__(self, timeout: float = 10.0, max_attempts: int = 3) -> None:
        """
        Initialise l'adaptateur non configure.

        Args:
            timeout: Timeout des requetes HTTP en secondes
            max_attempts: Tentatives maximum sur 429/503
        """
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._credentials: Optional[ServerCredentials] = None
        self._client: Optional[httpx.AsyncClient] = None
        self._client_credentials: Optional[ServerCredentials] = None

    @property
    def kind(self) -> SourceKind:
        return SourceKind.API

    @property
    def is_configured(self) -> bool:
        return self._credentials is not None

    @property
    def server_url(self) -> Optional[str]:
        """URL normalisee du serveur (None si non configure)."""
        return self._credentials.server_url if self._credentials else None

    def get_required_fields(self) -> list[CredentialField]:
        return [
            CredentialField(key="serverUrl", label="Server URL", input_kind="url"),
            CredentialField(
                key=self.TOKEN_FIELD, label=self.TOKEN_LABEL, input_kind="password"
            ),
        ]

    def validate_credentials(self, candidate: dict[str, Any]) -> ValidationResult:
        errors: list[str] = []

        server_url = candidate.get("serverUrl")
        if not server_url or not str(server_url).strip():
            errors.append("Server URL is required")
        elif not is_valid_url(str(server_url)):
            errors.append("Invalid Server URL")

        token = candidate.get(self.TOKEN_FIELD)
        if not token or not str(token).strip():
            errors.append(f"{self.TOKEN_LABEL} is required")

        return ValidationResult.from_errors(errors)

    def configure(self, credentials: dict[str, Any]) -> None:
        validation = self.validate_credentials(credentials)
        if not validation.valid:
            raise ConfigError(list(validation.errors))

        self._credentials = ServerCredentials(
            serverUrl=str(credentials["serverUrl"]),
            token=str(credentials[self.TOKEN_FIELD]),
        )
        self._on_configure()
        logger.debug(f"Source {self.name} configuree: {self._credentials.server_url}")

    def _on_configure(self) -> None:
        """Hook appele apres chaque configuration (invalidation des caches)."""

    def _default_headers(self, credentials: ServerCredentials) -> dict[str, str]:
        """En-tetes envoyes avec chaque requete."""
        return {"Accept": "application/json"}

    def _default_params(self, credentials: ServerCredentials) -> dict[str, str]:
        """Parametres de requete envoyes avec chaque requete."""
        return {}

    async def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le (re)cree si necessaire (lazy init).

        Un client cree pour une configuration precedente est ferme.
        """
        if self._credentials is None:
            raise SourceConnectionError(NOT_CONFIGURED)

        if self._client is not None and (
            self._client.is_closed or self._client_credentials != self._credentials
        ):
            await self.close()

        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._credentials.server_url,
                headers=self._default_headers(self._credentials),
                params=self._default_params(self._credentials),
                timeout=self._timeout,
            )
            self._client_credentials = self._credentials
        return self._client

    async def _get_json(self, url: str, **kwargs) -> Any:
        """GET avec retry, retourne le corps JSON decode."""
        client = await self._get_client()
        response = await request_with_retry(
            client, "GET", url, max_attempts=self._max_attempts, **kwargs
        )
        return response.json()

    async def test_connection(self) -> ConnectionResult:
        if not self.is_configured:
            return ConnectionResult(success=False, error=NOT_CONFIGURED)
        try:
            await self._probe()
        except BACKEND_ERRORS as e:
            return ConnectionResult(success=False, error=describe_error(e))
        return ConnectionResult(success=True)

    async def check_movie(self, title: str, year: Optional[int]) -> CheckResult:
        if not self.is_configured:
            return CheckResult.not_found(error=NOT_CONFIGURED)
        try:
            items = await self._search(title.strip())
        except BACKEND_ERRORS as e:
            message = describe_error(e)
            logger.warning(f"Erreur de recherche {self.name} pour '{title}': {message}")
            return CheckResult.not_found(error=message)

        match = best_match(title, year, items, key=lambda item: (item.name, item.year))
        if match is None:
            return CheckResult.not_found()
        logger.debug(f"{self.name}: '{title}' trouve ({match.name}, {match.year})")
        return CheckResult(found=True, movie=match)

    @abstractmethod
    async def _probe(self) -> None:
        """
        Aller-retour minimal vers le serveur.

        Raises:
            httpx.HTTPError, SourceConnectionError: Si le serveur est injoignable
        """
        ...

    @abstractmethod
    async def _search(self, title: str) -> list[MediaItem]:
        """Recherche les films candidats (non filtres) pour un titre."""
        ...

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
        self._client_credentials = None


def parse_year(value: Any) -> Optional[int]:
    """Annee entiere depuis une valeur JSON (int, "2010", None)."""
    if value is None or value == "":
        return None
    try:
        return int(str(value)[:4])
    except ValueError:
        return None
