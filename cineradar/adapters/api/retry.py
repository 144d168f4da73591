"""
Mecanisme de retry avec backoff exponentiel pour les serveurs media.

Les reponses 429 (rate limiting) et 503 (serveur en cours de demarrage)
sont relancees. Le delai suit le header Retry-After quand le serveur le
fournit, sinon un backoff exponentiel avec jitter.

Usage:
    response = await request_with_retry(client, "GET", "/Users")
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)
from tenacity.wait import wait_base

# Codes HTTP relances automatiquement
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({429, 503})


class RateLimitError(Exception):
    """
    Exception levee quand le serveur repond 429 ou 503.

    Attributes:
        status_code: Code HTTP recu
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None, status_code: int = 429) -> None:
        self.retry_after = retry_after
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Retry-After en secondes (les dates HTTP sont ignorees)."""
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


class wait_retry_after(wait_base):
    """
    Attente tenacity : Retry-After du serveur s'il est fourni, sinon backoff.

    Le delai annonce par le serveur est borne par max_wait.
    """

    def __init__(self, max_wait: float, fallback: wait_base) -> None:
        self.max_wait = max_wait
        self.fallback = fallback

    def __call__(self, retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, self.max_wait))
        return self.fallback(retry_state)


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.debug(
        f"{error} - tentative {retry_state.attempt_number}, nouvel essai dans {delay:.1f}s"
    )


def with_retry(max_attempts: int = 3, max_wait: int = 30):
    """
    Decorateur : relance sur RateLimitError (429/503).

    Args:
        max_attempts: Tentatives au total, la premiere incluse
        max_wait: Plafond de l'attente entre deux tentatives (secondes)
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(
            max_wait, fallback=wait_random_exponential(multiplier=1, min=1, max=max_wait)
        ),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    max_wait: int = 30,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429/503.

    Les autres erreurs HTTP (4xx, 5xx) sont propagees immediatement.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL (relative a base_url du client)
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429/503 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Erreurs reseau (timeout, connexion refusee)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RateLimitError(
                _parse_retry_after(response.headers.get("Retry-After")),
                status_code=response.status_code,
            )
        response.raise_for_status()
        return response

    return await _do_request()
