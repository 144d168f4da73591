"""
Tests de PlexSourceAdapter (jeton X-Plex-Token, reponses MediaContainer).
"""

import httpx
import pytest
import respx

from cineradar.adapters.api import PlexSourceAdapter
from tests.fixtures.plex_responses import (
    PLEX_EMPTY_RESPONSE,
    PLEX_IDENTITY_RESPONSE,
    PLEX_INCEPTION_RESPONSE,
)

SERVER = "http://plex.local:32400"


@pytest.fixture
def plex() -> PlexSourceAdapter:
    adapter = PlexSourceAdapter(max_attempts=1)
    adapter.configure({"serverUrl": SERVER, "token": "plex-token"})
    return adapter


class TestPlexCredentials:
    def test_token_field(self) -> None:
        result = PlexSourceAdapter().validate_credentials({"serverUrl": SERVER})
        assert result.errors == ("Plex Token is required",)

    def test_required_fields(self) -> None:
        keys = [f.key for f in PlexSourceAdapter().get_required_fields()]
        assert keys == ["serverUrl", "token"]


class TestPlexConnection:
    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_success(self, plex: PlexSourceAdapter) -> None:
        route = respx.get(f"{SERVER}/").mock(
            return_value=httpx.Response(200, json=PLEX_IDENTITY_RESPONSE)
        )

        result = await plex.test_connection()

        assert result.success is True
        request = route.calls.last.request
        assert request.headers["X-Plex-Token"] == "plex-token"
        assert request.headers["Accept"] == "application/json"
        await plex.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_connection_invalid_response(self, plex: PlexSourceAdapter) -> None:
        respx.get(f"{SERVER}/").mock(return_value=httpx.Response(200, json={"status": "ok"}))

        result = await plex.test_connection()

        assert result.success is False
        assert result.error == "Invalid Plex server response"
        await plex.close()


class TestPlexCheckMovie:
    @pytest.mark.asyncio
    @respx.mock
    async def test_inception_is_found(self, plex: PlexSourceAdapter) -> None:
        route = respx.get(f"{SERVER}/search").mock(
            return_value=httpx.Response(200, json=PLEX_INCEPTION_RESPONSE)
        )

        result = await plex.check_movie("Inception", 2010)

        assert result.found is True
        assert result.movie.id == "1234"
        assert result.movie.name == "Inception"
        params = route.calls.last.request.url.params
        assert params["query"] == "Inception"
        assert params["type"] == "1"
        await plex.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_search(self, plex: PlexSourceAdapter) -> None:
        respx.get(f"{SERVER}/search").mock(
            return_value=httpx.Response(200, json=PLEX_EMPTY_RESPONSE)
        )

        result = await plex.check_movie("Inception", 2010)

        assert result.found is False
        assert result.error is None
        await plex.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_reconfigure_uses_new_server(self, plex: PlexSourceAdapter) -> None:
        respx.get(f"{SERVER}/search").mock(return_value=httpx.Response(500))
        other = respx.get("http://nas:32400/search").mock(
            return_value=httpx.Response(200, json=PLEX_INCEPTION_RESPONSE)
        )
        await plex.check_movie("Inception", 2010)

        plex.configure({"serverUrl": "http://nas:32400", "token": "other"})
        result = await plex.check_movie("Inception", 2010)

        assert result.found is True
        assert other.calls.last.request.headers["X-Plex-Token"] == "other"
        await plex.close()
