"""
Tests du pipeline d'extraction : idempotence, rendu, flux de mutations.
"""

import asyncio
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from cineradar.adapters.sites import IMDBAdapter, YTSAdapter, parse_document
from cineradar.core.entities import MediaMatch
from cineradar.core.ports.rendering import IIndicatorRenderer, IMessageChannel
from cineradar.services.extraction_pipeline import (
    CHECKED_ATTRIBUTE,
    ExtractionPipeline,
    MutationFeed,
    for_page,
)
from cineradar.services.site_registry import SiteAdapterRegistry
from tests.fixtures.pages import IMDB_TITLE_PAGE, YTS_BROWSE_PAGE


class RecordingChannel(IMessageChannel):
    """Canal qui enregistre les messages et trouve les titres connus."""

    def __init__(self, known: Optional[set[str]] = None, delay: float = 0.0) -> None:
        self.known = known or set()
        self.delay = delay
        self.sent: list[dict[str, Any]] = []

    async def send(self, message: dict[str, Any]) -> dict[str, Any]:
        self.sent.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        found = message["title"] in self.known
        results = [
            {
                "sourceId": "plex",
                "sourceName": "Plex",
                "found": found,
                "item": {"id": "1", "name": message["title"], "year": message["year"]},
            }
        ]
        return {"success": True, "found": found, "results": results}


@pytest.fixture
def renderer() -> MagicMock:
    return MagicMock(spec=IIndicatorRenderer)


class TestScan:
    @pytest.mark.asyncio
    async def test_sends_one_check_per_element(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        channel = RecordingChannel()
        pipeline = ExtractionPipeline(document, IMDBAdapter(), channel, renderer)

        pipeline.scan()
        await pipeline.drain()

        assert channel.sent == [
            {"type": "CHECK_MOVIE", "title": "Inception", "year": 2010},
            {"type": "CHECK_MOVIE", "title": "Interstellar", "year": None},
            {"type": "CHECK_MOVIE", "title": "The Prestige", "year": None},
        ]

    @pytest.mark.asyncio
    async def test_elements_are_marked_before_check_completes(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        pipeline = ExtractionPipeline(
            document, IMDBAdapter(), RecordingChannel(delay=0.1), renderer
        )

        tasks = pipeline.scan()

        assert len(tasks) == 3
        assert pipeline.pending == 3
        marked = document.select(f"[{CHECKED_ATTRIBUTE}]")
        assert len(marked) == 3
        await pipeline.drain()
        assert pipeline.pending == 0

    @pytest.mark.asyncio
    async def test_rescan_is_idempotent(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        channel = RecordingChannel()
        pipeline = ExtractionPipeline(document, IMDBAdapter(), channel, renderer)

        pipeline.scan()
        pipeline.scan()
        await pipeline.drain()

        assert len(channel.sent) == 3

    @pytest.mark.asyncio
    async def test_renders_only_found_titles(self, renderer: MagicMock) -> None:
        document = parse_document(YTS_BROWSE_PAGE)
        pipeline = ExtractionPipeline(
            document, YTSAdapter(), RecordingChannel(known={"Tenet"}), renderer
        )

        pipeline.scan()
        await pipeline.drain()

        renderer.render.assert_called_once()
        anchor, matches = renderer.render.call_args.args
        assert "browse-movie-link" in anchor["class"]
        assert anchor["href"] == "/movies/tenet-2020"
        assert matches == [
            MediaMatch.from_dict(
                {
                    "sourceId": "plex",
                    "sourceName": "Plex",
                    "found": True,
                    "item": {"id": "1", "name": "Tenet", "year": 2020},
                }
            )
        ]

    @pytest.mark.asyncio
    async def test_element_without_title_is_marked_and_skipped(self, renderer: MagicMock) -> None:
        document = parse_document('<div class="ipc-poster-card"><img/></div>')
        channel = RecordingChannel()
        pipeline = ExtractionPipeline(document, IMDBAdapter(), channel, renderer)

        assert pipeline.scan() == []
        assert pipeline.scan() == []
        assert channel.sent == []
        assert document.div[CHECKED_ATTRIBUTE] == "true"

    @pytest.mark.asyncio
    async def test_failed_response_renders_nothing(self, renderer: MagicMock) -> None:
        class FailingChannel(IMessageChannel):
            async def send(self, message):
                return {"success": False, "found": False, "error": "offline"}

        document = parse_document(YTS_BROWSE_PAGE)
        pipeline = ExtractionPipeline(document, YTSAdapter(), FailingChannel(), renderer)

        pipeline.scan()
        await pipeline.drain()

        renderer.render.assert_not_called()


class TestMutationFeed:
    @pytest.mark.asyncio
    async def test_pending_notifications_are_coalesced(self) -> None:
        feed = MutationFeed()
        feed.notify()
        feed.notify()
        feed.close()

        batches = [batch async for batch in feed]

        assert batches == [[]]

    def test_notify_after_close_raises(self) -> None:
        feed = MutationFeed()
        feed.close()
        with pytest.raises(RuntimeError):
            feed.notify()


class TestRun:
    @pytest.mark.asyncio
    async def test_two_notifications_send_once_per_element(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        channel = RecordingChannel(delay=0.05)
        pipeline = ExtractionPipeline(document, IMDBAdapter(), channel, renderer)
        feed = MutationFeed()

        runner = asyncio.create_task(pipeline.run(feed))
        feed.notify()
        await asyncio.sleep(0)
        feed.notify()
        feed.close()
        await runner

        assert sorted(m["title"] for m in channel.sent) == [
            "Inception",
            "Interstellar",
            "The Prestige",
        ]

    @pytest.mark.asyncio
    async def test_inserted_element_is_checked_on_next_mutation(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        channel = RecordingChannel()
        pipeline = ExtractionPipeline(document, IMDBAdapter(), channel, renderer)
        feed = MutationFeed()
        runner = asyncio.create_task(pipeline.run(feed))

        feed.notify()
        await asyncio.sleep(0.01)
        card = parse_document(
            '<div class="ipc-poster-card"><span class="ipc-poster-card__title">Memento</span></div>'
        ).div
        document.select_one(".more-like-this").append(card)
        feed.notify([card])
        feed.close()
        await runner

        assert [m["title"] for m in channel.sent].count("Memento") == 1
        assert len(channel.sent) == 4

    @pytest.mark.asyncio
    async def test_aclose_cancels_pending_checks(self, renderer: MagicMock) -> None:
        document = parse_document(IMDB_TITLE_PAGE)
        pipeline = ExtractionPipeline(
            document, IMDBAdapter(), RecordingChannel(known={"Inception"}, delay=5), renderer
        )
        pipeline.scan()

        await pipeline.aclose()

        assert pipeline.pending == 0
        renderer.render.assert_not_called()


class TestForPage:
    def test_returns_none_for_unsupported_host(self, renderer: MagicMock) -> None:
        registry = SiteAdapterRegistry()
        registry.register(IMDBAdapter())
        document = parse_document("<html></html>")

        assert for_page(document, "example.org", registry, RecordingChannel(), renderer) is None

    def test_builds_pipeline_with_matching_adapter(self, renderer: MagicMock) -> None:
        registry = SiteAdapterRegistry()
        registry.register(IMDBAdapter())
        document = parse_document(IMDB_TITLE_PAGE)

        pipeline = for_page(document, "www.imdb.com", registry, RecordingChannel(), renderer)

        assert isinstance(pipeline.adapter, IMDBAdapter)
