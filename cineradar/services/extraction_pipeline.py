"""
Pipeline d'extraction : observation du DOM et verification des titres.

Machine a etats par element : Unseen -> Processed (etat terminal).

A chaque lot de mutations, le document est re-scanne avec les selecteurs
de l'adaptateur de site. Chaque element non encore traite est marque
Processed AVANT toute suspension (attribut CHECKED_ATTRIBUTE), ce qui
garantit au plus une requete par element meme si d'autres mutations
arrivent pendant la verification. Un element sans titre est marque et
jamais re-essaye.

Chaque verification est une tache asyncio suivie par le pipeline :
drain() les attend, aclose() les annule (fermeture de la page).
"""

import asyncio
from typing import Any, Iterable, Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from cineradar.core.entities import MediaMatch, MediaQuery
from cineradar.core.ports.pages import IPageAdapter
from cineradar.core.ports.rendering import CHECK_MOVIE, IIndicatorRenderer, IMessageChannel
from cineradar.services.site_registry import SiteAdapterRegistry

CHECKED_ATTRIBUTE = "data-cineradar-checked"

# Erreurs de parcours DOM d'un adaptateur de site sur une page inattendue
EXTRACTION_ERRORS = (AttributeError, TypeError, ValueError, IndexError)

_CLOSED = object()


def is_processed(element: Tag) -> bool:
    """True si l'element a deja ete traite."""
    return element.get(CHECKED_ATTRIBUTE) == "true"


def mark_processed(element: Tag) -> None:
    element[CHECKED_ATTRIBUTE] = "true"


class MutationFeed:
    """
    Source de notifications de mutation du DOM.

    L'hote (navigateur pilote, tests, CLI) appelle notify() a chaque
    mutation ; l'iteration asynchrone produit des lots (les notifications
    en attente sont regroupees). close() termine l'iteration.

    Example:
        feed = MutationFeed()
        feed.notify()
        feed.close()
        async for batch in feed:
            ...
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closed

    def notify(self, nodes: Iterable[Tag] = ()) -> None:
        """
        Signale une mutation.

        Raises:
            RuntimeError: Si le flux est ferme
        """
        if self._closed:
            raise RuntimeError("Mutation feed is closed")
        self._queue.put_nowait(list(nodes))

    def close(self) -> None:
        """Termine le flux apres les notifications en attente."""
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "MutationFeed":
        return self

    async def __anext__(self) -> list[Tag]:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            self._exhausted = True
            raise StopAsyncIteration

        batch: list[Tag] = list(item)
        while not self._queue.empty():
            pending = self._queue.get_nowait()
            if pending is _CLOSED:
                self._exhausted = True
                break
            batch.extend(pending)
        return batch


class ExtractionPipeline:
    """
    Extraction idempotente des titres d'une page et verification.

    Args:
        document: Document HTML (BeautifulSoup) observe
        adapter: Adaptateur du site de la page
        channel: Canal vers le contexte d'arriere-plan
        renderer: Rendu de l'indicateur
    """

    def __init__(
        self,
        document: BeautifulSoup,
        adapter: IPageAdapter,
        channel: IMessageChannel,
        renderer: IIndicatorRenderer,
    ) -> None:
        self._document = document
        self._adapter = adapter
        self._channel = channel
        self._renderer = renderer
        self._tasks: set[asyncio.Task] = set()

    @property
    def adapter(self) -> IPageAdapter:
        return self._adapter

    @property
    def pending(self) -> int:
        """Nombre de verifications en cours."""
        return len(self._tasks)

    def scan(self) -> list[asyncio.Task]:
        """
        Parcourt le document et lance une verification par nouvel element.

        Synchrone : tous les marquages ont lieu avant la premiere suspension.
        Doit etre appele depuis la boucle d'evenements.

        Returns:
            Taches lancees pour ce scan
        """
        spawned: list[asyncio.Task] = []
        for selector in self._adapter.get_target_selectors():
            for element in self._document.select(selector):
                if is_processed(element):
                    continue
                mark_processed(element)

                query = self._build_query(element)
                if query is None:
                    continue

                task = asyncio.create_task(self._check_element(element, query))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)
                spawned.append(task)
        return spawned

    def _build_query(self, element: Tag) -> Optional[MediaQuery]:
        """MediaQuery de l'element, ou None s'il doit etre ignore."""
        try:
            if not self._adapter.should_process_element(element):
                return None
            title = self._adapter.extract_title(element)
            year = self._adapter.extract_year(element)
        except EXTRACTION_ERRORS as e:
            logger.warning(f"Extraction impossible sur <{element.name}>: {e}")
            return None

        if not title or not title.strip():
            return None
        return MediaQuery(title=title.strip(), year=year)

    async def _check_element(self, element: Tag, query: MediaQuery) -> None:
        """Envoie CHECK_MOVIE et dessine l'indicateur si trouve."""
        response = await self._channel.send(
            {"type": CHECK_MOVIE, "title": query.title, "year": query.year}
        )
        if not response.get("success"):
            logger.debug(f"Verification echouee pour '{query.title}': {response.get('error')}")
            return
        if not response.get("found"):
            return

        matching = [
            MediaMatch.from_dict(entry)
            for entry in response.get("results", [])
            if entry.get("found")
        ]
        anchor = self._adapter.get_badge_parent(element)
        if anchor is None:
            return
        self._renderer.render(anchor, matching)

    async def process_batch(self, batch: Iterable[Tag] = ()) -> list[asyncio.Task]:
        """
        Traite un lot de mutations.

        Les noeuds du lot ne sont pas filtres : le document entier est
        re-scanne, les elements deja traites sont ignores.
        """
        return self.scan()

    async def run(self, feed: MutationFeed) -> None:
        """Consomme le flux de mutations puis attend les verifications en cours."""
        try:
            async for batch in feed:
                await self.process_batch(batch)
            await self.drain()
        except asyncio.CancelledError:
            await self.aclose()
            raise

    async def drain(self) -> None:
        """Attend toutes les verifications en cours (erreurs journalisees)."""
        while self._tasks:
            tasks = list(self._tasks)
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for outcome in results:
                if isinstance(outcome, Exception):
                    logger.error(f"Verification d'element en erreur: {outcome}")

    async def aclose(self) -> None:
        """Annule les verifications en cours (fermeture de la page)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()


def for_page(
    document: BeautifulSoup,
    hostname: str,
    registry: SiteAdapterRegistry,
    channel: IMessageChannel,
    renderer: IIndicatorRenderer,
) -> Optional[ExtractionPipeline]:
    """Pipeline pour la page, ou None si aucun site ne gere ce nom d'hote."""
    adapter = registry.get_adapter(hostname)
    if adapter is None:
        logger.debug(f"Aucun adaptateur de site pour {hostname}")
        return None
    return ExtractionPipeline(document, adapter, channel, renderer)
