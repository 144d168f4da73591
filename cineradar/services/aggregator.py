"""
Agregateur : interrogation concurrente de toutes les sources actives.

Pour une requete (titre, annee), lance un check_movie() par source active,
tous avant la premiere suspension, puis attend que chacun soit termine
(point de jointure, pas de resultat partiel). Les echecs sont isoles par
source : une exception devient une MediaMatch found=False avec error, sans
annuler ni bloquer les autres sources.

Pas de timeout au niveau de l'agregateur : chaque adaptateur gere le sien.
"""

import asyncio
from typing import Optional

from loguru import logger

from cineradar.core.entities import MediaMatch, MediaQuery, QueryResult, RegisteredSource
from cineradar.services.source_registry import SourceRegistry


class Aggregator:
    """Moteur de requetes en eventail sur les sources actives."""

    def __init__(self, registry: SourceRegistry) -> None:
        self._registry = registry

    async def check_all_sources(self, title: str, year: Optional[int]) -> QueryResult:
        """
        Interroge toutes les sources actives pour un film.

        Args:
            title: Titre du film
            year: Annee de sortie (optionnelle)

        Returns:
            QueryResult avec une MediaMatch par source active, dans l'ordre
            des sources actives
        """
        query = MediaQuery(title=title, year=year)
        sources = self._registry.get_active_sources()
        if not sources:
            return QueryResult(query=query, matches=[])

        matches = await asyncio.gather(
            *(self._check_source(source, query) for source in sources)
        )
        result = QueryResult(query=query, matches=list(matches))
        logger.debug(
            f"'{title}' ({year}): trouve dans "
            f"{len(result.matching_sources)}/{len(sources)} source(s)"
        )
        return result

    async def _check_source(self, source: RegisteredSource, query: MediaQuery) -> MediaMatch:
        """Interroge une source, toute exception devient un resultat en erreur."""
        adapter = source.adapter
        try:
            outcome = await adapter.check_movie(query.title, query.year)
        except Exception as e:  # isolation par source
            logger.warning(f"Source {source.id} en erreur pour '{query.title}': {e}")
            return MediaMatch(
                source_id=source.id,
                source_name=adapter.name,
                found=False,
                error=str(e) or e.__class__.__name__,
            )

        return MediaMatch(
            source_id=source.id,
            source_name=adapter.name,
            found=outcome.found,
            item=outcome.movie if outcome.found else None,
            error=outcome.error,
        )
