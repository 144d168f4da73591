"""
Adaptateur IMDb (imdb.com).

- Fiche film: titre principal [data-testid="hero__primary-text"], annee
  dans la liste qui le suit
- Listes et carrousels: cartes .ipc-poster-card
"""

from typing import Optional

from bs4 import Tag

from cineradar.adapters.sites.base import BasePageAdapter, parse_leading_int, text_of

HERO_TESTID = "hero__primary-text"


class IMDBAdapter(BasePageAdapter):
    """Detection des films sur IMDb."""

    def can_handle(self, hostname: str) -> bool:
        return "imdb.com" in hostname

    def get_target_selectors(self) -> list[str]:
        return [f'[data-testid="{HERO_TESTID}"]', ".ipc-poster-card"]

    def extract_title(self, element: Tag) -> Optional[str]:
        if element.get("data-testid") == HERO_TESTID:
            return text_of(element)
        return text_of(element.select_one(".ipc-poster-card__title"))

    def extract_year(self, element: Tag) -> Optional[int]:
        # Seule la fiche (hero) affiche l'annee ; les cartes n'en ont pas
        if element.get("data-testid") != HERO_TESTID:
            return None
        # Equivalent de [data-testid="hero__primary-text"] + ul li a
        sibling = next((s for s in element.next_siblings if isinstance(s, Tag)), None)
        if sibling is None or sibling.name != "ul":
            return None
        return parse_leading_int(text_of(sibling.select_one("li a")))
