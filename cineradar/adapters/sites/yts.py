"""
Adaptateur YTS (yts.bz).

Trois dispositions:
- Grille de navigation: .browse-movie-wrap (titre/annee dans la carte)
- Fiche film: #movie-poster (titre/annee dans #movie-info)
- Films similaires: #similar-movies a, #movie-related a (attribut title
  au format "Titre (2010)")
"""

import re
from typing import Optional

from bs4 import Tag

from cineradar.adapters.sites.base import (
    BasePageAdapter,
    closest,
    document_of,
    parse_leading_int,
    text_of,
)

_TRAILING_YEAR = re.compile(r"\((\d{4})\)$")


class YTSAdapter(BasePageAdapter):
    """Detection des films sur YTS."""

    def can_handle(self, hostname: str) -> bool:
        return "yts.bz" in hostname

    def get_target_selectors(self) -> list[str]:
        return [".browse-movie-wrap", "#movie-poster", "#similar-movies a", "#movie-related a"]

    @staticmethod
    def _is_detail_poster(element: Tag) -> bool:
        return closest(element, "#movie-poster") is not None

    @staticmethod
    def _is_related(element: Tag) -> bool:
        return closest(element, "#similar-movies, #movie-related") is not None

    def extract_title(self, element: Tag) -> Optional[str]:
        if self._is_detail_poster(element):
            return text_of(document_of(element).select_one("#movie-info h1"))
        if self._is_related(element):
            title_attr = str(element.get("title") or "")
            return _TRAILING_YEAR.sub("", title_attr.strip()).strip() or None
        return text_of(element.select_one(".browse-movie-title"))

    def extract_year(self, element: Tag) -> Optional[int]:
        if self._is_detail_poster(element):
            return parse_leading_int(text_of(document_of(element).select_one("#movie-info h2")))
        if self._is_related(element):
            match = _TRAILING_YEAR.search(str(element.get("title") or "").strip())
            return int(match.group(1)) if match else None
        return parse_leading_int(text_of(element.select_one(".browse-movie-year")))

    def get_badge_parent(self, element: Tag) -> Optional[Tag]:
        if self._is_detail_poster(element) or self._is_related(element):
            return element
        return element.select_one(".browse-movie-link") or element
