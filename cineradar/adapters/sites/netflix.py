"""
Adaptateur Netflix (netflix.com).

- Vignettes: .title-card (titre dans .fallback-text)
- Vue detaillee: .jawBoneContent (logo .title-logo[alt] ou .title-title)
"""

from typing import Optional

from bs4 import Tag

from cineradar.adapters.sites.base import BasePageAdapter, text_of


class NetflixAdapter(BasePageAdapter):
    """Detection des films sur Netflix."""

    def can_handle(self, hostname: str) -> bool:
        return "netflix.com" in hostname

    def get_target_selectors(self) -> list[str]:
        return [".title-card", ".jawBoneContent"]

    def extract_title(self, element: Tag) -> Optional[str]:
        card_title = text_of(element.select_one(".fallback-text"))
        if card_title:
            return card_title

        logo = element.select_one(".title-logo")
        if logo is not None and logo.get("alt"):
            return str(logo["alt"]).strip() or None
        return text_of(element.select_one(".title-title"))

    def get_badge_parent(self, element: Tag) -> Optional[Tag]:
        anchor = element.select_one(".boxart-container, .jawBoneContent")
        if anchor is None and "jawBoneContent" in (element.get("class") or []):
            return element
        return anchor
