"""
Base des adaptateurs de site et utilitaires de parcours DOM (bs4).

BasePageAdapter fournit les comportements par defaut:
- extract_year: None
- get_badge_parent: l'element lui-meme
- get_badge_styles: None (styles par defaut)
- should_process_element: True
"""

import re
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from cineradar.core.ports.pages import IPageAdapter

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def text_of(element: Optional[Tag]) -> Optional[str]:
    """Texte de l'element, espaces normalises, ou None."""
    if element is None:
        return None
    text = " ".join(element.get_text().split())
    return text or None


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """Entier en tete de texte ("2010-2015" -> 2010), None sinon."""
    if not text:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def document_of(element: Tag) -> Tag:
    """Racine (document) contenant l'element."""
    root = element
    while root.parent is not None:
        root = root.parent
    return root


def closest(element: Tag, selector: str) -> Optional[Tag]:
    """Element lui-meme ou premier ancetre correspondant au selecteur."""
    return element.css.closest(selector)


class BasePageAdapter(IPageAdapter):
    """Adaptateur de site avec les comportements par defaut."""

    def extract_year(self, element: Tag) -> Optional[int]:
        return None

    def get_badge_parent(self, element: Tag) -> Optional[Tag]:
        return element

    def get_badge_styles(self) -> Optional[dict[str, Any]]:
        return None

    def should_process_element(self, element: Tag) -> bool:
        return True


def parse_document(html: str) -> BeautifulSoup:
    """Parse une page HTML."""
    return BeautifulSoup(html, "html.parser")
