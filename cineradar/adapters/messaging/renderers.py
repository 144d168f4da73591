"""
Rendus de l'indicateur "deja dans la videotheque".

- ConsoleIndicatorRenderer : une ligne Rich par element trouve
- HtmlBadgeRenderer : ajoute <div class="cineradar-badge"> a l'ancre,
  avec les styles specifiques du site si fournis
"""

from typing import Any, Optional

from bs4 import BeautifulSoup, Tag
from rich.console import Console

from cineradar.core.entities import MediaMatch
from cineradar.core.ports.rendering import IIndicatorRenderer

BADGE_CLASS = "cineradar-badge"


def _describe(match: MediaMatch) -> str:
    if match.item is None:
        return match.source_name
    year = f" ({match.item.year})" if match.item.year else ""
    return f"{match.source_name}: {match.item.name}{year}"


class ConsoleIndicatorRenderer(IIndicatorRenderer):
    """Affiche les elements trouves dans la console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()
        self.rendered = 0

    def render(self, anchor: Tag, matching_sources: list[MediaMatch]) -> None:
        label = " ".join(anchor.get_text().split())[:60] or f"<{anchor.name}>"
        sources = ", ".join(_describe(m) for m in matching_sources)
        self._console.print(f"  [green]✓[/green] {label} [dim]({sources})[/dim]")
        self.rendered += 1


class HtmlBadgeRenderer(IIndicatorRenderer):
    """Injecte un badge dans le document HTML."""

    def __init__(self, document: BeautifulSoup, styles: Optional[dict[str, Any]] = None) -> None:
        self._document = document
        self._styles = styles or {}

    def render(self, anchor: Tag, matching_sources: list[MediaMatch]) -> None:
        badge = self._document.new_tag("div")
        badge["class"] = BADGE_CLASS
        badge["title"] = ", ".join(_describe(m) for m in matching_sources)
        if self._styles:
            badge["style"] = "; ".join(f"{key}: {value}" for key, value in self._styles.items())

        style = anchor.get("style", "")
        if "position" not in style:
            anchor["style"] = f"{style}; position: relative".lstrip("; ")
        anchor.append(badge)
