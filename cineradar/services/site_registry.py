"""
Registre des adaptateurs de site.

Le premier adaptateur enregistre dont can_handle(hostname) est vrai
l'emporte : l'ordre d'enregistrement fixe la priorite.
"""

from typing import Optional

from cineradar.core.ports.pages import IPageAdapter


class SiteAdapterRegistry:
    """Liste ordonnee des adaptateurs de site."""

    def __init__(self) -> None:
        self._adapters: list[IPageAdapter] = []

    def register(self, adapter: IPageAdapter) -> None:
        """
        Enregistre un adaptateur de site.

        Raises:
            TypeError: Si l'objet n'expose pas can_handle()
        """
        if adapter is None or not callable(getattr(adapter, "can_handle", None)):
            raise TypeError("Adapter must be a valid adapter instance")
        self._adapters.append(adapter)

    def get_adapter(self, hostname: str) -> Optional[IPageAdapter]:
        """Premier adaptateur gerant ce nom d'hote, ou None."""
        if not hostname:
            return None
        return next((a for a in self._adapters if a.can_handle(hostname)), None)

    def get_all_adapters(self) -> list[IPageAdapter]:
        return list(self._adapters)
