"""
Interface port pour les sites de listing de films.

Un IPageAdapter encapsule la connaissance du DOM d'un site : quels elements
representent un titre, comment en extraire titre et annee, ou ancrer
l'indicateur visuel. Les elements sont des bs4.Tag.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from bs4 import Tag


class IPageAdapter(ABC):
    """Contrat des adaptateurs de site."""

    @abstractmethod
    def can_handle(self, hostname: str) -> bool:
        """True si l'adaptateur gere ce nom d'hote."""
        ...

    @abstractmethod
    def get_target_selectors(self) -> list[str]:
        """Selecteurs CSS des cartes de titre (grille, liste, fiche...)."""
        ...

    @abstractmethod
    def extract_title(self, element: Tag) -> Optional[str]:
        """Titre de l'element, ou None si introuvable (element ignore)."""
        ...

    @abstractmethod
    def extract_year(self, element: Tag) -> Optional[int]:
        """Annee de l'element, ou None."""
        ...

    @abstractmethod
    def get_badge_parent(self, element: Tag) -> Optional[Tag]:
        """Element d'ancrage de l'indicateur."""
        ...

    @abstractmethod
    def get_badge_styles(self) -> Optional[dict[str, Any]]:
        """Styles specifiques de l'indicateur, ou None pour les styles par defaut."""
        ...

    @abstractmethod
    def should_process_element(self, element: Tag) -> bool:
        """Pre-filtre (ex: exclure les cartes sponsorisees)."""
        ...
