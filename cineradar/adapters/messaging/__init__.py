"""
Transport CHECK_MOVIE et rendu des indicateurs.

- InProcessMessageChannel : appel direct du BackgroundService
- HttpMessageChannel : POST vers l'endpoint FastAPI /api/messages
- ConsoleIndicatorRenderer : affichage Rich (CLI)
- HtmlBadgeRenderer : injection d'un badge dans le document bs4
"""

from cineradar.adapters.messaging.channels import HttpMessageChannel, InProcessMessageChannel
from cineradar.adapters.messaging.renderers import ConsoleIndicatorRenderer, HtmlBadgeRenderer

__all__ = [
    "ConsoleIndicatorRenderer",
    "HtmlBadgeRenderer",
    "HttpMessageChannel",
    "InProcessMessageChannel",
]
