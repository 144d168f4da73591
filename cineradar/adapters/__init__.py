"""
Couche infrastructure : implementations concretes des ports.

- api/ : Sources serveur media (Emby, Jellyfin, Plex) via httpx
- filesystem/ : Sources fichiers locaux et partage reseau monte
- sites/ : Adaptateurs de sites de listing (IMDb, Netflix, YTS)
- storage/ : Stockage des identifiants
- messaging/ : Canal CHECK_MOVIE et rendu des indicateurs
- cli/ : Commandes Typer
"""
