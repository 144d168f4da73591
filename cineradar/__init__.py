"""
CineRadar - Detection des films deja presents dans vos videotheques.

Ce package verifie, pour chaque titre affiche sur un site de listing
(IMDb, Netflix, YTS...), s'il existe deja dans une ou plusieurs
videotheques personnelles (serveurs Emby/Jellyfin/Plex, fichiers locaux,
partages reseau).

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, erreurs)
- services/ : Couche application (registres, agregation, extraction)
- adapters/ : Couche infrastructure (sources, sites, CLI, stockage, canal)
"""

__version__ = "0.1.0"
