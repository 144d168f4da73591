"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites) et erreurs.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (httpx, bs4, disque).

Sous-packages :
- entities/ : Entités et objets valeur (requetes, correspondances, sources)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
"""
