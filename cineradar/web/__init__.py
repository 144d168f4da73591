"""Serveur HTTP local : remplace le script d'arriere-plan de l'extension."""
