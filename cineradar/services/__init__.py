"""
Couche application : orchestration des sources et des pages.

- fuzzy_matcher : correspondance approximative titre/annee
- source_registry : catalogue des sources et cycle de vie des identifiants
- aggregator : interrogation concurrente de toutes les sources actives
- site_registry : selection de l'adaptateur de site par nom d'hote
- extraction_pipeline : observation du DOM et extraction idempotente
- background : traitement des messages CHECK_MOVIE
"""
