"""
Registre des sources de videotheque.

SourceRegistry est le catalogue des adaptateurs enregistres et de leur etat
d'activation : c'est la seule reference pour savoir quelles sources sont
interrogeables. Une instance unique est creee par le container DI et
injectee dans les consommateurs (agregateur, CLI, web).

Cycle de vie d'une source:
    register() -> enable_source() [lecture identifiants + configure()] -> active
    disable_source() -> inactive (configuration conservee)
    enable_source() -> active a nouveau, SANS relecture des identifiants
                       (sauf refresh=True ou refresh_on_enable)
    unregister() -> retiree (implicitement inactive)
"""

import warnings
from typing import Any, Optional

from loguru import logger

from cineradar.core.entities import RegisteredSource
from cineradar.core.errors import (
    ConfigError,
    CredentialStoreError,
    DuplicateSourceError,
    SourceNotFoundError,
)
from cineradar.core.ports.credentials import ICredentialStore
from cineradar.core.ports.sources import ISourceAdapter

# Cle du drapeau d'activation stocke a cote des identifiants
ENABLED_KEY = "enabled"


class SourceRegistry:
    """
    Catalogue des sources avec leur etat actif/inactif.

    Attributes:
        allow_replace: Si True, register() remplace un id existant par defaut
        refresh_on_enable: Si True, enable_source() relit toujours les identifiants

    Example:
        registry = SourceRegistry(credential_store=store)
        registry.register("emby", EmbySourceAdapter())
        await registry.enable_source("emby")
        for source in registry.get_active_sources():
            print(source.id, source.adapter.name)
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        allow_replace: bool = False,
        refresh_on_enable: bool = False,
    ) -> None:
        self._store = credential_store
        self.allow_replace = allow_replace
        self.refresh_on_enable = refresh_on_enable
        # dict conserve l'ordre d'enregistrement
        self._adapters: dict[str, ISourceAdapter] = {}
        self._active: set[str] = set()
        self._configured: set[str] = set()

    def register(
        self, source_id: str, adapter: ISourceAdapter, *, replace: Optional[bool] = None
    ) -> None:
        """
        Enregistre un adaptateur sous un identifiant.

        Un remplacement conserve la position d'enregistrement et rend la
        source inactive (le nouvel adaptateur n'est pas configure).

        Args:
            source_id: Identifiant unique de la source
            adapter: Adaptateur a enregistrer
            replace: Autorise le remplacement d'un id existant
                     (defaut: allow_replace)

        Raises:
            DuplicateSourceError: Si l'id existe deja sans remplacement autorise
        """
        allowed = self.allow_replace if replace is None else replace
        if source_id in self._adapters:
            if not allowed:
                raise DuplicateSourceError(source_id)
            logger.info(f"Remplacement de la source {source_id}")
            self._active.discard(source_id)
            self._configured.discard(source_id)
        self._adapters[source_id] = adapter

    def unregister(self, source_id: str) -> None:
        """
        Retire une source du registre (elle devient inactive).

        Raises:
            SourceNotFoundError: Si l'id est inconnu
        """
        if source_id not in self._adapters:
            raise SourceNotFoundError(source_id)
        del self._adapters[source_id]
        self._active.discard(source_id)
        self._configured.discard(source_id)

    def get_adapter(self, source_id: str) -> Optional[ISourceAdapter]:
        """Adaptateur enregistre sous cet id, ou None."""
        return self._adapters.get(source_id)

    def _require_adapter(self, source_id: str) -> ISourceAdapter:
        adapter = self.get_adapter(source_id)
        if adapter is None:
            raise SourceNotFoundError(source_id)
        return adapter

    def get_all_adapters(self) -> list[RegisteredSource]:
        """Toutes les sources enregistrees, dans l'ordre d'enregistrement."""
        return [RegisteredSource(id=sid, adapter=a) for sid, a in self._adapters.items()]

    def is_active(self, source_id: str) -> bool:
        return source_id in self._active

    async def enable_source(self, source_id: str, *, refresh: Optional[bool] = None) -> None:
        """
        Active une source apres l'avoir configuree.

        La source n'est ajoutee a l'ensemble actif qu'une fois configure()
        termine avec succes. Une source deja configuree (desactivee puis
        reactivee) est simplement re-marquee active sans relire le stockage,
        sauf si refresh (ou refresh_on_enable) est vrai.

        Raises:
            SourceNotFoundError: Si l'id est inconnu
            ConfigError: Si les identifiants stockes sont invalides
        """
        adapter = self._require_adapter(source_id)
        must_refresh = self.refresh_on_enable if refresh is None else refresh

        if source_id in self._configured and adapter.is_configured and not must_refresh:
            self._active.add(source_id)
            logger.info(f"Source {source_id} reactivee")
            return

        credentials = await self.get_source_credentials(source_id)
        adapter.configure(credentials)
        self._configured.add(source_id)
        self._active.add(source_id)
        logger.info(f"Source {source_id} activee ({adapter.name})")

    async def disable_source(self, source_id: str) -> None:
        """
        Desactive une source sans effacer sa configuration.

        Raises:
            SourceNotFoundError: Si l'id est inconnu
        """
        self._require_adapter(source_id)
        self._active.discard(source_id)
        logger.info(f"Source {source_id} desactivee")

    def get_active_sources(self) -> list[RegisteredSource]:
        """Sources actives, dans l'ordre d'enregistrement (pas de priorite)."""
        return [
            RegisteredSource(id=sid, adapter=adapter)
            for sid, adapter in self._adapters.items()
            if sid in self._active
        ]

    def get_active_source(self) -> Optional[ISourceAdapter]:
        """
        Premiere source active (ancienne API mono-source).

        Deprecated: utiliser get_active_sources().
        """
        warnings.warn(
            "get_active_source() is deprecated, use get_active_sources()",
            DeprecationWarning,
            stacklevel=2,
        )
        active = self.get_active_sources()
        return active[0].adapter if active else None

    async def get_source_credentials(self, source_id: str) -> dict[str, Any]:
        """Identifiants stockes d'une source (sans le drapeau enabled), {} si absents."""
        stored = await self._store.get(source_id)
        return {key: value for key, value in stored.items() if key != ENABLED_KEY}

    async def save_source_credentials(
        self, source_id: str, credentials: dict[str, Any], enabled: bool = False
    ) -> None:
        """Enregistre les identifiants d'une source et son drapeau enabled."""
        fields = {key: value for key, value in credentials.items() if key != ENABLED_KEY}
        await self._store.set(source_id, fields, enabled)
        logger.debug(f"Identifiants enregistres pour {source_id} (enabled={enabled})")

    async def restore(self) -> list[str]:
        """
        Active toutes les sources marquees enabled dans le stockage.

        Une source aux identifiants invalides est ignoree (avertissement),
        sans empecher l'activation des autres. Un stockage illisible
        n'active aucune source.

        Returns:
            Identifiants des sources activees
        """
        try:
            stored = await self._store.all()
        except CredentialStoreError as e:
            logger.error(f"Restauration des sources impossible: {e}")
            return []
        enabled: list[str] = []
        for source_id in self._adapters:
            if not stored.get(source_id, {}).get(ENABLED_KEY):
                continue
            try:
                await self.enable_source(source_id)
            except (ConfigError, CredentialStoreError) as e:
                logger.warning(f"Source {source_id} non activee: {e}")
                continue
            enabled.append(source_id)
        return enabled

    async def close(self) -> None:
        """Ferme tous les adaptateurs enregistres (clients HTTP)."""
        for adapter in self._adapters.values():
            await adapter.close()
