"""
Container d'injection de dependances via dependency-injector.

Construit une seule fois au demarrage du processus (CLI ou web) et fournit
les instances uniques du registre des sources, de l'agregateur et du
registre des sites.
"""

from dependency_injector import containers, providers

from .adapters.api import EmbySourceAdapter, JellyfinSourceAdapter, PlexSourceAdapter
from .adapters.filesystem import LocalSourceAdapter, NetworkShareSourceAdapter
from .adapters.messaging import InProcessMessageChannel
from .adapters.sites import DEFAULT_SITE_ADAPTERS
from .adapters.storage import JsonCredentialStore
from .config import Settings
from .core.ports.credentials import ICredentialStore
from .core.ports.sources import ISourceAdapter
from .services.aggregator import Aggregator
from .services.background import BackgroundService
from .services.site_registry import SiteAdapterRegistry
from .services.source_registry import SourceRegistry


def build_source_registry(
    credential_store: ICredentialStore,
    adapters: dict[str, ISourceAdapter],
    allow_replace: bool = False,
    refresh_on_enable: bool = False,
) -> SourceRegistry:
    """Cree le registre et enregistre les sources dans l'ordre fourni."""
    registry = SourceRegistry(
        credential_store=credential_store,
        allow_replace=allow_replace,
        refresh_on_enable=refresh_on_enable,
    )
    for source_id, adapter in adapters.items():
        registry.register(source_id, adapter)
    return registry


def build_site_registry() -> SiteAdapterRegistry:
    """Cree le registre des sites (Netflix, IMDb, YTS)."""
    registry = SiteAdapterRegistry()
    for adapter_cls in DEFAULT_SITE_ADAPTERS:
        registry.register(adapter_cls())
    return registry


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        registry = container.source_registry()
        await registry.restore()
        result = await container.aggregator().check_all_sources("Heat", 1995)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    credential_store = providers.Singleton(
        JsonCredentialStore,
        path=config.provided.credentials_file,
    )

    # Sources - une instance par id de source integre
    emby_source = providers.Singleton(
        EmbySourceAdapter,
        timeout=config.provided.request_timeout,
        max_attempts=config.provided.retry_attempts,
    )
    jellyfin_source = providers.Singleton(
        JellyfinSourceAdapter,
        timeout=config.provided.request_timeout,
        max_attempts=config.provided.retry_attempts,
    )
    plex_source = providers.Singleton(
        PlexSourceAdapter,
        timeout=config.provided.request_timeout,
        max_attempts=config.provided.retry_attempts,
    )
    local_source = providers.Singleton(
        LocalSourceAdapter,
        cache_ttl=config.provided.file_cache_ttl,
    )
    network_source = providers.Singleton(
        NetworkShareSourceAdapter,
        cache_ttl=config.provided.file_cache_ttl,
        probe_timeout=config.provided.share_probe_timeout,
    )

    source_adapters = providers.Dict(
        emby=emby_source,
        jellyfin=jellyfin_source,
        plex=plex_source,
        local=local_source,
        network=network_source,
    )

    # Registre unique des sources
    source_registry = providers.Singleton(
        build_source_registry,
        credential_store=credential_store,
        adapters=source_adapters,
        allow_replace=config.provided.allow_source_replace,
        refresh_on_enable=config.provided.refresh_on_enable,
    )

    aggregator = providers.Singleton(Aggregator, registry=source_registry)
    background_service = providers.Singleton(BackgroundService, aggregator=aggregator)
    message_channel = providers.Singleton(
        InProcessMessageChannel, background=background_service
    )

    # Registre des sites (stateless - Singleton)
    site_registry = providers.Singleton(build_site_registry)
