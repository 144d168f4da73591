"""
Commandes CLI : gestion des sources, verification d'un titre, scan de page.
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from cineradar.adapters.cli.helpers import (
    console,
    parse_assignments,
    suppress_loguru,
    with_container,
)
from cineradar.adapters.messaging import (
    ConsoleIndicatorRenderer,
    HtmlBadgeRenderer,
    HttpMessageChannel,
)
from cineradar.adapters.sites import parse_document
from cineradar.core.errors import ConfigError, SourceNotFoundError
from cineradar.services.extraction_pipeline import MutationFeed, for_page

sources_app = typer.Typer(help="Gestion des sources de videotheque")


def _fail(message: str) -> None:
    console.print(f"[red]Erreur:[/red] {message}")
    raise typer.Exit(code=1)


# ============================================================================
# sources
# ============================================================================


@sources_app.command("list")
def list_sources() -> None:
    """Liste les sources enregistrees et leur etat."""
    asyncio.run(_list_sources_async())


@with_container()
async def _list_sources_async(container) -> None:
    registry = container.source_registry()
    stored = await container.credential_store().all()

    table = Table(title="Sources")
    table.add_column("Id", style="cyan")
    table.add_column("Nom")
    table.add_column("Type")
    table.add_column("Configuree")
    table.add_column("Active")
    for source in registry.get_all_adapters():
        table.add_row(
            source.id,
            source.adapter.name,
            source.adapter.kind.value,
            "oui" if source.id in stored else "non",
            "[green]oui[/green]" if registry.is_active(source.id) else "[dim]non[/dim]",
        )
    console.print(table)


@sources_app.command("configure")
def configure_source(
    source_id: Annotated[str, typer.Argument(help="Id de la source (emby, plex, local...)")],
    assignments: Annotated[
        list[str], typer.Argument(help="Identifiants KEY=VALUE (ex: serverUrl=http://...)")
    ],
    enable: Annotated[
        bool, typer.Option("--enable/--disable", help="Activer la source apres enregistrement")
    ] = True,
) -> None:
    """Enregistre les identifiants d'une source."""
    credentials = parse_assignments(assignments)
    asyncio.run(_configure_source_async(source_id, credentials, enable))


@with_container(restore=False)
async def _configure_source_async(container, source_id: str, credentials: dict, enable: bool) -> None:
    registry = container.source_registry()
    adapter = registry.get_adapter(source_id)
    if adapter is None:
        _fail(f'Source "{source_id}" inconnue')

    validation = adapter.validate_credentials(credentials)
    if not validation.valid:
        _fail(f"Validation echouee: {', '.join(validation.errors)}")

    await registry.save_source_credentials(source_id, credentials, enabled=enable)
    if enable:
        await registry.enable_source(source_id, refresh=True)
        console.print(f"[green]Source {source_id} enregistree et activee.[/green]")
    else:
        await registry.disable_source(source_id)
        console.print(f"[yellow]Source {source_id} enregistree (desactivee).[/yellow]")


@sources_app.command("test")
def test_source(
    source_id: Annotated[str, typer.Argument(help="Id de la source")],
) -> None:
    """Teste la connexion a une source avec ses identifiants enregistres."""
    asyncio.run(_test_source_async(source_id))


@with_container(restore=False)
async def _test_source_async(container, source_id: str) -> None:
    registry = container.source_registry()
    adapter = registry.get_adapter(source_id)
    if adapter is None:
        _fail(f'Source "{source_id}" inconnue')

    credentials = await registry.get_source_credentials(source_id)
    try:
        adapter.configure(credentials)
    except ConfigError as e:
        _fail(str(e))

    console.print(f"[cyan]Test de connexion {adapter.name}...[/cyan]")
    with suppress_loguru():
        result = await adapter.test_connection()
    if not result.success:
        _fail(f"Connexion echouee: {result.error}")
    console.print("[green]Connexion reussie ![/green]")
    if result.warning:
        console.print(f"[yellow]Attention:[/yellow] {result.warning}")


@sources_app.command("enable")
def enable_source(
    source_id: Annotated[str, typer.Argument(help="Id de la source")],
) -> None:
    """Active une source deja configuree."""
    asyncio.run(_set_enabled_async(source_id, True))


@sources_app.command("disable")
def disable_source(
    source_id: Annotated[str, typer.Argument(help="Id de la source")],
) -> None:
    """Desactive une source (ses identifiants sont conserves)."""
    asyncio.run(_set_enabled_async(source_id, False))


@with_container(restore=False)
async def _set_enabled_async(container, source_id: str, enabled: bool) -> None:
    registry = container.source_registry()
    try:
        if enabled:
            await registry.enable_source(source_id)
        else:
            await registry.disable_source(source_id)
    except (SourceNotFoundError, ConfigError) as e:
        _fail(str(e))

    credentials = await registry.get_source_credentials(source_id)
    await registry.save_source_credentials(source_id, credentials, enabled=enabled)
    state = "activee" if enabled else "desactivee"
    console.print(f"Source {source_id} {state}.")


# ============================================================================
# check / scan
# ============================================================================


def check(
    title: Annotated[str, typer.Argument(help="Titre du film")],
    year: Annotated[Optional[int], typer.Option("--year", "-y", help="Annee de sortie")] = None,
) -> None:
    """Verifie si un film est present dans les sources actives."""
    asyncio.run(_check_async(title, year))


@with_container()
async def _check_async(container, title: str, year: Optional[int]) -> None:
    with suppress_loguru():
        result = await container.aggregator().check_all_sources(title, year)

    if not result.matches:
        console.print("[yellow]Aucune source active.[/yellow]")
        console.print("[dim]Utilisez 'cineradar sources configure' pour en ajouter.[/dim]")
        raise typer.Exit(code=1)

    table = Table(title=f"{title}" + (f" ({year})" if year else ""))
    table.add_column("Source", style="cyan")
    table.add_column("Resultat")
    table.add_column("Element")
    for match in result.matches:
        if match.error:
            status = f"[red]erreur[/red] [dim]{match.error}[/dim]"
        elif match.found:
            status = "[green]trouve[/green]"
        else:
            status = "[dim]absent[/dim]"
        item = ""
        if match.item is not None:
            item = match.item.name + (f" ({match.item.year})" if match.item.year else "")
        table.add_row(match.source_name, status, item)
    console.print(table)

    if not result.found:
        raise typer.Exit(code=1)


def scan(
    page: Annotated[Path, typer.Argument(help="Page HTML enregistree", exists=True, dir_okay=False)],
    host: Annotated[str, typer.Option("--host", "-H", help="Nom d'hote du site (ex: www.imdb.com)")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Ecrit la page annotee de badges")
    ] = None,
    remote: Annotated[
        bool, typer.Option("--remote", help="Interroge le serveur 'cineradar serve'")
    ] = False,
) -> None:
    """Detecte les films d'une page et verifie leur presence."""
    asyncio.run(_scan_async(page, host, output, remote))


@with_container()
async def _scan_async(container, page: Path, host: str, output: Optional[Path], remote: bool) -> None:
    document = parse_document(page.read_text(encoding="utf-8"))
    site_registry = container.site_registry()
    adapter = site_registry.get_adapter(host)
    if adapter is None:
        _fail(f"Aucun adaptateur de site pour {host}")

    if output is not None:
        renderer = HtmlBadgeRenderer(document, styles=adapter.get_badge_styles())
    else:
        renderer = ConsoleIndicatorRenderer(console)

    http_channel = None
    if remote:
        settings = container.config()
        http_channel = HttpMessageChannel(settings.background_url, timeout=settings.request_timeout * 3)
        channel = http_channel
    else:
        channel = container.message_channel()

    pipeline = for_page(document, host, site_registry, channel, renderer)
    feed = MutationFeed()
    feed.notify()
    feed.close()
    try:
        with suppress_loguru():
            await pipeline.run(feed)
    finally:
        if http_channel is not None:
            await http_channel.close()

    if output is not None:
        output.write_text(str(document), encoding="utf-8")
        console.print(f"Page annotee ecrite dans {output}")
