"""
Point d'entree CLI de CineRadar.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import check, scan, sources_app
from .config import Settings
from .container import Container
from .logging_config import configure_logging, level_for_verbosity, set_console_level

app = typer.Typer(
    name="cineradar",
    help="Detecte les films deja presents dans votre videotheque",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv, -vvv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """CineRadar - Presence des films dans vos sources."""
    state["quiet"] = quiet
    state["verbose"] = 0 if quiet else verbose
    set_console_level(
        level_for_verbosity(get_config().log_level, state["verbose"], state["quiet"])
    )


app.command()(check)
app.command()(scan)

# Monter sources_app comme sous-commande
app.add_typer(sources_app, name="sources")


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Identifiants : {config.credentials_file}")
    typer.echo(f"Serveur local : {config.background_url}")
    typer.echo(f"Timeout HTTP : {config.request_timeout}s")
    typer.echo(f"Cache fichiers : {config.file_cache_ttl}s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineRadar v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'ecoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'ecoute")] = 8765,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur de messages CineRadar."""
    import uvicorn

    typer.echo(f"Demarrage du serveur sur {host}:{port}")
    uvicorn.run("cineradar.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Demarrage de CineRadar", version=__version__)

    app()


if __name__ == "__main__":
    main()
