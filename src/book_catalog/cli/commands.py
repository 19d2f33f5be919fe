"""Service commands: run the API and check the document store."""

import asyncio

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.book_catalog.core.errors import StoreUnavailableError
from src.book_catalog.core.services import DocumentStoreService
from src.book_catalog.runtime.context import get_config

console = Console()


def serve(
    host: str | None = typer.Option(None, help="Host to bind, defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind, defaults to app.port"),
    log_level: str = typer.Option(
        "info", help="Log level (debug, info, warning, error, critical)"
    ),
) -> None:
    """
    🚀 Start the Book Catalog API.

    The store connection is made before the port is bound; if MongoDB is
    unreachable the command exits with status 1 without serving.
    """
    from src.book_catalog.api.http.app import app

    config = get_config()
    bind_host = host if host is not None else config.app.host
    bind_port = port if port is not None else config.app.port

    console.print(
        Panel.fit(
            f"[bold green]Book Catalog[/bold green] on http://{bind_host}:{bind_port}",
            border_style="green",
        )
    )

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=bind_host,
            port=bind_port,
            log_level=log_level,
            log_config=None,  # keep uvicorn logs flowing through Loguru
            access_log=False,  # the request middleware logs access
        )
    )
    server.run()

    if not server.started:
        console.print("[red]❌ Application failed to start[/red]")
        raise typer.Exit(code=1)


async def _ping_store(store: DocumentStoreService) -> None:
    await store.connect()
    await store.close()


def check_db() -> None:
    """
    🔍 Check that the configured MongoDB answers ping.
    """
    store = DocumentStoreService(get_config().mongo)
    details = store.describe()
    try:
        asyncio.run(_ping_store(store))
    except StoreUnavailableError as e:
        console.print(
            Panel.fit(
                f"[red]❌ MongoDB unreachable[/red]\n{e}",
                border_style="red",
            )
        )
        raise typer.Exit(code=1) from e

    console.print(
        Panel.fit(
            f"[green]✅ MongoDB reachable[/green]\n"
            f"url: {details['url']}\ndatabase: {details['database']}",
            border_style="green",
        )
    )
