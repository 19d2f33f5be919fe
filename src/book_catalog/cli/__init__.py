"""Main CLI application module."""

import typer

from .commands import check_db, serve

app = typer.Typer(
    help="📚 Book Catalog service",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="check-db")(check_db)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
