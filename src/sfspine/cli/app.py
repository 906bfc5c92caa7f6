"""
Root Typer application for the sforce-spine CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from sfspine.cli.config import app as config_app
from sfspine.cli.headers import show_catalog, show_headers

app = Typer(
    name="sfspine",
    help="sforce-spine - input and response normalization for the record service APIs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from sfspine import __version__

        typer.echo(f"sforce-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """sforce-spine CLI - inspect header negotiation and configuration."""
    from sfspine.core.logging import configure_logging
    from sfspine.core.settings import get_settings

    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_format == "json",
        service=settings.service_name,
    )


# ── Sub-command registration ─────────────────────────────────────────────

app.command("headers")(show_headers)
app.command("catalog")(show_catalog)
app.add_typer(config_app, name="config", help="Configuration management.")
