"""
CLI: ``sfspine headers`` / ``sfspine catalog`` - header negotiation inspection.
"""

from __future__ import annotations

import json

import typer

from sfspine.cli.utils import console, err_console, parse_overrides, print_bundle
from sfspine.core.enums import ApiDialect
from sfspine.core.headers import HEADER_REGISTRY, headers


def show_headers(
    dialect: str = typer.Argument(..., help="REST, SOAP, Bulk1, Bulk2 or Metadata"),
    assignments: list[str] = typer.Option(
        [], "--set", "-s", help="Override a field: Header.field=value (repeatable)"
    ),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """Show the header bundle negotiated for DIALECT."""
    if ApiDialect.parse(dialect) is None:
        err_console.print(f"[yellow]Unknown dialect {dialect!r}; no headers apply.[/yellow]")

    bundle = headers(dialect, parse_overrides(assignments))

    if format == "json":
        console.print_json(json.dumps(bundle, default=str))
        return
    print_bundle(bundle, title=f"{dialect} headers")


def show_catalog(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """List every registered header and the dialects it applies to."""
    rows = {
        name: sorted(d.value for d in spec.dialects)
        for name, spec in sorted(HEADER_REGISTRY.items())
    }

    if format == "json":
        console.print_json(json.dumps(rows))
        return

    from rich.table import Table

    table = Table(title="Header catalog")
    table.add_column("Header")
    table.add_column("Dialects")
    table.add_column("Description", overflow="fold")
    for name, dialects in rows.items():
        table.add_row(name, ", ".join(dialects), HEADER_REGISTRY[name].description)
    console.print(table)
