"""
CLI utility helpers - output formatting and option parsing.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ── Option parsing ───────────────────────────────────────────────────────


def _parse_value(raw: str) -> Any:
    """Parse a JSON literal (``true``, ``1000``, ``null``), else keep the string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_overrides(assignments: list[str]) -> dict[str, dict[str, Any]]:
    """Parse ``Header.field=value`` assignments into an overrides mapping."""
    overrides: dict[str, dict[str, Any]] = {}
    for item in assignments:
        target, sep, raw = item.partition("=")
        header, dot, field_name = target.partition(".")
        if not sep or not dot or not header or not field_name:
            err_console.print(
                f"[bold red]Error[/bold red]: expected Header.field=value, got {item!r}"
            )
            raise typer.Exit(code=2)
        overrides.setdefault(header, {})[field_name] = _parse_value(raw)
    return overrides


# ── Output helpers ───────────────────────────────────────────────────────


def print_bundle(bundle: dict[str, dict[str, Any]], *, title: str = "") -> None:
    """Render a header bundle as a Rich table of header / field / value."""
    if not bundle:
        console.print("[dim]No headers.[/dim]")
        return
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    table.add_column("Header")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    for header, fields in bundle.items():
        for i, (name, value) in enumerate(fields.items()):
            table.add_row(header if i == 0 else "", name, json.dumps(value, default=str))
    console.print(table)
