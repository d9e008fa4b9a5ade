"""Rich tables and JSON export for transform diagnostics."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from visitor_bridge.core.diagnostics import Diagnostic


def render_diagnostics_table(
    diagnostics: list[Diagnostic],
    console: Console | None = None,
    title: str = "Transform diagnostics",
) -> None:
    """Print one row per diagnostic, or a one-line all-clear."""
    if console is None:
        console = Console(stderr=True)

    if not diagnostics:
        console.print("[green]Transform applied, no diagnostics[/green]")
        return

    table = Table(title=title)
    table.add_column("Stage", style="dim")
    table.add_column("Kind", style="bold red")
    table.add_column("Message")
    for d in diagnostics:
        table.add_row(d.stage.value, d.kind, d.message)
    console.print(table)


def render_stage_log(stage_log: list[dict[str, Any]], console: Console | None = None) -> None:
    if console is None:
        console = Console(stderr=True)
    for entry in stage_log:
        mark = "[green]ok[/green]" if entry["ok"] else f"[red]{entry['error']}[/red]"
        console.print(f"  {entry['stage']:<18} {mark}")


def diagnostics_to_json(diagnostics: list[Diagnostic]) -> list[dict[str, Any]]:
    return [d.model_dump(mode="json") for d in diagnostics]
