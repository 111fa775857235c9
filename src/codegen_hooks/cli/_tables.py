"""Rich table builders used by the CLI.

Kept separate to reduce duplication and keep the command module smaller.
"""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from rich.table import Table


def _fragments(contribution: Any | None) -> list[tuple[str, str]]:
    """Flatten a contribution into (list name, fragment) rows."""
    if contribution is None:
        return []
    rows: list[tuple[str, str]] = []
    for name in contribution.list_fields():
        rows.extend((name, fragment) for fragment in getattr(contribution, name))
    return rows


def build_result_table(result) -> Table:
    """Build the (Slot, Member, List, Fragment) table for one node."""
    title = f"{result.node_kind.value} {result.node_name}"
    if result.action.value == "skip":
        title += " [red](replaces default code)[/red]"
    table = Table(show_header=True, title=title)
    table.add_column("Slot", style="cyan")
    table.add_column("Member")
    table.add_column("List")
    table.add_column("Fragment")

    slots = [
        ("type", "", result.type_contrib),
        ("function", "", result.function_contrib),
        ("module", "", result.module_contrib),
        *(("field", name, c) for name, c in result.field_contribs.items()),
        *(("case", name, c) for name, c in result.case_contribs.items()),
    ]
    for slot, member, contribution in slots:
        for list_name, fragment in _fragments(contribution):
            table.add_row(slot, member, list_name, escape(fragment))
    return table


def build_diagnostics_table(diagnostics) -> Table:
    table = Table(show_header=True, title="Diagnostics")
    table.add_column("Kind", style="yellow")
    table.add_column("Target")
    table.add_column("Node")
    table.add_column("Message")
    for diagnostic in diagnostics:
        table.add_row(
            diagnostic.kind.value, diagnostic.target, diagnostic.node, escape(diagnostic.message)
        )
    return table


def build_visitors_table(visitors) -> Table:
    """Build visitor listing table."""
    table = Table(show_header=True, title="Visitors")
    table.add_column("Target", style="cyan")
    table.add_column("Visitor")
    table.add_column("Backend")
    table.add_column("Reentrant")
    for visitor in visitors:
        table.add_row(
            visitor.target,
            type(visitor).__name__,
            visitor.family.name,
            "[green]yes[/green]" if visitor.reentrant else "[red]no[/red]",
        )
    return table
