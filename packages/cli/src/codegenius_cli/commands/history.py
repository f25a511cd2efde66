"""history command: display the local work history."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from codegenius_core.utils.text import truncate_line
from codegenius_store.base import StoreError
from codegenius_store.history import group_by_date, group_by_month

console = Console()

_SUMMARY_WIDTH = 60


def _display_month(history, month_year: str) -> None:
    entries = history.filter_by_month_year(month_year)
    if not entries:
        console.print(f"[yellow]No work history found for {escape(month_year)}[/yellow]")
        return

    console.print(f"\n[bold cyan]Work History for {escape(month_year)}[/bold cyan]")
    console.rule(style="dim")
    for date, group in group_by_date(entries).items():
        console.print(f"\n[bold]{date}[/bold]")
        for i, entry in enumerate(group, 1):
            console.print(f"   {i}. {escape(entry.summary)}")

    console.print(f"\nTotal commits: {len(entries)}")


def _display_all(history, limit: int) -> None:
    entries = history.entries
    if not entries:
        console.print("[yellow]No work history found.[/yellow]")
        return

    console.print("\n[bold cyan]Complete Work History[/bold cyan]")
    console.rule(style="dim")
    for month, group in group_by_month(entries).items():
        console.print(f"\n[bold]{month}[/bold] ({len(group)} commits)")
        for entry in group[:limit]:
            console.print(f"   • {escape(truncate_line(entry.summary, _SUMMARY_WIDTH))}")
        if len(group) > limit:
            console.print(f"   [dim]... and {len(group) - limit} more[/dim]")

    console.print(f"\nTotal commits: {len(entries)}")


@click.command("history")
@click.argument("month_year", required=False, default="")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=5,
    show_default=True,
    help="Entries previewed per month when showing all history.",
)
@click.pass_context
def history_cmd(ctx, month_year: str, limit: int):
    """Show work history, optionally only for MONTH_YEAR (e.g. "Dec 2024").

    MONTH_YEAR is matched as plain text against entry dates, so "2024"
    or "Dec" work too.
    """
    history = ctx.obj["history"]
    try:
        if month_year:
            _display_month(history, month_year)
        else:
            _display_all(history, limit)
    except StoreError as e:
        raise click.ClickException(f"Failed to load work history: {e}")
