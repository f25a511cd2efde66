"""stats command: aggregate commit counts across the work history."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from codegenius_store.base import StoreError
from codegenius_store.history import group_by_month

console = Console()


@click.command("stats")
@click.pass_context
def stats_cmd(ctx):
    """Show total commits, the most active month and a per-month breakdown."""
    history = ctx.obj["history"]
    try:
        stats = history.get_stats()
        entries = history.entries
    except StoreError as e:
        raise click.ClickException(f"Failed to load work history: {e}")

    if not stats.total_commits:
        console.print("[yellow]No work history recorded yet.[/yellow]")
        return

    console.print("\n[bold]CodeGenius Statistics[/bold]")
    console.print(f"  Total commits:      {stats.total_commits}")
    if stats.most_active_month:
        console.print(f"  Most active month:  {stats.most_active_month}")

    table = Table(title="Monthly Breakdown", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("Commits", justify="right")
    table.add_column("% of total", justify="right")
    # Same chronological order as the history view.
    for month in group_by_month(entries):
        count = stats.monthly_breakdown.get(month, 0)
        table.add_row(month, str(count), f"{count / stats.total_commits * 100:.1f}%")
    console.print(table)
