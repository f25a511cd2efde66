"""review command: run an AI code review on the staged diff."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from codegenius_core.config import review_types
from codegenius_core.errors import CodeGeniusError
from codegenius_core.parser import ReviewResult
from codegenius_core.reviewer import Reviewer
from codegenius_core.utils.text import truncate_diff

console = Console()

_SEVERITY_STYLE = {"critical": "red", "high": "yellow", "medium": "blue", "low": "dim"}


def print_review_result(result: ReviewResult) -> None:
    """Render a ReviewResult: issues, suggestions and the cleaned summary."""
    console.print(f"\n[bold]{result.type.title()} Review Results[/bold]")
    console.rule(style="dim")

    if result.issues:
        console.print(f"\n[bold red]Issues Found ({len(result.issues)}):[/bold red]")
        for i, issue in enumerate(result.issues, 1):
            style = _SEVERITY_STYLE.get(issue.severity, "white")
            console.print(f"  {i}. [{style}][{issue.severity.upper()}][/{style}] {escape(issue.message)}")
            if issue.line > 0:
                console.print(f"     Line: {issue.line}")
            if issue.file:
                console.print(f"     File: {issue.file}")

    if result.suggestions:
        console.print(f"\n[bold cyan]Suggestions ({len(result.suggestions)}):[/bold cyan]")
        for i, suggestion in enumerate(result.suggestions, 1):
            console.print(f"  {i}. {escape(suggestion.message)}")
            if suggestion.line > 0:
                console.print(f"     Line: {suggestion.line}")
            if suggestion.file:
                console.print(f"     File: {suggestion.file}")

    if not result.issues and not result.suggestions:
        console.print("\n[green]No specific issues or suggestions found.[/green]")

    console.print("\n[bold]Summary:[/bold]")
    console.print(result.summary, markup=False)


def _prompt_review_type(types: list[str]) -> str:
    console.print("Available review types:")
    for i, name in enumerate(types, 1):
        console.print(f"  {i}. {name}")
    answer = click.prompt("Select review type (number or 'all')", default="all").strip()
    if answer.isdigit() and 1 <= int(answer) <= len(types):
        return types[int(answer) - 1]
    return answer


@click.command("review")
@click.option("--type", "review_type", default=None, help="Review category, e.g. security. Prompts when omitted.")
@click.option("--all", "run_all", is_flag=True, help="Run every configured review category.")
@click.pass_context
def review_cmd(ctx, review_type: str | None, run_all: bool):
    """Review staged changes with AI.

    Categories come from review.enabled_types in .codegenius.yml
    (security, performance, style and structure by default).
    """
    config = ctx.obj["config"]
    repo = ctx.obj["repo"]
    types = review_types(config)

    try:
        diff = repo.get_staged_diff()
    except CodeGeniusError as e:
        raise click.ClickException(str(e))

    if not diff.strip():
        console.print("[yellow]No changes detected for review.[/yellow]")
        return

    if run_all:
        selected = "all"
    elif review_type:
        selected = review_type
    else:
        selected = _prompt_review_type(types)

    if selected != "all" and selected not in types:
        raise click.UsageError(f"Invalid review type: {selected!r}. Choose one of: {', '.join(types)}, all.")

    diff = truncate_diff(diff, config.get("max_diff_chars", 20000))
    reviewer = Reviewer(ctx.obj["provider_factory"](), review_types=types)

    if selected == "all":
        with console.status("Running reviews..."):
            results = reviewer.batch_review(diff)
        for name in types:
            if name in results:
                print_review_result(results[name])
            else:
                console.print(f"\n[red]{name} review failed; see log for details.[/red]")
        return

    try:
        with console.status(f"Running {selected} review..."):
            result = reviewer.perform_review(diff, selected)
    except CodeGeniusError as e:
        raise click.ClickException(f"Review failed: {e}")
    print_review_result(result)
