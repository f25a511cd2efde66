"""commit command: generate a commit message with AI and commit staged changes."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.panel import Panel

from codegenius_core.errors import CodeGeniusError
from codegenius_core.utils.files import filter_files
from codegenius_core.utils.text import truncate_diff
from codegenius_store.base import StoreError

console = Console()
logger = logging.getLogger(__name__)


def _record_history(history, message: str) -> None:
    """Add the accepted message to the work history. Failure is only a warning."""
    try:
        history.add_entry(message)
    except (StoreError, ValueError) as e:
        logger.warning("Failed to update work history: %s", e)
        console.print(f"[yellow]Warning: failed to update work history: {e}[/yellow]")


@click.command("commit")
@click.option("--context", "extra_context", default="", help="Extra context passed to the AI (e.g. ticket summary).")
@click.option("--yes", "-y", is_flag=True, help="Commit with the generated message without asking.")
@click.pass_context
def commit_cmd(ctx, extra_context: str, yes: bool):
    """Generate a commit message for the staged changes and commit them.

    \b
    Required environment variables (one, matching the configured model):
      GEMINI_API_KEY       Default provider
      ANTHROPIC_API_KEY    When model: anthropic
      OPENAI_API_KEY       When model: openai
    """
    config = ctx.obj["config"]
    repo = ctx.obj["repo"]
    history = ctx.obj["history"]

    try:
        if not repo.has_staged_changes():
            console.print("[yellow]No staged changes detected. Stage your changes first with 'git add'.[/yellow]")
            return

        diff = truncate_diff(repo.get_staged_diff(), config.get("max_diff_chars", 20000))
        ignore = (config.get("project") or {}).get("ignore_files") or []
        files = filter_files(repo.get_changed_files(), ignore)
        branch = repo.get_current_branch()

        provider = ctx.obj["provider_factory"]()
        with console.status("Generating commit message..."):
            message = provider.generate_commit_message(diff, files, branch, extra_context)

        console.print(Panel(message, title="Generated commit message", border_style="cyan"))

        if not yes:
            choice = click.prompt(
                "Use this commit message? (y = yes, n = cancel, e = edit)",
                type=click.Choice(["y", "n", "e"], case_sensitive=False),
                default="y",
            ).lower()
            if choice == "n":
                console.print("[yellow]Commit cancelled.[/yellow]")
                return
            if choice == "e":
                message = repo.edit_message(message)

        repo.commit(message)
    except CodeGeniusError as e:
        raise click.ClickException(str(e))

    _record_history(history, message)
    console.print("[green]Changes committed successfully![/green]")
