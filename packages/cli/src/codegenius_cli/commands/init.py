"""init command: write a starter .codegenius.yml for this repository."""

from __future__ import annotations

import copy
from pathlib import Path

import click
from rich.console import Console

from codegenius_core.config import API_KEY_ENV, DEFAULT_CONFIG, detect_project_language, write_config

console = Console()


@click.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file without asking.")
@click.option(
    "--model",
    type=click.Choice(list(API_KEY_ENV)),
    default=None,
    help="AI provider to configure. Prompts when omitted.",
)
@click.pass_context
def init_cmd(ctx, force: bool, model: str | None):
    """Create .codegenius.yml with defaults and the detected project language."""
    config_path = (ctx.obj or {}).get("config_path", ".codegenius.yml")
    path = Path(config_path)

    if path.exists() and not force:
        if not click.confirm(f"{config_path} already exists. Overwrite?", default=False):
            console.print("[yellow]Left existing configuration untouched.[/yellow]")
            return

    if model is None:
        model = click.prompt("AI provider", type=click.Choice(list(API_KEY_ENV)), default=DEFAULT_CONFIG["model"])

    config = copy.deepcopy(DEFAULT_CONFIG)
    config["model"] = model
    config["project"]["name"] = Path.cwd().name or config["project"]["name"]
    config["project"]["language"] = detect_project_language(".")

    write_config(config, config_path)
    console.print(f"[green]Created {config_path}[/green] (language: {config['project']['language']})")
    console.print(
        f"\n[yellow]Remember to export [bold]{API_KEY_ENV[model]}[/bold] before running "
        "`codegenius commit` or `codegenius review`.[/yellow]"
    )
