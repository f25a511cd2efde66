"""CLI entry point for codegenius.

Commands:
  commit   generate a commit message for staged changes and commit
  review   run an AI code review of staged changes
  history  show the local work history, optionally for one month
  stats    aggregate commit counts across the work history
  init     write a starter .codegenius.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from codegenius_cli.commands.commit import commit_cmd
from codegenius_cli.commands.history import history_cmd
from codegenius_cli.commands.init import init_cmd
from codegenius_cli.commands.review import review_cmd
from codegenius_cli.commands.stats import stats_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured history store from .codegenius.yml settings.

      store: json  → JSONFileStore at history_path (default .git/work_history.json)
      store: none  → NoOpStore (history disabled)

    This factory lives in cli.py so neither codegenius_core nor
    codegenius_store know about the CLI config format.
    """
    from codegenius_store.json_file import DEFAULT_HISTORY_PATH, JSONFileStore
    from codegenius_store.noop import NoOpStore

    store_type = config.get("store", "json")

    if store_type in ("none", "noop", None):
        return NoOpStore()

    if store_type != "json":
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to the JSON history file.[/yellow]")

    return JSONFileStore(path=config.get("history_path") or DEFAULT_HISTORY_PATH)


def _build_provider(config: dict):
    """Resolve the API key and instantiate the configured AI provider."""
    from codegenius_cli.auth import require_api_key
    from codegenius_core.errors import ConfigError
    from codegenius_core.providers import get_provider

    api_key = require_api_key(config)
    try:
        return get_provider(config, api_key)
    except (ConfigError, ImportError) as e:
        raise click.UsageError(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("codegenius"),
    prog_name="codegenius",
)
@click.option(
    "--config",
    "config_path",
    default=".codegenius.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="CODEGENIUS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered git assistant: commit messages, code reviews and work history."""
    from codegenius_core.config import load_config
    from codegenius_core.errors import ConfigError
    from codegenius_core.git.repository import GitRepository
    from codegenius_store.history import WorkHistoryManager

    _configure_logging(verbose)
    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e))

    store = _build_store(config)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = config_path
    ctx.obj["store"] = store
    ctx.obj["history"] = WorkHistoryManager(store)
    ctx.obj["repo"] = GitRepository(".")
    # Built lazily so history/stats work without an API key.
    ctx.obj["provider_factory"] = lambda: _build_provider(config)
    ctx.call_on_close(store.close)


main.add_command(commit_cmd)
main.add_command(review_cmd)
main.add_command(history_cmd)
main.add_command(stats_cmd)
main.add_command(init_cmd)
