"""CLI entry point for commitlens.

Commands:
  browse   interactive viewer: import a repository, pick commits, read AI reviews
  commits  print the most recent commits of a repository
  review   review a single commit and print the result
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from commitlens_cli.commands.browse import browse_cmd
from commitlens_cli.commands.commits import commits_cmd
from commitlens_cli.commands.review import review_cmd
from commitlens_core.config import PROVIDERS


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # PyGithub and the SDKs are chatty at DEBUG; keep them at INFO.
    for name in ("github", "urllib3", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)


def build_repo_client(config: dict):
    """Instantiate the GitHub client from config.

    Lives in the CLI so the core never reads CLI config keys on its own.
    """
    from commitlens_core.gh.commits import RepositoryClient

    return RepositoryClient(base_url=config.get("github_api_url") or "https://api.github.com")


def build_reviewer(config: dict):
    """Instantiate the configured review provider, or raise a UsageError."""
    from commitlens_core.errors import ConfigError
    from commitlens_core.session import get_reviewer

    try:
        return get_reviewer(config)
    except (ConfigError, ValueError, ImportError) as e:
        raise click.UsageError(str(e))


@click.group()
@click.version_option(
    version=importlib.metadata.version("commitlens"),
    prog_name="commitlens",
)
@click.option(
    "--config",
    "config_path",
    default=".commitlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="COMMITLENS_CONFIG",
)
@click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    default=None,
    help="AI review provider. Overrides config file.",
)
@click.option("--model", default=None, help="Model name for the provider. Overrides config file.")
@click.option("--verbose", "-v", is_flag=True, help="Log API activity to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, provider: str | None, model: str | None, verbose: bool):
    """Browse recent commits of a public GitHub repository and get an AI review of each change."""
    from commitlens_core.config import load_config

    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_path, cli_overrides={"provider": provider, "model": model})


main.add_command(browse_cmd)
main.add_command(commits_cmd)
main.add_command(review_cmd)
