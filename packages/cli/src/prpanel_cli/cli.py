"""CLI entry point for prpanel.

Commands:
  review   — review the current pull request with every configured AI provider
  prompt   — print the system prompt a review would use
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prpanel_cli.commands.prompt import prompt_cmd
from prpanel_cli.commands.review import review_cmd

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # SDK request logs drown out the review progress.
    for name in ("httpx", "anthropic", "openai", "github"):
        logging.getLogger(name).setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("prpanel"),
    prog_name="prpanel",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Multi-provider AI code review for pull requests."""
    configure_logging(verbose)


main.add_command(review_cmd)
main.add_command(prompt_cmd)
