"""prompt command — print the system prompt sent to every provider."""

from __future__ import annotations

import click

from prpanel_core.budget import estimate_tokens
from prpanel_core.prompt import SUPPORTED_LANGUAGES, build_system_prompt


@click.command("prompt")
@click.option(
    "--config",
    "config_path",
    default=".prpanel.yml",
    show_default=True,
    help="Path to the configuration file.",
)
@click.option("--language", type=click.Choice(SUPPORTED_LANGUAGES), default=None, help="Response language.")
@click.option(
    "--files",
    "number_of_files",
    type=int,
    default=1,
    show_default=True,
    help="Number of files under review.",
)
def prompt_cmd(config_path: str, language: str | None, number_of_files: int):
    """Print the system prompt a review would use, with its estimated size."""
    from prpanel_core.config import load_config

    config = load_config(config_path, cli_overrides={"response_language": language})
    prompt = build_system_prompt(
        response_language=config["response_language"],
        check_for_bugs=config["review_bugs"],
        check_for_performance=config["review_performance"],
        check_for_best_practices=config["review_best_practices"],
        additional_prompts=config["additional_prompts"],
        number_of_files=number_of_files,
    )
    click.echo(prompt)
    click.echo(f"~{estimate_tokens(prompt)} tokens of {config['max_tokens']} budget", err=True)
