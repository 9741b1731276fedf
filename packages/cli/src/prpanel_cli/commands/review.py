"""review command — review the current pull request and post the feedback."""

from __future__ import annotations

import json
import os
import re

import click
from github import GithubException
from rich.console import Console

from prpanel_core.errors import ConfigurationError, PrpanelError
from prpanel_core.gh.pull_request import PullRequestCommentSink, get_pull, get_repo
from prpanel_core.prompt import SUPPORTED_LANGUAGES
from prpanel_core.reviewer import run_review
from prpanel_core.utils.git import GitRepository

console = Console()

_PR_REF_RE = re.compile(r"^refs/pull/(\d+)/")


def detect_pr_number() -> int | None:
    """Return the PR number GitHub Actions is running for, or None outside a PR.

    The event payload is authoritative: on `pull_request_target` GITHUB_REF
    points at the base branch, not at `refs/pull/N/...`.
    """
    if not os.environ.get("GITHUB_EVENT_NAME", "").startswith("pull_request"):
        return None

    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if event_path:
        try:
            with open(event_path) as f:
                number = (json.load(f).get("pull_request") or {}).get("number")
        except (OSError, ValueError):
            number = None
        if isinstance(number, int):
            return number

    match = _PR_REF_RE.match(os.environ.get("GITHUB_REF", ""))
    return int(match.group(1)) if match else None


@click.command("review")
@click.option("--repo", envvar="GITHUB_REPOSITORY", help="GitHub repository in owner/name format.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Detected from the GitHub Actions environment when omitted.",
)
@click.option(
    "--config",
    "config_path",
    default=".prpanel.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRPANEL_CONFIG",
)
@click.option("--language", type=click.Choice(SUPPORTED_LANGUAGES), default=None, help="Response language.")
@click.option("--file-extensions", default=None, help="Comma-separated extensions to review, e.g. '.py,.ts'.")
@click.option("--file-excludes", default=None, help="Comma-separated file names to skip.")
@click.option("--additional-prompt", "additional_prompts", multiple=True, help="Extra review directive (repeatable).")
@click.option("--max-tokens", type=int, default=None, help="Token budget per request and maximum output tokens.")
@click.option(
    "--whole-diff/--per-file",
    "whole_diff",
    default=None,
    help="Review the whole diff in one request instead of file by file.",
)
@click.option("--add-cost/--no-add-cost", "add_cost", default=None, help="Include token cost in PR comments.")
@click.option("--claude-model", default=None, help="Anthropic model; enables the Claude provider.")
@click.option("--openai-model", default=None, help="OpenAI model; enables the ChatGPT or Codex provider.")
@click.option("--target-branch", default=None, help="Branch the pull request merges into.")
def review_cmd(
    repo: str | None,
    pr_number: int | None,
    config_path: str,
    language: str | None,
    file_extensions: str | None,
    file_excludes: str | None,
    additional_prompts: tuple[str, ...],
    max_tokens: int | None,
    whole_diff: bool | None,
    add_cost: bool | None,
    claude_model: str | None,
    openai_model: str | None,
    target_branch: str | None,
):
    """Review a pull request with every configured AI provider.

    Each changed file (or the whole diff) is sent to Claude and/or an OpenAI
    model, and every provider's feedback is posted as its own PR comment.

    \b
    Environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      ANTHROPIC_API_KEY    Enables Claude together with a Claude model
      OPENAI_API_KEY       Enables ChatGPT/Codex together with an OpenAI model
    """
    from prpanel_core.config import load_config

    if pr_number is None:
        pr_number = detect_pr_number()
    if pr_number is None:
        console.print("[yellow]Not running for a pull request. Skipping review.[/yellow]")
        return

    config = load_config(
        config_path,
        cli_overrides={
            "response_language": language,
            "file_extensions": file_extensions,
            "file_excludes": file_excludes,
            "additional_prompts": list(additional_prompts) or None,
            "max_tokens": max_tokens,
            "review_whole_diff_at_once": whole_diff,
            "add_cost_to_comments": add_cost,
            "claude_model": claude_model,
            "openai_model": openai_model,
            "target_branch": target_branch,
        },
    )

    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )

    if not repo:
        raise click.UsageError("No repository given. Pass --repo owner/name or set GITHUB_REPOSITORY.")

    try:
        this_pr = get_pull(get_repo(repo, token=token), pr_number)
    except GithubException:
        raise click.ClickException(f"PR #{pr_number} not found in {repo}.")

    try:
        run_review(
            config,
            repository=GitRepository(target_branch=config.get("target_branch")),
            sink=PullRequestCommentSink(this_pr),
        )
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    except PrpanelError as e:
        raise click.ClickException(str(e))
    except Exception as e:
        # Backend failures were already logged by the provider; fail the run.
        raise click.ClickException(f"Review aborted: {e}") from e
