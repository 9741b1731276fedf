import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

import yaml

from prpanel_core.prompt import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "response_language": DEFAULT_LANGUAGE,
    "file_extensions": None,  # comma-separated, e.g. ".py,.ts"; None = review every file
    "file_excludes": None,  # comma-separated basenames to skip, e.g. "setup.py,conftest.py"
    "additional_prompts": [],
    "max_tokens": 16384,
    "review_whole_diff_at_once": False,
    "add_cost_to_comments": False,
    "review_bugs": True,
    "review_performance": True,
    "review_best_practices": True,
    "claude_model": None,
    "openai_model": None,
    # USD per million tokens
    "claude_prompt_tokens_price": 3.00,
    "claude_completion_tokens_price": 15.00,
    "openai_prompt_tokens_price": 2.50,
    "openai_completion_tokens_price": 10.00,
    "target_branch": None,
    "strict_replies": False,  # True = a reply without text content fails the run
}

PRICE_KEYS = (
    "claude_prompt_tokens_price",
    "claude_completion_tokens_price",
    "openai_prompt_tokens_price",
    "openai_completion_tokens_price",
)


def _as_list(value) -> list[str]:
    """Accept either a YAML list or a comma-separated string."""
    if not value:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return [str(part) for part in value]


def load_config(config_path: str = ".prpanel.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prpanel.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "additional_prompts": list(DEFAULT_CONFIG["additional_prompts"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["additional_prompts"] = _as_list(config.get("additional_prompts"))
    config["max_tokens"] = int(config["max_tokens"])
    for key in PRICE_KEYS:
        config[key] = float(config[key])

    # Resolve credentials from environment variables
    config["github_token"] = github_token()
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

    # Models may come from the environment when neither file nor CLI set them.
    config["claude_model"] = config.get("claude_model") or os.environ.get("CLAUDE_MODEL")
    config["openai_model"] = config.get("openai_model") or os.environ.get("OPENAI_MODEL")

    return config


def github_token() -> Optional[str]:
    """GITHUB_TOKEN from the environment, else the token of a `gh auth login` session.

    Returns None when neither is available; the caller decides whether that is fatal.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("No GITHUB_TOKEN and the gh CLI is unavailable")
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None
