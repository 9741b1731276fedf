"""The set of providers taking part in one review run.

Built once from configuration and never changed afterwards. Order matters:
it is the order in which every unit is sent to the providers and therefore
the order in which their comments appear on the pull request.
"""

from __future__ import annotations

import logging
from typing import Iterator

from prpanel_core.errors import ConfigurationError
from prpanel_core.providers.anthropic import ClaudeProvider
from prpanel_core.providers.base import BaseProvider
from prpanel_core.providers.codex import CodexProvider, is_codex_model
from prpanel_core.providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    def __init__(self, providers: list[BaseProvider]):
        self._providers = tuple(providers)

    def __iter__(self) -> Iterator[BaseProvider]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __getitem__(self, index: int) -> BaseProvider:
        return self._providers[index]

    def names(self) -> list[str]:
        return [p.provider_name() for p in self._providers]


def build_providers(config: dict, system_prompt: str) -> ProviderRegistry:
    """Instantiate every provider that has both a credential and a model.

    Claude is registered first, then the OpenAI family. An OpenAI model from
    the Codex family gets the Responses API provider instead of Chat
    Completions. Raises ConfigurationError when nothing is configured.
    """
    common = {
        "system_prompt": system_prompt,
        "max_tokens": config["max_tokens"],
        "strict_replies": config.get("strict_replies", False),
    }
    providers: list[BaseProvider] = []

    if config.get("anthropic_api_key") and config.get("claude_model"):
        logger.info("Initializing Claude provider for model %s", config["claude_model"])
        providers.append(
            ClaudeProvider(
                api_key=config["anthropic_api_key"],
                model=config["claude_model"],
                prompt_tokens_price=config["claude_prompt_tokens_price"],
                completion_tokens_price=config["claude_completion_tokens_price"],
                **common,
            )
        )

    if config.get("openai_api_key") and config.get("openai_model"):
        model = config["openai_model"]
        provider_cls = CodexProvider if is_codex_model(model) else OpenAIProvider
        logger.info("Initializing %s provider for model %s", provider_cls.NAME, model)
        providers.append(
            provider_cls(
                api_key=config["openai_api_key"],
                model=model,
                prompt_tokens_price=config["openai_prompt_tokens_price"],
                completion_tokens_price=config["openai_completion_tokens_price"],
                **common,
            )
        )

    if not providers:
        raise ConfigurationError(
            "No AI provider configured. Set ANTHROPIC_API_KEY and claude_model, "
            "or OPENAI_API_KEY and openai_model."
        )

    registry = ProviderRegistry(providers)
    logger.info("Configured %d provider(s): %s", len(registry), ", ".join(registry.names()))
    return registry
