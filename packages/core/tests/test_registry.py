"""Tests for building the provider registry from configuration."""

import pytest

from prpanel_core.errors import ConfigurationError
from prpanel_core.providers.anthropic import ClaudeProvider
from prpanel_core.providers.codex import CodexProvider
from prpanel_core.providers.openai import OpenAIProvider
from prpanel_core.providers.registry import ProviderRegistry, build_providers


def _config(**overrides):
    config = {
        "max_tokens": 8000,
        "strict_replies": False,
        "anthropic_api_key": None,
        "claude_model": None,
        "openai_api_key": None,
        "openai_model": None,
        "claude_prompt_tokens_price": 3.0,
        "claude_completion_tokens_price": 15.0,
        "openai_prompt_tokens_price": 2.5,
        "openai_completion_tokens_price": 10.0,
    }
    config.update(overrides)
    return config


def test_nothing_configured_raises():
    with pytest.raises(ConfigurationError):
        build_providers(_config(), "sys")


def test_key_without_model_is_not_registered():
    with pytest.raises(ConfigurationError):
        build_providers(_config(anthropic_api_key="ant"), "sys")


def test_claude_only():
    registry = build_providers(_config(anthropic_api_key="ant", claude_model="claude-sonnet-4-5"), "sys")
    assert len(registry) == 1
    provider = registry[0]
    assert isinstance(provider, ClaudeProvider)
    assert provider.model == "claude-sonnet-4-5"
    assert provider.system_prompt == "sys"
    assert provider.max_tokens == 8000


def test_openai_chat_model_gets_chat_provider():
    registry = build_providers(_config(openai_api_key="oai", openai_model="gpt-4o"), "sys")
    assert type(registry[0]) is OpenAIProvider


def test_codex_model_gets_responses_provider():
    registry = build_providers(_config(openai_api_key="oai", openai_model="gpt-5.1-codex"), "sys")
    assert type(registry[0]) is CodexProvider


def test_claude_registered_before_openai():
    registry = build_providers(
        _config(anthropic_api_key="ant", claude_model="claude-x", openai_api_key="oai", openai_model="gpt-4o"),
        "sys",
    )
    assert registry.names() == ["Claude", "ChatGPT"]


def test_prices_come_from_config():
    registry = build_providers(
        _config(
            openai_api_key="oai",
            openai_model="gpt-4o",
            openai_prompt_tokens_price=1.25,
            openai_completion_tokens_price=5.0,
        ),
        "sys",
    )
    assert registry[0].prompt_tokens_price == 1.25
    assert registry[0].completion_tokens_price == 5.0


def test_registry_is_fixed():
    registry = ProviderRegistry([])
    assert not hasattr(registry, "append")
    assert list(registry) == []
