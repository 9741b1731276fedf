"""Codex models are served by the Responses API, not Chat Completions."""

from __future__ import annotations

from prpanel_core.providers.base import ProviderReply, usage_count
from prpanel_core.providers.openai import OpenAIProvider

CODEX_MODELS = (
    "gpt-5-codex",
    "gpt-5.1-codex",
    "gpt-5.1-codex-max",
    "gpt-5.1-codex-mini",
    "gpt-5.2-codex",
    "codex-mini-latest",
)


def is_codex_model(model_name: str) -> bool:
    return any(codex_model in model_name for codex_model in CODEX_MODELS)


class CodexProvider(OpenAIProvider):
    NAME = "Codex"
    REASONING_EFFORT = "high"

    def _call_api(self, system_prompt: str, diff: str) -> ProviderReply:
        # The Responses API takes one input; the system prompt leads it.
        response = self.client.responses.create(
            model=self.model,
            input=f"{system_prompt}\n\n{diff}",
            reasoning={"effort": self.REASONING_EFFORT},
            max_output_tokens=self.max_tokens,
        )
        usage = response.usage
        return ProviderReply(
            text=getattr(response, "output_text", None),
            prompt_tokens=usage_count(getattr(usage, "input_tokens", 0)),
            completion_tokens=usage_count(getattr(usage, "output_tokens", 0)),
        )

    def _model_hints(self, error_message: str) -> list[str]:
        if "model" in error_message or "404" in error_message:
            return [
                "Check model access at: https://platform.openai.com/settings/organization/limits",
                f"Known Codex models: {', '.join(CODEX_MODELS[:3])}",
            ]
        return []
