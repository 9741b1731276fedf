from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from prpanel_core.providers.base import BaseProvider, ProviderReply, usage_count


def make_client(api_key: str | None):
    if _OpenAI is None:
        raise ImportError(
            "The 'openai' package is required for this provider. " "Install it with: pip install 'prpanel[openai]'"
        )
    return _OpenAI(api_key=api_key)


class OpenAIProvider(BaseProvider):
    """Chat Completions backend (gpt-4o, gpt-5 and friends)."""

    NAME = "ChatGPT"
    PROMPT_TOKENS_PRICE = 2.50
    COMPLETION_TOKENS_PRICE = 10.00

    def __init__(self, api_key: str | None = None, client=None, **settings):
        super().__init__(**settings)
        self.client = client if client is not None else make_client(api_key)

    def _call_api(self, system_prompt: str, diff: str) -> ProviderReply:
        completion = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": diff},
            ],
            max_completion_tokens=self.max_tokens,
        )
        usage = completion.usage
        text = completion.choices[0].message.content if completion.choices else None
        return ProviderReply(
            text=text,
            prompt_tokens=usage_count(getattr(usage, "prompt_tokens", 0)),
            completion_tokens=usage_count(getattr(usage, "completion_tokens", 0)),
        )

    def _model_hints(self, error_message: str) -> list[str]:
        if "404" in error_message and "v1/responses" in error_message:
            return [
                f'Model "{self.model}" may require special access or be in beta.',
                "Check access at: https://platform.openai.com/settings/organization/limits",
                "Try an alternative model: gpt-5, gpt-5-mini, gpt-4o, gpt-4o-mini",
            ]
        if "model" in error_message or "404" in error_message:
            return ["Check the model name and availability at: https://platform.openai.com/docs/pricing"]
        return []
