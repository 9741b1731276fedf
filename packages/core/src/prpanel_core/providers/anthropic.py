from __future__ import annotations

from prpanel_core.providers.base import BaseProvider, ProviderReply, usage_count


class ClaudeProvider(BaseProvider):
    NAME = "Claude"
    PROMPT_TOKENS_PRICE = 3.00
    COMPLETION_TOKENS_PRICE = 15.00

    def __init__(self, api_key: str | None = None, client=None, **settings):
        super().__init__(**settings)
        if client is None:
            try:
                from anthropic import Anthropic
            except ImportError:
                raise ImportError(
                    "The 'anthropic' package is required for this provider. "
                    "Install it with: pip install 'prpanel[anthropic]'"
                )
            client = Anthropic(api_key=api_key)
        self.client = client

    def _call_api(self, system_prompt: str, diff: str) -> ProviderReply:
        message = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": diff}],
        )
        # Tool-use or thinking blocks carry no review text.
        text_blocks = [block.text for block in message.content or [] if getattr(block, "type", None) == "text"]
        usage = message.usage
        return ProviderReply(
            text="".join(text_blocks) or None,
            prompt_tokens=usage_count(getattr(usage, "input_tokens", 0)),
            completion_tokens=usage_count(getattr(usage, "output_tokens", 0)),
        )

    def _model_hints(self, error_message: str) -> list[str]:
        if "model" in error_message or "404" in error_message:
            return [
                f'Model "{self.model}" does not exist or is not supported.',
                "See available models at: https://docs.anthropic.com/en/docs/about-claude/models",
            ]
        return []
