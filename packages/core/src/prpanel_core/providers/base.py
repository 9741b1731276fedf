"""Base provider implementing the Template Method pattern.

All providers share the same review algorithm:
    review_code() → empty-diff check → token budget check
                  → _call_api()   ← only this differs per provider
                  → usage accounting → ReviewOutcome

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return a ProviderReply

Everything else (skip rules, failure logging, token counters and cost) lives
here so it is defined once and inherited consistently by every provider.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from prpanel_core.budget import fits
from prpanel_core.errors import MalformedReplyError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 16384
_TOKENS_PER_PRICE_UNIT = 1_000_000


@dataclass(frozen=True)
class TokenUsage:
    prompt: int = 0
    completion: int = 0

    def __add__(self, other: TokenUsage) -> TokenUsage:
        return TokenUsage(self.prompt + other.prompt, self.completion + other.completion)


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of one provider reviewing one unit.

    An empty response always carries zero usage: that is how a skipped unit
    (empty diff, prompt over budget, malformed reply) is told apart from a
    real answer, including an answer that is just ``NO_COMMENT``.
    """

    response: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    cost: float | None = None

    def __post_init__(self):
        if self.prompt_tokens < 0 or self.completion_tokens < 0:
            raise ValueError("token counts must be non-negative")
        if not self.response and (self.prompt_tokens or self.completion_tokens):
            raise ValueError("an empty response cannot carry token usage")

    @property
    def skipped(self) -> bool:
        return not self.response


@dataclass(frozen=True)
class ProviderReply:
    """Normalized shape of a raw backend reply. ``text`` is None when absent."""

    text: str | None
    prompt_tokens: int = 0
    completion_tokens: int = 0


class BaseProvider(ABC):
    NAME: str = ""
    # USD per million tokens; concrete families override these defaults.
    PROMPT_TOKENS_PRICE: float = 0.0
    COMPLETION_TOKENS_PRICE: float = 0.0

    def __init__(
        self,
        model: str,
        system_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        prompt_tokens_price: float | None = None,
        completion_tokens_price: float | None = None,
        strict_replies: bool = False,
    ):
        self.model = model
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens
        self.prompt_tokens_price = self.PROMPT_TOKENS_PRICE if prompt_tokens_price is None else prompt_tokens_price
        self.completion_tokens_price = (
            self.COMPLETION_TOKENS_PRICE if completion_tokens_price is None else completion_tokens_price
        )
        self.strict_replies = strict_replies
        self._total_prompt_tokens = 0
        self._total_completion_tokens = 0

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def provider_name(self) -> str:
        return self.NAME or self.__class__.__name__

    def total_tokens(self) -> TokenUsage:
        return TokenUsage(self._total_prompt_tokens, self._total_completion_tokens)

    def total_cost(self) -> float:
        return self._price(self._total_prompt_tokens, self._total_completion_tokens)

    def review_code(self, diff: str, unit_label: str) -> ReviewOutcome:
        """Review one diff and return the outcome.

        Skips (without calling the backend) when the diff is blank or the
        estimated prompt does not fit max_tokens. A failing backend call is
        logged and re-raised: an error must never look like an empty review.
        """
        name = self.provider_name()

        if not diff or not diff.strip():
            logger.warning("[%s] No changes detected for %s, skipping", name, unit_label)
            return ReviewOutcome()

        if not fits(diff, self.system_prompt, self.max_tokens):
            logger.warning("[%s] %s exceeds token limits, skipping", name, unit_label)
            return ReviewOutcome()

        try:
            reply = self._call_api(self.system_prompt, diff)
        except Exception as e:
            logger.error('[%s] Request failed for model "%s": %s', name, self.model, e)
            for hint in self._model_hints(str(e)):
                logger.error("[%s] %s", name, hint)
            raise

        logger.info(
            "[%s] Usage: input_tokens=%d, output_tokens=%d",
            name,
            reply.prompt_tokens,
            reply.completion_tokens,
        )

        # A reply without text is still billed, so its usage is counted too.
        self._total_prompt_tokens += reply.prompt_tokens
        self._total_completion_tokens += reply.completion_tokens

        if not reply.text:
            if self.strict_replies:
                raise MalformedReplyError(f'{name} model "{self.model}" returned no text content for {unit_label}')
            logger.warning("[%s] Reply for %s had no text content, treating it as empty", name, unit_label)
            return ReviewOutcome()

        return ReviewOutcome(
            response=reply.text,
            prompt_tokens=reply.prompt_tokens,
            completion_tokens=reply.completion_tokens,
            cost=self._price(reply.prompt_tokens, reply.completion_tokens),
        )

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, diff: str) -> ProviderReply:
        """Make a single API call and return the normalized reply.

        Should raise on failure. review_code handles logging; nobody retries.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _model_hints(self, error_message: str) -> list[str]:
        """Extra diagnostic lines for errors that look like a bad model name."""
        return []

    def _price(self, prompt_tokens: int, completion_tokens: int) -> float:
        prompt_cost = prompt_tokens * (self.prompt_tokens_price / _TOKENS_PER_PRICE_UNIT)
        completion_cost = completion_tokens * (self.completion_tokens_price / _TOKENS_PER_PRICE_UNIT)
        return prompt_cost + completion_cost


def usage_count(value) -> int:
    """Coerce an SDK usage field (possibly None) to a non-negative int."""
    return max(int(value or 0), 0)
