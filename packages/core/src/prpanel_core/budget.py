"""Token budget estimation.

Exact tokenization needs the backend's own tokenizer, so the estimate uses a
fixed ratio of four characters per token, rounded up. The divisor and the
rounding decide where a diff flips from "reviewed" to "skipped", so both are
part of the contract.
"""

from __future__ import annotations

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(*texts: str) -> int:
    """Return the estimated token count of the concatenated texts."""
    return math.ceil(sum(len(t) for t in texts) / CHARS_PER_TOKEN)


def fits(prompt_text: str, system_prompt_text: str, token_limit: int) -> bool:
    """Return True unless the estimated prompt size strictly exceeds token_limit."""
    return estimate_tokens(prompt_text, system_prompt_text) <= token_limit
