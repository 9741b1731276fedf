"""Cost ledger: a read-only view over the providers' own usage counters.

Nothing is stored here. Every figure is recomputed from the providers on
each call, so a report can never go stale.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from prpanel_core.providers.base import BaseProvider, TokenUsage


@dataclass(frozen=True)
class LedgerEntry:
    provider: str
    tokens: TokenUsage
    cost: float


def format_cost(cost: float) -> str:
    return f"${cost:.6f}"


def cost_line(provider: BaseProvider) -> str:
    tokens = provider.total_tokens()
    return f"{format_cost(provider.total_cost())} ({tokens.prompt} input + {tokens.completion} output tokens)"


class CostLedger:
    def __init__(self, providers: Iterable[BaseProvider]):
        self._providers = list(providers)

    def entries(self) -> list[LedgerEntry]:
        return [LedgerEntry(p.provider_name(), p.total_tokens(), p.total_cost()) for p in self._providers]

    def total_cost(self) -> float:
        return sum(p.total_cost() for p in self._providers)

    def total_tokens(self) -> TokenUsage:
        total = TokenUsage()
        for p in self._providers:
            total = total + p.total_tokens()
        return total

    def summary_comment(self) -> str:
        """Markdown body of the PR-level cost summary posted in per-file mode."""
        lines = ["## 💰 Cost summary\n"]
        for p in self._providers:
            lines.append(f"**{p.provider_name()}:** {cost_line(p)}\n")
        lines.append(f"**Total cost:** {format_cost(self.total_cost())}")
        return "\n".join(lines)

    def log_report(self, logger: logging.Logger) -> None:
        logger.info("--- 💰 Cost analysis ---")
        for entry in self.entries():
            logger.info(
                "[%s] input_tokens=%d output_tokens=%d cost=%s",
                entry.provider,
                entry.tokens.prompt,
                entry.tokens.completion,
                format_cost(entry.cost),
            )
        if len(self._providers) > 1:
            logger.info("Total cost: %s", format_cost(self.total_cost()))
