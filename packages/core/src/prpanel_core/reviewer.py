"""Core PR review orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console

from prpanel_core.ledger import CostLedger, cost_line
from prpanel_core.prompt import NO_COMMENT, build_system_prompt
from prpanel_core.providers.base import BaseProvider
from prpanel_core.providers.registry import build_providers

console = Console()
logger = logging.getLogger(__name__)

FULL_DIFF_LABEL = "Full Diff"


class CommentSink(Protocol):
    def delete_existing_comments(self): ...

    def add_comment(self, file_path: str, body: str) -> None: ...


class DiffSource(Protocol):
    def list_changed_files(self, file_extensions: str | None = None, file_excludes: str | None = None) -> list[str]: ...

    def get_diff(self, file_name: str) -> str: ...


@dataclass(frozen=True)
class ReviewUnit:
    """One diff and the label it is reviewed under (a file path or "Full Diff")."""

    label: str
    diff: str


@dataclass
class SessionResult:
    reviewed_units: list[str] = field(default_factory=list)
    posted_comments: int = 0
    ledger: CostLedger | None = None


def is_publishable(response: str) -> bool:
    """A response is posted unless it is blank or mentions NO_COMMENT anywhere.

    Substring, not equality: "NO_COMMENT, the code looks fine" still means
    the model has nothing to say.
    """
    return bool(response and response.strip()) and NO_COMMENT not in response


def review_comment(provider: BaseProvider, response: str) -> str:
    return f"## 🤖 {provider.provider_name()} Review\n\n{response}"


def combine_units(units: list[ReviewUnit]) -> ReviewUnit:
    return ReviewUnit(label=FULL_DIFF_LABEL, diff="".join(u.diff for u in units))


class ReviewSession:
    """Sends review units to every provider and posts what is worth posting.

    Strictly sequential: units in the order given, providers in registration
    order, one request in flight at a time. A provider failure propagates and
    ends the session; comments already posted stay posted.
    """

    def __init__(
        self,
        providers,
        sink: CommentSink,
        whole_diff: bool = False,
        add_cost_to_comments: bool = False,
    ):
        self.providers = list(providers)
        self.sink = sink
        self.whole_diff = whole_diff
        self.add_cost_to_comments = add_cost_to_comments
        self.ledger = CostLedger(self.providers)

    def run(self, units: list[ReviewUnit]) -> SessionResult:
        result = SessionResult(ledger=self.ledger)
        if self.whole_diff:
            self._review_whole_diff(units, result)
        else:
            self._review_per_file(units, result)
        return result

    def _review_per_file(self, units: list[ReviewUnit], result: SessionResult) -> None:
        total = len(units)
        for i, unit in enumerate(units, 1):
            console.print(f"\n[[{i}/{total}]] Reviewing: {unit.label}")
            for provider in self.providers:
                outcome = provider.review_code(unit.diff, unit.label)
                if is_publishable(outcome.response):
                    self.sink.add_comment(unit.label, review_comment(provider, outcome.response))
                    result.posted_comments += 1
                    console.print(f"  [green]{provider.provider_name()}: comment posted.[/green]")
                else:
                    console.print(f"  [dim]{provider.provider_name()}: no comments.[/dim]")
            result.reviewed_units.append(unit.label)

        if self.add_cost_to_comments and self.providers:
            self.sink.add_comment("", self.ledger.summary_comment())
            result.posted_comments += 1

    def _review_whole_diff(self, units: list[ReviewUnit], result: SessionResult) -> None:
        unit = combine_units(units)
        console.print(f"\nReviewing the whole diff of {len(units)} file(s)")
        for provider in self.providers:
            outcome = provider.review_code(unit.diff, unit.label)
            if not is_publishable(outcome.response):
                console.print(f"  [dim]{provider.provider_name()}: no comments for the whole diff.[/dim]")
                continue
            comment = review_comment(provider, outcome.response)
            if self.add_cost_to_comments:
                # Running totals, not just this call: they match the summary in per-file mode.
                comment += f"\n\n💰 _Cost: {cost_line(provider)}_"
            self.sink.add_comment("", comment)
            result.posted_comments += 1
            console.print(f"  [green]{provider.provider_name()}: review posted for {len(units)} file(s).[/green]")
        result.reviewed_units.append(unit.label)


def run_review(config: dict, repository: DiffSource, sink: CommentSink) -> SessionResult | None:
    """Run the full review pipeline and return a SessionResult.

    Returns None when there is nothing to review (no matching changed files).
    Configuration problems raise before any backend is called; a backend
    failure propagates after being logged by its provider.
    """
    files = repository.list_changed_files(config.get("file_extensions"), config.get("file_excludes"))
    if not files:
        console.print("[yellow]No files to review.[/yellow]")
        return None
    console.print(f"Found {len(files)} file(s) to review: {', '.join(files)}")

    system_prompt = build_system_prompt(
        response_language=config.get("response_language"),
        check_for_bugs=config.get("review_bugs", True),
        check_for_performance=config.get("review_performance", True),
        check_for_best_practices=config.get("review_best_practices", True),
        additional_prompts=config.get("additional_prompts", []),
        number_of_files=len(files),
    )
    providers = build_providers(config, system_prompt)
    console.print(f"Configured {len(providers)} provider(s): {', '.join(providers.names())}")

    sink.delete_existing_comments()

    units = [ReviewUnit(label=f, diff=repository.get_diff(f)) for f in files]
    session = ReviewSession(
        providers,
        sink,
        whole_diff=config.get("review_whole_diff_at_once", False),
        add_cost_to_comments=config.get("add_cost_to_comments", False),
    )
    result = session.run(units)

    session.ledger.log_report(logger)
    console.print(f"\n[green]Review complete. {result.posted_comments} comment(s) posted.[/green]")
    return result
