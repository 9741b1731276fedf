"""Exception hierarchy shared by the core and the CLI.

Skip conditions (empty diff, prompt over budget) are not errors and never
appear here. Everything below is fatal to a review run.
"""

from __future__ import annotations


class PrpanelError(Exception):
    """Base class for all prpanel failures."""


class ConfigurationError(PrpanelError):
    """The run cannot start: no backend, missing credential, bad setting."""


class TargetBranchError(ConfigurationError):
    """The pull request's target branch could not be resolved."""

    def __init__(self, message: str = "Could not find target branch"):
        super().__init__(message)


class GitError(PrpanelError):
    """A git command exited with a non-zero status."""


class MalformedReplyError(PrpanelError):
    """A backend replied without any usable text content.

    Only raised when the provider runs with ``strict_replies`` enabled;
    otherwise a malformed reply is treated as an empty review.
    """
