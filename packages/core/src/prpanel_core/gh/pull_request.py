from __future__ import annotations

import logging

from github import Github

logger = logging.getLogger(__name__)

# Appended to every comment we post so the next run can find and delete it.
COMMENT_MARKER = "<!-- prpanel -->"


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def is_own_comment(comment) -> bool:
    return COMMENT_MARKER in (comment.body or "")


class PullRequestCommentSink:
    """Publishes review comments on a GitHub pull request.

    An empty file path means a PR-level comment (a conversation comment);
    otherwise the comment is attached to the whole file on the head commit.
    """

    def __init__(self, pr):
        self.pr = pr
        self._head_commit = None

    def delete_existing_comments(self) -> int:
        """Remove comments left by a previous run. Returns how many were deleted."""
        deleted = 0
        for comment in list(self.pr.get_issue_comments()) + list(self.pr.get_review_comments()):
            if is_own_comment(comment):
                comment.delete()
                deleted += 1
        logger.info("Deleted %d comment(s) from a previous run", deleted)
        return deleted

    def add_comment(self, file_path: str, body: str) -> None:
        body = f"{body}\n\n{COMMENT_MARKER}"
        if not file_path:
            self.pr.create_issue_comment(body)
            return
        self.pr.create_review_comment(body=body, commit=self._commit(), path=file_path, subject_type="file")

    def _commit(self):
        if self._head_commit is None:
            self._head_commit = self.pr.base.repo.get_commit(self.pr.head.sha)
        return self._head_commit
