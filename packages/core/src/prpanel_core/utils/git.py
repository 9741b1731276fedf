"""Changed files and per-file diffs from the local git working copy.

CI checks out the pull request's merge commit; every diff is taken against
``origin/<target branch>`` so it contains exactly what the PR introduces.
"""

from __future__ import annotations

import logging
import os
import subprocess

from prpanel_core.errors import GitError, TargetBranchError
from prpanel_core.utils.code import filter_files

logger = logging.getLogger(__name__)

# Checked in order. GitHub Actions first, then Azure Pipelines.
_TARGET_BRANCH_ENV_VARS = (
    "GITHUB_BASE_REF",
    "SYSTEM_PULLREQUEST_TARGETBRANCHNAME",
    "SYSTEM_PULLREQUEST_TARGETBRANCH",
)


def resolve_target_branch(configured: str | None = None) -> str:
    """Return the remote-tracking ref to diff against, e.g. ``origin/main``.

    Raises TargetBranchError when neither config nor CI environment names one.
    """
    branch = configured
    if not branch:
        for var in _TARGET_BRANCH_ENV_VARS:
            branch = os.environ.get(var)
            if branch:
                break
    if not branch:
        raise TargetBranchError()
    return f"origin/{branch.removeprefix('refs/heads/')}"


class GitRepository:
    def __init__(self, cwd: str | None = None, target_branch: str | None = None, fetch: bool = True):
        self.cwd = cwd
        self._configured_branch = target_branch
        self._fetch = fetch
        self._fetched = False

    @property
    def target_branch(self) -> str:
        return resolve_target_branch(self._configured_branch)

    def list_changed_files(self, file_extensions: str | None = None, file_excludes: str | None = None) -> list[str]:
        """Return added or modified files relative to the target branch, in git's order."""
        target = self.target_branch
        self._try_fetch()

        output = self._git("diff", target, "--name-only", "--diff-filter=AM")
        files = [line.strip() for line in output.splitlines() if line.strip()]

        if file_extensions:
            logger.info("File extensions specified: %s", file_extensions)
        else:
            logger.info("No file extensions specified. All files will be reviewed.")

        return filter_files(files, file_extensions, file_excludes)

    def get_diff(self, file_name: str) -> str:
        target = self.target_branch
        diff = self._git("diff", target, "--", file_name)
        logger.debug("Diff for %s: %d characters", file_name, len(diff))
        if not diff.strip():
            logger.warning("Empty diff for file %s against %s", file_name, target)
        return diff

    def _try_fetch(self) -> None:
        # CI normally has the needed commits already; a failed fetch is not fatal.
        if not self._fetch or self._fetched:
            return
        self._fetched = True
        try:
            self._git("fetch")
        except GitError as e:
            logger.warning("Could not fetch from remote, using local repository state: %s", e)

    def _git(self, *args: str) -> str:
        # core.quotepath=false keeps non-ASCII paths readable instead of octal-escaped.
        cmd = ["git", "-c", "core.pager=cat", "-c", "core.quotepath=false", *args]
        try:
            result = subprocess.run(cmd, cwd=self.cwd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        if result.returncode != 0:
            raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip()}")
        return result.stdout
