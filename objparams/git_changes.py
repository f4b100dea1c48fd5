"""
Git change detection.

Lists the files that changed relative to a revision so a run can be
limited to them:
- tracked files modified, added or renamed since the revision
- untracked files not covered by .gitignore

Deleted files are never reported.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Set, Tuple

logger = logging.getLogger(__name__)


class GitChangeTracker:
    """Answers "which files changed since REV?" for one repository."""

    def __init__(self, repo_path: str):
        path = Path(repo_path).resolve()

        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise ValueError(f"Not a Git repository: {repo_path}")

        self.repo_path = Path(result.stdout.strip()).resolve()

    def _run_git(self, args: List[str], check: bool = True) -> Tuple[int, str, str]:
        logger.debug("git %s (in %s)", " ".join(args), self.repo_path)
        result = subprocess.run(
            ["git", "-c", "core.quotepath=off"] + args,
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if check and result.returncode != 0:
            raise RuntimeError(
                f"Git command failed: {' '.join(args)}\n{result.stderr}"
            )
        return result.returncode, result.stdout, result.stderr

    def _verify_revision(self, revision: str) -> None:
        code, _, _ = self._run_git(
            ["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"],
            check=False,
        )
        if code != 0:
            raise ValueError(f"Unknown revision: {revision}")

    def changed_since(self, revision: str) -> Set[Path]:
        """Absolute paths of files changed since `revision`, untracked included."""
        self._verify_revision(revision)

        _, diff_out, _ = self._run_git(
            ["diff", "--name-only", "--diff-filter=ACMR", revision, "--"]
        )
        _, untracked_out, _ = self._run_git(
            ["ls-files", "--others", "--exclude-standard"]
        )

        changed: Set[Path] = set()
        for line in diff_out.splitlines() + untracked_out.splitlines():
            if line:
                changed.add((self.repo_path / line).resolve())
        return changed


def get_changed_files(repo_path: str, revision: str) -> Set[Path]:
    tracker = GitChangeTracker(repo_path)
    return tracker.changed_since(revision)
