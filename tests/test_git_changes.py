"""
Tests for the --changed-since file filter.
"""
import shutil
import sys
import tempfile
import time
from pathlib import Path

import git

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from objparams.data_structures import Configuration
from objparams.git_changes import GitChangeTracker, get_changed_files
from objparams.orchestrator import lint_paths


def _cleanup(path):
    try:
        shutil.rmtree(path)
    except PermissionError:
        time.sleep(0.1)
        shutil.rmtree(path, ignore_errors=True)


class TestGitChangeTracker:
    @staticmethod
    def create_test_repo():
        temp_dir = tempfile.mkdtemp()
        repo = git.Repo.init(temp_dir)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        return temp_dir, repo

    @staticmethod
    def add_commit(repo, filename, content, message):
        path = Path(repo.working_dir) / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

        repo.index.add([filename])
        return repo.index.commit(
            message, author=git.Actor("Test User", "test@example.com")
        )

    def test_changed_since_commit(self):
        temp_dir, repo = self.create_test_repo()
        try:
            base = self.add_commit(repo, "src/a.js", "function a({ x }) {}\n", "Initial")
            self.add_commit(repo, "src/b.js", "function b(x, y) {}\n", "Add b")

            changed = get_changed_files(temp_dir, base.hexsha)

            assert changed == {(Path(temp_dir) / "src/b.js").resolve()}
        finally:
            _cleanup(temp_dir)

    def test_includes_worktree_and_untracked(self):
        temp_dir, repo = self.create_test_repo()
        try:
            self.add_commit(repo, "a.js", "function a({ x }) {}\n", "Initial")
            (Path(temp_dir) / "a.js").write_text("function a(x, y) {}\n")
            (Path(temp_dir) / "new.js").write_text("function n(x, y) {}\n")

            changed = GitChangeTracker(temp_dir).changed_since("HEAD")

            names = sorted(p.name for p in changed)
            assert names == ["a.js", "new.js"]
        finally:
            _cleanup(temp_dir)

    def test_deleted_files_not_reported(self):
        temp_dir, repo = self.create_test_repo()
        try:
            self.add_commit(repo, "gone.js", "x\n", "Initial")
            (Path(temp_dir) / "gone.js").unlink()

            assert GitChangeTracker(temp_dir).changed_since("HEAD") == set()
        finally:
            _cleanup(temp_dir)

    def test_unknown_revision(self):
        temp_dir, repo = self.create_test_repo()
        try:
            self.add_commit(repo, "a.js", "x\n", "Initial")
            try:
                GitChangeTracker(temp_dir).changed_since("no-such-branch")
                assert False, "Expected ValueError"
            except ValueError as e:
                assert "Unknown revision" in str(e)
        finally:
            _cleanup(temp_dir)

    def test_not_a_repository(self):
        temp_dir = tempfile.mkdtemp()
        try:
            try:
                GitChangeTracker(temp_dir)
                assert False, "Expected ValueError"
            except ValueError as e:
                assert "Not a Git repository" in str(e)
        finally:
            _cleanup(temp_dir)

    def test_lint_paths_changed_since(self):
        temp_dir, repo = self.create_test_repo()
        try:
            base = self.add_commit(repo, "old.js", "function old(a, b) {}\n", "Initial")
            self.add_commit(repo, "new.js", "function fresh(a, b) {}\n", "Add new")

            root = Path(temp_dir)
            result = lint_paths([root], Configuration(), root=root, changed_since=base.hexsha)

            assert [d.path for d in result.diagnostics] == ["new.js"]
            assert result.files_checked == 1
        finally:
            _cleanup(temp_dir)
