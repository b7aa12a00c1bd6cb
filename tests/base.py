"""Shared helpers for tests that run the real git binary."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


def git(cwd: Path, *args: str) -> str:
	"""Run git in ``cwd`` for test setup and return stdout."""
	result = subprocess.run(  # noqa: S603
		["git", *args],  # noqa: S607
		cwd=cwd,
		capture_output=True,
		text=True,
		check=True,
	)
	return result.stdout


@dataclass
class RepoPair:
	"""A working clone and the bare repository it pushes to."""

	work: Path
	origin: Path

	def last_message(self) -> str:
		"""Full message of the newest commit in the working clone."""
		return git(self.work, "log", "-1", "--format=%B").strip()

	def commit_count(self) -> int:
		"""Number of commits reachable from HEAD in the working clone."""
		return int(git(self.work, "rev-list", "--count", "HEAD").strip())

	def origin_head(self, branch: str = "main") -> str:
		"""Commit id the bare repository has for ``branch``."""
		return git(self.origin, "rev-parse", branch).strip()

	def local_head(self) -> str:
		"""Commit id of HEAD in the working clone."""
		return git(self.work, "rev-parse", "HEAD").strip()


def init_work_repo(path: Path) -> Path:
	"""Create a repository with a committer identity and one commit on ``main``."""
	path.mkdir(parents=True, exist_ok=True)
	git(path, "init", "--initial-branch=main")
	git(path, "config", "user.name", "Savepoint Tests")
	git(path, "config", "user.email", "tests@example.com")
	git(path, "config", "commit.gpgsign", "false")
	(path / "README.md").write_text("# demo\n", encoding="utf-8")
	git(path, "add", "README.md")
	git(path, "commit", "-m", "initial commit")
	return path
