"""Repository preconditions and the snapshot of repository state used by a run."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from savepoint.git.utils import (
	GitError,
	get_current_branch,
	get_remote_url,
	get_repo_root,
	is_inside_work_tree,
)

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

DETACHED_HEAD = "HEAD"


class PreconditionError(Exception):
	"""Raised when the environment is not fit for a savepoint (no repo, detached HEAD, no remote)."""

	def __init__(self, message: str, hint: str | None = None) -> None:
		"""
		Initialize the error.

		Args:
		    message: What is wrong
		    hint: Command the user can run to fix it

		"""
		super().__init__(message)
		self.message = message
		self.hint = hint


@dataclass(frozen=True)
class RepoContext:
	"""Read-only snapshot of the repository a savepoint runs against."""

	root: Path
	name: str
	branch: str
	remote: str
	remote_url: str
	is_clean: bool | None = None


def resolve_repo_context(remote: str = "origin", cwd: Path | None = None) -> RepoContext:
	"""
	Check the preconditions in order and snapshot the repository.

	Args:
	    remote: Name of the remote to sync with and push to
	    cwd: Directory to run from (defaults to the process working directory)

	Returns:
	    RepoContext for the repository containing ``cwd``

	Raises:
	    PreconditionError: On the first precondition that does not hold

	"""
	try:
		if not is_inside_work_tree(cwd):
			msg = "Not inside a git repository."
			raise PreconditionError(msg)

		try:
			branch = get_current_branch(cwd)
		except GitError as e:
			msg = "Could not determine the current branch."
			raise PreconditionError(msg, hint="git switch -c my-branch") from e
		if branch == DETACHED_HEAD:
			msg = "Detached HEAD. Create/switch to a branch first:"
			raise PreconditionError(msg, hint="git switch -c my-branch")

		remote_url = get_remote_url(remote, cwd)
		if remote_url is None:
			msg = f"No '{remote}' remote configured. Add one, e.g.:"
			raise PreconditionError(msg, hint=f"git remote add {remote} https://github.com/<user>/<repo>.git")

		root = get_repo_root(cwd)
	except GitError as e:
		# git missing entirely, or the repository vanished mid-check
		raise PreconditionError(str(e)) from e

	logger.debug("Resolved repository %s on branch %s (%s -> %s)", root, branch, remote, remote_url)
	return RepoContext(root=root, name=root.name, branch=branch, remote=remote, remote_url=remote_url)
