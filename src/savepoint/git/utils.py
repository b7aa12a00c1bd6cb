"""Git utilities for savepoint."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

STAGE_ALL_COMMAND = ["git", "add", "-A"]


class GitError(Exception):
	"""Custom exception for Git-related errors."""


def run_git_command(command: list[str], cwd: Path | None = None) -> str:
	"""
	Run a Git command and return its output.

	Args:
	    command: Git command to run, including the leading ``git``
	    cwd: Working directory (optional)

	Returns:
	    Command output as string

	Raises:
	    GitError: If the command fails or git cannot be executed

	"""
	logger.debug("Running git command: %s", format_command(command))
	try:
		# Argument lists only, never a shell, so messages need no quoting
		result = subprocess.run(  # noqa: S603
			command,
			cwd=cwd,
			capture_output=True,
			text=True,
			check=True,
		)
	except FileNotFoundError as e:
		msg = "git executable not found; install git and make sure it is on PATH"
		raise GitError(msg) from e
	except subprocess.CalledProcessError as e:
		stderr = (e.stderr or "").strip()
		logger.debug("git stderr: %s", stderr)
		error_msg = f"Git command failed: {format_command(command)}"
		if stderr:
			error_msg += f"\nError: {stderr}"
		raise GitError(error_msg) from e
	else:
		return result.stdout


def format_command(command: list[str]) -> str:
	"""Render a command list the way a user would type it."""
	return shlex.join(command)


def is_inside_work_tree(cwd: Path | None = None) -> bool:
	"""
	Check whether ``cwd`` is inside a git working tree.

	Raises:
	    GitError: If git itself cannot be executed

	"""
	try:
		output = run_git_command(["git", "rev-parse", "--is-inside-work-tree"], cwd)
	except GitError as e:
		if isinstance(e.__cause__, FileNotFoundError):
			raise
		return False
	return output.strip() == "true"


def get_repo_root(cwd: Path | None = None) -> Path:
	"""
	Get the root directory of the Git repository.

	Raises:
	    GitError: If not in a Git repository

	"""
	try:
		result = run_git_command(["git", "rev-parse", "--show-toplevel"], cwd)
		return Path(result.strip())
	except GitError as e:
		msg = "Not in a Git repository"
		raise GitError(msg) from e


def get_current_branch(cwd: Path | None = None) -> str:
	"""
	Get the abbreviated name of the checked out branch.

	Returns ``HEAD`` when the checkout is detached. A branch without any
	commits yet is resolved through its symbolic ref.

	Raises:
	    GitError: If neither lookup succeeds

	"""
	try:
		return run_git_command(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd).strip()
	except GitError:
		logger.debug("HEAD does not resolve, trying symbolic ref for an unborn branch")
		return run_git_command(["git", "symbolic-ref", "--short", "HEAD"], cwd).strip()


def get_remote_url(remote: str, cwd: Path | None = None) -> str | None:
	"""Return the URL configured for ``remote``, or None if there is no such remote."""
	try:
		url = run_git_command(["git", "remote", "get-url", remote], cwd).strip()
	except GitError as e:
		if isinstance(e.__cause__, FileNotFoundError):
			raise
		return None
	return url or None


def get_status_lines(cwd: Path | None = None) -> list[str]:
	"""Return ``git status --porcelain`` output, one entry per changed path."""
	output = run_git_command(["git", "status", "--porcelain"], cwd)
	return [line for line in output.splitlines() if line.strip()]


def has_changes(cwd: Path | None = None) -> bool:
	"""Check whether the working tree or index differs from HEAD."""
	return bool(get_status_lines(cwd))


def commit_command(message: str) -> list[str]:
	"""Build the command that commits the index with ``message``."""
	return ["git", "commit", "-m", message]


def fetch_command(remote: str) -> list[str]:
	"""Build the command that fetches ``remote``."""
	return ["git", "fetch", remote]


def pull_rebase_command(remote: str, branch: str) -> list[str]:
	"""Build the rebase pull command, stashing local changes around it."""
	return ["git", "pull", "--rebase", "--autostash", remote, branch]


def push_command(remote: str, branch: str) -> list[str]:
	"""Build the push command that also sets the upstream branch."""
	return ["git", "push", "-u", remote, branch]


def stage_all(cwd: Path | None = None) -> None:
	"""
	Stage every change in the working tree, honouring ignore rules.

	Raises:
	    GitError: If staging fails

	"""
	run_git_command(STAGE_ALL_COMMAND, cwd)


def commit(message: str, cwd: Path | None = None) -> None:
	"""
	Create a commit with the given message.

	Args:
	    message: Commit message, passed through unchanged
	    cwd: Working directory (optional)

	Raises:
	    GitError: If commit fails

	"""
	output = run_git_command(commit_command(message), cwd)
	logger.info("Created commit with message: %s", message)
	logger.debug("git commit output: %s", output.strip())


def fetch(remote: str, cwd: Path | None = None) -> None:
	"""Fetch from ``remote``."""
	run_git_command(fetch_command(remote), cwd)


def pull_rebase(remote: str, branch: str, cwd: Path | None = None) -> None:
	"""Rebase the current branch onto ``remote/branch`` with autostash."""
	run_git_command(pull_rebase_command(remote, branch), cwd)


def push(remote: str, branch: str, cwd: Path | None = None) -> None:
	"""
	Push ``branch`` to ``remote`` and set it as upstream.

	Raises:
	    GitError: If the push is rejected or the remote is unreachable

	"""
	run_git_command(push_command(remote, branch), cwd)
