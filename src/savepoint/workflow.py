"""The savepoint workflow: stage, commit if needed, sync, push."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from savepoint.git.context import RepoContext, resolve_repo_context
from savepoint.git.utils import (
	STAGE_ALL_COMMAND,
	GitError,
	commit,
	commit_command,
	fetch,
	fetch_command,
	format_command,
	has_changes,
	pull_rebase,
	pull_rebase_command,
	push,
	push_command,
	stage_all,
)
from savepoint.utils.cli_utils import (
	BRANCH_GLYPH,
	REMOTE_GLYPH,
	REPO_GLYPH,
	loading_spinner,
	print_dry_run,
	print_skip,
	print_status,
	print_success,
	print_warning,
)

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_PREFIX = "chore: savepoint"
# RFC 3339 in UTC with second precision, e.g. 2026-10-18T09:30:00Z
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
# Shown in the skip notice when the sync step is turned off
SYNC_DISABLED_BY_FLAG = "--no-pull"
SYNC_DISABLED_BY_CONFIG = "sync.enabled is false"


@dataclass(frozen=True)
class SavepointOptions:
	"""Options for one savepoint run, fixed once parsed."""

	message: str | None = None
	skip_sync: bool = False
	skip_sync_reason: str = SYNC_DISABLED_BY_FLAG
	dry_run: bool = False
	remote: str = "origin"
	message_prefix: str = DEFAULT_MESSAGE_PREFIX


@dataclass
class SavepointResult:
	"""What a run did."""

	context: RepoContext
	commit_message: str | None = None
	synced: bool = False
	pushed: bool = False


def generate_commit_message(prefix: str = DEFAULT_MESSAGE_PREFIX, now: datetime | None = None) -> str:
	"""
	Build the timestamped message used when none is supplied.

	Args:
	    prefix: Text before the timestamp
	    now: Moment to stamp; naive values are taken as UTC. Defaults to the current time.

	Returns:
	    ``"<prefix> <UTC timestamp>"``

	"""
	if now is None:
		now = datetime.now(tz=timezone.utc)
	elif now.tzinfo is None:
		now = now.replace(tzinfo=timezone.utc)
	return f"{prefix} {now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)}"


def resolve_commit_message(options: SavepointOptions, now: datetime | None = None) -> str:
	"""Return the user's message, or a generated one when it is missing or empty."""
	if options.message:
		return options.message
	return generate_commit_message(options.message_prefix, now)


class SavepointRunner:
	"""
	Runs the savepoint sequence against one repository.

	Every step runs in order and blocks until git returns. Stage, commit
	and push failures propagate as GitError; the sync step only warns.

	"""

	def __init__(self, options: SavepointOptions, cwd: Path | None = None) -> None:
		"""
		Initialize the runner.

		Args:
		    options: Parsed invocation options
		    cwd: Directory to run git in (defaults to the process working directory)

		"""
		self.options = options
		self.cwd = cwd

	def run(self) -> SavepointResult:
		"""
		Check preconditions, then stage, commit, sync and push.

		Returns:
		    SavepointResult describing what happened (or would have, in a dry run)

		Raises:
		    PreconditionError: If the repository is unusable
		    GitError: If staging, committing or pushing fails

		"""
		context = resolve_repo_context(self.options.remote, self.cwd)
		self._report_context(context)

		self._stage()
		context = replace(context, is_clean=not has_changes(self.cwd))
		result = SavepointResult(context=context)

		if context.is_clean:
			print_success("Nothing to commit (working tree clean).")
		else:
			result.commit_message = self._commit()

		if self.options.skip_sync:
			print_skip(f"Skipping pull/rebase ({self.options.skip_sync_reason}).")
		else:
			result.synced = self._sync(context)

		self._push(context)
		result.pushed = not self.options.dry_run

		print_success("Done.")
		return result

	def _report_context(self, context: RepoContext) -> None:
		print_status(REPO_GLYPH, f"Repo: {context.name}")
		print_status(BRANCH_GLYPH, f"Branch: {context.branch}")
		print_status(REMOTE_GLYPH, f"Remote: {context.remote_url}")

	def _stage(self) -> None:
		if self.options.dry_run:
			print_dry_run(format_command(STAGE_ALL_COMMAND))
			return
		stage_all(self.cwd)

	def _commit(self) -> str:
		message = resolve_commit_message(self.options)
		if self.options.dry_run:
			print_dry_run(format_command(commit_command(message)))
		else:
			commit(message, self.cwd)
		return message

	def _sync(self, context: RepoContext) -> bool:
		"""Fetch and rebase-pull; any failure is reported and swallowed."""
		remote, branch = context.remote, context.branch
		if self.options.dry_run:
			print_dry_run(format_command(fetch_command(remote)))
			print_dry_run(format_command(pull_rebase_command(remote, branch)))
			return False

		try:
			with loading_spinner(f"Fetching {remote}..."):
				fetch(remote, self.cwd)
		except GitError as e:
			logger.debug("Fetch failed: %s", e)
			print_warning(f"Could not fetch from {remote}; skipping pull/rebase.")
			return False

		try:
			with loading_spinner(f"Rebasing onto {remote}/{branch}..."):
				pull_rebase(remote, branch, self.cwd)
		except GitError as e:
			logger.debug("Pull/rebase failed: %s", e)
			print_warning(
				f"Pull/rebase from {remote}/{branch} failed; continuing to push. "
				"If a rebase is in progress, finish it with 'git rebase --continue' or 'git rebase --abort'."
			)
			return False
		return True

	def _push(self, context: RepoContext) -> None:
		command = push_command(context.remote, context.branch)
		if self.options.dry_run:
			print_dry_run(format_command(command))
			return
		with loading_spinner(f"Pushing {context.branch} to {context.remote}..."):
			push(context.remote, context.branch, self.cwd)
