"""Command that stages, commits, syncs and pushes the current branch."""

import logging
from typing import Annotated, Any

import typer

logger = logging.getLogger(__name__)

# --- Command Option Annotations ---

MessageOption = Annotated[
	str | None,
	typer.Option(
		"--message",
		"-m",
		help="Commit message to use instead of the timestamped default.",
		show_default=False,
	),
]

NoPullFlag = Annotated[
	bool,
	typer.Option("--no-pull", help="Skip fetching and rebasing onto the remote (e.g. offline)."),
]

DryRunFlag = Annotated[
	bool,
	typer.Option("--dry-run", "-n", help="Show what would be done without changing anything."),
]

VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")]


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		from savepoint import __version__

		typer.echo(f"savepoint version: {__version__}")
		raise typer.Exit


VersionFlag = Annotated[
	bool | None,
	typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
]

# --- Registration Function ---


def register_command(app: typer.Typer, context_settings: dict[str, Any] | None = None) -> None:
	"""Register the savepoint command with the CLI app."""

	@app.command(name="save", context_settings=context_settings)
	def save_command(
		message: MessageOption = None,
		no_pull: NoPullFlag = False,
		dry_run: DryRunFlag = False,
		is_verbose: VerboseFlag = False,
		_version: VersionFlag = None,
	) -> None:
		"""
		Commit & push your current work safely.

		Stages all changes, commits them (with a timestamped message unless
		-m is given), rebases onto the remote and pushes the current branch.

		"""
		_save_command_impl(
			message=message,
			no_pull=no_pull,
			dry_run=dry_run,
			is_verbose=is_verbose,
		)


# --- Implementation Function (Heavy imports deferred here) ---


def _save_command_impl(
	message: str | None,
	no_pull: bool,
	dry_run: bool,
	is_verbose: bool = False,
) -> None:
	"""Actual implementation of the savepoint command."""
	from savepoint.git.context import PreconditionError
	from savepoint.git.utils import GitError
	from savepoint.utils.cli_utils import exit_with_error, handle_keyboard_interrupt
	from savepoint.utils.config_loader import ConfigError, ConfigLoader, load_env_files
	from savepoint.utils.log_setup import log_environment_info, setup_logging
	from savepoint.workflow import (
		SYNC_DISABLED_BY_CONFIG,
		SYNC_DISABLED_BY_FLAG,
		SavepointOptions,
		SavepointRunner,
	)

	setup_logging(is_verbose=is_verbose)

	try:
		load_env_files()
		config = ConfigLoader()
	except ConfigError as e:
		exit_with_error(str(e), exception=e)

	log_file = config.get_log_file()
	if log_file:
		setup_logging(is_verbose=is_verbose, log_file_path=log_file)
	if is_verbose or log_file:
		log_environment_info()

	sync_disabled_by_config = not no_pull and not config.is_sync_enabled()
	options = SavepointOptions(
		message=message,
		skip_sync=no_pull or sync_disabled_by_config,
		skip_sync_reason=SYNC_DISABLED_BY_CONFIG if sync_disabled_by_config else SYNC_DISABLED_BY_FLAG,
		dry_run=dry_run,
		remote=config.get_remote(),
		message_prefix=config.get_message_prefix(),
	)
	logger.debug("Running savepoint with %s", options)

	try:
		SavepointRunner(options).run()
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except PreconditionError as e:
		exit_with_error(e.message, hint=e.hint, exception=e)
	except GitError as e:
		exit_with_error(str(e), exception=e)
