"""Utility functions for CLI output in savepoint."""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console

if TYPE_CHECKING:
	from collections.abc import Iterator

# soft_wrap keeps long remote URLs and commit messages on one line
console = Console(soft_wrap=True)
logger = logging.getLogger(__name__)

# Status glyphs prefixing each progress line
REPO_GLYPH = "📦"
BRANCH_GLYPH = "🌿"
REMOTE_GLYPH = "🔗"
DRY_RUN_GLYPH = "→"
SUCCESS_GLYPH = "✅"
WARNING_GLYPH = "⚠️ "
SKIP_GLYPH = "⏭️ "
ERROR_GLYPH = "❌"


def print_status(glyph: str, message: str, style: str | None = None) -> None:
	"""
	Print one progress line.

	Markup and emoji codes are disabled so commit messages and URLs are printed verbatim.

	"""
	console.print(f"{glyph} {message}", style=style, markup=False, highlight=False, emoji=False)


def print_success(message: str) -> None:
	"""Print a success line."""
	print_status(SUCCESS_GLYPH, message, style="green")


def print_warning(message: str) -> None:
	"""Print a warning line."""
	print_status(WARNING_GLYPH, message, style="yellow")


def print_skip(message: str) -> None:
	"""Print a line for a step that was skipped on request."""
	print_status(SKIP_GLYPH, message, style="cyan")


def print_dry_run(command: str) -> None:
	"""Print the command a dry run would have executed."""
	print_status(DRY_RUN_GLYPH, f"DRY RUN: {command}", style="dim")


def show_error(message: str, hint: str | None = None) -> None:
	"""
	Display an error line, followed by an indented hint when there is one.

	Args:
	        message: The error message to display
	        hint: Optional command the user can run to fix the problem

	"""
	print_status(ERROR_GLYPH, message, style="bold red")
	if hint:
		console.print(f"    {hint}", markup=False, highlight=False, emoji=False)


def exit_with_error(
	message: str,
	exit_code: int = 1,
	hint: str | None = None,
	exception: Exception | None = None,
) -> NoReturn:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        hint: Optional command the user can run to fix the problem
	        exception: Optional exception that caused the error

	"""
	if exception is not None:
		logger.debug("Exiting after error", exc_info=exception)
	show_error(message, hint)
	raise typer.Exit(exit_code) from exception


def handle_keyboard_interrupt() -> NoReturn:
	"""Handles KeyboardInterrupt by printing a message and exiting cleanly."""
	console.print("\n[yellow]Operation cancelled by user.[/yellow]")
	raise typer.Exit(130)  # Standard exit code for SIGINT


@contextlib.contextmanager
def loading_spinner(message: str = "Processing...") -> Iterator[None]:
	"""
	Display a loading spinner while executing a task.

	Args:
	    message: Message to display alongside the spinner

	Yields:
	    None

	"""
	# In test environments and pipes, don't display a spinner
	if os.environ.get("PYTEST_CURRENT_TEST") or os.environ.get("CI") or not sys.stdout.isatty():
		yield
		return

	with console.status(message):
		yield
