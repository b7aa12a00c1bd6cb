"""Tests for CLI utility functions."""

from __future__ import annotations

import pytest
import typer

from savepoint.utils.cli_utils import (
	exit_with_error,
	handle_keyboard_interrupt,
	loading_spinner,
	print_dry_run,
	print_skip,
	print_status,
	print_success,
	print_warning,
	show_error,
)


def test_status_lines_carry_glyphs(capsys: pytest.CaptureFixture[str]) -> None:
	"""Each printer prefixes its own glyph."""
	print_success("Done.")
	print_warning("careful")
	print_skip("Skipping pull/rebase (--no-pull).")
	print_dry_run("git add -A")

	lines = capsys.readouterr().out.splitlines()
	assert lines[0] == "✅ Done."
	assert lines[1].startswith("⚠️")
	assert lines[1].endswith("careful")
	assert lines[2].startswith("⏭️")
	assert lines[3] == "→ DRY RUN: git add -A"


def test_status_text_is_printed_verbatim(capsys: pytest.CaptureFixture[str]) -> None:
	"""Brackets and emoji codes in commit messages are not interpreted."""
	print_status("→", "DRY RUN: git commit -m '[WIP] :bug: fix'")

	assert capsys.readouterr().out.strip() == "→ DRY RUN: git commit -m '[WIP] :bug: fix'"


def test_long_lines_are_not_wrapped(capsys: pytest.CaptureFixture[str]) -> None:
	"""Long remote URLs stay on one line."""
	url = "https://example.com/" + "a" * 200 + ".git"
	print_status("🔗", f"Remote: {url}")

	assert capsys.readouterr().out.splitlines() == [f"🔗 Remote: {url}"]


def test_show_error_with_hint(capsys: pytest.CaptureFixture[str]) -> None:
	"""The hint is printed indented under the error."""
	show_error("No 'origin' remote configured. Add one, e.g.:", hint="git remote add origin URL")

	lines = capsys.readouterr().out.splitlines()
	assert lines[0] == "❌ No 'origin' remote configured. Add one, e.g.:"
	assert lines[1] == "    git remote add origin URL"


def test_exit_with_error() -> None:
	"""exit_with_error raises typer.Exit with the given code."""
	with pytest.raises(typer.Exit) as excinfo:
		exit_with_error("boom", exit_code=3)

	assert excinfo.value.exit_code == 3


def test_exit_with_error_chains_exception() -> None:
	"""The causing exception is kept as __cause__."""
	cause = RuntimeError("root cause")
	with pytest.raises(typer.Exit) as excinfo:
		exit_with_error("boom", exception=cause)

	assert excinfo.value.__cause__ is cause


def test_handle_keyboard_interrupt(capsys: pytest.CaptureFixture[str]) -> None:
	"""Interrupts exit with 130."""
	with pytest.raises(typer.Exit) as excinfo:
		handle_keyboard_interrupt()

	assert excinfo.value.exit_code == 130
	assert "Operation cancelled by user." in capsys.readouterr().out


def test_loading_spinner_is_silent_under_pytest(capsys: pytest.CaptureFixture[str]) -> None:
	"""The spinner yields without drawing anything in tests."""
	with loading_spinner("Pushing..."):
		pass

	assert capsys.readouterr().out == ""
