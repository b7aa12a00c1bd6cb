"""Command-line interface package for savepoint."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from savepoint import __version__

from .save_cmd import register_command as register_save_command

PROG_NAME = "savepoint"

# Usage lines show whichever alias was invoked
invoked_command = Path(sys.argv[0]).name
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
# Exit status the parser uses for unknown flags and missing values
USAGE_ERROR_EXIT_CODE = 2

app = typer.Typer(
	help=f"Commit & push your current work safely.\n\nVersion: {__version__}",
	add_completion=False,
	context_settings=CONTEXT_SETTINGS,
)

register_save_command(app, context_settings=CONTEXT_SETTINGS)


def main(argv: list[str] | None = None) -> int:
	"""
	Run the CLI application and return its exit code.

	Usage errors such as unknown flags exit with 1 rather than the usual 2.

	"""
	prog_name = invoked_command if invoked_command in (PROG_NAME, "svp") else PROG_NAME
	try:
		app(args=argv, prog_name=prog_name)
	except SystemExit as e:
		if e.code is None:
			return 0
		if not isinstance(e.code, int):
			return 1
		return 1 if e.code == USAGE_ERROR_EXIT_CODE else e.code
	return 0


if __name__ == "__main__":
	sys.exit(main())
