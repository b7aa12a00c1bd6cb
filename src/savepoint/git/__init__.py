"""Git helpers for savepoint."""

from .context import PreconditionError, RepoContext, resolve_repo_context
from .utils import GitError, run_git_command

__all__ = [
	"GitError",
	"PreconditionError",
	"RepoContext",
	"resolve_repo_context",
	"run_git_command",
]
