"""Global test fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests.base import RepoPair, git, init_work_repo


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""
	Keep user configuration out of every test.

	Removes SAVEPOINT_* variables and points the config search paths at an
	empty directory.

	"""
	for name in list(os.environ):
		if name.startswith("SAVEPOINT_"):
			monkeypatch.delenv(name)
	config_home = tmp_path_factory.mktemp("config_home")
	monkeypatch.setattr("savepoint.utils.config_loader.xdg_config_home", str(config_home))
	monkeypatch.setenv("HOME", str(config_home))
	return config_home


@pytest.fixture
def repo_pair(tmp_path: Path) -> RepoPair:
	"""A working repository on ``main`` whose ``origin`` is a bare repository in ``tmp_path``."""
	origin = tmp_path / "origin.git"
	origin.mkdir()
	git(origin, "init", "--bare", "--initial-branch=main")

	work = init_work_repo(tmp_path / "work")
	git(work, "remote", "add", "origin", str(origin))
	git(work, "push", "-u", "origin", "main")
	return RepoPair(work=work, origin=origin)
