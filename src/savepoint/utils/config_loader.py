"""
Configuration loader for savepoint.

This module provides functionality for loading and managing
configuration settings.

"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from dotenv import load_dotenv
from xdg.BaseDirectory import xdg_config_home

from savepoint.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENV_PREFIX = "SAVEPOINT_"
LOCAL_CONFIG_NAME = ".savepoint.yml"
STRING_KEYS = frozenset({"remote", "log_file", "message_prefix"})


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigLoader:
	"""
	Loads and manages configuration for savepoint.

	This class handles loading configuration from files, environment
	variables, and default values, with proper error handling and path
	resolution.

	"""

	def __init__(self, config_file: str | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Path to configuration file (optional)

		"""
		self.config: dict[str, Any] = {}
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.savepoint.yml in the current directory
		2. $XDG_CONFIG_HOME/savepoint/config.yml
		3. ~/.savepoint/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path  # A missing explicit file is reported by load_config

		local_config = Path(LOCAL_CONFIG_NAME)
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "savepoint" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		legacy_config = Path.home() / ".savepoint" / "config.yml"
		if legacy_config.exists():
			return legacy_config

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        Dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If configuration file exists but cannot be loaded,
		                or a value has the wrong type

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file:
			if not self.config_file.exists():
				error_msg = f"Configuration file not found: {self.config_file}"
				raise ConfigError(error_msg)
			try:
				with self.config_file.open(encoding="utf-8") as f:
					file_config = yaml.safe_load(f)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.debug(error_msg)
				raise ConfigError(error_msg) from e
			if file_config:
				if not isinstance(file_config, dict):
					error_msg = f"Configuration in {self.config_file} must be a mapping"
					raise ConfigError(error_msg)
				self._merge_configs(self.config, file_config)
			logger.debug("Loaded configuration from %s", self.config_file)

		self._apply_env_overrides()
		self._resolve_paths()
		self._validate()

		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""
		Recursively merge two configuration dictionaries.

		Args:
		        base: Base configuration dictionary to merge into
		        override: Override configuration to apply

		"""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	@staticmethod
	def _coerce(value: str) -> Any:
		"""Convert an environment string to bool, int or float where it looks like one."""
		if value.lower() in ("true", "yes", "1"):
			return True
		if value.lower() in ("false", "no", "0"):
			return False
		try:
			return int(value)
		except ValueError:
			try:
				return float(value)
			except ValueError:
				return value

	def _apply_env_overrides(self) -> None:
		"""Apply environment variable overrides to configuration."""
		# SAVEPOINT_<KEY> for top-level values, SAVEPOINT_<SECTION>_<KEY> for nested ones
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			name = env_var[len(ENV_PREFIX) :].lower()
			if name in self.config and not isinstance(self.config[name], dict):
				target, key = self.config, name
			else:
				section, _, key = name.partition("_")
				if not key or not isinstance(self.config.get(section), dict):
					logger.debug("Ignoring unknown environment setting %s", env_var)
					continue
				target = self.config[section]

			# Keys that hold text keep the raw string
			typed_value = value if isinstance(target.get(key), str) or key in STRING_KEYS else self._coerce(value)
			target[key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def _resolve_paths(self) -> None:
		"""Resolve and expand any paths in the configuration."""
		log_file = self.config.get("log_file")
		if isinstance(log_file, str) and log_file:
			self.config["log_file"] = str(Path(log_file).expanduser().resolve())

	def _validate(self) -> None:
		"""Check the types of the values savepoint reads."""
		remote = self.config.get("remote")
		if not isinstance(remote, str) or not remote.strip():
			msg = "remote must be a non-empty string"
			raise ConfigError(msg)
		if not isinstance(self.get("sync.enabled"), bool):
			msg = "sync.enabled must be a boolean"
			raise ConfigError(msg)
		if not isinstance(self.get("commit.message_prefix"), str):
			msg = "commit.message_prefix must be a string"
			raise ConfigError(msg)
		if not isinstance(self.config.get("log_file"), str | None):
			msg = "log_file must be a path string"
			raise ConfigError(msg)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value, optionally with a section.

		Examples:
		        # Get a top-level key
		        config.get("remote")

		        # Get a nested key with dot notation
		        config.get("sync.enabled")

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        T: Configuration value or default

		"""
		current = self.config
		for part in key.split("."):
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default

		return cast("T", current)

	def get_remote(self) -> str:
		"""Name of the remote to sync with and push to."""
		return self.get("remote", DEFAULT_CONFIG["remote"])

	def get_message_prefix(self) -> str:
		"""Prefix of generated commit messages."""
		return self.get("commit.message_prefix", DEFAULT_CONFIG["commit"]["message_prefix"])

	def is_sync_enabled(self) -> bool:
		"""Whether the fetch and rebase-pull step runs by default."""
		return self.get("sync.enabled", True)

	def get_log_file(self) -> Path | None:
		"""Path of the debug log file, if one is configured."""
		log_file = self.get("log_file")
		return Path(log_file) if log_file else None


def load_env_files(directory: Path | None = None) -> Path | None:
	"""
	Load ``.env.local`` or, failing that, ``.env`` from ``directory`` into the environment.

	Variables already set in the environment win over the file.

	Returns:
	        The file that was loaded, or None

	"""
	base = directory or Path.cwd()
	for name in (".env.local", ".env"):
		env_file = base / name
		if env_file.exists():
			load_dotenv(dotenv_path=env_file)
			logger.debug("Loaded environment variables from %s", env_file)
			return env_file
	return None
