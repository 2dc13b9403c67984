"""Configuration loader for autospecimen."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import AutoSpecimenConfig

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


class ConfigLoader:
    """
    Merges configuration layers, lowest priority first: the
    ``[tool.autospecimen]`` table of pyproject.toml, a dedicated
    ``.autospecimen`` file, ``AUTOSPECIMEN_`` environment variables and
    explicit overrides.
    """

    DEFAULT_CONFIG_FILES = [
        ".autospecimen.toml",
        ".autospecimen.yml",
        ".autospecimen.yaml",
    ]

    ENV_PREFIX = "AUTOSPECIMEN_"

    def __init__(
        self,
        project_root: str | Path | None = None,
        config_file: str | Path | None = None,
    ):
        """Initialize the configuration loader.

        Args:
            project_root: Directory searched for configuration files. Defaults to the cwd.
            config_file: Explicit configuration file. If None, default files are searched.
        """
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.config_file = Path(config_file) if config_file else None
        self._config_cache: AutoSpecimenConfig | None = None

    def load_config(
        self,
        env_overrides: dict[str, Any] | None = None,
        overrides: dict[str, Any] | None = None,
        reload: bool = False,
    ) -> AutoSpecimenConfig:
        """Load configuration from all sources.

        Args:
            env_overrides: Used instead of reading the process environment
            overrides: Explicit overrides (highest priority)
            reload: Force reload even if cached

        Returns:
            Validated autospecimen configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or the result is invalid
        """
        if self._config_cache is not None and not reload:
            return self._config_cache

        env_config = (
            env_overrides if env_overrides is not None else self._load_env_config()
        )
        layers = [
            ("pyproject.toml", self._load_pyproject_table()),
            ("configuration file", self._load_config_file()),
            ("environment", env_config),
            ("overrides", overrides),
        ]

        config_dict: dict[str, Any] = {}
        for origin, layer in layers:
            if layer:
                config_dict = _deep_merge(config_dict, layer)
                logger.debug(f"Applied configuration from {origin}")

        try:
            self._config_cache = AutoSpecimenConfig(**config_dict)
        except ValidationError as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

        return self._config_cache

    def _load_pyproject_table(self) -> dict[str, Any] | None:
        pyproject = self.project_root / "pyproject.toml"
        if not pyproject.exists():
            return None

        table = _read_mapping(pyproject).get("tool", {}).get("autospecimen")
        if table is not None and not isinstance(table, dict):
            raise ConfigurationError(f"[tool.autospecimen] in {pyproject} must be a table")
        return table

    def _load_config_file(self) -> dict[str, Any] | None:
        config_file = self.config_file or next(
            (
                path
                for path in (self.project_root / name for name in self.DEFAULT_CONFIG_FILES)
                if path.exists()
            ),
            None,
        )
        if config_file is None or not config_file.exists():
            logger.debug("No configuration file found, using defaults")
            return None

        logger.debug(f"Reading configuration from {config_file}")
        return _read_mapping(config_file)

    def _load_env_config(self) -> dict[str, Any]:
        """Collect AUTOSPECIMEN_ variables; ``__`` separates nested keys."""
        env_config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            # AUTOSPECIMEN_FIXTURE__REPEAT_COUNT -> fixture.repeat_count
            *parents, leaf = key[len(self.ENV_PREFIX) :].lower().split("__")
            current = env_config
            for parent in parents:
                current = current.setdefault(parent, {})
            # Strings are coerced by the pydantic models.
            current[leaf] = value

        return env_config


def _read_mapping(path: Path) -> dict[str, Any]:
    """Read a TOML or YAML file that must hold a mapping; empty files give {}."""
    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with open(path, "rb") as f:
                content = tomllib.load(f)
        elif suffix in (".yml", ".yaml"):
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        else:
            raise ConfigurationError(f"Unknown configuration file type: {path}")
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return content


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in updates.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


_active_config: AutoSpecimenConfig | None = None


def set_active_config(config: AutoSpecimenConfig | None) -> None:
    """Install ``config`` as the defaults used by ``Fixture()``; None resets."""
    global _active_config
    _active_config = config
    if config is not None:
        logging.getLogger("autospecimen").setLevel(config.log_level)


def get_active_config() -> AutoSpecimenConfig:
    """Return the active configuration, falling back to the defaults."""
    return _active_config if _active_config is not None else AutoSpecimenConfig()


def load_config(
    project_root: str | Path | None = None,
    config_file: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AutoSpecimenConfig:
    """Load autospecimen configuration from all sources."""
    return ConfigLoader(project_root, config_file).load_config(overrides=overrides)
