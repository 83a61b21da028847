"""
Config loader - discovers and loads resolver configurations.

Configs can come from:
1. Built-in library (shipped with package)
2. Project configs (user's project directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_kpdve.constants import ErrorMessages
from chuk_kpdve.models.config import ResolverConfig, ResolverConfigMetadata

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Discovers and loads resolver configurations.

    Configs are loaded from YAML files in the library and project directories.
    Project configs override library configs with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the config loader.

        Args:
            library_path: Path to built-in config library
            project_path: Path to project config directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, ResolverConfig] = {}

    def list_configs(self) -> list[ResolverConfigMetadata]:
        """
        List all available configs, project configs taking precedence.
        """
        configs: dict[str, ResolverConfigMetadata] = {}

        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                config = self._load_config_file(path)
                if config:
                    configs[config.name] = ResolverConfigMetadata.from_config(config, str(path))

        return list(configs.values())

    def _config_file(self, directory: Path | None, name: str) -> Path | None:
        if directory is None:
            return None
        path = directory / f"{name}.yaml"
        return path if path.exists() else None

    def get_config(self, name: str) -> ResolverConfig | None:
        """
        Get a config by name.

        Project configs take precedence over library configs.

        Args:
            name: Config name

        Returns:
            ResolverConfig if found, None otherwise
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        for directory in (self.project_path, self.library_path):
            config_file = self._config_file(directory, name)
            config = self._load_config_file(config_file) if config_file else None
            if config:
                self._cache[name] = config
                return config

        logger.debug(f"Resolver config '{name}' not found")
        return None

    def require_config(self, name: str) -> ResolverConfig:
        """Like get_config, but raise ValueError when the config is missing."""
        config = self.get_config(name)
        if config is None:
            raise ValueError(ErrorMessages.CONFIG_NOT_FOUND.format(name=name))
        return config

    def copy_to_project(self, name: str, new_name: str | None = None) -> Path | None:
        """
        Fork a library config into the project for tuning.

        The copy is written from the validated model, so it spells out
        every weight, including the ones the library file leaves at
        their defaults.

        Args:
            name: Library config to fork
            new_name: Name of the fork (default: same name, which then
                overrides the library config)

        Returns:
            Path of the new file, or None if the library has no such config
        """
        if not self.project_path:
            raise ValueError(ErrorMessages.NO_PROJECT_PATH)

        source_file = self._config_file(self.library_path, name)
        source = self._load_config_file(source_file) if source_file else None
        if source is None:
            return None

        target_name = new_name or name
        dest_file = self.project_path / f"{target_name}.yaml"
        if dest_file.exists():
            raise ValueError(ErrorMessages.CONFIG_EXISTS.format(name=target_name))

        fork = source.model_copy(update={"name": target_name})
        self.project_path.mkdir(parents=True, exist_ok=True)
        dest_file.write_text(yaml.safe_dump(fork.model_dump(), sort_keys=False))

        self._cache.pop(target_name, None)
        logger.info(f"Forked resolver config '{name}' to {dest_file}")
        return dest_file

    def _load_config_file(self, path: Path) -> ResolverConfig | None:
        """Load a config from a YAML file, skipping files that do not parse."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return self._parse_config(data or {}, default_name=path.stem)
        except (OSError, TypeError, yaml.YAMLError, ValidationError) as e:
            logger.warning(f"Skipping resolver config {path}: {e}")
            return None

    def _parse_config(self, data: dict[str, Any], default_name: str) -> ResolverConfig:
        """Parse config from YAML data."""
        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")
        data = dict(data)
        data.setdefault("name", default_name)
        return ResolverConfig.model_validate(data)

    def clear_cache(self) -> None:
        """Clear the config cache."""
        self._cache.clear()
