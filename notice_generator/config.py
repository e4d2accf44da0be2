"""Configuration loading for notice generation.

The configuration file is YAML:

    title: "Example Product"
    copyright: "Copyright 2024 Example Corp."
    description: "This product includes the following third-party software."
    search:
      - go.mod
      - web/**/package.json
    includeDevDependencies: true
    additionalDependencies:
      - wix
    ignoreDependencies:
      - some-internal-package

Runtime settings (repository path, GitHub token, worker count) come from the
command line and are merged in by ``load_config``.
"""

import glob
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigurationError
from .logging_config import logger

DEFAULT_MAX_WORKERS = 8

NOTICE_CACHE_DIR = ".notice"
NOTICE_WORK_DIR = ".notice-work"
NOTICE_FILE_NAME = "NOTICE.txt"


@dataclass
class NoticeConfig:
    """Settings for one notice generation run."""

    path: Path
    title: str = ""
    copyright: str = ""
    description: str = ""
    search: List[str] = field(default_factory=list)
    include_dev_dependencies: bool = True
    additional_dependencies: List[str] = field(default_factory=list)
    ignore_dependencies: List[str] = field(default_factory=list)
    github_token: Optional[str] = None
    max_workers: int = DEFAULT_MAX_WORKERS

    @property
    def notice_dir_path(self) -> Path:
        """Directory holding fragments split from the previous NOTICE document."""
        return self.path / NOTICE_CACHE_DIR

    @property
    def notice_work_path(self) -> Path:
        """Directory holding the fragments of the current run."""
        return self.path / NOTICE_WORK_DIR

    @property
    def notice_file_path(self) -> Path:
        return self.path / NOTICE_FILE_NAME

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.search:
            raise ConfigurationError("Configuration must list at least one manifest under 'search'")
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1, got {self.max_workers}")

    def manifest_paths(self) -> List[Path]:
        """
        Expand the search entries into manifest file paths.

        Entries containing ``*`` are glob patterns (``**`` matches any number
        of directories); other entries are taken as-is relative to the
        repository root.

        Returns:
            Absolute manifest paths in search order, without duplicates
        """
        paths: List[Path] = []
        for entry in self.search:
            if "*" in entry:
                matches = sorted(glob.glob(str(self.path / entry), recursive=True))
                if not matches:
                    logger.warning(f"No manifest found for search pattern '{entry}'")
                candidates = [Path(match) for match in matches]
            else:
                candidates = [self.path / entry]

            for candidate in candidates:
                resolved = candidate.resolve()
                if resolved not in paths:
                    paths.append(resolved)
        return paths


def _bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
    return value


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise ConfigurationError(f"'{key}' must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def load_config(
    config_file: str | Path,
    repository_path: str | Path = ".",
    github_token: Optional[str] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> NoticeConfig:
    """
    Load and validate configuration from a YAML file.

    Args:
        config_file: Path to the YAML configuration file
        repository_path: Root of the repository the notice is generated for
        github_token: Optional GitHub API token
        max_workers: Upper bound on concurrent resolution tasks

    Returns:
        Validated NoticeConfig

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML or
            holds invalid settings
    """
    config_path = Path(config_file)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

    config = NoticeConfig(
        path=Path(repository_path).resolve(),
        title=str(data.get("title") or ""),
        copyright=str(data.get("copyright") or ""),
        description=str(data.get("description") or ""),
        search=_string_list(data, "search"),
        include_dev_dependencies=_bool(data, "includeDevDependencies", True),
        additional_dependencies=_string_list(data, "additionalDependencies"),
        ignore_dependencies=_string_list(data, "ignoreDependencies"),
        github_token=github_token or None,
        max_workers=max_workers,
    )
    config.validate()

    logger.debug(f"Loaded configuration from {config_path}: {len(config.search)} search entries")
    return config
