"""
Configuration loader — reads pomless.yml into ReaderSettings.

The config file is optional and belongs to the project being read, not to
the directory the reader happens to run from. Starting at the module
directory, each directory upward is checked for ``.mvn/pomless.yml`` and
then ``pomless.yml``. The search ends at the Maven project root (the first
directory holding a ``.mvn`` folder) or at the filesystem root.

Relative paths inside the file are resolved against the project directory
it belongs to: the file's own directory, or the directory above ``.mvn``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pomless.core.models.settings import ReaderSettings

logger = logging.getLogger(__name__)

CONFIG_FILE = "pomless.yml"

# Maven's per-project settings folder; it marks the multi-module root
MAVEN_CONFIG_DIR = ".mvn"


class ConfigError(Exception):
    """Raised when reader configuration is invalid or missing."""


def find_config_file(module_dir: Path) -> Path | None:
    """Find the pomless.yml that governs a module directory.

    Args:
        module_dir: The module directory (or any directory inside the project).

    Returns:
        Path to the config file, or None if the project has none.
    """
    start = module_dir.resolve()

    for directory in (start, *start.parents):
        for candidate in (directory / MAVEN_CONFIG_DIR / CONFIG_FILE, directory / CONFIG_FILE):
            if candidate.is_file():
                return candidate
        if (directory / MAVEN_CONFIG_DIR).is_dir():
            logger.debug("Reached project root %s without a %s", directory, CONFIG_FILE)
            return None

    return None


def load_settings(path: Path | None = None, start_dir: Path | None = None) -> ReaderSettings:
    """Load and validate reader settings.

    Args:
        path: Explicit path to a config file. If None, the file is searched
            for from ``start_dir`` and defaults apply when there is none.
        start_dir: Module directory the settings are for (default: cwd).

    Returns:
        Validated ReaderSettings with paths made absolute.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(start_dir or Path.cwd())
        if path is None:
            logger.debug("No %s found, using default settings", CONFIG_FILE)
            return ReaderSettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading reader config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept both a flat file and one wrapped under a "pomless" key
    if isinstance(data.get("pomless"), dict):
        data = data["pomless"]

    try:
        settings = ReaderSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid reader configuration in {path}: {e}") from e

    return _resolve_paths(settings, project_dir(path))


def project_dir(config_path: Path) -> Path:
    """The project directory a config file belongs to."""
    directory = config_path.parent.resolve()
    if directory.name == MAVEN_CONFIG_DIR:
        return directory.parent
    return directory


def _resolve_paths(settings: ReaderSettings, base: Path) -> ReaderSettings:
    """Make project_root and group_ids keys absolute."""
    project_root = settings.project_root
    if project_root is not None:
        project_root = str((base / project_root).resolve())

    group_ids = {
        str((base / rel).resolve()): group_id
        for rel, group_id in settings.group_ids.items()
    }

    return settings.model_copy(update={"project_root": project_root, "group_ids": group_ids})
