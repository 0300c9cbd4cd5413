"""
Read use cases — load settings, run the reader, capture the outcome.

The CLI never talks to the reader directly: these functions turn reader
exceptions into result objects it can render as text or JSON.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pomless.core.config.loader import ConfigError, load_settings
from pomless.core.errors import DescriptorNotFoundError, ModelParseError
from pomless.core.models.descriptor import Model, Parent
from pomless.core.services.detection import SOURCE, locate_marker
from pomless.core.services.model_reader import ModelReader

logger = logging.getLogger(__name__)

# OSError covers unreadable descriptors (permissions, I/O failures)
_READER_ERRORS = (ConfigError, ModelParseError, DescriptorNotFoundError, OSError, ValueError)


@dataclass
class ReadResult:
    """Result of synthesizing one module's model."""

    model: Model | None = None
    marker: Path | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "error_type": self.error_type}
        assert self.model is not None
        return {"marker": str(self.marker), "model": self.model.to_dict()}


@dataclass
class ParentResult:
    """Result of resolving a module directory's parent."""

    parent: Parent | None = None
    module_dir: Path | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "error_type": self.error_type}
        assert self.parent is not None
        return {
            "module_dir": str(self.module_dir),
            "parent": {
                "groupId": self.parent.group_id,
                "artifactId": self.parent.artifact_id,
                "version": self.parent.version,
                "relativePath": self.parent.relative_path,
            },
        }


def run_read(target: Path, config_path: Path | None = None) -> ReadResult:
    """Synthesize the model for a marker file or a module directory.

    Args:
        target: The marker file, or the directory that holds it.
        config_path: Optional explicit path to pomless.yml.
    """
    result = ReadResult()

    try:
        module_dir = target if target.is_dir() else target.parent
        settings = load_settings(config_path, start_dir=module_dir)
        marker = target
        if target.is_dir():
            marker = locate_marker(target, settings.marker_file)
            if marker is None:
                raise DescriptorNotFoundError(
                    f"No {settings.marker_file} found in {target.absolute()}", target
                )
        result.marker = marker.absolute()
        result.model = ModelReader(settings).read(options={SOURCE: str(result.marker)})
    except _READER_ERRORS as e:
        logger.debug("Read of %s failed: %s", target, e)
        result.error = str(e)
        result.error_type = type(e).__name__

    return result


def run_find_parent(module_dir: Path, config_path: Path | None = None) -> ParentResult:
    """Resolve the parent reference of a module directory."""
    result = ParentResult(module_dir=module_dir.absolute())

    try:
        settings = load_settings(config_path, start_dir=module_dir)
        result.parent = ModelReader(settings).find_parent(module_dir)
    except _READER_ERRORS as e:
        logger.debug("Parent lookup for %s failed: %s", module_dir, e)
        result.error = str(e)
        result.error_type = type(e).__name__

    return result
