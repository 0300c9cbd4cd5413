"""
Detection service — decide what a module directory is.

A module directory is marked by its marker file (``build.properties``)
and described by exactly one non-native descriptor at a fixed relative
path. Detection is a handful of existence checks in a fixed priority
order.

Pure logic — no side effects beyond reading the filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pomless.core.models.descriptor import DescriptorKind

logger = logging.getLogger(__name__)

DEFAULT_MARKER_FILE = "build.properties"

# Native descriptor; directories holding one need no synthesis
NATIVE_DESCRIPTOR = "pom.xml"

# Option key under which the host passes the marker file location
SOURCE = "org.apache.maven.model.building.source"

# Rank among the host's descriptor readers (higher wins)
PRIORITY = 1.0

# Priority order matters: a bundle that also ships a feature.xml is a bundle
_DETECTION_ORDER = (
    DescriptorKind.BUNDLE,
    DescriptorKind.FEATURE,
    DescriptorKind.SITE,
)


def detect_descriptor(module_dir: Path) -> DescriptorKind | None:
    """Return the first descriptor kind present in ``module_dir``, or None."""
    for kind in _DETECTION_ORDER:
        if (module_dir / kind.relative_path).is_file():
            logger.debug("Detected %s descriptor in %s", kind.value, module_dir)
            return kind
    return None


def descriptor_path(module_dir: Path, kind: DescriptorKind) -> Path:
    """Absolute path of the descriptor of ``kind`` inside ``module_dir``."""
    return (module_dir / kind.relative_path).absolute()


def locate_marker(directory: Path, marker_file: str = DEFAULT_MARKER_FILE) -> Path | None:
    """Return the marker file that makes ``directory`` a module, or None."""
    candidate = directory / marker_file
    if candidate.is_file():
        return candidate
    return None


def accepts(options: dict | None, marker_file: str = DEFAULT_MARKER_FILE) -> bool:
    """Whether a read request is addressed to this reader.

    The host passes the file it wants read under ``SOURCE``; only marker
    files are ours.
    """
    if not options:
        return False
    source = options.get(SOURCE)
    if source is None:
        return False
    return Path(str(source)).name == marker_file
