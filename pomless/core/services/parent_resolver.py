"""
Parent resolution — find the project a module directory inherits from.

Walks upward from the module directory's parent, one directory at a
time, and stops at the first ancestor that provides a parent:

    1. a native pom.xml
    2. a bundle/feature/site descriptor, when a group-id strategy is set

Nearest ancestor wins; siblings are never searched. The walk ends at the
filesystem root, at the configured project root, or after ``max_depth``
levels, whichever comes first.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable

from pomless.core.errors import MissingFieldError, ParentNotFoundError
from pomless.core.models.descriptor import Parent
from pomless.core.models.settings import ReaderSettings
from pomless.core.services.detection import NATIVE_DESCRIPTOR, detect_descriptor
from pomless.core.services.extractors import extract_identity, parse_xml

logger = logging.getLogger(__name__)

# resolve_group_id(directory) -> group id, or None when it has no opinion
GroupIdResolver = Callable[[Path], "str | None"]


class MappingGroupIdResolver:
    """Group ids from an explicit directory → group id table.

    The nearest configured directory at or above the queried one wins.
    """

    def __init__(self, group_ids: dict[str, str]) -> None:
        self._group_ids = {Path(d).resolve(): g for d, g in group_ids.items()}

    def __call__(self, directory: Path) -> str | None:
        directory = directory.resolve()
        for candidate in (directory, *directory.parents):
            group_id = self._group_ids.get(candidate)
            if group_id:
                return group_id
        return None


def read_pom_parent(pom: Path, relative_path: str = "..") -> Parent:
    """Build a parent reference from a native pom.xml.

    groupId and version fall back to the POM's own ``<parent>`` element
    when the POM inherits them.

    Raises:
        MalformedDescriptorError: The POM is not well-formed XML.
        MissingFieldError: artifactId, groupId or version cannot be found.
    """
    root = parse_xml(pom)
    # <project xmlns="http://maven.apache.org/POM/4.0.0"> or bare <project>
    ns = root.tag[: root.tag.index("}") + 1] if root.tag.startswith("{") else ""

    def text(element: ET.Element | None, tag: str) -> str:
        if element is None:
            return ""
        found = element.find(f"{ns}{tag}")
        if found is None or found.text is None:
            return ""
        return found.text.strip()

    inherited = root.find(f"{ns}parent")

    artifact_id = text(root, "artifactId")
    if not artifact_id:
        raise MissingFieldError(f"artifactId missing in {pom}", pom, "artifactId")

    group_id = text(root, "groupId") or text(inherited, "groupId")
    if not group_id:
        raise MissingFieldError(f"groupId missing in {pom}", pom, "groupId")

    version = text(root, "version") or text(inherited, "version")
    if not version:
        raise MissingFieldError(f"version missing in {pom}", pom, "version")

    return Parent(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        relative_path=relative_path,
    )


class ParentResolver:
    """Walks ancestor directories to find a module's parent project."""

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        group_id_resolver: GroupIdResolver | None = None,
    ) -> None:
        self.settings = settings or ReaderSettings()
        if group_id_resolver is None and self.settings.group_ids:
            group_id_resolver = MappingGroupIdResolver(self.settings.group_ids)
        self.group_id_resolver = group_id_resolver

    def find_parent(self, module_dir: Path, boundary: Path | None = None) -> Parent:
        """Return the parent reference for ``module_dir``.

        Args:
            module_dir: The module directory (not its marker file).
            boundary: Highest directory the walk may inspect. Defaults to
                the configured project root, if any.

        Raises:
            ParentNotFoundError: No ancestor provides a parent.
            ModelParseError: The nearest ancestor's descriptor is broken.
        """
        start = module_dir.resolve()
        if boundary is None and self.settings.project_root:
            boundary = Path(self.settings.project_root)
        if boundary is not None:
            boundary = boundary.resolve()
            if boundary != start and boundary not in start.parents:
                logger.warning("Ignoring project root %s: not an ancestor of %s", boundary, start)
                boundary = None

        if start != boundary:
            current = start.parent
            for level in range(1, self.settings.max_depth + 1):
                parent = self._parent_at(current, "/".join([".."] * level))
                if parent is not None:
                    logger.debug("Parent of %s is %s (in %s)", start, parent.id, current)
                    return parent
                if current == boundary or current.parent == current:
                    break
                current = current.parent

        raise ParentNotFoundError(f"No parent pom file found in {start}", start)

    def _parent_at(self, directory: Path, relative_path: str) -> Parent | None:
        pom = directory / NATIVE_DESCRIPTOR
        if pom.is_file():
            return read_pom_parent(pom, relative_path)

        if self.group_id_resolver is None:
            return None

        kind = detect_descriptor(directory)
        if kind is None:
            return None

        group_id = self.group_id_resolver(directory)
        if not group_id:
            logger.debug("No group id for %s descriptor in %s, continuing", kind.value, directory)
            return None

        fields = extract_identity(kind, directory, self.settings)
        if fields.version is None:
            # A site without its own version cannot anchor anything
            logger.debug("Skipping versionless %s descriptor in %s", kind.value, directory)
            return None

        return Parent(
            group_id=group_id,
            artifact_id=fields.artifact_id,
            version=fields.version,
            relative_path=relative_path,
        )
