"""
Model reader — synthesize a project descriptor for a marked module directory.

The host build hands over the location of a marker file
(``build.properties``) and gets back a complete ``Model``:

    marker → module dir → detect descriptor → extract fields
           → find parent → assemble Model

Synthesis is all-or-nothing: every failure propagates to the caller and
no partially filled model is ever returned. The reader keeps no state
between reads.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from pomless.core.errors import DescriptorNotFoundError
from pomless.core.models.descriptor import (
    MODEL_LOCATION_KEY,
    MODEL_VERSION,
    InputSource,
    Model,
    Parent,
    SourceLocation,
)
from pomless.core.models.settings import ReaderSettings
from pomless.core.services.detection import SOURCE, detect_descriptor
from pomless.core.services.extractors import extract_identity
from pomless.core.services.parent_resolver import GroupIdResolver, ParentResolver

logger = logging.getLogger(__name__)


class ModelReader:
    """Reads module directories that carry a marker file instead of a pom.xml."""

    def __init__(
        self,
        settings: ReaderSettings | None = None,
        group_id_resolver: GroupIdResolver | None = None,
    ) -> None:
        self.settings = settings or ReaderSettings()
        self.parent_resolver = ParentResolver(self.settings, group_id_resolver)

    def read(
        self,
        source: Path | str | IO | None = None,
        options: dict | None = None,
    ) -> Model:
        """Synthesize the model for the module marked by a marker file.

        The marker's content is never read, only its location. It is taken
        from ``options[SOURCE]`` when given, otherwise from ``source`` when
        that is a path.

        Raises:
            ValueError: No marker location was supplied.
            DescriptorNotFoundError: The module has no known descriptor.
            ParentNotFoundError: No ancestor provides a parent.
            ModelParseError: A descriptor is broken or incomplete.
        """
        marker = _marker_location(source, options)
        module_dir = marker.parent

        kind = detect_descriptor(module_dir)
        if kind is None:
            raise DescriptorNotFoundError(f"No known descriptor found in {module_dir}", module_dir)

        fields = extract_identity(kind, module_dir, self.settings)
        parent = self.find_parent(module_dir)

        version = fields.version or parent.version
        model_id = f"{parent.group_id}:{fields.artifact_id}:{version}"
        location = SourceLocation(
            line=0,
            column=0,
            source=InputSource(location=str(fields.descriptor), model_id=model_id),
        )

        model = Model(
            model_version=MODEL_VERSION,
            artifact_id=fields.artifact_id,
            version=version,
            packaging=fields.packaging,
            parent=parent,
            name=fields.name,
            pom_file=str(marker),
            locations={MODEL_LOCATION_KEY: location},
        )
        logger.info("Synthesized %s (%s) from %s", model.model_id, model.packaging, fields.descriptor)
        return model

    def find_parent(self, module_dir: Path) -> Parent:
        """Resolve the parent reference for ``module_dir``."""
        return self.parent_resolver.find_parent(Path(module_dir).absolute())


def read_model(marker: Path | str, settings: ReaderSettings | None = None) -> Model:
    """Convenience wrapper: synthesize the model for one marker file."""
    return ModelReader(settings).read(options={SOURCE: str(marker)})


def _marker_location(source: Path | str | IO | None, options: dict | None) -> Path:
    location = (options or {}).get(SOURCE)
    if location is None and isinstance(source, (str, Path)):
        location = source
    if location is None:
        raise ValueError(f"Missing '{SOURCE}' option: the marker file location is required")
    return Path(str(location)).absolute()
