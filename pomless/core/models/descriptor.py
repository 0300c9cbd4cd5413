"""
Descriptor models — the synthesized project descriptor and its parts.

A ``Model`` is what the reader hands back to the host build: the identity
of a module directory, its packaging kind, the parent project it inherits
from, and where each field came from. All models are frozen: they are
built once per read and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

MODEL_VERSION = "4.0.0"

# Key under which whole-model provenance is stored in ``Model.locations``
MODEL_LOCATION_KEY = ""


class DescriptorKind(str, Enum):
    """Which non-native descriptor a module directory carries."""

    BUNDLE = "bundle"
    FEATURE = "feature"
    SITE = "site"

    @property
    def relative_path(self) -> str:
        """Fixed path of the descriptor, relative to the module directory."""
        return _DESCRIPTOR_PATHS[self]

    @property
    def packaging(self) -> str:
        """Default packaging kind synthesized for this descriptor."""
        return _DEFAULT_PACKAGING[self]


_DESCRIPTOR_PATHS = {
    DescriptorKind.BUNDLE: "META-INF/MANIFEST.MF",
    DescriptorKind.FEATURE: "feature.xml",
    DescriptorKind.SITE: "category.xml",
}

_DEFAULT_PACKAGING = {
    DescriptorKind.BUNDLE: "eclipse-plugin",
    DescriptorKind.FEATURE: "eclipse-feature",
    DescriptorKind.SITE: "eclipse-repository",
}

PACKAGING_TEST_PLUGIN = "eclipse-test-plugin"


class InputSource(BaseModel):
    """The file a model was synthesized from, plus the owning model's id."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    location: str                # absolute path of the descriptor file
    model_id: str                # groupId:artifactId:version of the owner


class SourceLocation(BaseModel):
    """Provenance of a model field.

    Line and column are always 0: only file identity is tracked.
    """

    model_config = ConfigDict(frozen=True)

    line: int = 0
    column: int = 0
    source: InputSource


class Parent(BaseModel):
    """Reference to the ancestor project a module inherits from."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str
    relative_path: str = ".."

    @property
    def id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class FieldLocations(Mapping):
    """Read-only, hashable view of field path → ``SourceLocation``."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, SourceLocation] | None = None) -> None:
        self._entries = dict(entries or {})

    def __getitem__(self, key: str) -> SourceLocation:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __reduce__(self):
        return (type(self), (self._entries,))

    def __repr__(self) -> str:
        return f"FieldLocations({self._entries!r})"


class Model(BaseModel):
    """A synthesized project descriptor.

    ``group_id`` is never declared on a synthesized model; it is always
    inherited from ``parent``.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_version: str = MODEL_VERSION
    artifact_id: str
    version: str
    packaging: str
    parent: Parent
    name: str | None = None
    pom_file: str | None = None   # absolute path of the marker file
    locations: Mapping[str, SourceLocation] = Field(default_factory=dict, validate_default=True)

    @field_validator("locations", mode="after")
    @classmethod
    def freeze_locations(cls, value: Mapping[str, SourceLocation]) -> FieldLocations:
        return FieldLocations(value)

    @field_serializer("locations")
    def dump_locations(self, value: Mapping[str, SourceLocation]) -> dict:
        return {key: loc.model_dump() for key, loc in value.items()}

    @property
    def group_id(self) -> str:
        return self.parent.group_id

    @property
    def model_id(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def get_location(self, field_path: str) -> SourceLocation | None:
        """Look up where a field came from (``""`` is the whole model)."""
        return self.locations.get(field_path)

    def to_dict(self) -> dict:
        return {
            "modelVersion": self.model_version,
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "version": self.version,
            "packaging": self.packaging,
            "name": self.name,
            "parent": {
                "groupId": self.parent.group_id,
                "artifactId": self.parent.artifact_id,
                "version": self.parent.version,
                "relativePath": self.parent.relative_path,
            },
            "pomFile": self.pom_file,
            "locations": {
                key: {
                    "line": loc.line,
                    "column": loc.column,
                    "source": loc.source.location,
                    "modelId": loc.source.model_id,
                }
                for key, loc in self.locations.items()
            },
        }
