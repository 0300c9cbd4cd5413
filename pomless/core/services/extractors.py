"""
Field extraction — read identity fields out of each descriptor kind.

One extractor per descriptor kind, selected through ``_EXTRACTORS``:

    bundle   META-INF/MANIFEST.MF   Bundle-SymbolicName, Bundle-Version
    feature  feature.xml            <feature id="..." version="...">
    site     category.xml           <site> (id/version optional)

Every extractor either returns complete fields or raises a
``ModelParseError``; nothing partial ever leaves this module.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pomless.core.errors import MalformedDescriptorError, MissingFieldError
from pomless.core.models.descriptor import PACKAGING_TEST_PLUGIN, DescriptorKind
from pomless.core.models.settings import ReaderSettings
from pomless.core.services.detection import descriptor_path

logger = logging.getLogger(__name__)

BUNDLE_SYMBOLIC_NAME = "Bundle-SymbolicName"
BUNDLE_VERSION = "Bundle-Version"
BUNDLE_NAME = "Bundle-Name"

_QUALIFIER_SUFFIX = ".qualifier"
_SNAPSHOT_SUFFIX = "-SNAPSHOT"


@dataclass(frozen=True)
class IdentityFields:
    """What a descriptor says about the module it describes.

    ``version`` is None only for site descriptors, whose version is
    inherited from the parent by the synthesizer.
    """

    artifact_id: str
    version: str | None
    packaging: str
    descriptor: Path
    name: str | None = None


def extract_identity(
    kind: DescriptorKind,
    module_dir: Path,
    settings: ReaderSettings | None = None,
) -> IdentityFields:
    """Extract identity fields from the ``kind`` descriptor in ``module_dir``.

    Raises:
        MissingFieldError: A required field is absent.
        MalformedDescriptorError: The descriptor is not well-formed.
    """
    settings = settings or ReaderSettings()
    descriptor = descriptor_path(module_dir, kind)
    fields = _EXTRACTORS[kind](descriptor, module_dir, settings)
    logger.debug(
        "Extracted %s from %s: %s %s",
        kind.value, descriptor, fields.artifact_id, fields.version,
    )
    return fields


def to_maven_version(osgi_version: str) -> str:
    """Rewrite an OSGi ``.qualifier`` version into its snapshot form.

    >>> to_maven_version("1.0.0.qualifier")
    '1.0.0-SNAPSHOT'
    """
    if osgi_version.endswith(_QUALIFIER_SUFFIX):
        return osgi_version[: -len(_QUALIFIER_SUFFIX)] + _SNAPSHOT_SUFFIX
    return osgi_version


# ── Bundle ──────────────────────────────────────────────────────


def parse_manifest(text: str) -> dict[str, str]:
    """Parse the main section of a JAR manifest into a header mapping.

    Header names are matched case-insensitively, so keys are lower-cased.
    A line starting with a single space continues the previous header.
    The main section ends at the first blank line.
    """
    headers: dict[str, str] = {}
    current: str | None = None

    for line in text.splitlines():
        if not line.strip():
            if headers:
                break
            continue
        if line.startswith(" ") and current is not None:
            headers[current] += line[1:]
            continue
        name, sep, value = line.partition(":")
        if not sep:
            logger.debug("Ignoring malformed manifest line: %r", line)
            current = None
            continue
        current = name.strip().lower()
        headers[current] = value.strip()

    return headers


def _extract_bundle(descriptor: Path, module_dir: Path, settings: ReaderSettings) -> IdentityFields:
    text = descriptor.read_text(encoding="utf-8-sig", errors="replace")
    headers = parse_manifest(text)

    symbolic_name = headers.get(BUNDLE_SYMBOLIC_NAME.lower(), "")
    # Bundle-SymbolicName: my.bundle;singleton:=true
    symbolic_name = symbolic_name.split(";", 1)[0].strip()
    if not symbolic_name:
        raise MissingFieldError(
            f"{BUNDLE_SYMBOLIC_NAME} missing in {descriptor}", descriptor, BUNDLE_SYMBOLIC_NAME
        )

    version = headers.get(BUNDLE_VERSION.lower(), "").strip()
    if not version:
        raise MissingFieldError(
            f"{BUNDLE_VERSION} missing in {descriptor}", descriptor, BUNDLE_VERSION
        )
    if settings.snapshot_qualifier:
        version = to_maven_version(version)

    if settings.test_suffix and module_dir.name.endswith(settings.test_suffix):
        packaging = PACKAGING_TEST_PLUGIN
    else:
        packaging = DescriptorKind.BUNDLE.packaging

    return IdentityFields(
        artifact_id=symbolic_name,
        version=version,
        packaging=packaging,
        descriptor=descriptor,
        name=_literal(headers.get(BUNDLE_NAME.lower())),
    )


# ── Feature ─────────────────────────────────────────────────────


def parse_xml(descriptor: Path) -> ET.Element:
    """Parse an XML descriptor and return its root element."""
    try:
        return ET.parse(descriptor).getroot()
    except ET.ParseError as e:
        raise MalformedDescriptorError(f"Failed to parse {descriptor}: {e}", descriptor) from e


def _extract_feature(descriptor: Path, module_dir: Path, settings: ReaderSettings) -> IdentityFields:
    root = parse_xml(descriptor)

    feature_id = (root.get("id") or "").strip()
    if not feature_id:
        raise MissingFieldError(f"missing feature id in {descriptor}", descriptor, "id")

    version = (root.get("version") or "").strip()
    if not version:
        raise MissingFieldError(f"missing feature version in {descriptor}", descriptor, "version")
    if settings.snapshot_qualifier:
        version = to_maven_version(version)

    return IdentityFields(
        artifact_id=feature_id,
        version=version,
        packaging=DescriptorKind.FEATURE.packaging,
        descriptor=descriptor,
        name=_literal(root.get("label")),
    )


# ── Site ────────────────────────────────────────────────────────


def _extract_site(descriptor: Path, module_dir: Path, settings: ReaderSettings) -> IdentityFields:
    root = parse_xml(descriptor)

    if root.tag != "site":
        raise MissingFieldError(f"missing site element in {descriptor}", descriptor, "site")

    # category.xml rarely names itself; the directory is the fallback identity
    site_id = (root.get("id") or "").strip() or module_dir.name
    version = (root.get("version") or "").strip() or None
    if version and settings.snapshot_qualifier:
        version = to_maven_version(version)

    return IdentityFields(
        artifact_id=site_id,
        version=version,
        packaging=DescriptorKind.SITE.packaging,
        descriptor=descriptor,
        name=_literal(root.get("label")),
    )


def _literal(value: str | None) -> str | None:
    """Drop empty values and %key localization references."""
    if not value or value.startswith("%"):
        return None
    return value.strip() or None


_EXTRACTORS: dict[DescriptorKind, Callable[[Path, Path, ReaderSettings], IdentityFields]] = {
    DescriptorKind.BUNDLE: _extract_bundle,
    DescriptorKind.FEATURE: _extract_feature,
    DescriptorKind.SITE: _extract_site,
}
