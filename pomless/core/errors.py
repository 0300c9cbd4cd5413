"""
Reader errors.

Two families, because callers react differently:

    ModelParseError          a descriptor exists but is broken or incomplete
    DescriptorNotFoundError  the expected project structure is absent

Messages name the offending file or directory verbatim; consumers match
on substrings of them. Every error survives a pickle round trip, so reads
fanned out to worker processes report the same diagnostic.
"""

from __future__ import annotations

from pathlib import Path


class ModelParseError(Exception):
    """A descriptor file exists but cannot be turned into a model."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None

    def __reduce__(self):
        return (type(self), (str(self), self.path))


class MissingFieldError(ModelParseError):
    """A well-formed descriptor lacks a required field."""

    def __init__(self, message: str, path: Path | str, field: str) -> None:
        super().__init__(message, path)
        self.field = field

    def __reduce__(self):
        return (type(self), (str(self), self.path, self.field))


class MalformedDescriptorError(ModelParseError):
    """A descriptor is not well-formed (e.g. broken XML)."""


class DescriptorNotFoundError(FileNotFoundError):
    """No known descriptor is present where one was expected."""

    def __init__(self, message: str, directory: Path | str) -> None:
        super().__init__(message)
        self.directory = str(directory)

    def __reduce__(self):
        return (type(self), (str(self), self.directory))


class ParentNotFoundError(DescriptorNotFoundError):
    """No ancestor directory provides a parent project."""
