"""
Domain models — Pydantic types for the descriptor reader.

All models are re-exported here for convenient access:

    from pomless.core.models import Model, Parent, DescriptorKind, ReaderSettings
"""

from pomless.core.models.descriptor import (
    MODEL_LOCATION_KEY,
    MODEL_VERSION,
    PACKAGING_TEST_PLUGIN,
    DescriptorKind,
    FieldLocations,
    InputSource,
    Model,
    Parent,
    SourceLocation,
)
from pomless.core.models.settings import ReaderSettings

__all__ = [
    # descriptor.py
    "DescriptorKind",
    "FieldLocations",
    "InputSource",
    "MODEL_LOCATION_KEY",
    "MODEL_VERSION",
    "Model",
    "PACKAGING_TEST_PLUGIN",
    "Parent",
    # settings.py
    "ReaderSettings",
    "SourceLocation",
]
