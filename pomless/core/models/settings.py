"""
Reader settings — knobs loaded from pomless.yml.

Every field has a default, so a missing config file simply means
``ReaderSettings()``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ReaderSettings(BaseModel):
    """Options that shape how module directories are read.

    ``project_root`` and the keys of ``group_ids`` are absolute paths once
    the loader has resolved them against the config file's directory.
    """

    marker_file: str = "build.properties"
    test_suffix: str = ".tests"
    snapshot_qualifier: bool = True    # 1.0.0.qualifier -> 1.0.0-SNAPSHOT
    max_depth: int = Field(default=20, ge=1)
    project_root: str | None = None    # parent walk never goes above this
    group_ids: dict[str, str] = Field(default_factory=dict)
