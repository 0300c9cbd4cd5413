"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from pomless.core.models.settings import ReaderSettings
from tests.tree_builders import PARENT_POM, write_feature, write_manifest, write_marker


@pytest.fixture
def settings(tmp_path: Path) -> ReaderSettings:
    """Settings whose parent walk never leaves tmp_path."""
    return ReaderSettings(project_root=str(tmp_path))


@pytest.fixture
def pomless_tree(tmp_path: Path) -> Path:
    """A parent pom.xml with a bundle, a test bundle, a feature and a site below it."""
    root = tmp_path / "testpomless"
    root.mkdir()
    (root / "pom.xml").write_text(PARENT_POM)

    bundle = root / "bundle1"
    write_marker(bundle)
    write_manifest(
        bundle,
        Bundle_SymbolicName="pomless.bundle;singleton:=true",
        Bundle_Version="0.1.0.qualifier",
        Bundle_Name="Pomless Bundle",
    )

    tests = root / "bundle1.tests"
    write_marker(tests)
    write_manifest(tests, Bundle_SymbolicName="pomless.bundle.tests", Bundle_Version="1.0.1")

    feature = root / "feature"
    write_marker(feature)
    write_feature(feature, 'id="pomless.feature" label="Pomless Feature" version="1.0.0.qualifier"')

    site = root / "site"
    write_marker(site)
    (site / "category.xml").write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<site>\n"
        '  <feature id="pomless.feature" version="0.0.0"/>\n'
        "</site>\n"
    )

    return root


@pytest.fixture(autouse=True)
def _restore_loggers():
    """CLI runs configure the pomless logger; undo that after every test."""
    saved = []
    for logger in (logging.getLogger(), logging.getLogger("pomless")):
        saved.append((logger, list(logger.handlers), logger.level, logger.propagate))
    yield
    for logger, handlers, level, propagate in saved:
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate
