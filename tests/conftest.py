"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from genharness.core.engine.host import HostContextBuilder
from genharness.core.models.compilation import LibraryReference


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def generators_dir(fixtures_dir: Path) -> Path:
    """Return the directory of generator plugin modules."""
    return fixtures_dir / "generators"


@pytest.fixture
def fake_references() -> list[LibraryReference]:
    return [
        LibraryReference(name="python", version="3.12.0", location="/fake/lib/python3.12"),
        LibraryReference(name="click", version="8.2.0", location="/fake/site-packages"),
    ]


@pytest.fixture
def fake_builder(fake_references: list[LibraryReference]) -> HostContextBuilder:
    """A host context builder over a fixed library list."""
    return HostContextBuilder(fake_references)


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created output directory."""
    return tmp_path / "out"
