"""
Host context builder — the minimal compilation a generator runs against.

The compilation holds one empty placeholder document and a reference
for every library the host process can see. The library list comes
from ``trusted_platform_libraries()``, queried once per run and passed
in, so tests can build against a fixed list.
"""

from __future__ import annotations

import logging
import platform
import re
import sysconfig
from collections.abc import Iterable
from importlib import metadata
from pathlib import Path

from genharness.core.errors import HostEnvironmentError
from genharness.core.models.compilation import Compilation, LibraryReference, SourceDocument

logger = logging.getLogger(__name__)

STDLIB_REFERENCE_NAME = "python"

_NAME_SEPARATORS = re.compile(r"[-_.]+")


def _normalize(name: str) -> str:
    return _NAME_SEPARATORS.sub("-", name).lower()


def trusted_platform_libraries() -> list[LibraryReference]:
    """Enumerate every library visible to the running interpreter.

    The standard library comes first, then each installed distribution
    in ``importlib.metadata`` discovery order. A distribution shadowed by
    an earlier one with the same normalized name is skipped.

    Raises:
        HostEnvironmentError: If the standard library location is unknown.
    """
    stdlib = sysconfig.get_paths().get("stdlib")
    if not stdlib or not Path(stdlib).is_dir():
        raise HostEnvironmentError(
            f"Platform library manifest unavailable: standard library not found ({stdlib!r})"
        )

    refs = [LibraryReference(
        name=STDLIB_REFERENCE_NAME,
        version=platform.python_version(),
        location=stdlib,
    )]
    seen = {STDLIB_REFERENCE_NAME}

    for dist in metadata.distributions():
        meta = dist.metadata
        name = meta.get("Name") if meta is not None else None
        if not name:
            continue
        key = _normalize(name)
        if key in seen:
            continue
        seen.add(key)
        refs.append(LibraryReference(
            name=name,
            version=meta.get("Version") or "",
            location=str(dist.locate_file("")),
        ))

    logger.debug("Found %d platform libraries", len(refs))
    return refs


class HostContextBuilder:
    """Builds the base compilation for a generator run over a fixed reference list."""

    def __init__(self, references: Iterable[LibraryReference]):
        self._references = tuple(references)

    @classmethod
    def from_environment(cls) -> HostContextBuilder:
        """Builder over ``trusted_platform_libraries()``."""
        return cls(trusted_platform_libraries())

    @property
    def references(self) -> tuple[LibraryReference, ...]:
        return self._references

    def build(self) -> Compilation:
        """Return a new compilation: one empty document plus all references.

        Raises:
            HostEnvironmentError: If there are no references to build against.
        """
        if not self._references:
            raise HostEnvironmentError("Platform library manifest unavailable: no references")
        return Compilation(
            documents=(SourceDocument(),),
            references=self._references,
        )
