"""
Domain models for a generator run.

    from genharness.core.models import Compilation, SourceDocument, Diagnostic
"""

from genharness.core.models.additional_text import (
    AdditionalText,
    FileAdditionalText,
    InMemoryAdditionalText,
)
from genharness.core.models.compilation import (
    Compilation,
    LibraryReference,
    SourceDocument,
)
from genharness.core.models.diagnostic import Diagnostic, Location, Severity

__all__ = [
    # additional_text.py
    "AdditionalText",
    # compilation.py
    "Compilation",
    # diagnostic.py
    "Diagnostic",
    "FileAdditionalText",
    "InMemoryAdditionalText",
    "LibraryReference",
    "Location",
    "Severity",
    "SourceDocument",
]
