"""
Compilation model — the host context a generator runs against.

A compilation is a value: documents plus library references. Adding
documents produces a new compilation and leaves the original intact,
so the driver can diff the result against its base by identity.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Iterable

from pydantic import BaseModel

from genharness.core.models.diagnostic import Diagnostic

DUPLICATE_PATH_ID = "GH0001"


class LibraryReference(BaseModel):
    """A platform or runtime library visible to the host process."""

    name: str
    version: str = ""
    location: str = ""


class SourceDocument(BaseModel):
    """A text document in a compilation.

    Attributes:
        file_path: Origin name of the document. Empty for the placeholder
                   document and for generator output added without a name.
        text:      Full document content.
    """

    file_path: str = ""
    text: str = ""


def _new_assembly_name() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Compilation:
    """An immutable set of documents and references."""

    documents: tuple[SourceDocument, ...] = ()
    references: tuple[LibraryReference, ...] = ()
    assembly_name: str = field(default_factory=_new_assembly_name)

    def add_documents(self, documents: Iterable[SourceDocument]) -> Compilation:
        """Return a new compilation with ``documents`` appended."""
        return Compilation(
            documents=self.documents + tuple(documents),
            references=self.references,
            assembly_name=self.assembly_name,
        )

    def get_diagnostics(self) -> list[Diagnostic]:
        """Compilation-level observations, in document order."""
        diagnostics: list[Diagnostic] = []
        seen: set[str] = set()
        for doc in self.documents:
            if not doc.file_path:
                continue
            if doc.file_path in seen:
                diagnostics.append(Diagnostic.create(
                    DUPLICATE_PATH_ID,
                    f"Document path '{doc.file_path}' is used by more than one document",
                    severity="warning",
                    path=doc.file_path,
                ))
            seen.add(doc.file_path)
        return diagnostics
