"""
Diagnostic model — messages reported by generators and by the harness.

Diagnostics are purely observational: no severity stops the write
phase. They are rendered one per line on the error stream.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

Severity = Literal["hidden", "info", "warning", "error"]


class Location(BaseModel):
    """Where a diagnostic points: a document path and an optional line."""

    path: str = ""
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}({self.line})"


class Diagnostic(BaseModel):
    """A structured message with an identifier and a severity.

    Rendered the way build tools print them::

        hello.g.txt(3): warning GEN001: something looks odd
        error GEN002: something is wrong
    """

    id: str
    message: str
    severity: Severity = "warning"
    location: Location | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    @classmethod
    def create(
        cls,
        id: str,
        message: str,
        severity: Severity = "warning",
        path: str | None = None,
        line: int | None = None,
        **kwargs: Any,
    ) -> Diagnostic:
        """Create a diagnostic, building its location from ``path``/``line``."""
        location = Location(path=path, line=line) if path else None
        return cls(id=id, message=message, severity=severity, location=location, **kwargs)

    def __str__(self) -> str:
        prefix = f"{self.location}: " if self.location and str(self.location) else ""
        return f"{prefix}{self.severity} {self.id}: {self.message}"
