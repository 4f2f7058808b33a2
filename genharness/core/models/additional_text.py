"""
Additional texts — non-source inputs handed to a generator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class AdditionalText(ABC):
    """A path-addressed text resource."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Absolute path of the resource."""

    @abstractmethod
    def get_text(self) -> str:
        """Return the resource content."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} path={self.path!r}>"


class FileAdditionalText(AdditionalText):
    """A file on disk, read as UTF-8 each time ``get_text`` is called."""

    def __init__(self, path: str | Path):
        self._path = str(Path(path).resolve())

    @property
    def path(self) -> str:
        return self._path

    def get_text(self) -> str:
        return Path(self._path).read_text(encoding="utf-8")


class InMemoryAdditionalText(AdditionalText):
    """A fixed piece of text with a nominal path. Useful in tests."""

    def __init__(self, path: str, text: str):
        self._path = path
        self._text = text

    @property
    def path(self) -> str:
        return self._path

    def get_text(self) -> str:
        return self._text
