"""
Build properties — the configuration context a generator reads.

CLI-supplied ``KEY=VALUE`` pairs are namespaced with
``build_property.`` before the generator sees them, the convention
generators key their lookups on. Lookups ignore key case.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

BUILD_PROPERTY_PREFIX = "build_property."


class ConfigurationContext(Mapping[str, str]):
    """Immutable, case-insensitive string mapping.

    Later entries overwrite earlier ones whose key differs only by
    case; the spelling of the last write is kept for iteration.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str] | Iterable[tuple[str, str]] = ()):
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        store: dict[str, tuple[str, str]] = {}
        for key, value in pairs:
            store[key.casefold()] = (key, value)
        object.__setattr__(self, "_entries", store)

    @classmethod
    def empty(cls) -> ConfigurationContext:
        return cls()

    def __getitem__(self, key: str) -> str:
        if not isinstance(key, str):
            raise KeyError(key)
        return self._entries[key.casefold()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def try_get_value(self, key: str) -> tuple[bool, str | None]:
        """Return ``(True, value)`` when ``key`` is present, else ``(False, None)``."""
        entry = self._entries.get(key.casefold()) if isinstance(key, str) else None
        if entry is None:
            return False, None
        return True, entry[1]

    def merged(self, other: Mapping[str, str]) -> ConfigurationContext:
        """Return a new context with ``other`` layered over this one."""
        return ConfigurationContext(list(self.items()) + list(other.items()))

    def __repr__(self) -> str:
        return f"ConfigurationContext({dict(self.items())!r})"


@dataclass
class PropertyParseResult:
    """Parsed CLI properties plus the entries that were skipped."""

    properties: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


def strip_option_marker(raw: str, marker: str = "-P:") -> str:
    """Normalize ``-P:key=value`` / ``:key=value`` spellings to ``key=value``."""
    if raw.startswith(marker):
        return raw[len(marker):]
    if raw.startswith(":"):
        return raw[1:]
    return raw


def parse_properties(entries: Iterable[str]) -> PropertyParseResult:
    """Parse ``KEY=VALUE`` entries into prefixed build properties.

    An entry must split into exactly two parts on ``=``; anything else is
    reported as a warning and dropped. A repeated key overwrites the
    earlier value.
    """
    result = PropertyParseResult()
    for entry in entries:
        pair = strip_option_marker(entry).split("=")
        if len(pair) != 2:
            message = f"Warning: Ignoring invalid property format: {entry}"
            logger.debug(message)
            result.warnings.append(message)
            continue
        key, value = pair
        name = f"{BUILD_PROPERTY_PREFIX}{key}"
        if name in result.properties:
            logger.debug("Property %s supplied more than once, keeping last value", key)
        result.properties[name] = value
    return result
