"""
Harness error types.

Every component below the CLI either completes its contract or raises
one of these (or a plain ``OSError`` / ``FileNotFoundError`` for
filesystem problems). Only ``genharness.main`` catches them.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class ConfigError(HarnessError):
    """Raised when the harness configuration file is invalid."""


class HostEnvironmentError(HarnessError):
    """Raised when the platform library manifest cannot be read."""


class PluginLoadError(HarnessError):
    """Raised when a generator module cannot be loaded or holds no generator."""


class GeneratorProtocolError(HarnessError):
    """Raised when a generator uses its context outside the allowed phase."""
