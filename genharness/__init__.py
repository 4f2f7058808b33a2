"""genharness — run a code generator plugin once and collect its output."""

__version__ = "0.1.0"
