"""
Artifact writer — persist generated documents under an output directory.

Only the final segment of a document's origin name is used, so a
generator cannot write outside the output directory. Documents without
a usable name get ``<generator>_<token>.g.txt``. Two documents that
resolve to the same file name overwrite each other; last write wins.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Sequence
from pathlib import Path

from genharness.core.models.compilation import SourceDocument

logger = logging.getLogger(__name__)

SYNTHESIZED_SUFFIX = ".g.txt"

_SEPARATORS = re.compile(r"[\\/]")
_UNUSABLE_NAMES = {"", ".", ".."}


def artifact_file_name(file_path: str) -> str | None:
    """The final path segment of ``file_path``, or None if unusable."""
    name = _SEPARATORS.split(file_path or "")[-1].strip()
    return None if name in _UNUSABLE_NAMES else name


def synthesize_file_name(generator_name: str) -> str:
    """A fresh name for a nameless artifact; only the last segment of ``generator_name`` is kept."""
    prefix = artifact_file_name(generator_name) or "generator"
    return f"{prefix}_{uuid.uuid4().hex}{SYNTHESIZED_SUFFIX}"


def write_results(
    output_dir: Path,
    artifacts: Sequence[SourceDocument],
    generator_name: str,
) -> int:
    """Write every artifact to ``output_dir``.

    Returns:
        Number of artifacts written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for artifact in artifacts:
        name = artifact_file_name(artifact.file_path)
        if name is None:
            name = synthesize_file_name(generator_name)
            logger.debug("Artifact without a usable name written as %s", name)
        target = output_dir / name
        if target.exists():
            logger.debug("Overwriting %s", target)
        target.write_text(artifact.text, encoding="utf-8")

    return len(artifacts)
