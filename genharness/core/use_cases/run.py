"""
Run use case — load a generator module, run it once, write its output.

This is the full vertical slice behind the CLI:
    config → properties → validate paths → load module → resolve type
    → execute once → write artifacts

Every step either completes or raises; the caller owns reporting and
the exit code. The output directory is created before the generator
runs, and nothing is written into it unless the run succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from genharness.core.config.loader import load_config
from genharness.core.config.properties import ConfigurationContext, parse_properties
from genharness.core.engine.driver import execute
from genharness.core.engine.host import HostContextBuilder
from genharness.core.engine.loader import (
    create_generator,
    load_generator_module,
    resolve_generator_type,
)
from genharness.core.models.additional_text import AdditionalText, FileAdditionalText
from genharness.core.models.diagnostic import Diagnostic
from genharness.core.services.writer import write_results

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a successful generator run."""

    generator_name: str
    output_dir: Path
    files_written: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "generator": self.generator_name,
            "output_dir": str(self.output_dir),
            "files_written": self.files_written,
            "diagnostics": [str(d) for d in self.diagnostics],
            "warnings": list(self.warnings),
        }


def validate_paths(module_path: Path, output_dir: Path) -> None:
    """Check the module exists and make sure the output directory does.

    Raises:
        FileNotFoundError: If the generator module is missing.
        OSError: If the output directory cannot be created.
    """
    if not module_path.exists():
        raise FileNotFoundError(f"Generator module not found: {module_path}")

    if not output_dir.is_dir():
        logger.info("Output directory does not exist, creating: %s", output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)


def run_generator(
    module_path: Path,
    output_dir: Path,
    properties: Iterable[str] = (),
    additional_text: Path | None = None,
    config_path: Path | None = None,
    builder: HostContextBuilder | None = None,
    on_warning: Callable[[str], None] | None = None,
) -> RunResult:
    """Run the generator found in ``module_path`` and write its artifacts.

    Args:
        module_path: Generator module (.py file or package directory).
        output_dir: Directory receiving one file per artifact.
        properties: Raw ``KEY=VALUE`` entries from the command line.
        additional_text: Optional auxiliary text file.
        config_path: Optional harness config (genharness.yml).
        builder: Optional host context builder (defaults to the platform).
        on_warning: Called with each non-fatal warning as it happens.

    Returns:
        RunResult with the written file count and all diagnostics.
    """
    warnings: list[str] = []

    def warn(message: str) -> None:
        warnings.append(message)
        if on_warning is not None:
            on_warning(message)
        else:
            logger.warning(message)

    module_path = Path(module_path).resolve()
    output_dir = Path(output_dir).resolve()

    config = load_config(config_path)

    parsed = parse_properties(properties)
    for message in parsed.warnings:
        warn(message)
    configuration = ConfigurationContext(config.options).merged(parsed.properties)

    texts: list[AdditionalText] = []
    if additional_text is not None:
        texts.append(FileAdditionalText(additional_text))
    texts.extend(FileAdditionalText(p) for p in config.additional_texts)

    validate_paths(module_path, output_dir)

    module = load_generator_module(module_path)
    resolution = resolve_generator_type(module)
    if resolution.warning:
        warn(resolution.warning)

    generator = create_generator(resolution.generator_type)
    logger.info("Running generator %s from %s", generator.name, module_path)

    artifacts, diagnostics = execute(generator, configuration, texts, builder=builder)

    written = write_results(output_dir, artifacts, type(generator).__name__)
    return RunResult(
        generator_name=generator.name,
        output_dir=output_dir,
        files_written=written,
        diagnostics=diagnostics,
        warnings=warnings,
    )
