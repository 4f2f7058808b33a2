"""
Generator driver — run one generator once and collect what it produced.

The driver does no filesystem I/O and never terminates the process.
Anything the generator raises propagates to the caller; on success the
full result is returned, never a partial one.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import NamedTuple

from genharness.core.config.properties import ConfigurationContext
from genharness.core.engine.host import HostContextBuilder
from genharness.core.models.additional_text import AdditionalText
from genharness.core.models.compilation import Compilation, SourceDocument
from genharness.core.models.diagnostic import Diagnostic
from genharness.generators.base import (
    AnalyzerConfigOptionsProvider,
    GeneratorInitializationContext,
    GeneratorInputs,
    IncrementalGenerator,
    OutputSink,
    PostInitializationContext,
    SourceProductionContext,
)

logger = logging.getLogger(__name__)


class GeneratorRunResult(NamedTuple):
    """Newly produced documents plus every diagnostic, both in order."""

    artifacts: list[SourceDocument]
    diagnostics: list[Diagnostic]


class GeneratorDriver:
    """Runs a single generator against a compilation."""

    def __init__(
        self,
        generator: IncrementalGenerator,
        options: AnalyzerConfigOptionsProvider | None = None,
        additional_texts: Sequence[AdditionalText] = (),
    ):
        self._generator = generator
        self._options = options or AnalyzerConfigOptionsProvider()
        self._additional_texts = tuple(additional_texts)

    def run_generators_and_update_compilation(
        self, compilation: Compilation,
    ) -> tuple[Compilation, list[Diagnostic]]:
        """Run the generator once.

        Returns:
            (updated compilation, diagnostics the generator reported).
        """
        inputs = GeneratorInputs(
            compilation=compilation,
            options=self._options,
            additional_texts=self._additional_texts,
        )
        sink = OutputSink()

        init_context = GeneratorInitializationContext(inputs)
        self._generator.initialize(init_context)
        init_context.seal()

        for callback in init_context.post_initialization_callbacks:
            post_context = PostInitializationContext(sink)
            callback(post_context)
            post_context.seal()

        for callback in init_context.source_output_callbacks:
            production_context = SourceProductionContext(sink)
            callback(production_context, inputs)
            production_context.seal()

        logger.debug(
            "%s produced %d document(s), %d diagnostic(s)",
            self._generator.name, len(sink.documents), len(sink.diagnostics),
        )
        return compilation.add_documents(sink.documents), list(sink.diagnostics)


def new_documents(updated: Compilation, base: Compilation) -> list[SourceDocument]:
    """Documents in ``updated`` that are not in ``base``, compared by identity."""
    base_ids = {id(doc) for doc in base.documents}
    return [doc for doc in updated.documents if id(doc) not in base_ids]


def execute(
    generator: IncrementalGenerator,
    configuration: ConfigurationContext,
    additional_texts: Sequence[AdditionalText] = (),
    *,
    builder: HostContextBuilder | None = None,
) -> GeneratorRunResult:
    """Run ``generator`` once against a fresh host compilation.

    Args:
        generator: The generator instance.
        configuration: Global analyzer options (build properties).
        additional_texts: Auxiliary texts visible to the generator.
        builder: Host context builder. Defaults to one over the
                 platform libraries of the running interpreter.

    Returns:
        GeneratorRunResult. Diagnostics are the updated compilation's
        diagnostics followed by those reported during the run.
    """
    if builder is None:
        builder = HostContextBuilder.from_environment()
    compilation = builder.build()

    driver = GeneratorDriver(
        generator,
        options=AnalyzerConfigOptionsProvider(configuration),
        additional_texts=additional_texts,
    )
    updated, run_diagnostics = driver.run_generators_and_update_compilation(compilation)

    artifacts = new_documents(updated, compilation)
    diagnostics = updated.get_diagnostics() + run_diagnostics
    return GeneratorRunResult(artifacts=artifacts, diagnostics=diagnostics)
