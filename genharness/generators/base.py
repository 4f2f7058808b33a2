"""
Generator base — the protocol contract between the harness and a plugin.

A generator module defines a subclass of ``IncrementalGenerator``. The
harness calls ``initialize`` exactly once with a
``GeneratorInitializationContext``; the generator reads its inputs and
registers output callbacks, which the driver then runs exactly once each:

    class HelloGenerator(IncrementalGenerator):
        def initialize(self, context):
            context.register_source_output(self.emit)

        def emit(self, ctx, inputs):
            found, greeting = inputs.options.global_options.try_get_value(
                "build_property.greeting")
            ctx.add_source("hello.g.txt", greeting or "")

Post-initialization callbacks run first, then source callbacks, each
group in registration order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from genharness.core.config.properties import ConfigurationContext
from genharness.core.errors import GeneratorProtocolError
from genharness.core.models.additional_text import AdditionalText
from genharness.core.models.compilation import Compilation, SourceDocument
from genharness.core.models.diagnostic import Diagnostic


class AnalyzerConfigOptionsProvider:
    """Configuration visible to a generator.

    Global options hold build properties and host-supplied options.
    Per-document and per-additional-text options are always empty here.
    """

    def __init__(self, global_options: ConfigurationContext | None = None):
        self._global = global_options if global_options is not None else ConfigurationContext.empty()

    @property
    def global_options(self) -> ConfigurationContext:
        return self._global

    def get_options(self, item: SourceDocument | AdditionalText) -> ConfigurationContext:
        return ConfigurationContext.empty()


@dataclass(frozen=True)
class GeneratorInputs:
    """Everything a generator may read during a run."""

    compilation: Compilation
    options: AnalyzerConfigOptionsProvider
    additional_texts: tuple[AdditionalText, ...] = ()


@dataclass
class OutputSink:
    """Collects what a generator produces, in production order."""

    documents: list[SourceDocument] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


class _SealableContext:
    def __init__(self) -> None:
        self._sealed = False

    def seal(self) -> None:
        self._sealed = True

    def _check_open(self, operation: str) -> None:
        if self._sealed:
            raise GeneratorProtocolError(
                f"{operation} called after the {type(self).__name__} was closed"
            )


class PostInitializationContext(_SealableContext):
    """Lets a generator add fixed sources before any input is read."""

    def __init__(self, sink: OutputSink):
        super().__init__()
        self._sink = sink

    def add_source(self, hint_name: str, text: str) -> None:
        """Add a generated document. ``hint_name`` may be empty."""
        self._check_open("add_source")
        if not isinstance(hint_name, str) or not isinstance(text, str):
            raise TypeError("add_source expects a str hint name and str text")
        self._sink.documents.append(SourceDocument(file_path=hint_name, text=text))


class SourceProductionContext(PostInitializationContext):
    """Lets a source-output callback add documents and report diagnostics."""

    def report_diagnostic(self, diagnostic: Diagnostic) -> None:
        self._check_open("report_diagnostic")
        if not isinstance(diagnostic, Diagnostic):
            raise TypeError("report_diagnostic expects a Diagnostic")
        self._sink.diagnostics.append(diagnostic)


PostInitializationCallback = Callable[[PostInitializationContext], None]
SourceOutputCallback = Callable[[SourceProductionContext, GeneratorInputs], None]


class GeneratorInitializationContext(_SealableContext):
    """Handed to ``IncrementalGenerator.initialize``."""

    def __init__(self, inputs: GeneratorInputs):
        super().__init__()
        self._inputs = inputs
        self.post_initialization_callbacks: list[PostInitializationCallback] = []
        self.source_output_callbacks: list[SourceOutputCallback] = []

    @property
    def inputs(self) -> GeneratorInputs:
        return self._inputs

    @property
    def compilation(self) -> Compilation:
        return self._inputs.compilation

    @property
    def options(self) -> AnalyzerConfigOptionsProvider:
        return self._inputs.options

    @property
    def additional_texts(self) -> Sequence[AdditionalText]:
        return self._inputs.additional_texts

    def register_post_initialization_output(self, callback: PostInitializationCallback) -> None:
        self._check_open("register_post_initialization_output")
        self.post_initialization_callbacks.append(callback)

    def register_source_output(self, callback: SourceOutputCallback) -> None:
        self._check_open("register_source_output")
        self.source_output_callbacks.append(callback)


class IncrementalGenerator(ABC):
    """Abstract base class for generator plugins.

    To create a generator:
        1. Subclass IncrementalGenerator in a module
        2. Implement initialize(context) and register output callbacks
        3. Point the harness at the module file
    """

    @property
    def name(self) -> str:
        """The generator identifier, used when naming nameless artifacts."""
        return type(self).__name__

    @abstractmethod
    def initialize(self, context: GeneratorInitializationContext) -> None:
        """Read inputs from ``context`` and register output callbacks."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
