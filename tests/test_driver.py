"""
Tests for the generator driver — single-pass execution and diffing.
"""

import pytest

from genharness.core.config.properties import ConfigurationContext
from genharness.core.engine.driver import (
    GeneratorDriver,
    GeneratorRunResult,
    execute,
    new_documents,
)
from genharness.core.errors import GeneratorProtocolError
from genharness.core.models import Compilation, Diagnostic, InMemoryAdditionalText, SourceDocument
from genharness.core.models.compilation import DUPLICATE_PATH_ID
from genharness.generators import IncrementalGenerator

# ── Test generators ──────────────────────────────────────────────────


class RecordingGenerator(IncrementalGenerator):
    """Records what it saw and emits one document per option."""

    def __init__(self):
        self.initialize_calls = 0
        self.seen_compilation = None
        self.seen_texts = None
        self.seen_options = None

    def initialize(self, context):
        self.initialize_calls += 1
        self.seen_compilation = context.compilation
        self.seen_texts = list(context.additional_texts)
        self.seen_options = context.options
        context.register_source_output(self.emit)

    def emit(self, ctx, inputs):
        for key, value in inputs.options.global_options.items():
            ctx.add_source(f"{key}.g.txt", value)


class OrderingGenerator(IncrementalGenerator):
    """Registers callbacks in an order that differs from execution order."""

    def __init__(self):
        self.calls = []

    def initialize(self, context):
        context.register_source_output(lambda ctx, inputs: self._emit(ctx, "source-1"))
        context.register_post_initialization_output(lambda ctx: self._emit(ctx, "post-1"))
        context.register_source_output(lambda ctx, inputs: self._emit(ctx, "source-2"))
        context.register_post_initialization_output(lambda ctx: self._emit(ctx, "post-2"))

    def _emit(self, ctx, label):
        self.calls.append(label)
        ctx.add_source(f"{label}.g.txt", label)


class SameNameGenerator(IncrementalGenerator):
    def initialize(self, context):
        context.register_source_output(self.emit)

    def emit(self, ctx, inputs):
        ctx.add_source("dup.g.txt", "one")
        ctx.add_source("dup.g.txt", "two")
        ctx.add_source("", "same")
        ctx.add_source("", "same")
        ctx.report_diagnostic(Diagnostic.create("SN001", "reported by generator"))


class RaisingGenerator(IncrementalGenerator):
    def initialize(self, context):
        context.register_source_output(self.emit)

    def emit(self, ctx, inputs):
        ctx.add_source("partial.g.txt", "x")
        raise ValueError("generator blew up")


class LateRegistrationGenerator(IncrementalGenerator):
    def initialize(self, context):
        self.context = context
        context.register_source_output(self.emit)

    def emit(self, ctx, inputs):
        self.context.register_source_output(self.emit)


class LeakyContextGenerator(IncrementalGenerator):
    def initialize(self, context):
        context.register_source_output(self.emit)

    def emit(self, ctx, inputs):
        self.leaked = ctx


class EmptyGenerator(IncrementalGenerator):
    def initialize(self, context):
        pass


# ── execute() ────────────────────────────────────────────────────────


class TestExecute:
    def test_returns_named_pair(self, fake_builder):
        result = execute(EmptyGenerator(), ConfigurationContext(), builder=fake_builder)
        assert isinstance(result, GeneratorRunResult)
        artifacts, diagnostics = result
        assert artifacts == []
        assert diagnostics == []

    def test_initialize_called_once(self, fake_builder):
        gen = RecordingGenerator()
        execute(gen, ConfigurationContext({"a": "1"}), builder=fake_builder)
        assert gen.initialize_calls == 1

    def test_generator_sees_host_compilation(self, fake_builder, fake_references):
        gen = RecordingGenerator()
        execute(gen, ConfigurationContext(), builder=fake_builder)
        assert gen.seen_compilation.references == tuple(fake_references)
        assert [d.text for d in gen.seen_compilation.documents] == [""]

    def test_generator_sees_options_and_texts(self, fake_builder):
        gen = RecordingGenerator()
        texts = [InMemoryAdditionalText("/virtual/a.txt", "A")]
        config = ConfigurationContext({"build_property.Greeting": "hi"})
        execute(gen, config, texts, builder=fake_builder)
        assert [t.path for t in gen.seen_texts] == ["/virtual/a.txt"]
        assert gen.seen_options.global_options["build_property.greeting"] == "hi"
        assert len(gen.seen_options.get_options(SourceDocument())) == 0

    def test_artifacts_exclude_base_documents(self, fake_builder):
        config = ConfigurationContext({"x": "1", "y": "2"})
        artifacts, _ = execute(RecordingGenerator(), config, builder=fake_builder)
        assert [(a.file_path, a.text) for a in artifacts] == [("x.g.txt", "1"), ("y.g.txt", "2")]

    def test_post_initialization_runs_before_source_outputs(self, fake_builder):
        gen = OrderingGenerator()
        artifacts, _ = execute(gen, ConfigurationContext(), builder=fake_builder)
        assert gen.calls == ["post-1", "post-2", "source-1", "source-2"]
        assert [a.text for a in artifacts] == gen.calls

    def test_same_names_and_content_all_surface(self, fake_builder):
        artifacts, _ = execute(SameNameGenerator(), ConfigurationContext(), builder=fake_builder)
        assert [(a.file_path, a.text) for a in artifacts] == [
            ("dup.g.txt", "one"),
            ("dup.g.txt", "two"),
            ("", "same"),
            ("", "same"),
        ]

    def test_diagnostics_compilation_first_then_run(self, fake_builder):
        _, diagnostics = execute(SameNameGenerator(), ConfigurationContext(), builder=fake_builder)
        assert [d.id for d in diagnostics] == [DUPLICATE_PATH_ID, "SN001"]

    def test_generator_exception_propagates(self, fake_builder):
        with pytest.raises(ValueError, match="generator blew up"):
            execute(RaisingGenerator(), ConfigurationContext(), builder=fake_builder)

    def test_initialize_exception_propagates(self, fake_builder):
        class Failing(IncrementalGenerator):
            def initialize(self, context):
                raise NotImplementedError("This generator always fails")

        with pytest.raises(NotImplementedError, match="always fails"):
            execute(Failing(), ConfigurationContext(), builder=fake_builder)

    def test_registration_after_initialize_is_rejected(self, fake_builder):
        with pytest.raises(GeneratorProtocolError, match="register_source_output"):
            execute(LateRegistrationGenerator(), ConfigurationContext(), builder=fake_builder)

    def test_context_is_closed_after_callback(self, fake_builder):
        gen = LeakyContextGenerator()
        execute(gen, ConfigurationContext(), builder=fake_builder)
        with pytest.raises(GeneratorProtocolError):
            gen.leaked.add_source("late.g.txt", "late")

    def test_add_source_rejects_non_text(self, fake_builder):
        class BadText(IncrementalGenerator):
            def initialize(self, context):
                context.register_post_initialization_output(lambda ctx: ctx.add_source("a", 42))

        with pytest.raises(TypeError):
            execute(BadText(), ConfigurationContext(), builder=fake_builder)

    def test_repeated_runs_are_identical(self, fake_builder):
        config = ConfigurationContext({"x": "1", "y": "2"})
        first, _ = execute(RecordingGenerator(), config, builder=fake_builder)
        second, _ = execute(RecordingGenerator(), config, builder=fake_builder)
        assert [(a.file_path, a.text) for a in first] == [(a.file_path, a.text) for a in second]

    def test_default_builder_uses_platform(self):
        gen = RecordingGenerator()
        execute(gen, ConfigurationContext())
        assert gen.seen_compilation.references[0].name == "python"


# ── Driver internals ─────────────────────────────────────────────────


class TestGeneratorDriver:
    def test_base_compilation_untouched(self, fake_builder):
        base = fake_builder.build()
        driver = GeneratorDriver(RecordingGenerator())
        updated, diagnostics = driver.run_generators_and_update_compilation(base)
        assert len(base.documents) == 1
        assert updated.documents[0] is base.documents[0]
        assert diagnostics == []

    def test_new_documents_by_identity(self):
        placeholder = SourceDocument()
        twin = SourceDocument()
        base = Compilation(documents=(placeholder,))
        updated = base.add_documents([twin])
        assert new_documents(updated, base) == [twin]
        assert new_documents(updated, base)[0] is twin
