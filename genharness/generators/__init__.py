"""Generator protocol: the API plugin modules import.

Public re-exports for convenient access.
"""

from genharness.core.models.diagnostic import Diagnostic
from genharness.generators.base import (
    AnalyzerConfigOptionsProvider,
    GeneratorInitializationContext,
    GeneratorInputs,
    IncrementalGenerator,
    PostInitializationContext,
    SourceProductionContext,
)

__all__ = [
    "AnalyzerConfigOptionsProvider",
    "Diagnostic",
    "GeneratorInitializationContext",
    "GeneratorInputs",
    "IncrementalGenerator",
    "PostInitializationContext",
    "SourceProductionContext",
]
