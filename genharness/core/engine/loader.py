"""
Plugin loader — import a generator module and find its generator type.

Loading is the only dynamic part of the harness: the module is imported
from a file path under a fresh name, and its namespace is scanned for
concrete ``IncrementalGenerator`` subclasses it defines.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import re
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from genharness.core.errors import PluginLoadError
from genharness.generators.base import IncrementalGenerator

logger = logging.getLogger(__name__)

_MODULE_PREFIX = "_genharness_plugin"


@dataclass
class GeneratorResolution:
    """The generator type picked from a module, and how it was picked."""

    generator_type: type[IncrementalGenerator]
    candidates: list[type[IncrementalGenerator]] = field(default_factory=list)
    warning: str | None = None

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1


def module_display_name(module: ModuleType) -> str:
    """The module's file path if it has one, else its import name."""
    return getattr(module, "__file__", None) or module.__name__


def load_generator_module(path: Path) -> ModuleType:
    """Import a generator module from a ``.py`` file or a package directory.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        PluginLoadError: If ``path`` is not something Python can import.
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Generator module not found: {path}")

    search_locations: list[str] | None = None
    if path.is_dir():
        location = path / "__init__.py"
        if not location.is_file():
            raise PluginLoadError(f"Not a Python package (no __init__.py): {path}")
        search_locations = [str(path)]
    elif path.suffix == ".py":
        location = path
    else:
        raise PluginLoadError(f"Unsupported generator module (expected .py or package): {path}")

    stem = re.sub(r"\W", "_", path.stem or path.name)
    module_name = f"{_MODULE_PREFIX}_{stem}_{uuid.uuid4().hex[:8]}"

    spec = importlib.util.spec_from_file_location(
        module_name, location, submodule_search_locations=search_locations,
    )
    if spec is None or spec.loader is None:
        raise PluginLoadError(f"Cannot load generator module: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise

    logger.debug("Loaded generator module %s as %s", path, module_name)
    return module


def _defined_in(cls: type, module: ModuleType) -> bool:
    owner = cls.__module__
    return owner == module.__name__ or owner.startswith(module.__name__ + ".")


def find_generator_types(module: ModuleType) -> list[type[IncrementalGenerator]]:
    """Concrete generator classes defined in ``module``, in definition order."""
    found: list[type[IncrementalGenerator]] = []
    for obj in vars(module).values():
        if not inspect.isclass(obj) or obj in found:
            continue
        if not issubclass(obj, IncrementalGenerator) or inspect.isabstract(obj):
            continue
        if not _defined_in(obj, module):
            continue
        found.append(obj)
    return found


def resolve_generator_type(module: ModuleType) -> GeneratorResolution:
    """Pick the generator type to run.

    Raises:
        PluginLoadError: If the module defines no generator.
    """
    candidates = find_generator_types(module)
    display = module_display_name(module)

    if not candidates:
        raise PluginLoadError(f"No IncrementalGenerator implementations found in {display}")

    chosen = candidates[0]
    resolution = GeneratorResolution(generator_type=chosen, candidates=candidates)
    if resolution.ambiguous:
        resolution.warning = (
            f"Warning: Multiple generators found in {display}, "
            f"using the first one: {chosen.__qualname__}"
        )
        logger.debug(resolution.warning)
    return resolution


def create_generator(generator_type: type[IncrementalGenerator]) -> IncrementalGenerator:
    """Instantiate a generator type with no arguments."""
    return generator_type()
