"""Imports the base class and defines only an abstract generator."""

from abc import abstractmethod

from genharness.generators import IncrementalGenerator


class AbstractGenerator(IncrementalGenerator):
    @abstractmethod
    def template(self) -> str:
        ...


class NotAGenerator:
    def initialize(self, context):
        pass
