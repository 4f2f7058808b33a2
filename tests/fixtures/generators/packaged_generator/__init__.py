from .impl import PackagedGenerator

__all__ = ["PackagedGenerator"]
