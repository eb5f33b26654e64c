"""
Lazy loader.

This package handles:
1. Resolving symbolic names through the longest registered prefix
2. Executing each resolved file at most once
3. Serving Python imports from the same prefix table
"""

from .loader import (
    Loadable,
    ModuleFileExecutor,
    PrefixLoader,
    Resolution,
    ResolutionStatus,
    new_loader,
)
from .import_hook import PrefixModuleFinder

__all__ = [
    "Loadable",
    "ModuleFileExecutor",
    "PrefixLoader",
    "PrefixModuleFinder",
    "Resolution",
    "ResolutionStatus",
    "new_loader",
]
