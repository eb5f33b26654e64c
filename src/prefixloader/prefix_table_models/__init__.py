"""
Generated prefix table models.

This package provides Pydantic data models for the prefix table emitted by
the dependency tool, and copies a parsed table into a PrefixRegistry.
"""

from .prefix_table import GeneratedPrefixTable, load_registry

__all__ = ["GeneratedPrefixTable", "load_registry"]
