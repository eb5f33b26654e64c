"""
Prefix registry.

This package holds the static table consulted by the loader:
1. Namespace prefixes sharded by their first character
2. The ordered base directories registered for each prefix
3. An explicit class map and fallback directories
"""

from .registry import PrefixEntry, PrefixRegistry, new_registry

__all__ = ["PrefixEntry", "PrefixRegistry", "new_registry"]
