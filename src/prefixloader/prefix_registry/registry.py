"""
Prefix registry implementation.

Stores namespace prefixes and the directories they map to. The registry is
populated during a single-threaded initialization phase and only read after
lookups begin.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass
class PrefixEntry:
    """
    A registered namespace prefix and the base directories searched for it.
    """

    prefix: str
    length: int
    base_directories: List[str] = field(default_factory=list)

    def matches(self, symbolic_name: str) -> bool:
        """Check if the prefix is a literal prefix of symbolic_name."""
        return symbolic_name.startswith(self.prefix)


class PrefixRegistry:
    """
    Namespace prefix table, indexed by the first character of each prefix.

    Entries sharing a first character are kept in insertion order, and each
    entry keeps its base directories in registration order.
    """

    def __init__(self) -> None:
        self._entries_by_first_char: Dict[str, List[PrefixEntry]] = {}
        self._entries_by_prefix: Dict[str, PrefixEntry] = {}
        self._class_map: Dict[str, str] = {}
        self._fallback_directories: List[str] = []

    def register(self, prefix: str, base_directory: str) -> None:
        """
        Register base_directory as a search root for prefix.

        Registering the same pair again adds a duplicate candidate directory.

        Args:
            prefix: Non-empty namespace prefix, e.g. "Foo\\"
            base_directory: Directory holding the files for names under prefix
        """
        self.register_many(prefix, [base_directory])

    def register_many(
        self, prefix: str, base_directories: Iterable[str], prepend: bool = False
    ) -> None:
        """
        Register several base directories for prefix at once.

        Args:
            prefix: Non-empty namespace prefix
            base_directories: Directories in priority order
            prepend: Put the directories ahead of those already registered
        """
        if not prefix:
            raise ValueError("A prefix must be a non-empty string")

        entry = self._entries_by_prefix.get(prefix)
        if entry is None:
            entry = PrefixEntry(prefix=prefix, length=len(prefix))
            self._entries_by_prefix[prefix] = entry
            self._entries_by_first_char.setdefault(prefix[0], []).append(entry)

        directories = [str(d) for d in base_directories]
        if prepend:
            entry.base_directories[:0] = directories
        else:
            entry.base_directories.extend(directories)

    def add_class_map(self, class_map: Dict[str, str]) -> None:
        """Add explicit symbolic name to file path mappings."""
        self._class_map.update({name: str(path) for name, path in class_map.items()})

    def add_fallback_directory(self, directory: str) -> None:
        """Add a directory probed when no prefix yields a file."""
        self._fallback_directories.append(str(directory))

    def entries_for(self, first_char: str) -> List[PrefixEntry]:
        """Get the entries whose prefix starts with first_char, in insertion order."""
        return list(self._entries_by_first_char.get(first_char, []))

    def get_entry(self, prefix: str) -> Optional[PrefixEntry]:
        return self._entries_by_prefix.get(prefix)

    def find_longest_prefix(self, symbolic_name: str) -> Optional[PrefixEntry]:
        """
        Find the entry with the longest prefix that literally prefixes symbolic_name.

        Args:
            symbolic_name: The name being resolved

        Returns:
            The most specific matching PrefixEntry, or None if nothing matches
        """
        if not symbolic_name:
            return None

        best: Optional[PrefixEntry] = None
        for entry in self._entries_by_first_char.get(symbolic_name[0], []):
            if entry.matches(symbolic_name) and (best is None or entry.length > best.length):
                best = entry
        return best

    def prefixes(self) -> List[str]:
        return list(self._entries_by_prefix.keys())

    @property
    def class_map(self) -> Dict[str, str]:
        return dict(self._class_map)

    @property
    def fallback_directories(self) -> List[str]:
        return list(self._fallback_directories)

    def __len__(self) -> int:
        return len(self._entries_by_prefix)

    def __repr__(self) -> str:
        return (
            f"PrefixRegistry(prefixes={len(self._entries_by_prefix)}, "
            f"class_map={len(self._class_map)}, "
            f"fallback_dirs={len(self._fallback_directories)})"
        )


def new_registry() -> PrefixRegistry:
    """Create an empty PrefixRegistry."""
    return PrefixRegistry()
