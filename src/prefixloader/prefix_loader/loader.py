"""
Lazy loader implementation.

Resolves symbolic names to files through the prefix registry and executes
each resolved file at most once.
"""

import importlib.util
import logging
import os
import threading
from types import ModuleType
from typing import Dict, List, Optional, Protocol, Set

from prefixloader.prefix_registry import PrefixRegistry
from prefixloader.prefixloader_config import PrefixLoaderConfig
from prefixloader.prefixloader_exceptions import LoadError
from prefixloader.prefixloader_logger import PrefixLoaderLogger


class ResolutionStatus:
    """Enumeration of resolution outcomes."""

    FOUND = "found"
    PREFIX_NOT_FOUND = "prefix_not_found"
    FILE_NOT_FOUND = "file_not_found"


class Resolution:
    """
    Outcome of resolving a symbolic name.

    Records the selected prefix and every path probed on the way.
    """

    def __init__(
        self,
        symbolic_name: str,
        status: str,
        path: Optional[str] = None,
        prefix: Optional[str] = None,
        probed_paths: Optional[List[str]] = None,
    ):
        """
        Initialize a resolution.

        Args:
            symbolic_name: The name that was resolved
            status: One of the ResolutionStatus values
            path: The resolved file, if found
            prefix: The longest registered prefix that matched, if any
            probed_paths: Candidate paths checked, in probe order
        """
        self.symbolic_name = symbolic_name
        self.status = status
        self.path = path
        self.prefix = prefix
        self.probed_paths = probed_paths or []

    @property
    def found(self) -> bool:
        return self.status == ResolutionStatus.FOUND

    def __repr__(self) -> str:
        return (
            f"Resolution(name={self.symbolic_name}, "
            f"status={self.status}, path={self.path})"
        )


class Loadable(Protocol):
    """
    Capability that executes a resolved file.

    Implementations raise LoadError when the file cannot be executed.
    """

    def execute(self, path: str) -> None:
        ...


class ModuleFileExecutor:
    """
    Executes a source file as a Python module.

    Executed modules are kept per path so callers can reach their namespace.
    """

    def __init__(self, module_name_prefix: str = "_prefixloader_"):
        self.module_name_prefix = module_name_prefix
        self.modules: Dict[str, ModuleType] = {}

    def execute(self, path: str) -> None:
        module_name = self.module_name_prefix + _module_name_for(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoadError(f"Cannot build a module spec for {path}", path=path)

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise LoadError(f"Failed to execute {path}: {e}", path=path) from e

        self.modules[path] = module


def _module_name_for(path: str) -> str:
    stem = os.path.splitext(os.path.abspath(path))[0]
    return "".join(c if c.isalnum() else "_" for c in stem)

def _candidate_path(base_directory: str, relative_path: str) -> str:
    # Leading separators would make os.path.join discard base_directory
    return os.path.join(base_directory, relative_path.lstrip(os.sep + (os.altsep or "")))



class PrefixLoader:
    """
    Resolves symbolic names against a PrefixRegistry and loads them once.

    The registry must be fully populated before the first resolve() or
    load_once() call.
    """

    def __init__(
        self,
        registry: PrefixRegistry,
        executor: Optional[Loadable] = None,
        config: Optional[PrefixLoaderConfig] = None,
        logger: Optional[PrefixLoaderLogger] = None,
    ):
        """
        Initialize the loader.

        Args:
            registry: The populated prefix registry
            executor: Loadable used to execute resolved files
            config: Separator, extension and class map settings
            logger: Logger for resolution and load events
        """
        self.registry = registry
        self.executor = executor if executor is not None else ModuleFileExecutor()
        self.config = config if config is not None else PrefixLoaderConfig()
        self.logger = logger if logger is not None else PrefixLoaderLogger()

        self._loaded: Set[str] = set()
        self._loaded_lock = threading.Lock()
        self._name_locks: Dict[str, list] = {}
        self._name_locks_guard = threading.Lock()
        self._failed_resolutions = 0

    def resolve(self, symbolic_name: str) -> Optional[str]:
        """
        Resolve a symbolic name to an existing file.

        Args:
            symbolic_name: Namespaced identifier, e.g. "Foo\\Bar\\Baz"

        Returns:
            The path of the first existing candidate file, or None
        """
        return self.explain(symbolic_name).path

    def explain(self, symbolic_name: str) -> Resolution:
        """
        Resolve a symbolic name and report how the outcome was reached.

        The class map is consulted first, then the longest matching prefix,
        then the fallback directories.
        """
        probed: List[str] = []

        class_map = self.registry.class_map
        if symbolic_name in class_map:
            mapped = class_map[symbolic_name]
            probed.append(mapped)
            if os.path.isfile(mapped):
                return self._found(symbolic_name, mapped, None, probed)

        if self.config.class_map_authoritative:
            return self._not_found(symbolic_name, ResolutionStatus.PREFIX_NOT_FOUND, None, probed)

        entry = self.registry.find_longest_prefix(symbolic_name)
        if entry is None:
            status = ResolutionStatus.PREFIX_NOT_FOUND
            prefix = None
        else:
            status = ResolutionStatus.FILE_NOT_FOUND
            prefix = entry.prefix
            relative_path = self._relative_path(symbolic_name[entry.length:])
            for base_directory in entry.base_directories:
                candidate = _candidate_path(base_directory, relative_path)
                probed.append(candidate)
                if os.path.isfile(candidate):
                    return self._found(symbolic_name, candidate, prefix, probed)

        fallback_directories = self.registry.fallback_directories
        if fallback_directories:
            relative_path = self._relative_path(symbolic_name)
            for base_directory in fallback_directories:
                candidate = _candidate_path(base_directory, relative_path)
                probed.append(candidate)
                if os.path.isfile(candidate):
                    return self._found(symbolic_name, candidate, prefix, probed)

        return self._not_found(symbolic_name, status, prefix, probed)

    def resolve_directories(self, symbolic_name: str) -> Optional[List[str]]:
        """
        Resolve a symbolic name to the existing directories it denotes.

        A name that is an ancestor of a registered prefix (e.g. "acme" for
        "acme.vendor.") maps to an empty list.

        Returns:
            Existing directories in probe order, or None if the name is unknown
        """
        separator = self.config.namespace_separator
        as_namespace = symbolic_name + separator

        entry = self.registry.find_longest_prefix(as_namespace)
        if entry is not None:
            remainder = as_namespace[entry.length:len(as_namespace) - len(separator)]
            relative_path = remainder.replace(separator, os.sep)
            directories = [
                _candidate_path(base_directory, relative_path) if relative_path else base_directory
                for base_directory in entry.base_directories
            ]
            existing = [d for d in directories if os.path.isdir(d)]
            if existing:
                return existing

        if any(prefix.startswith(as_namespace) for prefix in self.registry.prefixes()):
            return []
        return None

    def load_once(self, symbolic_name: str) -> bool:
        """
        Load the file for symbolic_name unless it has been loaded already.

        Concurrent first calls for the same name execute the file once.

        Returns:
            True if the name is loaded, False if it could not be resolved

        Raises:
            LoadError: If the executor fails; the name stays unloaded
        """
        if symbolic_name in self._loaded:
            return True

        lock = self._acquire_name_lock(symbolic_name)
        try:
            with lock:
                if symbolic_name in self._loaded:
                    return True

                path = self.resolve(symbolic_name)
                if path is None:
                    with self._loaded_lock:
                        self._failed_resolutions += 1
                    self.logger.log(f"Could not resolve {symbolic_name}", logging.WARNING)
                    return False

                try:
                    self.executor.execute(path)
                except LoadError as e:
                    self.logger.log(f"Failed to load {symbolic_name} from {path}: {e}", logging.ERROR)
                    raise

                with self._loaded_lock:
                    self._loaded.add(symbolic_name)
        finally:
            self._release_name_lock(symbolic_name)

        self.logger.log(f"Loaded {symbolic_name} from {path}", logging.INFO)
        return True

    def is_loaded(self, symbolic_name: str) -> bool:
        return symbolic_name in self._loaded

    def loaded_names(self) -> Set[str]:
        with self._loaded_lock:
            return set(self._loaded)

    def get_load_summary(self) -> dict:
        """
        Get a summary of load results.

        Returns:
            Dictionary with counts of loaded names and failed resolutions
        """
        with self._loaded_lock:
            loaded = len(self._loaded)
        return {
            "loaded": loaded,
            "unresolved": self._failed_resolutions,
            "prefixes": len(self.registry),
        }

    def _acquire_name_lock(self, symbolic_name: str) -> threading.Lock:
        # Entries are reference counted so waiters always share one lock
        with self._name_locks_guard:
            entry = self._name_locks.get(symbolic_name)
            if entry is None:
                entry = self._name_locks[symbolic_name] = [threading.Lock(), 0]
            entry[1] += 1
            return entry[0]

    def _release_name_lock(self, symbolic_name: str) -> None:
        with self._name_locks_guard:
            entry = self._name_locks[symbolic_name]
            entry[1] -= 1
            if entry[1] == 0:
                del self._name_locks[symbolic_name]

    def _relative_path(self, remainder: str) -> str:
        return remainder.replace(self.config.namespace_separator, os.sep) + self.config.file_extension

    def _found(self, name: str, path: str, prefix: Optional[str], probed: List[str]) -> Resolution:
        self.logger.log(f"Resolved {name} to {path}", logging.DEBUG)
        return Resolution(name, ResolutionStatus.FOUND, path=path, prefix=prefix, probed_paths=probed)

    def _not_found(
        self, name: str, status: str, prefix: Optional[str], probed: List[str]
    ) -> Resolution:
        self.logger.log(f"Could not resolve {name}: {status}", logging.DEBUG)
        return Resolution(name, status, prefix=prefix, probed_paths=probed)


def new_loader(
    registry: PrefixRegistry,
    executor: Optional[Loadable] = None,
    config: Optional[PrefixLoaderConfig] = None,
    logger: Optional[PrefixLoaderLogger] = None,
) -> PrefixLoader:
    """Create a PrefixLoader over a populated registry."""
    return PrefixLoader(registry, executor=executor, config=config, logger=logger)
