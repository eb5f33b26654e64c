"""
Import hook that serves Python imports from a prefix registry.

Dotted module names are resolved with the "." separator. Directories
holding an __init__ file are regular packages; other directories under a
base directory, and parents of a registered prefix, are namespace packages.
"""

import importlib.abc
import importlib.machinery
import importlib.util
import logging
import os
import sys
from typing import Optional, Sequence

from prefixloader.prefix_loader.loader import PrefixLoader
from prefixloader.prefix_registry import PrefixRegistry
from prefixloader.prefixloader_config import PrefixLoaderConfig
from prefixloader.prefixloader_logger import PrefixLoaderLogger


class PrefixModuleFinder(importlib.abc.MetaPathFinder):
    """
    Meta path finder backed by a PrefixRegistry.

    Usage::

        registry = new_registry()
        registry.register("acme.vendored.", "/opt/vendor/acme/src")
        finder = PrefixModuleFinder(registry)
        finder.install()
        import acme.vendored.tools
    """

    def __init__(
        self,
        registry: PrefixRegistry,
        file_extension: str = ".py",
        logger: Optional[PrefixLoaderLogger] = None,
    ):
        self.logger = logger if logger is not None else PrefixLoaderLogger()
        self.loader = PrefixLoader(
            registry,
            config=PrefixLoaderConfig(namespace_separator=".", file_extension=file_extension),
            logger=self.logger,
        )

    def find_spec(
        self,
        fullname: str,
        path: Optional[Sequence[str]] = None,
        target=None,
    ) -> Optional[importlib.machinery.ModuleSpec]:
        package_directories = self.loader.resolve_directories(fullname)

        # A regular package takes precedence over a same-named module file
        init_name = "__init__" + self.loader.config.file_extension
        for package_directory in package_directories or []:
            init_path = os.path.join(package_directory, init_name)
            if os.path.isfile(init_path):
                return importlib.util.spec_from_file_location(
                    fullname, init_path, submodule_search_locations=[package_directory]
                )

        module_path = self.loader.resolve(fullname)
        if module_path is not None:
            return importlib.util.spec_from_file_location(fullname, module_path)

        if package_directories is not None:
            spec = importlib.machinery.ModuleSpec(fullname, None, is_package=True)
            spec.submodule_search_locations = package_directories
            return spec

        return None

    def install(self, prepend: bool = False) -> None:
        """Add the finder to sys.meta_path."""
        if self in sys.meta_path:
            return
        if prepend:
            sys.meta_path.insert(0, self)
        else:
            sys.meta_path.append(self)
        self.logger.log(
            f"Installed import hook for {len(self.loader.registry)} prefixes",
            logging.INFO,
        )

    def uninstall(self) -> None:
        """Remove the finder from sys.meta_path."""
        if self in sys.meta_path:
            sys.meta_path.remove(self)

    def invalidate_caches(self) -> None:
        pass
