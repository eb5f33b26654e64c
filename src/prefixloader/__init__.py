"""
prefixloader resolves namespaced symbolic names to source files through a
generated prefix table, and loads each resolved file at most once.

Usage::

    from prefixloader import PrefixLoaderConfig, create_loader

    config = PrefixLoaderConfig.from_toml("prefixloader.toml")
    loader = create_loader(config)
    loader.load_once("ImageOptim\\ImageOptim")
"""

from typing import Optional

from prefixloader.prefix_loader import (
    Loadable,
    ModuleFileExecutor,
    PrefixLoader,
    PrefixModuleFinder,
    Resolution,
    ResolutionStatus,
    new_loader,
)
from prefixloader.prefix_registry import PrefixEntry, PrefixRegistry, new_registry
from prefixloader.prefix_table_models import GeneratedPrefixTable, load_registry
from prefixloader.prefixloader_config import PrefixLoaderConfig
from prefixloader.prefixloader_exceptions import (
    ConfigurationError,
    LoadError,
    PrefixLoaderException,
    TableFormatError,
)
from prefixloader.prefixloader_logger import PrefixLoaderLogger


def create_loader(
    config: PrefixLoaderConfig,
    executor: Optional[Loadable] = None,
    logger: Optional[PrefixLoaderLogger] = None,
) -> PrefixLoader:
    """
    Create a loader from configuration.

    The registry is read from config.table_path when it is set, and is empty
    otherwise.
    """
    if config.table_path:
        registry = load_registry(config.table_path)
    else:
        registry = new_registry()
    return new_loader(registry, executor=executor, config=config, logger=logger)


__all__ = [
    "ConfigurationError",
    "GeneratedPrefixTable",
    "LoadError",
    "Loadable",
    "ModuleFileExecutor",
    "PrefixEntry",
    "PrefixLoader",
    "PrefixLoaderConfig",
    "PrefixLoaderException",
    "PrefixLoaderLogger",
    "PrefixModuleFinder",
    "PrefixRegistry",
    "Resolution",
    "ResolutionStatus",
    "TableFormatError",
    "create_loader",
    "load_registry",
    "new_loader",
    "new_registry",
]
