"""
Configuration parameters for prefixloader.
"""

import inspect
import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from prefixloader.prefixloader_exceptions import ConfigurationError

# Section of a TOML file that holds prefixloader settings
TOML_SECTION = "prefixloader"


@dataclass
class PrefixLoaderConfig:
    """
    Configuration parameters
    """

    namespace_separator: str = "\\"
    file_extension: str = ".py"
    class_map_authoritative: bool = False
    table_path: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.namespace_separator:
            raise ConfigurationError("namespace_separator must not be empty")
        if not self.file_extension.startswith("."):
            raise ConfigurationError(
                f"file_extension must start with '.', got {self.file_extension!r}"
            )

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "PrefixLoaderConfig":
        """
        Create a PrefixLoaderConfig instance from a dictionary, ignoring unknown keys
        """
        return cls(
            **{k: v for k, v in env.items() if k in inspect.signature(cls).parameters}
        )

    @classmethod
    def from_toml(cls, path: Union[str, pathlib.Path]) -> "PrefixLoaderConfig":
        """
        Create a PrefixLoaderConfig from the [prefixloader] table of a TOML file.

        A relative table_path is taken relative to the TOML file's directory.
        """
        path = pathlib.Path(path)
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(f"Could not read configuration {path}: {e}") from e

        section = data.get(TOML_SECTION, {})
        if not isinstance(section, dict):
            raise ConfigurationError(f"[{TOML_SECTION}] in {path} must be a table")

        config = cls.from_dict(section)
        if config.table_path and not pathlib.Path(config.table_path).is_absolute():
            config.table_path = str(path.parent / config.table_path)
        return config
