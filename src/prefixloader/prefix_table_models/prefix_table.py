"""
Pydantic data model for the generated prefix table file.

Structure:
{
  "_description": "...",
  "prefixLengths": {"I": {"ImageOptim\\": 11}},
  "prefixDirs": {"ImageOptim\\": ["../imageoptim/imageoptim/src"]},
  "fallbackDirs": [],
  "classMap": {"ImageOptim\\ImageOptim": "../imageoptim/imageoptim/src/ImageOptim.py"}
}

Relative directories are taken relative to the directory holding the file.
"""

import json
import pathlib
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from prefixloader.prefix_registry import PrefixRegistry, new_registry
from prefixloader.prefixloader_exceptions import TableFormatError


class GeneratedPrefixTable(BaseModel):
    """
    Complete generated prefix table.

    prefix_lengths shards prefixes by first character and records their
    lengths; prefix_dirs lists the base directories of each prefix in
    priority order.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    description: Optional[str] = Field(None, alias="_description")
    prefix_lengths: Dict[str, Dict[str, int]] = Field(
        default_factory=dict, alias="prefixLengths"
    )
    prefix_dirs: Dict[str, List[str]] = Field(default_factory=dict, alias="prefixDirs")
    fallback_dirs: List[str] = Field(default_factory=list, alias="fallbackDirs")
    class_map: Dict[str, str] = Field(default_factory=dict, alias="classMap")

    @model_validator(mode="after")
    def check_prefix_lengths(self) -> "GeneratedPrefixTable":
        for first_char, lengths in self.prefix_lengths.items():
            for prefix, length in lengths.items():
                if not prefix:
                    raise ValueError("prefixes must be non-empty")
                if prefix[0] != first_char:
                    raise ValueError(
                        f"prefix {prefix!r} is filed under {first_char!r}"
                    )
                if length != len(prefix):
                    raise ValueError(
                        f"prefix {prefix!r} has length {len(prefix)}, table says {length}"
                    )

        for prefix in self.prefix_dirs:
            if not prefix or prefix not in self.prefix_lengths.get(prefix[0], {}):
                raise ValueError(f"prefix {prefix!r} has no entry in prefixLengths")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratedPrefixTable":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise TableFormatError(f"Invalid prefix table: {e}") from e

    @classmethod
    def from_file(cls, path: Union[str, pathlib.Path]) -> "GeneratedPrefixTable":
        """
        Load a generated prefix table from a JSON file.

        Raises:
            TableFormatError: If the file is unreadable, not JSON, or invalid
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TableFormatError(f"Could not read prefix table {path}: {e}") from e
        if not isinstance(data, dict):
            raise TableFormatError(f"Prefix table {path} must be a JSON object")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the on-disk layout, using camelCase aliases."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def apply_to(
        self,
        registry: PrefixRegistry,
        base_path: Optional[Union[str, pathlib.Path]] = None,
    ) -> PrefixRegistry:
        """
        Register every prefix, class map entry and fallback directory.

        Args:
            registry: The registry to populate
            base_path: Directory that relative paths are resolved against

        Returns:
            The populated registry
        """
        for lengths in self.prefix_lengths.values():
            for prefix in lengths:
                directories = self.prefix_dirs.get(prefix, [])
                registry.register_many(
                    prefix, [_absolute(d, base_path) for d in directories]
                )

        registry.add_class_map(
            {name: _absolute(p, base_path) for name, p in self.class_map.items()}
        )
        for directory in self.fallback_dirs:
            registry.add_fallback_directory(_absolute(directory, base_path))
        return registry


def _absolute(path: str, base_path: Optional[Union[str, pathlib.Path]]) -> str:
    if base_path is None or pathlib.Path(path).is_absolute():
        return path
    return str(pathlib.Path(base_path) / path)


def load_registry(path: Union[str, pathlib.Path]) -> PrefixRegistry:
    """
    Build a registry from a generated prefix table file.

    Relative paths in the file are resolved against its directory.
    """
    path = pathlib.Path(path)
    table = GeneratedPrefixTable.from_file(path)
    return table.apply_to(new_registry(), base_path=path.parent)
