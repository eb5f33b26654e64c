"""
Tests for generated prefix table models.
"""

import json

import pytest

from prefixloader import PrefixLoaderConfig, create_loader
from prefixloader.prefix_loader import new_loader
from prefixloader.prefix_registry import new_registry
from prefixloader.prefix_table_models import GeneratedPrefixTable, load_registry
from prefixloader.prefixloader_exceptions import TableFormatError
from tests.test_utils import RecordingExecutor, write_files


class TestGeneratedPrefixTable:
    """Tests for GeneratedPrefixTable model."""

    @pytest.fixture
    def table_data(self):
        return {
            "_description": "@generated by the dependency tool",
            "prefixLengths": {"I": {"ImageOptim\\": 11}},
            "prefixDirs": {"ImageOptim\\": ["../imageoptim/imageoptim/src"]},
        }

    @pytest.fixture
    def table_path(self, tmp_path, table_data):
        write_files(
            tmp_path / "vendor",
            {
                "imageoptim/imageoptim/src/ImageOptim.py": "",
                "imageoptim/imageoptim/src/Toolchain/Runner.py": "",
            },
        )
        path = tmp_path / "vendor" / "generated" / "prefix_table.json"
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps(table_data))
        return path

    def test_load_table(self, table_data):
        table = GeneratedPrefixTable(**table_data)
        assert table.description is not None
        assert table.prefix_lengths == {"I": {"ImageOptim\\": 11}}
        assert table.prefix_dirs["ImageOptim\\"] == ["../imageoptim/imageoptim/src"]
        assert table.fallback_dirs == []
        assert table.class_map == {}

    def test_populate_by_field_name(self):
        table = GeneratedPrefixTable(
            prefix_lengths={"F": {"Foo\\": 4}}, prefix_dirs={"Foo\\": ["/src"]}
        )
        assert table.prefix_dirs == {"Foo\\": ["/src"]}

    def test_wrong_length_rejected(self, table_data):
        table_data["prefixLengths"]["I"]["ImageOptim\\"] = 10
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_dict(table_data)

    def test_wrong_shard_rejected(self, table_data):
        table_data["prefixLengths"] = {"X": {"ImageOptim\\": 11}}
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_dict(table_data)

    def test_directories_without_length_rejected(self, table_data):
        table_data["prefixDirs"]["Other\\"] = ["/other"]
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_dict(table_data)

    def test_to_dict_round_trip(self, table_data):
        table = GeneratedPrefixTable.from_dict(table_data)
        converted = table.to_dict()

        assert "prefixLengths" in converted
        assert converted["_description"] == table_data["_description"]
        assert GeneratedPrefixTable.from_dict(converted) == table

    def test_apply_to_resolves_relative_directories(self, table_data, tmp_path):
        table = GeneratedPrefixTable.from_dict(table_data)
        registry = table.apply_to(new_registry(), base_path=tmp_path)

        entry = registry.get_entry("ImageOptim\\")
        assert entry.length == 11
        assert entry.base_directories == [str(tmp_path / "../imageoptim/imageoptim/src")]

    def test_apply_to_keeps_absolute_paths(self, tmp_path):
        table = GeneratedPrefixTable.from_dict(
            {
                "prefixLengths": {"F": {"Foo\\": 4}},
                "prefixDirs": {"Foo\\": [str(tmp_path / "src")]},
                "fallbackDirs": ["fallback"],
                "classMap": {"Foo\\Bar": "mapped/Bar.py"},
            }
        )
        registry = table.apply_to(new_registry(), base_path="/base")

        assert registry.get_entry("Foo\\").base_directories == [str(tmp_path / "src")]
        assert registry.fallback_directories == ["/base/fallback"]
        assert registry.class_map == {"Foo\\Bar": "/base/mapped/Bar.py"}

    def test_load_registry_from_file(self, table_path):
        registry = load_registry(table_path)
        loader = new_loader(registry, executor=RecordingExecutor())

        assert loader.resolve("ImageOptim\\Toolchain\\Runner") is not None
        assert loader.load_once("ImageOptim\\ImageOptim") is True

    def test_create_loader_reads_table_path(self, table_path):
        config = PrefixLoaderConfig(table_path=str(table_path))
        loader = create_loader(config, executor=RecordingExecutor())

        assert loader.registry.prefixes() == ["ImageOptim\\"]
        assert loader.load_once("ImageOptim\\ImageOptim") is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_file(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(TableFormatError):
            GeneratedPrefixTable.from_file(path)
