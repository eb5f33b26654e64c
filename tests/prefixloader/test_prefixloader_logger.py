"""
Tests for PrefixLoaderLogger.
"""

import inspect
import json
import logging

from prefixloader.prefixloader_logger import PrefixLoaderLogger


def test_log_emits_json_line_with_caller(caplog):
    logger = PrefixLoaderLogger()

    with caplog.at_level(logging.INFO, logger="prefixloader"):
        logger.log("Loaded Foo\\Bar\nfrom disk", logging.INFO)

    assert len(caplog.records) == 1
    line = json.loads(caplog.records[0].getMessage())
    assert line["level"] == "INFO"
    assert line["message"] == "Loaded Foo\\Bar from disk"
    assert line["caller_file"] == "test_prefixloader_logger.py"
    assert line["caller_name"] == "test_log_emits_json_line_with_caller"


def test_debug_suppressed_at_info(caplog):
    logger = PrefixLoaderLogger()

    with caplog.at_level(logging.INFO, logger="prefixloader"):
        logger.log("Resolved Foo\\Bar", logging.DEBUG)

    assert caplog.records == []


def test_disabled_level_skips_frame_inspection(caplog, monkeypatch):
    logger = PrefixLoaderLogger()

    def fail_getouterframes(*args, **kwargs):
        raise AssertionError("frames collected for a disabled level")

    monkeypatch.setattr(inspect, "getouterframes", fail_getouterframes)
    with caplog.at_level(logging.INFO, logger="prefixloader"):
        logger.log("Resolved Foo\\Bar", logging.DEBUG)

    assert caplog.records == []
