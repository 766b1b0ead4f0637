# ==============================================
# Tests for Logging Helpers
# ==============================================

import io
import json
import logging

from njson_engine import NJSONProcessor
from njson_engine import config as config_module
from njson_engine.config import EngineConfig
from njson_engine.logging_utils import configure_logging, log_event


class TestLogEvent:

    def test_emits_compact_json(self, caplog):
        logger = logging.getLogger("njson_engine.tests")
        with caplog.at_level(logging.INFO, logger="njson_engine.tests"):
            log_event(logger, logging.INFO, "parse_finished", valid_count=2, error_count=1)

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload == {"event": "parse_finished", "valid_count": 2, "error_count": 1}

    def test_skipped_when_level_disabled(self, caplog):
        logger = logging.getLogger("njson_engine.tests.quiet")
        with caplog.at_level(logging.WARNING, logger="njson_engine.tests.quiet"):
            log_event(logger, logging.DEBUG, "line_rejected", line_number=3)
        assert caplog.records == []

    def test_parser_reports_finished_event(self, caplog, engine_config):
        with caplog.at_level(logging.INFO, logger="njson_engine"):
            NJSONProcessor(engine_config).parse(io.StringIO('{"a":1}\nbad'))

        events = [json.loads(r.getMessage())["event"] for r in caplog.records]
        assert "parse_finished" in events


class TestConfigureLogging:

    def test_sets_level_and_single_handler(self):
        package_logger = logging.getLogger("njson_engine")
        saved_level = package_logger.level
        saved_handlers = list(package_logger.handlers)
        try:
            configure_logging("debug")
            configure_logging(logging.INFO)
            assert package_logger.level == logging.INFO
            assert len(package_logger.handlers) == max(1, len(saved_handlers))
        finally:
            package_logger.setLevel(saved_level)
            package_logger.handlers = saved_handlers

    def test_level_defaults_to_config(self, monkeypatch):
        monkeypatch.setattr(config_module, "_config_instance", EngineConfig(log_level="ERROR"))
        package_logger = logging.getLogger("njson_engine")
        saved_level = package_logger.level
        saved_handlers = list(package_logger.handlers)
        try:
            configure_logging()
            assert package_logger.level == logging.ERROR
        finally:
            package_logger.setLevel(saved_level)
            package_logger.handlers = saved_handlers
