"""
Settings and logging configuration tests.
"""
from __future__ import annotations

import json
import logging

import pytest

from dealerwatch import ConfigurationError, Settings
from dealerwatch.config import DEFAULT_DEALER_COUNT, DEFAULT_DIRECTORY_SEED
from dealerwatch.logging_config import ROOT_LOGGER, JSONFormatter, configure_logging
from dealerwatch.models import GenerationMode


class TestSettingsFromEnv:

    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.generation_mode == GenerationMode.SEEDED
        assert settings.directory_seed == DEFAULT_DIRECTORY_SEED
        assert settings.dealer_count == DEFAULT_DEALER_COUNT
        assert settings.docs_enabled is True

    def test_values(self) -> None:
        settings = Settings.from_env({
            "DW_GENERATION_MODE": "RANDOM",
            "DW_DIRECTORY_SEED": "99",
            "DW_DEALER_COUNT": "0",
            "DW_LOG_LEVEL": "debug",
            "DW_LOG_FORMAT": "TEXT",
            "DW_DOCS_ENABLED": "false",
        })
        assert settings.generation_mode == GenerationMode.RANDOM
        assert settings.directory_seed == 99
        assert settings.dealer_count == 0
        assert settings.log_format == "text"
        assert settings.docs_enabled is False

    def test_blank_integer_uses_default(self) -> None:
        assert Settings.from_env({"DW_DEALER_COUNT": ""}).dealer_count == DEFAULT_DEALER_COUNT

    @pytest.mark.parametrize("env", [
        {"DW_GENERATION_MODE": "chaotic"},
        {"DW_DIRECTORY_SEED": "abc"},
        {"DW_DEALER_COUNT": "-1"},
        {"DW_LOG_LEVEL": "LOUD"},
        {"DW_LOG_FORMAT": "xml"},
    ])
    def test_invalid(self, env) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_env(env)
        assert exc_info.value.code == "DW_CONFIG_INVALID"


class TestLogging:

    def test_json_formatter_includes_extras(self) -> None:
        record = logging.LogRecord(
            name="dealerwatch.engine", level=logging.INFO, pathname=__file__, lineno=1,
            msg="Assembled %s", args=("audit",), exc_info=None,
        )
        record.dealer_index = 7
        record.audit_source = "generated"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "Assembled audit"
        assert entry["level"] == "INFO"
        assert entry["dealer_index"] == 7
        assert entry["audit_source"] == "generated"
        assert "request_id" not in entry

    def test_configure_is_idempotent(self) -> None:
        configure_logging("WARNING", "json")
        configure_logging("INFO", "text")
        logger = logging.getLogger(ROOT_LOGGER)
        installed = [h for h in logger.handlers if getattr(h, "_dealerwatch_handler", False)]
        assert len(installed) == 1
        assert logger.level == logging.INFO
        assert not isinstance(installed[0].formatter, JSONFormatter)
