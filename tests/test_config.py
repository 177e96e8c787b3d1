"""Tests for settings, logging setup and the error hierarchy."""

import logging
import os

import pytest
from pydantic import ValidationError

from luma import config
from luma.config import Settings, configure_logging
from luma.errors import (
    ConfigurationError,
    InvalidWeightsError,
    LumaError,
    TraversalError,
    UnknownNodeKindError,
    UnknownPatternError,
)


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LUMA_"):
            monkeypatch.delenv(key)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_defaults(clean_env):
    s = Settings()
    assert s.HIGH_CONFIDENCE_THRESHOLD == 80
    assert s.MEDIUM_CONFIDENCE_THRESHOLD == 50
    assert s.MIN_OVERALL_SCORE == 85
    assert s.POINTER_ROOT == "/screen/root"
    assert s.LOG_LEVEL == "INFO"


def test_settings_read_prefixed_env(clean_env, monkeypatch):
    monkeypatch.setenv("LUMA_MIN_OVERALL_SCORE", "90")
    monkeypatch.setenv("LUMA_POINTER_ROOT", "/doc")
    s = Settings()
    assert s.MIN_OVERALL_SCORE == 90
    assert s.POINTER_ROOT == "/doc"


def test_unprefixed_env_ignored(clean_env, monkeypatch):
    monkeypatch.setenv("MIN_OVERALL_SCORE", "10")
    assert Settings().MIN_OVERALL_SCORE == 85


def test_inverted_bands_rejected(clean_env):
    with pytest.raises(ValidationError, match="MEDIUM_CONFIDENCE_THRESHOLD"):
        Settings(HIGH_CONFIDENCE_THRESHOLD=60, MEDIUM_CONFIDENCE_THRESHOLD=60)


def test_out_of_range_score_rejected(clean_env):
    with pytest.raises(ValidationError):
        Settings(MIN_OVERALL_SCORE=101)


def test_version():
    import luma

    assert luma.__version__ == config.VERSION


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def _luma_handlers(self, logger):
        return [h for h in logger.handlers if getattr(h, "_luma_handler", False)]

    def test_single_handler_after_repeat_calls(self):
        configure_logging()
        logger = configure_logging("debug")
        assert logger.name == "luma"
        assert len(self._luma_handlers(logger)) == 1
        assert logger.level == logging.DEBUG

    def test_level_defaults_to_settings(self, monkeypatch):
        monkeypatch.setattr("luma.config.settings.LOG_LEVEL", "WARNING")
        assert configure_logging().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert configure_logging("chatty").level == logging.INFO

    def _record(self):
        return logging.LogRecord(
            "luma.patterns.engine", logging.WARNING, __file__, 1, "Rule %s raised", ("x",), None,
        )

    def test_formatter_output(self):
        logger = configure_logging()
        formatter = self._luma_handlers(logger)[0].formatter
        line = formatter.format(self._record())
        assert "WARNING" in line
        assert line.endswith(" patterns.engine: Rule x raised")

    def test_color_wraps_level_only(self):
        record = self._record()
        line = config._LevelFormatter(use_color=True).format(record)
        assert "\033[33mWARNING \033[0m" in line
        assert line.endswith(" patterns.engine: Rule x raised")
        assert record.levelname == "WARNING"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(ConfigurationError, LumaError)
        assert issubclass(InvalidWeightsError, ConfigurationError)
        assert issubclass(UnknownPatternError, ConfigurationError)
        assert issubclass(UnknownNodeKindError, TraversalError)

    def test_base_to_dict(self):
        err = LumaError("bad input", detail={"field": "x"})
        assert str(err) == "bad input"
        assert err.to_dict() == {"error": "LumaError", "message": "bad input", "field": "x"}

    def test_invalid_weights_message(self):
        err = InvalidWeightsError({"pattern_fidelity": 0.5}, 0.5)
        assert str(err) == "Score weights must sum to 1.0 (got 0.5)"
        assert "reason" not in err.to_dict()

    def test_unknown_pattern_lists_available(self):
        err = UnknownPatternError("carousel", ["Form.Basic", "form"])
        assert str(err) == "Pattern 'carousel' not found. Available: Form.Basic, form"
        assert err.to_dict()["available_patterns"] == ["Form.Basic", "form"]

    def test_unknown_node_kind_pointer(self):
        assert str(UnknownNodeKindError("n1", "Mystery")) == "Unrecognised node kind 'Mystery' for node 'n1'"
        err = UnknownNodeKindError("n1", "Mystery", "/screen/root/children/0")
        assert str(err).endswith(" at /screen/root/children/0")
        assert err.to_dict()["kind"] == "Mystery"
