"""Config module tests.

Tests POPEN_RUNNER_* environment variable parsing and the global instance.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest import mock

import pytest

from popen_runner.config import (
    DEFAULT_ENCODING,
    Config,
    get_config,
    load_config,
    reload_config,
)


class TestParseEncoding:
    """Test encoding parsing."""

    def test_unset_means_default(self):
        """Unset encoding uses the default."""
        env = {k: v for k, v in os.environ.items() if k != "POPEN_RUNNER_ENCODING"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_config()
            assert config.encoding == DEFAULT_ENCODING

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_means_default(self, value: str):
        """Blank encoding uses the default."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_ENCODING": value}, clear=False):
            config = load_config()
            assert config.encoding == DEFAULT_ENCODING

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("utf-8", "utf-8"),
            ("UTF8", "utf-8"),
            (" latin-1 ", "iso8859-1"),
            ("ascii", "ascii"),
        ],
    )
    def test_canonical_name(self, value: str, expected: str):
        """Codec aliases resolve to their canonical name."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_ENCODING": value}, clear=False):
            config = load_config()
            assert config.encoding == expected

    def test_unknown_codec_means_default(self):
        """Unknown codec names fall back to the default."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_ENCODING": "no-such-codec"}, clear=False):
            config = load_config()
            assert config.encoding == DEFAULT_ENCODING


class TestParseBool:
    """Test boolean parsing."""

    @pytest.mark.parametrize("value", ["true", "True", "TRUE", "1", "yes", "Yes", "on"])
    def test_truthy_values(self, value: str):
        """Truthy values enable debug logging."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_LOG_DEBUG": value}, clear=False):
            config = load_config()
            assert config.log_debug is True

    @pytest.mark.parametrize("value", ["false", "False", "FALSE", "0", "no", "No", "off", ""])
    def test_falsy_values(self, value: str):
        """Falsy values leave debug logging off."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_LOG_DEBUG": value}, clear=False):
            config = load_config()
            assert config.log_debug is False
            assert config.log_file is None

    def test_log_debug_default_false(self):
        """Debug logging is off by default."""
        env = {k: v for k, v in os.environ.items() if k != "POPEN_RUNNER_LOG_DEBUG"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_config()
            assert config.log_debug is False


class TestLogFile:
    """Test log file path generation."""

    def test_log_file_generated(self):
        """Debug mode generates an absolute log file path."""
        with mock.patch.dict(os.environ, {"POPEN_RUNNER_LOG_DEBUG": "true"}, clear=False):
            config = load_config()
            assert config.log_file is not None
            path = Path(config.log_file)
            assert path.is_absolute()
            assert path.parent.name == "popen-runner"
            assert path.name.startswith("popen_runner_debug_")
            assert path.suffix == ".log"


class TestConfigMethods:
    """Test Config class methods."""

    def test_defaults(self):
        """Default values."""
        config = Config()
        assert config.encoding == "utf-8"
        assert config.log_debug is False
        assert config.log_file is None

    def test_repr(self):
        """String representation."""
        config = Config(encoding="ascii", log_debug=True, log_file="/tmp/x.log")
        repr_str = repr(config)
        assert "encoding=ascii" in repr_str
        assert "log_debug=True" in repr_str
        assert "log_file=/tmp/x.log" in repr_str


class TestGlobalConfig:
    """Test the global configuration instance."""

    def test_get_config_returns_same_instance(self):
        """get_config returns the same instance."""
        reload_config()
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2

    def test_reload_config_creates_new_instance(self):
        """reload_config creates a new instance."""
        config1 = get_config()
        config2 = reload_config()
        assert config1 is not config2
        assert get_config() is config2

    def test_reload_picks_up_environment(self):
        """reload_config re-reads the environment."""
        try:
            with mock.patch.dict(os.environ, {"POPEN_RUNNER_ENCODING": "ascii"}, clear=False):
                assert reload_config().encoding == "ascii"
        finally:
            reload_config()
