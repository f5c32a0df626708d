"""Tests for scan settings."""

import os

import pytest

from stack_scanner.config import OutputFormat, ScanConfig
from stack_scanner.errors import ConfigError


class TestScanConfig:
    """Test ScanConfig defaults and overrides."""

    def test_defaults(self):
        """Test default limits."""
        config = ScanConfig.from_env({})
        assert config.max_file_size == 1024 * 1024
        assert config.workers == (os.cpu_count() or 1)
        assert config.match_timeout == 2.0
        assert config.profiles is None
        assert config.output_format == OutputFormat.text

    def test_environment(self):
        """Test STACK_SCANNER_* variables."""
        config = ScanConfig.from_env({
            "STACK_SCANNER_MAX_FILE_SIZE": "2048",
            "STACK_SCANNER_WORKERS": "3",
            "STACK_SCANNER_MATCH_TIMEOUT": "0.5",
        })
        assert config.max_file_size == 2048
        assert config.workers == 3
        assert config.match_timeout == 0.5

    def test_explicit_overrides_environment(self):
        """Test that flags win over the environment and None falls through."""
        config = ScanConfig.from_env({"STACK_SCANNER_WORKERS": "3"}, workers=7, max_file_size=None)
        assert config.workers == 7
        assert config.max_file_size == 1024 * 1024

    @pytest.mark.parametrize(
        "environ, overrides",
        [
            ({"STACK_SCANNER_WORKERS": "many"}, {}),
            ({}, {"workers": 0}),
            ({}, {"max_file_size": 0}),
            ({"STACK_SCANNER_MATCH_TIMEOUT": "-1"}, {}),
        ],
    )
    def test_invalid_values(self, environ, overrides):
        """Test that invalid settings become ConfigError."""
        with pytest.raises(ConfigError):
            ScanConfig.from_env(environ, **overrides)
