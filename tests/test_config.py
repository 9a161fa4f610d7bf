"""Tests for configuration."""

import dataclasses

import pytest

from rushhttp import ClientConfig
from rushhttp.config import DEFAULT_MAX_REDIRECTS


class TestClientConfig:
    """Tests for ClientConfig dataclass."""

    def test_default_values(self):
        """Test default configuration values."""
        config = ClientConfig()

        assert config.enable_http2 is True
        assert config.enable_http3 is False
        assert config.timeout == 30.0

    def test_custom_values(self):
        """Test custom configuration values."""
        config = ClientConfig(enable_http2=False, enable_http3=True, timeout=5.0)

        assert config.enable_http2 is False
        assert config.enable_http3 is True
        assert config.timeout == 5.0

    def test_is_immutable(self):
        """Test config cannot be changed after construction."""
        config = ClientConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.timeout = 10.0

    def test_zero_timeout_raises(self):
        """Test zero timeout raises ValueError."""
        with pytest.raises(ValueError, match="timeout must be > 0"):
            ClientConfig(timeout=0)

    def test_negative_timeout_raises(self):
        """Test negative timeout raises ValueError."""
        with pytest.raises(ValueError, match="timeout must be > 0"):
            ClientConfig(timeout=-1.0)

    def test_default_redirect_limit(self):
        assert DEFAULT_MAX_REDIRECTS == 10
