"""Tests for environment settings and logging setup."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import orjson
import pytest
from pydantic import ValidationError

from wcag_mcp.foundation.config import WcagSettings, clear_settings_cache, get_settings
from wcag_mcp.foundation.logging import configure_logging


class TestSettings:
    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        settings = WcagSettings()
        assert settings.data_path == Path("data/wcag.json")
        assert settings.server.name == "wcag-mcp"
        assert settings.server.protocol_version == "2024-11-05"
        assert (settings.logging.level, settings.logging.format) == ("INFO", "text")
        assert (settings.http.host, settings.http.port) == ("127.0.0.1", 8000)
        assert settings.bridge.api_key is None
        assert settings.bridge.backend_url is None

    def test_environment_overrides(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("WCAG_MCP_DATA_PATH", "/srv/wcag.json")
        clean_env.setenv("WCAG_MCP_LOG_LEVEL", "debug")
        clean_env.setenv("WCAG_MCP_LOG_FORMAT", "json")
        clean_env.setenv("WCAG_MCP_HTTP_PORT", "9000")
        clean_env.setenv("WCAG_MCP_BRIDGE_BACKEND_URL", "https://mcp.example.org/")
        settings = WcagSettings()
        assert settings.data_path == Path("/srv/wcag.json")
        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "json"
        assert settings.http.port == 9000
        assert settings.bridge.backend_url == "https://mcp.example.org/"

    def test_bridge_key_aliases(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BRIDGE_API_KEY", "s3cret")
        assert WcagSettings().bridge.api_key.get_secret_value() == "s3cret"
        clean_env.delenv("BRIDGE_API_KEY")
        clean_env.setenv("WCAG_MCP_BRIDGE_API_KEY", "other")
        assert WcagSettings().bridge.api_key.get_secret_value() == "other"

    def test_blank_key_disables_auth(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BRIDGE_API_KEY", "   ")
        assert WcagSettings().bridge.api_key is None

    def test_key_is_not_printed(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("BRIDGE_API_KEY", "s3cret")
        assert "s3cret" not in repr(WcagSettings())

    def test_invalid_port(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("WCAG_MCP_HTTP_PORT", "70000")
        with pytest.raises(ValidationError):
            WcagSettings()

    def test_dotenv_file(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("WCAG_MCP_DATA_PATH=from-dotenv.json\n")
        assert WcagSettings().data_path == Path("from-dotenv.json")

    def test_cached(self, clean_env: pytest.MonkeyPatch) -> None:
        first = get_settings()
        assert get_settings() is first
        clear_settings_cache()
        assert get_settings() is not first


# ═════════════════════════════════════════════════════════════════════════════
# Logging
# ═════════════════════════════════════════════════════════════════════════════


class TestLogging:
    def test_text_format(self, restore_logging: logging.Logger) -> None:
        out = io.StringIO()
        configure_logging("text", "info", output=out)
        logging.getLogger("wcag_mcp.test").info("hello")
        logging.getLogger("wcag_mcp.test").debug("hidden")
        assert "[INFO] wcag_mcp.test: hello" in out.getvalue()
        assert "hidden" not in out.getvalue()

    def test_json_format(self, restore_logging: logging.Logger) -> None:
        out = io.StringIO()
        configure_logging("json", "DEBUG", output=out)
        logging.getLogger("wcag_mcp.test").debug("loaded %d criteria", 3)
        entry = orjson.loads(out.getvalue().splitlines()[0])
        assert entry["level"] == "debug"
        assert entry["logger"] == "wcag_mcp.test"
        assert entry["event"] == "loaded 3 criteria"
        assert "timestamp" in entry

    def test_reconfigure_replaces_handler(self, restore_logging: logging.Logger) -> None:
        configure_logging(output=io.StringIO())
        logger = configure_logging(output=io.StringIO())
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_unknown_format(self, restore_logging: logging.Logger) -> None:
        with pytest.raises(ValueError, match="Unknown format"):
            configure_logging("xml")
