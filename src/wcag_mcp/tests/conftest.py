"""Shared fixtures: the compact dataset and the objects built over it."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from wcag_mcp.ext.mcp import McpDispatcher
from wcag_mcp.foundation.config import clear_settings_cache
from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.foundation.logging import ROOT_LOGGER
from wcag_mcp.foundation.registry import ToolRegistry
from wcag_mcp.model import WcagDocument, load_document
from wcag_mcp.query import WcagQuery
from wcag_mcp.tools import build_registry

FIXTURE_PATH = Path(__file__).parent / "fixtures" / "wcag.json"


@pytest.fixture(scope="session")
def document() -> WcagDocument:
    return load_document(FIXTURE_PATH)


@pytest.fixture
def query(document: WcagDocument) -> WcagQuery:
    return WcagQuery(document)


@pytest.fixture
def registry(query: WcagQuery) -> ToolRegistry:
    return build_registry(query, ServerInfo())


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> McpDispatcher:
    return McpDispatcher(registry, ServerInfo())


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[pytest.MonkeyPatch]:
    """Settings read from a pristine environment with no .env file."""
    import os

    for key in list(os.environ):
        if key.startswith("WCAG_MCP_") or key == "BRIDGE_API_KEY":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield monkeypatch
    clear_settings_cache()


@pytest.fixture
def restore_logging() -> Iterator[logging.Logger]:
    """Undo ``configure_logging`` side effects on the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
