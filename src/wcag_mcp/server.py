"""Application composition: settings and data in, ASGI app out.

Settings are read here and nowhere else; everything below receives plain
constructor arguments.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from starlette.applications import Starlette
from starlette.routing import Mount, Route

from wcag_mcp.ext.mcp import (
    API_METHODS,
    BridgeAuth,
    McpBackend,
    McpDispatcher,
    create_api_app,
    create_api_endpoint,
    create_bridge_app,
)
from wcag_mcp.foundation.config import WcagSettings, get_settings
from wcag_mcp.foundation.core import ServerInfo
from wcag_mcp.model import WcagDocument, load_document
from wcag_mcp.query import WcagQuery
from wcag_mcp.tools import build_registry

logger = logging.getLogger("wcag_mcp.server")

# Host name used for the in-process backend round-trip
INTERNAL_BACKEND_URL = "http://wcag-mcp.internal/"


def server_info_from(settings: WcagSettings) -> ServerInfo:
    server = settings.server
    return ServerInfo(name=server.name, version=server.version, protocol_version=server.protocol_version)


def build_dispatcher(settings: WcagSettings, document: WcagDocument) -> McpDispatcher:
    """Query facade, tool catalog and method table over one loaded document."""
    info = server_info_from(settings)
    registry = build_registry(WcagQuery(document), info)
    logger.info(f"{len(registry)} tools over {sum(1 for _ in document.iter_criteria())} success criteria")
    return McpDispatcher(registry, info)


def create_app(settings: WcagSettings | None = None, document: WcagDocument | None = None) -> Starlette:
    """HTTP application with the JSON-RPC adapter at ``/mcp`` and the REST bridge at ``/bridge``.

    Raises:
        DataLoadError: ``document`` was not given and the artifact at
            ``settings.data_path`` cannot be loaded.
    """
    settings = settings or get_settings()
    if document is None:
        document = load_document(settings.data_path)

    dispatcher = build_dispatcher(settings, document)
    api = create_api_app(dispatcher)

    bridge_cfg = settings.bridge
    if bridge_cfg.backend_url:
        backend = McpBackend(bridge_cfg.backend_url, timeout=bridge_cfg.timeout)
    else:
        backend = McpBackend(
            INTERNAL_BACKEND_URL, transport=httpx.ASGITransport(app=api), timeout=bridge_cfg.timeout,
        )

    auth = BridgeAuth.from_secret(bridge_cfg.api_key)
    if not auth.enabled:
        logger.warning("BRIDGE_API_KEY not set; the REST bridge accepts unauthenticated calls")
    bridge = create_bridge_app(dispatcher.registry, backend, auth, public_url=settings.http.public_url)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        yield
        await backend.aclose()

    return Starlette(
        routes=[
            # Bare /mcp answers directly instead of redirecting to /mcp/
            Route("/mcp", create_api_endpoint(dispatcher), methods=API_METHODS),
            Mount("/mcp", app=api),
            Mount("/bridge", app=bridge),
        ],
        lifespan=lifespan,
    )
