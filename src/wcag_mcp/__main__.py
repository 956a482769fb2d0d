"""Command line entry point: ``python -m wcag_mcp`` / ``wcag-mcp``."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from wcag_mcp.ext.mcp import StdioServer
from wcag_mcp.foundation.config import get_settings
from wcag_mcp.foundation.errors import DataLoadError
from wcag_mcp.foundation.logging import configure_logging
from wcag_mcp.model import load_document
from wcag_mcp.server import build_dispatcher, create_app

logger = logging.getLogger("wcag_mcp.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wcag-mcp", description="WCAG 2.2 MCP server")
    parser.add_argument(
        "mode", nargs="?", choices=("stdio", "http"), default="stdio",
        help="stdio for local MCP clients, http for the JSON-RPC endpoint and REST bridge",
    )
    parser.add_argument("--data", type=Path, help="Path to the built WCAG JSON artifact")
    parser.add_argument("--host", help="HTTP listen address")
    parser.add_argument("--port", type=int, help="HTTP listen port")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    if args.data is not None:
        settings = settings.model_copy(update={"data_path": args.data})

    configure_logging(settings.logging.format, settings.logging.level)

    try:
        document = load_document(settings.data_path)
    except DataLoadError as e:
        logger.error(str(e))
        return 1

    if args.mode == "stdio":
        dispatcher = build_dispatcher(settings, document)
        StdioServer(dispatcher.registry, dispatcher.server_info).run()
        return 0

    import uvicorn

    uvicorn.run(
        create_app(settings, document),
        host=args.host or settings.http.host,
        port=args.port or settings.http.port,
        log_level=settings.logging.level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
