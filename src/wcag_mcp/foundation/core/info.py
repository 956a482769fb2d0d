"""Server identity shared by the tools and the transports."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PROTOCOL_VERSION = "2024-11-05"


@dataclass(frozen=True, slots=True)
class ServerInfo:
    name: str = "wcag-mcp"
    version: str = "2.0.0"
    protocol_version: str = DEFAULT_PROTOCOL_VERSION

    def as_mcp(self) -> dict[str, str]:
        """``serverInfo`` member of the initialize result."""
        return {"name": self.name, "version": self.version}
