"""Endpoint/runtime configuration for the AI SDK client.

Architectural role:
    Centralizes endpoint selection, credential lookup and timeouts for
    `transport.http`, `streaming.client` and `mcp.client`.

Determinism:
    Deterministic for a fixed process environment. Values are resolved at import
    time after `load_dotenv()` has merged a local `.env` file.

Relevant environment variables:
    - `AI_SDK_API_URL`: base URL of the plugin routes (`/ask`, `/ask-stream`).
    - `STRAPI_URL`: CMS base URL, used for `/_health` and the default MCP URL.
    - `AI_SDK_MCP_URL`: MCP endpoint override.
    - `STRAPI_API_TOKEN`: opaque bearer credential, passed through unchanged.
    - `AI_SDK_TIMEOUT_SECONDS`: transport timeout.
    - `MCP_CLIENT_NAME` / `MCP_CLIENT_VERSION`: `clientInfo` sent on `initialize`.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

STRAPI_URL = os.getenv("STRAPI_URL", "http://localhost:1337").rstrip("/")
API_BASE_URL = os.getenv("AI_SDK_API_URL", f"{STRAPI_URL}/api/ai-sdk").rstrip("/")
MCP_URL = os.getenv("AI_SDK_MCP_URL", f"{API_BASE_URL}/mcp")

# MCP protocol revision announced on `initialize`.
MCP_PROTOCOL_VERSION = "2025-03-26"


@dataclass(frozen=True)
class ClientConfig:
    """Runtime configuration shared by the streaming and MCP clients.

    Fields default to the environment as read at import time; tests and embedding
    applications pass explicit values instead.
    """

    strapi_url: str = STRAPI_URL
    api_base_url: str = API_BASE_URL
    mcp_url: str = MCP_URL
    api_token: str = os.getenv("STRAPI_API_TOKEN", "").strip()
    timeout_seconds: float = float(os.getenv("AI_SDK_TIMEOUT_SECONDS", "120"))
    client_name: str = os.getenv("MCP_CLIENT_NAME", "ai-sdk-client")
    client_version: str = os.getenv("MCP_CLIENT_VERSION", "1.0.0")

    def auth_headers(self) -> dict:
        """Return the `Authorization` header for the configured token, if any."""
        if not self.api_token:
            return {}
        return {"Authorization": f"Bearer {self.api_token}"}
