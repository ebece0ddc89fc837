"""ai-sdk-client package.

Architectural role:
    Python client for the AI SDK CMS plugin. Consumes the streaming text endpoint
    (`data: `-prefixed line events) and the MCP endpoint (session-oriented JSON-RPC)
    over one shared HTTP transport.

Package split:
    - `transport`: environment-driven configuration and the `httpx` transport boundary.
    - `streaming`: line decoding, event extraction, streaming client and cancellation.
    - `mcp`: JSON-RPC session client and response normalization.
    - `api`: command-line adapter.
"""

from ai_sdk_client.errors import AiSdkError, ProtocolError, RpcError, TransportError
from ai_sdk_client.mcp.client import McpSessionClient
from ai_sdk_client.streaming.cancellation import CancelToken
from ai_sdk_client.streaming.client import StreamingRequestClient
from ai_sdk_client.streaming.controller import AskStreamController
from ai_sdk_client.transport.config import ClientConfig
from ai_sdk_client.transport.http import HttpTransport

__all__ = [
    "AiSdkError",
    "AskStreamController",
    "CancelToken",
    "ClientConfig",
    "HttpTransport",
    "McpSessionClient",
    "ProtocolError",
    "RpcError",
    "StreamingRequestClient",
    "TransportError",
]
