"""Session-oriented JSON-RPC client for the plugin's MCP endpoint.

Architectural role:
    Issues JSON-RPC calls against one Streamable HTTP endpoint, manages the
    `mcp-session-id` handshake and lifecycle, and returns one logical result per
    call whether the server answers with a JSON document or a short event stream.

Session lifecycle:
    NoSession -> `create_session()` (initialize + `notifications/initialized`) -> Active
    Active -> `close_session()` (HTTP DELETE) -> NoSession
    Creating a new session does not release the previous one.

Concurrency:
    One outstanding request per instance; calls are not pipelined.

Failure handling model:
    - Non-2xx status on a call -> `TransportError`.
    - Unexpected content type or missing session id -> `ProtocolError`.
    - Session deletion is advisory: failures are logged and reported as `False`.
"""

import itertools
import json
import logging

import httpx

from ai_sdk_client.errors import ProtocolError, RpcError, TransportError
from ai_sdk_client.mcp.response import RpcRequest, RpcResponse, parse_body
from ai_sdk_client.transport.config import MCP_PROTOCOL_VERSION
from ai_sdk_client.transport.http import HttpTransport

logger = logging.getLogger(__name__)

SESSION_HEADER = "mcp-session-id"
ACCEPT = "text/event-stream, application/json"


class McpSessionClient:
    """JSON-RPC client bound to one MCP endpoint and at most one session.

    Args:
        transport: Shared HTTP transport.
        endpoint: MCP URL; defaults to `transport.config.mcp_url`.
    """

    def __init__(self, transport: HttpTransport, endpoint: str | None = None):
        self.transport = transport
        self.endpoint = endpoint or transport.config.mcp_url
        self.session_id: str | None = None
        self._ids = itertools.count(1)

    def _headers(self, session_id: str | None = None) -> dict:
        headers = {"Content-Type": "application/json", "Accept": ACCEPT}
        session_id = session_id or self.session_id
        if session_id:
            headers[SESSION_HEADER] = session_id
        return headers

    async def _send(self, envelope: RpcRequest, session_id: str | None = None) -> RpcResponse:
        async with self.transport.open(
            "POST",
            self.endpoint,
            headers=self._headers(session_id),
            json_body=envelope.to_wire(),
        ) as response:
            await response.aread()
            if not response.is_success:
                raise TransportError(response.status_code, response.text)

            content_type = response.headers.get("content-type", "")
            payload, events = parse_body(content_type, response.text)
            return RpcResponse(
                payload=payload,
                events=events,
                status_code=response.status_code,
                content_type=content_type,
                session_id=response.headers.get(SESSION_HEADER),
            )

    async def request(self, method: str, params: dict | None = None) -> RpcResponse:
        """Send one call and return the normalized response with raw events."""
        envelope = RpcRequest(id=next(self._ids), method=method, params=params or {})
        logger.debug("MCP call %s (session=%s)", method, self.session_id)
        return await self._send(envelope)

    async def call(self, method: str, params: dict | None = None):
        """Send one call and return the selected response payload.

        The payload is the JSON-RPC envelope (`result` or `error`) in the usual case,
        or the raw event(s) when an event stream held no envelope.
        """
        response = await self.request(method, params)
        return response.payload

    async def notify(self, method: str, params: dict | None = None) -> None:
        """Send a fire-and-forget notification; the response body is not read."""
        envelope = RpcRequest(method=method, params=params)
        async with self.transport.open(
            "POST",
            self.endpoint,
            headers=self._headers(),
            json_body=envelope.to_wire(),
        ) as response:
            logger.debug("MCP notification %s -> %s", method, response.status_code)

    async def create_session(self) -> str:
        """Run the initialize handshake and make the new session active.

        Returns:
            Server-assigned session id.

        Raises:
            TransportError: On a non-2xx `initialize` response.
            ProtocolError: When the response carries no session id.
        """
        if self.session_id:
            logger.warning("Replacing active MCP session %s without closing it", self.session_id)
            self.session_id = None

        config = self.transport.config
        response = await self.request(
            "initialize",
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": config.client_name, "version": config.client_version},
            },
        )
        if not response.session_id:
            raise ProtocolError("No session ID returned")

        self.session_id = response.session_id
        await self.notify("notifications/initialized")
        logger.info("MCP session %s created", self.session_id)
        return self.session_id

    async def close_session(self, session_id: str | None = None) -> bool:
        """Delete a session on the server. Best-effort; never raises for HTTP failures.

        Args:
            session_id: Session to delete; defaults to the active one.

        Returns:
            `True` when the server acknowledged the deletion.
        """
        session_id = session_id or self.session_id
        if not session_id:
            return False
        if session_id == self.session_id:
            self.session_id = None

        try:
            async with self.transport.open(
                "DELETE", self.endpoint, headers=self._headers(session_id)
            ) as response:
                if not response.is_success:
                    logger.warning(
                        "MCP session %s delete returned %s", session_id, response.status_code
                    )
                    return False
        except (httpx.HTTPError, httpx.InvalidURL) as err:
            logger.warning("MCP session %s delete failed: %s", session_id, err)
            return False

        logger.info("MCP session %s closed", session_id)
        return True

    async def list_tools(self) -> list[dict]:
        """Return the server's tool descriptors (`tools/list`)."""
        result = await self._result("tools/list")
        return result.get("tools") or []

    async def call_tool(self, name: str, arguments: dict | None = None) -> dict:
        """Invoke one tool (`tools/call`) and return its result object."""
        return await self._result("tools/call", {"name": name, "arguments": arguments or {}})

    async def _result(self, method: str, params: dict | None = None) -> dict:
        response = await self.request(method, params)
        if response.error is not None:
            raise RpcError.from_envelope(response.error)
        if not isinstance(response.result, dict):
            raise ProtocolError(f"{method} response has no result object")
        return response.result

    async def __aenter__(self) -> "McpSessionClient":
        await self.create_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close_session()


def tool_text_content(result: dict):
    """Decode the first `text` content item of a tool result as JSON.

    Returns:
        Decoded value, the raw text when it is not JSON, or `None` when the result
        has no text content.
    """
    for item in result.get("content") or []:
        if isinstance(item, dict) and item.get("type") == "text":
            text = item.get("text", "")
            try:
                return json.loads(text)
            except ValueError:
                return text
    return None
