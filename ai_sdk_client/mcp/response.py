"""JSON-RPC envelopes and response-kind normalization for the MCP endpoint.

Architectural role:
    Keeps response-kind detection (direct JSON document vs. event stream) apart from
    the call contract in `mcp.client`, so one call method works whichever form the
    server chooses.

Selection policy for event-stream responses:
    1. First decoded event carrying a `result` or `error` key.
    2. Otherwise the single event, when exactly one was received.
    3. Otherwise the full list of events, unguessed.
    The raw event list is always kept on `RpcResponse.events`.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ai_sdk_client.errors import ProtocolError
from ai_sdk_client.streaming.decoder import LineDecoder
from ai_sdk_client.streaming.events import iter_event_objects

JSON_CONTENT_TYPE = "application/json"
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"


class RpcRequest(BaseModel):
    """Outgoing JSON-RPC 2.0 envelope. Notifications leave `id` unset."""

    jsonrpc: str = "2.0"
    id: int | None = None
    method: str
    params: dict | None = None

    def to_wire(self) -> dict:
        return self.model_dump(exclude_none=True)


@dataclass
class RpcResponse:
    """Normalized outcome of one MCP request.

    Attributes:
        payload: Selected response (JSON document, chosen event, or event list).
        events: Every decoded event object; empty for direct JSON documents.
        status_code: HTTP status.
        content_type: Declared response content type.
        session_id: `mcp-session-id` response header, if present.
    """

    payload: Any
    events: list = field(default_factory=list)
    status_code: int = 200
    content_type: str = ""
    session_id: str | None = None

    @property
    def result(self):
        if isinstance(self.payload, dict):
            return self.payload.get("result")
        return None

    @property
    def error(self):
        if isinstance(self.payload, dict):
            return self.payload.get("error")
        return None


def is_rpc_response(event) -> bool:
    return isinstance(event, dict) and ("result" in event or "error" in event)


def select_rpc_response(events: list):
    """Apply the event-stream selection policy (see module docstring)."""
    for event in events:
        if is_rpc_response(event):
            return event
    if len(events) == 1:
        return events[0]
    return list(events)


def collect_events(text: str) -> list[dict]:
    """Decode every `data: ` JSON object from a fully read event-stream body.

    The body is complete, so a final line without a newline still counts.
    """
    decoder = LineDecoder()
    lines = decoder.feed(text)
    lines.append(decoder.flush())
    return list(iter_event_objects(lines))


def parse_body(content_type: str, text: str) -> tuple[Any, list]:
    """Normalize a response body into `(payload, events)`.

    Raises:
        ProtocolError: For content types other than JSON or event stream, or
            for a JSON body that does not parse.
    """
    if JSON_CONTENT_TYPE in content_type:
        try:
            return json.loads(text), []
        except ValueError as err:
            raise ProtocolError(f"Malformed JSON response: {err}") from err

    if EVENT_STREAM_CONTENT_TYPE in content_type:
        events = collect_events(text)
        return select_rpc_response(events), events

    raise ProtocolError(f'Unexpected content-type "{content_type}": {text}')
