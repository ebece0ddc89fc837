"""Error taxonomy for the AI SDK client.

Failure classes:
    - `TransportError`: the initiating HTTP request returned a non-success status.
    - `ProtocolError`: the server answered in a shape the protocol does not allow
      (unexpected content type, missing session id).
    - `RpcError`: a JSON-RPC `error` envelope surfaced by the MCP tool helpers.

Not represented here:
    - Decode noise (malformed event lines) is filtered out, never raised.
    - Cancellation ends a stream normally and is never raised.
"""


class AiSdkError(Exception):
    """Base class for all client-raised errors."""


class TransportError(AiSdkError):
    """Non-success HTTP status on the initiating request.

    Attributes:
        status_code: HTTP status returned by the server.
        body: Response body text when it was read, otherwise empty.
    """

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error: {status_code}")


class ProtocolError(AiSdkError):
    """Response violates the streaming or session protocol."""


class RpcError(AiSdkError):
    """JSON-RPC error envelope returned by the server."""

    def __init__(self, code, message: str, data=None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"RPC error {code}: {message}")

    @classmethod
    def from_envelope(cls, error: dict) -> "RpcError":
        """Build from the `error` member of a JSON-RPC response."""
        return cls(error.get("code"), str(error.get("message", "")), error.get("data"))
