"""Transport package.

Architectural role:
    Provides environment-driven endpoint configuration and the HTTP boundary used by
    the streaming and MCP clients.

Module split:
    - `config`: `.env`/environment resolution into `ClientConfig`.
    - `http`: `httpx`-backed request function returning streamed responses.
"""
