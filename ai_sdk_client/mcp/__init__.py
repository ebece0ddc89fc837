"""MCP package.

Module split:
    - `response`: JSON-RPC envelope model and document/event-stream normalization.
    - `client`: session handshake, calls, tool helpers and session teardown.
"""
