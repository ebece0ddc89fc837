"""Streaming package.

Architectural role:
    Consumes the plugin's `data: `-prefixed text stream and exposes it as a
    cancellable async sequence of text fragments.

Module split:
    - `decoder`: byte/text chunks -> complete lines.
    - `events`: lines -> event payloads -> JSON objects -> fragments.
    - `cancellation`: cooperative cancel token.
    - `client`: `/ask` and `/ask-stream` requests.
    - `controller`: single-slot wrapper holding response/loading/error state.
"""
