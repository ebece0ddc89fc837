"""Event-stream extraction for `data: `-prefixed line protocols.

Architectural role:
    Sits between `LineDecoder` output and the streaming/MCP clients. Each stage is a
    plain filter over an iterable so malformed input is dropped in the data flow
    instead of being raised and caught further up.

Pipeline:
    lines -> `iter_event_payloads` (prefix filter, `[DONE]` filter)
          -> `iter_event_objects` (JSON-object filter)
          -> `extract_fragments` (string `text` field filter)

Sentinel handling:
    `[DONE]` is discarded like any other non-data line. The transport's own end of
    stream is the only termination signal.
"""

import json
from typing import Iterable, Iterator

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def iter_event_payloads(lines: Iterable[str]) -> Iterator[str]:
    """Yield the payload of every `data: ` line that is not the sentinel."""
    for line in lines:
        if not line.startswith(DATA_PREFIX):
            continue
        payload = line[len(DATA_PREFIX):]
        if payload == DONE_SENTINEL:
            continue
        yield payload


def decode_event(payload: str) -> dict | None:
    """Decode one payload as a JSON object.

    Returns:
        The decoded object, or `None` for non-JSON payloads (keep-alives, comments)
        and JSON values that are not objects.
    """
    try:
        value = json.loads(payload)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


def iter_event_objects(lines: Iterable[str]) -> Iterator[dict]:
    """Yield every event whose payload decodes to a JSON object."""
    for payload in iter_event_payloads(lines):
        event = decode_event(payload)
        if event is not None:
            yield event


def extract_fragments(lines: Iterable[str]) -> Iterator[str]:
    """Yield the `text` field of each decoded event carrying one."""
    for event in iter_event_objects(lines):
        text = event.get("text")
        if isinstance(text, str):
            yield text
