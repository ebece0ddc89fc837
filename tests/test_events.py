"""Unit tests for the event-stream extractor."""

from ai_sdk_client.streaming.decoder import LineDecoder
from ai_sdk_client.streaming.events import (
    decode_event,
    extract_fragments,
    iter_event_objects,
    iter_event_payloads,
)

PAYLOAD = (
    'data: {"text":"Hallo "}\n'
    ": keep-alive\n"
    "\n"
    'data: {"text":"Wélt €"}\n'
    "data: not json\n"
    'data: {"other":1}\n'
    "data: [DONE]\n"
).encode("utf-8")


def fragments_for(chunks) -> list[str]:
    decoder = LineDecoder()
    out = []
    for chunk in chunks:
        out.extend(extract_fragments(decoder.feed(chunk)))
    decoder.flush()
    return out


class TestExtractFragments:
    def test_fragments_in_order(self):
        lines = ['data: {"text":"ab"}', 'data: {"text":"cd"}']
        assert list(extract_fragments(lines)) == ["ab", "cd"]

    def test_done_sentinel_yields_nothing(self):
        assert list(extract_fragments(["data: [DONE]"])) == []

    def test_unprefixed_line_is_ignored_without_corrupting_next(self):
        lines = ['{"text":"no prefix"}', "event: message", 'data: {"text":"ok"}']
        assert list(extract_fragments(lines)) == ["ok"]

    def test_prefix_requires_space(self):
        assert list(extract_fragments(['data:{"text":"x"}'])) == []

    def test_malformed_and_missing_text_are_dropped(self):
        lines = ["data: {broken", 'data: {"delta":"x"}', 'data: {"text":5}', 'data: "text"']
        assert list(extract_fragments(lines)) == []

    def test_empty_text_is_a_fragment(self):
        assert list(extract_fragments(['data: {"text":""}'])) == [""]

    def test_every_split_point_gives_same_fragments(self):
        expected = fragments_for([PAYLOAD])
        assert expected == ["Hallo ", "Wélt €"]

        for cut in range(1, len(PAYLOAD)):
            assert fragments_for([PAYLOAD[:cut], PAYLOAD[cut:]]) == expected, cut

    def test_single_byte_chunks(self):
        chunks = [PAYLOAD[i:i + 1] for i in range(len(PAYLOAD))]
        assert fragments_for(chunks) == ["Hallo ", "Wélt €"]

    def test_trailing_line_without_newline_is_not_delivered(self):
        assert fragments_for([b'data: {"text":"a"}\ndata: {"text":"b"}']) == ["a"]


class TestEventStages:
    def test_payloads_skip_sentinel_and_foreign_lines(self):
        lines = ["data: 1", "id: 4", "data: [DONE]", "data: {}"]
        assert list(iter_event_payloads(lines)) == ["1", "{}"]

    def test_decode_event_only_accepts_objects(self):
        assert decode_event('{"a": 1}') == {"a": 1}
        assert decode_event("[1, 2]") is None
        assert decode_event("") is None
        assert decode_event("nope") is None

    def test_event_objects(self):
        lines = ['data: {"jsonrpc":"2.0","id":1,"result":{}}', "data: 3", "data: x"]
        assert list(iter_event_objects(lines)) == [{"jsonrpc": "2.0", "id": 1, "result": {}}]
