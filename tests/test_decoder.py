"""Unit tests for LineDecoder."""

from ai_sdk_client.streaming.decoder import LineDecoder


class TestLineDecoder:
    def test_complete_lines_are_emitted(self):
        decoder = LineDecoder()
        assert decoder.feed(b"one\ntwo\n") == ["one", "two"]
        assert decoder.flush() == ""

    def test_partial_line_is_held_back(self):
        decoder = LineDecoder()
        assert decoder.feed(b"data: {\"te") == []
        assert decoder.feed(b"xt\":\"a\"}\nnext") == ['data: {"text":"a"}']
        assert decoder.flush() == "next"

    def test_delimiter_split_across_chunks(self):
        decoder = LineDecoder()
        assert decoder.feed(b"abc") == []
        assert decoder.feed(b"\n") == ["abc"]

    def test_empty_lines_are_kept(self):
        decoder = LineDecoder()
        assert decoder.feed(b"a\n\nb\n") == ["a", "", "b"]

    def test_multibyte_character_split_across_chunks(self):
        raw = "grüß €\n".encode("utf-8")
        decoder = LineDecoder()
        lines = []
        for i in range(len(raw)):
            lines.extend(decoder.feed(raw[i:i + 1]))
        assert lines == ["grüß €"]

    def test_invalid_bytes_are_replaced(self):
        decoder = LineDecoder()
        assert decoder.feed(b"ok\xff\n") == ["ok�"]

    def test_truncated_sequence_at_end_is_replaced_on_flush(self):
        decoder = LineDecoder()
        decoder.feed("x€".encode("utf-8")[:-1])
        assert decoder.flush() == "x�"

    def test_text_chunks_are_accepted(self):
        decoder = LineDecoder()
        assert decoder.feed("a\nb") == ["a"]
        assert decoder.feed("c\n") == ["bc"]

    def test_crlf_framing(self):
        decoder = LineDecoder()
        assert decoder.feed(b"data: x\r") == []
        assert decoder.feed(b"\ndata: y\r\n") == ["data: x", "data: y"]

    def test_flush_clears_buffer(self):
        decoder = LineDecoder()
        decoder.feed(b"tail")
        assert decoder.flush() == "tail"
        assert decoder.flush() == ""
