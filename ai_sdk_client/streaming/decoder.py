"""Line-buffered chunk decoder.

Turns an arbitrary sequence of byte/text chunks into complete text lines, holding
back the trailing incomplete line across chunk boundaries. Multi-byte UTF-8
sequences split across chunks are reassembled by an incremental decoder; invalid
bytes decode to U+FFFD instead of raising.
"""

import codecs


class LineDecoder:
    """Accumulate chunks and release complete `\\n`-terminated lines.

    One instance serves exactly one response body.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    def feed(self, chunk) -> list[str]:
        """Append one chunk and return the lines it completed, in order."""
        if isinstance(chunk, (bytes, bytearray)):
            chunk = self._decoder.decode(bytes(chunk))
        self._buffer += chunk

        parts = self._buffer.split("\n")
        # last element is incomplete (possibly empty)
        self._buffer = parts.pop()
        return [_strip_cr(line) for line in parts]

    def flush(self) -> str:
        """Return and clear the trailing partial content at end of stream."""
        remainder = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return _strip_cr(remainder)


def _strip_cr(line: str) -> str:
    return line[:-1] if line.endswith("\r") else line
