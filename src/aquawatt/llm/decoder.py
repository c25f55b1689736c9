"""Incremental decoding of chunked completion responses.

Two concerns are kept apart here:

- ``LineDecoder`` turns arbitrary byte reads into complete text lines,
  retaining any trailing partial line until its newline arrives. It knows
  nothing about the wire format.
- ``parse_event_line`` interprets one complete line of the server-sent
  event stream used by OpenAI-compatible chat completion endpoints.
"""

import codecs
import json
import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


class LineDecoder:
    """Line buffer over a byte stream.

    Example:
        decoder = LineDecoder()
        decoder.feed(b'data: {"a"')   # -> []
        decoder.feed(b': 1}\\n')       # -> ['data: {"a": 1}']
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer

    def feed(self, data: bytes) -> list[str]:
        """Add a read to the buffer and return the lines it completed.

        Lines are returned without their terminator; a ``\\r\\n`` ending
        counts as one terminator.
        """
        self._buffer += self._decoder.decode(data)
        if "\n" not in self._buffer:
            return []

        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> list[str]:
        """Return the residual partial line at end of stream, if any."""
        self._buffer += self._decoder.decode(b"", final=True)
        residue, self._buffer = self._buffer, ""
        residue = residue.rstrip("\r")
        return [residue] if residue else []


class LineKind(str, Enum):
    """Classification of one complete event-stream line."""

    IGNORED = "ignored"      # blank, comment, or non-data field
    DONE = "done"            # the termination sentinel
    DELTA = "delta"          # parsed payload carrying a text fragment
    EMPTY = "empty"          # parsed payload without a text fragment
    MALFORMED = "malformed"  # data line whose payload is not valid JSON


@dataclass(frozen=True)
class ParsedLine:
    kind: LineKind
    content: str | None = None


def extract_delta(payload: dict) -> str | None:
    """Pull ``choices[0].delta.content`` out of a completion chunk."""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) and content else None


def parse_event_line(line: str) -> ParsedLine:
    """Interpret one complete line of the completion event stream."""
    line = line.strip()
    if not line.startswith(DATA_PREFIX):
        return ParsedLine(LineKind.IGNORED)

    data = line[len(DATA_PREFIX):].strip()
    if data == DONE_SENTINEL:
        return ParsedLine(LineKind.DONE)

    try:
        payload = json.loads(data)
    except json.JSONDecodeError:
        logger.debug("Skipping malformed event payload: %.80s", data)
        return ParsedLine(LineKind.MALFORMED)

    if not isinstance(payload, dict):
        return ParsedLine(LineKind.EMPTY)

    content = extract_delta(payload)
    if content is None:
        return ParsedLine(LineKind.EMPTY)
    return ParsedLine(LineKind.DELTA, content)
