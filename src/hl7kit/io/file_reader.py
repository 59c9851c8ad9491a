"""Reader for the HL7 file format.

Files hold concatenated messages, one segment per line, with lines ending
in LF or CRLF. Each ``MSH`` line starts a new message. Blank lines,
whitespace-only lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import TextIO

from hl7kit.codec.message import Message
from hl7kit.codec.segment import MSHSegment, Segment
from hl7kit.common.constants import MSH_SEGMENT_NAME, SEGMENT_TERMINATOR
from hl7kit.common.exceptions import HL7ContentError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


class HL7FileReader:
    """Reads messages from a text stream in the HL7 file format."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pushback: str | None = None
        self._closed = False

    def _next_line(self) -> str | None:
        line = self._pushback
        self._pushback = None
        if line is not None:
            return line
        if self._closed:
            return None
        for raw in self._stream:
            line = raw.rstrip("\n")
            if line.endswith(SEGMENT_TERMINATOR):
                line = line[:-1]
            if not line.strip() or line.startswith(COMMENT_PREFIX):
                continue
            return line
        return None

    def read_message(self) -> Message:
        """Read the next message.

        Raises:
            EOFError: When no messages remain.
            HL7ContentError: On a malformed segment; ``content`` holds the line.
        """
        line = self._next_line()
        if line is None:
            raise EOFError
        msh = MSHSegment.parse(line)
        message = Message(msh)
        seps = msh.seps

        while (line := self._next_line()) is not None:
            if line.startswith(MSH_SEGMENT_NAME):
                self._pushback = line
                break
            try:
                message.segments.append(Segment.parse(line, seps))
            except HL7ContentError as e:
                raise e.with_content(line)

        logger.debug("Read message with %d segments", len(message.segments))
        return message

    def __iter__(self) -> Iterator[Message]:
        while True:
            try:
                message = self.read_message()
            except EOFError:
                return
            yield message

    def close(self) -> None:
        self._stream.close()
        self._pushback = None
        self._closed = True

    def __enter__(self) -> HL7FileReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["HL7FileReader"]
