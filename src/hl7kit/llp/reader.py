"""Reading HL7 messages framed with the Lower Layer Protocol (LLP).

Each message travels as ``0x0B <payload> 0x1C 0x0D``. The reader works on
any binary file-like object; wrap a socket with ``socket.makefile("rb")``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import BinaryIO

from hl7kit.codec.message import Message
from hl7kit.common.config import HL7KitConfig
from hl7kit.common.constants import LLP_LEADING_BYTE, LLP_TRAILING_BYTE_0, LLP_TRAILING_BYTE_1
from hl7kit.common.exceptions import HL7ContentError, LLPFramingError
from hl7kit.llp.charset import CharsetStrategy, FixedCharset

logger = logging.getLogger(__name__)


class LLPReader:
    """Reads LLP-framed messages from a binary stream.

    Example:
        >>> with LLPReader(sock.makefile("rb")) as reader:
        ...     for message in reader:
        ...         handle(message)
    """

    def __init__(
        self,
        stream: BinaryIO,
        max_length: int | None = None,
        charset: CharsetStrategy | None = None,
    ) -> None:
        """
        Args:
            stream: Binary input; owned and closed by this reader.
            max_length: Largest accepted payload in bytes. Defaults to
                ``HL7KitConfig.llp_max_length``.
            charset: Encoding strategy. Defaults to a fixed
                ``HL7KitConfig.default_charset``.
        """
        if max_length is None or charset is None:
            config = HL7KitConfig()
            if max_length is None:
                max_length = config.llp_max_length
            if charset is None:
                charset = FixedCharset(config.default_charset)
        if max_length < 0:
            msg = "max_length is negative"
            raise ValueError(msg)
        self._stream = stream
        self._max_length = max_length
        self._charset = charset

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def charset(self) -> CharsetStrategy:
        return self._charset

    def _read_byte(self) -> int:
        data = self._stream.read(1)
        if not data:
            raise EOFError
        return data[0]

    def _expect_byte(self, value: int) -> None:
        actual = self._read_byte()
        if actual != value:
            msg = f"expected to read 0x{value:02x} but read 0x{actual:02x} instead"
            logger.warning("LLP framing error: %s", msg)
            raise LLPFramingError(msg)

    def read_payload(self) -> bytes:
        """Read one frame and return its payload bytes undecoded.

        Raises:
            EOFError: If the stream ends, even in the middle of a frame.
            LLPFramingError: On a bad sentinel byte or an oversize payload.
        """
        self._expect_byte(LLP_LEADING_BYTE)

        payload = bytearray()
        while True:
            ch = self._read_byte()
            if ch == LLP_TRAILING_BYTE_0:
                break
            if len(payload) >= self._max_length:
                msg = f"message is too long (greater than {self._max_length} bytes)"
                logger.warning("LLP framing error: %s", msg)
                raise LLPFramingError(msg)
            payload.append(ch)

        self._expect_byte(LLP_TRAILING_BYTE_1)
        return bytes(payload)

    def read_message(self) -> Message:
        """Read and parse the next message.

        Raises:
            EOFError: At end of input.
            LLPFramingError: If the framing is broken; see ``resync``.
            HL7ContentError: If the payload cannot be decoded or parsed.
        """
        payload = self.read_payload()
        encoding = self._charset.for_incoming(payload)
        try:
            text = payload.decode(encoding)
        except UnicodeDecodeError as e:
            msg = f"message is not valid {encoding}: {e.reason}"
            raise HL7ContentError(msg, payload.decode("latin-1")) from e

        logger.debug("Read %d byte LLP message (%s)", len(payload), encoding)
        try:
            return Message.parse(text)
        except HL7ContentError as e:
            raise e.with_content(text)

    def resync(self) -> None:
        """Discard input up to and including the next ``0x1C 0x0D``.

        Raises:
            EOFError: If the stream ends first.
        """
        logger.warning("Resynchronizing LLP stream")
        seen_trailer = False
        while True:
            ch = self._read_byte()
            if seen_trailer and ch == LLP_TRAILING_BYTE_1:
                return
            seen_trailer = ch == LLP_TRAILING_BYTE_0

    def __iter__(self) -> Iterator[Message]:
        """Yield messages until the input is exhausted."""
        while True:
            try:
                message = self.read_message()
            except EOFError:
                return
            yield message

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> LLPReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["LLPReader"]
