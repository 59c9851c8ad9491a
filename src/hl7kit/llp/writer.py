"""Writing HL7 messages framed with the Lower Layer Protocol (LLP)."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import BinaryIO, Final

from hl7kit.codec.message import Message
from hl7kit.common.config import HL7KitConfig
from hl7kit.common.constants import LLP_LEADING_BYTE, LLP_TRAILING_BYTE_0, LLP_TRAILING_BYTE_1
from hl7kit.common.exceptions import HL7ContentError
from hl7kit.llp.charset import CharsetStrategy, FixedCharset

logger = logging.getLogger(__name__)

_LEADER: Final[bytes] = bytes([LLP_LEADING_BYTE])
_TRAILER: Final[bytes] = bytes([LLP_TRAILING_BYTE_0, LLP_TRAILING_BYTE_1])


class LLPWriter:
    """Writes LLP-framed messages to a binary stream, flushing after each."""

    def __init__(self, stream: BinaryIO, charset: CharsetStrategy | None = None) -> None:
        if charset is None:
            charset = FixedCharset(HL7KitConfig().default_charset)
        self._stream = stream
        self._charset = charset

    @property
    def charset(self) -> CharsetStrategy:
        return self._charset

    def write_message(self, message: Message) -> None:
        """Frame and send ``message``.

        Raises:
            HL7ContentError: If the message cannot be represented in the
                chosen encoding. Nothing is written in that case.
        """
        text = message.format()
        encoding = self._charset.for_outgoing(message)
        try:
            payload = text.encode(encoding)
        except UnicodeEncodeError as e:
            msg = f"message cannot be encoded as {encoding}: {e.reason}"
            raise HL7ContentError(msg, text) from e

        self._stream.write(_LEADER + payload + _TRAILER)
        self._stream.flush()
        logger.debug("Wrote %d byte LLP message (%s)", len(payload), encoding)

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> LLPWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["LLPWriter"]
