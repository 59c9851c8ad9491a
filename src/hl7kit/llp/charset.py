"""Character encoding strategies for LLP traffic.

Encodings are returned as Python codec names. ``MSH18Charset`` reads the
encoding a message declares in MSH.18, falling back to a default.
"""

from __future__ import annotations

import codecs
import logging
import re
from abc import ABC, abstractmethod
from typing import Final

from hl7kit.codec.message import Message
from hl7kit.codec.segment import MSHSegment
from hl7kit.common.constants import DEFAULT_CHARSET, SEGMENT_TERMINATOR
from hl7kit.common.exceptions import HL7ContentError

logger = logging.getLogger(__name__)

_UNICODE_NAME: Final[re.Pattern[str]] = re.compile(r"(?:UNICODE )?(UTF-(?:8|16|32).*)", re.IGNORECASE)
_SEGMENT_TERMINATOR_BYTE: Final[bytes] = SEGMENT_TERMINATOR.encode("ascii")


def _known(name: str) -> str | None:
    """Return the canonical codec name, or None if Python doesn't know it."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def decode_charset_name(name: str) -> str | None:
    """Map an MSH.18 character set name to a Python codec name.

    Recognizes ``ASCII``, ``8859/N``, ``UNICODE UTF-8`` style names and
    anything Python knows once ``-``, ``/`` and ``_`` are normalized.
    Returns None when the name cannot be decoded.
    """
    if name.upper() == "ASCII":
        return "ascii"

    if name.startswith("8859/"):
        found = _known(f"iso-8859-{name[5:]}")
        if found is not None:
            return found

    match = _UNICODE_NAME.fullmatch(name)
    if match is not None:
        found = _known(match.group(1))
        if found is not None:
            return found

    return _known(re.sub(r"[-/_]", "-", name))


class CharsetStrategy(ABC):
    """Chooses the character encoding for each incoming and outgoing message."""

    @abstractmethod
    def for_incoming(self, payload: bytes) -> str:
        """Encoding for a raw incoming message."""

    @abstractmethod
    def for_outgoing(self, message: Message) -> str:
        """Encoding for an outgoing message."""


class FixedCharset(CharsetStrategy):
    """Use one encoding for all traffic."""

    def __init__(self, encoding: str = DEFAULT_CHARSET) -> None:
        found = _known(encoding)
        if found is None:
            msg = f"unknown character encoding: {encoding}"
            raise ValueError(msg)
        self._encoding = found

    @property
    def encoding(self) -> str:
        return self._encoding

    def for_incoming(self, payload: bytes) -> str:
        return self._encoding

    def for_outgoing(self, message: Message) -> str:
        return self._encoding


class MSH18Charset(CharsetStrategy):
    """Use the encoding named in MSH.18, or a default when there is none."""

    def __init__(self, default: str = DEFAULT_CHARSET) -> None:
        found = _known(default)
        if found is None:
            msg = f"unknown character encoding: {default}"
            raise ValueError(msg)
        self._default = found

    @property
    def default(self) -> str:
        return self._default

    def for_incoming(self, payload: bytes) -> str:
        # latin-1 maps every byte, so ASCII delimiters survive any 8-bit charset
        end = payload.find(_SEGMENT_TERMINATOR_BYTE)
        header = payload if end == -1 else payload[:end]
        try:
            msh = MSHSegment.parse(header.decode("latin-1"))
        except HL7ContentError:
            logger.debug("Unreadable MSH, using default encoding %s", self._default)
            return self._default
        return self.decode_msh18(msh)

    def for_outgoing(self, message: Message) -> str:
        return self.decode_msh18(message.msh)

    def decode_msh18(self, msh: MSHSegment) -> str:
        """Decode MSH.18 of ``msh``, falling back to the default."""
        name = msh.character_set
        if not name:
            return self._default
        found = decode_charset_name(name)
        if found is None:
            logger.debug("Unknown MSH.18 character set %r, using %s", name, self._default)
            return self._default
        return found


__all__ = [
    "CharsetStrategy",
    "FixedCharset",
    "MSH18Charset",
    "decode_charset_name",
]
