"""Writer for the HL7 file format."""

from __future__ import annotations

import unicodedata
from types import TracebackType
from typing import Final, TextIO

from hl7kit.codec.message import Message

DEFAULT_EOS: Final[str] = "\n"
DEFAULT_EOM: Final[str] = "\n"


def _check_control(value: str, name: str, allow_empty: bool = False) -> None:
    if allow_empty and value == "":
        return
    if len(value) != 1 or unicodedata.category(value) != "Cc":
        msg = f"invalid {name} character: {value!r}"
        raise ValueError(msg)


class HL7FileWriter:
    """Writes messages to a text stream, one segment per line.

    Every segment is followed by ``eos`` and every message by ``eom``; pass
    ``eom=""`` to write messages back to back.
    """

    def __init__(self, stream: TextIO, eos: str = DEFAULT_EOS, eom: str = DEFAULT_EOM) -> None:
        _check_control(eos, "EOS")
        _check_control(eom, "EOM", allow_empty=True)
        self._stream = stream
        self._eos = eos
        self._eom = eom

    @property
    def eos(self) -> str:
        return self._eos

    @property
    def eom(self) -> str:
        return self._eom

    def write_message(self, message: Message) -> None:
        seps = message.seps
        for segment in message.segments:
            self._stream.write(segment.format(seps))
            self._stream.write(self._eos)
        self._stream.write(self._eom)
        self._stream.flush()

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> HL7FileWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["HL7FileWriter", "DEFAULT_EOS", "DEFAULT_EOM"]
