"""Open HL7 files on disk in the configured character encoding."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, overload

from hl7kit.common.config import HL7KitConfig
from hl7kit.io.file_reader import HL7FileReader
from hl7kit.io.file_writer import HL7FileWriter


@overload
def open_hl7_file(path: str | Path, mode: Literal["r"] = ...) -> HL7FileReader: ...


@overload
def open_hl7_file(path: str | Path, mode: Literal["w", "a"]) -> HL7FileWriter: ...


def open_hl7_file(path: str | Path, mode: str = "r") -> HL7FileReader | HL7FileWriter:
    """Open ``path`` for reading (``"r"``) or writing (``"w"``, ``"a"``).

    The encoding comes from ``HL7KitConfig.file_charset``.
    """
    if mode not in ("r", "w", "a"):
        msg = f"invalid mode: {mode!r}"
        raise ValueError(msg)
    encoding = HL7KitConfig().file_charset
    stream = open(path, mode, encoding=encoding, newline="")
    if mode == "r":
        return HL7FileReader(stream)
    return HL7FileWriter(stream)


__all__ = ["open_hl7_file"]
