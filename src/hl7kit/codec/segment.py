"""HL7 segments, including the self-describing MSH segment."""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable
from typing import Final

from hl7kit.codec.field import EMPTY_FIELD, Field
from hl7kit.codec.seps import DEFAULT_SEPS, Seps
from hl7kit.common.constants import (
    MSH_CHARACTER_SET,
    MSH_CONTROL_ID,
    MSH_ENCODING_CHARACTERS,
    MSH_FIELD_SEPARATOR,
    MSH_MESSAGE_TYPE,
    MSH_PROCESSING_ID,
    MSH_RECEIVING_APPLICATION,
    MSH_RECEIVING_FACILITY,
    MSH_SEGMENT_NAME,
    MSH_SENDING_APPLICATION,
    MSH_SENDING_FACILITY,
    MSH_TIMESTAMP,
    MSH_VERSION_ID,
)
from hl7kit.common.exceptions import HL7ContentError

SEGMENT_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Z0-9]{3}")


def check_segment_name(name: str) -> None:
    """Raise HL7ContentError unless ``name`` is three uppercase letters or digits."""
    if not isinstance(name, str) or SEGMENT_NAME_PATTERN.fullmatch(name) is None:
        msg = f"invalid segment name {name!r}"
        raise HL7ContentError(msg, name)


class Segment:
    """One segment of a message: a name followed by fields indexed from 1.

    Index 0 is the name field. Gaps are never stored; setting a field past
    the end pads with empty fields.
    """

    def __init__(self, name: str, fields: Iterable[Field] = ()) -> None:
        self._fields: list[Field] = []
        self.set_name(name)
        for field in fields:
            self.append_field(field)

    @classmethod
    def parse(cls, line: str, seps: Seps) -> Segment:
        """Parse one segment line (without its terminator)."""
        tokens = line.split(seps.field_sep)
        segment = cls(tokens[0])
        segment._fields.extend(Field.parse(token, seps) for token in tokens[1:])
        return segment

    @property
    def name(self) -> str:
        return self._fields[0].value[0][0][0]

    def set_name(self, name: str) -> None:
        check_segment_name(name)
        field = Field.of(name)
        if self._fields:
            self._fields[0] = field
        else:
            self._fields.append(field)

    @property
    def fields(self) -> tuple[Field, ...]:
        """All fields, starting with the name field."""
        return tuple(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def get_field(self, index: int) -> Field | None:
        """Return field ``index`` (0 is the name), or ``None`` past the end."""
        if index < 0:
            msg = f"index={index}"
            raise ValueError(msg)
        if index >= len(self._fields):
            return None
        return self._fields[index]

    def set_field(self, index: int, field: Field | str) -> None:
        """Set field ``index`` (at least 1), padding with empty fields as needed."""
        if field is None:
            msg = "field is None"
            raise ValueError(msg)
        if index < 1:
            msg = f"index={index}"
            raise ValueError(msg)
        if isinstance(field, str):
            field = Field.of(field)
        while len(self._fields) <= index:
            self._fields.append(EMPTY_FIELD)
        self._fields[index] = field

    def append_field(self, field: Field | str) -> None:
        if field is None:
            msg = "field is None"
            raise ValueError(msg)
        if isinstance(field, str):
            field = Field.of(field)
        self._fields.append(field)

    def trim_to(self, size: int) -> None:
        """Drop all but the first ``size`` fields."""
        if size < 1:
            msg = "size < 1"
            raise ValueError(msg)
        del self._fields[size:]

    def copy(self) -> Segment:
        clone = copy.copy(self)
        clone._fields = list(self._fields)
        return clone

    def format(self, seps: Seps) -> str:
        return seps.field_sep.join(field.format(seps) for field in self._fields)

    def __str__(self) -> str:
        return self.format(DEFAULT_SEPS)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return type(self) is type(other) and self._fields == other._fields

    __hash__ = None  # type: ignore[assignment]


def _msh_field(index: int, doc: str) -> property:
    def getter(self: MSHSegment) -> Field | None:
        return self.get_field(index)

    def setter(self: MSHSegment, field: Field | str) -> None:
        self.set_field(index, field)

    return property(getter, setter, doc=doc)


class MSHSegment(Segment):
    """The message header segment.

    MSH.1 and MSH.2 describe the message's own separators; they change only
    through ``set_seps`` and are written literally, never escaped.
    """

    def __init__(self, seps: Seps = DEFAULT_SEPS) -> None:
        super().__init__(MSH_SEGMENT_NAME)
        self.set_seps(seps)

    @classmethod
    def parse(cls, line: str, seps: Seps | None = None) -> MSHSegment:
        """Parse an MSH line, reading the separators from its first bytes.

        ``seps`` is ignored; the segment declares its own.
        """
        if not line.startswith(MSH_SEGMENT_NAME):
            msg = f"MSH segment does not start with {MSH_SEGMENT_NAME!r}"
            raise HL7ContentError(msg, line)
        if len(line) < 6:
            msg = "MSH segment is truncated"
            raise HL7ContentError(msg, line)

        # MSH.2 ends at the next field separator or after four characters
        field_sep = line[3]
        end = 6
        if len(line) > end and line[end] != field_sep:
            end += 1
            if len(line) > end and line[end] != field_sep:
                end += 1
        try:
            seps = Seps.from_header(line[3:end])
        except HL7ContentError as e:
            raise e.with_content(line)

        msh = cls(seps)
        if end == len(line):
            return msh
        if line[end] != field_sep:
            msg = "bogus extra characters in MSH.2"
            raise HL7ContentError(msg, line)
        msh._fields.extend(Field.parse(token, seps) for token in line[end + 1:].split(field_sep))
        return msh

    @property
    def seps(self) -> Seps:
        return self._seps

    def set_seps(self, seps: Seps) -> None:
        """Replace the separators, regenerating MSH.1 and MSH.2."""
        self._seps = seps
        super().set_field(MSH_FIELD_SEPARATOR, Field.of(seps.field_sep))
        super().set_field(MSH_ENCODING_CHARACTERS, Field.of(seps.encoding_characters))

    def set_name(self, name: str) -> None:
        if name != MSH_SEGMENT_NAME:
            msg = f"cannot rename MSH segment to {name!r}"
            raise ValueError(msg)
        super().set_name(name)

    def set_field(self, index: int, field: Field | str) -> None:
        """Set field ``index``; MSH.1 and MSH.2 are off limits, use ``set_seps``."""
        if index < 3:
            msg = "index < 3"
            raise ValueError(msg)
        super().set_field(index, field)

    def trim_to(self, size: int) -> None:
        if size < 3:
            msg = "size < 3"
            raise ValueError(msg)
        super().trim_to(size)

    sending_application = _msh_field(MSH_SENDING_APPLICATION, "MSH.3")
    sending_facility = _msh_field(MSH_SENDING_FACILITY, "MSH.4")
    receiving_application = _msh_field(MSH_RECEIVING_APPLICATION, "MSH.5")
    receiving_facility = _msh_field(MSH_RECEIVING_FACILITY, "MSH.6")
    timestamp = _msh_field(MSH_TIMESTAMP, "MSH.7")
    message_type = _msh_field(MSH_MESSAGE_TYPE, "MSH.9")
    control_id = _msh_field(MSH_CONTROL_ID, "MSH.10")
    processing_id = _msh_field(MSH_PROCESSING_ID, "MSH.11")
    version_id = _msh_field(MSH_VERSION_ID, "MSH.12")

    @property
    def character_set(self) -> str | None:
        """First scalar of MSH.18, if present."""
        field = self.get_field(MSH_CHARACTER_SET)
        return field.get(0, 0, 0) if field is not None else None

    def format(self, seps: Seps) -> str:
        """Encode with ``seps``; MSH.1 and MSH.2 are emitted from ``seps`` literally."""
        parts = [self.name + seps.header]
        parts.extend(field.format(seps) for field in self._fields[3:])
        return seps.field_sep.join(parts)

    def __str__(self) -> str:
        return self.format(self._seps)


__all__ = ["Segment", "MSHSegment", "check_segment_name"]
