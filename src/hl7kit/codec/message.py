"""HL7 messages: parsing, serialization and dotted-name lookup."""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable, Iterator, MutableSequence
from typing import Final, overload

from hl7kit.codec.field import Field
from hl7kit.codec.segment import MSHSegment, Segment
from hl7kit.codec.seps import Seps
from hl7kit.common.constants import SEGMENT_NAME_LENGTH, SEGMENT_TERMINATOR
from hl7kit.common.exceptions import HL7ContentError

logger = logging.getLogger(__name__)

FIELD_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"([A-Z0-9]{3})\.(\d+)")
VALUE_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"([A-Z0-9]{3})(?:\.(\d+)(?:\.(\d+)(?:\.(\d+))?)?)?"
)


class SegmentList(MutableSequence[Segment]):
    """The segments of a message; the first is always an MSHSegment.

    Removing the head or replacing it with anything but an MSHSegment is
    refused, so the list can never become empty.
    """

    def __init__(self, msh: MSHSegment, segments: Iterable[Segment] = ()) -> None:
        items = [msh, *segments]
        self._check(items)
        self._items: list[Segment] = items

    @staticmethod
    def _check(items: list[Segment]) -> None:
        if not items:
            msg = "can't remove initial MSH"
            raise ValueError(msg)
        if not isinstance(items[0], MSHSegment):
            msg = "can't replace initial MSH segment with non-MSH segment"
            raise TypeError(msg)
        for segment in items:
            if not isinstance(segment, Segment):
                msg = f"not a segment: {segment!r}"
                raise TypeError(msg)

    @overload
    def __getitem__(self, index: int) -> Segment: ...

    @overload
    def __getitem__(self, index: slice) -> list[Segment]: ...

    def __getitem__(self, index: int | slice) -> Segment | list[Segment]:
        return self._items[index]

    def __setitem__(self, index, value) -> None:  # type: ignore[no-untyped-def]
        items = list(self._items)
        items[index] = value
        self._check(items)
        self._items = items

    def __delitem__(self, index: int | slice) -> None:
        items = list(self._items)
        del items[index]
        if not items or items[0] is not self._items[0]:
            msg = "can't remove initial MSH"
            raise ValueError(msg)
        self._items = items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._items)

    def insert(self, index: int, value: Segment) -> None:
        items = list(self._items)
        items.insert(index, value)
        self._check(items)
        self._items = items

    def clear(self) -> None:
        msg = "list can't be empty"
        raise ValueError(msg)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SegmentList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SegmentList({self._items!r})"


def looks_like_segment_start(chunk: str, seps: Seps) -> bool:
    """Decide whether text following a CR begins a new segment.

    A segment starts with three printable characters other than the field
    separator, followed by the field separator or nothing at all. Anything
    else is taken to be a stray CR inside the previous segment.
    """
    head = chunk[:SEGMENT_NAME_LENGTH]
    if len(head) < SEGMENT_NAME_LENGTH or seps.field_sep in head:
        return False
    if any(not "\x21" <= ch <= "\x7e" for ch in head):
        return False
    return len(chunk) == SEGMENT_NAME_LENGTH or chunk[SEGMENT_NAME_LENGTH] == seps.field_sep


def _rejoin_broken_segments(chunks: list[str], seps: Seps) -> list[str]:
    """Splice back chunks that were split by a stray carriage return."""
    lines = [chunks[0]]
    for chunk in chunks[1:]:
        # the segment right after MSH is taken as is
        if len(lines) > 1 and not looks_like_segment_start(chunk, seps):
            logger.debug("Rejoining stray CR inside %s segment", lines[-1][:SEGMENT_NAME_LENGTH])
            lines[-1] += chunk
        else:
            lines.append(chunk)
    return lines


class Message:
    """An HL7 message: an MSH segment followed by any number of segments."""

    def __init__(self, msh: MSHSegment | None = None, seps: Seps | None = None) -> None:
        """Start a message holding only its MSH segment.

        Either pass a ready ``msh`` or the ``seps`` for a fresh one, not both.
        """
        if msh is not None and seps is not None:
            msg = "pass either msh or seps, not both"
            raise ValueError(msg)
        if msh is None:
            msh = MSHSegment(seps) if seps is not None else MSHSegment()
        self._segments = SegmentList(msh)

    @classmethod
    def parse(cls, text: str, repair_line_breaks: bool = True) -> Message:
        """Parse a message whose segments are separated by carriage returns.

        Trailing CRs are ignored. Unless ``repair_line_breaks`` is false,
        CRs that do not precede something shaped like a segment are treated
        as part of the segment content and removed.
        """
        text = text.rstrip(SEGMENT_TERMINATOR)
        chunks = text.split(SEGMENT_TERMINATOR)
        try:
            msh = MSHSegment.parse(chunks[0])
            seps = msh.seps
            lines = chunks
            if repair_line_breaks:
                lines = _rejoin_broken_segments(chunks, seps)
            segments = [Segment.parse(line, seps) for line in lines[1:]]
        except HL7ContentError as e:
            raise e.with_content(text)
        message = cls(msh)
        message._segments = SegmentList(msh, segments)
        return message

    @property
    def msh(self) -> MSHSegment:
        return self._segments[0]  # type: ignore[return-value]

    @property
    def seps(self) -> Seps:
        return self.msh.seps

    @property
    def segments(self) -> SegmentList:
        return self._segments

    def find_segment(self, name: str, start: int = 0) -> Segment | None:
        """Return the first ``name`` segment at or after index ``start``."""
        if start < 0:
            msg = f"start={start}"
            raise ValueError(msg)
        for segment in self._segments[start:]:
            if segment.name == name:
                return segment
        return None

    def find_segments(self, name: str) -> list[Segment]:
        return [segment for segment in self._segments if segment.name == name]

    def get_field(self, name: str, start: int = 0) -> Field | None:
        """Find a field by name of the form ``XYZ.N``, e.g. ``PV1.3``."""
        match = FIELD_NAME_PATTERN.fullmatch(name)
        if match is None:
            msg = f"invalid name {name!r}"
            raise ValueError(msg)
        segment = self.find_segment(match.group(1), start)
        return segment.get_field(int(match.group(2))) if segment is not None else None

    def get(self, name: str, start: int = 0, repeat: int = 0) -> str | None:
        """Find a scalar by dotted name ``XYZ[.N[.M[.L]]]``.

        Component ``M`` and sub-component ``L`` are one-based and default to
        1; a bare segment name addresses the name field. Returns ``None``
        when the value does not exist.
        """
        match = VALUE_NAME_PATTERN.fullmatch(name)
        if match is None:
            msg = f"invalid name {name!r}"
            raise ValueError(msg)
        if repeat < 0:
            msg = f"repeat={repeat}"
            raise ValueError(msg)
        seg_name, field_num, comp_num, sub_num = match.groups()
        component = int(comp_num) - 1 if comp_num is not None else 0
        subcomponent = int(sub_num) - 1 if sub_num is not None else 0
        if component < 0 or subcomponent < 0:
            msg = f"invalid name {name!r}"
            raise ValueError(msg)

        segment = self.find_segment(seg_name, start)
        if segment is None:
            return None
        field = segment.get_field(int(field_num) if field_num is not None else 0)
        if field is None:
            return None
        return field.get(repeat, component, subcomponent)

    def format(self, seps: Seps | None = None) -> str:
        """Serialize, terminating every segment with a CR.

        ``seps`` overrides the MSH separators for this output only.
        """
        if seps is None:
            seps = self.seps
        return "".join(segment.format(seps) + SEGMENT_TERMINATOR for segment in self._segments)

    def copy(self) -> Message:
        clone = copy.copy(self)
        segments = [segment.copy() for segment in self._segments]
        clone._segments = SegmentList(segments[0], segments[1:])  # type: ignore[arg-type]
        return clone

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Message({self.format()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self._segments == other._segments

    __hash__ = None  # type: ignore[assignment]


__all__ = ["Message", "SegmentList", "looks_like_segment_start"]
