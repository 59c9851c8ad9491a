"""HL7 separator and escape characters, and the escape/unescape algorithms.

A message declares its own delimiters in the first bytes of its MSH segment.
``Seps`` holds those five characters; ``escape`` and ``unescape`` are pure
functions of a scalar value and a ``Seps``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Final

from hl7kit.common.constants import (
    COMPONENT_SEPARATOR_ESCAPE,
    DEFAULT_COMPONENT_SEPARATOR,
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_REPEAT_SEPARATOR,
    DEFAULT_SUBCOMPONENT_SEPARATOR,
    ESCAPE_CHARACTER_ESCAPE,
    FIELD_SEPARATOR_ESCAPE,
    HEX_DATA_ESCAPE,
    REPEAT_SEPARATOR_ESCAPE,
    SUBCOMPONENT_SEPARATOR_ESCAPE,
)
from hl7kit.common.exceptions import HL7ContentError

_HEX_DIGITS: Final[re.Pattern[str]] = re.compile(r"(?:[0-9A-Fa-f]{2})+")

_NAMES: Final[tuple[str, ...]] = (
    "field separator",
    "component separator",
    "repeat separator",
    "escape character",
    "sub-component separator",
)


@dataclass(frozen=True)
class Seps:
    """The delimiter and escape characters used by one message.

    ``esc_char`` and ``sub_sep`` are optional (``None`` when absent), but a
    sub-component separator requires an escape character.
    """

    field_sep: str = DEFAULT_FIELD_SEPARATOR
    comp_sep: str = DEFAULT_COMPONENT_SEPARATOR
    rep_sep: str = DEFAULT_REPEAT_SEPARATOR
    esc_char: str | None = None
    sub_sep: str | None = None

    def __post_init__(self) -> None:
        chars = (self.field_sep, self.comp_sep, self.rep_sep, self.esc_char, self.sub_sep)
        for i, ch in enumerate(chars):
            if ch is None and i >= 3:
                continue
            if not isinstance(ch, str) or len(ch) != 1 or not "\x21" <= ch <= "\x7e":
                msg = f"illegal {_NAMES[i]} {ch!r}"
                raise HL7ContentError(msg)

        if self.esc_char is None and self.sub_sep is not None:
            msg = "escape character must be defined when sub-component separator is defined"
            raise HL7ContentError(msg)

        for i, first in enumerate(chars):
            if first is None:
                continue
            for j in range(i + 1, len(chars)):
                if first == chars[j]:
                    msg = f"duplicate {_NAMES[i]} and {_NAMES[j]} {first!r}"
                    raise HL7ContentError(msg)

    @classmethod
    def from_header(cls, header: str) -> Seps:
        """Build from the MSH.1 + MSH.2 form, e.g. ``|^~\\&``."""
        if not 3 <= len(header) <= 5:
            msg = f"invalid separator header {header!r}"
            raise HL7ContentError(msg, header)
        return cls(
            header[0],
            header[1],
            header[2],
            header[3] if len(header) > 3 else None,
            header[4] if len(header) > 4 else None,
        )

    @property
    def has_escape_char(self) -> bool:
        return self.esc_char is not None

    @property
    def has_sub_sep(self) -> bool:
        return self.sub_sep is not None

    @property
    def encoding_characters(self) -> str:
        """The MSH.2 value: component, repeat, then escape and sub-component if defined."""
        return self.comp_sep + self.rep_sep + (self.esc_char or "") + (self.sub_sep or "")

    @property
    def header(self) -> str:
        """The literal MSH.1 + MSH.2 text."""
        return self.field_sep + self.encoding_characters

    @cached_property
    def escape_codes(self) -> dict[str, str]:
        """Map each delimiter character to its escape code letter."""
        codes = {
            self.field_sep: FIELD_SEPARATOR_ESCAPE,
            self.rep_sep: REPEAT_SEPARATOR_ESCAPE,
            self.comp_sep: COMPONENT_SEPARATOR_ESCAPE,
        }
        if self.sub_sep is not None:
            codes[self.sub_sep] = SUBCOMPONENT_SEPARATOR_ESCAPE
        if self.esc_char is not None:
            codes[self.esc_char] = ESCAPE_CHARACTER_ESCAPE
        return codes

    @cached_property
    def unescape_codes(self) -> dict[str, str]:
        """Inverse of ``escape_codes``."""
        return {code: ch for ch, code in self.escape_codes.items()}

    def escape(self, value: str) -> str:
        return escape(value, self)

    def unescape(self, value: str) -> str:
        return unescape(value, self)

    def __str__(self) -> str:
        return self.header


DEFAULT_SEPS: Final[Seps] = Seps(
    DEFAULT_FIELD_SEPARATOR,
    DEFAULT_COMPONENT_SEPARATOR,
    DEFAULT_REPEAT_SEPARATOR,
    DEFAULT_ESCAPE_CHARACTER,
    DEFAULT_SUBCOMPONENT_SEPARATOR,
)


def escape(value: str, seps: Seps) -> str:
    """Escape delimiters and C0 control characters in a scalar value.

    Characters that need escaping are silently dropped when ``seps`` has no
    escape character.
    """
    codes = seps.escape_codes
    esc = seps.esc_char
    buf: list[str] = []
    for ch in value:
        code = codes.get(ch)
        if code is None:
            if ch >= " ":
                buf.append(ch)
                continue
            code = f"{HEX_DATA_ESCAPE}{ord(ch):02x}"
        if esc is not None:
            buf.append(f"{esc}{code}{esc}")
    return "".join(buf)


def unescape(value: str, seps: Seps) -> str:
    """Decode escapes in a scalar value.

    Custom and malformed escapes are removed. An unclosed trailing escape is
    kept verbatim. Without an escape character the value is returned as is.
    """
    esc = seps.esc_char
    if esc is None or esc not in value:
        return value

    positions = [i for i, ch in enumerate(value) if ch == esc]
    buf: list[str] = []
    posn = 0
    for k in range(0, len(positions), 2):
        start = positions[k]
        buf.append(value[posn:start])
        if k + 1 == len(positions):
            posn = start
            break
        end = positions[k + 1]
        buf.append(_decode_escape(value[start + 1:end], seps))
        posn = end + 1
    buf.append(value[posn:])
    return "".join(buf)


def _decode_escape(body: str, seps: Seps) -> str:
    """Decode the text between a pair of escape characters."""
    if len(body) == 1:
        return seps.unescape_codes.get(body, "")
    if body.startswith(HEX_DATA_ESCAPE):
        digits = body[1:]
        if _HEX_DIGITS.fullmatch(digits):
            return "".join(chr(int(digits[i:i + 2], 16)) for i in range(0, len(digits), 2))
    return ""


__all__ = ["Seps", "DEFAULT_SEPS", "escape", "unescape"]
