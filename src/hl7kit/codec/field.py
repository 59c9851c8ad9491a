"""Immutable HL7 field values."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from hl7kit.codec.seps import DEFAULT_SEPS, Seps, escape, unescape

# repeats x components x sub-components
FieldValue = tuple[tuple[tuple[str, ...], ...], ...]


@dataclass(frozen=True)
class Field:
    """One field of a segment, possibly with repeats, components and sub-components.

    Every level holds at least one element and every scalar is a string
    (absent scalars are ``""``). ``None`` scalars passed to the constructor
    are normalized to ``""``.
    """

    value: FieldValue

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _normalize(self.value))

    @classmethod
    def of(cls, text: str | None) -> Field:
        """A field holding one scalar."""
        return cls((((text,),),))

    @classmethod
    def of_repeats(cls, repeats: Sequence[str | None]) -> Field:
        """A field holding one scalar per repeat."""
        return cls(tuple(((r,),) for r in repeats))

    @classmethod
    def parse(cls, encoded: str, seps: Seps) -> Field:
        """Parse an encoded field, decoding escapes.

        Sub-components are split out only when ``seps`` defines a
        sub-component separator.
        """
        repeats = []
        for rep in encoded.split(seps.rep_sep):
            comps = []
            for comp in rep.split(seps.comp_sep):
                subs = comp.split(seps.sub_sep) if seps.sub_sep is not None else [comp]
                comps.append(tuple(unescape(s, seps) for s in subs))
            repeats.append(tuple(comps))
        return cls(tuple(repeats))

    def get(self, rep: int, comp: int, sub: int) -> str | None:
        """Return the scalar at the given zero-based position, or ``None`` if absent."""
        if rep < 0 or comp < 0 or sub < 0:
            msg = f"negative index ({rep}, {comp}, {sub})"
            raise ValueError(msg)
        try:
            return self.value[rep][comp][sub]
        except IndexError:
            return None

    @property
    def repeats(self) -> FieldValue:
        return self.value

    def is_empty(self) -> bool:
        return self == EMPTY_FIELD

    def format(self, seps: Seps) -> str:
        """Encode this field with the given separators, escaping every scalar."""
        sub_sep = seps.sub_sep or ""
        return seps.rep_sep.join(
            seps.comp_sep.join(sub_sep.join(escape(s, seps) for s in comp) for comp in rep)
            for rep in self.value
        )

    def __str__(self) -> str:
        return self.format(DEFAULT_SEPS)


def _normalize(value: Iterable[Iterable[Iterable[str | None]]]) -> FieldValue:
    """Convert nested sequences to tuples, checking that no level is empty."""
    if value is None:
        msg = "field value is None"
        raise ValueError(msg)
    repeats = []
    for rep in value:
        if rep is None:
            msg = "repeat is None"
            raise ValueError(msg)
        comps = []
        for comp in rep:
            if comp is None or isinstance(comp, str):
                msg = f"component must be a sequence of strings, got {comp!r}"
                raise ValueError(msg)
            subs = tuple("" if s is None else s for s in comp)
            if not subs:
                msg = "zero length sub-component array"
                raise ValueError(msg)
            comps.append(subs)
        if not comps:
            msg = "zero length component array"
            raise ValueError(msg)
        repeats.append(tuple(comps))
    if not repeats:
        msg = "zero length repeat array"
        raise ValueError(msg)
    return tuple(repeats)


EMPTY_FIELD: Final[Field] = Field.of("")

__all__ = ["Field", "FieldValue", "EMPTY_FIELD"]
