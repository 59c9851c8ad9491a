"""Exception types raised by hl7kit."""

from __future__ import annotations


class HL7Error(Exception):
    """Base class for all hl7kit errors."""


class HL7ContentError(HL7Error):
    """Raised when text is not a well-formed HL7 message.

    The offending text, when known, is kept in ``content`` for diagnostics.
    """

    def __init__(self, message: str, content: str | None = None) -> None:
        self.content = content
        super().__init__(message)

    def with_content(self, content: str) -> HL7ContentError:
        """Record the offending text and return this exception."""
        self.content = content
        return self


class LLPFramingError(HL7Error, OSError):
    """Raised on a bad LLP sentinel byte or an oversize payload.

    The stream may still be salvageable with ``LLPReader.resync()``.
    """


__all__ = ["HL7Error", "HL7ContentError", "LLPFramingError"]
