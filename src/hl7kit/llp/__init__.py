"""LLP (MLLP) framing for sending HL7 messages over byte streams."""

from hl7kit.llp.charset import CharsetStrategy, FixedCharset, MSH18Charset, decode_charset_name
from hl7kit.llp.reader import LLPReader
from hl7kit.llp.writer import LLPWriter

__all__ = [
    "LLPReader",
    "LLPWriter",
    "CharsetStrategy",
    "FixedCharset",
    "MSH18Charset",
    "decode_charset_name",
]
