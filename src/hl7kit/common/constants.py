"""Constants for HL7 v2.x encoding and LLP framing."""

from __future__ import annotations

from typing import Final

# --- Delimiters ---

DEFAULT_FIELD_SEPARATOR: Final[str] = "|"
DEFAULT_COMPONENT_SEPARATOR: Final[str] = "^"
DEFAULT_REPEAT_SEPARATOR: Final[str] = "~"
DEFAULT_ESCAPE_CHARACTER: Final[str] = "\\"
DEFAULT_SUBCOMPONENT_SEPARATOR: Final[str] = "&"

SEGMENT_TERMINATOR: Final[str] = "\r"

# --- Escape codes ---

FIELD_SEPARATOR_ESCAPE: Final[str] = "F"
COMPONENT_SEPARATOR_ESCAPE: Final[str] = "S"
REPEAT_SEPARATOR_ESCAPE: Final[str] = "R"
ESCAPE_CHARACTER_ESCAPE: Final[str] = "E"
SUBCOMPONENT_SEPARATOR_ESCAPE: Final[str] = "T"
HEX_DATA_ESCAPE: Final[str] = "X"

# --- Segments ---

SEGMENT_NAME_LENGTH: Final[int] = 3
MSH_SEGMENT_NAME: Final[str] = "MSH"
MSA_SEGMENT_NAME: Final[str] = "MSA"

# MSH field indices (MSH.1 is the field separator itself)
MSH_FIELD_SEPARATOR: Final[int] = 1
MSH_ENCODING_CHARACTERS: Final[int] = 2
MSH_SENDING_APPLICATION: Final[int] = 3
MSH_SENDING_FACILITY: Final[int] = 4
MSH_RECEIVING_APPLICATION: Final[int] = 5
MSH_RECEIVING_FACILITY: Final[int] = 6
MSH_TIMESTAMP: Final[int] = 7
MSH_MESSAGE_TYPE: Final[int] = 9
MSH_CONTROL_ID: Final[int] = 10
MSH_PROCESSING_ID: Final[int] = 11
MSH_VERSION_ID: Final[int] = 12
MSH_CHARACTER_SET: Final[int] = 18

# --- Acknowledgements ---

ACK_MESSAGE_TYPE: Final[str] = "ACK"
ACK_APPLICATION_ACCEPT: Final[str] = "AA"
DEFAULT_VERSION_ID: Final[str] = "2.3"

# strftime pattern; milliseconds and the UTC offset are appended separately
TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S"

# --- LLP framing ---

LLP_LEADING_BYTE: Final[int] = 0x0B
LLP_TRAILING_BYTE_0: Final[int] = 0x1C
LLP_TRAILING_BYTE_1: Final[int] = 0x0D

DEFAULT_CHARSET: Final[str] = "iso-8859-1"

__all__ = [
    "DEFAULT_FIELD_SEPARATOR",
    "DEFAULT_COMPONENT_SEPARATOR",
    "DEFAULT_REPEAT_SEPARATOR",
    "DEFAULT_ESCAPE_CHARACTER",
    "DEFAULT_SUBCOMPONENT_SEPARATOR",
    "SEGMENT_TERMINATOR",
    "FIELD_SEPARATOR_ESCAPE",
    "COMPONENT_SEPARATOR_ESCAPE",
    "REPEAT_SEPARATOR_ESCAPE",
    "ESCAPE_CHARACTER_ESCAPE",
    "SUBCOMPONENT_SEPARATOR_ESCAPE",
    "HEX_DATA_ESCAPE",
    "SEGMENT_NAME_LENGTH",
    "MSH_SEGMENT_NAME",
    "MSA_SEGMENT_NAME",
    "MSH_FIELD_SEPARATOR",
    "MSH_ENCODING_CHARACTERS",
    "MSH_SENDING_APPLICATION",
    "MSH_SENDING_FACILITY",
    "MSH_RECEIVING_APPLICATION",
    "MSH_RECEIVING_FACILITY",
    "MSH_TIMESTAMP",
    "MSH_MESSAGE_TYPE",
    "MSH_CONTROL_ID",
    "MSH_PROCESSING_ID",
    "MSH_VERSION_ID",
    "MSH_CHARACTER_SET",
    "ACK_MESSAGE_TYPE",
    "ACK_APPLICATION_ACCEPT",
    "DEFAULT_VERSION_ID",
    "TIMESTAMP_FORMAT",
    "LLP_LEADING_BYTE",
    "LLP_TRAILING_BYTE_0",
    "LLP_TRAILING_BYTE_1",
    "DEFAULT_CHARSET",
]
