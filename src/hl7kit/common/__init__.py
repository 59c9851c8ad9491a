"""Common constants, configuration and errors for hl7kit."""

from hl7kit.common.config import HL7KitConfig
from hl7kit.common.constants import (
    DEFAULT_CHARSET,
    MSH_SEGMENT_NAME,
    SEGMENT_TERMINATOR,
)
from hl7kit.common.exceptions import HL7ContentError, HL7Error, LLPFramingError

__all__ = [
    "HL7KitConfig",
    "DEFAULT_CHARSET",
    "MSH_SEGMENT_NAME",
    "SEGMENT_TERMINATOR",
    "HL7Error",
    "HL7ContentError",
    "LLPFramingError",
]
