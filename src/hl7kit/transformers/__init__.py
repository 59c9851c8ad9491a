"""Conversions from HL7 messages to other representations."""

from hl7kit.transformers.xml_converter import (
    append_message,
    append_segment,
    create_document,
    to_xml,
    to_xml_string,
)

__all__ = [
    "create_document",
    "append_segment",
    "append_message",
    "to_xml",
    "to_xml_string",
]
