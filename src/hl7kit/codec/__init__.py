"""HL7 v2.x message codec: separators, fields, segments and messages."""

from hl7kit.codec.ack import create_ack, format_timestamp, is_ack
from hl7kit.codec.field import EMPTY_FIELD, Field
from hl7kit.codec.message import Message, SegmentList, looks_like_segment_start
from hl7kit.codec.segment import MSHSegment, Segment
from hl7kit.codec.seps import DEFAULT_SEPS, Seps, escape, unescape

__all__ = [
    "Seps",
    "DEFAULT_SEPS",
    "escape",
    "unescape",
    "Field",
    "EMPTY_FIELD",
    "Segment",
    "MSHSegment",
    "Message",
    "SegmentList",
    "looks_like_segment_start",
    "create_ack",
    "is_ack",
    "format_timestamp",
]
