"""Acknowledgement (ACK) construction and recognition."""

from __future__ import annotations

from datetime import datetime
from typing import Final

from hl7kit.codec.field import Field
from hl7kit.codec.message import Message
from hl7kit.codec.segment import MSHSegment, Segment
from hl7kit.common.constants import (
    ACK_APPLICATION_ACCEPT,
    ACK_MESSAGE_TYPE,
    DEFAULT_VERSION_ID,
    MSA_SEGMENT_NAME,
    MSH_PROCESSING_ID,
    TIMESTAMP_FORMAT,
)
from hl7kit.common.exceptions import HL7ContentError

ACK_MSH_9: Final[Field] = Field.of(ACK_MESSAGE_TYPE)
ACK_MSA_1: Final[Field] = Field.of(ACK_APPLICATION_ACCEPT)


def format_timestamp(moment: datetime) -> str:
    """Format as ``yyyyMMddHHmmss.SSSZ``, e.g. ``20240102030405.678+0100``."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    millis = moment.microsecond // 1000
    return f"{moment.strftime(TIMESTAMP_FORMAT)}.{millis:03d}{moment.strftime('%z')}"


def _header(source: Message | MSHSegment) -> MSHSegment:
    return source.msh if isinstance(source, Message) else source


def create_ack(source: Message | MSHSegment, serial: int) -> Message:
    """Build an application-accept acknowledgement of ``source``.

    Args:
        source: The message (or its MSH segment) being acknowledged.
        serial: Next local serial number, used as the ACK's control ID.

    Returns:
        A two-segment MSH + MSA message using the source's separators.

    Raises:
        HL7ContentError: If the source MSH stops before MSH.11.
    """
    msh = _header(source)
    if len(msh) <= MSH_PROCESSING_ID:
        msg = "insufficient fields for ACK'ing"
        raise HL7ContentError(msg)
    version_id = msh.version_id if msh.version_id is not None else Field.of(DEFAULT_VERSION_ID)

    ack = Message(seps=msh.seps)
    ack_msh = ack.msh
    ack_msh.timestamp = Field.of(format_timestamp(datetime.now().astimezone()))
    ack_msh.message_type = ACK_MSH_9
    ack_msh.control_id = Field.of(str(serial))
    ack_msh.processing_id = msh.processing_id
    ack_msh.version_id = version_id

    msa = Segment(MSA_SEGMENT_NAME)
    msa.set_field(1, ACK_MSA_1)
    msa.set_field(2, msh.control_id)
    ack.segments.append(msa)
    return ack


def is_ack(source: Message | MSHSegment, candidate: Message) -> bool:
    """Check whether ``candidate`` acknowledges ``source``.

    Only the first component of the candidate's MSH.9 is compared, so
    ``ACK^A08`` matches as well as ``ACK``.

    Raises:
        HL7ContentError: If the source lacks a control ID or processing ID.
    """
    msh = _header(source)
    control_id = msh.control_id
    processing_id = msh.processing_id
    if control_id is None or processing_id is None:
        msg = "insufficient fields for ACK'ing"
        raise HL7ContentError(msg)
    return (
        candidate.get("MSH.9") == ACK_MESSAGE_TYPE
        and candidate.get_field("MSA.2") == control_id
        and candidate.msh.processing_id == processing_id
        and candidate.get_field("MSA.1") == ACK_MSA_1
    )


__all__ = ["create_ack", "is_ack", "format_timestamp"]
