"""Tests for ACK construction and recognition."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from hl7kit.codec.ack import create_ack, format_timestamp, is_ack
from hl7kit.codec.field import Field
from hl7kit.codec.message import Message
from hl7kit.codec.segment import MSHSegment
from hl7kit.codec.seps import DEFAULT_SEPS, Seps
from hl7kit.common.exceptions import HL7ContentError

TIMESTAMP_PATTERN = re.compile(r"\d{14}\.\d{3}[+-]\d{4}")


class TestCreateAck:
    def test_ack_fields(self, msg2: Message) -> None:
        ack = create_ack(msg2, 1234)
        assert ack.get("MSH.9") == "ACK"
        assert ack.get("MSH.10") == "1234"
        assert ack.get("MSH.11") == "P"
        assert ack.get("MSH.12") == "2.2"
        assert ack.get("MSA.0") == "MSA"
        assert ack.get("MSA.1") == "AA"
        assert ack.get("MSA.2") == "6917898"
        assert ack.get_field("MSA.2") == msg2.msh.control_id
        assert [segment.name for segment in ack.segments] == ["MSH", "MSA"]

    def test_ack_timestamp(self, msg2: Message) -> None:
        ack = create_ack(msg2, 1)
        assert TIMESTAMP_PATTERN.fullmatch(ack.get("MSH.7"))

    def test_ack_from_msh_segment(self, msg2: Message) -> None:
        ack = create_ack(msg2.msh, 7)
        assert ack.get("MSH.10") == "7"
        assert is_ack(msg2.msh, ack)

    def test_ack_uses_source_seps(self) -> None:
        source = Message.parse("MSH:;~\\&:A:B:C:D:20240101::ADT;A01:42:P\r")
        ack = create_ack(source, 5)
        assert ack.seps == Seps(":", ";", "~", "\\", "&")
        assert ack.format().startswith("MSH:;~\\&:")
        assert Message.parse(ack.format()) == ack

    def test_default_version(self) -> None:
        source = Message.parse("MSH|^~\\&|A|B|C|D|20240101||ADT^A01|42|P\r")
        ack = create_ack(source, 5)
        assert ack.get("MSH.12") == "2.3"
        assert ack.msh.seps == DEFAULT_SEPS

    def test_insufficient_fields_raises(self) -> None:
        with pytest.raises(HL7ContentError, match="insufficient fields"):
            create_ack(MSHSegment(), 0)
        with pytest.raises(HL7ContentError, match="insufficient fields"):
            create_ack(Message.parse("MSH|^~\\&|A|B|C|D|20240101||ADT^A01|42\r"), 0)


class TestIsAck:
    def test_own_ack_recognized(self, msg1: Message, msg2: Message) -> None:
        for msg in (msg1, msg2):
            assert is_ack(msg, create_ack(msg, 99))

    def test_message_type_with_trigger_event(self, msg2: Message) -> None:
        ack = create_ack(msg2, 1234)
        ack.msh.message_type = Field.parse("ACK^A08", DEFAULT_SEPS)
        assert is_ack(msg2, ack)

    def test_other_message_not_ack(self, msg1: Message, msg2: Message) -> None:
        assert not is_ack(msg1, create_ack(msg2, 1))
        assert not is_ack(msg2, msg1)

    def test_wrong_processing_id(self, msg2: Message) -> None:
        ack = create_ack(msg2, 1)
        ack.msh.processing_id = "T"
        assert not is_ack(msg2, ack)

    def test_application_error_not_accepted(self, msg2: Message) -> None:
        ack = create_ack(msg2, 1)
        ack.segments[1].set_field(1, "AE")
        assert not is_ack(msg2, ack)

    def test_insufficient_fields_raises(self) -> None:
        with pytest.raises(HL7ContentError, match="insufficient fields"):
            is_ack(MSHSegment(), Message())


class TestFormatTimestamp:
    def test_format(self) -> None:
        moment = datetime(2024, 1, 2, 3, 4, 5, 678901, tzinfo=timezone(timedelta(hours=1)))
        assert format_timestamp(moment) == "20240102030405.678+0100"

    def test_utc(self) -> None:
        moment = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "20241231235959.000+0000"

    def test_naive_uses_local_zone(self) -> None:
        assert TIMESTAMP_PATTERN.fullmatch(format_timestamp(datetime(2024, 1, 2, 3, 4, 5)))
