"""Tests for the line-oriented HL7 file format."""

import io
from pathlib import Path

import pytest

from hl7kit.codec.message import Message
from hl7kit.common.exceptions import HL7ContentError
from hl7kit.io.file_reader import HL7FileReader
from hl7kit.io.file_writer import HL7FileWriter
from hl7kit.io.opener import open_hl7_file

FILE_TEXT = (
    "# two admissions\n"
    "\n"
    "MSH|^~\\&|A|B\r\n"
    "PID|1\n"
    "   \n"
    "# between messages\n"
    "MSH|^~\\&|C|D\n"
    "EVN|A08\n"
)


class TestHL7FileReader:
    def test_read_messages(self) -> None:
        reader = HL7FileReader(io.StringIO(FILE_TEXT))
        first = reader.read_message()
        second = reader.read_message()
        assert first == Message.parse("MSH|^~\\&|A|B\rPID|1\r")
        assert second == Message.parse("MSH|^~\\&|C|D\rEVN|A08\r")
        with pytest.raises(EOFError):
            reader.read_message()

    def test_iterate(self) -> None:
        with HL7FileReader(io.StringIO(FILE_TEXT)) as reader:
            messages = list(reader)
        assert len(messages) == 2
        assert [s.name for s in messages[0].segments] == ["MSH", "PID"]

    def test_empty_input(self) -> None:
        reader = HL7FileReader(io.StringIO("# nothing\n\n"))
        with pytest.raises(EOFError):
            reader.read_message()

    def test_alternate_delimiters(self) -> None:
        reader = HL7FileReader(io.StringIO("MSH:;~\\&:A\nPID:1::X;Y\n"))
        message = reader.read_message()
        assert message.get("PID.3.2") == "Y"

    def test_bad_segment_carries_line(self) -> None:
        reader = HL7FileReader(io.StringIO("MSH|^~\\&\nX|bad\n"))
        with pytest.raises(HL7ContentError) as exc_info:
            reader.read_message()
        assert exc_info.value.content == "X|bad"

    def test_bad_header_carries_line(self) -> None:
        reader = HL7FileReader(io.StringIO("PID|1\n"))
        with pytest.raises(HL7ContentError, match="MSH") as exc_info:
            reader.read_message()
        assert exc_info.value.content == "PID|1"

    def test_closed_reader_at_eof(self) -> None:
        reader = HL7FileReader(io.StringIO(FILE_TEXT))
        reader.close()
        with pytest.raises(EOFError):
            reader.read_message()


class TestHL7FileWriter:
    def test_write(self) -> None:
        buf = io.StringIO()
        writer = HL7FileWriter(buf)
        writer.write_message(Message.parse("MSH|^~\\&|A\rPID|1\r"))
        assert buf.getvalue() == "MSH|^~\\&|A\nPID|1\n\n"

    def test_custom_terminators(self) -> None:
        buf = io.StringIO()
        writer = HL7FileWriter(buf, eos="\r", eom="")
        writer.write_message(Message.parse("MSH|^~\\&|A\rPID|1\r"))
        writer.write_message(Message())
        assert buf.getvalue() == "MSH|^~\\&|A\rPID|1\rMSH|^~\\&\r"

    @pytest.mark.parametrize(("eos", "eom"), [("x", "\n"), ("", "\n"), ("\n", "ab"), ("\r\n", "\n")])
    def test_invalid_terminators(self, eos: str, eom: str) -> None:
        with pytest.raises(ValueError, match="invalid"):
            HL7FileWriter(io.StringIO(), eos=eos, eom=eom)

    def test_round_trip(self, msg1: Message, msg2: Message) -> None:
        buf = io.StringIO()
        writer = HL7FileWriter(buf)
        writer.write_message(msg1)
        writer.write_message(msg2)
        reader = HL7FileReader(io.StringIO(buf.getvalue()))
        assert list(reader) == [msg1, msg2]


class TestOpenHL7File:
    def test_write_then_read(self, tmp_path: Path, msg1: Message, msg2: Message) -> None:
        path = tmp_path / "messages.hl7"
        with open_hl7_file(path, "w") as writer:
            writer.write_message(msg1)
            writer.write_message(msg2)
        with open_hl7_file(path) as reader:
            assert list(reader) == [msg1, msg2]

    def test_configured_charset(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HL7KIT_FILE_CHARSET", "utf-8")
        path = tmp_path / "utf8.hl7"
        with open_hl7_file(path, "w") as writer:
            writer.write_message(Message.parse("MSH|^~\\&|Jürgen\r"))
        assert "Jürgen".encode("utf-8") in path.read_bytes()
        with open_hl7_file(path) as reader:
            assert reader.read_message().get("MSH.3") == "Jürgen"

    def test_invalid_mode(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="invalid mode"):
            open_hl7_file(tmp_path / "x.hl7", "x")  # type: ignore[call-overload]
