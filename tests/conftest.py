"""Shared sample messages for the hl7kit tests."""

import pytest

from hl7kit.codec.message import Message

# --- Synthetic HL7 Messages ---

MSG1_TEXT = (
    "MSH|^~\\&|ST01|B|IM|B|20061211154300||ADT^A01|6917897|P|2.2|||AL\r"
    "EVN|A01|20061211154300\r"
    "PID|1||555444222^^^ST01^MR||DOE^JANE^Q||19700101|F\r"
    "PV1|1|I|ICU^101^A\r"
    "ZAX|one\r"
    "ZAX|two^2\r"
)

MSG2_TEXT = (
    "MSH|^~\\&|ST01|B|IM|B|20061211154319||ADT^A08|6917898|P|2.2|6917898||AL|||||||2.2b\r"
    "EVN|A08|20061211154319|||MRP\r"
    "PID|1|01001991^^^ST01|988747372^^^ST01B^MR~983928341^^^ST01C^MR~93823848^^^ST01^PI"
    '||JONES6^SMITH^P^""||19500101|M|||123 MAIN ST^^ANYTOWN^AL^35432^USA^H^01^^^^^^^^^Y\r'
    "PV1|1|O|CLINIC^^^ST01\r"
    "ZAX|AAA^111&222&&444^^3333^~BBB^111&222&&^^3333|foobar|~~|"
    r"escapes1=:;\R\\E\\T\^escapes2=\F\\S\\R\\E\\T\|"
    "\r"
    "ZAX|two\r"
)


@pytest.fixture
def msg1_text() -> str:
    return MSG1_TEXT


@pytest.fixture
def msg2_text() -> str:
    return MSG2_TEXT


@pytest.fixture
def msg1() -> Message:
    return Message.parse(MSG1_TEXT)


@pytest.fixture
def msg2() -> Message:
    return Message.parse(MSG2_TEXT)
