"""Render HL7 messages as XML.

Structure::

    <HL7>
      <MESSAGE>
        <PID>
          <PID.3>12345</PID.3>          one element per field repeat
          <PID.5>
            <PID.5.1>DOE</PID.5.1>      one element per component
            <PID.5.2>JOHN</PID.5.2>
          </PID.5>
        </PID>
      </MESSAGE>
    </HL7>

A component with more than one sub-component gets ``PID.n.m.k`` children.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final
from xml.dom import minidom

from hl7kit.codec.message import Message
from hl7kit.codec.segment import Segment

logger = logging.getLogger(__name__)

HL7_TAG: Final[str] = "HL7"
MESSAGE_TAG: Final[str] = "MESSAGE"
XML_INDENT: Final[str] = "  "


def create_document() -> minidom.Document:
    """Create a document with an empty ``<HL7/>`` root."""
    return minidom.getDOMImplementation().createDocument(None, HL7_TAG, None)


def _text_element(doc: minidom.Document, tag: str, text: str) -> minidom.Element:
    element = doc.createElement(tag)
    if text:
        element.appendChild(doc.createTextNode(text))
    return element


def append_segment(parent: minidom.Element, segment: Segment, omit_empty: bool = False) -> None:
    """Append ``segment`` to ``parent`` as a ``<XYZ>`` element.

    With ``omit_empty``, empty fields, components and sub-components are
    skipped, except for the last of each, which keeps the element count
    meaningful.
    """
    doc = parent.ownerDocument
    name = segment.name
    seg_xml = doc.createElement(name)
    fields = segment.fields

    for i, field in enumerate(fields[1:], start=1):
        if omit_empty and i < len(fields) - 1 and field.is_empty():
            continue
        field_tag = f"{name}.{i}"
        for repeat in field.value:
            if len(repeat) == 1 and len(repeat[0]) == 1:
                seg_xml.appendChild(_text_element(doc, field_tag, repeat[0][0]))
                continue

            repeat_xml = doc.createElement(field_tag)
            for j, comp in enumerate(repeat):
                if omit_empty and j < len(repeat) - 1 and comp == ("",):
                    continue
                comp_tag = f"{field_tag}.{j + 1}"
                if len(comp) == 1:
                    repeat_xml.appendChild(_text_element(doc, comp_tag, comp[0]))
                    continue

                comp_xml = doc.createElement(comp_tag)
                for k, sub in enumerate(comp):
                    if omit_empty and k < len(comp) - 1 and not sub:
                        continue
                    comp_xml.appendChild(_text_element(doc, f"{comp_tag}.{k + 1}", sub))
                repeat_xml.appendChild(comp_xml)
            seg_xml.appendChild(repeat_xml)

    parent.appendChild(seg_xml)


def append_message(parent: minidom.Element, message: Message, omit_empty: bool = False) -> None:
    """Append ``message`` to ``parent`` as a ``<MESSAGE>`` element."""
    message_xml = parent.ownerDocument.createElement(MESSAGE_TAG)
    for segment in message.segments:
        append_segment(message_xml, segment, omit_empty)
    parent.appendChild(message_xml)


def to_xml(messages: Message | Iterable[Message], omit_empty: bool = False) -> minidom.Document:
    """Convert one message, or several, into a new ``<HL7>`` document."""
    if isinstance(messages, Message):
        messages = [messages]
    doc = create_document()
    count = 0
    for message in messages:
        append_message(doc.documentElement, message, omit_empty)
        count += 1
    logger.debug("Converted %d message(s) to XML", count)
    return doc


def to_xml_string(document: minidom.Document) -> str:
    """Pretty-print ``document`` with two-space indentation."""
    return document.toprettyxml(indent=XML_INDENT)


__all__ = [
    "create_document",
    "append_segment",
    "append_message",
    "to_xml",
    "to_xml_string",
    "HL7_TAG",
    "MESSAGE_TAG",
]
