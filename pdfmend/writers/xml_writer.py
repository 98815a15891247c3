"""
XML serializer for repaired event streams.

Renders tag events and word runs as nested elements, e.g.::

    <document>
      <page id="1">
        <p>The annual report continues here.</p>
      </page>
    </document>
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

from pdfmend.models import OutputEvent, WordRun

logger = logging.getLogger(__name__)

ROOT_TAG = "document"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters XML 1.0 forbids even when escaped
INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


class XMLWriter:
    """Builds an ElementTree from output events.

    Usage:
        writer = XMLWriter()
        xml_text = writer.render(events)
        writer.write(events, "out.xml")
    """

    def __init__(self, root_tag: str = ROOT_TAG, indent: bool = True):
        self.root_tag = root_tag
        self.indent = indent

    def build(self, events: Iterable[OutputEvent]) -> ET.Element:
        """Build the element tree for an event stream.

        Unbalanced end tags are ignored; elements still open at the end
        are closed implicitly.
        """
        root = ET.Element(self.root_tag)
        stack = [root]
        for event in events:
            if isinstance(event, WordRun):
                _append_text(stack[-1], event.text)
            elif event.kind == "start":
                attributes = {key: _clean(value) for key, value in event.attributes.items()}
                stack.append(ET.SubElement(stack[-1], event.name, attributes))
            elif len(stack) > 1 and stack[-1].tag == event.name:
                stack.pop()
            else:
                logger.warning("Ignoring unbalanced end tag </%s>", event.name)
        return root

    def render(self, events: Iterable[OutputEvent]) -> str:
        """Render an event stream as an XML string with declaration."""
        root = self.build(events)
        if self.indent:
            ET.indent(root)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    def write(self, events: Iterable[OutputEvent], path: str | Path) -> None:
        """Render and save to a file as UTF-8."""
        Path(path).write_text(self.render(events), encoding="utf-8")


def _append_text(element: ET.Element, text: str) -> None:
    text = _clean(text)
    children = list(element)
    if children:
        last = children[-1]
        last.tail = _join(last.tail, text)
    else:
        element.text = _join(element.text, text)


def _clean(text: str) -> str:
    return INVALID_XML_CHARS.sub("", str(text))


def _join(existing: str | None, text: str) -> str:
    if not existing or not existing.strip():
        return text
    return existing + " " + text
