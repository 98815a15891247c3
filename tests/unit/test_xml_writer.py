"""Tests for XML writer."""

import logging
import xml.etree.ElementTree as ET

from pdfmend.models import TagEvent, WordRun
from pdfmend.writers.xml_writer import XML_DECLARATION, XMLWriter


def _events():
    return [
        TagEvent.start("page", id="1"),
        TagEvent.start("p"),
        WordRun(("The", "annual", "report")),
        WordRun(("continues", "here."), continuation=True),
        TagEvent.end("p"),
        TagEvent.end("page"),
    ]


class TestXMLWriter:
    def test_render_structure(self):
        xml = XMLWriter().render(_events())

        assert xml.startswith(XML_DECLARATION)
        assert '<page id="1">' in xml
        assert "<p>The annual report continues here.</p>" in xml

    def test_build_tree(self):
        root = XMLWriter().build(_events())

        assert root.tag == "document"
        page = root[0]
        assert page.tag == "page"
        assert page.get("id") == "1"
        assert page[0].text == "The annual report continues here."

    def test_special_characters_escaped(self):
        events = [TagEvent.start("p"), WordRun(("a", "<b>", "&", "c")), TagEvent.end("p")]

        xml = XMLWriter().render(events)

        assert "<p>a &lt;b&gt; &amp; c</p>" in xml

    def test_text_after_child_becomes_tail(self):
        events = [
            TagEvent.start("h1"),
            WordRun(("Summary",)),
            TagEvent.end("h1"),
            WordRun(("loose", "text")),
        ]

        root = XMLWriter().build(events)

        assert root[0].text == "Summary"
        assert root[0].tail == "loose text"

    def test_unbalanced_end_tag_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="pdfmend.writers.xml_writer"):
            root = XMLWriter().build([TagEvent.end("p"), WordRun(("text",))])

        assert root.text == "text"
        assert "unbalanced" in caplog.text

    def test_unclosed_elements_closed(self):
        root = XMLWriter().build([TagEvent.start("p"), WordRun(("open",))])

        assert root[0].tag == "p"
        assert root[0].text == "open"

    def test_custom_root_without_indent(self):
        xml = XMLWriter(root_tag="article", indent=False).render(_events())

        assert '<article><page id="1"><p>' in xml

    def test_write(self, tmp_path):
        path = tmp_path / "out.xml"

        XMLWriter().write(_events(), path)

        content = path.read_text(encoding="utf-8")
        assert content.startswith(XML_DECLARATION)
        assert "annual report" in content

    def test_control_characters_dropped(self):
        """Output stays parseable when extracted text carries control bytes."""
        events = [
            TagEvent.start("page", id="1\x0c"),
            TagEvent.start("p"),
            WordRun(("the\x02", "report￾")),
            TagEvent.end("p"),
            TagEvent.end("page"),
        ]

        root = ET.fromstring(XMLWriter().render(events).encode("utf-8"))

        assert root[0].get("id") == "1"
        assert root[0][0].text == "the report"
