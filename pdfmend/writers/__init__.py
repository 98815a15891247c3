"""Serializers for repaired event streams."""

from pdfmend.writers.xml_writer import XMLWriter

__all__ = ["XMLWriter"]
