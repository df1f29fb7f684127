"""XMP decoder.

Reads the XMP packet from the JPEG APP1 segment carrying the Adobe XMP
namespace header and flattens its RDF descriptions into ``prefix:Name``
keys, using the prefixes declared in the packet itself.
"""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from typing import Any

from loguru import logger

from imgmeta.core.types import TagMapping

from .jpeg import APP1, iter_segments

XMP_HEADER = b"http://ns.adobe.com/xap/1.0/\x00"

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XML_NS = "http://www.w3.org/XML/1998/namespace"

_RDF_DESCRIPTION = f"{{{RDF_NS}}}Description"
_RDF_CONTAINERS = {f"{{{RDF_NS}}}{name}" for name in ("Bag", "Seq", "Alt")}
_RDF_ALT = f"{{{RDF_NS}}}Alt"
_RDF_LI = f"{{{RDF_NS}}}li"
_RDF_RESOURCE = f"{{{RDF_NS}}}resource"
_RDF_PARSE_TYPE = f"{{{RDF_NS}}}parseType"
_XML_LANG = f"{{{XML_NS}}}lang"

_XPACKET_RE = re.compile(rb"<\?xpacket[^>]*\?>", re.IGNORECASE)

# Used when a namespace URI has no declared prefix
_KNOWN_PREFIXES = {
    "http://purl.org/dc/elements/1.1/": "dc",
    "http://ns.adobe.com/xap/1.0/": "xmp",
    "http://ns.adobe.com/xap/1.0/rights/": "xmpRights",
    "http://ns.adobe.com/xap/1.0/mm/": "xmpMM",
    "http://ns.adobe.com/photoshop/1.0/": "photoshop",
    "http://ns.adobe.com/tiff/1.0/": "tiff",
    "http://ns.adobe.com/exif/1.0/": "exif",
    "http://ns.adobe.com/exif/1.0/aux/": "aux",
    "http://ns.adobe.com/camera-raw-settings/1.0/": "crs",
    "http://iptc.org/std/Iptc4xmpCore/1.0/xmlns/": "Iptc4xmpCore",
    "http://iptc.org/std/Iptc4xmpExt/2008-02-29/": "Iptc4xmpExt",
}


def find_xmp(data: bytes) -> TagMapping | None:
    """Locate and parse the XMP packet in a JPEG buffer.

    Returns:
        Properties by ``prefix:Name``, or None if no XMP segment is present
        or its XML cannot be parsed.
    """
    for segment in iter_segments(data):
        if segment.marker == APP1 and segment.payload.startswith(XMP_HEADER):
            return parse_xmp_packet(segment.payload[len(XMP_HEADER):])
    return None


def parse_xmp_packet(packet: bytes) -> TagMapping | None:
    """Parse an XMP packet into a flat property mapping."""
    body = _XPACKET_RE.sub(b"", packet).strip(b"\x00 \t\r\n")
    if not body:
        return None

    prefixes: dict[str, str] = {}
    root: ET.Element | None = None
    try:
        for event, item in ET.iterparse(io.BytesIO(body), events=("start-ns", "start")):
            if event == "start-ns":
                prefix, uri = item
                prefixes.setdefault(uri, prefix)
            elif root is None:
                root = item
    except ET.ParseError as e:
        logger.warning(f"Ignoring malformed XMP packet: {e}")
        return None
    if root is None:
        return None

    reader = _RDFReader({**_KNOWN_PREFIXES, **prefixes})
    tags: TagMapping = {}
    for description in root.iter(_RDF_DESCRIPTION):
        tags.update(reader.read_properties(description))
    return tags


class _RDFReader:
    """Converts RDF/XML property elements into plain Python values."""

    def __init__(self, prefixes: dict[str, str]):
        self.prefixes = prefixes

    def name(self, qualified: str) -> str:
        if not qualified.startswith("{"):
            return qualified
        uri, local = qualified[1:].split("}", 1)
        prefix = self.prefixes.get(uri)
        return f"{prefix}:{local}" if prefix else local

    def read_properties(self, description: ET.Element) -> TagMapping:
        properties: TagMapping = {}
        for key, value in description.attrib.items():
            if key.startswith(f"{{{RDF_NS}}}") or key == _XML_LANG:
                continue
            properties[self.name(key)] = value
        for child in description:
            properties[self.name(child.tag)] = self.value(child)
        return properties

    def value(self, element: ET.Element) -> Any:
        children = list(element)

        if _RDF_RESOURCE in element.attrib and not children:
            return element.attrib[_RDF_RESOURCE]

        if element.attrib.get(_RDF_PARSE_TYPE) == "Resource":
            return self.read_properties(element)

        if len(children) == 1 and children[0].tag in _RDF_CONTAINERS:
            container = children[0]
            items = [item for item in container if item.tag == _RDF_LI]
            if container.tag == _RDF_ALT:
                return self._alternative(items)
            return [self.value(item) for item in items]

        if len(children) == 1 and children[0].tag == _RDF_DESCRIPTION:
            return self.read_properties(children[0])

        if children:
            return {self.name(child.tag): self.value(child) for child in children}

        qualifiers = {
            self.name(key): value
            for key, value in element.attrib.items()
            if not key.startswith(f"{{{RDF_NS}}}") and key != _XML_LANG
        }
        if qualifiers:
            return qualifiers
        return (element.text or "").strip()

    def _alternative(self, items: list[ET.Element]) -> Any:
        if not items:
            return ""
        for item in items:
            if item.attrib.get(_XML_LANG) == "x-default":
                return self.value(item)
        return self.value(items[0])
