"""Utility module for XML operations.

This module centralizes the safe and unsafe XML operations to ensure
consistent security boundaries across the package. Responses from the
remote service are untrusted: they may come from a compromised endpoint or
a man in the middle, so every parse goes through defusedxml with DTDs,
entities and external references forbidden.
"""

import copy
import logging
import re
from xml.etree.ElementTree import Element as UnsafeElement
from xml.etree.ElementTree import SubElement as UnsafeSubElement

import defusedxml.ElementTree as _safe_ET
from defusedxml.common import DefusedXmlException, DTDForbidden
from defusedxml.ElementTree import ParseError
from defusedxml.ElementTree import tostring

from ..exceptions import MalformedXmlError

# NOTE: UnsafeElement and UnsafeSubElement are the standard ElementTree
# constructors. They are aliased here with 'Unsafe' prefix to remind developers
# that they must ONLY be used for XML generation, never for parsing untrusted data.
# For parsing, use safe_fromstring below.

logger = logging.getLogger(__name__)

# Characters XML 1.0 cannot carry, even escaped
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def safe_fromstring(xml_text):
    """Parses untrusted XML into an Element.

    Args:
        xml_text: The document as str, or as UTF-8 encoded bytes.

    Returns:
        The root Element of the parsed document.

    Raises:
        MalformedXmlError: If the text is not well-formed, is not UTF-8, or
            contains a DOCTYPE, entity declaration or external reference.
    """
    if isinstance(xml_text, (bytes, bytearray)):
        try:
            xml_text = bytes(xml_text).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedXmlError(f"XML is not valid UTF-8: {e}", cause=e) from e

    try:
        return _safe_ET.fromstring(
            xml_text,
            forbid_dtd=True,
            forbid_entities=True,
            forbid_external=True,
        )
    except DefusedXmlException as e:
        logger.warning(f"Blocked unsafe XML construct ({type(e).__name__}): {e}")
        raise MalformedXmlError(f"Unsafe XML rejected: {e}", cause=e) from e
    except ParseError as e:
        raise MalformedXmlError(f"Malformed XML: {e}", cause=e) from e


def serialize(element, default_namespace=None):
    """Serializes an Element to text.

    Text and attribute values are escaped by ElementTree, so values set on
    the tree can never change its structure.

    Args:
        element: The root Element to serialize.
        default_namespace: Namespace URI to emit as the default xmlns
            instead of a prefix.

    Returns:
        The XML document as a str, without an XML declaration.
    """
    return tostring(element, encoding="unicode", default_namespace=default_namespace)


def has_illegal_xml_chars(value):
    """True if value contains a character that cannot appear in an XML 1.0 document."""
    return _ILLEGAL_XML_CHARS.search(value) is not None


def clone(element):
    """Returns a deep copy of element that shares no node with it."""
    return copy.deepcopy(element)


def local_name(tag):
    """Strips the '{namespace}' part ElementTree puts in front of a tag."""
    if not isinstance(tag, str):
        # Comments and processing instructions carry a factory as their tag
        return None
    return tag.rsplit("}", 1)[-1]


def find_descendants(root, name):
    """Yields every element under root (root included) with the given local name."""
    for element in root.iter():
        if local_name(element.tag) == name:
            yield element


def find_child(parent, name):
    """Returns the first direct child of parent with the given local name, or None."""
    for child in parent:
        if local_name(child.tag) == name:
            return child
    return None


def text_content(element):
    """Concatenated text of element and all its descendants, or None if element is None."""
    if element is None:
        return None
    return "".join(element.itertext())


__all__ = [
    "UnsafeElement",
    "UnsafeSubElement",
    "ParseError",
    "safe_fromstring",
    "serialize",
    "clone",
    "has_illegal_xml_chars",
    "local_name",
    "find_descendants",
    "find_child",
    "text_content",
    "DTDForbidden",
]
