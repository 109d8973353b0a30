"""Builds checkVat SOAP request envelopes from a shared template.

Importing this module calls ElementTree.register_namespace("soapenv", ...).
That registry is process-wide, so any other ElementTree serialization in the
host process will also write the SOAP envelope namespace with the soapenv
prefix.
"""

import logging
from xml.etree.ElementTree import register_namespace

from .constants import (
    COUNTRY_CODE_ELEMENT,
    SOAP_CALL_TEMPLATE,
    SOAP_ENV_NS,
    VAT_NUMBER_ELEMENT,
    VIES_TYPES_NS,
)
from .exceptions import TemplateError
from .utils.xml_utils import clone, find_descendants, safe_fromstring, serialize

logger = logging.getLogger(__name__)

# Keep the conventional prefix on the wire instead of ElementTree's ns0
register_namespace("soapenv", SOAP_ENV_NS)

PLACEHOLDERS = (COUNTRY_CODE_ELEMENT, VAT_NUMBER_ELEMENT)


class EnvelopeTemplate:
    """A parsed, read-only SOAP skeleton shared by every request.

    The parsed tree is never handed out: callers only get independent
    copies through clone(), so one instance can serve concurrent requests
    without locking.
    """

    __slots__ = ("_root",)

    def __init__(self, xml_text=SOAP_CALL_TEMPLATE):
        root = safe_fromstring(xml_text)
        missing = [name for name in PLACEHOLDERS if _find_placeholder(root, name) is None]
        if missing:
            raise TemplateError(f"Envelope template is missing placeholder(s): {', '.join(missing)}")
        self._root = root

    def clone(self):
        """Returns a deep copy of the template tree, safe to mutate."""
        return clone(self._root)


def _find_placeholder(root, name):
    return next(find_descendants(root, name), None)


def _fill_placeholder(root, name, value):
    element = _find_placeholder(root, name)
    if element is None:
        raise TemplateError(f"Envelope template is missing placeholder: {name}")
    for child in list(element):
        element.remove(child)
    # Assigned verbatim; serialize() escapes it
    element.text = value


def build_envelope(country_code, vat_number, template=None):
    """Builds the checkVat request body.

    Args:
        country_code: Value for the countryCode element.
        vat_number: Value for the vatNumber element.
        template: The EnvelopeTemplate to clone. Defaults to the shared one.

    Returns:
        The serialized SOAP envelope as a str.
    """
    document = (template or DEFAULT_TEMPLATE).clone()
    _fill_placeholder(document, COUNTRY_CODE_ELEMENT, country_code)
    _fill_placeholder(document, VAT_NUMBER_ELEMENT, vat_number)
    body = serialize(document, default_namespace=VIES_TYPES_NS)
    logger.debug(f"Built checkVat envelope ({len(body)} chars)")
    return body


# Built once at import time; a broken template fails here, not mid-request
DEFAULT_TEMPLATE = EnvelopeTemplate()
