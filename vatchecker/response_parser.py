import logging

from .constants import (
    ADDRESS_ELEMENT,
    CHECK_VAT_RESPONSE_ELEMENT,
    FAULT_ELEMENT,
    FAULT_STRING_ELEMENT,
    NAME_ELEMENT,
    VALID_ELEMENT,
    VALID_TRUE_LITERAL,
)
from .models import CheckResponse
from .utils.log_utils import sanitize_for_log
from .utils.xml_utils import find_child, find_descendants, local_name, text_content

logger = logging.getLogger(__name__)


def find_response_field(root, name):
    """Finds the first <name> child of any checkVatResponse element.

    "First" is document order over all candidates, so a match inside a nested
    checkVatResponse wins over a later sibling of its parent.

    Matching is by local name only, anywhere in the document, so the SOAP
    wrapping and the prefixes chosen by the service do not matter.

    Returns:
        The matching Element, or None.
    """
    candidates = {
        id(child)
        for response in find_descendants(root, CHECK_VAT_RESPONSE_ELEMENT)
        for child in response
        if local_name(child.tag) == name
    }
    if not candidates:
        return None
    return next(element for element in root.iter() if id(element) in candidates)


def find_fault_string(root):
    """Returns the faultstring of a SOAP Fault in the document, or None."""
    fault = next(find_descendants(root, FAULT_ELEMENT), None)
    if fault is None:
        return None
    return text_content(find_child(fault, FAULT_STRING_ELEMENT))


def extract_check_response(root):
    """Maps a parsed checkVat response onto a CheckResponse.

    A missing valid element is not an error: it yields
    CheckResponse(valid=False) with no name or address. Only the exact text
    "true" counts as valid. Any other element is ignored.

    Args:
        root: Root Element of the parsed response.

    Returns:
        A CheckResponse.
    """
    valid_element = find_response_field(root, VALID_ELEMENT)
    if valid_element is None:
        fault_string = find_fault_string(root)
        if fault_string is not None:
            logger.warning(f"Service returned a SOAP fault: {sanitize_for_log(fault_string)}")
        return CheckResponse(valid=False)

    return CheckResponse(
        valid=text_content(valid_element) == VALID_TRUE_LITERAL,
        name=text_content(find_response_field(root, NAME_ELEMENT)),
        address=text_content(find_response_field(root, ADDRESS_ELEMENT)),
    )
