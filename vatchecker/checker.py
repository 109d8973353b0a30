"""Entry points for checking a VAT number against the VIES service.

See https://ec.europa.eu/taxation_customs/vies/ . Use do_check() for a
one-off call, or hold an EUVatChecker when a custom transport should be
reused across calls. Both are safe to call from several threads at once.
"""

import logging
from typing import Optional

from .constants import ENDPOINT
from .envelope import build_envelope
from .exceptions import InvalidArgumentError, TransportError
from .models import CheckRequest
from .response_parser import extract_check_response
from .transport import Transport, http_post, read_response_body
from .utils.log_utils import sanitize_for_log
from .utils.xml_utils import has_illegal_xml_chars, safe_fromstring

logger = logging.getLogger(__name__)


class EUVatChecker:
    """A VIES client bound to one transport.

    Args:
        transport: Callable taking (endpoint_url, request_body) and returning
            the response body as bytes, str or a readable stream. Defaults to
            an HTTP POST through requests.
    """

    def __init__(self, transport: Optional[Transport] = None):
        self._transport = transport if transport is not None else http_post

    @property
    def transport(self):
        return self._transport

    def check(self, country_code, vat_number):
        """See do_check()."""
        return do_check(country_code, vat_number, self._transport)


def _require(name, value):
    if value is None:
        raise InvalidArgumentError(f"{name} cannot be None")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a str, got {type(value).__name__}")
    if not value.strip():
        raise InvalidArgumentError(f"{name} cannot be empty")
    if has_illegal_xml_chars(value):
        raise InvalidArgumentError(f"{name} contains characters that cannot be sent in XML")
    return value


def _exchange(transport, body):
    try:
        result = transport(ENDPOINT, body)
    except TransportError:
        raise
    except OSError as e:
        logger.error(f"Transport failed ({type(e).__name__}): {e}")
        raise TransportError(f"Transport failed: {e}", endpoint_url=ENDPOINT, cause=e) from e
    return read_response_body(result)


def do_check(country_code, vat_number, transport: Optional[Transport] = None):
    """Checks a VAT number with the VIES checkVat operation.

    Args:
        country_code: 2 character ISO country code. Note: Greece is EL, not GR.
        vat_number: The VAT number to check.
        transport: Optional replacement for the default HTTP transport.

    Returns:
        A CheckResponse. A response without a valid element is reported as
        CheckResponse(valid=False), not as an error.

    Raises:
        InvalidArgumentError: If an input is None, empty, or holds characters
            XML cannot carry. Nothing is sent.
        TransportError: If the exchange with the service fails.
        MalformedXmlError: If the response is not safe, well-formed XML.
    """
    request = CheckRequest(
        country_code=_require("country_code", country_code),
        vat_number=_require("vat_number", vat_number),
    )
    if transport is None:
        transport = http_post

    body = build_envelope(request.country_code, request.vat_number)
    payload = _exchange(transport, body)
    result = extract_check_response(safe_fromstring(payload))

    logger.info(
        f"VAT check for country {sanitize_for_log(request.country_code)}: "
        f"{'valid' if result.valid else 'not valid'}"
    )
    return result
