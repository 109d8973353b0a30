"""HTTP exchange with the checkVat service.

A transport is any callable taking (endpoint_url, request_body) and
returning the response body as bytes, str or a readable stream. Callers
substitute their own to reuse an HTTP stack, add retries, or replay
recorded responses in tests.
"""

import logging
from typing import BinaryIO, Optional, Protocol, Union

import requests
import urllib3

from .constants import CONTENT_TYPE, DEFAULT_TIMEOUT_SECONDS, REQUEST_ENCODING
from .exceptions import TransportError
from .utils.log_utils import sanitize_for_log

logger = logging.getLogger(__name__)

ResponseBody = Union[bytes, str, BinaryIO]


class Transport(Protocol):
    def __call__(self, endpoint_url: str, request_body: str) -> ResponseBody:
        ...


class RequestsTransport:
    """Default transport: a plain HTTP POST through requests.

    The body is returned whatever the status code, since VIES reports SOAP
    faults with HTTP 500. Only a non-2xx response without a body is treated
    as a failure. No retries happen here; mount an HTTPAdapter with a Retry
    policy on the session if you need them.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session

    def __call__(self, endpoint_url: str, request_body: str) -> bytes:
        safe_url = sanitize_for_log(endpoint_url)
        payload = request_body.encode(REQUEST_ENCODING)
        logger.debug(f"POST {safe_url} ({len(payload)} bytes)")
        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                endpoint_url,
                data=payload,
                headers={"Content-Type": CONTENT_TYPE},
                timeout=self.timeout,
            )
            content = response.content
        except requests.RequestException as e:
            logger.error(f"Request to {safe_url} failed ({type(e).__name__}): {e}")
            raise TransportError(
                f"Request to {endpoint_url} failed: {e}",
                endpoint_url=endpoint_url,
                cause=e,
            ) from e

        if not 200 <= response.status_code < 300:
            if not content:
                logger.error(f"HTTP {response.status_code} from {safe_url} with an empty body")
                raise TransportError(
                    f"HTTP {response.status_code} from {endpoint_url} with an empty body",
                    endpoint_url=endpoint_url,
                    status_code=response.status_code,
                )
            logger.warning(f"HTTP {response.status_code} from {safe_url}, parsing body anyway")

        logger.debug(f"Received {len(content)} bytes from {safe_url}")
        return content


# Module-level default used by EUVatChecker and do_check
http_post = RequestsTransport()


def read_response_body(result):
    """Normalizes whatever a transport returned into bytes or str for parsing.

    Streams are read fully and always closed.

    Raises:
        TransportError: If reading the stream fails or the type is unsupported.
    """
    if isinstance(result, (bytes, bytearray, str)):
        return result

    if not hasattr(result, "read"):
        raise TransportError(
            f"Transport returned unsupported type {type(result).__name__}; "
            "expected bytes, str or a readable stream"
        )

    try:
        return result.read()
    except (OSError, requests.RequestException, urllib3.exceptions.HTTPError) as e:
        raise TransportError(f"Failed to read response stream: {e}", cause=e) from e
    finally:
        close = getattr(result, "close", None)
        if close is not None:
            close()
