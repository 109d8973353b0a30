"""Errors raised by the VAT checker.

Every operational failure derives from VatCheckerError so callers can catch
one category. TemplateError stands outside that hierarchy: it signals a
broken build, not a condition to recover from.
"""


class VatCheckerError(Exception):
    """Base class for failures surfaced by a VAT check."""


class InvalidArgumentError(VatCheckerError, ValueError):
    """A required input was missing or empty. Raised before any I/O."""


class TransportError(VatCheckerError):
    """The exchange with the remote service failed.

    Attributes:
        endpoint_url: The URL the request was sent to, when known.
        status_code: HTTP status of the response, when one was received.
        cause: The underlying exception, if any.
    """

    def __init__(self, message, endpoint_url=None, status_code=None, cause=None):
        super().__init__(message)
        self.endpoint_url = endpoint_url
        self.status_code = status_code
        self.cause = cause


class MalformedXmlError(VatCheckerError):
    """XML could not be parsed safely (malformed, DOCTYPE, entities...)."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause


class TemplateError(RuntimeError):
    """The envelope template is missing a placeholder element."""
