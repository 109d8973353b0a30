from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CheckRequest:
    """Input of a single check.

    Attributes:
        country_code: 2 character ISO country code. Note: Greece is EL, not GR.
        vat_number: The VAT number, without the country prefix.
    """
    country_code: str
    vat_number: str


@dataclass(frozen=True)
class CheckResponse:
    """Result of a single check.

    Attributes:
        valid: True only if the service answered with the literal "true".
        name: Registered trader name, if the service returned one.
        address: Registered trader address, if the service returned one.
    """
    valid: bool
    name: Optional[str] = None
    address: Optional[str] = None
