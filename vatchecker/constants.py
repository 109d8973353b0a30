# VIES checkVat SOAP service. Not configurable: the client only speaks this operation.
ENDPOINT = "https://ec.europa.eu/taxation_customs/vies/services/checkVatService"
CONTENT_TYPE = "text/xml;charset=UTF-8"
REQUEST_ENCODING = "utf-8"
DEFAULT_TIMEOUT_SECONDS = 30

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
VIES_TYPES_NS = "urn:ec.europa.eu:taxud:vies:services:checkVat:types"

SOAP_CALL_TEMPLATE = (
    '<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">'
    "<soapenv:Header/>"
    "<soapenv:Body>"
    '<checkVat xmlns="urn:ec.europa.eu:taxud:vies:services:checkVat:types">'
    "<countryCode/><vatNumber/>"
    "</checkVat>"
    "</soapenv:Body>"
    "</soapenv:Envelope>"
)

# Placeholder elements in SOAP_CALL_TEMPLATE, matched by local name
COUNTRY_CODE_ELEMENT = "countryCode"
VAT_NUMBER_ELEMENT = "vatNumber"

# Local names looked up in the checkVat response
CHECK_VAT_RESPONSE_ELEMENT = "checkVatResponse"
VALID_ELEMENT = "valid"
NAME_ELEMENT = "name"
ADDRESS_ELEMENT = "address"
FAULT_ELEMENT = "Fault"
FAULT_STRING_ELEMENT = "faultstring"

# Exact, case-sensitive literal the service uses for a valid number
VALID_TRUE_LITERAL = "true"
