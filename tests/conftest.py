import threading

import pytest

VALID_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<env:Envelope xmlns:env="http://schemas.xmlsoap.org/soap/envelope/">
  <env:Header/>
  <env:Body>
    <ns2:checkVatResponse xmlns:ns2="urn:ec.europa.eu:taxud:vies:services:checkVat:types">
      <ns2:countryCode>BE</ns2:countryCode>
      <ns2:vatNumber>0477472701</ns2:vatNumber>
      <ns2:requestDate>2026-10-17+02:00</ns2:requestDate>
      <ns2:valid>true</ns2:valid>
      <ns2:name>ACME SA</ns2:name>
      <ns2:address>Rue de la Loi 1
1000 Bruxelles</ns2:address>
    </ns2:checkVatResponse>
  </env:Body>
</env:Envelope>"""

INVALID_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<env:Envelope xmlns:env="http://schemas.xmlsoap.org/soap/envelope/">
  <env:Header/>
  <env:Body>
    <ns2:checkVatResponse xmlns:ns2="urn:ec.europa.eu:taxud:vies:services:checkVat:types">
      <ns2:countryCode>BE</ns2:countryCode>
      <ns2:vatNumber>0000000000</ns2:vatNumber>
      <ns2:requestDate>2026-10-17+02:00</ns2:requestDate>
      <ns2:valid>false</ns2:valid>
      <ns2:name>---</ns2:name>
      <ns2:address>---</ns2:address>
    </ns2:checkVatResponse>
  </env:Body>
</env:Envelope>"""

FAULT_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<env:Envelope xmlns:env="http://schemas.xmlsoap.org/soap/envelope/">
  <env:Header/>
  <env:Body>
    <env:Fault>
      <faultcode>env:Server</faultcode>
      <faultstring>MS_UNAVAILABLE</faultstring>
    </env:Fault>
  </env:Body>
</env:Envelope>"""


class RecordingTransport:
    """Transport double that remembers every request and replays one response."""

    def __init__(self, response=VALID_RESPONSE):
        self.response = response
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, endpoint_url, request_body):
        with self._lock:
            self.calls.append((endpoint_url, request_body))
        return self.response


@pytest.fixture
def recording_transport():
    return RecordingTransport()


@pytest.fixture
def valid_response():
    return VALID_RESPONSE


@pytest.fixture
def invalid_response():
    return INVALID_RESPONSE


@pytest.fixture
def fault_response():
    return FAULT_RESPONSE


@pytest.fixture
def transport_factory():
    """Builds RecordingTransport instances replaying the given response."""
    return RecordingTransport
