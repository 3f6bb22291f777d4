"""
Core onvifsoap functionality - send SOAP requests to ONVIF devices.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

import requests
from requests.auth import HTTPDigestAuth

from .envelope import build_envelope
from .errors import InvalidEndpoint, OnvifSoapError, ReadError, SoapFault, TransportError
from .interfaces import SoapRequest
from .tree import XmlNode, parse_xml

logger = logging.getLogger(__name__)

# Headers for SOAP requests
HEADERS = {
    "Content-Type": "application/soap+xml",
    "Charset": "utf-8",
}

FAULT_REASON_PATH = "Envelope.Body.Fault.Reason.Text.#text"
FAULT_STRING_PATH = "Envelope.Body.Fault.faultstring"

GET_SYSTEM_DATE_AND_TIME = '<GetSystemDateAndTime xmlns="http://www.onvif.org/ver10/device/wsdl"/>'
UTC_DATE_TIME_PATH = "Envelope.Body.GetSystemDateAndTimeResponse.SystemDateAndTime.UTCDateTime"


def parse_endpoint(xaddr: str) -> SplitResult:
    """Validate a device service address and split it into URL parts."""
    if any(ord(c) < 0x21 or ord(c) == 0x7f for c in xaddr):
        raise InvalidEndpoint(f"Invalid endpoint address {xaddr!r}: contains control characters or whitespace")
    try:
        parts = urlsplit(xaddr)
        # .port raises ValueError for out of range or non-numeric ports
        parts.port
    except ValueError as e:
        raise InvalidEndpoint(f"Invalid endpoint address {xaddr!r}: {e}") from e
    if parts.scheme not in ('http', 'https'):
        raise InvalidEndpoint(f"Invalid endpoint address {xaddr!r}: unsupported scheme {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidEndpoint(f"Invalid endpoint address {xaddr!r}: missing host")
    return parts


def _with_credentials(parts: SplitResult, username: str, password: str) -> SplitResult:
    host = parts.netloc.rpartition('@')[2]
    userinfo = f"{quote(username, safe='')}:{quote(password, safe='')}"
    return parts._replace(netloc=f"{userinfo}@{host}")


def check_fault(tree: XmlNode) -> None:
    """Raise SoapFault when the response carries a SOAP 1.2 or SOAP 1.1 fault."""
    message = tree.value_for_path(FAULT_REASON_PATH)
    if not message:
        message = tree.value_for_path(FAULT_STRING_PATH)
    if not message:
        return

    code = (tree.value_for_path("Envelope.Body.Fault.Code.Subcode.Value")
            or tree.value_for_path("Envelope.Body.Fault.Code.Value")
            or tree.value_for_path("Envelope.Body.Fault.faultcode")
            or None)
    raise SoapFault(message, code=code)


def send_request(request: SoapRequest, xaddr: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None) -> XmlNode:
    """
    Send request to xaddr and return the parsed response.

    When the request has a username the exchange is authenticated twice: HTTP
    Digest on the transport and a WS-Security UsernameToken in the envelope.
    Exactly one HTTP round trip is made; nothing is retried.
    """
    envelope = build_envelope(request)

    parts = parse_endpoint(xaddr)
    log_url = urlunsplit(parts._replace(netloc=parts.netloc.rpartition('@')[2]))
    auth = None
    if request.username:
        parts = _with_credentials(parts, request.username, request.password)
        auth = HTTPDigestAuth(request.username, request.password)

    if not request.no_debug:
        logger.debug("Onvif request to %s: %s", log_url, envelope)

    http = session if session is not None else requests
    try:
        response = http.post(
            urlunsplit(parts),
            headers=HEADERS,
            data=envelope.encode('utf-8'),
            auth=auth,
            timeout=timeout,
            stream=True,
        )
    except requests.RequestException as e:
        raise TransportError(f"Request to {log_url} failed: {e}") from e

    try:
        body = response.content
    except requests.RequestException as e:
        raise ReadError(f"Reading response from {log_url} failed: {e}") from e
    finally:
        response.close()

    if not request.no_debug:
        logger.debug("Onvif response (HTTP %s): %s", response.status_code,
                     body.decode('utf-8', errors='replace'))

    tree = parse_xml(body)
    check_fault(tree)
    return tree


def parse_camera_time(tree: XmlNode) -> datetime:
    """Extract the camera's UTC clock from a GetSystemDateAndTime response."""
    utc = tree.find(UTC_DATE_TIME_PATH)
    if utc is None:
        raise OnvifSoapError("Response has no SystemDateAndTime.UTCDateTime")
    try:
        return datetime(
            int(utc.value_for_path("UTCDateTime.Date.Year")),
            int(utc.value_for_path("UTCDateTime.Date.Month")),
            int(utc.value_for_path("UTCDateTime.Date.Day")),
            int(utc.value_for_path("UTCDateTime.Time.Hour")),
            int(utc.value_for_path("UTCDateTime.Time.Minute")),
            int(utc.value_for_path("UTCDateTime.Time.Second")),
            tzinfo=timezone.utc,
        )
    except (TypeError, ValueError) as e:
        raise OnvifSoapError(f"Invalid UTCDateTime in response: {e}") from e


def fetch_camera_time(xaddr: str, session: Optional[requests.Session] = None,
                      timeout: Optional[float] = None, no_debug: bool = False) -> datetime:
    """Ask the device for its clock. GetSystemDateAndTime is unauthenticated by design."""
    request = SoapRequest(body=GET_SYSTEM_DATE_AND_TIME, no_debug=no_debug)
    return parse_camera_time(send_request(request, xaddr, session=session, timeout=timeout))
