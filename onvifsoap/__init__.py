"""
ONVIF SOAP client with HTTP Digest and WS-Security UsernameToken authentication.
"""

from .errors import InvalidEndpoint, MalformedXML, OnvifSoapError, ReadError, SoapFault, TransportError
from .interfaces import SoapRequest
from .soap import fetch_camera_time, send_request

__all__ = [
    'SoapRequest',
    'send_request',
    'fetch_camera_time',
    'OnvifSoapError',
    'InvalidEndpoint',
    'TransportError',
    'ReadError',
    'MalformedXML',
    'SoapFault',
]
