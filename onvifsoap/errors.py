"""
Exceptions raised while sending ONVIF SOAP requests.
"""

from typing import Optional


class OnvifSoapError(Exception):
    """Base error for the ONVIF SOAP client."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidEndpoint(OnvifSoapError):
    """The device service address is not a usable URL."""
    pass


class TransportError(OnvifSoapError):
    """The HTTP exchange (including the Digest handshake) failed."""
    pass


class ReadError(OnvifSoapError):
    """The response body could not be read completely."""
    pass


class MalformedXML(OnvifSoapError):
    """The response body is not well-formed XML."""
    pass


class SoapFault(OnvifSoapError):
    """The device answered with a SOAP fault."""
    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)

    @property
    def fault_type(self) -> str:
        """
        Classify the fault as 'auth', 'param_validation', 'not_implemented' or 'other'.
        """
        fault_code_lower = (self.code or '').lower()
        fault_reason_lower = self.message.lower()

        # Authentication/Authorization errors
        if any(x in fault_code_lower for x in ['notauthorized', 'unauthorized', 'notauthenticated']):
            return 'auth'
        if any(x in fault_reason_lower for x in ['not authorized', 'unauthorized', 'authentication', 'not authenticated']):
            return 'auth'
        # Parameter validation errors (the service is reachable, the arguments are wrong)
        if any(x in fault_code_lower for x in ['invalidargval', 'invalidargs', 'noconfig', 'noprofile', 'notoken']):
            return 'param_validation'
        if any(x in fault_reason_lower for x in ['invalid argument', 'invalid parameter', 'no config', 'no profile']):
            return 'param_validation'
        if 'not implemented' in fault_reason_lower or 'not recognized' in fault_reason_lower:
            return 'not_implemented'
        return 'other'
