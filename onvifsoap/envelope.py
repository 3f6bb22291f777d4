"""
SOAP 1.2 envelope construction with WS-Addressing and WS-Security headers.
"""

import re
from typing import Optional
from xml.sax.saxutils import escape

from .interfaces import SoapRequest
from .wssecurity import SecurityToken, generate_token


SOAP_ENV = "http://www.w3.org/2003/05/soap-envelope"
WSA_NS = "http://www.w3.org/2005/08/addressing"
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
WSU_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd"
WSSE_PW_DIGEST_TYPE = (
    "http://docs.oasis-open.org/wss/2004/01/"
    "oasis-200401-wss-username-token-profile-1.0#PasswordDigest"
)
WSSE_BASE64_ENCODING = (
    "http://docs.oasis-open.org/wss/2004/01/"
    "oasis-200401-wss-soap-message-security-1.0#Base64Binary"
)

ACTION_HEADER = """
<Action mustUnderstand="1"
        xmlns="{wsa}">{action}</Action>"""

SECURITY_HEADER = """
<Security s:mustUnderstand="1" xmlns="{wsse}">
    <UsernameToken>
        <Username>{username}</Username>
        <Password Type="{password_type}">{digest}</Password>
        <Nonce EncodingType="{encoding_type}">{nonce}</Nonce>
        <Created xmlns="{wsu}">{created}</Created>
    </UsernameToken>
</Security>"""

_BETWEEN_TAGS = re.compile(r'>[\t\n\f\r ]+<')
_WHITESPACE = re.compile(r'[\t\n\f\r ]+')


def normalize_whitespace(xml: str) -> str:
    """Drop whitespace between tags and squeeze every other run to one space."""
    xml = _BETWEEN_TAGS.sub('><', xml)
    return _WHITESPACE.sub(' ', xml)


def security_header(username: str, token: SecurityToken) -> str:
    return SECURITY_HEADER.format(
        wsse=WSSE_NS,
        wsu=WSU_NS,
        username=escape(username),
        password_type=WSSE_PW_DIGEST_TYPE,
        digest=token.digest,
        encoding_type=WSSE_BASE64_ENCODING,
        nonce=token.nonce_b64,
        created=token.timestamp,
    )


def build_envelope(request: SoapRequest, token: Optional[SecurityToken] = None) -> str:
    """
    Build the complete request document for request.

    A token is generated when the request carries a username and none is
    passed in. The body fragment is inserted verbatim.
    """
    parts = ['<?xml version="1.0" encoding="UTF-8"?>']

    envelope_open = f'<s:Envelope xmlns:s="{SOAP_ENV}"'
    for namespace in request.namespaces:
        envelope_open += " " + namespace
    parts.append(envelope_open + ">")

    if request.action or request.username:
        parts.append("<s:Header>")
        if request.action:
            parts.append(ACTION_HEADER.format(wsa=WSA_NS, action=escape(request.action)))
        if request.username:
            if token is None:
                token = generate_token(request.password, request.token_age, request.camera_time)
            parts.append(security_header(request.username, token))
        parts.append("</s:Header>")

    parts.append("<s:Body>" + request.body + "</s:Body>")
    parts.append("</s:Envelope>")

    return normalize_whitespace("".join(parts))
