"""
WS-Security UsernameToken generation (PasswordDigest profile).
"""

import base64
import hashlib
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class SecurityToken:
    """One-shot credentials for a single request. Never reuse across sends."""
    nonce: str
    timestamp: str
    digest: str

    @property
    def nonce_b64(self) -> str:
        return base64.b64encode(self.nonce.encode('utf-8')).decode('ascii')


def format_timestamp(moment: datetime) -> str:
    """Render moment as an RFC 3339 UTC timestamp with second precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def compute_digest(nonce: bytes, timestamp: str, password: str) -> str:
    """base64(sha1(nonce + created + password)), in exactly that order."""
    sha = hashlib.sha1(nonce + timestamp.encode('utf-8') + password.encode('utf-8'))
    return base64.b64encode(sha.digest()).decode('ascii')


def generate_token(password: str, token_age: timedelta = timedelta(0),
                   camera_time: Optional[datetime] = None,
                   now: Optional[datetime] = None) -> SecurityToken:
    """
    Create a fresh UsernameToken.

    The Created time is anchored on camera_time when the caller knows the
    camera's clock, otherwise on the local clock, and shifted by token_age.
    """
    nonce = str(uuid.uuid4())

    if camera_time is not None:
        anchor = camera_time
    else:
        anchor = now or datetime.now(timezone.utc)
    timestamp = format_timestamp(anchor + token_age)

    return SecurityToken(
        nonce=nonce,
        timestamp=timestamp,
        digest=compute_digest(nonce.encode('utf-8'), timestamp, password),
    )
