"""
Mobyt Exporter - Error Types
Failures raised by the upstream client and the response decoders.
"""
from typing import Optional


class MobytError(Exception):
    """Base class for every failure of a collection cycle"""


class AuthError(MobytError):
    """Login failed or returned a malformed session key pair"""


class TransportError(MobytError):
    """Network failure or non-2xx answer on a data call"""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(MobytError):
    """Payload is not valid JSON or misses a required field"""

    def __init__(self, message: str, payload: str):
        super().__init__(message)
        # Which vendor document failed: "credit report", "sms history"
        self.payload = payload
