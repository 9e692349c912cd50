"""
Mobyt Exporter - Services Package
Vendor API client, payload decoders and error types.
"""

from mobyt_exporter.services.errors import (
    MobytError,
    AuthError,
    TransportError,
    DecodeError,
)

from mobyt_exporter.services.decoders import (
    decode_session_credentials,
    decode_credit_report,
    decode_history_summary,
    parse_credit_report,
    parse_history_page,
)

from mobyt_exporter.services.mobyt_client import (
    MobytClient,
    LOGIN_URI,
    STATUS_URI,
    HISTORY_URI,
)

__all__ = [
    # Errors
    "MobytError",
    "AuthError",
    "TransportError",
    "DecodeError",
    # Decoders
    "decode_session_credentials",
    "decode_credit_report",
    "decode_history_summary",
    "parse_credit_report",
    "parse_history_page",
    # Client
    "MobytClient",
    "LOGIN_URI",
    "STATUS_URI",
    "HISTORY_URI",
]
