"""Observability helpers for the Mobyt exporter.

This package holds the metric descriptors and renders snapshots in the
Prometheus exposition format.
"""

from .metrics import (
    UP,
    SMS_SENT,
    SMS_MONEY,
    SMS_CREDIT,
    DESCRIPTORS,
    MetricDescriptor,
    render_snapshot,
    get_content_type,
)

__all__ = [
    "UP",
    "SMS_SENT",
    "SMS_MONEY",
    "SMS_CREDIT",
    "DESCRIPTORS",
    "MetricDescriptor",
    "render_snapshot",
    "get_content_type",
]
