# Mobyt Exporter Models
from mobyt_exporter.models.schemas import (
    # Login
    SessionCredentials,
    # Status
    SmsCredit,
    EmailPlan,
    CreditReport,
    CreditSummary,
    # History
    SmsHistoryEntry,
    SmsHistoryPage,
    HistoryTotal,
    # Snapshot
    MetricSample,
    MetricsSnapshot,
    # Health
    HealthResponse,
)

__all__ = [
    "SessionCredentials",
    "SmsCredit",
    "EmailPlan",
    "CreditReport",
    "CreditSummary",
    "SmsHistoryEntry",
    "SmsHistoryPage",
    "HistoryTotal",
    "MetricSample",
    "MetricsSnapshot",
    "HealthResponse",
]
