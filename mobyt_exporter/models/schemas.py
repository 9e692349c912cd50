"""
Mobyt Exporter - Pydantic Schemas
Vendor payloads (login, status, smshistory) and the per-scrape metrics snapshot.
"""
from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# GET /API/v1.0/REST/login
# =============================================================================

class SessionCredentials(BaseModel):
    """Token pair returned by login, sent as headers on data calls"""
    user_key: str = Field(..., min_length=1)
    session_key: str = Field(..., min_length=1)

    def as_headers(self) -> Dict[str, str]:
        return {"user_key": self.user_key, "session_key": self.session_key}


# =============================================================================
# GET /API/v1.0/REST/status?getMoney=true&typeAliases=true
# =============================================================================

class SmsCredit(BaseModel):
    """Remaining quantity for one message type"""
    type: str = Field(default="", description="Message type alias (e.g., 'L', 'N', 'EE')")
    quantity: int = Field(..., description="Remaining messages of this type")


class EmailPlan(BaseModel):
    """Email plan attached to the account"""
    bandwidth: Optional[float] = None
    purchased: Optional[str] = None
    billing: Optional[str] = None
    expiry: Optional[str] = None


class CreditReport(BaseModel):
    """
    Account status payload.
    Only money and the first sms entry end up in the snapshot.
    """
    money: float = Field(..., description="Account balance")
    sms: List[SmsCredit] = Field(..., min_length=1, description="Remaining credit per message type")
    # Documented as an object, declared as a list by older clients
    email: Optional[Union[EmailPlan, List[EmailPlan]]] = None


class SmsQuantity(BaseModel):
    quantity: int


class CreditSummary(BaseModel):
    """The only status fields a scrape depends on; everything else is ignored"""
    money: float
    sms: List[SmsQuantity] = Field(..., min_length=1)


# =============================================================================
# GET /API/v1.0/REST/smshistory?from=yyyyMMddHHmmss
# =============================================================================

class SmsHistoryEntry(BaseModel):
    """One order in the history page"""
    order_id: Optional[str] = None
    create_time: Optional[str] = None
    schedule_time: Optional[str] = None
    message_type: Optional[str] = None
    sender: Optional[str] = None
    num_recipients: Optional[int] = None


class SmsHistoryPage(BaseModel):
    """History query result; total counts all matching orders, not just this page"""
    total: int = Field(..., description="Total number of results")
    page_number: Optional[int] = Field(default=None, alias="pageNumber")
    page_size: Optional[int] = Field(default=None, alias="pageSize")
    result: Optional[str] = None
    smshistory: List[SmsHistoryEntry] = Field(default_factory=list)


class HistoryTotal(BaseModel):
    """The only smshistory field a scrape depends on"""
    total: int


# =============================================================================
# Metrics snapshot
# =============================================================================

class MetricSample(BaseModel):
    """A single gauge value with its label set"""
    name: str
    documentation: str
    value: float
    labels: Dict[str, str] = Field(default_factory=dict)


class MetricsSnapshot(BaseModel):
    """Everything one collection cycle produced"""
    started_at: datetime
    samples: List[MetricSample] = Field(default_factory=list)

    @property
    def up(self) -> bool:
        sample = self.get("mobyt_up")
        return sample is not None and sample.value == 1

    def get(self, name: str) -> Optional[MetricSample]:
        for sample in self.samples:
            if sample.name == name:
                return sample
        return None

    def names(self) -> List[str]:
        return [sample.name for sample in self.samples]


# =============================================================================
# GET /health
# =============================================================================

class HealthResponse(BaseModel):
    """Response for /health"""
    status: str = Field(default="ok")
    version: str
    endpoint_configured: bool = Field(..., description="MOBYT_ENDPOINT is set")
