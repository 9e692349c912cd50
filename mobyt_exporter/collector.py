"""
Mobyt Exporter - Collection Cycle

One scrape runs one cycle:
1. Authenticate (fresh session keys every time)
2. Fetch the credit report (status endpoint)
3. Fetch the last hour of SMS history
4. Return a MetricsSnapshot

A snapshot holds either up=1 with all three data gauges, or up=0 alone.
"""
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Tuple
from zoneinfo import ZoneInfo

from mobyt_exporter.config import MOBYT_TIMEZONE
from mobyt_exporter.models.schemas import MetricsSnapshot, SessionCredentials
from mobyt_exporter.observability.metrics import SMS_CREDIT, SMS_MONEY, SMS_SENT, UP
from mobyt_exporter.services.decoders import decode_credit_report, decode_history_summary
from mobyt_exporter.services.errors import AuthError, DecodeError, TransportError
from mobyt_exporter.services.mobyt_client import HISTORY_URI, STATUS_URI, MobytClient

logger = logging.getLogger(__name__)

HISTORY_WINDOW = timedelta(hours=1)
HISTORY_TIME_FORMAT = "%Y%m%d%H%M%S"

STATUS_PARAMS = {"getMoney": "true", "typeAliases": "true"}


class CycleState(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    FETCHING_CREDIT = "fetching_credit"
    FETCHING_HISTORY = "fetching_history"
    DONE = "done"
    FAILED = "failed"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def history_from(started_at: datetime, tz_name: str = MOBYT_TIMEZONE) -> str:
    """
    Format the start of the history window as yyyyMMddHHmmss.

    The hour is subtracted on the absolute instant, then rendered in the
    vendor's zone, so the host zone never leaks in. Naive datetimes are UTC.
    """
    if started_at.tzinfo is None:
        started_at = started_at.replace(tzinfo=timezone.utc)
    window_start = (started_at - HISTORY_WINDOW).astimezone(ZoneInfo(tz_name))
    return window_start.strftime(HISTORY_TIME_FORMAT)


class MobytCollector:
    """Runs collection cycles against a shared MobytClient"""

    def __init__(
        self,
        client: MobytClient,
        username: str,
        password: str,
        tz_name: str = MOBYT_TIMEZONE,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.client = client
        self.username = username
        self.password = password
        self.tz_name = tz_name
        self.clock = clock

    def collect(self) -> MetricsSnapshot:
        """Run one full cycle and return its snapshot"""
        started_at = self.clock()
        state = CycleState.IDLE

        state = self._transition(state, CycleState.AUTHENTICATING)
        try:
            credentials = self.client.authenticate(self.username, self.password)
        except AuthError as e:
            self._transition(state, CycleState.FAILED)
            logger.error(f"Session authentication failed ({self.client.endpoint}): {e}")
            return self._down(started_at)

        try:
            state = self._transition(state, CycleState.FETCHING_CREDIT)
            money, credit = self._fetch_credit(credentials)

            state = self._transition(state, CycleState.FETCHING_HISTORY)
            sent = self._fetch_history(credentials, started_at)
        except (TransportError, DecodeError) as e:
            self._transition(state, CycleState.FAILED)
            logger.error(f"Mobyt scrape failed while {state.value}: {e}")
            return self._down(started_at)

        self._transition(state, CycleState.DONE)
        logger.info("Endpoint scraped")
        return MetricsSnapshot(
            started_at=started_at,
            samples=[
                UP.sample(1),
                SMS_MONEY.sample(money),
                SMS_CREDIT.sample(credit),
                SMS_SENT.sample(sent),
            ],
        )

    def _fetch_credit(self, credentials: SessionCredentials) -> Tuple[float, int]:
        logger.info("Get sms credit")
        body = self.client.fetch(STATUS_URI, STATUS_PARAMS, credentials)
        return decode_credit_report(body)

    def _fetch_history(self, credentials: SessionCredentials, started_at: datetime) -> int:
        logger.info("Get one hour sms history")
        params = {"from": history_from(started_at, self.tz_name)}
        body = self.client.fetch(HISTORY_URI, params, credentials)
        return decode_history_summary(body)

    @staticmethod
    def _transition(current: CycleState, new: CycleState) -> CycleState:
        logger.debug(f"Cycle {current.value} -> {new.value}")
        return new

    @staticmethod
    def _down(started_at: datetime) -> MetricsSnapshot:
        return MetricsSnapshot(started_at=started_at, samples=[UP.sample(0)])
