"""
Mobyt Exporter - Response Decoders
Pure parsing of vendor response bodies. Nothing here touches the network.

decode_* functions validate only the fields that reach the snapshot;
parse_* functions validate the full documented payload.
"""
import logging
from typing import Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from mobyt_exporter.models.schemas import (
    CreditReport,
    CreditSummary,
    HistoryTotal,
    SessionCredentials,
    SmsHistoryPage,
)
from mobyt_exporter.services.errors import AuthError, DecodeError

logger = logging.getLogger(__name__)

SESSION_SEPARATOR = ";"

Body = Union[bytes, str]
Model = TypeVar("Model", bound=BaseModel)


def _valid_header_value(key: str) -> bool:
    # Keys travel back as HTTP header values
    return key.isascii() and key.isprintable()


def decode_session_credentials(body: Body) -> SessionCredentials:
    """
    Parse the login body "<user_key>;<session_key>".

    Raises AuthError unless the line splits into exactly two non-empty
    printable ASCII keys.
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AuthError("could not obtain information key") from e

    fields = body.strip().split(SESSION_SEPARATOR)
    if len(fields) != 2 or not all(fields) or not all(map(_valid_header_value, fields)):
        raise AuthError("could not obtain information key")
    return SessionCredentials(user_key=fields[0], session_key=fields[1])


def _validate(model: Type[Model], body: Body, payload: str) -> Model:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"invalid {payload}: {e.error_count()} error(s): {e.errors()[0]['msg']}",
                          payload=payload) from e


def parse_credit_report(body: Body) -> CreditReport:
    """Validate a status payload into a CreditReport"""
    return _validate(CreditReport, body, "credit report")


def parse_history_page(body: Body) -> SmsHistoryPage:
    """Validate a smshistory payload into an SmsHistoryPage"""
    return _validate(SmsHistoryPage, body, "sms history")


def decode_credit_report(body: Body) -> Tuple[float, int]:
    """
    Returns (money, quantity of the first message type).
    An empty sms list is a DecodeError, never a silent zero.
    """
    summary = _validate(CreditSummary, body, "credit report")
    if len(summary.sms) > 1:
        logger.debug(f"Ignoring credit for {len(summary.sms) - 1} extra message type(s)")
    return summary.money, summary.sms[0].quantity


def decode_history_summary(body: Body) -> int:
    """Returns the total field of a smshistory payload"""
    return _validate(HistoryTotal, body, "sms history").total
