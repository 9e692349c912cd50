import json
from datetime import datetime, timezone

import httpx
import pytest

from mobyt_exporter.config import AppSettings
from mobyt_exporter.services.mobyt_client import HISTORY_URI, LOGIN_URI, STATUS_URI, MobytClient

ENDPOINT = "https://app.mobyt.test"
USERNAME = "exporter"
PASSWORD = "s3cret"

CREDIT_JSON = {
    "money": 921.9,
    "sms": [
        {"type": "L", "quantity": 11815},
        {"type": "N", "quantity": 10407},
        {"type": "EE", "quantity": 10387},
    ],
    "email": {
        "bandwidth": 2000.0,
        "purchased": "2015-01-16",
        "billing": "EMAILPERHOUR",
        "expiry": "2016-01-17",
    },
}

HISTORY_JSON = {
    "total": 1,
    "pageNumber": 1,
    "result": "OK",
    "pageSize": 10,
    "smshistory": [
        {
            "order_id": "XYZABCQWERTY",
            "create_time": "20240115120000",
            "schedule_time": "20240115120000",
            "message_type": "GP",
            "sender": "MySender",
            "num_recipients": 2,
        }
    ],
}

FIXED_NOW = datetime(2024, 1, 15, 12, 30, 45, tzinfo=timezone.utc)


class FakeMobyt:
    """In-memory Mobyt API served through httpx.MockTransport"""

    def __init__(self):
        self.login = httpx.Response(200, text="USER_KEY;SESSION_KEY")
        self.status = httpx.Response(200, json=CREDIT_JSON)
        self.history = httpx.Response(200, json=HISTORY_JSON)
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        routes = {LOGIN_URI: self.login, STATUS_URI: self.status, HISTORY_URI: self.history}
        response = routes.get(request.url.path)
        if response is None:
            return httpx.Response(404)
        if isinstance(response, Exception):
            raise response
        # Fresh copy so responses can be served repeatedly and concurrently
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def requests_to(self, path):
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def fake_mobyt():
    return FakeMobyt()


@pytest.fixture
def mobyt_client(fake_mobyt):
    client = MobytClient(ENDPOINT, transport=httpx.MockTransport(fake_mobyt.handler))
    yield client
    client.close()


@pytest.fixture
def settings():
    return AppSettings(endpoint=ENDPOINT, username=USERNAME, password=PASSWORD)


def as_bytes(payload) -> bytes:
    return json.dumps(payload).encode()
