from datetime import datetime, timezone

import pytest

from mws_api.core.models import Credentials, Endpoint, Principal, RequestSettings
from mws_api.core.transport import TransportResponse

FIXED_TIME = datetime(2020, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

LIST_ORDERS_XML = """<?xml version="1.0"?>
<ListOrdersResponse xmlns="https://mws.amazonservices.com/Orders/2013-09-01">
  <ListOrdersResult>
    <NextToken>2YgYW55IGNhcm5hbCBwbGVhc3VyZS4=</NextToken>
    <CreatedBefore>2020-01-02T00:00:00Z</CreatedBefore>
    <Orders>
      <Order>
        <AmazonOrderId>902-3159896-1390916</AmazonOrderId>
        <NumberOfItemsShipped>2</NumberOfItemsShipped>
      </Order>
    </Orders>
  </ListOrdersResult>
  <ResponseMetadata>
    <RequestId>88faca76-b600-46d2-b53c-0c8c4533e43a</RequestId>
  </ResponseMetadata>
</ListOrdersResponse>
"""

ERROR_XML = """<?xml version="1.0"?>
<ErrorResponse xmlns="https://mws.amazonservices.com/Orders/2013-09-01">
  <Error>
    <Type>Sender</Type>
    <Code>{code}</Code>
    <Message>{message}</Message>
  </Error>
  <RequestID>c1a1f3c5-0000-0000-0000-000000000000</RequestID>
</ErrorResponse>
"""


def error_body(code: str, message: str = "Request failed") -> str:
    return ERROR_XML.format(code=code, message=message)


class FakeTransport:
    """Replays scripted responses or exceptions and records each call."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def send(self, method, url, headers, body, timeout):
        self.calls.append(
            {"method": method, "url": url, "headers": dict(headers), "body": body, "timeout": timeout}
        )
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class TickingClock:
    """Clock advancing one second per call."""

    def __init__(self, start=FIXED_TIME):
        self.current = start
        self.calls = 0

    def __call__(self):
        moment = self.current.replace(second=self.calls % 60)
        self.calls += 1
        return moment


@pytest.fixture
def credentials():
    return Credentials("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY")


@pytest.fixture
def principal():
    return Principal("A1SELLEREXAMPLE", "amzn.mws.token-example", "US")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def list_orders_get():
    return Endpoint(path="Orders", version="2013-09-01", action="ListOrders", method="GET")


@pytest.fixture
def request_settings():
    return RequestSettings(max_retries=2, throttle_backoff_seconds=7, timeout_seconds=5)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


def ok(body: str = LIST_ORDERS_XML) -> TransportResponse:
    return TransportResponse(200, body)
