from urllib.parse import parse_qs

import pytest

from conftest import FakeTransport, ok
from mws_api.api import endpoints
from mws_api.api.orders import OrdersApi
from mws_api.core.models import Principal

SERVICE_STATUS_XML = """<?xml version="1.0"?>
<GetServiceStatusResponse xmlns="https://mws.amazonservices.com/Orders/2013-09-01">
  <GetServiceStatusResult>
    <Status>GREEN</Status>
    <Timestamp>2020-01-01T00:00:00.000Z</Timestamp>
  </GetServiceStatusResult>
</GetServiceStatusResponse>
"""


def get_order_xml(*order_ids):
    orders = "".join(f"<Order><AmazonOrderId>{order_id}</AmazonOrderId></Order>" for order_id in order_ids)
    return (
        '<GetOrderResponse xmlns="https://mws.amazonservices.com/Orders/2013-09-01">'
        f"<GetOrderResult><Orders>{orders}</Orders></GetOrderResult>"
        "</GetOrderResponse>"
    )


@pytest.fixture
def make_api(credentials, principal, fixed_clock, request_settings, recording_sleep):
    def factory(outcomes, **overrides):
        options = {
            "principal": principal,
            "credentials": credentials,
            "request_settings": request_settings,
            "transport": FakeTransport(outcomes),
            "clock": fixed_clock,
            "sleep": recording_sleep,
        }
        options.update(overrides)
        return OrdersApi(**options)

    return factory


def sent_params(api, index=0):
    return parse_qs(api.transport.calls[index]["body"])


def test_endpoints_share_orders_path_and_version():
    for endpoint in (
        endpoints.GET_SERVICE_STATUS,
        endpoints.LIST_ORDERS,
        endpoints.LIST_ORDERS_BY_NEXT_TOKEN,
        endpoints.GET_ORDER,
        endpoints.LIST_ORDER_ITEMS,
        endpoints.LIST_ORDER_ITEMS_BY_NEXT_TOKEN,
    ):
        assert endpoint.resource_path == "/Orders/2013-09-01"
        assert endpoint.method == "POST"


@pytest.mark.asyncio
async def test_get_service_status(make_api):
    api = make_api([ok(SERVICE_STATUS_XML)])

    status = await api.get_service_status()

    assert status == {"Status": "GREEN", "Timestamp": "2020-01-01T00:00:00.000Z"}
    assert sent_params(api)["Action"] == ["GetServiceStatus"]


@pytest.mark.asyncio
async def test_list_orders_defaults_marketplace_to_area(make_api):
    api = make_api([ok()], principal=Principal("SELLER", "TOKEN", "CA"))

    result = await api.list_orders({"CreatedAfter": "2020-01-01T00:00:00Z", "OrderStatus": ["Shipped", "Pending"]})

    params = sent_params(api)
    assert params["MarketplaceId.Id.1"] == ["A2EUQ1WTGCTBG2"]
    assert params["OrderStatus.Status.1"] == ["Shipped"]
    assert params["OrderStatus.Status.2"] == ["Pending"]
    assert "OrderStatus" not in params
    assert api.transport.calls[0]["url"] == "https://mws.amazonservices.ca/Orders/2013-09-01"
    assert "NextToken" in result


@pytest.mark.asyncio
async def test_get_order_flattens_ids(make_api):
    api = make_api([ok(get_order_xml("111-1"))])

    result = await api.get_order({"AmazonOrderIds": ["111-1"]})

    assert sent_params(api)["AmazonOrderId.Id.1"] == ["111-1"]
    assert result["Orders"]["Order"]["AmazonOrderId"] == "111-1"


@pytest.mark.asyncio
async def test_get_orders_batches_by_fifty(make_api):
    ids = [f"id-{n}" for n in range(51)]
    api = make_api([ok(get_order_xml(*ids[:50])), ok(get_order_xml(ids[50]))])

    orders = await api.get_orders(ids)

    assert len(api.transport.calls) == 2
    assert "AmazonOrderId.Id.50" in sent_params(api, 0)
    assert "AmazonOrderId.Id.2" not in sent_params(api, 1)
    assert [order["AmazonOrderId"] for order in orders] == ids


@pytest.mark.asyncio
async def test_list_order_items(make_api):
    body = (
        "<ListOrderItemsResponse><ListOrderItemsResult>"
        "<AmazonOrderId>058-1233752-8214740</AmazonOrderId>"
        "<OrderItems><OrderItem><QuantityOrdered>1</QuantityOrdered></OrderItem></OrderItems>"
        "</ListOrderItemsResult></ListOrderItemsResponse>"
    )
    api = make_api([ok(body)])

    result = await api.list_order_items({"AmazonOrderId": "058-1233752-8214740"})

    assert result["AmazonOrderId"] == "058-1233752-8214740"
    assert result["OrderItems"]["OrderItem"]["QuantityOrdered"] == 1


@pytest.mark.asyncio
async def test_next_token_calls(make_api):
    orders_body = "<ListOrdersByNextTokenResponse><ListOrdersByNextTokenResult><NextToken>n</NextToken></ListOrdersByNextTokenResult></ListOrdersByNextTokenResponse>"
    items_body = "<ListOrderItemsByNextTokenResponse><ListOrderItemsByNextTokenResult><NextToken>m</NextToken></ListOrderItemsByNextTokenResult></ListOrderItemsByNextTokenResponse>"
    api = make_api([ok(orders_body), ok(items_body)])

    assert await api.list_orders_by_next_token({"NextToken": "token"}) == {"NextToken": "n"}
    assert await api.list_order_items_by_next_token({"NextToken": "token"}) == {"NextToken": "m"}
    assert sent_params(api, 1)["Action"] == ["ListOrderItemsByNextToken"]
