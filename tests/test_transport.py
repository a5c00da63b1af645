import httpx
import pytest

from mws_api.core.transport import HttpxTransport, TransportFailure, TransportTimeout


def _transport(handler):
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_returns_status_and_body():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["content"] = request.content
        seen["content_type"] = request.headers["content-type"]
        return httpx.Response(503, text="<ErrorResponse/>")

    transport = _transport(handler)
    response = await transport.send(
        "POST",
        "https://mws.amazonservices.com/Orders/2013-09-01",
        {"Content-Type": "application/x-www-form-urlencoded"},
        "Action=ListOrders&Signature=abc%3D",
        5.0,
    )
    await transport.close()

    assert response.status_code == 503
    assert response.body == "<ErrorResponse/>"
    assert seen["method"] == "POST"
    assert seen["content"] == b"Action=ListOrders&Signature=abc%3D"
    assert seen["content_type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_get_keeps_encoded_query():
    seen = {}

    def handler(request):
        seen["query"] = request.url.query
        return httpx.Response(200, text="ok")

    transport = _transport(handler)
    await transport.send(
        "GET",
        "https://mws.amazonservices.com/Orders/2013-09-01?CreatedAfter=2020-01-01T00%3A00%3A00Z&Name=a+b",
        {},
        None,
        5.0,
    )
    await transport.close()

    assert seen["query"] == b"CreatedAfter=2020-01-01T00%3A00%3A00Z&Name=a+b"


@pytest.mark.asyncio
async def test_timeout_is_translated():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    transport = _transport(handler)
    with pytest.raises(TransportTimeout):
        await transport.send("GET", "https://mws.amazonservices.com/", {}, None, 1.0)
    await transport.close()


@pytest.mark.asyncio
async def test_connect_error_is_translated():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    transport = _transport(handler)
    with pytest.raises(TransportFailure):
        await transport.send("GET", "https://mws.amazonservices.com/", {}, None, 1.0)
    await transport.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [httpx.InvalidURL("bad url"), httpx.StreamClosed(), ConnectionResetError("peer reset")],
)
async def test_non_http_errors_are_translated(error):
    def handler(request):
        raise error

    transport = _transport(handler)
    with pytest.raises(TransportFailure):
        await transport.send("GET", "https://mws.amazonservices.com/", {}, None, 1.0)
    await transport.close()
