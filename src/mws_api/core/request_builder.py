"""Assembles signed parameters into an outbound HTTP request."""

from typing import Mapping, Optional

from mws_api.config.constants import FORM_CONTENT_TYPE
from mws_api.core.models import Endpoint, SignedRequest
from mws_api.core.signature import SignedParameters


def build_url(host: str, resource_path: str) -> str:
    """Join host and an already normalized resource path."""
    return f"https://{host.strip('/')}{resource_path}"


def build_request(
    signed: SignedParameters,
    endpoint: Endpoint,
    host: str,
    headers: Optional[Mapping[str, str]] = None,
) -> SignedRequest:
    """
    Build the request for the transport.

    GET requests carry the parameters in the query string, everything else
    sends them as a form-encoded body.

    Args:
        signed: Output of ``signature.sign``
        endpoint: Operation being called
        host: Region host
        headers: Extra caller headers (copied, never modified)

    Returns:
        SignedRequest
    """
    request_headers = dict(headers or {})
    request_headers["Host"] = host

    encoded = signed.encoded_with_signature
    url = build_url(host, endpoint.resource_path)
    body = None

    if endpoint.method == "GET":
        url = f"{url}?{encoded}"
    else:
        if endpoint.method == "POST":
            for name in [name for name in request_headers if name.lower() == "content-type"]:
                del request_headers[name]
            request_headers["Content-Type"] = FORM_CONTENT_TYPE
        body = encoded

    return SignedRequest(
        method=endpoint.method,
        url=url,
        headers=request_headers,
        encoded_parameters=encoded,
        signature=signed.signature,
        action=endpoint.action,
        body=body,
    )
