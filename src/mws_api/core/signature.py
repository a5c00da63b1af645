"""MWS Signature Version 2 request signing.

The canonical string is::

    {method}\\n{host}\\n/{path}/{version}\\n{sorted form-encoded params}

and the signature is base64(HMAC-SHA256(canonical string, access secret)).
"""

import base64
import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Tuple
from urllib.parse import urlencode

from mws_api.config.constants import SIGNATURE_METHOD, SIGNATURE_VERSION
from mws_api.core.logger import setup_logger
from mws_api.core.models import Credentials, Endpoint, Principal

logger = setup_logger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class SignedParameters:
    """Result of signing one parameter set."""

    params: Dict[str, str]
    encoded_query: str
    canonical_string: str
    signature: str

    @property
    def encoded_with_signature(self) -> str:
        """Form-encoded parameters including the Signature pair."""
        return f"{self.encoded_query}&{urlencode({'Signature': self.signature})}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_timestamp(moment: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2020-01-01T00:00:00.000Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _to_text(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(
        f"Parameter {key!r} has unsupported type {type(value).__name__}; "
        "list values must be flattened with an array key prefix"
    )


def canonicalize(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Drop None values and sort the rest by key in codepoint order."""
    return [
        (key, _to_text(key, params[key]))
        for key in sorted(params)
        if params[key] is not None
    ]


def encode_query(pairs: List[Tuple[str, str]]) -> str:
    """Classic form encoding: percent-escapes, space as '+'."""
    return urlencode(pairs)


def build_canonical_string(method: str, host: str, resource_path: str, encoded_query: str) -> str:
    return "\n".join([method, host, resource_path, encoded_query])


def compute_signature(canonical_string: str, secret: str) -> str:
    digest = hmac.new(
        secret.encode("utf-8"),
        canonical_string.encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def build_base_params(
    endpoint: Endpoint,
    params: Mapping[str, Any],
    credentials: Credentials,
    principal: Principal,
    timestamp: str,
) -> Dict[str, Any]:
    """
    Merge protocol fields with caller parameters.

    Caller parameters override the Action/AWSAccessKeyId/MWSAuthToken/
    Timestamp/Version defaults; signature fields and the seller
    discriminator are always set last.
    """
    merged = {
        "Action": endpoint.action,
        "AWSAccessKeyId": credentials.access_key_id,
        "MWSAuthToken": principal.auth_token,
        "Timestamp": timestamp,
        "Version": endpoint.version,
        **params,
    }
    merged["SignatureMethod"] = SIGNATURE_METHOD
    merged["SignatureVersion"] = SIGNATURE_VERSION
    if endpoint.is_merchant:
        merged["Merchant"] = principal.seller_id
    else:
        merged["SellerId"] = principal.seller_id
    return merged


def sign(
    endpoint: Endpoint,
    host: str,
    params: Mapping[str, Any],
    credentials: Credentials,
    principal: Principal,
    clock: Clock = utc_now,
) -> SignedParameters:
    """
    Sign a flattened parameter set for one endpoint.

    Args:
        endpoint: Operation being called
        host: Region host, included in the canonical string
        params: Caller parameters with list values already flattened
        credentials: Access key pair
        principal: Seller identity
        clock: Source of the request timestamp

    Returns:
        SignedParameters with the sorted parameters and Signature attached
    """
    merged = build_base_params(endpoint, params, credentials, principal, iso_timestamp(clock()))
    pairs = canonicalize(merged)
    encoded_query = encode_query(pairs)
    canonical_string = build_canonical_string(
        endpoint.method, host, endpoint.resource_path, encoded_query
    )
    signature = compute_signature(canonical_string, credentials.access_secret)

    signed = dict(pairs)
    signed["Signature"] = signature

    logger.debug(f"Signed {endpoint.action} for {host}: {signature[:16]}...")
    return SignedParameters(
        params=signed,
        encoded_query=encoded_query,
        canonical_string=canonical_string,
        signature=signature,
    )
