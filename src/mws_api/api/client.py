"""Amazon MWS signed request client."""

import asyncio
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from mws_api.config.constants import AREA_CODES, DEFAULT_AREA
from mws_api.config.settings import settings as default_settings
from mws_api.core.decoder import decode
from mws_api.core.errors import ConfigurationError
from mws_api.core.logger import setup_logger
from mws_api.core.models import Credentials, Endpoint, Principal, RequestSettings, SignedRequest
from mws_api.core.normalizer import normalize
from mws_api.core.regions import Region, lookup
from mws_api.core.request_builder import build_request
from mws_api.core.retry import RetryEngine, Sleep
from mws_api.core.signature import Clock, sign, utc_now
from mws_api.core.transport import HttpxTransport, Transport, TransportResponse

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ClientState:
    """Credentials, principal and region read together by every call."""

    credentials: Credentials
    principal: Principal
    region: Region


def _validate_area(area: str) -> str:
    if area not in AREA_CODES:
        raise ConfigurationError(f"Area not in [{','.join(AREA_CODES)}]")
    return area


class MwsApiClient:
    """Async client running the normalize, sign, send, decode pipeline.

    Reconfiguration swaps the whole ``ClientState`` in one assignment, so
    in-flight calls keep the snapshot they started with.
    """

    def __init__(
        self,
        principal: Optional[Principal] = None,
        credentials: Optional[Credentials] = None,
        request_settings: Optional[RequestSettings] = None,
        transport: Optional[Transport] = None,
        headers: Optional[Mapping[str, str]] = None,
        clock: Clock = utc_now,
        sleep: Optional[Sleep] = None,
    ):
        """
        Initialize client, falling back to environment settings.

        Args:
            principal: Seller identity (default from SELLER_ID/MWS_AUTH_TOKEN/AREA)
            credentials: Access key pair (default from AWS_ACCESS_KEY_ID/AWS_ACCESS_SECRET)
            request_settings: Retry/format options (default from settings)
            transport: HTTP transport (default HttpxTransport)
            headers: Extra headers sent with every request
            clock: Timestamp source for signing
            sleep: Async sleep used for backoff

        Raises:
            ConfigurationError: Missing credentials or principal, or unknown area
        """
        if credentials is None:
            credentials = Credentials(
                default_settings.aws_access_key_id or "",
                default_settings.aws_access_secret or "",
            )
        if principal is None:
            principal = Principal(
                default_settings.seller_id or "",
                default_settings.mws_auth_token or "",
                default_settings.area,
            )

        self._state = ClientState(credentials, principal, lookup(principal.area))
        self.request_settings = request_settings or RequestSettings.from_settings(default_settings)
        self.transport = transport or HttpxTransport()
        self.headers = dict(headers or {})
        self.clock = clock
        self.sleep = sleep or asyncio.sleep

        logger.info(
            f"MWS client configured: area={principal.area}, host={self._state.region.host}",
            extra={"area": principal.area},
        )

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def area(self) -> Region:
        return self._state.region

    @property
    def principal(self) -> Principal:
        return self._state.principal

    def configure_area(self, area: str = DEFAULT_AREA) -> None:
        """Point subsequent calls at another region."""
        region = lookup(_validate_area(area))
        self._state = replace(self._state, region=region)
        logger.info(f"Area reconfigured: {area} ({region.host})", extra={"area": area})

    def get_area(self, area: str = DEFAULT_AREA) -> Region:
        """Look up a region without changing the client."""
        return lookup(_validate_area(area))

    def configure_seller(self, principal: Principal) -> None:
        """Replace the principal and switch to its area."""
        self._state = replace(self._state, principal=principal, region=lookup(principal.area))
        logger.info(f"Seller reconfigured for area {principal.area}", extra={"area": principal.area})

    async def sleep_second(self, seconds: float) -> None:
        await self.sleep(seconds)

    def create_options(
        self,
        endpoint: Endpoint,
        params: Optional[Mapping[str, Any]] = None,
        array_key_prefixes: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        state: Optional[ClientState] = None,
    ) -> SignedRequest:
        """
        Normalize, sign and assemble a request.

        Args:
            endpoint: Operation being called
            params: Caller parameters (never modified)
            array_key_prefixes: List parameter name to indexed key prefix
            headers: Extra headers for this request
            state: Snapshot to sign with (default current client state)

        Returns:
            SignedRequest for the transport
        """
        state = state or self._state
        flattened = normalize(params or {}, array_key_prefixes)
        signed = sign(
            endpoint,
            state.region.host,
            flattened,
            state.credentials,
            state.principal,
            self.clock,
        )
        return build_request(signed, endpoint, state.region.host, {**self.headers, **(headers or {})})

    async def create_request(
        self,
        options: SignedRequest,
        request_settings: Optional[RequestSettings] = None,
    ) -> Any:
        """
        Send a pre-built request, retrying with the same signature.

        Returns:
            Raw body when response_format is "raw", otherwise the decoded result

        Raises:
            MwsError: Any classified failure
        """
        request_settings = request_settings or self.request_settings

        async def attempt(number: int) -> TransportResponse:
            return await self._send(options, request_settings)

        response = await self._engine(request_settings).run(attempt, options.action)
        return self._format(response.body, options.action, request_settings)

    async def invoke(
        self,
        endpoint: Endpoint,
        params: Optional[Mapping[str, Any]] = None,
        array_key_prefixes: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        request_settings: Optional[RequestSettings] = None,
    ) -> Any:
        """
        Run the full pipeline for one operation.

        When ``resign_on_retry`` is set each attempt gets a fresh timestamp
        and signature; otherwise the first signed request is reused.
        """
        request_settings = request_settings or self.request_settings
        state = self._state
        first = self.create_options(endpoint, params, array_key_prefixes, headers, state)

        async def attempt(number: int) -> TransportResponse:
            options = first
            if number > 1 and request_settings.resign_on_retry:
                options = self.create_options(endpoint, params, array_key_prefixes, headers, state)
            return await self._send(options, request_settings)

        response = await self._engine(request_settings).run(attempt, endpoint.action)
        return self._format(response.body, endpoint.action, request_settings)

    def create_response(self, body: str, action: str) -> Any:
        """Decode a raw response body for ``action``."""
        return decode(body, action)

    async def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "MwsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _engine(self, request_settings: RequestSettings) -> RetryEngine:
        return RetryEngine(request_settings, self.sleep_second)

    async def _send(self, options: SignedRequest, request_settings: RequestSettings) -> TransportResponse:
        return await self.transport.send(
            options.method,
            options.url,
            options.headers,
            options.body,
            request_settings.timeout_seconds,
        )

    def _format(self, body: str, action: str, request_settings: RequestSettings) -> Any:
        if request_settings.response_format == "raw":
            return body
        return self.create_response(body, action)

