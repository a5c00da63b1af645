"""Value types shared by the request pipeline."""

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field

from mws_api.config.constants import AREA_CODES, DEFAULT_AREA
from mws_api.config.settings import Settings
from mws_api.core.errors import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Developer access key pair used to sign every request."""

    access_key_id: str
    access_secret: str = field(repr=False)

    def __post_init__(self):
        if not self.access_key_id or not self.access_secret:
            raise ConfigurationError(
                "Credentials[access_key_id] or Credentials[access_secret] not configured"
            )


@dataclass(frozen=True)
class Principal:
    """The seller on whose behalf requests are made."""

    seller_id: str
    auth_token: str = field(repr=False)
    area: str = DEFAULT_AREA

    def __post_init__(self):
        if not self.seller_id or not self.auth_token:
            raise ConfigurationError(
                "Principal[seller_id] or Principal[auth_token] not configured"
            )
        if self.area not in AREA_CODES:
            raise ConfigurationError(
                f"Principal[area] not in [{','.join(AREA_CODES)}]"
            )


@dataclass(frozen=True)
class Endpoint:
    """One logical remote operation.

    ``is_merchant`` selects whether the principal id is sent as
    ``Merchant`` instead of ``SellerId``.
    """

    path: str
    version: str
    action: str
    method: Literal["GET", "POST"] = "POST"
    is_merchant: bool = False

    @property
    def resource_path(self) -> str:
        """Signed and requested path, /{path}/{version} with single separators."""
        return f"/{self.path.strip('/')}/{self.version.strip('/')}"


class RequestSettings(BaseModel):
    """Per-request pipeline options."""

    response_format: Literal["raw", "structured"] = "structured"
    max_retries: int = Field(default=3, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)
    throttle_backoff_seconds: float = Field(default=10.0, ge=0)
    resign_on_retry: bool = True

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "RequestSettings":
        """Derive request options from application settings."""
        return cls(
            response_format=settings.response_format,
            max_retries=settings.max_retries,
            timeout_seconds=settings.timeout_seconds,
            throttle_backoff_seconds=settings.throttle_backoff_seconds,
            resign_on_retry=settings.resign_on_retry,
        )


@dataclass(frozen=True)
class SignedRequest:
    """Outbound request ready for the transport.

    ``encoded_parameters`` is the exact form-encoded string that was
    signed plus the trailing Signature pair. For GET it is already part
    of ``url`` and ``body`` is None.
    """

    method: str
    url: str
    headers: Dict[str, str]
    encoded_parameters: str
    signature: str
    action: str
    body: Optional[str] = None
