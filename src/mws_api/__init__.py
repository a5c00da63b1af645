"""Signed request client for the Amazon MWS API family."""

from mws_api.api import MwsApiClient, OrdersApi
from mws_api.core import (
    ConfigurationError,
    Credentials,
    Endpoint,
    ErrorKind,
    MwsError,
    Principal,
    RequestSettings,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Credentials",
    "Endpoint",
    "ErrorKind",
    "MwsApiClient",
    "MwsError",
    "OrdersApi",
    "Principal",
    "RequestSettings",
]
