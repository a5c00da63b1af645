"""Core module - Logging, errors, signing, transport, retry and decoding."""

from mws_api.core.errors import ConfigurationError, ErrorKind, MwsError
from mws_api.core.logger import setup_logger
from mws_api.core.models import Credentials, Endpoint, Principal, RequestSettings, SignedRequest
from mws_api.core.regions import Region, lookup

__all__ = [
    "ConfigurationError",
    "Credentials",
    "Endpoint",
    "ErrorKind",
    "MwsError",
    "Principal",
    "Region",
    "RequestSettings",
    "SignedRequest",
    "lookup",
    "setup_logger",
]
