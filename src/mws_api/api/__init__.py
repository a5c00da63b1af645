"""Amazon MWS API module."""

from .client import MwsApiClient
from .orders import OrdersApi

__all__ = ["MwsApiClient", "OrdersApi"]
