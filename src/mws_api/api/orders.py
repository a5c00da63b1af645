"""Orders resource group."""

from typing import Any, Dict, List, Optional

from mws_api.api import endpoints
from mws_api.api.client import MwsApiClient
from mws_api.config.constants import GET_ORDER_MAX_IDS
from mws_api.core.logger import setup_logger
from mws_api.core.normalizer import split_batches

logger = setup_logger(__name__)


class OrdersApi(MwsApiClient):
    """Orders API (2013-09-01) on top of the signed request pipeline."""

    async def get_service_status(self) -> Any:
        return await self.invoke(endpoints.GET_SERVICE_STATUS)

    async def list_orders(self, params: Dict[str, Any]) -> Any:
        """
        List orders created or updated in a time window.

        MarketplaceId defaults to the configured area's marketplace.

        Args:
            params: ListOrders parameters; MarketplaceId, OrderStatus,
                FulfillmentChannel and PaymentMethod may be lists
        """
        params = dict(params)
        params.setdefault("MarketplaceId", [self.area.merchant_id])
        return await self.invoke(endpoints.LIST_ORDERS, params, endpoints.LIST_ORDERS_ARRAY_KEYS)

    async def list_orders_by_next_token(self, params: Dict[str, Any]) -> Any:
        return await self.invoke(endpoints.LIST_ORDERS_BY_NEXT_TOKEN, params)

    async def get_order(self, params: Dict[str, Any]) -> Any:
        """Fetch up to 50 orders by AmazonOrderIds."""
        return await self.invoke(endpoints.GET_ORDER, params, endpoints.GET_ORDER_ARRAY_KEYS)

    async def get_orders(self, order_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Fetch any number of orders, one GetOrder call per 50 ids.

        Returns:
            Flat list of Order dicts
        """
        orders: List[Dict[str, Any]] = []
        batches = split_batches(order_ids, GET_ORDER_MAX_IDS)
        for number, batch in enumerate(batches, start=1):
            logger.info(f"GetOrder batch {number}/{len(batches)} ({len(batch)} ids)")
            result = await self.get_order({"AmazonOrderIds": batch})
            orders.extend(_order_list(result))
        return orders

    async def list_order_items(self, params: Dict[str, Any]) -> Any:
        return await self.invoke(endpoints.LIST_ORDER_ITEMS, params)

    async def list_order_items_by_next_token(self, params: Dict[str, Any]) -> Any:
        return await self.invoke(endpoints.LIST_ORDER_ITEMS_BY_NEXT_TOKEN, params)


def _order_list(result: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not isinstance(result, dict):
        return []
    orders = result.get("Orders")
    if not isinstance(orders, dict):
        return []
    inner = orders.get("Order", [])
    return inner if isinstance(inner, list) else [inner]
