"""Orders API endpoint descriptors."""

from mws_api.core.models import Endpoint

ORDERS_PATH = "Orders"
ORDERS_VERSION = "2013-09-01"


def _orders(action: str) -> Endpoint:
    return Endpoint(path=ORDERS_PATH, version=ORDERS_VERSION, action=action, method="POST")


GET_SERVICE_STATUS = _orders("GetServiceStatus")
LIST_ORDERS = _orders("ListOrders")
LIST_ORDERS_BY_NEXT_TOKEN = _orders("ListOrdersByNextToken")
GET_ORDER = _orders("GetOrder")
LIST_ORDER_ITEMS = _orders("ListOrderItems")
LIST_ORDER_ITEMS_BY_NEXT_TOKEN = _orders("ListOrderItemsByNextToken")

# List parameters and the indexed key prefix each expands to
LIST_ORDERS_ARRAY_KEYS = {
    "MarketplaceId": "MarketplaceId.Id.",
    "OrderStatus": "OrderStatus.Status.",
    "FulfillmentChannel": "FulfillmentChannel.Channel.",
    "PaymentMethod": "PaymentMethod.Method.",
}
GET_ORDER_ARRAY_KEYS = {"AmazonOrderIds": "AmazonOrderId.Id."}
