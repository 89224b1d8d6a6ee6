"""Order submission through the createOrder mutation."""
from storefront.errors import GraphQLRequestError, OrderSubmissionError
from storefront.graphql import GraphQLClient

from .models import CreateOrderRequest, OrderResponse

CREATE_ORDER_MUTATION = """
mutation CreateOrder($customerEmail: String!, $shippingAddress: String!, $items: [OrderItemInput]!) {
  createOrder(customerEmail: $customerEmail, shippingAddress: $shippingAddress, items: $items) {
    success
    message
    orderId
  }
}
"""


class OrderClient:
    def __init__(self, graphql: GraphQLClient):
        self.graphql = graphql

    async def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        """
        Submit an order.

        Returns the backend's answer, which may itself report `success=False`.

        Raises:
            OrderSubmissionError: transport failure or GraphQL error payload
        """
        try:
            data = await self.graphql.execute(CREATE_ORDER_MUTATION, request.to_variables())
        except GraphQLRequestError as e:
            raise OrderSubmissionError(str(e)) from e

        payload = data.get("createOrder")
        if not isinstance(payload, dict):
            raise OrderSubmissionError("createOrder returned no result")

        order_id = payload.get("orderId")
        return OrderResponse(
            success=bool(payload.get("success")),
            message=payload.get("message") or "",
            order_id=str(order_id) if order_id is not None else None,
        )
