from pydantic import BaseModel, Field
from typing import List, Optional
from foodhub.models.order import OrderStatus


class OrderItemOptionInput(BaseModel):
    """One option the customer picked for a dish, e.g. {"name": "size", "choice": "L"}."""
    name: str = Field(..., min_length=1)
    choice: Optional[str] = None

class CreateOrderItemInput(BaseModel):
    """Schema for a single dish in the order request."""
    dish_id: int
    options: List[OrderItemOptionInput] = Field(default_factory=list)

class CreateOrderInput(BaseModel):
    """Schema for the full order placement request body."""
    restaurant_id: int
    items: List[CreateOrderItemInput] = Field(default_factory=list)

class GetOrdersInput(BaseModel):
    status: Optional[OrderStatus] = None

class GetOrderInput(BaseModel):
    id: int

class EditOrderInput(BaseModel):
    """Schema for updating an order status."""
    id: int
    status: OrderStatus

class TakeOrderInput(BaseModel):
    id: int


class OrderItemSnapshot(BaseModel):
    dish_id: Optional[int] = None
    options: List[OrderItemOptionInput] = Field(default_factory=list)

class OrderSnapshot(BaseModel):
    """
    Plain view of an Order. Used by the authorization policy and as the
    payload of every order notification.
    """
    id: int
    status: OrderStatus
    total: Optional[float] = None
    customer_id: Optional[int] = None
    driver_id: Optional[int] = None
    restaurant_id: Optional[int] = None
    owner_id: Optional[int] = None
    items: Optional[List[OrderItemSnapshot]] = None

    @classmethod
    def from_model(cls, order, items=None) -> "OrderSnapshot":
        """Builds a snapshot from an Order whose restaurant relation is already loaded."""
        restaurant = order.restaurant
        owner_id = getattr(restaurant, "owner_id", None) if restaurant else None
        return cls(
            id=order.id,
            status=order.status,
            total=order.total,
            customer_id=order.customer_id,
            driver_id=order.driver_id,
            restaurant_id=order.restaurant_id,
            owner_id=owner_id,
            items=None if items is None else [
                OrderItemSnapshot(dish_id=item.dish_id, options=item.options or [])
                for item in items
            ],
        )

class OrderStatusUpdate(BaseModel):
    """Body of the status update endpoint."""
    status: OrderStatus
