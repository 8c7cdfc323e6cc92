from pydantic import BaseModel, Field
from typing import List, Optional
from foodhub.schemas.order import OrderSnapshot


class CoreOutput(BaseModel):
    """
    Uniform result of every service operation. Callers branch on `ok`
    instead of catching exceptions.
    """
    ok: bool = Field(default=True)
    error: Optional[str] = None
    code: Optional[str] = None

class CreateOrderOutput(CoreOutput):
    order_id: Optional[int] = None

class GetOrdersOutput(CoreOutput):
    orders: Optional[List[OrderSnapshot]] = None

class GetOrderOutput(CoreOutput):
    order: Optional[OrderSnapshot] = None

class EditOrderOutput(CoreOutput):
    pass

class TakeOrderOutput(CoreOutput):
    pass

class CreateRestaurantOutput(CoreOutput):
    restaurant_id: Optional[int] = None

class CreateDishOutput(CoreOutput):
    dish_id: Optional[int] = None

class EditDishOutput(CoreOutput):
    pass

class DeleteDishOutput(CoreOutput):
    pass
