from pydantic import BaseModel, Field
from typing import List, Optional


class DishOptionChoice(BaseModel):
    name: str
    extra: Optional[float] = None

class DishOption(BaseModel):
    """
    Price modifier on a dish. Either a flat `extra`, or named `choices`
    each carrying their own `extra`.
    """
    name: str
    extra: Optional[float] = None
    choices: Optional[List[DishOptionChoice]] = None


class CreateRestaurantInput(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the restaurant.")
    address: str = Field("", description="Street address shown to drivers.")

class CreateDishInput(BaseModel):
    restaurant_id: int
    name: str = Field(..., min_length=1, description="Name of the dish (e.g., Chicken Biryani).")
    price: float = Field(..., ge=0, description="Base price before options.")
    description: str = ""
    options: List[DishOption] = Field(default_factory=list)

class DishUpdate(BaseModel):
    """Partial update of a dish. Fields left out keep their current value."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    options: Optional[List[DishOption]] = None

class EditDishInput(DishUpdate):
    dish_id: int

class DeleteDishInput(BaseModel):
    dish_id: int
