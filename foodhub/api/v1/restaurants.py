import logging
from fastapi import APIRouter, Depends, status
from foodhub.api.deps import require_roles
from foodhub.models.user import UserRole
from foodhub.schemas.response import CreateDishOutput, CreateRestaurantOutput, DeleteDishOutput, EditDishOutput
from foodhub.schemas.restaurant import CreateDishInput, CreateRestaurantInput, DeleteDishInput, DishUpdate, EditDishInput
from foodhub.schemas.user import Actor
from foodhub.services.restaurant_service import create_dish, create_restaurant, delete_dish, edit_dish

log = logging.getLogger("uvicorn")

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=CreateRestaurantOutput)
async def add_restaurant(
    restaurant_data: CreateRestaurantInput,
    actor: Actor = Depends(require_roles(UserRole.OWNER)),
):
    """
    Creates a new restaurant owned by the caller.
    """
    return await create_restaurant(actor, restaurant_data)


@router.post("/{restaurant_id}/dishes", status_code=status.HTTP_201_CREATED, response_model=CreateDishOutput)
async def add_dish(
    restaurant_id: int,
    dish_data: CreateDishInput,
    actor: Actor = Depends(require_roles(UserRole.OWNER)),
):
    """
    Adds a dish, with its priced options, to one of the caller's restaurants.
    The path id wins over any id in the body.
    """
    dish_data = dish_data.model_copy(update={"restaurant_id": restaurant_id})
    return await create_dish(actor, dish_data)


@router.patch("/dishes/{dish_id}", response_model=EditDishOutput)
async def edit_dish_endpoint(
    dish_id: int,
    dish_data: DishUpdate,
    actor: Actor = Depends(require_roles(UserRole.OWNER)),
):
    """Changes name, price, description or options of a dish. Placed orders keep their totals."""
    data = EditDishInput(dish_id=dish_id, **dish_data.model_dump(exclude_unset=True))
    return await edit_dish(actor, data)


@router.delete("/dishes/{dish_id}", response_model=DeleteDishOutput)
async def delete_dish_endpoint(
    dish_id: int,
    actor: Actor = Depends(require_roles(UserRole.OWNER)),
):
    """Removes a dish from the menu."""
    return await delete_dish(actor, DeleteDishInput(dish_id=dish_id))
