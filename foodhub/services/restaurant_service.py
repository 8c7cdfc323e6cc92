import logging
from foodhub.core.exceptions import NotFoundError, UnauthorizedError
from foodhub.models.restaurant import Dish, Restaurant
from foodhub.schemas.response import CreateDishOutput, CreateRestaurantOutput, DeleteDishOutput, EditDishOutput
from foodhub.schemas.restaurant import CreateDishInput, CreateRestaurantInput, DeleteDishInput, EditDishInput
from foodhub.schemas.user import Actor
from foodhub.services.results import failure

log = logging.getLogger("restaurant_service")


async def create_restaurant(owner: Actor, data: CreateRestaurantInput) -> CreateRestaurantOutput:
    try:
        restaurant = await Restaurant.create(owner_id=owner.id, name=data.name, address=data.address)
    except Exception as e:
        return failure(CreateRestaurantOutput, e, "Could not create the restaurant.")

    log.info(f"Restaurant '{restaurant.name}' ({restaurant.id}) created by user {owner.id}.")
    return CreateRestaurantOutput(restaurant_id=restaurant.id)


async def create_dish(owner: Actor, data: CreateDishInput) -> CreateDishOutput:
    """Adds a dish to a restaurant's menu. Only the restaurant's owner may do this."""
    try:
        restaurant = await Restaurant.get_or_none(id=data.restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found.")
        if restaurant.owner_id != owner.id:
            raise UnauthorizedError("You cannot add dishes to a restaurant you do not own.")

        dish = await Dish.create(
            restaurant=restaurant,
            name=data.name,
            price=data.price,
            description=data.description,
            options=[o.model_dump(exclude_none=True) for o in data.options],
        )
    except Exception as e:
        return failure(CreateDishOutput, e, "Could not create the dish.")

    log.info(f"Dish '{dish.name}' added to restaurant {restaurant.id}.")
    return CreateDishOutput(dish_id=dish.id)


async def _owned_dish(owner: Actor, dish_id: int) -> Dish:
    dish = await Dish.get_or_none(id=dish_id).prefetch_related("restaurant")
    if not dish:
        raise NotFoundError("Dish not found.")
    if dish.restaurant.owner_id != owner.id:
        raise UnauthorizedError("You cannot change dishes of a restaurant you do not own.")
    return dish


async def edit_dish(owner: Actor, data: EditDishInput) -> EditDishOutput:
    """
    Changes a dish on the menu. Orders already placed keep the total they
    were created with.
    """
    try:
        dish = await _owned_dish(owner, data.dish_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"dish_id", "options"})
        if data.options is not None:
            changes["options"] = [o.model_dump(exclude_none=True) for o in data.options]

        dish.update_from_dict(changes)
        await dish.save()
    except Exception as e:
        return failure(EditDishOutput, e, "Could not edit the dish.")

    log.info(f"Dish {dish.id} edited by user {owner.id}: {sorted(changes)}.")
    return EditDishOutput()


async def delete_dish(owner: Actor, data: DeleteDishInput) -> DeleteDishOutput:
    """Removes a dish from the menu. Past order items keep existing without it."""
    try:
        dish = await _owned_dish(owner, data.dish_id)
        await dish.delete()
    except Exception as e:
        return failure(DeleteDishOutput, e, "Could not delete the dish.")

    log.info(f"Dish {data.dish_id} deleted by user {owner.id}.")
    return DeleteDishOutput()
