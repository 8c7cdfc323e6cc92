import pytest
from foodhub.models import Dish, Order, OrderItem, Restaurant
from foodhub.schemas.order import CreateOrderInput, CreateOrderItemInput
from foodhub.schemas.restaurant import (
    CreateDishInput, CreateRestaurantInput, DeleteDishInput, DishOption, DishOptionChoice, EditDishInput
)
from foodhub.services.order_service import create_order
from foodhub.services.restaurant_service import create_dish, create_restaurant, delete_dish, edit_dish


@pytest.mark.asyncio
async def test_create_restaurant_belongs_to_caller(world):
    result = await create_restaurant(world.owner, CreateRestaurantInput(name="Taco Town", address="2 Side St"))

    assert result.ok
    restaurant = await Restaurant.get(id=result.restaurant_id)
    assert restaurant.owner_id == world.owner.id
    assert restaurant.address == "2 Side St"


@pytest.mark.asyncio
async def test_create_dish_stores_options(world):
    data = CreateDishInput(
        restaurant_id=world.restaurant.id,
        name="Fries",
        price=3.5,
        options=[
            DishOption(name="salt", extra=0.5),
            DishOption(name="dip", choices=[DishOptionChoice(name="ketchup"), DishOptionChoice(name="aioli", extra=1)]),
        ],
    )

    result = await create_dish(world.owner, data)

    assert result.ok
    dish = await Dish.get(id=result.dish_id)
    assert dish.restaurant_id == world.restaurant.id
    assert dish.options == [
        {"name": "salt", "extra": 0.5},
        {"name": "dip", "choices": [{"name": "ketchup"}, {"name": "aioli", "extra": 1.0}]},
    ]


@pytest.mark.asyncio
async def test_create_dish_requires_ownership(world):
    data = CreateDishInput(restaurant_id=world.restaurant.id, name="Fries", price=3.5)

    result = await create_dish(world.other_owner, data)

    assert not result.ok
    assert result.code == "unauthorized"
    assert not await Dish.filter(name="Fries").exists()


@pytest.mark.asyncio
async def test_create_dish_unknown_restaurant(world):
    result = await create_dish(world.owner, CreateDishInput(restaurant_id=9999, name="Fries", price=3.5))

    assert not result.ok
    assert result.code == "not_found"


# --- EDIT / DELETE DISH ---

@pytest.mark.asyncio
async def test_edit_dish_changes_only_given_fields(world):
    result = await edit_dish(world.owner, EditDishInput(dish_id=world.burger.id, price=11.5))

    assert result.ok
    dish = await Dish.get(id=world.burger.id)
    assert dish.price == 11.5
    assert dish.name == "Burger"
    assert dish.options == [{"name": "size", "extra": 5}]


@pytest.mark.asyncio
async def test_edit_dish_replaces_options(world):
    data = EditDishInput(
        dish_id=world.pizza.id,
        name="Pizza Margherita",
        options=[DishOption(name="crust", choices=[DishOptionChoice(name="thin"), DishOptionChoice(name="vegan", extra=2)])],
    )

    result = await edit_dish(world.owner, data)

    assert result.ok
    dish = await Dish.get(id=world.pizza.id)
    assert dish.name == "Pizza Margherita"
    assert dish.price == 12.0
    assert dish.options == [{"name": "crust", "choices": [{"name": "thin"}, {"name": "vegan", "extra": 2.0}]}]


@pytest.mark.asyncio
async def test_edit_dish_of_another_restaurant_is_unauthorized(world):
    result = await edit_dish(world.other_owner, EditDishInput(dish_id=world.burger.id, price=1))

    assert not result.ok
    assert result.code == "unauthorized"
    assert (await Dish.get(id=world.burger.id)).price == 10.0


@pytest.mark.asyncio
async def test_edit_missing_dish(world):
    result = await edit_dish(world.owner, EditDishInput(dish_id=9999, price=1))

    assert not result.ok
    assert result.code == "not_found"
    assert result.error == "Dish not found."


@pytest.mark.asyncio
async def test_delete_dish(world):
    result = await delete_dish(world.owner, DeleteDishInput(dish_id=world.pizza.id))

    assert result.ok
    assert not await Dish.filter(id=world.pizza.id).exists()
    assert await Dish.filter(id=world.burger.id).exists()


@pytest.mark.asyncio
async def test_delete_dish_requires_ownership(world):
    result = await delete_dish(world.other_owner, DeleteDishInput(dish_id=world.burger.id))

    assert not result.ok
    assert result.code == "unauthorized"
    assert await Dish.filter(id=world.burger.id).exists()


@pytest.mark.asyncio
async def test_delete_missing_dish(world):
    result = await delete_dish(world.owner, DeleteDishInput(dish_id=9999))

    assert not result.ok
    assert result.code == "not_found"


@pytest.mark.asyncio
async def test_deleting_a_dish_keeps_past_orders(world, pubsub):
    placed = await create_order(
        world.client,
        CreateOrderInput(restaurant_id=world.restaurant.id, items=[CreateOrderItemInput(dish_id=world.burger.id)]),
        pubsub,
    )
    assert placed.ok

    result = await delete_dish(world.owner, DeleteDishInput(dish_id=world.burger.id))

    assert result.ok
    order = await Order.get(id=placed.order_id)
    assert order.total == 10
    items = await OrderItem.filter(order_id=order.id)
    assert len(items) == 1
    assert items[0].dish_id is None
