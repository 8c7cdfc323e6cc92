# foodhub/scripts/seed_data.py
import asyncio
from foodhub.core.db import init_db, close_db
from foodhub.models import User, UserRole, Restaurant, Dish

async def seed():
    # One user per role
    owner, _ = await User.get_or_create(email="owner@foodhub.test", defaults={"role": UserRole.OWNER})
    client, _ = await User.get_or_create(email="client@foodhub.test", defaults={"role": UserRole.CLIENT})
    driver, _ = await User.get_or_create(email="driver@foodhub.test", defaults={"role": UserRole.DELIVERY})
    print("Users:", owner.id, client.id, driver.id)

    # Create one restaurant
    rest, _ = await Restaurant.get_or_create(name="Demo Restaurant", owner=owner, defaults={"address": "1 Main St"})
    print("Restaurant:", rest.id)

    # Create menu items with priced options
    d1, _ = await Dish.get_or_create(restaurant=rest, name="Paneer Wrap", defaults={
        "price": 8.0,
        "options": [{"name": "extra cheese", "extra": 1.5}],
    })
    d2, _ = await Dish.get_or_create(restaurant=rest, name="Chili Paneer Rice", defaults={
        "price": 11.0,
        "options": [{"name": "size", "choices": [{"name": "M"}, {"name": "L", "extra": 3}]}],
    })
    d3, _ = await Dish.get_or_create(restaurant=rest, name="Cold Drink", defaults={"price": 2.5, "options": []})

    print("Dishes:", d1.id, d2.id, d3.id)

async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
