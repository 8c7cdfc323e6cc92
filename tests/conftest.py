import pytest
import pytest_asyncio
from types import SimpleNamespace
from foodhub.core.db import init_db, close_db
from foodhub.models import Dish, Restaurant, User, UserRole
from foodhub.schemas.user import Actor
from foodhub.testing.testing_mocks import RecordingPubSub


@pytest_asyncio.fixture
async def db(tmp_path):
    """Fresh SQLite database per test, with all tables created."""
    await init_db(db_url=f"sqlite://{tmp_path / 'foodhub_test.db'}")
    yield
    await close_db()


@pytest.fixture
def pubsub():
    return RecordingPubSub()


async def _user(email, role):
    user = await User.create(email=email, role=role)
    return Actor(id=user.id, role=role)


@pytest_asyncio.fixture
async def world(db):
    """
    Two of each role, one restaurant per owner and a small menu:
      burger  10.0  size: flat extra 5
      pizza   12.0  crust: choices thin (no extra) / stuffed (+3)
    """
    w = SimpleNamespace()
    w.client = await _user("client@test", UserRole.CLIENT)
    w.other_client = await _user("other-client@test", UserRole.CLIENT)
    w.owner = await _user("owner@test", UserRole.OWNER)
    w.other_owner = await _user("other-owner@test", UserRole.OWNER)
    w.driver = await _user("driver@test", UserRole.DELIVERY)
    w.other_driver = await _user("other-driver@test", UserRole.DELIVERY)

    w.restaurant = await Restaurant.create(name="Burger Barn", owner_id=w.owner.id)
    w.other_restaurant = await Restaurant.create(name="Noodle Nook", owner_id=w.other_owner.id)

    w.burger = await Dish.create(
        restaurant=w.restaurant, name="Burger", price=10.0,
        options=[{"name": "size", "extra": 5}],
    )
    w.pizza = await Dish.create(
        restaurant=w.restaurant, name="Pizza", price=12.0,
        options=[{"name": "crust", "choices": [{"name": "thin"}, {"name": "stuffed", "extra": 3}]}],
    )
    w.noodles = await Dish.create(restaurant=w.other_restaurant, name="Noodles", price=9.0, options=[])
    return w
