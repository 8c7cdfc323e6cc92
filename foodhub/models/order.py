from enum import Enum
from tortoise import fields, models


class OrderStatus(str, Enum):
    PENDING = "Pending"  # Initial state, waiting for the restaurant
    COOKING = "Cooking"
    COOKED = "Cooked"  # Ready for a driver to pick up
    PICKED_UP = "PickedUp"
    DELIVERED = "Delivered"


class Order(models.Model):
    id = fields.IntField(primary_key=True)
    customer = fields.ForeignKeyField("models.User", related_name="orders", null=True, on_delete=fields.SET_NULL)
    # Empty until a driver takes the order
    driver = fields.ForeignKeyField("models.User", related_name="rides", null=True, on_delete=fields.SET_NULL)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="orders", null=True, on_delete=fields.SET_NULL)
    status = fields.CharEnumField(OrderStatus, default=OrderStatus.PENDING)
    total = fields.FloatField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "orders"
        indexes = [
            ("restaurant_id",),          # Restaurant order queries
            ("customer_id",),            # Customer order history
            ("driver_id",),              # Driver rides
            ("status",),                 # Status-based filtering
        ]


class OrderItem(models.Model):
    id = fields.IntField(primary_key=True)
    order = fields.ForeignKeyField("models.Order", related_name="items", on_delete=fields.CASCADE)
    # Deleting a dish from the menu keeps past orders and their items
    dish = fields.ForeignKeyField("models.Dish", related_name="order_items", null=True, on_delete=fields.SET_NULL)
    # Raw options the customer asked for: [{"name": ..., "choice": ...}]
    options = fields.JSONField(null=True)

    class Meta:
        table = "order_items"
        indexes = [
            ("order_id",),              # Order line items
        ]
