from tortoise import fields, models


class Restaurant(models.Model):
    id = fields.IntField(primary_key=True)
    name = fields.CharField(max_length=255)
    address = fields.CharField(max_length=255, default="")
    owner = fields.ForeignKeyField("models.User", related_name="restaurants", on_delete=fields.CASCADE)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "restaurants"
        indexes = [
            ("owner_id",),  # Owner dashboards
        ]


class Dish(models.Model):
    id = fields.IntField(primary_key=True)
    restaurant = fields.ForeignKeyField("models.Restaurant", related_name="menu", on_delete=fields.CASCADE)
    name = fields.CharField(max_length=255)
    description = fields.CharField(max_length=255, default="")
    price = fields.FloatField()
    # [{"name": "size", "extra": 5}, {"name": "spice", "choices": [{"name": "hot", "extra": 1}]}]
    options = fields.JSONField(null=True)

    class Meta:
        table = "dishes"
        indexes = [
            ("restaurant_id",),  # Fast restaurant menu queries
        ]
