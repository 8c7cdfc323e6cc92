from enum import Enum
from tortoise import fields, models


class UserRole(str, Enum):
    CLIENT = "Client"
    OWNER = "Owner"
    DELIVERY = "Delivery"


class User(models.Model):
    id = fields.IntField(primary_key=True)
    email = fields.CharField(max_length=255, unique=True)
    role = fields.CharEnumField(UserRole)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "users"
