from pydantic import BaseModel
from foodhub.models.user import UserRole


class Actor(BaseModel):
    """The authenticated user performing an operation."""
    id: int
    role: UserRole

    model_config = {"frozen": True}
