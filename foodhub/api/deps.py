from fastapi import Depends, Header, HTTPException, status
from starlette.requests import HTTPConnection
from foodhub.events.pubsub import PubSub
from foodhub.models.user import UserRole
from foodhub.schemas.user import Actor


async def get_current_actor(
    x_user_id: int = Header(..., description="Id of the authenticated user, set by the auth gateway."),
    x_user_role: UserRole = Header(..., description="Role of the authenticated user."),
) -> Actor:
    """Resolves the caller. Authentication happens upstream; this only reads its result."""
    return Actor(id=x_user_id, role=x_user_role)


def require_roles(*roles: UserRole):
    """Dependency factory: rejects callers whose role is not in `roles` with 403."""
    async def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires one of the roles: {', '.join(r.value for r in roles)}."
            )
        return actor
    return dependency


def get_pubsub(connection: HTTPConnection) -> PubSub:
    return connection.app.state.pubsub
