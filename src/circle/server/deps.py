"""Request dependencies shared by route modules."""

from typing import Annotated

from fastapi import Depends, Header, Request

from circle.errors import Unauthenticated, UserNotFound
from circle.service import SocialService
from circle.store import User


def get_service(request: Request) -> SocialService:
    return request.app.state.service


async def get_actor(
    service: Annotated[SocialService, Depends(get_service)],
    x_user_id: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the ``x-user-id`` header to the calling user."""
    try:
        return await service.authenticate(x_user_id)
    except UserNotFound as e:
        raise Unauthenticated("User not found") from e


Service = Annotated[SocialService, Depends(get_service)]
Actor = Annotated[User, Depends(get_actor)]
