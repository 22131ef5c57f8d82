"""Registration, login and profile routes."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from circle.server.deps import Actor, Service

router = APIRouter()


class Credentials(BaseModel):
    username: str | None = None
    password: str | None = None


class AvatarUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    avatar_image: str | None = Field(default=None, alias="avatarImage")


@router.post("/register")
async def register(body: Credentials, service: Service) -> dict[str, Any]:
    user = await service.register(body.username, body.password)
    return {"user": user.public_view()}


@router.post("/login")
async def login(body: Credentials, service: Service) -> dict[str, Any]:
    user = await service.login(body.username, body.password)
    return {"user": user.public_view()}


@router.get("/me")
async def me(actor: Actor) -> dict[str, Any]:
    return actor.public_view()


@router.post("/me/avatar")
async def update_avatar(
    body: AvatarUpdate, actor: Actor, service: Service
) -> dict[str, Any]:
    avatar_image = await service.update_avatar(actor.id, body.avatar_image)
    return {"success": True, "avatarImage": avatar_image}
