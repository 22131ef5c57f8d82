"""Feed routes."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from circle.server.deps import Actor, Service

router = APIRouter()


class NewPost(BaseModel):
    text: str | None = None
    image: str | None = None


class NewComment(BaseModel):
    text: str | None = None


@router.get("/posts")
async def list_posts(actor: Actor, service: Service) -> list[dict[str, Any]]:
    posts = await service.list_posts(actor.id)
    return [p.to_dict() for p in posts]


@router.post("/posts")
async def create_post(body: NewPost, actor: Actor, service: Service) -> dict[str, Any]:
    post = await service.create_post(actor.id, body.text, body.image)
    return post.to_dict()


@router.post("/posts/{post_id}/like")
async def toggle_like(post_id: str, actor: Actor, service: Service) -> dict[str, Any]:
    likes = await service.toggle_like(actor.id, post_id)
    return {"likes": likes}


@router.post("/posts/{post_id}/comment")
async def add_comment(
    post_id: str, body: NewComment, actor: Actor, service: Service
) -> dict[str, Any]:
    comment = await service.add_comment(actor.id, post_id, body.text)
    return comment.to_dict()
