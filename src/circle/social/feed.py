"""Public post feed."""

from __future__ import annotations

import logging
import uuid

from circle.errors import EmptyComment, EmptyPost, PostNotFound, UserNotFound
from circle.store.types import AuthorSnapshot, Comment, Post, Snapshot, UserId, utcnow

logger = logging.getLogger(__name__)


def list_posts(snapshot: Snapshot, actor: UserId) -> list[Post]:
    """All posts, newest first. ``sorted`` is stable so ties keep insertion order."""
    return sorted(snapshot.posts, key=lambda p: p.created_at, reverse=True)


def _author(snapshot: Snapshot, actor: UserId) -> AuthorSnapshot:
    user = snapshot.users.get(actor)
    if user is None:
        raise UserNotFound()
    return AuthorSnapshot.of(user)


def _require_post(snapshot: Snapshot, post_id: str) -> Post:
    post = snapshot.find_post(post_id)
    if post is None:
        raise PostNotFound()
    return post


def create_post(
    snapshot: Snapshot,
    actor: UserId,
    text: str | None = None,
    image: str | None = None,
) -> Post:
    if not text and not image:
        raise EmptyPost()

    post = Post(
        id=uuid.uuid4().hex,
        author=_author(snapshot, actor),
        text=text or "",
        image=image or None,
        created_at=utcnow(),
    )
    snapshot.posts.append(post)
    logger.info("post_created", extra={"post.id": post.id, "user.id": actor})
    return post


def toggle_like(snapshot: Snapshot, actor: UserId, post_id: str) -> list[UserId]:
    """Add the actor's like, or remove it if present. Returns the like set."""
    post = _require_post(snapshot, post_id)
    if actor in post.likes:
        post.likes.remove(actor)
    else:
        post.likes.append(actor)
    return list(post.likes)


def add_comment(
    snapshot: Snapshot, actor: UserId, post_id: str, text: str | None
) -> Comment:
    post = _require_post(snapshot, post_id)
    if not text:
        raise EmptyComment()

    comment = Comment(
        id=uuid.uuid4().hex,
        author=_author(snapshot, actor),
        text=text,
        created_at=utcnow(),
    )
    post.comments.append(comment)
    return comment
