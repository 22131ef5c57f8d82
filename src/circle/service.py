"""Social service facade.

Every mutation goes through ``SocialStore.mutate`` so load, apply and
persist happen as one unit; reads use the last committed snapshot.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from circle.social import accounts, chats, feed, graph
from circle.social.accounts import Authenticator, PlaintextAuthenticator
from circle.store import Comment, Message, Post, SocialStore, User, UserId

logger = logging.getLogger(__name__)


class SocialService:
    """Async facade over the social operations."""

    def __init__(
        self,
        *,
        store: SocialStore,
        authenticator: Authenticator | None = None,
    ) -> None:
        self._store = store
        self._authenticator = authenticator or PlaintextAuthenticator()

    @property
    def store(self) -> SocialStore:
        return self._store

    # -- accounts ---------------------------------------------------------

    async def register(self, username: str | None, secret: str | None) -> User:
        return await self._store.mutate(
            lambda s: accounts.register(s, username, secret)
        )

    async def login(self, username: str | None, secret: str | None) -> User:
        snapshot = await self._store.read()
        return accounts.login(snapshot, username, secret, self._authenticator)

    async def authenticate(self, user_id: UserId | None) -> User:
        """Resolve a caller-supplied identity to its user."""
        return accounts.resolve_user(await self._store.read(), user_id)

    async def update_avatar(self, actor: UserId, avatar_image: str | None) -> str:
        return await self._store.mutate(
            lambda s: accounts.update_avatar(s, actor, avatar_image)
        )

    # -- relationship graph ------------------------------------------------

    async def list_friends(self, actor: UserId) -> list[dict[str, Any]]:
        return graph.list_friends(await self._store.read(), actor)

    async def list_requests(self, actor: UserId) -> dict[str, list[UserId]]:
        return graph.list_requests(await self._store.read(), actor)

    async def send_request(self, actor: UserId, target: UserId) -> None:
        await self._store.mutate(lambda s: graph.send_request(s, actor, target))
        logger.info(
            "friend_request_sent", extra={"user.id": actor, "target.id": target}
        )

    async def accept_request(self, actor: UserId, sender: UserId) -> None:
        await self._store.mutate(lambda s: graph.accept_request(s, actor, sender))
        logger.info(
            "friend_request_accepted", extra={"user.id": actor, "sender.id": sender}
        )

    async def decline_request(self, actor: UserId, sender: UserId) -> None:
        await self._store.mutate(lambda s: graph.decline_request(s, actor, sender))

    async def check_graph(self) -> list[graph.Violation]:
        return graph.check_graph(await self._store.read())

    async def repair_graph(self) -> int:
        return await self._store.mutate(graph.repair_graph)

    # -- chats ---------------------------------------------------------------

    async def list_chats(self, actor: UserId) -> list[dict[str, Any]]:
        return chats.list_chats(await self._store.read(), actor)

    async def list_messages(self, actor: UserId, peer: UserId) -> list[Message]:
        return chats.list_messages(await self._store.read(), actor, peer)

    async def send_text_message(
        self, actor: UserId, peer: UserId, text: str | None
    ) -> Message:
        return await self._store.mutate(
            lambda s: chats.send_text_message(s, actor, peer, text)
        )

    async def send_voice_message(
        self, actor: UserId, peer: UserId, audio_data: str | None
    ) -> Message:
        return await self._store.mutate(
            lambda s: chats.send_voice_message(s, actor, peer, audio_data)
        )

    # -- feed ----------------------------------------------------------------

    async def list_posts(self, actor: UserId) -> list[Post]:
        return feed.list_posts(await self._store.read(), actor)

    async def create_post(
        self, actor: UserId, text: str | None = None, image: str | None = None
    ) -> Post:
        return await self._store.mutate(
            lambda s: feed.create_post(s, actor, text, image)
        )

    async def toggle_like(self, actor: UserId, post_id: str) -> list[UserId]:
        return await self._store.mutate(
            lambda s: feed.toggle_like(s, actor, post_id)
        )

    async def add_comment(
        self, actor: UserId, post_id: str, text: str | None
    ) -> Comment:
        return await self._store.mutate(
            lambda s: feed.add_comment(s, actor, post_id, text)
        )


async def create_social_service(
    store_path: Path,
    *,
    authenticator: Authenticator | None = None,
) -> SocialService:
    """Create a service over an opened store at ``store_path``."""
    store = SocialStore(store_path)
    await store.open()
    return SocialService(store=store, authenticator=authenticator)
