"""Store entity types.

Entities serialize to the camelCase layout of the store document
(``users``, ``posts``, ``friends``, ``friendRequests``, ``messages``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

UserId = str
ThreadKey = str


class MessageKind(StrEnum):
    """Allowed direct-message payload kinds."""

    TEXT = "text"
    VOICE = "voice"


def utcnow() -> datetime:
    return datetime.now(UTC)


def display_glyph(username: str) -> str:
    """Default avatar glyph: first character of the username, upper-cased."""
    return username[:1].upper()


THREAD_KEY_SEPARATOR = ":"

# Older documents joined the sorted pair with an underscore
LEGACY_THREAD_KEY_SEPARATOR = "_"


def validate_user_id(user_id: UserId) -> None:
    """User ids must be non-empty and never contain the thread key separator."""
    if not user_id:
        raise ValueError("user id must not be empty")
    if THREAD_KEY_SEPARATOR in user_id:
        raise ValueError(f"user id must not contain {THREAD_KEY_SEPARATOR!r}")


def thread_key(user_a: UserId, user_b: UserId) -> ThreadKey:
    """Order-independent key for the thread between two users."""
    validate_user_id(user_a)
    validate_user_id(user_b)
    first, second = sorted((user_a, user_b))
    return f"{first}{THREAD_KEY_SEPARATOR}{second}"


@dataclass
class User:
    """A registered account. ``secret`` never leaves the store."""

    id: UserId
    username: str
    secret: str
    display_glyph: str
    avatar_image: str | None = None
    bio: str = ""

    def public_view(self) -> dict[str, Any]:
        """Projection safe to hand to any caller."""
        return {
            "id": self.id,
            "username": self.username,
            "avatar": self.display_glyph,
            "avatarImage": self.avatar_image,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "password": self.secret,
            "avatar": self.display_glyph,
            "avatarImage": self.avatar_image,
            "bio": self.bio,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        username = str(data["username"])
        return cls(
            id=str(data["id"]),
            username=username,
            secret=str(data.get("password", "")),
            display_glyph=data.get("avatar") or display_glyph(username),
            avatar_image=data.get("avatarImage"),
            bio=data.get("bio") or "",
        )


@dataclass
class AuthorSnapshot:
    """Author display fields copied at write time.

    Never refreshed after the owning post or comment is created.
    """

    author_id: UserId
    author_name: str
    author_glyph: str
    author_avatar_image: str | None = None

    @classmethod
    def of(cls, user: User) -> AuthorSnapshot:
        return cls(
            author_id=user.id,
            author_name=user.username,
            author_glyph=user.display_glyph,
            author_avatar_image=user.avatar_image,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "authorId": self.author_id,
            "author": self.author_name,
            "authorAvatar": self.author_glyph,
            "authorAvatarImage": self.author_avatar_image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuthorSnapshot:
        name = str(data.get("author", ""))
        return cls(
            author_id=str(data["authorId"]),
            author_name=name,
            author_glyph=data.get("authorAvatar") or display_glyph(name),
            author_avatar_image=data.get("authorAvatarImage"),
        )


@dataclass
class Comment:
    id: str
    author: AuthorSnapshot
    text: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            **self.author.to_dict(),
            "text": self.text,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Comment:
        return cls(
            id=str(data["id"]),
            author=AuthorSnapshot.from_dict(data),
            text=str(data.get("text", "")),
            created_at=_parse_dt(data.get("createdAt") or data.get("time")),
        )


@dataclass
class Post:
    id: str
    author: AuthorSnapshot
    text: str
    created_at: datetime
    image: str | None = None
    likes: list[UserId] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            **self.author.to_dict(),
            "text": self.text,
            "image": self.image,
            "createdAt": self.created_at.isoformat(),
            "likes": list(self.likes),
            "comments": [c.to_dict() for c in self.comments],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Post:
        return cls(
            id=str(data["id"]),
            author=AuthorSnapshot.from_dict(data),
            text=data.get("text") or "",
            image=data.get("image"),
            created_at=_parse_dt(data.get("createdAt")),
            likes=_unique(data.get("likes", [])),
            comments=[Comment.from_dict(c) for c in data.get("comments", [])],
        )


@dataclass
class FriendshipEdge:
    """Friends of one user. Mirrored on every friend's own edge."""

    user_id: UserId
    friends: list[UserId] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"userId": self.user_id, "friends": list(self.friends)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FriendshipEdge:
        return cls(
            user_id=str(data["userId"]),
            friends=_unique(data.get("friends", [])),
        )


@dataclass
class FriendRequestRecord:
    """Pending requests of one user, mirrored on the counterpart's record."""

    user_id: UserId
    sent: list[UserId] = field(default_factory=list)
    received: list[UserId] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "sent": list(self.sent),
            "received": list(self.received),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FriendRequestRecord:
        return cls(
            user_id=str(data["userId"]),
            sent=_unique(data.get("sent", [])),
            received=_unique(data.get("received", [])),
        )


@dataclass
class Message:
    id: str
    sender_id: UserId
    kind: MessageKind
    created_at: datetime
    text: str | None = None
    audio_data: str | None = None
    read: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "senderId": self.sender_id,
            "type": self.kind.value,
            "createdAt": self.created_at.isoformat(),
            "read": self.read,
        }
        if self.kind == MessageKind.VOICE:
            data["audioData"] = self.audio_data
        else:
            data["text"] = self.text
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        kind = MessageKind(data.get("type", MessageKind.TEXT.value))
        return cls(
            id=str(data["id"]),
            sender_id=str(data["senderId"]),
            kind=kind,
            created_at=_parse_dt(data.get("createdAt") or data.get("time")),
            text=data.get("text") if kind == MessageKind.TEXT else None,
            audio_data=data.get("audioData") if kind == MessageKind.VOICE else None,
            read=bool(data.get("read", False)),
        )


@dataclass
class Snapshot:
    """The whole database value at one instant."""

    users: dict[UserId, User] = field(default_factory=dict)
    posts: list[Post] = field(default_factory=list)
    friendships: dict[UserId, FriendshipEdge] = field(default_factory=dict)
    friend_requests: dict[UserId, FriendRequestRecord] = field(default_factory=dict)
    threads: dict[ThreadKey, list[Message]] = field(default_factory=dict)

    def find_user_by_name(self, username: str) -> User | None:
        return next((u for u in self.users.values() if u.username == username), None)

    def find_post(self, post_id: str) -> Post | None:
        return next((p for p in self.posts if p.id == post_id), None)

    def friendship(self, user_id: UserId) -> FriendshipEdge:
        """Get-or-create the friendship edge for a user."""
        edge = self.friendships.get(user_id)
        if edge is None:
            edge = FriendshipEdge(user_id=user_id)
            self.friendships[user_id] = edge
        return edge

    def requests(self, user_id: UserId) -> FriendRequestRecord:
        """Get-or-create the friend request record for a user."""
        record = self.friend_requests.get(user_id)
        if record is None:
            record = FriendRequestRecord(user_id=user_id)
            self.friend_requests[user_id] = record
        return record

    def to_dict(self) -> dict[str, Any]:
        return {
            "users": [u.to_dict() for u in self.users.values()],
            "posts": [p.to_dict() for p in self.posts],
            "friends": [e.to_dict() for e in self.friendships.values()],
            "friendRequests": [r.to_dict() for r in self.friend_requests.values()],
            "messages": {
                key: [m.to_dict() for m in messages]
                for key, messages in self.threads.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        if not isinstance(data, dict):
            raise ValueError("store document must be a JSON object")

        snapshot = cls()
        for raw in data.get("users", []):
            user = User.from_dict(raw)
            snapshot.users[user.id] = user
        snapshot.posts = [Post.from_dict(raw) for raw in data.get("posts", [])]
        for raw in data.get("friends", []):
            edge = FriendshipEdge.from_dict(raw)
            snapshot.friendships[edge.user_id] = edge
        for raw in data.get("friendRequests", []):
            record = FriendRequestRecord.from_dict(raw)
            snapshot.friend_requests[record.user_id] = record

        messages = data.get("messages", {})
        if not isinstance(messages, dict):
            raise ValueError("messages must be a JSON object")
        for key, raw_messages in messages.items():
            # Legacy per-user placeholders are objects, not threads
            if not isinstance(raw_messages, list):
                logger.debug("skipping_non_thread_entry", extra={"thread.key": key})
                continue
            thread = [Message.from_dict(m) for m in raw_messages]
            key = _rekey_legacy_thread(key, snapshot.users)
            if key in snapshot.threads:
                merged = snapshot.threads[key] + thread
                merged.sort(key=lambda m: m.created_at)
                thread = merged
            snapshot.threads[key] = thread
        return snapshot


def _rekey_legacy_thread(key: str, users: dict[UserId, User]) -> ThreadKey:
    """Map an underscore-joined pair of known user ids onto ``thread_key``.

    Keys that already use the current separator, or whose halves are not
    both known users, are returned unchanged.
    """
    if THREAD_KEY_SEPARATOR in key:
        return key
    start = 0
    while (i := key.find(LEGACY_THREAD_KEY_SEPARATOR, start)) != -1:
        first, second = key[:i], key[i + 1 :]
        if first in users and second in users and first != second:
            return thread_key(first, second)
        start = i + 1
    return key


def _unique(ids: list[Any]) -> list[UserId]:
    """Order-preserving de-duplication."""
    return list(dict.fromkeys(str(i) for i in ids))


def _parse_dt(value: Any) -> datetime:
    if isinstance(value, int | float):
        # Epoch milliseconds
        return datetime.fromtimestamp(value / 1000, UTC)
    if not value:
        return datetime.fromtimestamp(0, UTC)
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return datetime.fromtimestamp(0, UTC)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
