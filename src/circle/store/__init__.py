"""Store: the whole-database snapshot and its persistence.

Public API:
- SocialStore: serialized load/apply/persist over one JSON document
- StorePersistence: atomic JSON read/write

Types:
- Snapshot, User, Post, Comment, FriendshipEdge, FriendRequestRecord, Message
"""

from circle.store.persistence import StorePersistence, hydrate_snapshot
from circle.store.store import SocialStore
from circle.store.types import (
    AuthorSnapshot,
    Comment,
    FriendRequestRecord,
    FriendshipEdge,
    Message,
    MessageKind,
    Post,
    Snapshot,
    ThreadKey,
    User,
    UserId,
)

__all__ = [
    "AuthorSnapshot",
    "Comment",
    "FriendRequestRecord",
    "FriendshipEdge",
    "Message",
    "MessageKind",
    "Post",
    "Snapshot",
    "SocialStore",
    "StorePersistence",
    "ThreadKey",
    "User",
    "UserId",
    "hydrate_snapshot",
]
