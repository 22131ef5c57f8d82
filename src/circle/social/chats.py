"""Two-party chat threads.

A thread is addressed by the unordered pair of its participants. Messages
are append-only and keep creation order.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from circle.errors import EmptyPayload, InvalidTarget
from circle.social.graph import friend_ids
from circle.store.types import (
    Message,
    MessageKind,
    Snapshot,
    ThreadKey,
    UserId,
    thread_key,
    utcnow,
)

logger = logging.getLogger(__name__)


def _peer_thread_key(actor: UserId, peer: UserId) -> ThreadKey:
    try:
        return thread_key(actor, peer)
    except ValueError as e:
        raise InvalidTarget(f"Invalid chat peer: {e}") from e


def list_messages(snapshot: Snapshot, actor: UserId, peer: UserId) -> list[Message]:
    return list(snapshot.threads.get(_peer_thread_key(actor, peer), []))


def list_chats(snapshot: Snapshot, actor: UserId) -> list[dict[str, Any]]:
    """One entry per resolvable friend with the thread's last message."""
    chats = []
    for friend_id in friend_ids(snapshot, actor):
        friend = snapshot.users.get(friend_id)
        if friend is None:
            continue
        try:
            key = thread_key(actor, friend_id)
        except ValueError:
            logger.debug("unaddressable_friend", extra={"user.id": friend_id})
            continue
        thread = snapshot.threads.get(key, [])
        chats.append(
            {
                "friend": friend.public_view(),
                "lastMessage": thread[-1] if thread else None,
            }
        )
    return chats


def _append(
    snapshot: Snapshot,
    actor: UserId,
    peer: UserId,
    *,
    kind: MessageKind,
    text: str | None = None,
    audio_data: str | None = None,
) -> Message:
    if peer == actor:
        raise InvalidTarget("Cannot message yourself")
    key = _peer_thread_key(actor, peer)
    thread = snapshot.threads.setdefault(key, [])

    created_at = utcnow()
    if thread and thread[-1].created_at > created_at:
        # Clock went backwards; keep the thread non-decreasing
        created_at = thread[-1].created_at

    message = Message(
        id=uuid.uuid4().hex,
        sender_id=actor,
        kind=kind,
        created_at=created_at,
        text=text,
        audio_data=audio_data,
    )
    thread.append(message)
    logger.debug(
        "message_appended",
        extra={"thread.key": key, "message.kind": kind.value},
    )
    return message


def send_text_message(
    snapshot: Snapshot, actor: UserId, peer: UserId, text: str | None
) -> Message:
    if not text:
        raise EmptyPayload("Message text is empty")
    return _append(snapshot, actor, peer, kind=MessageKind.TEXT, text=text)


def send_voice_message(
    snapshot: Snapshot, actor: UserId, peer: UserId, audio_data: str | None
) -> Message:
    if not audio_data:
        raise EmptyPayload("Voice message has no audio")
    return _append(snapshot, actor, peer, kind=MessageKind.VOICE, audio_data=audio_data)
