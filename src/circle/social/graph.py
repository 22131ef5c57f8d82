"""Friend graph operations.

Invariants maintained by every mutation here:

- symmetry: B in friends(A) <=> A in friends(B), and nobody befriends themselves
- mirror consistency: B in sent(A) <=> A in received(B)

Records are materialized lazily through ``Snapshot.friendship`` and
``Snapshot.requests``. Read paths use ``dict.get`` so they never write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from circle.errors import InvalidTarget, UserNotFound
from circle.store.types import Snapshot, UserId

logger = logging.getLogger(__name__)


def resolve_public_views(snapshot: Snapshot, user_ids: list[UserId]) -> list[dict[str, Any]]:
    """Public views for ids that still resolve, in the given order."""
    views = []
    for user_id in user_ids:
        user = snapshot.users.get(user_id)
        if user is None:
            logger.debug("dangling_user_reference", extra={"user.id": user_id})
            continue
        views.append(user.public_view())
    return views


def friend_ids(snapshot: Snapshot, actor: UserId) -> list[UserId]:
    edge = snapshot.friendships.get(actor)
    return list(edge.friends) if edge else []


def list_friends(snapshot: Snapshot, actor: UserId) -> list[dict[str, Any]]:
    return resolve_public_views(snapshot, friend_ids(snapshot, actor))


def list_requests(snapshot: Snapshot, actor: UserId) -> dict[str, list[UserId]]:
    record = snapshot.friend_requests.get(actor)
    if record is None:
        return {"sent": [], "received": []}
    return {"sent": list(record.sent), "received": list(record.received)}


def send_request(snapshot: Snapshot, actor: UserId, target: UserId) -> None:
    """Record a pending request from ``actor`` to ``target``.

    Idempotent. A pending request in the opposite direction is left alone;
    both may coexist until one side accepts or declines. Requests to an
    existing friend are no-ops so a pair is never both pending and friends.
    """
    if target == actor:
        raise InvalidTarget("Cannot send a friend request to yourself")
    if target not in snapshot.users:
        raise UserNotFound()
    if target in friend_ids(snapshot, actor):
        return

    mine = snapshot.requests(actor)
    theirs = snapshot.requests(target)
    if target not in mine.sent:
        mine.sent.append(target)
    if actor not in theirs.received:
        theirs.received.append(actor)


def _clear_request(snapshot: Snapshot, actor: UserId, sender: UserId) -> None:
    mine = snapshot.requests(actor)
    theirs = snapshot.requests(sender)
    mine.received = [uid for uid in mine.received if uid != sender]
    theirs.sent = [uid for uid in theirs.sent if uid != actor]


def accept_request(snapshot: Snapshot, actor: UserId, sender: UserId) -> None:
    """Clear the pending request and establish the friendship both ways.

    Accepting a request that does not exist still befriends the pair, as
    long as the sender is a different user. A reverse request pending from
    ``actor`` to ``sender`` is cleared too.
    """
    if sender == actor:
        raise InvalidTarget("Cannot befriend yourself")

    _clear_request(snapshot, actor, sender)
    _clear_request(snapshot, sender, actor)

    mine = snapshot.friendship(actor)
    theirs = snapshot.friendship(sender)
    if sender not in mine.friends:
        mine.friends.append(sender)
    if actor not in theirs.friends:
        theirs.friends.append(actor)


def decline_request(snapshot: Snapshot, actor: UserId, sender: UserId) -> None:
    """Drop the pending request in both records. No-op if absent."""
    if sender == actor:
        return
    mine = snapshot.friend_requests.get(actor)
    theirs = snapshot.friend_requests.get(sender)
    if (mine is None or sender not in mine.received) and (
        theirs is None or actor not in theirs.sent
    ):
        return
    _clear_request(snapshot, actor, sender)


# ---------------------------------------------------------------------------
# Audit and repair
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """One broken graph invariant."""

    kind: str
    user_id: UserId
    other_id: UserId

    def describe(self) -> str:
        templates = {
            "self_friend": "{a} is listed as their own friend",
            "asymmetric_friend": "{b} is a friend of {a} but not the reverse",
            "self_request": "{a} has a pending request to themselves",
            "unmirrored_sent": "{a} sent to {b} but {b} has no received entry",
            "unmirrored_received": "{a} received from {b} but {b} has no sent entry",
            "pending_between_friends": "{a} and {b} are friends with a request pending",
        }
        return templates[self.kind].format(a=self.user_id, b=self.other_id)


def check_graph(snapshot: Snapshot) -> list[Violation]:
    """Audit friendship symmetry and request mirror consistency."""
    violations: list[Violation] = []

    for user_id, edge in snapshot.friendships.items():
        for other in edge.friends:
            if other == user_id:
                violations.append(Violation("self_friend", user_id, other))
            elif user_id not in friend_ids(snapshot, other):
                violations.append(Violation("asymmetric_friend", user_id, other))

    for user_id, record in snapshot.friend_requests.items():
        friends = set(friend_ids(snapshot, user_id))
        for other in record.sent:
            if other == user_id:
                violations.append(Violation("self_request", user_id, other))
                continue
            counterpart = snapshot.friend_requests.get(other)
            if counterpart is None or user_id not in counterpart.received:
                violations.append(Violation("unmirrored_sent", user_id, other))
            if other in friends:
                violations.append(Violation("pending_between_friends", user_id, other))
        for other in record.received:
            if other == user_id:
                violations.append(Violation("self_request", user_id, other))
                continue
            counterpart = snapshot.friend_requests.get(other)
            if counterpart is None or user_id not in counterpart.sent:
                violations.append(Violation("unmirrored_received", user_id, other))

    return violations


def repair_graph(snapshot: Snapshot) -> int:
    """Restore the invariants in place and return the number of fixes.

    One-sided friendships and requests gain their missing half; self
    references and requests between existing friends are dropped.
    """
    fixes = 0
    for violation in check_graph(snapshot):
        a, b = violation.user_id, violation.other_id
        if violation.kind == "self_friend":
            edge = snapshot.friendship(a)
            edge.friends = [uid for uid in edge.friends if uid != a]
        elif violation.kind == "asymmetric_friend":
            edge = snapshot.friendship(b)
            if a not in edge.friends:
                edge.friends.append(a)
        elif violation.kind == "self_request":
            record = snapshot.requests(a)
            record.sent = [uid for uid in record.sent if uid != a]
            record.received = [uid for uid in record.received if uid != a]
        elif violation.kind == "unmirrored_sent":
            record = snapshot.requests(b)
            if a not in record.received:
                record.received.append(a)
        elif violation.kind == "unmirrored_received":
            record = snapshot.requests(b)
            if a not in record.sent:
                record.sent.append(a)
        elif violation.kind == "pending_between_friends":
            _clear_request(snapshot, b, a)
        fixes += 1

    if fixes:
        logger.info("graph_repaired", extra={"graph.fixes": fixes})
    return fixes
