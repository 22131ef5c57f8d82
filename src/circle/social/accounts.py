"""Accounts and identity resolution.

Credential checking is delegated to an ``Authenticator``. The default one
compares stored secrets in constant time; stronger schemes plug in here.
"""

from __future__ import annotations

import hmac
import logging
import uuid
from collections.abc import Mapping
from typing import Protocol

from circle.errors import (
    InvalidCredentials,
    MissingField,
    Unauthenticated,
    UsernameTaken,
    UserNotFound,
)
from circle.store.types import Snapshot, User, UserId, display_glyph

logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    """Verifies a username/secret pair against the known users."""

    def verify(
        self, users: Mapping[UserId, User], username: str, secret: str
    ) -> UserId | None: ...


class PlaintextAuthenticator:
    """Compares the supplied secret with the stored one."""

    def verify(
        self, users: Mapping[UserId, User], username: str, secret: str
    ) -> UserId | None:
        for user in users.values():
            if user.username != username:
                continue
            if hmac.compare_digest(user.secret.encode(), secret.encode()):
                return user.id
            return None
        return None


def register(snapshot: Snapshot, username: str | None, secret: str | None) -> User:
    if not username or not secret:
        raise MissingField("Username and password are required")
    if snapshot.find_user_by_name(username) is not None:
        raise UsernameTaken()

    user = User(
        id=uuid.uuid4().hex,
        username=username,
        secret=secret,
        display_glyph=display_glyph(username),
    )
    snapshot.users[user.id] = user
    logger.info("user_registered", extra={"user.id": user.id})
    return user


def login(
    snapshot: Snapshot,
    username: str | None,
    secret: str | None,
    authenticator: Authenticator,
) -> User:
    if not username or not secret:
        raise InvalidCredentials()
    user_id = authenticator.verify(snapshot.users, username, secret)
    user = snapshot.users.get(user_id) if user_id else None
    if user is None:
        raise InvalidCredentials()
    return user


def resolve_user(snapshot: Snapshot, user_id: UserId | None) -> User:
    if not user_id:
        raise Unauthenticated("No user id")
    user = snapshot.users.get(user_id)
    if user is None:
        raise UserNotFound()
    return user


def update_avatar(snapshot: Snapshot, actor: UserId, avatar_image: str | None) -> str:
    if not avatar_image:
        raise MissingField("No image supplied")
    user = resolve_user(snapshot, actor)
    user.avatar_image = avatar_image
    return avatar_image
