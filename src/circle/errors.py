"""Typed errors raised by store and social operations.

Every error carries an HTTP-equivalent ``status_code`` and a stable ``code``
so the server can map it to a response without inspecting messages.
"""

from __future__ import annotations


class CircleError(Exception):
    """Base class for expected operation failures."""

    status_code = 500
    code = "error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(CircleError):
    """A required field is missing or empty."""

    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"


class MissingField(ValidationError):
    code = "missing_field"
    default_message = "Required field is missing"


class EmptyPost(ValidationError):
    code = "empty_post"
    default_message = "Post must have text or an image"


class EmptyComment(ValidationError):
    code = "empty_comment"
    default_message = "Comment text is empty"


class EmptyPayload(ValidationError):
    code = "empty_payload"
    default_message = "Message payload is empty"


class InvalidTarget(ValidationError):
    code = "invalid_target"
    default_message = "Cannot target yourself"


class NotFoundError(CircleError):
    """A referenced entity does not exist."""

    status_code = 404
    code = "not_found"
    default_message = "Not found"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    default_message = "User not found"


class PostNotFound(NotFoundError):
    code = "post_not_found"
    default_message = "Post not found"


class ConflictError(CircleError):
    status_code = 409
    code = "conflict"
    default_message = "Conflict"


class UsernameTaken(ConflictError):
    code = "username_taken"
    default_message = "Username is already taken"


class Unauthenticated(CircleError):
    """Caller identity is missing or does not resolve."""

    status_code = 401
    code = "unauthenticated"
    default_message = "Not authenticated"


class InvalidCredentials(Unauthenticated):
    code = "invalid_credentials"
    default_message = "Invalid username or password"


class StoreUnavailable(CircleError):
    """The backing medium could not be read or written."""

    status_code = 500
    code = "store_unavailable"
    default_message = "Store unavailable"
