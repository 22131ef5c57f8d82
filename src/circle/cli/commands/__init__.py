"""CLI command modules."""

from circle.cli.commands import doctor, init, serve, users

__all__ = [
    "doctor",
    "init",
    "serve",
    "users",
]
