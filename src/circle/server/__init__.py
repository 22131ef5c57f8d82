"""HTTP server for Circle."""

from circle.server.app import CircleServer, create_app
from circle.server.runner import ServerRunner

__all__ = [
    "CircleServer",
    "ServerRunner",
    "create_app",
]
