"""Circle: friends, feed and direct messages over a single JSON store."""

__version__ = "0.1.0"
