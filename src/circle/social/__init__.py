"""Social operations as functions over a store Snapshot.

Each mutating function edits the snapshot it is given and returns its
result; ``SocialService`` supplies a private copy inside the store's
critical section. Read functions never write.
"""

from circle.social import accounts, chats, feed, graph
from circle.social.accounts import Authenticator, PlaintextAuthenticator
from circle.social.chats import thread_key
from circle.social.graph import Violation, check_graph, repair_graph

__all__ = [
    "Authenticator",
    "PlaintextAuthenticator",
    "Violation",
    "accounts",
    "chats",
    "check_graph",
    "feed",
    "graph",
    "repair_graph",
    "thread_key",
]
