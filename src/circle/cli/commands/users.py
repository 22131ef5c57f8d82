"""List registered users."""

from pathlib import Path
from typing import Annotated

import typer

from circle.cli.console import console, fail, say, table


def register(app: typer.Typer) -> None:
    """Register the users command."""

    @app.command()
    def users(
        store: Annotated[
            Path | None,
            typer.Option("--store", "-s", help="Path to store document"),
        ] = None,
    ) -> None:
        """Show registered users with friend and post counts."""
        from circle.config.paths import get_store_path
        from circle.errors import StoreUnavailable
        from circle.social.graph import friend_ids
        from circle.store import StorePersistence

        store_path = store.expanduser() if store else get_store_path()
        if not store_path.exists():
            say("warn", f"No store at {store_path}")
            return
        try:
            snapshot = StorePersistence(store_path).load()
        except StoreUnavailable as e:
            fail(f"Store unreadable: {e.message}")

        if not snapshot.users:
            say("warn", "No users found")
            return

        listing = table(
            "Users",
            ("ID", {"style": "dim", "max_width": 12}),
            ("Username", {"style": "cyan"}),
            ("Friends", {"justify": "right"}),
            ("Posts", {"justify": "right"}),
        )
        for user in snapshot.users.values():
            posts = sum(1 for p in snapshot.posts if p.author.author_id == user.id)
            listing.add_row(
                user.id,
                user.username,
                str(len(friend_ids(snapshot, user.id))),
                str(posts),
            )
        console.print(listing)
