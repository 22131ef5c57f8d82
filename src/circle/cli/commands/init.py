"""Init command for creating an empty store document."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from circle.cli.console import fail, say


def register(app: typer.Typer) -> None:
    """Register the init command."""

    @app.command()
    def init(
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to store document (default: ~/.circle/db.json)",
            ),
        ] = None,
    ) -> None:
        """Create an empty store document if none exists."""
        from circle.config.paths import ensure_circle_home, get_store_path
        from circle.errors import StoreUnavailable
        from circle.store import SocialStore, StorePersistence

        if path:
            store_path = path.expanduser()
        else:
            ensure_circle_home()
            store_path = get_store_path()

        if store_path.exists():
            try:
                snapshot = StorePersistence(store_path).load()
            except StoreUnavailable as e:
                fail(f"Store unreadable: {e.message}")
            say(
                "note",
                f"Store already exists at {store_path} ({len(snapshot.users)} users)",
            )
            return

        asyncio.run(SocialStore(store_path).open())
        say("ok", f"Created store at {store_path}")
