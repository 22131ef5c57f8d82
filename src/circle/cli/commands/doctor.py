"""Store integrity checks for the friend graph."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from circle.cli.console import console, fail, say, table
from circle.errors import StoreUnavailable

if TYPE_CHECKING:
    from circle.social.graph import Violation


def register(app: typer.Typer) -> None:
    """Register the doctor command."""

    @app.command()
    def doctor(
        store: Annotated[
            Path | None,
            typer.Option("--store", "-s", help="Path to store document"),
        ] = None,
        fix: Annotated[
            bool,
            typer.Option("--fix", help="Repair one-sided friendships and requests"),
        ] = False,
    ) -> None:
        """Check friendship symmetry and request mirror consistency.

        A document that cannot be read is reported and left in place.
        """
        from circle.config.paths import get_store_path

        store_path = store.expanduser() if store else get_store_path()
        if not store_path.exists():
            fail(f"No store at {store_path}")

        try:
            violations, fixed = asyncio.run(_run(store_path, fix=fix))
        except StoreUnavailable as e:
            fail(f"Store unreadable: {e.message}")

        if fixed:
            say("ok", f"Repaired {fixed} issue(s)")
        if not violations:
            say("ok", f"Store OK: {store_path}")
            return

        _render(violations)
        fail(f"{len(violations)} issue(s) found. Run with --fix to repair.")


async def _run(store_path: Path, *, fix: bool) -> tuple[list[Violation], int]:
    from circle.service import SocialService
    from circle.social.graph import check_graph
    from circle.store import SocialStore, StorePersistence

    fixed = 0
    if fix:
        # mutate() raises on a corrupt document rather than replacing it
        service = SocialService(store=SocialStore(store_path))
        fixed = await service.repair_graph()
    return check_graph(StorePersistence(store_path).load()), fixed


def _render(violations: list[Violation]) -> None:
    issues = table("Graph Issues", ("Kind", {"style": "yellow"}), "Detail")
    for violation in violations:
        issues.add_row(violation.kind, violation.describe())
    console.print(issues)
