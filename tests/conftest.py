"""Shared test fixtures and factories."""

from pathlib import Path

import pytest

from circle.config.paths import ENV_VAR, STORE_ENV_VAR, get_circle_home
from circle.service import SocialService, create_social_service
from circle.social import accounts
from circle.store import Snapshot, SocialStore, User

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def circle_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point CIRCLE_HOME at a temp dir so tests never touch ~/.circle."""
    home = tmp_path / "circle-home"
    monkeypatch.setenv(ENV_VAR, str(home))
    monkeypatch.delenv(STORE_ENV_VAR, raising=False)
    monkeypatch.delenv("CIRCLE_LOG_LEVEL", raising=False)
    get_circle_home.cache_clear()
    yield home
    get_circle_home.cache_clear()


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "db.json"


@pytest.fixture
async def service(store_path: Path) -> SocialService:
    return await create_social_service(store_path)


@pytest.fixture
def snapshot() -> Snapshot:
    return Snapshot()


def make_user(snapshot: Snapshot, username: str, secret: str = "pw") -> User:
    """Factory: register a user directly on a snapshot."""
    return accounts.register(snapshot, username, secret)


@pytest.fixture
def alice(snapshot: Snapshot) -> User:
    return make_user(snapshot, "alice")


@pytest.fixture
def bob(snapshot: Snapshot) -> User:
    return make_user(snapshot, "bob")


@pytest.fixture
def carol(snapshot: Snapshot) -> User:
    return make_user(snapshot, "carol")


# =============================================================================
# CLI Test Helpers
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def seeded_store(store_path: Path) -> Path:
    """A store document with two registered users."""
    import asyncio

    async def seed() -> None:
        store = SocialStore(store_path)
        await store.open()
        await store.mutate(lambda s: accounts.register(s, "alice", "pw"))
        await store.mutate(lambda s: accounts.register(s, "bob", "pw"))

    asyncio.run(seed())
    return store_path
