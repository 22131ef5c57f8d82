"""Tests for path management."""

from pathlib import Path

from circle.config.paths import (
    ENV_VAR,
    STORE_ENV_VAR,
    ensure_circle_home,
    get_circle_home,
    get_config_path,
    get_logs_path,
    get_store_path,
)


class TestGetCircleHome:
    """Tests for get_circle_home()."""

    def test_default_is_home_dot_circle(self, monkeypatch):
        monkeypatch.delenv(ENV_VAR, raising=False)
        get_circle_home.cache_clear()

        assert get_circle_home() == Path.home() / ".circle"

    def test_respects_env_var(self, monkeypatch, tmp_path):
        custom_path = tmp_path / "custom-circle"
        monkeypatch.setenv(ENV_VAR, str(custom_path))
        get_circle_home.cache_clear()

        assert get_circle_home() == custom_path.resolve()

    def test_expands_tilde_in_env_var(self, monkeypatch):
        monkeypatch.setenv(ENV_VAR, "~/my-circle")
        get_circle_home.cache_clear()

        assert get_circle_home() == (Path.home() / "my-circle").resolve()


class TestDerivedPaths:
    def test_paths_live_under_home(self, circle_home):
        home = get_circle_home()
        assert get_config_path() == home / "config.toml"
        assert get_store_path() == home / "db.json"
        assert get_logs_path() == home / "logs"

    def test_store_env_var_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(STORE_ENV_VAR, str(tmp_path / "elsewhere.json"))
        assert get_store_path() == tmp_path / "elsewhere.json"

    def test_ensure_home_creates_directory(self, circle_home):
        assert not circle_home.exists()
        assert ensure_circle_home().is_dir()
