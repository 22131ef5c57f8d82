"""Tests for configuration loading."""

from pathlib import Path

import pytest

from circle.config import (
    CircleConfig,
    ConfigError,
    get_default_config,
    get_store_path,
    load_config,
)
from circle.config.paths import STORE_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep a stray ./config.toml from leaking into the search path."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


class TestDefaults:
    def test_defaults(self):
        config = CircleConfig()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8080
        assert config.server.cors_origins == ["*"]
        assert config.store.path == get_store_path()
        assert config.logging.level == "INFO"
        assert config.logging.log_to_file is False

    def test_no_file_falls_back_to_defaults(self):
        assert load_config() == get_default_config()


class TestLoadConfig:
    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[server]\nport = 9000\ncors_origins = ["http://localhost:5173"]\n'
            '[store]\npath = "/srv/circle/db.json"\n'
            '[logging]\nlevel = "DEBUG"\n'
        )
        config = load_config(path)

        assert config.server.port == 9000
        assert config.server.cors_origins == ["http://localhost:5173"]
        assert config.store.path == Path("/srv/circle/db.json")
        assert config.logging.level == "DEBUG"

    def test_finds_file_in_current_directory(self, isolated_cwd: Path):
        (isolated_cwd / "config.toml").write_text("[server]\nport = 7000\n")
        assert load_config().server.port == 7000

    def test_finds_file_in_home(self, circle_home: Path):
        circle_home.mkdir(parents=True)
        (circle_home / "config.toml").write_text("[server]\nport = 7100\n")
        assert load_config().server.port == 7100

    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text("[server\nport = ")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "LOUD"\n')
        with pytest.raises(ConfigError):
            load_config(path)


class TestEnvOverrides:
    def test_store_path_env(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv(STORE_ENV_VAR, str(tmp_path / "env.json"))
        assert load_config().store.path == tmp_path / "env.json"

    def test_env_beats_file(self, monkeypatch, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[store]\npath = "/from/file.json"\n[logging]\nlevel = "ERROR"\n')
        monkeypatch.setenv(STORE_ENV_VAR, "/from/env.json")
        monkeypatch.setenv("CIRCLE_LOG_LEVEL", "debug")

        config = load_config(path)
        assert config.store.path == Path("/from/env.json")
        assert config.logging.level == "DEBUG"
