"""Tests for roadmap.utils.config - YAML + environment settings."""

from pathlib import Path

import pytest

from roadmap.utils.config import RoadmapSettings, ENV_OVERRIDES, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Unset ROADMAP_* variables and restore them afterwards."""
    for name in ENV_OVERRIDES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def no_env_file(tmp_path: Path) -> Path:
    return tmp_path / "missing.env"


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path, no_env_file: Path):
        settings = load_settings(tmp_path / "missing.yaml", no_env_file)
        assert settings == RoadmapSettings()
        assert settings.initial_visible_steps == 5
        assert settings.steps_per_load == 5
        assert settings.user_id is None

    def test_yaml_values(self, tmp_path: Path, no_env_file: Path):
        config = tmp_path / "roadmap.yaml"
        config.write_text(
            "db_path: /tmp/r.db\nuser_id: demo\nsteps_per_load: 3\nlog_level: debug\n",
            encoding="utf-8",
        )
        settings = load_settings(config, no_env_file)
        assert settings.db_path == Path("/tmp/r.db")
        assert settings.user_id == "demo"
        assert settings.steps_per_load == 3
        assert settings.log_level == "DEBUG"

    def test_empty_yaml(self, tmp_path: Path, no_env_file: Path):
        config = tmp_path / "roadmap.yaml"
        config.write_text("", encoding="utf-8")
        assert load_settings(config, no_env_file) == RoadmapSettings()

    def test_environment_overrides_yaml(self, tmp_path: Path, no_env_file: Path, monkeypatch):
        config = tmp_path / "roadmap.yaml"
        config.write_text("user_id: demo\n", encoding="utf-8")
        monkeypatch.setenv("ROADMAP_USER", "alice")
        monkeypatch.setenv("ROADMAP_DB_PATH", "other.db")
        settings = load_settings(config, no_env_file)
        assert settings.user_id == "alice"
        assert settings.db_path == Path("other.db")

    def test_env_file(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_text("ROADMAP_USER=from-dotenv\n", encoding="utf-8")
        settings = load_settings(tmp_path / "missing.yaml", env_file)
        assert settings.user_id == "from-dotenv"

    def test_non_mapping_yaml(self, tmp_path: Path, no_env_file: Path):
        config = tmp_path / "roadmap.yaml"
        config.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_settings(config, no_env_file)

    def test_invalid_log_level(self, tmp_path: Path, no_env_file: Path, monkeypatch):
        monkeypatch.setenv("ROADMAP_LOG_LEVEL", "chatty")
        with pytest.raises(ValueError):
            load_settings(tmp_path / "missing.yaml", no_env_file)

    def test_window_must_be_positive(self):
        with pytest.raises(ValueError):
            RoadmapSettings(initial_visible_steps=0)
