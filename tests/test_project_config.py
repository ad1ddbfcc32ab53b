from __future__ import annotations

import pytest

import project_config


@pytest.fixture
def custom_config(tmp_path, monkeypatch):
    path = tmp_path / "engines.toml"
    path.write_text('[motion]\nmax_nodes = 50\n\n[motion.extra]\nflag = true\n', "utf-8")
    monkeypatch.setenv(project_config.CONFIG_ENV_VAR, str(path))
    project_config.get_config.cache_clear()
    yield path
    monkeypatch.delenv(project_config.CONFIG_ENV_VAR)
    project_config.get_config.cache_clear()


def test_default_file_has_both_games() -> None:
    config = project_config.get_config()
    assert config["geosudo"]["grid_size"] == 4
    assert config["modules"]["motion"]["solver"]["impl"] == "motion.play"


def test_dotted_lookup() -> None:
    assert project_config.get_section("session.speed_multipliers.fast") == 1.5
    assert project_config.get_section("session.unknown", default=None) is None
    with pytest.raises(KeyError):
        project_config.get_section("session.unknown")


def test_env_override(custom_config) -> None:
    assert project_config.config_path() == custom_config.resolve()
    assert project_config.get_section("motion.max_nodes") == 50
    assert project_config.get_section("motion.extra.flag") is True
    assert project_config.get_section("geosudo", default={}) == {}


def test_missing_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(project_config.CONFIG_ENV_VAR, str(tmp_path / "absent.toml"))
    project_config.get_config.cache_clear()
    try:
        with pytest.raises(RuntimeError):
            project_config.get_config()
    finally:
        monkeypatch.delenv(project_config.CONFIG_ENV_VAR)
        project_config.get_config.cache_clear()
