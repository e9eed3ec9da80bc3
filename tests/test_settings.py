from config import load_config
from utils.settings import load_settings_yaml, save_settings_yaml


def test_load_settings_missing_file_returns_empty(tmp_path):
    assert load_settings_yaml(str(tmp_path)) == {}


def test_settings_round_trip(tmp_path):
    save_settings_yaml({"DESCRIPTION_MAX_CHARS": 120}, str(tmp_path))
    assert load_settings_yaml(str(tmp_path)) == {"DESCRIPTION_MAX_CHARS": 120}


def test_broken_yaml_is_ignored(tmp_path):
    (tmp_path / "settings.yaml").write_text("key: [unclosed", encoding="utf-8")
    assert load_settings_yaml(str(tmp_path)) == {}


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DEBUG_MODE", "true")
    monkeypatch.setenv("DESCRIPTION_MAX_CHARS", "not-a-number")
    monkeypatch.setenv("GALL_DB_FILENAME", "test.db")

    config = load_config()

    assert config["DEBUG_MODE"] is True
    assert config["DESCRIPTION_MAX_CHARS"] == 400
    assert config["GALL_DB_FILENAME"] == "test.db"


def test_get_config_applies_yaml_overrides(tmp_path, monkeypatch):
    import config as config_module

    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    save_settings_yaml({"DESCRIPTION_MAX_CHARS": 50, "UNKNOWN_KEY": 1}, str(tmp_path))
    config_module.reset_config()
    try:
        cfg = config_module.get_config()
        assert cfg["DESCRIPTION_MAX_CHARS"] == 50
        assert "UNKNOWN_KEY" not in cfg
    finally:
        config_module.reset_config()


def test_invalid_yaml_values_fall_back_to_defaults(monkeypatch):
    from core import settings_core

    monkeypatch.setattr(
        settings_core,
        "get_config",
        lambda: {"DESCRIPTION_MAX_CHARS": "abc", "MAX_SEARCH_SESSIONS": None},
    )

    assert settings_core.get_description_max_chars() == 400
    assert settings_core.get_max_search_sessions() == 500


def test_numeric_strings_are_accepted(monkeypatch):
    from core import settings_core

    monkeypatch.setattr(
        settings_core,
        "get_config",
        lambda: {"DESCRIPTION_MAX_CHARS": "120", "MAX_SEARCH_SESSIONS": 0},
    )

    assert settings_core.get_description_max_chars() == 120
    assert settings_core.get_max_search_sessions() == 500
