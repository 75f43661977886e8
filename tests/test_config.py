# tests/test_config.py
import config


def test_secrets_win_over_environment(monkeypatch):
    monkeypatch.setattr(config, "_secrets", lambda: {"DATABASE_URL": "sqlite:///secret.db"})
    monkeypatch.setenv("DATABASE_URL", "sqlite:///env.db")
    assert config.get_setting("DATABASE_URL") == "sqlite:///secret.db"


def test_environment_wins_over_defaults(monkeypatch):
    monkeypatch.setattr(config, "_secrets", lambda: {})
    monkeypatch.setenv("PULSEBOARD_LOG_LEVEL", "DEBUG")
    assert config.get_setting("PULSEBOARD_LOG_LEVEL") == "DEBUG"


def test_defaults_when_nothing_is_set(monkeypatch):
    monkeypatch.setattr(config, "_secrets", lambda: {})
    monkeypatch.delenv("PULSEBOARD_UPLOAD_DIR", raising=False)
    assert config.get_setting("PULSEBOARD_UPLOAD_DIR") == "uploads"
    assert config.get_setting("PULSEBOARD_UPLOAD_DIR", "elsewhere") == "elsewhere"
    assert config.get_setting("UNKNOWN_SETTING") is None
