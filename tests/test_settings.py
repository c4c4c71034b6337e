import pytest
from pydantic import ValidationError

from facechase.config.settings import Settings, get_settings
from facechase.main import apply_overrides, build_parser


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("FACECHASE_VARIANT", "FACECHASE_DEBUG", "FACECHASE_MUTE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.variant == "collector_smooth"
    assert settings.high_score_key == "face_hc"
    assert settings.tuning.catch_distance == 45
    assert settings.tuning.initial_enemy_speed == 3.5
    assert settings.window.fps == 60
    assert settings.store_path.name == "store.json"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FACECHASE_VARIANT", "classic")
    monkeypatch.setenv("FACECHASE_TUNING__CATCH_DISTANCE", "30")
    monkeypatch.setenv("FACECHASE_WINDOW__WIDTH", "640")

    settings = Settings(_env_file=None)
    assert settings.variant == "classic"
    assert settings.tuning.catch_distance == 30
    assert settings.window.width == 640


def test_unknown_variant_is_rejected(monkeypatch):
    monkeypatch.setenv("FACECHASE_VARIANT", "turbo")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_cli_overrides():
    settings = Settings(_env_file=None)
    args = build_parser().parse_args(["--variant", "classic", "--width", "640", "--mute"])
    updated = apply_overrides(settings, args)

    assert updated.variant == "classic"
    assert updated.mute
    assert updated.window.width == 640
    assert updated.window.height == settings.window.height
    assert settings.variant == "collector_smooth"


def test_no_cli_flags_keeps_settings():
    settings = Settings(_env_file=None)
    assert apply_overrides(settings, build_parser().parse_args([])) is settings


def test_cli_rejects_unknown_variant():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--variant", "turbo"])
