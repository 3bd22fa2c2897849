import pytest

from invitation.config.settings import Settings


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", " https://api.example.com ")
    monkeypatch.setenv("RSVP_ENDPOINT", "/custom/rsvp")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.setenv("RSVP_PROXY_TARGET_BASE_URL", "backend.example.com")

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://api.example.com"
    assert settings.RSVP_ENDPOINT == "/custom/rsvp"
    assert settings.is_production is True
    assert settings.is_development is False
    assert settings.RSVP_PROXY_TARGET_BASE_URL == "backend.example.com"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("1", True),
        (" YES ", True),
        ("false", False),
        ("0", False),
        ("no", False),
        ("", None),
        ("sometimes", None),
    ],
)
def test_post_enabled_flag_parsing(monkeypatch, raw, expected):
    monkeypatch.setenv("RSVP_POST_ENABLED", raw)

    assert Settings(_env_file=None).RSVP_POST_ENABLED is expected


def test_defaults_describe_a_development_build(monkeypatch):
    for name in ("ENVIRONMENT", "API_BASE_URL", "RSVP_ENDPOINT", "RSVP_POST_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.is_development is True
    assert settings.api_base_url == ""
    assert settings.RSVP_POST_ENABLED is None
    assert settings.APP_ORIGIN == "http://localhost:8000"
