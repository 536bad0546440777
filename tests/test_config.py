"""Tests for configuration management."""

import pytest

from exporter.config import Environment, Settings
from exporter.exceptions import ConfigurationError

_ENV_VARS = ("FLASK_ENV", "LATITUDE", "LONGITUDE", "RADIUS", "APIKEY", "PORT")


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_environment_defaults(clean_env):
    """Test Environment loads default values."""
    env = Environment(_env_file=None)

    assert env.FLASK_ENV == "development"
    assert env.LATITUDE == 51.575710
    assert env.LONGITUDE == 7.209179
    assert env.RADIUS == 2.0
    assert env.APIKEY == ""
    assert env.PORT == 2112


def test_environment_from_env_vars(monkeypatch):
    """Test Environment loads from environment variables."""
    monkeypatch.setenv("LATITUDE", "49.9929")
    monkeypatch.setenv("LONGITUDE", "8.2473")
    monkeypatch.setenv("RADIUS", "10")
    monkeypatch.setenv("APIKEY", "00000000-0000-0000-0000-000000000002")
    monkeypatch.setenv("SKIP_UNPRICED_FUELS", "false")

    env = Environment(_env_file=None)

    assert env.LATITUDE == 49.9929
    assert env.LONGITUDE == 8.2473
    assert env.RADIUS == 10.0
    assert env.APIKEY == "00000000-0000-0000-0000-000000000002"
    assert env.SKIP_UNPRICED_FUELS is False


def test_settings_load_maps_fields():
    """Test Settings.load() maps environment to lowercase settings."""
    env = Environment(
        _env_file=None,
        LATITUDE=50.0,
        LONGITUDE=8.0,
        RADIUS=4.5,
        APIKEY="key",
        FETCH_READ_TIMEOUT=3.0,
        VERIFY_TLS=False,
        PRIME_ON_STARTUP=False,
    )
    settings = Settings.load(env)

    assert settings.latitude == 50.0
    assert settings.longitude == 8.0
    assert settings.radius == 4.5
    assert settings.api_key == "key"
    assert settings.fetch_read_timeout == 3.0
    assert settings.verify_tls is False
    assert settings.prime_on_startup is False


def test_settings_extra_env_ignored(monkeypatch):
    """Extra environment variables should be ignored."""
    monkeypatch.setenv("SOME_UNRELATED_SETTING", "42")
    env = Environment(_env_file=None)
    assert not hasattr(env, "SOME_UNRELATED_SETTING")


def test_settings_is_production_property():
    assert Settings(flask_env="production").is_production is True
    assert Settings(flask_env="development").is_production is False


def test_masked_api_key():
    assert Settings(api_key="abcd1234-secret").masked_api_key == "abcd***"
    assert Settings(api_key="").masked_api_key == "<unset>"


def test_to_flask_config():
    assert Settings(flask_env="testing").to_flask_config().TESTING is True
    assert Settings(flask_env="production").to_flask_config().TESTING is False


class TestValidateConfig:
    """Tests for Settings.validate_config()."""

    def test_defaults_are_valid_outside_production(self):
        Settings().validate_config()

    def test_production_requires_api_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(flask_env="production").validate_config()

        assert "APIKEY" in str(exc_info.value)

    def test_production_with_api_key(self):
        Settings(flask_env="production", api_key="key").validate_config()

    @pytest.mark.parametrize("radius", [0.0, -1.0, 25.1])
    def test_radius_bounds(self, radius):
        with pytest.raises(ConfigurationError, match="RADIUS"):
            Settings(radius=radius).validate_config()

    def test_max_radius_allowed(self):
        Settings(radius=25.0).validate_config()

    def test_all_errors_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(latitude=100.0, longitude=-200.0, radius=0.0).validate_config()

        message = str(exc_info.value)
        assert "LATITUDE" in message
        assert "LONGITUDE" in message
        assert "RADIUS" in message
