import pytest
from iso_duration.config import get_settings


@pytest.fixture
def settings_env(monkeypatch):
    """ Returns a function that sets ISO_DURATION_ env vars and reloads the settings """
    def set_env(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"ISO_DURATION_{key.upper()}", value)
        get_settings.cache_clear()

    yield set_env
    monkeypatch.undo()
    get_settings.cache_clear()
