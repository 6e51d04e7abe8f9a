"""
Tests for settings loading
"""
import pytest

import config.settings as settings_module
from config.settings import DEFAULT_DATA_FILE, load_settings


@pytest.fixture
def secrets(monkeypatch):
    sections = {}
    monkeypatch.setattr(settings_module, "_section", lambda name: sections.get(name, {}))
    return sections


class TestLoadSettings:

    def test_defaults(self, secrets):
        settings = load_settings(env={})
        assert settings.data_file == DEFAULT_DATA_FILE
        assert settings.storage_backend == "json"
        assert settings.inactivity_seconds == 3 * 60 * 60
        assert settings.table_page_size == 8
        assert settings.grid_page_size == 9
        assert settings.demo_email == "Deekibraa@gmail.com"
        assert settings.log_level == "INFO"

    def test_secrets_sections(self, secrets):
        secrets["storage"] = {"backend": "Supabase", "data_file": "/srv/farmers.json"}
        secrets["auth"] = {"inactivity_hours": 1}
        secrets["app"] = {"grid_page_size": 12}

        settings = load_settings(env={})
        assert settings.storage_backend == "supabase"
        assert settings.data_file == "/srv/farmers.json"
        assert settings.inactivity_seconds == 3600
        assert settings.grid_page_size == 12

    def test_environment_overrides_secrets(self, secrets):
        secrets["storage"] = {"data_file": "/srv/farmers.json"}
        settings = load_settings(env={
            "FARMERS_DATA_FILE": "/tmp/other.json",
            "FARMERS_STORAGE_BACKEND": "JSON",
            "FARMERS_LOG_LEVEL": "debug",
        })
        assert settings.data_file == "/tmp/other.json"
        assert settings.storage_backend == "json"
        assert settings.log_level == "DEBUG"
