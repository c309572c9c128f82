"""Tests for shared/config.py."""

from unittest.mock import patch
import os

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        settings = Settings()
        assert settings.app_name == "Fefo"
        assert settings.debug is False
        assert settings.app_version == "0.1.0"
        assert settings.log_level == "INFO"

    def test_domain_defaults(self):
        """Validation and event limits should match the product rules."""
        settings = Settings()
        assert settings.institutional_email_domain == "@berkeley.edu"
        assert settings.min_username_length == 3
        assert settings.max_username_length == 20
        assert settings.min_password_length == 8
        assert settings.comment_max_length == 280
        assert settings.max_event_tags == 4
        assert settings.ending_soon_minutes == 15
        assert settings.campus_timezone == "America/Los_Angeles"
        assert "admin" in settings.reserved_usernames
        assert "fefo" in settings.reserved_usernames

    def test_campus_box_contains_campus(self):
        """The default campus box should contain central campus."""
        settings = Settings()
        assert settings.campus_min_latitude < 37.8719 < settings.campus_max_latitude
        assert settings.campus_min_longitude < -122.2585 < settings.campus_max_longitude

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "MAX_EVENT_TAGS": "6"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.max_event_tags == 6

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "SUPABASE_JWT_SECRET": "test-jwt-secret",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.supabase_jwt_secret == "test-jwt-secret"


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
