"""Tests for required configuration checks."""

from unittest.mock import patch

import pytest

from app.config import ConfigurationError, Settings, check_required_settings


class TestRequiredSettings:
    def test_passes_when_present(self):
        check_required_settings(Settings(DATABASE_URL="sqlite://", SECRET_KEY="s3cret"))

    def test_reports_every_missing_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            check_required_settings(Settings(DATABASE_URL="", SECRET_KEY=""))
        assert exc_info.value.missing == ["DATABASE_URL", "SECRET_KEY"]

    def test_entry_point_exits_with_status_one(self):
        from app.__main__ import main

        with patch("app.__main__.check_required_settings", side_effect=ConfigurationError(["SECRET_KEY"])), \
             patch("app.__main__.uvicorn.run") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    def test_entry_point_serves_when_configured(self):
        from app.__main__ import main

        with patch("app.__main__.check_required_settings"), patch("app.__main__.uvicorn.run") as mock_run:
            main()
        mock_run.assert_called_once()


class TestAllowedOrigins:
    def test_frontend_url_is_appended(self):
        settings = Settings(CORS_ORIGINS=["http://a.test"], FRONTEND_URL="http://b.test")
        assert settings.allowed_origins == ["http://a.test", "http://b.test"]

    def test_no_duplicates(self):
        settings = Settings(CORS_ORIGINS=["http://a.test"], FRONTEND_URL="http://a.test")
        assert settings.allowed_origins == ["http://a.test"]
