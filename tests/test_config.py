"""
Tests for blogcms/core/config.py - environment driven settings.
"""
from unittest.mock import patch

from blogcms.core.config import Settings


class TestSettingsFromEnv:

    @patch("blogcms.core.config.load_dotenv")
    def test_defaults(self, mock_load_dotenv, monkeypatch):
        for name in ("DATABASE_URL", "MONGO_DB_NAME", "MAX_UPLOAD_BYTES", "BLOG_REQUIRE_ENGLISH", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        mock_load_dotenv.assert_called_once()
        assert settings.mongo_uri == "mongodb://localhost:27017"
        assert settings.mongo_db_name == "blogcms"
        assert settings.max_upload_bytes == 50 * 1024 * 1024
        assert settings.image_max_width == 800
        assert settings.image_max_height == 600
        assert settings.require_english is False
        assert settings.cors_origins == ["*"]

    @patch("blogcms.core.config.load_dotenv")
    def test_reads_environment(self, mock_load_dotenv, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "mongodb+srv://user:pw@cluster.example.net")
        monkeypatch.setenv("MONGO_DB_NAME", "prod")
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "my-cloud")
        monkeypatch.setenv("IMAGE_MAX_WIDTH", "2000")
        monkeypatch.setenv("IMAGE_MAX_HEIGHT", "2000")
        monkeypatch.setenv("DEEPL_API_KEY", "abc:fx")
        monkeypatch.setenv("TRANSLATE_TIMEOUT", "2.5")
        monkeypatch.setenv("BLOG_REQUIRE_ENGLISH", "true")
        monkeypatch.setenv("CORS_ORIGINS", "https://example.com, http://localhost:5173")

        settings = Settings.from_env()

        assert settings.mongo_uri == "mongodb+srv://user:pw@cluster.example.net"
        assert settings.mongo_db_name == "prod"
        assert settings.cloudinary_cloud_name == "my-cloud"
        assert settings.image_max_width == 2000
        assert settings.image_max_height == 2000
        assert settings.deepl_api_key == "abc:fx"
        assert settings.translate_timeout == 2.5
        assert settings.require_english is True
        assert settings.cors_origins == ["https://example.com", "http://localhost:5173"]
