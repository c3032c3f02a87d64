"""
Dev Editor — Settings Unit Tests
=================================

Test Strategy:
    ✅ Defaults describe a stock site checkout
    ✅ Comma-separated settings split into lists
    ✅ Derived directories hang off project_root
    ✅ Invalid values are rejected at load time
"""

import pytest
from pydantic import ValidationError as SettingsValidationError

from dev_editor.config import Settings


class TestSettings:
    """Tests for Settings parsing and derived values."""

    def test_defaults(self, project_root):
        settings = Settings(project_root=project_root, _env_file=None)

        assert settings.allowed_collections_list == ["books", "games", "blog"]
        assert settings.jpeg_quality == 92
        assert settings.max_upload_size == 25 * 1024 * 1024
        assert settings.editor_enabled is True

    def test_derived_directories(self, project_root):
        settings = Settings(project_root=project_root, _env_file=None)
        root = project_root.resolve()

        assert settings.content_dir == root / "src" / "content"
        assert settings.data_dir == root / "src" / "data"
        assert settings.gallery_dir == root / "public" / "gallery"
        assert settings.memes_dir == root / "public" / "memes"
        assert settings.gallery_config_path == root / "src" / "data" / "gallery-config.json"
        assert settings.memes_config_path == root / "src" / "data" / "memes-config.json"

    def test_custom_subdirectories(self, project_root):
        settings = Settings(
            project_root=project_root,
            content_subdir="content",
            gallery_subdir="photos",
            _env_file=None,
        )
        assert settings.content_dir == project_root.resolve() / "content"
        assert settings.gallery_dir == project_root.resolve() / "public" / "photos"

    def test_list_parsing_strips_blanks(self, project_root):
        settings = Settings(
            project_root=project_root,
            allowed_collections=" blog, ,notes ",
            cors_origins="http://localhost:4321, http://127.0.0.1:4321,",
            _env_file=None,
        )
        assert settings.allowed_collections_list == ["blog", "notes"]
        assert settings.cors_origins_list == ["http://localhost:4321", "http://127.0.0.1:4321"]

    def test_environment_normalized(self, project_root):
        settings = Settings(project_root=project_root, environment=" Production ", _env_file=None)
        assert settings.environment == "production"
        assert settings.editor_enabled is False

    def test_log_level_uppercased(self, project_root):
        assert Settings(project_root=project_root, log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self, project_root):
        with pytest.raises(SettingsValidationError, match="Invalid log_level"):
            Settings(project_root=project_root, log_level="LOUD", _env_file=None)

    @pytest.mark.parametrize("quality", [0, 101])
    def test_jpeg_quality_range(self, project_root, quality):
        with pytest.raises(SettingsValidationError):
            Settings(project_root=project_root, jpeg_quality=quality, _env_file=None)

    def test_env_var_override(self, project_root, monkeypatch):
        monkeypatch.setenv("ALLOWED_COLLECTIONS", "notes")
        monkeypatch.setenv("JPEG_QUALITY", "70")
        settings = Settings(project_root=project_root, _env_file=None)

        assert settings.allowed_collections_list == ["notes"]
        assert settings.jpeg_quality == 70
