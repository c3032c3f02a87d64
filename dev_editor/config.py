"""
Dev Editor — Application Configuration
=======================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory and the `python -m dev_editor` entry point.
When:  Loaded once at module import time; tests build their own instances.

Directory layout (all relative to project_root):

    <project_root>/
    ├── src/content/<collection>/<slug>.md   ← Markdown collections
    ├── src/data/gallery-config.json         ← opaque gallery config
    ├── src/data/memes-config.json           ← opaque memes config
    └── public/
        ├── gallery/                         ← served as /gallery/<file>
        └── memes/                           ← served as /memes/<file>
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Defaults match a stock site checkout run from its root directory, so a
    bare `python -m dev_editor` inside the site repo needs no configuration.
    """

    # ── Site Layout ───────────────────────────────────────────────────────
    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Root of the site checkout; every managed path hangs off it",
    )
    content_subdir: str = Field(default="src/content")
    data_subdir: str = Field(default="src/data")
    public_subdir: str = Field(default="public")
    gallery_subdir: str = Field(default="gallery")
    memes_subdir: str = Field(default="memes")

    # What: Collections the create endpoint may write into (comma-separated)
    allowed_collections: str = Field(default="books,games,blog")

    # ── Uploads & Conversion ──────────────────────────────────────────────
    # Decoded image size limit. 25MB = 25 * 1024 * 1024
    max_upload_size: int = Field(default=26_214_400, ge=1_048_576, le=209_715_200)
    jpeg_quality: int = Field(default=92, ge=1, le=100)

    # ── Environment ───────────────────────────────────────────────────────
    # Editor routes are only mounted in development
    environment: str = Field(default="development")

    # ── CORS ──────────────────────────────────────────────────────────────
    # The site dev server runs on its own port, so the editor page is cross-origin
    cors_origins: str = Field(default="http://localhost:4321")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=4322, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("project_root")
    @classmethod
    def resolve_project_root(cls, v: Path) -> Path:
        return Path(v).expanduser().resolve()

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def allowed_collections_list(self) -> List[str]:
        return [name.strip() for name in self.allowed_collections.split(",") if name.strip()]

    @property
    def editor_enabled(self) -> bool:
        return self.environment == "development"

    # ── Derived Paths ─────────────────────────────────────────────────────
    @property
    def content_dir(self) -> Path:
        return (self.project_root / self.content_subdir).resolve()

    @property
    def data_dir(self) -> Path:
        return (self.project_root / self.data_subdir).resolve()

    @property
    def gallery_dir(self) -> Path:
        return (self.project_root / self.public_subdir / self.gallery_subdir).resolve()

    @property
    def memes_dir(self) -> Path:
        return (self.project_root / self.public_subdir / self.memes_subdir).resolve()

    @property
    def gallery_config_path(self) -> Path:
        return self.data_dir / "gallery-config.json"

    @property
    def memes_config_path(self) -> Path:
        return self.data_dir / "memes-config.json"


# Singleton instance used by the module-level app and the CLI entry point
settings = Settings()
