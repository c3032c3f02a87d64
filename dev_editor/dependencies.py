"""
Dev Editor — Service Wiring & FastAPI Dependencies
===================================================

What:  Builds every service from a Settings object and exposes them to
       route handlers through FastAPI's Depends() system.
How:   `build_services()` runs once in the app factory and the result is
       stored on `app.state.services`; the getters below read it back from
       the current request. Tests get fully isolated services by passing
       their own Settings to `create_app()`.
"""

from dataclasses import dataclass

from fastapi import Request

from dev_editor.config import Settings
from dev_editor.services.content_service import ContentService
from dev_editor.services.data_service import JsonDocument
from dev_editor.services.image_converter import ImageConverter
from dev_editor.services.media_service import ImageLibrary


@dataclass
class EditorServices:
    content: ContentService
    gallery: ImageLibrary
    memes: ImageLibrary
    gallery_config: JsonDocument
    memes_config: JsonDocument
    converter: ImageConverter


def build_services(settings: Settings) -> EditorServices:
    return EditorServices(
        content=ContentService(
            project_root=settings.project_root,
            content_dir=settings.content_dir,
            allowed_collections=settings.allowed_collections_list,
        ),
        gallery=ImageLibrary(
            name="gallery",
            directory=settings.gallery_dir,
            url_prefix=f"/{settings.gallery_subdir}/",
            label="gallery images",
            max_upload_size=settings.max_upload_size,
        ),
        memes=ImageLibrary(
            name="memes",
            directory=settings.memes_dir,
            url_prefix=f"/{settings.memes_subdir}/",
            label="meme images",
            max_upload_size=settings.max_upload_size,
        ),
        gallery_config=JsonDocument(settings.gallery_config_path),
        memes_config=JsonDocument(settings.memes_config_path),
        converter=ImageConverter(
            quality=settings.jpeg_quality,
            max_size=settings.max_upload_size,
        ),
    )


# ── Request Dependencies ──────────────────────────────────────────────────

def get_services(request: Request) -> EditorServices:
    return request.app.state.services


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
