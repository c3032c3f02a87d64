"""
Dev Editor — Pydantic Request/Response Schemas
===============================================

What:  The JSON contract between the in-browser editor and this API.
How:   Field names are snake_case in Python and camelCase on the wire
       (`filePath`, `mimeType`) through aliases; both spellings are accepted
       on input.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

_WIRE_CONFIG = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SaveRequest(BaseModel):
    """Body of POST /__dev-editor/save."""
    file_path: str = Field(alias="filePath", description="Project-relative path of the file to overwrite")
    content: str = Field(description="Full new file content")

    model_config = _WIRE_CONFIG


class CreateRequest(BaseModel):
    """Body of POST /__dev-editor/create."""
    collection: str = Field(description="Target content collection, e.g. 'blog'")
    slug: str = Field(description="File name stem; slugified before use")
    frontmatter: Dict[str, Any] = Field(default_factory=dict, description="Flat front-matter mapping")
    body: Optional[str] = Field(default="", description="Markdown body")


class UploadRequest(BaseModel):
    """Body of POST /__dev-editor/upload and /upload-meme."""
    filename: str = Field(description="Original file name; sanitized before use")
    data: str = Field(description="Base64 image bytes (a data: URL prefix is allowed)")
    mime_type: Optional[str] = Field(default=None, alias="mimeType")

    model_config = _WIRE_CONFIG


class DeleteRequest(BaseModel):
    """Body of DELETE /__dev-editor/delete and /delete-meme."""
    path: str = Field(description="Public URL path of the image, e.g. '/gallery/a.jpg'")


class ConvertRequest(BaseModel):
    """Body of POST /__dev-editor/convert-heic."""
    data: str = Field(description="Base64 HEIC/HEIF bytes")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SuccessResponse(BaseModel):
    success: bool = True


class CreateResponse(SuccessResponse):
    file_path: str = Field(alias="filePath", description="Project-relative path of the new file")

    model_config = _WIRE_CONFIG


class UploadResponse(SuccessResponse):
    path: str = Field(description="Public URL path of the stored image")


class ConvertResponse(SuccessResponse):
    data: str = Field(description="Base64 JPEG bytes")


class ContentResponse(BaseModel):
    """A content file split into its parts."""
    file_path: str = Field(alias="filePath")
    frontmatter: Dict[str, Any]
    body: str
    content: str = Field(description="Raw file text")

    model_config = _WIRE_CONFIG


class ImageEntry(BaseModel):
    filename: str
    path: str = Field(description="Public URL path")
    size: int = Field(description="Size in bytes")
    modified: str = Field(description="Last modification time, UTC ISO 8601")


class ImageListResponse(BaseModel):
    images: List[ImageEntry]


# ══════════════════════════════════════════════════════════════════════════
# Error & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for every non-2xx response.

    Example:
        {"error": "Invalid collection: poems", "details": {"field": "collection"}, "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str
    environment: str
    editor_enabled: bool = Field(description="Whether /__dev-editor routes are mounted")
    directories: Dict[str, str] = Field(description="Managed directory → present / missing")
    uptime_seconds: float
