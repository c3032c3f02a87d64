"""
Dev Editor — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for each way an editor request can fail.
How:   Each exception carries a client-facing message and an optional context
       dict. Global exception handlers (registered in main.py) map each class
       to its HTTP status code and a JSON `{"error": ...}` body.
Who:   Raised by services; caught only by the global handlers.

Exception Hierarchy:
    DevEditorError (base)
    ├── ValidationError        → 400 Bad Request
    ├── ForbiddenError         → 403 Forbidden (path outside an allowed directory)
    ├── NotFoundError          → 404 Not Found
    ├── ConflictError          → 409 Conflict (file already exists)
    ├── FileStorageError       → 500 Internal Server Error
    └── ImageConversionError   → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class DevEditorError(Exception):
    """
    Base exception for all dev editor errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        context:  Additional debug info (logged; only validation errors return it)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DevEditorError):
    """
    Raised when client input fails validation.

    When:    Unknown collection, empty slug, bad filename or MIME type,
             undecodable base64, oversized upload.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ForbiddenError(DevEditorError):
    """
    Raised when a requested path resolves outside the directory it must stay in.

    When:    Saving outside the content directory, deleting outside an image
             library, `../` traversal, symlinks escaping the base.
    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Invalid path",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DevEditorError):
    """
    Raised when a file the client names does not exist.

    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "File not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(DevEditorError):
    """
    Raised when creating a content file whose target already exists.

    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "File already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class FileStorageError(DevEditorError):
    """
    Raised when file system operations fail.

    When:    Disk full, permission denied, parent directory missing, I/O error.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ImageConversionError(DevEditorError):
    """
    Raised when an image cannot be decoded or re-encoded.

    When:    HEIC payload is corrupt or in a format Pillow cannot open.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Image conversion failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
