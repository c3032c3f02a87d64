"""
Dev Editor — Health Check Route
================================

What:  Reports whether the API is up, whether the editor routes are mounted,
       and which managed directories exist.
Who:   Called by the editor page on load to show a "dev API offline" banner.

Status levels:
    - healthy:   content directory present
    - degraded:  content directory missing (project_root likely misconfigured)

Image and data directories are created on first use, so a missing one is
reported but does not degrade the status.
"""

import logging
import time

from fastapi import APIRouter, Depends

from dev_editor import __version__
from dev_editor.config import Settings
from dev_editor.dependencies import get_settings
from dev_editor.schemas.editor import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    directories = {
        "content": settings.content_dir,
        "data": settings.data_dir,
        "gallery": settings.gallery_dir,
        "memes": settings.memes_dir,
    }
    report = {name: "present" if path.is_dir() else "missing" for name, path in directories.items()}

    overall = "healthy"
    if report["content"] == "missing":
        overall = "degraded"
        logger.warning("Health check: content directory missing: %s", settings.content_dir)

    return HealthResponse(
        status=overall,
        version=__version__,
        environment=settings.environment,
        editor_enabled=settings.editor_enabled,
        directories=report,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
