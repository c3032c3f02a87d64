"""
Dev Editor — Editor Route Handlers
===================================

What:  Every /__dev-editor/* endpoint used by the in-browser editor.
How:   Each handler validates its JSON body through a Pydantic schema, hands
       the values to one service call, and returns the service result.
       Failures are raised as application exceptions and formatted by the
       global handlers in main.py.

Route Inventory:
    POST   /save           overwrite a content file
    GET    /content        read a content file (front matter + body)
    POST   /create         create a new content file
    POST   /upload         store an image in the gallery
    POST   /upload-meme    store an image in the memes library
    DELETE /delete         delete a gallery image
    DELETE /delete-meme    delete a meme image
    GET    /list-images    list gallery images
    GET    /list-memes     list meme images
    POST   /convert-heic   HEIC → JPEG (base64 in, base64 out)
    GET    /gallery        read the gallery config
    POST   /gallery        write the gallery config
    GET    /memes          read the memes config
    POST   /memes          write the memes config
    *      anything else   404 Unknown endpoint
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query

from dev_editor.dependencies import EditorServices, get_services
from dev_editor.exceptions import NotFoundError
from dev_editor.schemas.editor import (
    ContentResponse,
    ConvertRequest,
    ConvertResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    ErrorResponse,
    ImageListResponse,
    SaveRequest,
    SuccessResponse,
    UploadRequest,
    UploadResponse,
)

logger = logging.getLogger(__name__)

PREFIX = "/__dev-editor"

router = APIRouter(prefix=PREFIX, tags=["Dev Editor"])

_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    403: {"description": "Path outside the allowed directory", "model": ErrorResponse},
    404: {"description": "File not found", "model": ErrorResponse},
    500: {"description": "Filesystem or conversion failure", "model": ErrorResponse},
}


# ── Content Files ─────────────────────────────────────────────────────────

@router.post(
    "/save",
    response_model=SuccessResponse,
    responses=_ERRORS,
    summary="Overwrite a content file",
)
async def save_content(
    payload: SaveRequest,
    services: EditorServices = Depends(get_services),
) -> SuccessResponse:
    await services.content.save(payload.file_path, payload.content)
    return SuccessResponse()


@router.get(
    "/content",
    response_model=ContentResponse,
    responses=_ERRORS,
    summary="Read a content file",
)
async def read_content(
    file_path: str = Query(alias="filePath", description="Project-relative path of the file"),
    services: EditorServices = Depends(get_services),
) -> ContentResponse:
    return ContentResponse(**await services.content.read(file_path))


@router.post(
    "/create",
    response_model=CreateResponse,
    responses={**_ERRORS, 409: {"description": "File already exists", "model": ErrorResponse}},
    summary="Create a new content file",
)
async def create_content(
    payload: CreateRequest,
    services: EditorServices = Depends(get_services),
) -> CreateResponse:
    """
    Create `<collection>/<slug>.md` from front matter and body.

    The slug is slugified; the response carries the path actually written.
    """
    file_path = await services.content.create(
        collection=payload.collection,
        slug=payload.slug,
        front_matter=payload.frontmatter,
        body=payload.body,
    )
    return CreateResponse(file_path=file_path)


# ── Image Libraries ───────────────────────────────────────────────────────

@router.post("/upload", response_model=UploadResponse, responses=_ERRORS, summary="Upload a gallery image")
async def upload_image(
    payload: UploadRequest,
    services: EditorServices = Depends(get_services),
) -> UploadResponse:
    path = await services.gallery.upload(payload.filename, payload.data, payload.mime_type)
    return UploadResponse(path=path)


@router.post("/upload-meme", response_model=UploadResponse, responses=_ERRORS, summary="Upload a meme image")
async def upload_meme(
    payload: UploadRequest,
    services: EditorServices = Depends(get_services),
) -> UploadResponse:
    path = await services.memes.upload(payload.filename, payload.data, payload.mime_type)
    return UploadResponse(path=path)


@router.delete("/delete", response_model=SuccessResponse, responses=_ERRORS, summary="Delete a gallery image")
async def delete_image(
    payload: DeleteRequest,
    services: EditorServices = Depends(get_services),
) -> SuccessResponse:
    await services.gallery.delete(payload.path)
    return SuccessResponse()


@router.delete("/delete-meme", response_model=SuccessResponse, responses=_ERRORS, summary="Delete a meme image")
async def delete_meme(
    payload: DeleteRequest,
    services: EditorServices = Depends(get_services),
) -> SuccessResponse:
    await services.memes.delete(payload.path)
    return SuccessResponse()


@router.get("/list-images", response_model=ImageListResponse, summary="List gallery images")
async def list_images(services: EditorServices = Depends(get_services)) -> ImageListResponse:
    return ImageListResponse(images=await services.gallery.list_images())


@router.get("/list-memes", response_model=ImageListResponse, summary="List meme images")
async def list_memes(services: EditorServices = Depends(get_services)) -> ImageListResponse:
    return ImageListResponse(images=await services.memes.list_images())


@router.post(
    "/convert-heic",
    response_model=ConvertResponse,
    responses=_ERRORS,
    summary="Convert a HEIC/HEIF image to JPEG",
)
async def convert_heic(
    payload: ConvertRequest,
    services: EditorServices = Depends(get_services),
) -> ConvertResponse:
    return ConvertResponse(data=await services.converter.convert(payload.data))


# ── Config Documents ──────────────────────────────────────────────────────

@router.get("/gallery", summary="Read the gallery config")
async def read_gallery_config(services: EditorServices = Depends(get_services)) -> Any:
    return await services.gallery_config.load()


@router.post("/gallery", response_model=SuccessResponse, summary="Write the gallery config")
async def write_gallery_config(
    payload: Any = Body(...),
    services: EditorServices = Depends(get_services),
) -> SuccessResponse:
    await services.gallery_config.save(payload)
    return SuccessResponse()


@router.get("/memes", summary="Read the memes config")
async def read_memes_config(services: EditorServices = Depends(get_services)) -> Any:
    return await services.memes_config.load()


@router.post("/memes", response_model=SuccessResponse, summary="Write the memes config")
async def write_memes_config(
    payload: Any = Body(...),
    services: EditorServices = Depends(get_services),
) -> SuccessResponse:
    await services.memes_config.save(payload)
    return SuccessResponse()


# ── Fallback ──────────────────────────────────────────────────────────────
# Registered last: a known path with the wrong method lands here too (404, not 405)

@router.api_route(
    "/{endpoint:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unknown_endpoint(endpoint: str) -> None:
    raise NotFoundError(message="Unknown endpoint", context={"endpoint": endpoint})
