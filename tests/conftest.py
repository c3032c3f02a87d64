"""
Dev Editor — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets its own throwaway site checkout under tmp_path, a
       Settings object pointing at it, and (for endpoint tests) an app built
       from those settings behind an HTTPX AsyncClient.

Fixture Hierarchy (all function-scoped):
    ├── project_root:     tmp site checkout with src/content/{blog,books,games}
    ├── test_settings:    Settings rooted at project_root
    ├── sample_png_bytes: a real 4x3 PNG rendered with Pillow
    ├── sample_png_b64:   the same PNG, base64-encoded
    └── test_client:      HTTPX AsyncClient talking to create_app(test_settings)
"""

import base64
import io
import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

# Set before any dev_editor import builds the module-level settings
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ["ENVIRONMENT"] = "development"

from dev_editor.config import Settings  # noqa: E402


@pytest.fixture
def project_root(tmp_path):
    """A minimal site checkout: content collections exist, nothing else does."""
    root = tmp_path / "site"
    for collection in ("blog", "books", "games"):
        (root / "src" / "content" / collection).mkdir(parents=True)
    (root / "public").mkdir()
    return root


@pytest.fixture
def test_settings(project_root):
    return Settings(project_root=project_root, _env_file=None)


@pytest.fixture
def sample_png_bytes():
    """A small RGBA PNG; exercises the RGB flattening in conversion."""
    image = Image.new("RGBA", (4, 3), (200, 30, 30, 128))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def sample_png_b64(sample_png_bytes):
    return base64.b64encode(sample_png_bytes).decode("ascii")


@pytest_asyncio.fixture
async def test_client(test_settings):
    """
    HTTPX AsyncClient routed straight into a fresh app.

    raise_app_exceptions=False: unexpected errors come back as the 500
    response the catch-all handler renders instead of propagating.
    """
    from dev_editor.main import create_app

    app = create_app(test_settings)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
