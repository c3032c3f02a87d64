"""
Dev Editor — Content Service Unit Tests
========================================

What:  Tests for ContentService save / read / create.
How:   Each test runs against a fresh site checkout under tmp_path.

Test Strategy:
    ✅ Save overwrites files inside the content directory only
    ✅ Read splits front matter from the body
    ✅ Create writes `<collection>/<slug>.md` and returns the project path
    ✅ Unknown collection / empty slug → ValidationError
    ✅ Existing target → ConflictError, and the file is left untouched
"""

import shutil
from datetime import date
from unittest.mock import patch

import pytest

from dev_editor.exceptions import (
    ConflictError,
    FileStorageError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from dev_editor.services.content_service import ContentService


class TestContentService:
    """Tests for ContentService against a temporary site."""

    @pytest.fixture(autouse=True)
    def _service(self, test_settings):
        self.settings = test_settings
        self.service = ContentService(
            project_root=test_settings.project_root,
            content_dir=test_settings.content_dir,
            allowed_collections=test_settings.allowed_collections_list,
        )
        self.blog = test_settings.content_dir / "blog"

    # ── Save ──────────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_save_overwrites_file(self):
        """Saved content replaces the file byte for byte."""
        target = self.blog / "post.md"
        target.write_text("old", encoding="utf-8")

        await self.service.save("src/content/blog/post.md", "---\ntitle: New\n---\n\nBody")

        assert target.read_text(encoding="utf-8") == "---\ntitle: New\n---\n\nBody"

    @pytest.mark.asyncio
    async def test_save_creates_new_file_in_existing_collection(self):
        await self.service.save("src/content/books/fresh.md", "hello")
        assert (self.settings.content_dir / "books" / "fresh.md").read_text() == "hello"

    @pytest.mark.asyncio
    async def test_save_unicode(self):
        await self.service.save("src/content/blog/u.md", "café ☕")
        assert (self.blog / "u.md").read_text(encoding="utf-8") == "café ☕"

    @pytest.mark.asyncio
    async def test_save_outside_content_rejected(self):
        """A path under the project root but outside src/content is forbidden."""
        with pytest.raises(ForbiddenError, match="Can only edit content files"):
            await self.service.save("package.json", "{}")
        assert not (self.settings.project_root / "package.json").exists()

    @pytest.mark.asyncio
    async def test_save_traversal_rejected(self):
        with pytest.raises(ForbiddenError):
            await self.service.save("src/content/../../evil.md", "x")

    @pytest.mark.asyncio
    async def test_save_content_dir_itself_rejected(self):
        with pytest.raises(ForbiddenError):
            await self.service.save("src/content", "x")

    @pytest.mark.asyncio
    async def test_save_missing_parent_is_storage_error(self):
        """Save does not create directories."""
        with pytest.raises(FileStorageError, match="Failed to save"):
            await self.service.save("src/content/poems/ode.md", "x")

    # ── Read ──────────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_read_splits_document(self):
        (self.blog / "post.md").write_text(
            "---\ntitle: Hello\npubDate: 2024-01-15\n---\n\n# Body\n", encoding="utf-8"
        )

        result = await self.service.read("src/content/blog/post.md")

        assert result["file_path"] == "src/content/blog/post.md"
        assert result["frontmatter"] == {"title": "Hello", "pubDate": date(2024, 1, 15)}
        assert result["body"] == "# Body"
        assert result["content"].startswith("---\ntitle: Hello")

    @pytest.mark.asyncio
    async def test_read_missing_file(self):
        with pytest.raises(NotFoundError):
            await self.service.read("src/content/blog/nope.md")

    @pytest.mark.asyncio
    async def test_read_directory_is_not_found(self):
        with pytest.raises(NotFoundError):
            await self.service.read("src/content/blog")

    @pytest.mark.asyncio
    async def test_read_outside_rejected(self):
        with pytest.raises(ForbiddenError):
            await self.service.read("../../etc/passwd")

    @pytest.mark.asyncio
    async def test_read_broken_front_matter(self):
        (self.blog / "bad.md").write_text("---\ntitle: [unclosed\n---\nbody", encoding="utf-8")
        with pytest.raises(FileStorageError, match="Could not parse front matter"):
            await self.service.read("src/content/blog/bad.md")

    # ── Create ────────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_create_writes_document(self):
        path = await self.service.create(
            collection="blog",
            slug="Hello World",
            front_matter={"title": "Hello World", "pubDate": "2024-03-01", "tags": ["a"]},
            body="First post.",
        )

        assert path == "src/content/blog/hello-world.md"
        written = (self.blog / "hello-world.md").read_text(encoding="utf-8")
        assert written == (
            "---\ntitle: Hello World\npubDate: 2024-03-01\ntags:\n  - a\n---\n\nFirst post."
        )

    @pytest.mark.asyncio
    async def test_create_without_body(self):
        path = await self.service.create("books", "dune", {"title": "Dune"})
        assert path == "src/content/books/dune.md"
        assert (self.settings.content_dir / "books" / "dune.md").read_text() == (
            "---\ntitle: Dune\n---\n\n"
        )

    @pytest.mark.asyncio
    async def test_create_makes_missing_collection_dir(self):
        shutil.rmtree(self.settings.content_dir / "games")
        path = await self.service.create("games", "outer-wilds", {"title": "Outer Wilds"})
        assert path == "src/content/games/outer-wilds.md"
        assert (self.settings.content_dir / "games" / "outer-wilds.md").is_file()

    @pytest.mark.asyncio
    async def test_create_unknown_collection(self):
        with pytest.raises(ValidationError, match="Invalid collection: poems") as exc_info:
            await self.service.create("poems", "ode", {"title": "Ode"})
        assert exc_info.value.field == "collection"

    @pytest.mark.asyncio
    async def test_create_traversal_collection_rejected(self):
        """Collection names are matched exactly, so `../` never reaches the disk."""
        with pytest.raises(ValidationError):
            await self.service.create("../blog", "x", {})

    @pytest.mark.asyncio
    async def test_create_empty_slug(self):
        with pytest.raises(ValidationError, match="Invalid slug"):
            await self.service.create("blog", "?!", {"title": "x"})

    @pytest.mark.asyncio
    async def test_create_slug_traversal_flattened(self):
        path = await self.service.create("blog", "../../escape", {"title": "x"})
        assert path == "src/content/blog/escape.md"

    @pytest.mark.asyncio
    async def test_create_existing_conflicts(self):
        """A second create with the same slug fails and keeps the first file."""
        await self.service.create("blog", "dup", {"title": "First"}, "one")

        with pytest.raises(ConflictError):
            await self.service.create("blog", "dup", {"title": "Second"}, "two")

        assert (self.blog / "dup.md").read_text(encoding="utf-8").endswith("one")

    @pytest.mark.asyncio
    async def test_create_then_read_round_trip(self):
        path = await self.service.create(
            "books",
            "dune",
            {"title": "Dune: Part One", "rating": 5, "dateRead": "2024-01-15"},
            "Spice.",
        )
        result = await self.service.read(path)
        assert result["frontmatter"] == {
            "title": "Dune: Part One",
            "rating": 5,
            "dateRead": date(2024, 1, 15),
        }
        assert result["body"] == "Spice."

    @pytest.mark.asyncio
    async def test_create_write_failure_is_storage_error(self):
        with patch(
            "dev_editor.services.content_service.aiofiles.open",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(FileStorageError, match="denied"):
                await self.service.create("blog", "locked", {"title": "x"})
