"""
Dev Editor — Path Containment Unit Tests
=========================================

What:  Tests for resolve_within, the check every client path goes through.
How:   Real directories and symlinks under tmp_path.

Test Strategy:
    ✅ Paths inside the base resolve to absolute paths
    ✅ `../` traversal, absolute paths and escaping symlinks are rejected
    ✅ The base directory itself is rejected
    ✅ Sibling directories sharing a name prefix are rejected
"""

import os

import pytest

from dev_editor.exceptions import ForbiddenError
from dev_editor.services.paths import resolve_within


class TestResolveWithin:
    """Tests for resolve_within()."""

    @pytest.fixture(autouse=True)
    def _layout(self, tmp_path):
        self.root = tmp_path
        self.base = tmp_path / "content"
        (self.base / "blog").mkdir(parents=True)

    def test_relative_path_inside(self):
        target = resolve_within(self.base, "blog/post.md")
        assert target == (self.base / "blog" / "post.md").resolve()
        assert target.is_absolute()

    def test_anchor_used_for_relative_paths(self):
        """Client paths are project-relative while containment is content-relative."""
        target = resolve_within(self.base, "content/blog/post.md", anchor=self.root)
        assert target == (self.base / "blog" / "post.md").resolve()

    def test_dotdot_inside_base_allowed(self):
        target = resolve_within(self.base, "blog/../blog/post.md")
        assert target == (self.base / "blog" / "post.md").resolve()

    def test_traversal_rejected(self):
        with pytest.raises(ForbiddenError, match="Invalid path"):
            resolve_within(self.base, "../secrets.txt")

    def test_deep_traversal_rejected(self):
        with pytest.raises(ForbiddenError):
            resolve_within(self.base, "blog/../../../../etc/passwd")

    def test_absolute_path_outside_rejected(self):
        with pytest.raises(ForbiddenError):
            resolve_within(self.base, "/etc/passwd")

    def test_absolute_path_inside_allowed(self):
        inside = self.base / "blog" / "post.md"
        assert resolve_within(self.base, str(inside)) == inside.resolve()

    def test_base_itself_rejected(self):
        with pytest.raises(ForbiddenError):
            resolve_within(self.base, ".")

    def test_prefix_sibling_rejected(self):
        """`content-backup` starts with `content` but is not inside it."""
        (self.root / "content-backup").mkdir()
        with pytest.raises(ForbiddenError):
            resolve_within(self.base, "../content-backup/post.md")

    def test_escaping_symlink_rejected(self):
        outside = self.root / "outside"
        outside.mkdir()
        os.symlink(outside, self.base / "link")
        with pytest.raises(ForbiddenError):
            resolve_within(self.base, "link/stolen.md")

    def test_custom_message(self):
        with pytest.raises(ForbiddenError, match="Can only edit content files"):
            resolve_within(self.base, "../x.md", message="Can only edit content files")

    def test_rejection_context(self):
        with pytest.raises(ForbiddenError) as exc_info:
            resolve_within(self.base, "../x.md")
        assert exc_info.value.context["requested"] == "../x.md"
        assert exc_info.value.status_code == 403
