"""Tests for app.storage.display module."""

import pytest

from app.storage.display import (
    DEFAULT_ICON,
    DOCTYPE_ICON_ROOT,
    is_image_path,
    join_url,
    path_to_image,
    path_to_title,
    public_url,
)


class TestIsImagePath:
    """Tests for is_image_path()."""

    @pytest.mark.parametrize("path", ["cat.png", "a/b/photo.JPG", "x.jpeg", "anim.gif", "icon.svg", "pic.webp"])
    def test_images(self, path):
        assert is_image_path(path)

    @pytest.mark.parametrize("path", ["report.pdf", "notes.txt", "archive.zip", "README", "png"])
    def test_non_images(self, path):
        assert not is_image_path(path)


class TestPathToTitle:
    """Tests for path_to_title()."""

    def test_posix_path(self):
        assert path_to_title("/srv/wwwroot/data/acme/posts/cat.png") == "cat.png"

    def test_windows_path(self):
        assert path_to_title("C:\\site\\wwwroot\\data\\cat.png") == "cat.png"

    def test_keeps_full_file_name(self):
        assert path_to_title("data/archive.tar.gz") == "archive.tar.gz"


class TestPathToImage:
    """Tests for path_to_image()."""

    def test_image_previews_itself(self):
        assert path_to_image("data/acme/cat.png") == "data/acme/cat.png"

    def test_image_prefers_url(self):
        assert path_to_image("data/acme/cat.png", "/data/acme/cat.png") == "/data/acme/cat.png"

    @pytest.mark.parametrize(
        "path,icon",
        [
            ("a.xml", "xml.png"),
            ("a.zip", "zip.png"),
            ("a.txt", "txt.png"),
            ("a.PDF", "pdf.png"),
            ("a.mp3", "mp3.png"),
            ("a.mp4", "mp4.png"),
            ("a.doc", "doc.png"),
            ("a.docx", "doc.png"),
            ("a.xls", "xls.png"),
            ("a.xlsx", "xls.png"),
        ],
    )
    def test_document_icons(self, path, icon):
        assert path_to_image(path) == f"{DOCTYPE_ICON_ROOT}/{icon}"

    def test_unknown_extension_gets_default_icon(self):
        assert path_to_image("data/acme/video.mkv") == f"{DOCTYPE_ICON_ROOT}/{DEFAULT_ICON}"


class TestUrls:
    """Tests for join_url() and public_url()."""

    def test_join_skips_empty_segments(self):
        assert join_url("data", "", "posts") == "data/posts"

    def test_join_trims_slashes(self):
        assert join_url("/data/", "/acme/") == "data/acme"

    def test_public_url_without_root(self):
        assert public_url("data/acme/cat.png") == "data/acme/cat.png"

    def test_public_url_site_root(self):
        assert public_url("data/acme/cat.png", "/") == "/data/acme/cat.png"

    def test_public_url_with_host(self):
        assert public_url("data/cat.png", "https://cdn.example.com/") == "https://cdn.example.com/data/cat.png"

    def test_public_url_normalizes_backslashes(self):
        assert public_url("data\\acme\\cat.png", "/site") == "/site/data/acme/cat.png"
