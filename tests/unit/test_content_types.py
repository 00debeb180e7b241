"""
Unit tests for content type classification.
"""

import pytest

from simplewebserver.http.content_types import ContentType, classify


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("path,expected", [
        ("/photo.jpg", ContentType.JPEG),
        ("/photo.jpeg", ContentType.JPEG),
        ("/PHOTO.JPG", ContentType.JPEG),
        ("/Photo.JpEg", ContentType.JPEG),
        ("/img/logo.png", ContentType.PNG),
        ("/img/LOGO.PNG", ContentType.PNG),
        ("/anim.gif", ContentType.GIF),
        ("/favicon.ico", ContentType.ICON),
        ("/favicon.ICO", ContentType.ICON),
    ])
    def test_images(self, path: str, expected: ContentType):
        assert classify(path) == expected

    @pytest.mark.parametrize("path", [
        "/index.html",
        "/notes.txt",
        "/README",
        "/",
        "",
        "/png",
        "/file.png.bak",
    ])
    def test_everything_else_is_html(self, path: str):
        assert classify(path) == ContentType.HTML


class TestContentType:
    """Tests for the ContentType enum."""

    def test_values_are_mime_types(self):
        assert ContentType.HTML.value == "text/html"
        assert ContentType.JPEG.value == "image/jpeg"
        assert ContentType.PNG.value == "image/png"
        assert ContentType.GIF.value == "image/gif"
        assert ContentType.ICON.value == "image/x-icon"

    def test_str_is_mime_type(self):
        assert str(ContentType.PNG) == "image/png"
        assert f"{ContentType.ICON}" == "image/x-icon"

    def test_is_image(self):
        assert not ContentType.HTML.is_image
        assert all(ct.is_image for ct in ContentType if ct is not ContentType.HTML)
