"""
Tests for image acquisition rules and ImageResource.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import FrozenInstanceError
from io import BytesIO

import pytest
from PIL import Image

from PF_Libs.SessionLib.image_source import (
    ImageResource,
    UploadError,
    UrlValidationError,
    decode_image_async,
    is_supported_format,
    validate_image_url,
    validate_upload_content_type,
)
from PF_Libs.constants import MSG_EMPTY_URL, MSG_INVALID_UPLOAD, MSG_INVALID_URL


def png_bytes(image):
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class TestUrlValidation:
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/photo.jpg",
            "http://example.com/a/b/c.JPEG",
            "https://cdn.example.org/image.png",
            "https://example.com/anim.gif",
            "http://example.com/pic.webp",
        ],
    )
    def test_accepts_image_urls(self, url):
        assert validate_image_url(url) == url

    def test_trims_whitespace(self):
        assert validate_image_url("  https://example.com/a.png \n") == "https://example.com/a.png"

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_empty(self, url):
        with pytest.raises(UrlValidationError) as excinfo:
            validate_image_url(url)
        assert str(excinfo.value) == MSG_EMPTY_URL

    @pytest.mark.parametrize(
        "url",
        [
            "ftp://example.com/photo.png",
            "https://example.com/photo.bmp",
            "https://example.com/image.png?size=2",
            "example.com/photo.png",
            "https://.png",
        ],
    )
    def test_rejects(self, url):
        with pytest.raises(UrlValidationError) as excinfo:
            validate_image_url(url)
        assert str(excinfo.value) == MSG_INVALID_URL

    def test_errors_are_value_errors(self):
        assert issubclass(UrlValidationError, ValueError)
        assert issubclass(UploadError, ValueError)


class TestUploadValidation:
    @pytest.mark.parametrize("content_type", ["image/png", "image/jpeg", "IMAGE/WEBP"])
    def test_accepts_images(self, content_type):
        assert validate_upload_content_type(content_type) == content_type

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "", None])
    def test_rejects_non_images(self, content_type):
        with pytest.raises(UploadError) as excinfo:
            validate_upload_content_type(content_type)
        assert str(excinfo.value) == MSG_INVALID_UPLOAD

    def test_supported_extensions(self):
        assert is_supported_format("photo.JPG")
        assert is_supported_format("scan.tiff")
        assert not is_supported_format("notes.txt")


class TestImageResource:
    def test_converts_to_rgba(self):
        resource = ImageResource(Image.new("RGB", (8, 6), (1, 2, 3)), origin="rgb")

        assert resource.image.mode == "RGBA"
        assert resource.size == (8, 6)
        assert resource.width == 8
        assert resource.height == 6

    def test_independent_of_caller_image(self, two_tone_image):
        resource = ImageResource(two_tone_image)

        two_tone_image.paste((0, 0, 0, 255), (0, 0, 40, 20))

        assert resource.image.getpixel((30, 5)) != (0, 0, 0, 255)

    def test_frozen(self, image_resource):
        with pytest.raises(FrozenInstanceError):
            image_resource.origin = "other"

    def test_identity_equality(self, two_tone_image):
        assert ImageResource(two_tone_image) != ImageResource(two_tone_image)

    def test_not_an_image(self):
        with pytest.raises(TypeError):
            ImageResource(b"bytes")

    def test_from_path(self, tmp_path, two_tone_image):
        path = tmp_path / "photo.png"
        two_tone_image.save(path)

        resource = ImageResource.from_path(path)

        assert resource.size == (40, 20)
        assert resource.origin == str(path)

    def test_from_path_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ImageResource.from_path(tmp_path / "missing.png")

    def test_from_path_corrupt(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not really a png")

        with pytest.raises(IOError):
            ImageResource.from_path(path)

    def test_from_bytes(self, two_tone_image):
        resource = ImageResource.from_bytes(png_bytes(two_tone_image), "upload.png", "image/png")

        assert resource.size == (40, 20)
        assert resource.origin == "upload.png"

    def test_from_bytes_rejects_content_type(self, two_tone_image):
        with pytest.raises(UploadError):
            ImageResource.from_bytes(png_bytes(two_tone_image), "upload.pdf", "application/pdf")

    def test_from_bytes_corrupt(self):
        with pytest.raises(IOError):
            ImageResource.from_bytes(b"\x00\x01\x02", "garbage")


class TestDecodeAsync:
    def test_decode_bytes(self, two_tone_image):
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = decode_image_async(executor, png_bytes(two_tone_image), "async.png")
            resource = future.result(timeout=30)

        assert isinstance(resource, ImageResource)
        assert resource.origin == "async.png"

    def test_decode_path(self, tmp_path, two_tone_image):
        path = tmp_path / "photo.png"
        two_tone_image.save(path)

        with ThreadPoolExecutor(max_workers=1) as executor:
            resource = decode_image_async(executor, path).result(timeout=30)

        assert resource.size == (40, 20)
