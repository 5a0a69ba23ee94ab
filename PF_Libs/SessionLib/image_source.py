"""
Image Source for Photo Filter Studio.

Turns what the surrounding shell hands over (a file path, raw bytes from an
upload or a download) into an immutable ImageResource, and applies the
acceptance rules for uploads and remote URLs before anything reaches the
edit session.

Classes:
    ImageResource: Immutable handle to a decoded image
    UploadError: Rejected upload content type
    UrlValidationError: Empty or unsupported image URL

Functions:
    validate_upload_content_type: Accept only image/* uploads
    validate_image_url: Accept http(s) URLs ending in a supported extension
    is_supported_format: Check a file path's extension
    decode_image_async: Decode on a worker thread
"""

from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Tuple, Union
import re

from PF_Libs.constants import (
    IMAGE_CONTENT_TYPE_PREFIX,
    IMAGE_URL_PATTERN,
    MSG_EMPTY_URL,
    MSG_INVALID_UPLOAD,
    MSG_INVALID_URL,
    SUPPORTED_STANDARD_IMAGES,
)
from PF_Libs.pillow_compat import Image

_URL_RE = re.compile(IMAGE_URL_PATTERN, re.IGNORECASE)


class UploadError(ValueError):
    """Raised when an upload is not an image."""


class UrlValidationError(ValueError):
    """Raised when an image URL is empty or not an accepted image URL."""


def validate_upload_content_type(content_type: Optional[str]) -> str:
    """
    Check the MIME type reported for an uploaded or dropped file.

    Returns:
        The content type unchanged

    Raises:
        UploadError: If the type does not start with 'image/'
    """
    if not content_type or not str(content_type).lower().startswith(IMAGE_CONTENT_TYPE_PREFIX):
        raise UploadError(MSG_INVALID_UPLOAD)
    return content_type


def validate_image_url(url: Optional[str]) -> str:
    """
    Check a remote image URL.

    The URL is trimmed, must start with http:// or https:// and end in
    .jpg, .jpeg, .png, .webp or .gif (case-insensitive).

    Returns:
        The trimmed URL

    Raises:
        UrlValidationError: If the URL is empty or not accepted
    """
    url = (url or "").strip()
    if not url:
        raise UrlValidationError(MSG_EMPTY_URL)
    if not _URL_RE.match(url):
        raise UrlValidationError(MSG_INVALID_URL)
    return url


def is_supported_format(file_path: Path) -> bool:
    """Check if a file path has a supported image extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


@dataclass(frozen=True, eq=False)
class ImageResource:
    """Decoded source image.

    The wrapped image is converted to RGBA on creation and never modified
    afterwards; renderers always work on copies. Two resources are only
    equal if they are the same object.

    Attributes:
        image: PIL Image in RGBA mode
        origin: Where the image came from (path, URL or upload name)
    """
    image: Any
    origin: str = ""
    size: Tuple[int, int] = field(init=False)

    def __post_init__(self):
        if not hasattr(self.image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(self.image)}")
        # convert() always returns a new image, so the caller's copy stays independent
        rgba = self.image.convert("RGBA")
        object.__setattr__(self, "image", rgba)
        object.__setattr__(self, "size", rgba.size)

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "ImageResource":
        """
        Decode an image file.

        Raises:
            FileNotFoundError: If the file does not exist
            IOError: If the file cannot be decoded
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Image file not found: {file_path}")

        try:
            with Image.open(file_path) as img:
                img.load()
                return cls(img, origin=str(file_path))
        except Exception as e:
            raise IOError(f"Failed to load image from {file_path}: {str(e)}")

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        origin: str = "",
        content_type: Optional[str] = None,
    ) -> "ImageResource":
        """
        Decode image bytes, e.g. an upload or a fetched URL body.

        Raises:
            UploadError: If content_type is given and is not an image type
            IOError: If the bytes cannot be decoded
        """
        if content_type is not None:
            validate_upload_content_type(content_type)

        try:
            with Image.open(BytesIO(data)) as img:
                img.load()
                return cls(img, origin=origin)
        except Exception as e:
            raise IOError(f"Failed to decode image {origin or '<bytes>'}: {str(e)}")


def decode_image_async(
    executor: Executor,
    source: Union[str, Path, bytes],
    origin: str = "",
) -> "Future[ImageResource]":
    """
    Decode a path or bytes on an executor.

    Pair with EditSession.begin_load()/complete_load() so a decode that
    finishes after a newer load is discarded.
    """
    if isinstance(source, (bytes, bytearray)):
        return executor.submit(ImageResource.from_bytes, bytes(source), origin)
    return executor.submit(ImageResource.from_path, source)
