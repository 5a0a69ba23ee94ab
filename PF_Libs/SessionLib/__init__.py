"""
SessionLib - Edit session control

This module handles image acquisition rules and the edit session
controller that owns all edit state for the loaded image.
"""

from PF_Libs.SessionLib.image_source import (
    ImageResource,
    UploadError,
    UrlValidationError,
    validate_upload_content_type,
    validate_image_url,
    is_supported_format,
    decode_image_async,
)
from PF_Libs.SessionLib.session import (
    GeometryHistoryPolicy,
    SessionConfig,
    SessionState,
    EditSession,
)

__all__ = [
    "ImageResource",
    "UploadError",
    "UrlValidationError",
    "validate_upload_content_type",
    "validate_image_url",
    "is_supported_format",
    "decode_image_async",
    "GeometryHistoryPolicy",
    "SessionConfig",
    "SessionState",
    "EditSession",
]
