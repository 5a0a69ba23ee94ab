"""
Constants and configuration values for Photo Filter Studio.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Adjustment channel names (attribute order is also the filter chain order)
CHANNEL_BRIGHTNESS = "brightness"
CHANNEL_CONTRAST = "contrast"
CHANNEL_SATURATION = "saturation"
CHANNEL_GRAYSCALE = "grayscale"
CHANNEL_SEPIA = "sepia"
CHANNEL_INVERT = "invert"
CHANNEL_HUE_ROTATE = "hue_rotate"
CHANNEL_BLUR = "blur"

CHANNEL_NAMES = (
    CHANNEL_BRIGHTNESS,
    CHANNEL_CONTRAST,
    CHANNEL_SATURATION,
    CHANNEL_GRAYSCALE,
    CHANNEL_SEPIA,
    CHANNEL_INVERT,
    CHANNEL_HUE_ROTATE,
    CHANNEL_BLUR,
)

# Alternate spellings accepted in delta maps
CHANNEL_ALIASES = {
    "hueRotate": CHANNEL_HUE_ROTATE,
    "hue-rotate": CHANNEL_HUE_ROTATE,
    "saturate": CHANNEL_SATURATION,
}

# (minimum, maximum) per channel
CHANNEL_DOMAINS = {
    CHANNEL_BRIGHTNESS: (0.0, 200.0),
    CHANNEL_CONTRAST: (0.0, 200.0),
    CHANNEL_SATURATION: (0.0, 200.0),
    CHANNEL_GRAYSCALE: (0.0, 100.0),
    CHANNEL_SEPIA: (0.0, 100.0),
    CHANNEL_INVERT: (0.0, 100.0),
    CHANNEL_HUE_ROTATE: (0.0, 360.0),
    CHANNEL_BLUR: (0.0, 10.0),
}

CHANNEL_DEFAULTS = {
    CHANNEL_BRIGHTNESS: 100.0,
    CHANNEL_CONTRAST: 100.0,
    CHANNEL_SATURATION: 100.0,
    CHANNEL_GRAYSCALE: 0.0,
    CHANNEL_SEPIA: 0.0,
    CHANNEL_INVERT: 0.0,
    CHANNEL_HUE_ROTATE: 0.0,
    CHANNEL_BLUR: 0.0,
}

CHANNEL_STEPS = {
    CHANNEL_BRIGHTNESS: 5.0,
    CHANNEL_CONTRAST: 5.0,
    CHANNEL_SATURATION: 5.0,
    CHANNEL_GRAYSCALE: 5.0,
    CHANNEL_SEPIA: 5.0,
    CHANNEL_INVERT: 5.0,
    CHANNEL_HUE_ROTATE: 5.0,
    CHANNEL_BLUR: 0.2,
}

# Channel values are stored with this many decimal places
VALUE_PRECISION = 2

# Geometry
GEOMETRY_ZOOM = "zoom"
GEOMETRY_ROTATION = "rotation"
ZOOM_MIN = 0.5
ZOOM_MAX = 3.0
ZOOM_STEP = 0.1
ZOOM_DEFAULT = 1.0
ROTATION_MIN = -180.0
ROTATION_MAX = 180.0
ROTATION_STEP = 5.0
ROTATION_DEFAULT = 0.0

# Before/after comparison
SPLIT_POSITION_MIN = 0.0
SPLIT_POSITION_MAX = 100.0
DEFAULT_SPLIT_POSITION = 50.0

# Export
EXPORT_FILE_STEM = "edited-image"
EXPORT_SUPERSAMPLE_SCALE = 2
EXPORT_JPEG_QUALITY = 0.95
DEFAULT_EXPORT_FORMAT = "png"
EXPORT_FORMATS = {
    # key: (Pillow format, file extension, MIME type)
    "png": ("PNG", "png", "image/png"),
    "jpg": ("JPEG", "jpg", "image/jpeg"),
    "jpeg": ("JPEG", "jpg", "image/jpeg"),
}

# Image acquisition
IMAGE_URL_PATTERN = r"^https?://.+\.(jpg|jpeg|png|webp|gif)$"
IMAGE_CONTENT_TYPE_PREFIX = "image/"
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}

# User-facing validation messages
MSG_INVALID_UPLOAD = "Please select a valid image file."
MSG_EMPTY_URL = "Please enter an image URL."
MSG_INVALID_URL = "Please enter a valid image URL (jpg, png, webp, gif)."

# UI constants
DEFAULT_WINDOW_WIDTH = 1400
DEFAULT_WINDOW_HEIGHT = 850
DEFAULT_CANVAS_HEIGHT = 560
