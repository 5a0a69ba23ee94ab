"""
CSS Filter Function Operations.

Pixel implementations of the CSS filter shorthand functions, following the
equivalent SVG filter primitives of the W3C Filter Effects module:
- brightness / contrast / invert: linear component transfer per channel
- saturate / grayscale / sepia / hue-rotate: 3x3 color matrix
- blur: Gaussian blur with the given standard deviation in pixels

Color operations work on float RGB arrays in [0, 1] and clamp after every
step, the same way chained filter primitives do. Alpha is left untouched.

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.jpg").convert("RGBA")
    >>> warm = apply_css_filter(img, "sepia", 0.3)
    >>> soft = apply_css_filter(warm, "blur", 1.5)
"""

from typing import Any, Callable, Dict
import math

import numpy as np

from PF_Libs.pillow_compat import Image, ImageFilter

ArrayF = np.ndarray


def to_float_rgba(image: Any) -> ArrayF:
    """Convert a PIL Image to a float32 RGBA array in [0, 1]."""
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")
    rgba = np.asarray(image.convert("RGBA"), dtype=np.float32)
    return rgba / 255.0


def to_image(rgba01: ArrayF) -> Any:
    """Convert a float RGBA array in [0, 1] back to a PIL Image."""
    rgba01 = np.clip(rgba01, 0.0, 1.0)
    return Image.fromarray((rgba01 * 255.0 + 0.5).astype(np.uint8), mode="RGBA")


def _transfer(rgba01: ArrayF, slope: float, intercept: float) -> ArrayF:
    out = rgba01.copy()
    out[..., :3] = np.clip(rgba01[..., :3] * slope + intercept, 0.0, 1.0)
    return out


def _color_matrix(rgba01: ArrayF, matrix: ArrayF) -> ArrayF:
    out = rgba01.copy()
    out[..., :3] = np.clip(rgba01[..., :3] @ matrix.T, 0.0, 1.0)
    return out


# ============================================================================
# Component transfer filters
# ============================================================================

def apply_brightness(rgba01: ArrayF, amount: float) -> ArrayF:
    """brightness(amount): multiply channels, 1.0 = unchanged."""
    return _transfer(rgba01, float(amount), 0.0)


def apply_contrast(rgba01: ArrayF, amount: float) -> ArrayF:
    """contrast(amount): scale around mid-gray, 1.0 = unchanged."""
    amount = float(amount)
    return _transfer(rgba01, amount, 0.5 - 0.5 * amount)


def apply_invert(rgba01: ArrayF, amount: float) -> ArrayF:
    """invert(amount): 0 = unchanged, 1 = fully inverted."""
    amount = min(1.0, max(0.0, float(amount)))
    return _transfer(rgba01, 1.0 - 2.0 * amount, amount)


# ============================================================================
# Color matrix filters
# ============================================================================

def saturate_matrix(amount: float) -> ArrayF:
    s = float(amount)
    return np.array([
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ], dtype=np.float32)


def grayscale_matrix(amount: float) -> ArrayF:
    s = 1.0 - min(1.0, max(0.0, float(amount)))
    return np.array([
        [0.2126 + 0.7874 * s, 0.7152 - 0.7152 * s, 0.0722 - 0.0722 * s],
        [0.2126 - 0.2126 * s, 0.7152 + 0.2848 * s, 0.0722 - 0.0722 * s],
        [0.2126 - 0.2126 * s, 0.7152 - 0.7152 * s, 0.0722 + 0.9278 * s],
    ], dtype=np.float32)


def sepia_matrix(amount: float) -> ArrayF:
    s = 1.0 - min(1.0, max(0.0, float(amount)))
    return np.array([
        [0.393 + 0.607 * s, 0.769 - 0.769 * s, 0.189 - 0.189 * s],
        [0.349 - 0.349 * s, 0.686 + 0.314 * s, 0.168 - 0.168 * s],
        [0.272 - 0.272 * s, 0.534 - 0.534 * s, 0.131 + 0.869 * s],
    ], dtype=np.float32)


def hue_rotate_matrix(degrees: float) -> ArrayF:
    angle = math.radians(float(degrees))
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float32)


def apply_saturate(rgba01: ArrayF, amount: float) -> ArrayF:
    return _color_matrix(rgba01, saturate_matrix(amount))


def apply_grayscale(rgba01: ArrayF, amount: float) -> ArrayF:
    return _color_matrix(rgba01, grayscale_matrix(amount))


def apply_sepia(rgba01: ArrayF, amount: float) -> ArrayF:
    return _color_matrix(rgba01, sepia_matrix(amount))


def apply_hue_rotate(rgba01: ArrayF, degrees: float) -> ArrayF:
    return _color_matrix(rgba01, hue_rotate_matrix(degrees))


# ============================================================================
# Blur
# ============================================================================

def apply_blur(rgba01: ArrayF, radius: float) -> ArrayF:
    """
    blur(radius): Gaussian blur, radius is the standard deviation in pixels.

    Pillow's GaussianBlur radius is also a standard deviation, so the value
    is passed through unchanged. A radius of 0 returns the input.
    """
    radius = float(radius)
    if radius < 0:
        raise ValueError(f"blur radius must be >= 0, got {radius}")
    if radius == 0:
        return rgba01
    blurred = to_image(rgba01).filter(ImageFilter.GaussianBlur(radius=radius))
    return np.asarray(blurred, dtype=np.float32) / 255.0


# CSS function name -> operation on a float RGBA array
CSS_FILTER_FUNCTIONS: Dict[str, Callable[[ArrayF, float], ArrayF]] = {
    "brightness": apply_brightness,
    "contrast": apply_contrast,
    "saturate": apply_saturate,
    "grayscale": apply_grayscale,
    "sepia": apply_sepia,
    "invert": apply_invert,
    "hue-rotate": apply_hue_rotate,
    "blur": apply_blur,
}


def apply_css_filter(image: Any, function: str, amount: float) -> Any:
    """
    Apply a single CSS filter function to a PIL Image.

    Args:
        image: PIL Image (converted to RGBA)
        function: CSS function name ('brightness', 'hue-rotate', ...)
        amount: Function argument in native units: a fraction for the
                percentage functions (1.0 = 100%), degrees for hue-rotate,
                pixels for blur

    Returns:
        New PIL Image in RGBA mode

    Raises:
        ValueError: If function is not a supported filter function
        TypeError: If image is not a PIL Image
    """
    if function not in CSS_FILTER_FUNCTIONS:
        raise ValueError(
            f"Unknown filter function: {function}. "
            f"Valid functions: {', '.join(CSS_FILTER_FUNCTIONS)}"
        )
    return to_image(CSS_FILTER_FUNCTIONS[function](to_float_rgba(image), amount))
