"""
Pytest configuration and shared fixtures for Photo Filter Studio tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from PIL import Image

from PF_Libs.SessionLib.image_source import ImageResource
from PF_Libs.SessionLib.session import EditSession

LEFT_COLOR = (20, 40, 220, 255)
RIGHT_COLOR = (200, 100, 50, 255)


def make_two_tone_image(width: int = 40, height: int = 20):
    """Image whose left half is LEFT_COLOR and right half RIGHT_COLOR."""
    image = Image.new("RGBA", (width, height), RIGHT_COLOR)
    image.paste(LEFT_COLOR, (0, 0, width // 2, height))
    return image


@pytest.fixture
def two_tone_image():
    """
    Provide a 40x20 RGBA image with two solid halves.

    Returns:
        PIL Image, left half blue-ish, right half orange-ish
    """
    return make_two_tone_image()


@pytest.fixture
def image_resource(two_tone_image):
    """Provide the two-tone image wrapped in an ImageResource."""
    return ImageResource(two_tone_image, origin="two-tone.png")


@pytest.fixture
def loaded_session(image_resource):
    """Provide an EditSession with the two-tone image loaded."""
    session = EditSession()
    session.load_image(image_resource)
    return session
