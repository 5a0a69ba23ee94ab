"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace).

This module loads the Pillow-provided modules via importlib and re-exports the
symbols the rendering code relies on: `Image` and `ImageFilter`. It also
exposes the resampling and transform enums under stable names so callers do
not depend on the Pillow release.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageFilter = import_module("PIL.ImageFilter")

AFFINE = Image.Transform.AFFINE
BICUBIC = Image.Resampling.BICUBIC
