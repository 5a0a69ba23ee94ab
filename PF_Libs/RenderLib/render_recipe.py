"""
Shared rendering recipe for preview and export.

Both rendering paths describe an edit with the same two pieces and draw it
with the same function:

- the filter chain: CSS filter functions in a fixed order built from an
  AdjustmentVector
- the geometry transform: translate to the surface center, rotate, scale

Classes:
    FilterOperation: One CSS filter function with its value and unit
    GeometryTransform: Center/rotate/scale transform of a GeometryState

Functions:
    build_filter_chain: AdjustmentVector -> ordered FilterOperations
    build_transform: GeometryState -> GeometryTransform
    chain_to_css: Render a chain as a CSS `filter` value
    apply_filter_chain: Run a chain over a PIL Image
    render_layer: Filter, clip and draw a source image onto a surface
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple
import math

from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector, GeometryState
from PF_Libs.RenderLib.css_filters import CSS_FILTER_FUNCTIONS, to_float_rgba, to_image
from PF_Libs.pillow_compat import AFFINE, BICUBIC, Image

# (vector attribute, CSS function, unit). The order is the application order.
FILTER_CHAIN_ORDER: Tuple[Tuple[str, str, str], ...] = (
    ("brightness", "brightness", "%"),
    ("contrast", "contrast", "%"),
    ("saturation", "saturate", "%"),
    ("grayscale", "grayscale", "%"),
    ("sepia", "sepia", "%"),
    ("invert", "invert", "%"),
    ("hue_rotate", "hue-rotate", "deg"),
    ("blur", "blur", "px"),
)

# Values at which a function leaves pixels unchanged
IDENTITY_VALUES = {
    "brightness": 100.0,
    "contrast": 100.0,
    "saturate": 100.0,
    "grayscale": 0.0,
    "sepia": 0.0,
    "invert": 0.0,
    "hue-rotate": 0.0,
    "blur": 0.0,
}

TRANSPARENT = (0, 0, 0, 0)


def _css_number(value: float) -> str:
    return f"{float(value):g}"


@dataclass(frozen=True)
class FilterOperation:
    function: str
    value: float
    unit: str

    @property
    def amount(self) -> float:
        """Argument in the units the pixel operation expects."""
        if self.unit == "%":
            return self.value / 100.0
        return self.value

    @property
    def is_identity(self) -> bool:
        return self.value == IDENTITY_VALUES[self.function]

    def css(self) -> str:
        return f"{self.function}({_css_number(self.value)}{self.unit})"


FilterChain = Tuple[FilterOperation, ...]


def build_filter_chain(vector: AdjustmentVector) -> FilterChain:
    """Describe an AdjustmentVector as an ordered chain of filter operations."""
    return tuple(
        FilterOperation(function=function, value=getattr(vector, attribute), unit=unit)
        for attribute, function, unit in FILTER_CHAIN_ORDER
    )


def chain_to_css(chain: Sequence[FilterOperation]) -> str:
    if not chain:
        return "none"
    return " ".join(op.css() for op in chain)


def apply_filter_chain(image: Any, chain: Sequence[FilterOperation]) -> Any:
    """
    Apply every operation of the chain, in order, to an image.

    Args:
        image: PIL Image (converted to RGBA)
        chain: Operations from build_filter_chain()

    Returns:
        New RGBA PIL Image
    """
    pixels = to_float_rgba(image)
    for op in chain:
        if op.is_identity:
            continue
        pixels = CSS_FILTER_FUNCTIONS[op.function](pixels, op.amount)
    return to_image(pixels)


@dataclass(frozen=True)
class GeometryTransform:
    """translate(center) * rotate(rotation) * scale(zoom)."""
    zoom: float
    rotation: float

    @property
    def radians(self) -> float:
        return math.radians(self.rotation)

    def matrix(self, center: Tuple[float, float], extra_scale: float = 1.0) -> Tuple[float, ...]:
        """
        Forward affine matrix (a, b, c, d, e, f) mapping local coordinates
        (origin at the image center) to surface coordinates:
        x' = a*x + b*y + c, y' = d*x + e*y + f.
        """
        scale = self.zoom * extra_scale
        cos = math.cos(self.radians) * scale
        sin = math.sin(self.radians) * scale
        cx, cy = center
        return (cos, -sin, cx, sin, cos, cy)

    def inverse_data(
        self,
        center: Tuple[float, float],
        source_size: Tuple[int, int],
        extra_scale: float = 1.0,
    ) -> Tuple[float, ...]:
        """
        Inverse mapping from surface pixels to source pixels, in the form
        expected by PIL Image.transform(AFFINE).
        """
        scale = self.zoom * extra_scale
        cos = math.cos(self.radians) / scale
        sin = math.sin(self.radians) / scale
        cx, cy = center
        half_w = source_size[0] / 2.0
        half_h = source_size[1] / 2.0
        return (
            cos, sin, half_w - (cos * cx + sin * cy),
            -sin, cos, half_h - (-sin * cx + cos * cy),
        )

    def css(self) -> str:
        return f"rotate({_css_number(self.rotation)}deg) scale({_css_number(self.zoom)})"


def build_transform(geometry: GeometryState) -> GeometryTransform:
    return GeometryTransform(zoom=geometry.zoom, rotation=geometry.rotation)


def clip_right(image: Any, visible_fraction: float) -> Any:
    """Make everything right of visible_fraction * width transparent."""
    visible_fraction = min(1.0, max(0.0, float(visible_fraction)))
    if visible_fraction >= 1.0:
        return image
    clipped = image.copy()
    cut = int(round(image.width * visible_fraction))
    clipped.paste(TRANSPARENT, (cut, 0, image.width, image.height))
    return clipped


def render_layer(
    source: Any,
    chain: Sequence[FilterOperation],
    transform: GeometryTransform,
    surface_size: Tuple[int, int],
    fit_scale: float = 1.0,
    visible_fraction: float = 1.0,
) -> Any:
    """
    Draw one layer onto a transparent surface.

    The recipe is: filter the source, clip it in its own coordinates, then
    place its center on the surface center, rotate and scale it.

    Args:
        source: Source PIL Image
        chain: Filter chain (empty for the unfiltered original)
        transform: Geometry transform
        surface_size: (width, height) of the output surface
        fit_scale: Extra uniform scale (preview fit-to-canvas; 1.0 for export)
        visible_fraction: Portion of the layer's width left visible (0-1)

    Returns:
        RGBA PIL Image of size surface_size
    """
    if not hasattr(source, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(source)}")

    layer = apply_filter_chain(source, chain) if chain else source.convert("RGBA")
    layer = clip_right(layer, visible_fraction)

    width, height = surface_size
    data = transform.inverse_data((width / 2.0, height / 2.0), layer.size, fit_scale)
    return layer.transform(
        (width, height),
        AFFINE,
        data,
        resample=BICUBIC,
        fillcolor=TRANSPARENT,
    )


def blank_surface(size: Tuple[int, int]) -> Any:
    return Image.new("RGBA", size, TRANSPARENT)
