"""
Live Preview Compositor.

Derives the before/after preview from the current edit state. The result is
a plain description (layers with filter chain, transform and clip) that can
be rendered as CSS styles by a web view or rasterized with Pillow.

Comparison modes:
- BEFORE: only the unfiltered original, at full opacity
- SPLIT: the original underneath, the filtered image on top clipped so only
  the part left of the split position is visible

Example:
    >>> description = PreviewCompositor.compose(
    ...     AdjustmentVector(sepia=40),
    ...     GeometryState(zoom=1.5),
    ...     ComparisonMode.SPLIT,
    ...     split_position=30,
    ... )
    >>> preview = PreviewCompositor.render(image, description, (800, 560))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector, GeometryState
from PF_Libs.RenderLib.render_recipe import (
    FilterChain,
    GeometryTransform,
    blank_surface,
    build_filter_chain,
    build_transform,
    chain_to_css,
    render_layer,
)
from PF_Libs.constants import DEFAULT_SPLIT_POSITION, SPLIT_POSITION_MAX, SPLIT_POSITION_MIN
from PF_Libs.pillow_compat import Image

LAYER_ORIGINAL = "original"
LAYER_FILTERED = "filtered"


class ComparisonMode(str, Enum):
    BEFORE = "before"
    SPLIT = "split"


def clamp_split_position(position: float) -> float:
    return max(SPLIT_POSITION_MIN, min(SPLIT_POSITION_MAX, float(position)))


@dataclass(frozen=True)
class LayerDescription:
    """One stacked layer of the preview.

    Attributes:
        role: LAYER_ORIGINAL or LAYER_FILTERED
        filter_chain: Filter operations (empty for the original)
        transform: Geometry transform shared by every layer
        clip_right: Percentage of the layer's width hidden on the right
        z_index: Stacking order, higher is on top
        opacity: Layer opacity (0-1)
    """
    role: str
    filter_chain: FilterChain
    transform: GeometryTransform
    clip_right: float = 0.0
    z_index: int = 1
    opacity: float = 1.0

    @property
    def visible_fraction(self) -> float:
        return (100.0 - self.clip_right) / 100.0

    def css_style(self) -> Dict[str, str]:
        """Inline style equivalent of this layer."""
        style = {
            "filter": chain_to_css(self.filter_chain),
            "transform": self.transform.css(),
            "z-index": str(self.z_index),
            "opacity": f"{self.opacity:g}",
        }
        if self.clip_right > 0:
            style["clip-path"] = f"inset(0 {self.clip_right:g}% 0 0)"
        return style


@dataclass(frozen=True)
class PreviewDescription:
    mode: ComparisonMode
    split_position: float
    layers: Tuple[LayerDescription, ...]

    def layer(self, role: str) -> Optional[LayerDescription]:
        for layer in self.layers:
            if layer.role == role:
                return layer
        return None


class PreviewCompositor:
    """Builds and rasterizes preview descriptions."""

    @staticmethod
    def compose(
        vector: AdjustmentVector,
        geometry: GeometryState,
        mode: ComparisonMode = ComparisonMode.SPLIT,
        split_position: float = DEFAULT_SPLIT_POSITION,
    ) -> PreviewDescription:
        """
        Derive the preview description from the edit state.

        Args:
            vector: Current adjustment vector
            geometry: Current zoom/rotation
            mode: BEFORE or SPLIT
            split_position: Percentage of width (0-100) showing the filtered
                            image in SPLIT mode

        Returns:
            PreviewDescription with layers ordered bottom to top
        """
        mode = ComparisonMode(mode)
        split_position = clamp_split_position(split_position)
        transform = build_transform(geometry)

        original = LayerDescription(
            role=LAYER_ORIGINAL,
            filter_chain=(),
            transform=transform,
            z_index=1,
        )
        if mode is ComparisonMode.BEFORE:
            return PreviewDescription(mode=mode, split_position=split_position, layers=(original,))

        filtered = LayerDescription(
            role=LAYER_FILTERED,
            filter_chain=build_filter_chain(vector),
            transform=transform,
            clip_right=SPLIT_POSITION_MAX - split_position,
            z_index=2,
        )
        return PreviewDescription(
            mode=mode,
            split_position=split_position,
            layers=(original, filtered),
        )

    @staticmethod
    def fit_scale(source_size: Tuple[int, int], canvas_size: Tuple[int, int]) -> float:
        """Shrink-only scale that fits the source inside the canvas."""
        return min(
            1.0,
            canvas_size[0] / float(source_size[0]),
            canvas_size[1] / float(source_size[1]),
        )

    @staticmethod
    def render_layer(
        source: Any,
        layer: LayerDescription,
        canvas_size: Tuple[int, int],
    ) -> Any:
        """Rasterize a single layer onto a transparent canvas."""
        return render_layer(
            source,
            layer.filter_chain,
            layer.transform,
            canvas_size,
            fit_scale=PreviewCompositor.fit_scale(source.size, canvas_size),
            visible_fraction=layer.visible_fraction,
        )

    @staticmethod
    def render(
        source: Any,
        description: PreviewDescription,
        canvas_size: Optional[Tuple[int, int]] = None,
        background: Optional[Tuple[int, int, int, int]] = None,
    ) -> Any:
        """
        Rasterize a preview description.

        Args:
            source: Source PIL Image
            description: Result of compose()
            canvas_size: Preview canvas (width, height); defaults to source size
            background: Optional RGBA canvas color (transparent by default)

        Returns:
            RGBA PIL Image of size canvas_size

        Raises:
            TypeError: If source is not a PIL Image
        """
        if not hasattr(source, "size"):
            raise TypeError(f"Expected PIL Image, got {type(source)}")

        canvas_size = canvas_size or source.size
        if background is None:
            result = blank_surface(canvas_size)
        else:
            result = Image.new("RGBA", canvas_size, background)

        for layer in sorted(description.layers, key=lambda item: item.z_index):
            rendered = PreviewCompositor.render_layer(source, layer, canvas_size)
            if layer.opacity < 1.0:
                alpha = rendered.getchannel("A").point(lambda value: int(value * layer.opacity))
                rendered.putalpha(alpha)
            result = Image.alpha_composite(result, rendered)

        return result
