"""
RenderLib - Preview and export rendering

This module provides the CSS filter operations, the shared rendering
recipe, the live preview compositor and the export engine.
"""

from PF_Libs.RenderLib.css_filters import (
    apply_css_filter,
    CSS_FILTER_FUNCTIONS,
)
from PF_Libs.RenderLib.render_recipe import (
    FilterOperation,
    GeometryTransform,
    FILTER_CHAIN_ORDER,
    build_filter_chain,
    build_transform,
    chain_to_css,
    apply_filter_chain,
    render_layer,
)
from PF_Libs.RenderLib.compositor import (
    ComparisonMode,
    LayerDescription,
    PreviewDescription,
    PreviewCompositor,
    LAYER_ORIGINAL,
    LAYER_FILTERED,
)
from PF_Libs.RenderLib.export_engine import (
    ExportConfig,
    ExportResult,
    ExportEngine,
)

__all__ = [
    "apply_css_filter",
    "CSS_FILTER_FUNCTIONS",
    "FilterOperation",
    "GeometryTransform",
    "FILTER_CHAIN_ORDER",
    "build_filter_chain",
    "build_transform",
    "chain_to_css",
    "apply_filter_chain",
    "render_layer",
    "ComparisonMode",
    "LayerDescription",
    "PreviewDescription",
    "PreviewCompositor",
    "LAYER_ORIGINAL",
    "LAYER_FILTERED",
    "ExportConfig",
    "ExportResult",
    "ExportEngine",
]
