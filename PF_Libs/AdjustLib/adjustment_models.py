"""
Adjustment data models for Photo Filter Studio.

This module defines the immutable value types that flow through the
adjustment pipeline.

Classes:
    AdjustmentVector: The 8 color/blur channels of an edit
    GeometryState: Zoom factor and rotation angle of the preview/export
    EditSnapshot: One entry of the undo/redo history

Functions:
    resolve_channel: Map a channel name or alias to its attribute name
    clamp_channel: Clamp and round a value into a channel's domain
"""

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Mapping, Optional

from PF_Libs.constants import (
    CHANNEL_ALIASES,
    CHANNEL_DEFAULTS,
    CHANNEL_DOMAINS,
    CHANNEL_NAMES,
    ROTATION_DEFAULT,
    ROTATION_MAX,
    ROTATION_MIN,
    VALUE_PRECISION,
    ZOOM_DEFAULT,
    ZOOM_MAX,
    ZOOM_MIN,
)


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, float(value)))


def resolve_channel(name: str) -> str:
    """
    Resolve a channel name or alias to the AdjustmentVector attribute name.

    Args:
        name: Channel name ('brightness', 'hue_rotate', 'hueRotate', ...)

    Returns:
        The canonical channel name

    Raises:
        KeyError: If the name is not a known channel
    """
    name = CHANNEL_ALIASES.get(name, name)
    if name not in CHANNEL_DOMAINS:
        raise KeyError(
            f"Unknown adjustment channel '{name}'. "
            f"Valid channels: {', '.join(CHANNEL_NAMES)}"
        )
    return name


def clamp_channel(name: str, value: float) -> float:
    """Clamp a value into the channel's domain, rounded to 2 decimals."""
    minimum, maximum = CHANNEL_DOMAINS[resolve_channel(name)]
    return round(_clamp(value, minimum, maximum), VALUE_PRECISION)


@dataclass(frozen=True)
class AdjustmentVector:
    """Color and blur parameters of an edit.

    All values use the units of the CSS filter functions they drive:
    percentages for the first six channels, degrees for hue_rotate and
    pixels for blur. Equality is structural over all 8 channels.
    """
    brightness: float = CHANNEL_DEFAULTS["brightness"]
    contrast: float = CHANNEL_DEFAULTS["contrast"]
    saturation: float = CHANNEL_DEFAULTS["saturation"]
    grayscale: float = CHANNEL_DEFAULTS["grayscale"]
    sepia: float = CHANNEL_DEFAULTS["sepia"]
    invert: float = CHANNEL_DEFAULTS["invert"]
    hue_rotate: float = CHANNEL_DEFAULTS["hue_rotate"]
    blur: float = CHANNEL_DEFAULTS["blur"]

    def __post_init__(self):
        # Values only ever enter the vector through clamping
        for name in CHANNEL_NAMES:
            object.__setattr__(self, name, clamp_channel(name, getattr(self, name)))

    def __getitem__(self, name: str) -> float:
        return getattr(self, resolve_channel(name))

    def merged(self, delta: Mapping[str, float]) -> "AdjustmentVector":
        """Return a copy with the channels in delta overwritten (clamped)."""
        changes = {resolve_channel(name): value for name, value in delta.items()}
        return replace(self, **changes)

    def is_default(self) -> bool:
        return self == AdjustmentVector()

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AdjustmentVector":
        """Create from dictionary, accepting channel aliases."""
        return cls().merged(data)


@dataclass(frozen=True)
class GeometryState:
    """Zoom factor and rotation (degrees) applied to the whole image."""
    zoom: float = ZOOM_DEFAULT
    rotation: float = ROTATION_DEFAULT

    def __post_init__(self):
        object.__setattr__(
            self, "zoom", round(_clamp(self.zoom, ZOOM_MIN, ZOOM_MAX), VALUE_PRECISION)
        )
        object.__setattr__(self, "rotation", _clamp(self.rotation, ROTATION_MIN, ROTATION_MAX))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GeometryState":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass(frozen=True)
class EditSnapshot:
    """History entry.

    geometry is only populated when geometry changes are recorded in the
    history; otherwise it stays None and undo/redo leave geometry alone.
    """
    adjustments: AdjustmentVector
    geometry: Optional[GeometryState] = None
