"""
Edit Session controller.

The session owns every piece of mutable edit state for one loaded image:
the adjustment vector and its history (through AdjustmentModel), the
geometry, the comparison mode and the split position. The shell calls the
command methods below one at a time; nothing else mutates this state.

State machine:
    NO_IMAGE -> IMAGE_LOADED (defaults, one history entry) -> EDITING
    Loading another image always returns to IMAGE_LOADED.

Classes:
    GeometryHistoryPolicy: Whether zoom/rotation changes enter the history
    SessionConfig: Runtime options for a session
    SessionState: NO_IMAGE / IMAGE_LOADED / EDITING
    EditSession: The controller
"""

from concurrent.futures import Future
from dataclasses import dataclass, asdict, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
import logging

from PF_Libs.AdjustLib.adjustment_model import AdjustmentModel
from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector, EditSnapshot, GeometryState
from PF_Libs.AdjustLib.presets import get_preset
from PF_Libs.RenderLib.compositor import (
    ComparisonMode,
    PreviewCompositor,
    PreviewDescription,
    clamp_split_position,
)
from PF_Libs.RenderLib.export_engine import ExportConfig, ExportEngine, ExportResult
from PF_Libs.SessionLib.image_source import ImageResource
from PF_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_SPLIT_POSITION,
    EXPORT_SUPERSAMPLE_SCALE,
    GEOMETRY_ROTATION,
    GEOMETRY_ZOOM,
    ROTATION_STEP,
    VALUE_PRECISION,
    ZOOM_STEP,
)

logger = logging.getLogger(__name__)


class GeometryHistoryPolicy(str, Enum):
    """How zoom and rotation relate to the undo/redo history.

    LIVE_ONLY: geometry changes apply immediately and are never recorded;
               undo/redo only touch the adjustment vector.
    RECORDED: every geometry change is committed as a history snapshot and
              undo/redo restore geometry together with the vector.
    """
    LIVE_ONLY = "live_only"
    RECORDED = "recorded"


class SessionState(str, Enum):
    NO_IMAGE = "no_image"
    IMAGE_LOADED = "image_loaded"
    EDITING = "editing"


@dataclass
class SessionConfig:
    """Configuration for an edit session.

    Attributes:
        geometry_history: GeometryHistoryPolicy for zoom/rotation
        export_format: Initial download format ('png' or 'jpg')
        export_scale: Supersampling factor used by exports
        download_directory: Where export() writes files (None = current directory)
        split_position: Initial before/after split position (0-100)
    """
    geometry_history: GeometryHistoryPolicy = GeometryHistoryPolicy.LIVE_ONLY
    export_format: str = DEFAULT_EXPORT_FORMAT
    export_scale: int = EXPORT_SUPERSAMPLE_SCALE
    download_directory: Optional[str] = None
    split_position: float = DEFAULT_SPLIT_POSITION

    def __post_init__(self):
        self.geometry_history = GeometryHistoryPolicy(self.geometry_history)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["geometry_history"] = self.geometry_history.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


class EditSession:
    """
    Single owner of the edit state of one image.

    Example:
        >>> session = EditSession()
        >>> session.load_image(ImageResource.from_path("photo.jpg"))
        >>> session.apply_adjustment({"brightness": 110})
        >>> session.apply_preset("Vintage")
        >>> session.undo().brightness
        110.0
        >>> session.export("downloads")
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        export_engine: Optional[ExportEngine] = None,
    ):
        self.config = config or SessionConfig()
        self.export_engine = export_engine or ExportEngine(
            ExportConfig(export_format=self.config.export_format, scale=self.config.export_scale)
        )

        self._image: Optional[ImageResource] = None
        self._load_token = 0
        self._geometry = GeometryState()
        self._comparison_mode = ComparisonMode.SPLIT
        self._split_position = clamp_split_position(self.config.split_position)

        geometry_source = self._current_geometry if self.records_geometry else None
        self._model = AdjustmentModel(geometry_source=geometry_source)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def records_geometry(self) -> bool:
        return self.config.geometry_history is GeometryHistoryPolicy.RECORDED

    @property
    def image(self) -> Optional[ImageResource]:
        return self._image

    @property
    def has_image(self) -> bool:
        return self._image is not None

    @property
    def state(self) -> SessionState:
        if self._image is None:
            return SessionState.NO_IMAGE
        if len(self._model.history) == 1:
            return SessionState.IMAGE_LOADED
        return SessionState.EDITING

    @property
    def adjustments(self) -> AdjustmentVector:
        return self._model.vector

    @property
    def geometry(self) -> GeometryState:
        return self._geometry

    @property
    def history(self):
        return self._model.history

    @property
    def can_undo(self) -> bool:
        return self._model.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._model.history.can_redo

    @property
    def comparison_mode(self) -> ComparisonMode:
        return self._comparison_mode

    @property
    def split_position(self) -> float:
        return self._split_position

    @property
    def export_format(self) -> str:
        return self.export_engine.config.export_format

    @export_format.setter
    def export_format(self, value: str) -> None:
        self.export_engine.config = replace(self.export_engine.config, export_format=value)

    def _current_geometry(self) -> GeometryState:
        return self._geometry

    # ------------------------------------------------------------------
    # Image loading
    # ------------------------------------------------------------------

    def load_image(self, resource: ImageResource) -> None:
        """Replace the image and start a fresh session for it."""
        self._load_token += 1
        self._install(resource)

    def begin_load(self) -> int:
        """
        Announce an asynchronous load.

        Returns:
            Token to pass to complete_load() when decoding finishes
        """
        self._load_token += 1
        return self._load_token

    def complete_load(self, token: int, resource: ImageResource) -> bool:
        """
        Install a decoded image if its load has not been superseded.

        Returns:
            True if the image was installed, False if a newer load started
        """
        if token != self._load_token:
            logger.debug(f"Discarding superseded decode of {resource.origin or '<image>'}")
            return False
        self._install(resource)
        return True

    def _install(self, resource: ImageResource) -> None:
        if not isinstance(resource, ImageResource):
            raise TypeError(f"Expected ImageResource, got {type(resource)}")
        self._image = resource
        self._geometry = GeometryState()
        self._model.reset()
        logger.debug(f"Loaded image {resource.origin or '<image>'} {resource.width}x{resource.height}")

    # ------------------------------------------------------------------
    # Adjustment commands
    # ------------------------------------------------------------------

    def apply_adjustment(self, delta: Mapping[str, float]) -> AdjustmentVector:
        """Merge channel values (clamped); commits to history if anything changed."""
        self._model.apply(delta)
        return self._model.vector

    def step_adjustment(self, channel: str, direction: int) -> AdjustmentVector:
        """Nudge a channel by its step (-1 or +1)."""
        self._model.step(channel, direction)
        return self._model.vector

    def apply_preset(self, name: str) -> AdjustmentVector:
        """Overwrite all channels with a preset (at most one history commit)."""
        self._model.apply(get_preset(name).as_delta())
        return self._model.vector

    def undo(self) -> AdjustmentVector:
        snapshot = self._model.history.undo()
        if snapshot is not None:
            self._restore(snapshot)
        return self._model.vector

    def redo(self) -> AdjustmentVector:
        snapshot = self._model.history.redo()
        if snapshot is not None:
            self._restore(snapshot)
        return self._model.vector

    def _restore(self, snapshot: EditSnapshot) -> None:
        self._model.restore(snapshot.adjustments)
        if snapshot.geometry is not None:
            self._geometry = snapshot.geometry

    def reset(self) -> None:
        """Defaults for adjustments and geometry; history restarts."""
        self._geometry = GeometryState()
        self._model.reset()

    # ------------------------------------------------------------------
    # Geometry commands
    # ------------------------------------------------------------------

    def set_geometry(
        self,
        zoom: Optional[float] = None,
        rotation: Optional[float] = None,
    ) -> GeometryState:
        """Set zoom and/or rotation (clamped)."""
        changes = {}
        if zoom is not None:
            changes[GEOMETRY_ZOOM] = zoom
        if rotation is not None:
            changes[GEOMETRY_ROTATION] = rotation

        candidate = replace(self._geometry, **changes)
        if candidate != self._geometry:
            self._geometry = candidate
            if self.records_geometry:
                self._model.history.commit(self._model.snapshot())
        return self._geometry

    def step_geometry(self, name: str, direction: int) -> GeometryState:
        """
        Nudge zoom (by 0.1) or rotation (by 5 degrees).

        Raises:
            ValueError: If direction is not -1/+1
            KeyError: If name is not 'zoom' or 'rotation'
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")

        if name == GEOMETRY_ZOOM:
            return self.set_geometry(
                zoom=round(self._geometry.zoom + ZOOM_STEP * direction, VALUE_PRECISION)
            )
        if name == GEOMETRY_ROTATION:
            return self.set_geometry(rotation=self._geometry.rotation + ROTATION_STEP * direction)
        raise KeyError(f"Unknown geometry field '{name}'. Valid fields: zoom, rotation")

    # ------------------------------------------------------------------
    # Comparison view
    # ------------------------------------------------------------------

    def set_comparison_mode(self, mode: ComparisonMode) -> None:
        self._comparison_mode = ComparisonMode(mode)

    def toggle_before(self) -> ComparisonMode:
        """Flip between the full-before view and the split view."""
        if self._comparison_mode is ComparisonMode.BEFORE:
            self._comparison_mode = ComparisonMode.SPLIT
        else:
            self._comparison_mode = ComparisonMode.BEFORE
        return self._comparison_mode

    def set_split_position(self, position: float) -> float:
        self._split_position = clamp_split_position(position)
        return self._split_position

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def preview(self) -> PreviewDescription:
        """Derive the preview description from the current state."""
        return PreviewCompositor.compose(
            self._model.vector,
            self._geometry,
            self._comparison_mode,
            self._split_position,
        )

    def render_preview(
        self,
        canvas_size: Optional[Tuple[int, int]] = None,
        background: Optional[Tuple[int, int, int, int]] = None,
    ) -> Optional[Any]:
        """Rasterize the preview, or None when no image is loaded."""
        if self._image is None:
            return None
        return PreviewCompositor.render(self._image.image, self.preview(), canvas_size, background)

    def _download_directory(self, directory: Optional[Path]) -> Path:
        if directory is not None:
            return Path(directory)
        if self.config.download_directory:
            return Path(self.config.download_directory)
        return Path.cwd()

    def export(self, directory: Optional[Path] = None) -> Optional[ExportResult]:
        """
        Rasterize, encode and deliver the current edit.

        Returns:
            ExportResult with its path set, or None when no image is loaded
        """
        if self._image is None:
            logger.debug("Export requested without an image, ignoring")
            return None

        result = self.export_engine.export(self._image.image, self._model.vector, self._geometry)
        self.export_engine.deliver(result, self._download_directory(directory))
        return result

    def export_async(
        self,
        directory: Optional[Path] = None,
        on_complete: Optional[Callable[[ExportResult], None]] = None,
    ) -> "Optional[Future[ExportResult]]":
        """Like export(), on the engine's worker thread."""
        if self._image is None:
            logger.debug("Export requested without an image, ignoring")
            return None

        # Snapshots are immutable, so the worker can read them safely
        return self.export_engine.export_async(
            self._image.image,
            self._model.vector,
            self._geometry,
            on_complete=on_complete,
            directory=self._download_directory(directory),
        )
