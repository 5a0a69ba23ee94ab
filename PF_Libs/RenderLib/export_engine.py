"""
Export Engine for Photo Filter Studio.

Rasterizes the current edit into an image file that matches the preview.
The recipe is the same one the compositor uses for its filtered layer:

1. Allocate a transparent surface of source size * scale (2x supersampling)
2. Apply the filter chain to the source
3. Translate to the surface center, rotate, then scale by zoom
4. Draw the source centered at its native size
5. Encode (PNG, or JPEG at quality 0.95) and deliver as
   ``edited-image.<extension>``

Classes:
    ExportConfig: Encoding and delivery options
    ExportResult: Encoded artifact ready for delivery
    ExportEngine: Rasterize, encode, deliver (optionally on a worker thread)
"""

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, asdict
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import logging

from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector, GeometryState
from PF_Libs.RenderLib.render_recipe import build_filter_chain, build_transform, render_layer
from PF_Libs.constants import (
    DEFAULT_EXPORT_FORMAT,
    EXPORT_FILE_STEM,
    EXPORT_FORMATS,
    EXPORT_JPEG_QUALITY,
    EXPORT_SUPERSAMPLE_SCALE,
)
from PF_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


@dataclass
class ExportConfig:
    """Configuration for export.

    Attributes:
        export_format: 'png' or 'jpg' ('jpeg' is accepted as an alias)
        quality: JPEG quality as a fraction 0-1 (default: 0.95)
        scale: Supersampling factor of the output surface (default: 2)
        file_stem: Download name without extension (default: 'edited-image')
        overwrite: Replace an existing download instead of numbering it
    """
    export_format: str = DEFAULT_EXPORT_FORMAT
    quality: float = EXPORT_JPEG_QUALITY
    scale: int = EXPORT_SUPERSAMPLE_SCALE
    file_stem: str = EXPORT_FILE_STEM
    overwrite: bool = False

    def __post_init__(self):
        self.export_format = str(self.export_format).lower()
        if self.export_format not in EXPORT_FORMATS:
            raise ValueError(
                f"Unsupported export format: {self.export_format}. "
                f"Valid formats: png, jpg"
            )
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1, got {self.scale}")

    @property
    def pil_format(self) -> str:
        return EXPORT_FORMATS[self.export_format][0]

    @property
    def extension(self) -> str:
        return EXPORT_FORMATS[self.export_format][1]

    @property
    def mime_type(self) -> str:
        return EXPORT_FORMATS[self.export_format][2]

    @property
    def filename(self) -> str:
        return f"{self.file_stem}.{self.extension}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs based on format."""
        kwargs: Dict[str, Any] = {"format": self.pil_format}
        if self.pil_format == "JPEG":
            kwargs["quality"] = max(1, min(100, int(round(self.quality * 100))))
        return kwargs


@dataclass
class ExportResult:
    filename: str
    mime_type: str
    data: bytes
    size: Tuple[int, int]
    path: Optional[Path] = None


ExportCallback = Callable[[ExportResult], None]


class ExportEngine:
    """Rasterizes and encodes edits.

    Rendering and encoding are pure with respect to the session: the engine
    only reads the vector and geometry it is given.
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        self.config = config or ExportConfig()
        self._executor: Optional[ThreadPoolExecutor] = None

    def rasterize(
        self,
        source: Any,
        vector: AdjustmentVector,
        geometry: GeometryState,
        scale: Optional[int] = None,
    ) -> Any:
        """
        Render the edit onto a supersampled surface.

        Args:
            source: Source PIL Image
            vector: Adjustment vector to apply
            geometry: Zoom/rotation to apply
            scale: Surface scale (defaults to config.scale)

        Returns:
            RGBA PIL Image of size (width * scale, height * scale)

        Raises:
            TypeError: If source is not a PIL Image
        """
        if not hasattr(source, "size") or not hasattr(source, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(source)}")

        scale = self.config.scale if scale is None else scale
        width, height = source.size
        surface_size = (int(width * scale), int(height * scale))

        # The source is drawn at native size; only the surface is enlarged
        return render_layer(
            source,
            build_filter_chain(vector),
            build_transform(geometry),
            surface_size,
        )

    def encode(self, surface: Any, config: Optional[ExportConfig] = None) -> bytes:
        """
        Encode a rendered surface.

        JPEG has no alpha channel, so transparent areas are flattened onto
        black.

        Raises:
            OSError: If encoding fails
        """
        config = config or self.config
        kwargs = config.get_save_kwargs()

        image = surface
        if kwargs["format"] == "JPEG" and image.mode in ("RGBA", "LA", "P"):
            rgba = image.convert("RGBA")
            flattened = Image.new("RGB", rgba.size, (0, 0, 0))
            flattened.paste(rgba, mask=rgba.getchannel("A"))
            image = flattened

        buffer = BytesIO()
        try:
            image.save(buffer, **kwargs)
        except Exception as e:
            raise OSError(f"Failed to encode {config.filename}: {str(e)}")
        return buffer.getvalue()

    def export(
        self,
        source: Any,
        vector: AdjustmentVector,
        geometry: GeometryState,
        config: Optional[ExportConfig] = None,
    ) -> ExportResult:
        """Rasterize and encode in one step."""
        config = config or self.config
        surface = self.rasterize(source, vector, geometry, scale=config.scale)
        data = self.encode(surface, config)
        return ExportResult(
            filename=config.filename,
            mime_type=config.mime_type,
            data=data,
            size=surface.size,
        )

    def resolve_download_path(self, directory: Path, filename: str) -> Path:
        """
        Pick the download path, numbering the name if it is taken:
        edited-image.png, edited-image (1).png, edited-image (2).png, ...
        """
        candidate = directory / filename
        if self.config.overwrite or not candidate.exists():
            return candidate

        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while True:
            candidate = directory / f"{stem} ({counter}){suffix}"
            if not candidate.exists():
                return candidate
            counter += 1

    def deliver(self, result: ExportResult, directory: Path) -> Path:
        """
        Write an export result into the downloads directory.

        Returns:
            Path where the file was written

        Raises:
            OSError: If directory is not a directory or the file cannot be written
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        if not directory.is_dir():
            raise OSError(f"Download path is not a directory: {directory}")

        output_file = self.resolve_download_path(directory, result.filename)
        output_file.write_bytes(result.data)
        result.path = output_file

        logger.info(f"Exported {result.size[0]}x{result.size[1]} image to {output_file}")
        return output_file

    def export_async(
        self,
        source: Any,
        vector: AdjustmentVector,
        geometry: GeometryState,
        on_complete: Optional[ExportCallback] = None,
        directory: Optional[Path] = None,
        config: Optional[ExportConfig] = None,
    ) -> "Future[ExportResult]":
        """
        Run export() (and deliver() when directory is given) on a worker
        thread.

        on_complete is called with the result from the worker thread once it
        succeeds. Failures are reported through the returned Future.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="export")

        def job() -> ExportResult:
            result = self.export(source, vector, geometry, config)
            if directory is not None:
                self.deliver(result, directory)
            if on_complete is not None:
                on_complete(result)
            return result

        return self._executor.submit(job)

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
