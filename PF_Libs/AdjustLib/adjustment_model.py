"""
Adjustment Model.

Owns the current AdjustmentVector and routes every change through a single
merge path so that history commits happen in exactly one place.

Classes:
    AdjustmentModel: Current vector plus its HistoryLog
"""

from typing import Callable, Mapping, Optional
import logging

from PF_Libs.AdjustLib.adjustment_models import (
    AdjustmentVector,
    EditSnapshot,
    GeometryState,
    clamp_channel,
    resolve_channel,
)
from PF_Libs.AdjustLib.history import HistoryLog
from PF_Libs.constants import CHANNEL_STEPS

logger = logging.getLogger(__name__)

GeometrySource = Callable[[], GeometryState]


class AdjustmentModel:
    """
    Current adjustment vector with merge, step and reset operations.

    Every change that alters the vector is committed to ``history`` as an
    EditSnapshot. When ``geometry_source`` is given, snapshots also capture
    the geometry returned by it at commit time.

    Example:
        >>> model = AdjustmentModel()
        >>> model.apply({"brightness": 110})
        True
        >>> model.apply({"brightness": 110})
        False
        >>> len(model.history)
        2
    """

    def __init__(self, geometry_source: Optional[GeometrySource] = None):
        self._vector = AdjustmentVector()
        self._geometry_source = geometry_source
        self.history: HistoryLog[EditSnapshot] = HistoryLog(self.snapshot())

    @property
    def vector(self) -> AdjustmentVector:
        return self._vector

    def snapshot(self) -> EditSnapshot:
        geometry = self._geometry_source() if self._geometry_source else None
        return EditSnapshot(adjustments=self._vector, geometry=geometry)

    def apply(self, delta: Mapping[str, float]) -> bool:
        """
        Merge a partial channel map into the current vector.

        Touched channels are clamped to their domain and rounded to 2
        decimal places. The result is committed only if it differs from
        the current vector.

        Args:
            delta: Mapping of channel name (or alias) to new value

        Returns:
            True if the vector changed and a history entry was added

        Raises:
            KeyError: If delta names an unknown channel
        """
        candidate = self._vector.merged(delta)
        if candidate == self._vector:
            return False

        self._vector = candidate
        self.history.commit(self.snapshot())
        logger.debug(f"Committed adjustment {dict(delta)} (history size {len(self.history)})")
        return True

    def step(self, channel: str, direction: int) -> bool:
        """
        Nudge one channel by its step size.

        Args:
            channel: Channel name (or alias)
            direction: -1 to decrease, +1 to increase

        Returns:
            True if the vector changed

        Raises:
            ValueError: If direction is not -1 or +1
            KeyError: If channel is unknown
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")

        name = resolve_channel(channel)
        target = clamp_channel(name, self._vector[name] + CHANNEL_STEPS[name] * direction)
        return self.apply({name: target})

    def reset(self) -> None:
        """Return to default values and restart the history from them."""
        self._vector = AdjustmentVector()
        self.history.reinitialize(self.snapshot())

    def restore(self, vector: AdjustmentVector) -> None:
        """Set the vector without committing (history navigation)."""
        self._vector = vector
