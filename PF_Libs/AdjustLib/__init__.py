"""
AdjustLib - Non-destructive adjustment state

This module provides the adjustment parameter model, its undo/redo
history and the preset catalog for the Photo Filter Studio project.
"""

from PF_Libs.AdjustLib.adjustment_models import (
    AdjustmentVector,
    GeometryState,
    EditSnapshot,
    resolve_channel,
    clamp_channel,
)
from PF_Libs.AdjustLib.history import HistoryLog
from PF_Libs.AdjustLib.adjustment_model import AdjustmentModel
from PF_Libs.AdjustLib.presets import (
    PresetEntry,
    PRESETS,
    list_presets,
    get_preset,
)

__all__ = [
    "AdjustmentVector",
    "GeometryState",
    "EditSnapshot",
    "resolve_channel",
    "clamp_channel",
    "HistoryLog",
    "AdjustmentModel",
    "PresetEntry",
    "PRESETS",
    "list_presets",
    "get_preset",
]
