"""
Preset catalog.

Named, complete adjustment vectors. Applying a preset overwrites all 8
channels through the regular AdjustmentModel.apply path.
"""

from dataclasses import dataclass
from typing import Dict, List
import re

from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector


@dataclass(frozen=True)
class PresetEntry:
    name: str
    vector: AdjustmentVector

    @property
    def label(self) -> str:
        """Display label, e.g. 'CoolBlue' -> 'Cool Blue'."""
        return re.sub(r"([A-Z])", r" \1", self.name).strip()

    def as_delta(self) -> Dict[str, float]:
        return self.vector.to_dict()


PRESETS: Dict[str, PresetEntry] = {
    entry.name: entry
    for entry in (
        PresetEntry(
            "Warm",
            AdjustmentVector(brightness=110, contrast=105, saturation=120, sepia=30, hue_rotate=10),
        ),
        PresetEntry(
            "BlackWhite",
            AdjustmentVector(saturation=0, grayscale=100),
        ),
        PresetEntry(
            "Vintage",
            AdjustmentVector(
                brightness=95,
                contrast=90,
                saturation=80,
                grayscale=10,
                sepia=40,
                hue_rotate=15,
                blur=0.5,
            ),
        ),
        PresetEntry(
            "CoolBlue",
            AdjustmentVector(brightness=105, contrast=110, hue_rotate=180),
        ),
    )
}


def list_presets() -> List[PresetEntry]:
    """Return the presets in display order."""
    return list(PRESETS.values())


def get_preset(name: str) -> PresetEntry:
    """
    Look up a preset by name.

    Raises:
        KeyError: If no preset has that name
    """
    if name not in PRESETS:
        raise KeyError(
            f"Unknown preset '{name}'. Available presets: {', '.join(PRESETS)}"
        )
    return PRESETS[name]
