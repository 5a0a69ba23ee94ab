"""
Tests for the preset catalog.
"""

import pytest

from PF_Libs.AdjustLib.adjustment_model import AdjustmentModel
from PF_Libs.AdjustLib.adjustment_models import AdjustmentVector
from PF_Libs.AdjustLib.presets import PRESETS, get_preset, list_presets
from PF_Libs.constants import CHANNEL_NAMES


class TestPresetCatalog:
    def test_display_order(self):
        assert [preset.name for preset in list_presets()] == [
            "Warm",
            "BlackWhite",
            "Vintage",
            "CoolBlue",
        ]

    def test_labels(self):
        labels = {preset.name: preset.label for preset in list_presets()}

        assert labels["Warm"] == "Warm"
        assert labels["BlackWhite"] == "Black White"
        assert labels["CoolBlue"] == "Cool Blue"

    def test_black_white_values(self):
        vector = get_preset("BlackWhite").vector

        assert vector == AdjustmentVector(
            brightness=100,
            contrast=100,
            saturation=0,
            grayscale=100,
            sepia=0,
            invert=0,
            hue_rotate=0,
            blur=0,
        )

    def test_vintage_values(self):
        vector = get_preset("Vintage").vector

        assert vector.brightness == 95
        assert vector.contrast == 90
        assert vector.saturation == 80
        assert vector.grayscale == 10
        assert vector.sepia == 40
        assert vector.hue_rotate == 15
        assert vector.blur == 0.5

    def test_warm_and_cool_blue(self):
        warm = get_preset("Warm").vector
        cool = get_preset("CoolBlue").vector

        assert (warm.brightness, warm.contrast, warm.saturation) == (110, 105, 120)
        assert (warm.sepia, warm.hue_rotate) == (30, 10)
        assert (cool.brightness, cool.contrast, cool.hue_rotate) == (105, 110, 180)

    def test_delta_covers_every_channel(self):
        for preset in PRESETS.values():
            assert set(preset.as_delta()) == set(CHANNEL_NAMES)

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("Sunset")


class TestApplyingPresets:
    def test_preset_is_a_single_commit(self):
        model = AdjustmentModel()

        model.apply(get_preset("BlackWhite").as_delta())

        assert len(model.history) == 2
        assert model.vector == get_preset("BlackWhite").vector

    def test_reapplying_preset_is_noop(self):
        model = AdjustmentModel()
        model.apply(get_preset("Vintage").as_delta())

        changed = model.apply(get_preset("Vintage").as_delta())

        assert not changed
        assert len(model.history) == 2

    def test_preset_overwrites_previous_edits(self):
        model = AdjustmentModel()
        model.apply({"invert": 80, "blur": 3})

        model.apply(get_preset("Warm").as_delta())

        assert model.vector.invert == 0
        assert model.vector.blur == 0
        assert model.vector.sepia == 30
