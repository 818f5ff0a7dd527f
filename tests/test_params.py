"""
Tests for slider schemas and key=value parameter overrides.
"""

import pytest

from logomotion.effects import EffectId, get_effect, line_halftone
from logomotion.params import ParamSpec, clamp_to_schema, parse_overrides, static_schema


SCHEMA = line_halftone.get_param_schema()
DEFAULTS = line_halftone.get_default_params()


class TestParamSpec:

    def test_integer_detection(self):
        assert ParamSpec("cols", "Columns", 10, 120, 1, 60).is_integer
        assert not ParamSpec("speed", "Speed", 0, 6, 0.1, 2.0).is_integer

    def test_to_dict(self):
        spec = ParamSpec("speed", "Speed", 0, 6, 0.1, 2.0, motion_only=True)
        d = spec.to_dict()
        assert d["key"] == "speed"
        assert d["motion_only"] is True

    def test_static_schema_drops_motion_sliders(self):
        keys = [s.key for s in static_schema(SCHEMA)]
        assert "density" in keys
        assert "speed" not in keys
        assert "pulse" not in keys


class TestParseOverrides:

    def test_numbers_are_converted(self):
        params = parse_overrides(["density=40", "contrast=7.5"], SCHEMA, DEFAULTS)
        assert params == {"density": 40, "contrast": 7.5}
        assert isinstance(params["density"], int)

    def test_integer_slider_rounds(self):
        assert parse_overrides(["density=40.6"], SCHEMA, DEFAULTS)["density"] == 41

    def test_values_are_clamped(self):
        params = parse_overrides(["density=9999", "contrast=-3"], SCHEMA, DEFAULTS)
        assert params["density"] == 150
        assert params["contrast"] == 1

    def test_color_stays_string(self):
        assert parse_overrides(["color=#ff8800"], SCHEMA, DEFAULTS)["color"] == "#ff8800"

    def test_auto_means_default(self):
        schema = get_effect(EffectId.VERTICAL_LINES).get_param_schema()
        assert parse_overrides(["rows=auto"], schema)["rows"] is None

    def test_dashes_become_underscores(self):
        schema = get_effect(EffectId.VERTICAL_LINES).get_param_schema()
        params = parse_overrides(["max-stroke=2"], schema)
        assert params["max_stroke"] == 2

    def test_unknown_keys_pass_through(self):
        assert parse_overrides(["seed=7"], SCHEMA, {"seed": 1}) == {"seed": 7}

    def test_missing_equals_raises(self):
        with pytest.raises(ValueError):
            parse_overrides(["density"], SCHEMA, DEFAULTS)


def test_clamp_leaves_strings_and_none():
    params = clamp_to_schema({"color": "#123456", "density": None, "contrast": 50}, SCHEMA)
    assert params == {"color": "#123456", "density": None, "contrast": 20}
