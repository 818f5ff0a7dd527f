"""
Logo Motion — Parameter Schema
Slider descriptors shared by every effect, plus helpers used by the hosts to
turn user input into a parameter set.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional, Sequence

from logomotion.mathutils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParamSpec:
    """One user-facing slider. Internal keys (e.g. a PRNG seed) have no spec."""

    key: str
    label: str
    min: float
    max: float
    step: float
    default: float
    motion_only: bool = False    # only meaningful for the animated controller

    @property
    def is_integer(self) -> bool:
        return float(self.step).is_integer() and float(self.default).is_integer()

    def to_dict(self) -> dict:
        return asdict(self)


def static_schema(schema: Sequence[ParamSpec]) -> List[ParamSpec]:
    """Schema with motion-only sliders removed, for static snapshots."""
    return [s for s in schema if not s.motion_only]


def clamp_to_schema(params: Dict, schema: Iterable[ParamSpec]) -> Dict:
    """
    Clamp numeric values into their slider range.

    Keys without a spec (color, seed, rows, ...) are passed through.
    """
    out = dict(params)
    for spec in schema:
        value = out.get(spec.key)
        if value is None or isinstance(value, str):
            continue
        clamped = clamp(value, spec.min, spec.max)
        if clamped != value:
            logger.debug("Param %s=%s clamped to %s", spec.key, value, clamped)
        out[spec.key] = clamped
    return out


def _coerce(raw: str, spec: Optional[ParamSpec], default):
    text = raw.strip()
    if text.lower() in ("none", "null", "auto"):
        return None
    if text.startswith("#"):
        return text
    try:
        number = float(text)
    except ValueError:
        return text
    if spec is not None and spec.is_integer:
        return int(round(number))
    if isinstance(default, int) and not isinstance(default, bool) and number.is_integer():
        return int(number)
    return number


def parse_overrides(pairs: Iterable[str], schema: Sequence[ParamSpec],
                    defaults: Optional[Dict] = None) -> Dict:
    """
    Parse 'key=value' strings into a parameter dict.

    Numbers are converted (integers for integer sliders), '#rrggbb' stays a
    string and 'none'/'auto' become None so the effect's default applies.

    Raises:
        ValueError: on an entry without '='.
    """
    by_key = {s.key: s for s in schema}
    defaults = defaults or {}
    out = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got '{pair}'")
        key, raw = pair.split("=", 1)
        key = key.strip().replace("-", "_")
        out[key] = _coerce(raw, by_key.get(key), defaults.get(key))
    return clamp_to_schema(out, schema)
