"""
Logo Motion — Effect Registry
Closed set of production effects. Each one is a module exposing the same five
functions; the registry binds them to a stable id and display title.
"""

import importlib
import re
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Callable, Dict, List, Union

from logomotion.effects import (
    ellipse_grid,
    horizontal_lines,
    line_halftone,
    particle_scatter,
    star_glint,
    vertical_lines,
)


class UnknownEffectError(KeyError):
    """No registered effect matches the requested name."""


class EffectId(Enum):
    PARTICLE_SCATTER = "particle_scatter"
    ELLIPSE_GRID = "ellipse_grid"
    HORIZONTAL_LINES = "horizontal_lines"
    VERTICAL_LINES = "vertical_lines"
    STAR_GLINT = "star_glint"
    LINE_HALFTONE = "line_halftone"


@dataclass(frozen=True)
class EffectModule:
    """The contract functions of one effect, plus naming metadata."""

    effect_id: EffectId
    title: str
    module_name: str
    get_default_params: Callable
    get_param_schema: Callable
    generate: Callable
    init: Callable
    draw_frame: Callable

    @property
    def slug(self) -> str:
        return slugify(self.title)

    @property
    def module_file(self) -> str:
        return importlib.import_module(self.module_name).__file__


def slugify(text: str) -> str:
    """'Star Glint' -> 'star-glint'; used for lookups and file names."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "untitled"


def _record(effect_id: EffectId, title: str, module: ModuleType) -> EffectModule:
    return EffectModule(
        effect_id=effect_id,
        title=title,
        module_name=module.__name__,
        get_default_params=module.get_default_params,
        get_param_schema=module.get_param_schema,
        generate=module.generate,
        init=module.init,
        draw_frame=module.draw_frame,
    )


# Display order used by the hosts.
EFFECTS: Dict[EffectId, EffectModule] = {
    EffectId.PARTICLE_SCATTER: _record(EffectId.PARTICLE_SCATTER, "Particle Scatter", particle_scatter),
    EffectId.ELLIPSE_GRID: _record(EffectId.ELLIPSE_GRID, "Ellipse Grid", ellipse_grid),
    EffectId.HORIZONTAL_LINES: _record(EffectId.HORIZONTAL_LINES, "Horizontal Lines", horizontal_lines),
    EffectId.VERTICAL_LINES: _record(EffectId.VERTICAL_LINES, "Vertical Lines", vertical_lines),
    EffectId.STAR_GLINT: _record(EffectId.STAR_GLINT, "Star Glint", star_glint),
    EffectId.LINE_HALFTONE: _record(EffectId.LINE_HALFTONE, "Line Halftone", line_halftone),
}


def list_effects() -> List[EffectModule]:
    return list(EFFECTS.values())


def get_effect(name: Union[EffectId, str]) -> EffectModule:
    """
    Look up an effect by EffectId, id value ('star_glint') or title slug
    ('star-glint', 'Star Glint').

    Raises:
        UnknownEffectError: nothing matches.
    """
    if isinstance(name, EffectId):
        return EFFECTS[name]
    key = slugify(str(name))
    for effect in EFFECTS.values():
        if key in (effect.slug, slugify(effect.effect_id.value)):
            return effect
    raise UnknownEffectError(name)
