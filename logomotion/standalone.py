"""
Logo Motion — Standalone Script Export
Builds a single self-contained Python script that replays one effect on one
logo without the app: brightness grid and parameters are embedded as data,
and the math helpers, the Surface class and the effect's runtime functions
are copied in as source text.

Effect functions are pulled from the module *file* with `ast`, never from live
function objects, so the script carries exactly the code that ships.
"""

import ast
import json
import logging
from typing import Iterable, List, Optional

from logomotion import mathutils, surface
from logomotion.config import GIF_BACKDROP
from logomotion.mathutils import merge_params
from logomotion.sampler import output_size

logger = logging.getLogger(__name__)

EXPORT_NAMES_VAR = "EXPORT_SOURCE"


def _read(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def module_body(path: str) -> str:
    """Module source with its leading docstring removed."""
    source = _read(path)
    tree = ast.parse(source)
    if tree.body and isinstance(tree.body[0], ast.Expr) and isinstance(
            getattr(tree.body[0], "value", None), ast.Constant) and isinstance(
            tree.body[0].value.value, str):
        lines = source.splitlines(keepends=True)
        source = "".join(lines[tree.body[0].end_lineno:])
    return source.strip("\n") + "\n"


def _assigned_name(node) -> Optional[str]:
    if isinstance(node, ast.Assign) and len(node.targets) == 1 and isinstance(node.targets[0], ast.Name):
        return node.targets[0].id
    if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        return node.target.id
    return None


def export_names(tree: ast.Module) -> List[str]:
    """Names listed in the module's EXPORT_SOURCE tuple."""
    for node in tree.body:
        if _assigned_name(node) == EXPORT_NAMES_VAR:
            return list(ast.literal_eval(node.value))
    raise ValueError(f"Effect module defines no {EXPORT_NAMES_VAR}")


def extract_effect_source(path: str, names: Optional[Iterable[str]] = None) -> str:
    """
    Source text of the named top-level functions and constants of an effect
    module, in file order, preceded by its standard-library imports.

    Imports from the logomotion package are dropped; the script provides
    those helpers itself.

    Raises:
        ValueError: a requested name is not defined at module level.
    """
    source = _read(path)
    tree = ast.parse(source)
    wanted = list(names) if names is not None else export_names(tree)

    imports = []
    chunks = []
    found = set()
    for node in tree.body:
        if isinstance(node, ast.Import):
            imports.append(ast.get_source_segment(source, node))
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0 and not (node.module or "").startswith("logomotion"):
                imports.append(ast.get_source_segment(source, node))
        elif isinstance(node, (ast.FunctionDef, ast.Assign, ast.AnnAssign)):
            name = node.name if isinstance(node, ast.FunctionDef) else _assigned_name(node)
            if name in wanted:
                chunks.append(ast.get_source_segment(source, node))
                found.add(name)

    missing = [n for n in wanted if n not in found]
    if missing:
        raise ValueError(f"{path}: not defined at module level: {', '.join(missing)}")

    return "\n".join(imports) + "\n\n\n" + "\n\n\n".join(chunks) + "\n"


# ═══════════════════════════════════════════════════════════════════════════════
# SCRIPT ASSEMBLY
# ═══════════════════════════════════════════════════════════════════════════════

_HEADER = '''#!/usr/bin/env python3
"""
{title} — standalone animation{logo_part}.

Generated by Logo Motion. Needs numpy and opencv-python.
Resize the window freely; press q or Esc to quit.
"""

import json
import time
from types import SimpleNamespace
'''

_HARNESS = '''
# ─── Window Harness ──────────────────────────────────────────────────────────────

WINDOW = {window!r}
BACKDROP = {backdrop!r}
OUTPUT_SIZE = {output_size!r}
TARGET_FPS = 24


def main():
    width, height = OUTPUT_SIZE
    state = init(SAMPLE, PARAMS, width, height)
    fit = min(960 / width, 540 / height)

    cv2.namedWindow(WINDOW, cv2.WINDOW_NORMAL)
    cv2.resizeWindow(WINDOW, int(width * fit), int(height * fit))

    backdrop_rgb = np.array(hex_to_rgb(BACKDROP), dtype=np.uint8)
    surface_ = None
    start = time.monotonic()
    while True:
        frame_start = time.monotonic()
        try:
            _, _, win_w, win_h = cv2.getWindowImageRect(WINDOW)
        except cv2.error:
            break
        if win_w <= 0 or win_h <= 0:
            win_w, win_h = int(width * fit), int(height * fit)

        # Keep the artwork aspect; letterbox the rest of the window
        scale = min(win_w / width, win_h / height)
        if surface_ is None or surface_.scale != scale:
            surface_ = Surface(width, height, scale)

        draw_frame(surface_, state, time.monotonic() - start)
        frame = surface_.composite_over(BACKDROP)

        canvas = np.empty((win_h, win_w, 3), dtype=np.uint8)
        canvas[:] = backdrop_rgb
        fh, fw = frame.shape[:2]
        top = (win_h - fh) // 2
        left = (win_w - fw) // 2
        canvas[top:top + fh, left:left + fw] = frame
        cv2.imshow(WINDOW, cv2.cvtColor(canvas, cv2.COLOR_RGB2BGR))

        render_ms = int((time.monotonic() - frame_start) * 1000)
        key = cv2.waitKey(max(1, 1000 // TARGET_FPS - render_ms)) & 0xFF
        if key in (27, ord("q")):
            break
        if cv2.getWindowProperty(WINDOW, cv2.WND_PROP_VISIBLE) < 1:
            break
    cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
'''


def _section(title: str) -> str:
    return f"\n# ─── {title} " + "─" * max(3, 76 - len(title)) + "\n\n"


def build_standalone_script(
    effect,
    sample,
    params=None,
    logo_name: Optional[str] = None,
    backdrop: str = GIF_BACKDROP,
) -> str:
    """
    Assemble the standalone script for one effect on one sampled logo.

    The embedded PARAMS are the fully merged parameter set, so the script
    renders exactly what the live preview shows at the same t.
    """
    merged = merge_params(effect.get_default_params(), params)
    width, height = output_size(sample)
    sample_json = json.dumps({
        "grid": sample.grid.tolist(),
        "cols": sample.cols,
        "rows": sample.rows,
    }, separators=(",", ":"))

    parts = [
        _HEADER.format(
            title=effect.title,
            logo_part=f" of {logo_name}" if logo_name else "",
        ),
        _section("Math Utilities"),
        module_body(mathutils.__file__),
        _section("Drawing Surface"),
        module_body(surface.__file__),
        _section(f"Effect: {effect.title}"),
        extract_effect_source(effect.module_file),
        _section("Embedded Data"),
        f"PARAMS = json.loads({json.dumps(merged)!r})\n\n",
        f"_SAMPLE_DATA = json.loads({sample_json!r})\n",
        "SAMPLE = SimpleNamespace(\n"
        "    grid=np.array(_SAMPLE_DATA[\"grid\"], dtype=np.float64),\n"
        "    cols=_SAMPLE_DATA[\"cols\"],\n"
        "    rows=_SAMPLE_DATA[\"rows\"],\n"
        ")\n",
        _HARNESS.format(
            window=f"{effect.title} — Logo Motion",
            backdrop=backdrop,
            output_size=(width, height),
        ),
    ]
    script = "".join(parts)
    logger.debug("Standalone script for %s: %d bytes", effect.title, len(script))
    return script


def write_standalone(path: str, effect, sample, params=None,
                     logo_name: Optional[str] = None, backdrop: str = GIF_BACKDROP) -> str:
    script = build_standalone_script(effect, sample, params, logo_name, backdrop)
    with open(path, "w", encoding="utf-8") as f:
        f.write(script)
    logger.info("Standalone script saved: %s", path)
    return path
