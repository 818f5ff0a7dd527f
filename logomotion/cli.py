"""
Logo Motion — Command Line
Batch access to sampling, static snapshots and exports, plus a launcher for
the preview window.
"""

import os
import sys
import argparse
import logging
from typing import List, Optional

from logomotion import __version__
from logomotion.config import (
    EXPORT_HEIGHT, GIF_FPS, GIF_SECONDS, VIDEO_BITRATE_MBPS, VIDEO_FPS, VIDEO_SECONDS,
)
from logomotion.effects import UnknownEffectError, get_effect, list_effects
from logomotion.export import (
    ExportEncodingFailure, export_basename, export_svg, write_gif, write_video,
)
from logomotion.params import parse_overrides
from logomotion.sampler import LoadError, sample_svg_file
from logomotion.standalone import write_standalone

logger = logging.getLogger(__name__)


def _progress(pct, text):
    logger.debug("%3d%% %s", int(pct * 100), text)


def _resolve(args):
    effect = get_effect(args.effect)
    params = parse_overrides(args.param or [], effect.get_param_schema(),
                             effect.get_default_params())
    return effect, params


def _output_path(args, effect, ext):
    if args.output:
        return args.output
    folder = args.out_dir or os.getcwd()
    return os.path.join(folder, f"{export_basename(args.svg, effect)}.{ext}")


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

def cmd_effects(args) -> int:
    for effect in list_effects():
        print(f"{effect.effect_id.value:<18} {effect.title}")
        if args.verbose:
            for spec in effect.get_param_schema():
                flag = "  (motion)" if spec.motion_only else ""
                print(f"    {spec.key:<14} {spec.min:g}..{spec.max:g} "
                      f"step {spec.step:g} default {spec.default:g}{flag}")
    return 0


def cmd_static(args) -> int:
    sample = sample_svg_file(args.svg)
    effects = list_effects() if args.effect == "all" else [get_effect(args.effect)]
    for effect in effects:
        params = parse_overrides(args.param or [], effect.get_param_schema(),
                                 effect.get_default_params())
        if len(effects) == 1:
            path = _output_path(args, effect, "svg")
        else:
            path = os.path.join(args.out_dir or os.getcwd(), f"{export_basename(args.svg, effect)}.svg")
        export_svg(effect, sample, params, path, width=args.width)
        print(path)
    return 0


def cmd_standalone(args) -> int:
    effect, params = _resolve(args)
    sample = sample_svg_file(args.svg)
    path = write_standalone(_output_path(args, effect, "py"), effect, sample, params,
                            logo_name=os.path.basename(args.svg))
    print(path)
    return 0


def cmd_gif(args) -> int:
    effect, params = _resolve(args)
    sample = sample_svg_file(args.svg)
    path = _output_path(args, effect, "gif")
    write_gif(effect, sample, params, path, fps=args.fps, seconds=args.seconds,
              height=args.height, progress_callback=_progress)
    print(path)
    return 0


def cmd_video(args) -> int:
    effect, params = _resolve(args)
    sample = sample_svg_file(args.svg)
    path = _output_path(args, effect, "mp4")
    write_video(effect, sample, params, path, fps=args.fps, seconds=args.seconds,
                height=args.height, bitrate=args.bitrate,
                use_hw_encoder=not args.cpu, progress_callback=_progress)
    print(path)
    return 0


def cmd_preview(args) -> int:
    from logomotion.ui.window import run_app
    effect, params = _resolve(args) if args.effect else (None, None)
    run_app(logo_path=args.svg, effect=effect, params=params)
    return 0


# ═══════════════════════════════════════════════════════════════════════════════
# PARSER
# ═══════════════════════════════════════════════════════════════════════════════

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logomotion", description="Animated effects for SVG logos")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("effects", help="List effects and their parameters")
    p.add_argument("-v", "--verbose", action="store_true")
    p.set_defaults(func=cmd_effects)

    def _common(p, effect_default=None, effect_required=True):
        p.add_argument("svg", nargs=None if effect_required else "?", help="SVG logo file")
        if effect_default is None and effect_required:
            p.add_argument("effect", help="Effect id or title, e.g. star_glint")
        else:
            p.add_argument("effect", nargs="?", default=effect_default)
        p.add_argument("--param", action="append", metavar="KEY=VALUE",
                       help="Override a parameter (repeatable)")
        p.add_argument("-o", "--output", help="Output file")
        p.add_argument("--out-dir", help="Output folder for generated file names")

    p = sub.add_parser("static", help="Write static SVG snapshot(s)")
    _common(p, effect_default="all")
    p.add_argument("--width", type=int, default=None, help="SVG width (default 1000)")
    p.set_defaults(func=cmd_static)

    p = sub.add_parser("standalone", help="Write a self-contained Python animation script")
    _common(p)
    p.set_defaults(func=cmd_standalone)

    p = sub.add_parser("gif", help="Export a looping GIF")
    _common(p)
    p.add_argument("--fps", type=int, default=GIF_FPS)
    p.add_argument("--seconds", type=float, default=GIF_SECONDS)
    p.add_argument("--height", type=int, default=EXPORT_HEIGHT)
    p.set_defaults(func=cmd_gif)

    p = sub.add_parser("video", help="Export a green-screen video via FFmpeg")
    _common(p)
    p.add_argument("--fps", type=int, default=VIDEO_FPS)
    p.add_argument("--seconds", type=float, default=VIDEO_SECONDS)
    p.add_argument("--height", type=int, default=EXPORT_HEIGHT)
    p.add_argument("--bitrate", type=int, default=VIDEO_BITRATE_MBPS, help="Mbps")
    p.add_argument("--cpu", action="store_true", help="Skip hardware encoder detection")
    p.set_defaults(func=cmd_video)

    p = sub.add_parser("preview", help="Open the live preview window")
    _common(p, effect_required=False)
    p.set_defaults(func=cmd_preview)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if not getattr(args, "func", None):
        # No command: open the preview window
        argv = list(argv if argv is not None else sys.argv[1:])
        args = parser.parse_args(argv + ["preview"])

    try:
        return args.func(args)
    except (LoadError, UnknownEffectError, ExportEncodingFailure, ValueError) as e:
        logger.error("%s", e)
        return 1
