from __future__ import annotations
import argparse
import shutil
import sys

import moderngl

from .config import AppConfig
from .errors import DeviceError
from .host import GlfwHost
from .logging import get_logger, setup_logging
from .loop import RenderLoop
from .overlay import TextOverlay
from .page import PageLayer
from .profiler import get_profiler
from .program import ShaderProgram
from .surface import Surface
from .uniforms import UniformStore
from .utils import parse_hex_color
from .viewport import ViewportController


def _linux_gl_hint():
    if sys.platform.startswith("linux"):
        if shutil.which("glxinfo") is None:
            return (
                "Linux OpenGL loaders not found.\n"
                "Install the dev libraries:\n"
                "  sudo apt install -y libgl1-mesa-dev libegl1-mesa-dev libglvnd-dev mesa-utils\n"
            )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Flow Field")
    p.add_argument(
        "--fullscreen",
        action="store_true",
        help="Open in fullscreen on the primary monitor.",
    )
    p.add_argument("--width", type=int, default=None, help="Window width.")
    p.add_argument("--height", type=int, default=None, help="Window height.")
    p.add_argument(
        "--no-vsync",
        action="store_true",
        help="Do not pace frames to the display refresh.",
    )
    p.add_argument(
        "--samples",
        type=int,
        default=None,
        help="MSAA samples for the window framebuffer (0 to disable).",
    )
    p.add_argument(
        "--palette",
        type=str,
        default=None,
        help="Four comma-separated hex colors, e.g. 0b0c10,00444f,45f3ff,66ff00.",
    )
    p.add_argument("--font", type=str, default=None, help="TTF font for the text overlay.")
    p.add_argument(
        "--no-entrance",
        action="store_true",
        help="Show everything immediately instead of playing the reveal.",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Minimum log level (DEBUG, INFO, ...). Default: from config.",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log to a file instead of the console.",
    )
    p.add_argument("--debug", action="store_true", help="Show FPS / timing overlay.")
    return p


def config_from_args(p: argparse.ArgumentParser, args) -> AppConfig:
    cfg = AppConfig()
    if args.fullscreen:
        cfg.fullscreen = True
    if args.width is not None:
        cfg.width = args.width
    if args.height is not None:
        cfg.height = args.height
    if cfg.width <= 0 or cfg.height <= 0:
        p.error("--width and --height must be positive")
    if args.no_vsync:
        cfg.vsync = False
    if args.samples is not None:
        cfg.samples = max(0, args.samples)
    if args.palette is not None:
        parts = args.palette.split(",")
        if len(parts) != 4:
            p.error("--palette needs exactly four colors")
        try:
            cfg.color1, cfg.color2, cfg.color3, cfg.color4 = (
                parse_hex_color(c) for c in parts
            )
        except ValueError as e:
            p.error(f"--palette: {e}")
    if args.font is not None:
        cfg.font_path = args.font
    if args.no_entrance:
        cfg.entrance = False
    if args.log_level is not None:
        cfg.log_level = args.log_level
    if args.log_file is not None:
        cfg.log_file = args.log_file
    if args.debug:
        cfg.debug = True
    return cfg


def main(argv=None):
    # --- CLI / config ---
    p = build_parser()
    args = p.parse_args(argv)
    cfg = config_from_args(p, args)

    # --- logging ---
    setup_logging(cfg.log_level, cfg.log_file)
    logger = get_logger(__name__)
    profiler = get_profiler()
    profiler.log_interval = cfg.log_interval

    # --- window / context ---
    host = GlfwHost(cfg)
    program = surface = overlay = hud = None
    try:
        try:
            ctx = moderngl.create_context()
        except Exception as e:
            logger.error(_linux_gl_hint() or "Failed to create ModernGL context.")
            raise DeviceError(f"Failed to create ModernGL context: {e}") from e

        program = ShaderProgram.compile(ctx)
        surface = Surface(ctx)

        fb_w, fb_h = host.framebuffer_size()
        if fb_w <= 0 or fb_h <= 0:
            fb_w, fb_h = cfg.width, cfg.height
        uniforms = UniformStore((fb_w, fb_h), cfg.palette())

        viewport = ViewportController(uniforms, host.window_size())
        viewport.attach(host)

        loop = RenderLoop(program, surface, uniforms, profiler=profiler)

        overlay = TextOverlay(ctx, cfg.font_path, cfg.font_size)
        page = PageLayer(cfg, overlay, host, uniforms)
        loop.on_first_frame(page.begin)
        loop.on_frame(page.draw)

        if cfg.debug:
            hud = TextOverlay(ctx, cfg.font_path, 16)

            def draw_hud(elapsed):
                w, h = uniforms.resolution
                hud.viewport = (w, h)
                lines = [f"FPS: {profiler.fps:.2f} | t: {elapsed:.2f}s"]
                for k, v in sorted(profiler.get_timings().items()):
                    lines.append(f"{k}: {v*1000:.2f}ms")
                lines.append(f"Res: {int(w)}x{int(h)}")
                px, py = uniforms.pointer
                lines.append(f"Pointer: {px:.3f}, {py:.3f}")
                hud.render(lines, 10, h - 20)

            loop.on_frame(draw_hud)

        logger.info("ESC quit")
        loop.run(host)
    finally:
        try:
            # GPU objects go before the context that owns them
            for res in (hud, overlay, surface, program):
                if res is not None:
                    res.release()
        finally:
            host.close()
