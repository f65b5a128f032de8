"""CLI entrypoints for stipple inspection, palettes, bar overlays and previews."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path

from indentbars_core import (
    AppConfig,
    BarOptions,
    IndentBarsSession,
    build_options,
    config_path,
    load_config,
    save_config,
)
from indentbars_core.logging_setup import configure_from_settings, get_logger
from indentbars_layout import overlay_lines, summarize
from indentbars_renderer import (
    CellGeometry,
    ColorResolver,
    IndentBarsError,
    PreviewRenderer,
    ascii_rows,
    get_theme,
    list_themes,
)
from indentbars_renderer.themes import parse_color


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _settings_path(args: argparse.Namespace) -> Path | None:
    return Path(args.config) if getattr(args, "config", None) else None


def _options(args: argparse.Namespace) -> BarOptions:
    cfg = getattr(args, "settings", None) or load_config(_settings_path(args))
    opts = build_options(cfg)
    changes = {}
    if getattr(args, "spacing", None) is not None:
        changes["spacing"] = args.spacing
    if getattr(args, "theme", None):
        changes["theme"] = args.theme
    if getattr(args, "no_blank", False):
        changes["display_on_blank_lines"] = False

    pattern_changes = {}
    for name in ("width_frac", "pad_frac", "pattern", "zigzag"):
        value = getattr(args, name, None)
        if value is not None:
            pattern_changes[name] = value
    if pattern_changes:
        changes["pattern"] = replace(opts.pattern, **pattern_changes)
    return replace(opts, **changes) if changes else opts


def _geometry(args: argparse.Namespace) -> CellGeometry:
    return CellGeometry(width_px=args.cell_width, height_px=args.cell_height, rotation_px=args.rotation)


def _read_lines(path: str) -> list[str]:
    return Path(path).read_text(encoding="utf-8").splitlines()


def cmd_stipple(args: argparse.Namespace) -> int:
    session = IndentBarsSession(_options(args), geometry=_geometry(args))
    bitmap = session.generate_bitmap(1)
    if args.json:
        _print_json(
            {
                "width_px": bitmap.width_px,
                "height_px": bitmap.height_px,
                "rows_hex": [row.hex() for row in bitmap.rows],
            }
        )
    else:
        print("\n".join(ascii_rows(bitmap)))
    return 0


def cmd_palette(args: argparse.Namespace) -> int:
    session = IndentBarsSession(_options(args))
    session.set_current_depth(args.current_depth)
    state = session.palette_state()
    _print_json(
        {
            "theme": session.options.theme,
            "main": state.main.hex,
            "depths": [
                {"depth": d, "color": session.color_for_depth(d).hex, "current": d == session.current_depth}
                for d in range(1, args.depths + 1)
            ],
        }
    )
    return 0


def cmd_bars(args: argparse.Namespace) -> int:
    session = IndentBarsSession(_options(args))
    lines = _read_lines(args.file)
    plan = session.plan(lines)
    if args.stats:
        _print_json(asdict(summarize(plan)))
        return 0
    glyph = session.options.no_stipple_char
    for text in overlay_lines(lines, plan, glyph=glyph, tab_width=session.options.tab_width):
        print(text)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    session = IndentBarsSession(_options(args), geometry=_geometry(args))
    session.set_current_depth(args.current_depth)
    tab_width = session.options.tab_width
    lines = [line.expandtabs(tab_width) for line in _read_lines(args.file)]
    plan = session.plan(lines)

    theme = session.resolver.theme
    renderer = PreviewRenderer(
        session.geometry,
        background=parse_color(theme.background),
        foreground=parse_color(theme.foreground),
    )
    image = renderer.render_image(lines, plan, session.style_for_depth, draw_text=not args.no_text)
    out = Path(args.out).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    get_logger("cli").info("preview written to %s", out, extra={"event": "preview_written", "path": out})
    _print_json({"success": True, "out": str(out), "size": list(image.size)})
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    path = _settings_path(args) or config_path()
    if args.config_cmd == "path":
        print(path)
        return 0
    if args.config_cmd == "init":
        if path.exists() and not args.force:
            print(f"{path} already exists (use --force to overwrite)", file=sys.stderr)
            return 1
        _print_json({"written": str(save_config(AppConfig(), path))})
        return 0
    cfg = load_config(path)
    build_options(cfg)
    _print_json(asdict(cfg))
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json(
        [
            {
                "name": name,
                "background": get_theme(name).background,
                "faces": sorted(ColorResolver(get_theme(name)).face_names),
            }
            for name in list_themes()
        ]
    )
    return 0


def _add_pattern_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--width-frac", dest="width_frac", type=float, default=None)
    cmd.add_argument("--pad-frac", dest="pad_frac", type=float, default=None)
    cmd.add_argument("--pattern", default=None, help="Fill pattern, space = blank band")
    cmd.add_argument("--zigzag", type=float, default=None)


def _add_geometry_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--cell-width", type=int, default=10)
    cmd.add_argument("--cell-height", type=int, default=20)
    cmd.add_argument("--rotation", type=int, default=0, help="Pixel offset of the text area in the frame")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="indentbars", description="Indentation bar stipples and layout tools")
    parser.add_argument("--config", default=None, help="Settings file (defaults to the user config path)")
    sub = parser.add_subparsers(dest="command", required=True)

    stipple_cmd = sub.add_parser("stipple", help="Print the stipple tile for a cell geometry")
    _add_geometry_args(stipple_cmd)
    _add_pattern_args(stipple_cmd)
    stipple_cmd.add_argument("--json", action="store_true", help="Print packed rows as hex")
    stipple_cmd.set_defaults(func=cmd_stipple)

    palette_cmd = sub.add_parser("palette", help="Print bar colors per depth")
    palette_cmd.add_argument("--depths", type=int, default=8)
    palette_cmd.add_argument("--current-depth", type=int, default=0)
    palette_cmd.add_argument("--theme", choices=list_themes(), default=None)
    palette_cmd.set_defaults(func=cmd_palette)

    bars_cmd = sub.add_parser("bars", help="Print a file with bar glyphs overlaid")
    bars_cmd.add_argument("file")
    bars_cmd.add_argument("--spacing", type=int, default=None)
    bars_cmd.add_argument("--no-blank", action="store_true", help="Do not continue bars across blank lines")
    bars_cmd.add_argument("--stats", action="store_true", help="Print placement statistics instead")
    bars_cmd.set_defaults(func=cmd_bars)

    preview_cmd = sub.add_parser("preview", help="Render a file with stippled bars to PNG")
    preview_cmd.add_argument("file")
    preview_cmd.add_argument("--out", required=True)
    preview_cmd.add_argument("--spacing", type=int, default=None)
    preview_cmd.add_argument("--current-depth", type=int, default=0)
    preview_cmd.add_argument("--theme", choices=list_themes(), default=None)
    preview_cmd.add_argument("--no-text", action="store_true")
    _add_geometry_args(preview_cmd)
    _add_pattern_args(preview_cmd)
    preview_cmd.set_defaults(func=cmd_preview)

    config_cmd = sub.add_parser("config", help="Inspect or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("show", help="Print validated settings")
    config_sub.add_parser("path", help="Print the settings path")
    init_cmd = config_sub.add_parser("init", help="Write default settings")
    init_cmd.add_argument("--force", action="store_true")
    config_cmd.set_defaults(func=cmd_config)

    themes_cmd = sub.add_parser("themes", help="List built-in themes")
    themes_cmd.set_defaults(func=cmd_themes)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.settings = load_config(_settings_path(args))
    except IndentBarsError as exc:
        # config path/init must still work against a broken settings file
        if args.command != "config":
            print(f"error: {exc}", file=sys.stderr)
            return 2
        args.settings = AppConfig()
    configure_from_settings(args.settings, console=False)
    try:
        return int(args.func(args))
    except IndentBarsError as exc:
        get_logger("cli").error("%s", exc, extra={"event": "invalid_input"})
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
