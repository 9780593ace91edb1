# src/palette_studio/demo.py
import argparse
import asyncio
import json
import logging
import sys


def _describe(colors):
    from .picker.convert import hex_to_hsl, hex_to_okhsl

    rows = []
    for c in colors:
        hsl, ok = hex_to_hsl(c), hex_to_okhsl(c)
        rows.append(
            {
                "hex": c,
                "hsl": [round(v, 4) for v in hsl] if hsl else None,
                "okhsl": [round(v, 4) for v in ok] if ok else None,
            }
        )
    return rows


async def _run(args):
    from .color.contrast import contrast_ratio, wcag_rating
    from .color.names import resolve_color_input
    from .picker.constraints import detect_constraint, request_normalization, spread_axis
    from .picker.types import as_axis_mode, as_color_space
    from .utils.log import debug

    colors = []
    for raw in args.colors:
        hx = resolve_color_input(raw)
        if hx is None:
            raise ValueError(f"Cannot read a color from {raw!r}")
        debug(f"{raw!r} → {hx}", topic="cli")
        colors.append(hx)

    space, mode = detect_constraint(colors)
    result = {"input": colors, "detected": {"space": space, "mode": mode}}

    if args.space:
        space = as_color_space(args.space)
    if args.normalize:
        outcome = await request_normalization(
            colors,
            args.anchor,
            as_axis_mode(args.normalize),
            space,
            "modeChange",
            randomize=args.randomize,
        )
        colors = list(outcome.colors)
        result["normalized"] = {"changed": outcome.changed, "colors": colors}
    if args.spread:
        colors = list(spread_axis(colors, args.spread, args.anchor, space))
        result["spread"] = {"axis": args.spread, "colors": colors}
    if args.contrast:
        if len(colors) < 2:
            raise ValueError("--contrast needs at least two colors")
        rating = wcag_rating(contrast_ratio(colors[0], colors[1]))
        result["contrast"] = {"ratio": round(rating.ratio, 2), "aa": rating.aa, "aaa": rating.aaa}

    result["colors"] = _describe(colors)
    return result


def main():
    """CLI demo: detect the shared-axis constraint of a palette, normalize/spread it."""
    parser = argparse.ArgumentParser(
        prog="palette-demo",
        description="Detect, normalize and spread a palette of hex colors.",
    )
    parser.add_argument(
        "colors",
        nargs="+",
        help="Colors as hex (#ff0000, f00) or names (navy, acid green)",
    )
    parser.add_argument("--space", choices=["hsl", "okhsl"], help="Color space to work in")
    parser.add_argument(
        "--normalize",
        metavar="MODE",
        help="shared_lightness | shared_hue_saturation (or wheel | slider)",
    )
    parser.add_argument("--randomize", action="store_true", help="Randomize the free axis")
    parser.add_argument("--spread", choices=["hue", "saturation", "lightness"])
    parser.add_argument("--anchor", type=int, default=0, help="Index of the anchor color")
    parser.add_argument("--contrast", action="store_true", help="WCAG contrast of the first two")
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(_run(args))
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except (ValueError, IndexError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
