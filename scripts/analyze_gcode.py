#!/usr/bin/env python3
"""Analyse a G-code file and print its statistics.

Without a file argument a generated calibration cube is analysed, which
is handy for a quick smoke test of the installation.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure package is importable when running from the scripts/ directory
# ---------------------------------------------------------------------------
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_PROJECT_ROOT))

from gcodestats import AnalyzerConfig, Document, GCodeError
from gcodestats.gcode.library import calibration_cube_gcode


def print_report(doc: Document, title: str) -> None:
    print("=" * 60)
    print(f"G-code analysis: {title}")
    print("=" * 60)

    print(f"\nCommands: {len(doc):,}   Comments: {len(doc.comments):,}")
    print(f"Layers:   {doc.layers}")

    print("\nDimensions (mm)")
    print(f"  Width  (X): {doc.width:10.3f}")
    print(f"  Depth  (Y): {doc.depth:10.3f}")
    print(f"  Height (Z): {doc.height:10.3f}")

    print("\nTravel (mm)")
    print(f"  X: {doc.x_travel:12.3f}")
    print(f"  Y: {doc.y_travel:12.3f}")
    print(f"  Z: {doc.z_travel:12.3f}")
    print(f"  E: {doc.e_travel:12.3f}")

    print("\nFilament used (mm)")
    for tool, used in doc.filament_used.items():
        print(f"  T{tool}: {used:12.3f}")
    if doc.is_multi_material:
        print("  (multi-material)")

    print(f"\nEstimated duration: {doc.duration_in_words() or '0 seconds'}"
          f" ({doc.total_duration:,.1f} s)")
    print("\n" + "=" * 60)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyse a G-code file")
    parser.add_argument("path", nargs="?", default=None,
                        help="G-code file (default: generated calibration cube)")
    parser.add_argument("--acceleration", type=float, default=1500.0,
                        help="Acceleration in mm/s^2 (default: 1500)")
    parser.add_argument("--default-speed", type=float, default=2400.0,
                        help="Feed rate in mm/min for moves without F (default: 2400)")
    parser.add_argument("--add-speed", action="store_true",
                        help="Carry the last feed rate into moves that omit one")
    parser.add_argument("--write", metavar="OUT", default=None,
                        help="Write the regenerated G-code to OUT")
    parser.add_argument("--numbered", action="store_true",
                        help="Number and checksum the lines written with --write")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AnalyzerConfig(
            default_speed=args.default_speed,
            acceleration=args.acceleration,
            add_speed=args.add_speed,
        )
        if args.path is None:
            doc = Document(calibration_cube_gcode(), config)
            title = "calibration cube (generated)"
        else:
            doc = Document.from_file(args.path, config)
            title = args.path
    except GCodeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print_report(doc, title)

    if args.write:
        count = doc.write(args.write, numbered=args.numbered)
        print(f"Wrote {count:,} lines to {args.write}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
