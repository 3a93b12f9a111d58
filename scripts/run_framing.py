#!/usr/bin/env python3
"""
Deck Framing Runner

Frames a rectangular deck hung from its top edge and prints the plan:
ledger, beams, posts, joists, rim joists and blocking, followed by the
boundary and span validation report.

Usage:
    python scripts/run_framing.py --width 12 --depth 10
    python scripts/run_framing.py --width 16 --depth 14 --height 72 --attachment floating

Examples:
    # Ledger deck, drop beam, 16" OC
    python scripts/run_framing.py

    # Deep deck that needs a mid-beam, flush beams and a picture frame
    python scripts/run_framing.py --depth 24 --beam flush --picture-frame single

    # Machine-readable output
    python scripts/run_framing.py --json
"""

import argparse
import json
import logging
import sys
import os

# Ensure deckframe is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from deckframe import (
    DEFAULT_CONFIG,
    DeckDimensions,
    DeckInputSpec,
    Point,
    calculate_structure,
    validate_structure,
)


def print_header(title: str):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def print_section(title: str):
    """Print a formatted section header."""
    print(f"\n--- {title} ---")


def run_framing(
    width_feet: float,
    depth_feet: float,
    inputs: DeckInputSpec,
    as_json: bool = False,
) -> dict:
    """
    Frame a width x depth rectangle with the wall along its top edge.

    Returns:
        Dictionary with the framing plan and validation report
    """
    w = DEFAULT_CONFIG.feet_to_pixels(width_feet)
    d = DEFAULT_CONFIG.feet_to_pixels(depth_feet)
    points = [Point(0, 0), Point(w, 0), Point(w, d), Point(0, d)]
    dims = DeckDimensions.from_points(points)

    structure = calculate_structure(points, 0, inputs, dims)
    report = validate_structure(structure, points) if structure.is_valid else None

    result = {
        "success": structure.is_valid,
        "inputs": inputs.model_dump(mode="json"),
        "structure": structure.to_dict(),
        "validation": report.to_dict() if report else None,
    }

    if as_json:
        print(json.dumps(result, indent=2))
        return result

    print_header(f"DECK FRAMING {width_feet:g}' x {depth_feet:g}'")
    if not structure.is_valid:
        print(f"\nFAILED [{structure.error_code.name}]: {structure.error}")
        return result

    print_section("Ledger")
    if structure.ledger:
        print(f"  {structure.ledger.size.value}  {structure.ledger.length_feet:.2f} ft")
    else:
        print("  none")

    print_section("Beams")
    for beam in structure.beams:
        style = "flush" if beam.is_flush else "drop"
        print(
            f"  {beam.usage.value:<10} {beam.ply}-ply {beam.size.value} {style:<5} "
            f"{beam.length_feet:6.2f} ft"
        )

    print_section("Posts & Footings")
    for post in structure.posts:
        print(f"  {post.size.value} at ({post.x:.1f}, {post.y:.1f})  {post.height_feet:.2f} ft")
    print(f"  {len(structure.footings)} footing(s)")
    for footing in structure.footings:
        size = f'{footing.diameter_inches}"' if footing.diameter_inches else "unsized"
        load = f"  {footing.design_load_lbs:.0f} lb" if footing.design_load_lbs is not None else ""
        print(f"  {footing.type.value} at ({footing.x:.1f}, {footing.y:.1f})  {size}{load}")

    print_section("Joists")
    print(f"  {len(structure.joists)} x {structure.joists[0].size.value}" if structure.joists else "  none")
    print(f"  {len(structure.rim_joists)} rim joist(s)")
    print(f"  {len(structure.mid_span_blocking)} mid-span blocking row(s)")
    print(f"  {len(structure.picture_frame_blocking)} ladder rung(s)")

    print_section("Validation")
    print(f"  {report.summary}")
    for issue in report.span_issues:
        for message in issue.issues:
            print(f"  - {message}")

    return result


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Frame a rectangular deck",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_framing.py                                 # 12' x 10' ledger deck
  python scripts/run_framing.py --depth 24 --beam flush         # Deep deck with mid-beam
  python scripts/run_framing.py --attachment floating --json    # Free-standing, JSON out
        """
    )

    parser.add_argument(
        "--width",
        type=float,
        default=12.0,
        help="Deck width along the wall in feet (default: 12.0)"
    )
    parser.add_argument(
        "--depth",
        type=float,
        default=10.0,
        help="Deck depth away from the wall in feet (default: 10.0)"
    )
    parser.add_argument(
        "--height",
        type=float,
        default=36.0,
        help="Deck height above grade in inches (default: 36.0)"
    )
    parser.add_argument(
        "--spacing",
        type=int,
        default=16,
        choices=[12, 16],
        help="Joist spacing in inches (default: 16)"
    )
    parser.add_argument(
        "--attachment",
        type=str,
        default="house_rim",
        choices=["house_rim", "concrete", "floating"],
        help="Attachment to the house (default: house_rim)"
    )
    parser.add_argument(
        "--beam",
        type=str,
        default="drop",
        choices=["drop", "flush"],
        help="Beam style (default: drop)"
    )
    parser.add_argument(
        "--footing",
        type=str,
        default="gh_levellers",
        choices=["gh_levellers", "pylex", "helical"],
        help="Footing product (default: gh_levellers)"
    )
    parser.add_argument(
        "--picture-frame",
        type=str,
        default="none",
        choices=["none", "single", "double"],
        help="Picture-frame border (default: none)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the plan as JSON"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log engine decisions"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    inputs = DeckInputSpec(
        deck_height=args.height,
        joist_spacing=args.spacing,
        attachment_type=args.attachment,
        beam_type=args.beam,
        footing_type=args.footing,
        picture_frame=args.picture_frame,
    )
    result = run_framing(args.width, args.depth, inputs, as_json=args.json)

    # Exit with appropriate code
    sys.exit(0 if result["success"] else 1)


if __name__ == "__main__":
    main()
