#!/usr/bin/env python3
"""
Command-line interface for Auto CC

Usage:
    python -m auto_cc.cli session.json [options]
    python -m auto_cc.cli session.json --base-cc 20 --select Synth Pad
    python -m auto_cc.cli session.json --output mapped.json
"""

import argparse
import os
import sys

from auto_cc.core.locator import TARGET_TRACK_NAME, get_track_by_name
from auto_cc.core.runner import run_auto_cc
from auto_cc.host.memory import load_session, save_session
from auto_cc.ui import ConsoleUserInterface, DEFAULT_BASE_CC


def _apply_selection(host, names) -> list:
    """Select exactly the named tracks. Returns names that were not found."""
    missing = [n for n in names if get_track_by_name(host, n) is None]
    wanted = set(names)
    for track in host.tracks():
        track.selected = host.track_name(track) in wanted
    return missing


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Auto CC - Map automation envelopes to MIDI CC lanes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  auto-cc session.json                       # Map selected tracks, CC from 16
  auto-cc session.json --base-cc 20          # First envelope gets CC 20
  auto-cc session.json --select Pad Lead     # Map only these tracks
  auto-cc session.json --output mapped.json  # Specify output file
        """,
    )

    parser.add_argument("input", nargs="?", help="Input session file (JSON)")

    parser.add_argument(
        "-o", "--output", help="Output session file (default: input_cc.json)"
    )

    parser.add_argument(
        "-b",
        "--base-cc",
        help=f"First CC control number (default: {DEFAULT_BASE_CC})",
    )

    parser.add_argument(
        "-t",
        "--target",
        default=TARGET_TRACK_NAME,
        help=f"Name of the track receiving the MIDI items (default: {TARGET_TRACK_NAME})",
    )

    parser.add_argument(
        "-s",
        "--select",
        nargs="+",
        metavar="TRACK",
        help="Track names to map (default: tracks selected in the session)",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    parser.add_argument("--version", action="version", version="Auto CC v1.0.0")

    args = parser.parse_args(argv)

    # Handle no arguments
    if args.input is None:
        parser.print_help()
        return 1

    input_file = args.input

    if not os.path.exists(input_file):
        print(f"ERROR: Input file not found: {input_file}", file=sys.stderr)
        return 1

    try:
        host = load_session(input_file)
    except (OSError, ValueError, KeyError, TypeError) as e:
        print(f"ERROR: Could not load session: {e}", file=sys.stderr)
        return 1

    if args.select:
        missing = _apply_selection(host, args.select)
        for name in missing:
            print(f"WARNING: Track not found: {name}", file=sys.stderr)

    print("\n" + "=" * 60)
    print("AUTO CC")
    print("=" * 60 + "\n")
    print(f"Session: {input_file}")
    print(f"Tracks: {len(host.tracks())}")
    print(f"Selected: {', '.join(host.track_name(t) for t in host.selected_tracks()) or '-'}")

    ui = ConsoleUserInterface(answer=args.base_cc)
    summary = run_auto_cc(host, ui, target_name=args.target, verbose=args.verbose)

    mapping = summary["mapping"]
    merge = summary["merge"]

    print("\n" + "=" * 60)
    print("RESULT")
    print("=" * 60)
    print(f"First CC: {summary['base_cc']}")
    for lane in mapping["details"]["lanes"]:
        print(
            f"  {lane['track']} / {lane['envelope']}: CC {lane['controller']} "
            f"ch {lane['channel']} ({lane['points']} points)"
        )
    if mapping["details"]["clamped_points"]:
        print(f"Clamped values: {mapping['details']['clamped_points']}")
    print(f"Mapping: {mapping['message']}")
    print(f"Merge: {merge['message']}")

    if not (mapping["success"] and merge["success"]):
        return 1

    # Determine output file
    if args.output:
        output_file = args.output
    else:
        base, ext = os.path.splitext(input_file)
        output_file = f"{base}_cc{ext}"

    save_session(host, output_file)
    print(f"\n✓ Output saved to: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
