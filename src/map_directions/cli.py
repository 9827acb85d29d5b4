"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from map_directions import __version__
from map_directions.config import get_settings
from map_directions.controller import build_controller
from map_directions.flows.directions import plan_walk
from map_directions.logging_setup import configure_logging
from map_directions.reference import INITIAL_REGION, LANDMARKS, get_landmark


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="map-directions",
        description="Walking directions to map landmarks with an auto-fitted camera region",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("landmarks", help="List the map landmarks")

    directions_parser = subparsers.add_parser(
        "directions", help="Get walking directions to a landmark"
    )
    directions_parser.add_argument("landmark", help="Landmark key (see 'landmarks')")
    directions_parser.add_argument(
        "--lat", type=float, default=None, help="Start latitude (default: from settings)"
    )
    directions_parser.add_argument(
        "--lon", type=float, default=None, help="Start longitude (default: from settings)"
    )

    panorama_parser = subparsers.add_parser(
        "panorama", help="Find street-level imagery at a landmark"
    )
    panorama_parser.add_argument("landmark", help="Landmark key (see 'landmarks')")

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Routing: {settings.osrm_base_url}")
    print(f"Location timeout: {settings.location_timeout_s}s")
    return 0


def cmd_landmarks(_args: argparse.Namespace) -> int:
    """Handle the 'landmarks' command."""
    for landmark in LANDMARKS:
        print(f"{landmark.key:<12} {landmark.name:<30} {landmark.coordinate}")
    center = INITIAL_REGION.center
    print(f"\nInitial camera: {center} span {INITIAL_REGION.latitude_delta:.5f}°")
    return 0


def cmd_directions(args: argparse.Namespace) -> int:
    """Handle the 'directions' command."""
    try:
        get_landmark(args.landmark)
    except KeyError:
        print(f"Unknown landmark: {args.landmark}", file=sys.stderr)
        return 1

    summary = asyncio.run(plan_walk(args.landmark, lat=args.lat, lon=args.lon))
    if summary["state"] != "committed":
        print(f"Error: no route to {summary['name']}", file=sys.stderr)
        return 1

    region = summary["region"]
    print(f"Camera center: {region['center']}")
    print(f"Camera span: {region['latitude_delta']:.6f} x {region['longitude_delta']:.6f}")
    return 0


def cmd_panorama(args: argparse.Namespace) -> int:
    """Handle the 'panorama' command."""
    try:
        landmark = get_landmark(args.landmark)
    except KeyError:
        print(f"Unknown landmark: {args.landmark}", file=sys.stderr)
        return 1

    controller = build_controller(get_settings())
    scene = asyncio.run(controller.show_panorama(landmark.coordinate))
    if scene is None:
        print(f"Error: no street-level imagery near {landmark.name}", file=sys.stderr)
        return 1

    print(f"Look around {landmark.name}: {scene.url}")
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    configure_logging("DEBUG" if args.debug or settings.debug else settings.log_level)

    commands = {
        "info": cmd_info,
        "landmarks": cmd_landmarks,
        "directions": cmd_directions,
        "panorama": cmd_panorama,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
