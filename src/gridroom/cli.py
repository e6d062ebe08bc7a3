"""
Command line front end.

Usage:
    gridroom room.json -o out/room.json        # Generate a room file
    gridroom --width 12 --height 8 --seed 7    # Quick room with the default style
    gridroom --list-styles
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from gridroom.conversion.placement_export import count_instructions_by_category, write_result
from gridroom.generators.assets import BatchedInstanceSink, DictAssetResolver
from gridroom.generators.errors import StyleLoadError
from gridroom.generators.grid.grid_types import RoomSpec
from gridroom.generators.room.room_types import RoomOverrides
from gridroom.generators.room_storage import RoomFile, load_room_file
from gridroom.generators.shapes import SHAPE_CATALOG
from gridroom.generators.styles import STONE_KEEP_MANIFEST, STYLE_CATALOG, load_style_packs
from gridroom.pipeline import PipelineSettings, RoomPipeline
from gridroom.validation import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "Stone Keep"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridroom",
        description="Grid Room Generator - fill a grid room with floors, walls, doors and ceiling",
    )
    parser.add_argument("room", nargs="?", default=None,
                        help="Room file (JSON). Omit to build a room from --width/--height.")
    parser.add_argument("--width", type=int, default=10, help="Grid width in cells (no room file).")
    parser.add_argument("--height", type=int, default=10, help="Grid height in cells (no room file).")
    parser.add_argument("--seed", type=int, default=None, help="Run seed (overrides the room file).")
    parser.add_argument("--style", type=str, default=None,
                        help=f"Style name from the catalog (default: {DEFAULT_STYLE}).")
    parser.add_argument("--style-file", action="append", default=[],
                        help="Load a style JSON file into the catalog (repeatable).")
    parser.add_argument("--manifest", type=str, default=None,
                        help="Mesh manifest JSON (default: the built-in Stone Keep meshes).")
    parser.add_argument("--shape", type=str, default=None, help="Shape preset name.")
    parser.add_argument("--doors", type=int, default=None,
                        help="Enable procedural doors and place this many.")
    parser.add_argument("--ceiling-follows-shape", action="store_true",
                        help="Leave carved-out cells without ceiling.")
    parser.add_argument("--no-validate", action="store_true", help="Skip post-generation checks.")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 2 when a post-generation check fails.")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write the result to this file (.json or .csv).")
    parser.add_argument("--ascii", action="store_true", help="Print the interior grid.")
    parser.add_argument("--list-styles", action="store_true", help="List catalog styles and exit.")
    parser.add_argument("--list-shapes", action="store_true", help="List shape presets and exit.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def _load_resolver(manifest_path: Optional[str]) -> DictAssetResolver:
    if manifest_path is None:
        return DictAssetResolver.from_manifest(STONE_KEEP_MANIFEST)
    with open(manifest_path, 'r', encoding='utf-8') as f:
        return DictAssetResolver.from_manifest(json.load(f))


def _room_from_args(args) -> RoomFile:
    if args.room:
        room_file = load_room_file(args.room)
    else:
        room_file = RoomFile(room=RoomSpec(args.width, args.height), overrides=RoomOverrides())

    if args.seed is not None:
        room_file.seed = args.seed
    if args.style:
        room_file.style = args.style
    if args.shape:
        room_file.overrides.shape_preset = args.shape
    if args.doors is not None:
        procedural = room_file.overrides.procedural_doors
        procedural.enabled = args.doors > 0
        procedural.min_doors = procedural.max_doors = max(1, args.doors)
    return room_file


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        for style_file in args.style_file:
            STYLE_CATALOG.register(load_style_packs(style_file))
        room_file = _room_from_args(args)
        resolver = _load_resolver(args.manifest)
    except (StyleLoadError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.list_styles:
        for name in STYLE_CATALOG.list_styles():
            print(name)
        return 0
    if args.list_shapes:
        for name in SHAPE_CATALOG.list_presets():
            print(name)
        return 0

    settings = PipelineSettings(
        validate_result=not args.no_validate,
        ceiling_follows_floor_shape=args.ceiling_follows_shape,
        default_style=room_file.style or DEFAULT_STYLE,
    )
    sink = BatchedInstanceSink()
    pipeline = RoomPipeline(resolver, sink=sink, settings=settings)
    result = pipeline.generate(room_file.room, None, room_file.overrides, room_file.seed)

    if not result.success:
        for error in result.errors:
            logger.error("%s", error)
        return 1

    for warning in result.warnings:
        logger.warning("%s", warning)

    counts = count_instructions_by_category(result.instructions)
    print(f"Room {room_file.room.width}x{room_file.room.height} seed={result.seed}: "
          f"{len(result.instructions)} placements in {len(sink.buckets)} batches")
    for category, count in counts.items():
        print(f"  {category:<12} {count}")

    if args.ascii and result.state is not None and result.state.interior_grid is not None:
        print(result.state.interior_grid.to_ascii())

    if args.output:
        path = write_result(result, args.output)
        print(f"Wrote {path}")

    if args.strict and result.validation is not None:
        try:
            result.validation.raise_if_failed()
        except ValidationError as e:
            logger.error("%s", e)
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
