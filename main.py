"""
POH LAYOUT TOOLS - Main Entry Point
===================================
Inspect room descriptors, coordinate mappings and saved house layouts.

Usage:
    # Decode one room event (index, dbRowId, bitpacked, flag1, flag2)
    python main.py decode 3 12 0 429 0

    # Zone/tile -> local point, for a usable region starting at chunk (2, 3)
    python main.py to-local 1 1 3 4 --origin 2 3

    # Local point -> zone/tile
    python main.py to-zone 3456 4608 --origin 2 3

    # List a user's saved rooms and their object counts
    python main.py show PlayerName --save-dir ~/.runelite/pimp-my-poh

"""

import argparse
import sys
import logging
from pathlib import Path

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from pohlayout.core.config import DEFAULT_SAVE_DIR, HouseEditorConfig
from pohlayout.data import LocalPoint, decode_room
from pohlayout.geometry import local_to_zone_tile_coords, tile_coords_to_index, zone_tile_to_local
from pohlayout.storage import LocalFileStorageStrategy


def cmd_decode(args) -> int:
    room = decode_room(args.index, args.db_row_id, args.bitpacked, args.flag1, args.flag2)
    print(room)
    return 0


def cmd_to_local(args) -> int:
    point = zone_tile_to_local(args.zone_x, args.zone_y, args.tile_x, args.tile_y,
                               tuple(args.origin))
    if point is None:
        print("No local point: zone or tile out of range")
        return 1
    print(f"LocalPoint({point.x}, {point.y})")
    return 0


def cmd_to_zone(args) -> int:
    coords = local_to_zone_tile_coords(LocalPoint(args.local_x, args.local_y), tuple(args.origin))
    if coords is None:
        print("No zone: point lies outside the zone grid")
        return 1
    zone_x, zone_y, tile_x, tile_y = coords
    print(f"zone=({zone_x}, {zone_y}) tile=({tile_x}, {tile_y}) "
          f"index={tile_coords_to_index(tile_x, tile_y)}")
    return 0


def cmd_show(args) -> int:
    config = HouseEditorConfig(save_dir=args.save_dir).validate()
    storage = LocalFileStorageStrategy(config.save_dir, config.save_file_suffix)
    if not storage.exists(args.username):
        print(f"No save file at {storage.path_for(args.username)}")
        return 1

    rooms = storage.load(args.username)
    print("=" * 60)
    print(f"SAVED LAYOUT: {args.username} ({len(rooms)} rooms)")
    print("=" * 60)
    for index in sorted(rooms):
        room = rooms[index]
        print(f"{room}  objects={room.object_count()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='POH Layout Tools - Decode, Map, Inspect'
    )
    parser.add_argument(
        '--quiet', '-q', action='store_true',
        help='Only log warnings and errors'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    decode = subparsers.add_parser('decode', help='Decode a room event')
    decode.add_argument('index', type=int, help='Engine room slot')
    decode.add_argument('db_row_id', type=int, help='Room definition row')
    decode.add_argument('bitpacked', type=int, help='Door/room info')
    decode.add_argument('flag1', type=int, help='Position flags')
    decode.add_argument('flag2', type=int, help='Furniture flags')
    decode.set_defaults(func=cmd_decode)

    to_local = subparsers.add_parser('to-local', help='Zone/tile -> local point')
    to_local.add_argument('zone_x', type=int, help='Zone X (1-8)')
    to_local.add_argument('zone_y', type=int, help='Zone Y (1-8)')
    to_local.add_argument('tile_x', type=int, help='Tile X inside the zone (0-7)')
    to_local.add_argument('tile_y', type=int, help='Tile Y inside the zone (0-7)')
    to_local.add_argument(
        '--origin', type=int, nargs=2, metavar=('X', 'Z'), required=True,
        help='Chunk-grid coordinate of zone (1, 1)'
    )
    to_local.set_defaults(func=cmd_to_local)

    to_zone = subparsers.add_parser('to-zone', help='Local point -> zone/tile')
    to_zone.add_argument('local_x', type=int, help='Local X')
    to_zone.add_argument('local_y', type=int, help='Local Y')
    to_zone.add_argument(
        '--origin', type=int, nargs=2, metavar=('X', 'Z'), required=True,
        help='Chunk-grid coordinate of zone (1, 1)'
    )
    to_zone.set_defaults(func=cmd_to_zone)

    show = subparsers.add_parser('show', help="List a user's saved rooms")
    show.add_argument('username', type=str, help='Player name')
    show.add_argument(
        '--save-dir', type=Path, default=DEFAULT_SAVE_DIR,
        help=f'Save directory (default: {DEFAULT_SAVE_DIR})'
    )
    show.set_defaults(func=cmd_show)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = HouseEditorConfig(log_level="WARNING" if args.quiet else "INFO")
    logging.getLogger().setLevel(config.log_level)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
