#!/usr/bin/env python3
"""
Estimate dead stones on a board diagram, optionally after some pseudo moves.

    python estimate_dead.py position.txt --move B 2 3 --move W 4 4
"""
import argparse
import logging
import sys

from board_io import load_board, parse_color, render_board
from pseudo_board import BLACK, WHITE

logger = logging.getLogger(__name__)

DEAD_MARKS = {BLACK: 'x', WHITE: 'o'}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Estimate dead stones on a Go board diagram.')
    parser.add_argument('board', help='Path to a board diagram (X black, O white, . empty).')
    parser.add_argument('--move', nargs=3, action='append', default=[], metavar=('COLOR', 'X', 'Y'),
                        help='Pseudo move to apply before estimating; may be repeated.')
    parser.add_argument('--flat', action='store_true', help='Address vertices by row-major index.')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log move resolution details.')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        board = load_board(args.board, flat=args.flat)
        moves = [(parse_color(color), int(x), int(y)) for color, x, y in args.move]
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Loaded %dx%d board from %s", board.width, board.height, args.board)

    for sign, x, y in moves:
        vertex = board.from_xy(x, y)
        captured = board.make_pseudo_move(sign, vertex)
        if captured is None:
            print(f"{sign.name} at ({x},{y}): rejected")
        else:
            points = ", ".join(str(board.to_xy(v)) for v in captured) or "nothing"
            print(f"{sign.name} at ({x},{y}): captured {points}")

    dead = board.floating_stones()
    marks = {v: DEAD_MARKS[board.get(v)] for v in dead}
    print(render_board(board, marks))
    print(f"Dead stones: {len(dead)}")
    for vertex in dead:
        x, y = board.to_xy(vertex)
        print(f"  {board.get(vertex).name} ({x},{y})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
