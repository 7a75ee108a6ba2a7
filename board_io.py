"""
Text diagrams for PseudoBoard positions and moves.
"""
from typing import Dict, List, Optional, Tuple

from pseudo_board import BLACK, EMPTY, SYMBOLS, WHITE, FlatPseudoBoard, PseudoBoard, Sign

POINT_CHARS = {
    'X': BLACK, 'B': BLACK, '#': BLACK,
    'O': WHITE, 'W': WHITE,
    '.': EMPTY, '+': EMPTY, '-': EMPTY,
}

COLOR_NAMES = {
    'b': BLACK, 'black': BLACK,
    'w': WHITE, 'white': WHITE,
}


def parse_board(text: str) -> List[List[Sign]]:
    """Parse a diagram such as::

        . X O
        X X O
        . X .

    Whitespace between points is optional. Blank lines and lines starting
    with ``;`` are skipped.
    """
    rows = []
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith(';'):
            continue
        row = []
        for char in line:
            if char.isspace():
                continue
            if char.upper() not in POINT_CHARS:
                raise ValueError(f"Line {lineno}: unknown point {char!r}")
            row.append(POINT_CHARS[char.upper()])
        rows.append(row)

    if not rows:
        raise ValueError("Diagram contains no rows")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise ValueError(f"Row {y} has {len(row)} points, expected {width}")
    return rows


def render_board(board: PseudoBoard, marks: Optional[Dict] = None) -> str:
    """Render a board as a diagram, with ``marks`` overriding single vertices."""
    overrides = {}
    for vertex, char in (marks or {}).items():
        overrides[board.to_xy(vertex)] = char

    lines = []
    for y in range(board.height):
        line = []
        for x in range(board.width):
            if (x, y) in overrides:
                line.append(overrides[(x, y)])
            else:
                line.append(SYMBOLS[board.get(board.from_xy(x, y))])
        lines.append(" ".join(line))
    return "\n".join(lines)


def load_board(path: str, flat: bool = False) -> PseudoBoard:
    with open(path, 'r') as f:
        rows = parse_board(f.read())
    board_class = FlatPseudoBoard if flat else PseudoBoard
    return board_class.from_rows(rows)


def parse_color(text: str) -> Sign:
    try:
        return COLOR_NAMES[text.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown color: {text!r}") from None


def parse_move(text: str) -> Tuple[Sign, int, int]:
    """Parse ``"B 3 4"`` or ``"white 0 2"`` into ``(sign, x, y)``."""
    parts = text.split()
    if len(parts) != 3:
        raise ValueError(f"Move must be 'COLOR X Y', got {text!r}")
    color = parse_color(parts[0])
    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError:
        raise ValueError(f"Move coordinates must be integers, got {text!r}") from None
    return color, x, y
