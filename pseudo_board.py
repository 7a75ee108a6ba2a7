"""
Pseudo move simulation and dead stone estimation on a Go board.

A PseudoBoard answers two questions about a static position: what happens if
a stone of some color were put on a point right now (captures, or rejection
as suicide), and which stones look dead once every empty region is assigned
to the color that surrounds it. There is no turn order, no ko and no history.

Two addressing schemes are provided over the same algorithms:
``PseudoBoard`` uses ``(x, y)`` vertices and ``FlatPseudoBoard`` uses the
row-major index ``y * width + x``.
"""
import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numba import njit

logger = logging.getLogger(__name__)


class Sign(IntEnum):
    """Content of a board point. The two colors are mirror images."""
    EMPTY = 0
    BLACK = 1
    WHITE = -1

    @property
    def opponent(self) -> 'Sign':
        return Sign(-self.value)

    @property
    def is_stone(self) -> bool:
        return self is not Sign.EMPTY


EMPTY = Sign.EMPTY
BLACK = Sign.BLACK
WHITE = Sign.WHITE

SYMBOLS = {EMPTY: '.', BLACK: 'X', WHITE: 'O'}

# A region is BLACK's if it is reachable without crossing BLACK stones,
# so the WHITE stones inside it are the candidates for being dead.
_BLACK_AREA = frozenset((EMPTY, WHITE))
_WHITE_AREA = frozenset((EMPTY, BLACK))
_EMPTY_ONLY = frozenset((EMPTY,))


@njit
def _neighbor_table(width, height):
    """Adjacency of every point as indices, ordered up, down, left, right, padded with -1."""
    table = np.empty((width * height, 4), dtype=np.int64)
    for y in range(height):
        for x in range(width):
            i = y * width + x
            for slot in range(4):
                table[i, slot] = -1
            n = 0
            if y > 0:
                table[i, n] = i - width
                n += 1
            if y < height - 1:
                table[i, n] = i + width
                n += 1
            if x > 0:
                table[i, n] = i - 1
                n += 1
            if x < width - 1:
                table[i, n] = i + 1
                n += 1
    return table


@dataclass
class Region:
    """One empty region as decided by the dead stone classifier."""
    owner: Sign
    vertices: list = field(default_factory=list)
    dead: list = field(default_factory=list)


class _Transaction:
    """Records the prior sign of every point written, so a move can be undone."""

    def __init__(self, signs: np.ndarray):
        self.signs = signs
        self.saved: Dict[int, int] = {}

    def write(self, index: int, sign: int):
        if index not in self.saved:
            self.saved[index] = int(self.signs[index])
        self.signs[index] = sign

    def rollback(self):
        for index, sign in self.saved.items():
            self.signs[index] = sign
        self.saved.clear()


def _validated_signs(values, size: int) -> np.ndarray:
    grid = np.asarray(values)
    if grid.size != size:
        raise ValueError(f"Expected {size} points, got {grid.size}")
    # Checked before casting, so fractional values are rejected rather than truncated
    if grid.size and not np.isin(grid, (-1, 0, 1)).all():
        raise ValueError("Board values must be -1, 0 or 1")
    return grid.astype(np.int8).reshape(-1).copy()


class PseudoBoard:
    """Go board addressed by ``(x, y)`` vertices.

    The caller supplies the initial stones; afterwards only
    ``make_pseudo_move`` changes the position, and it either commits a move
    completely or leaves the board exactly as it was.
    """

    def __init__(self, width: int, height: int, data=None):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid board size: {width}x{height}")
        self.width = width
        self.height = height
        self._size = width * height
        if data is None:
            self._signs = np.zeros(self._size, dtype=np.int8)
        else:
            self._signs = _validated_signs(data, self._size)
        table = _neighbor_table(width, height)
        self._adjacency = [[int(n) for n in row if n >= 0] for row in table]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'PseudoBoard':
        """Build a board from a rectangular grid of -1/0/1 values, one row per y."""
        rows = [list(row) for row in rows]
        if not rows:
            raise ValueError("Board must have at least one row")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} points, expected {width}")
        return cls(width, len(rows), rows)

    def copy(self) -> 'PseudoBoard':
        return type(self)(self.width, self.height, self._signs)

    @property
    def data(self) -> np.ndarray:
        """Read-only ``(height, width)`` view of the signs."""
        view = self._signs.reshape(self.height, self.width)
        view.flags.writeable = False
        return view

    # Vertex addressing

    def _to_index(self, vertex) -> Optional[int]:
        x, y = vertex
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return None

    def _from_index(self, index: int):
        y, x = divmod(index, self.width)
        return (x, y)

    def from_xy(self, x: int, y: int):
        return (x, y)

    def to_xy(self, vertex) -> Tuple[int, int]:
        x, y = vertex
        return (x, y)

    def _vertices(self, indices: Iterable[int]) -> list:
        return [self._from_index(i) for i in indices]

    # Grid

    def get(self, vertex) -> Optional[Sign]:
        index = self._to_index(vertex)
        if index is None:
            return None
        return Sign(int(self._signs[index]))

    def set(self, vertex, sign: Sign):
        index = self._to_index(vertex)
        if index is not None:
            self._signs[index] = Sign(sign)

    def neighbors(self, vertex) -> list:
        index = self._to_index(vertex)
        if index is None:
            return []
        return self._vertices(self._adjacency[index])

    def vertices(self) -> list:
        """All vertices in row-major order."""
        return self._vertices(range(self._size))

    # Regions

    def _component(self, start: int, signs) -> List[int]:
        visited = {start}
        result = [start]
        stack = [start]
        while stack:
            current = stack.pop()
            for n in self._adjacency[current]:
                if n not in visited and int(self._signs[n]) in signs:
                    visited.add(n)
                    result.append(n)
                    stack.append(n)
        return result

    def connected_component(self, vertex, signs: Iterable[Sign]) -> list:
        """Vertices reachable from ``vertex`` through points whose sign is in ``signs``.

        The start vertex is always part of the result, whatever its own sign.
        """
        index = self._to_index(vertex)
        if index is None:
            return []
        return self._vertices(self._component(index, frozenset(int(s) for s in signs)))

    def chain(self, vertex) -> list:
        index = self._to_index(vertex)
        if index is None:
            return []
        return self._vertices(self._component(index, {int(self._signs[index])}))

    def related_chains(self, vertex) -> list:
        """Stones of the same color reachable through own stones and empty points."""
        index = self._to_index(vertex)
        if index is None:
            return []
        sign = int(self._signs[index])
        area = self._component(index, {sign, EMPTY})
        return self._vertices(i for i in area if self._signs[i] == sign)

    def _is_point_chain(self, index: int) -> bool:
        sign = self._signs[index]
        return all(self._signs[n] != sign for n in self._adjacency[index])

    def is_point_chain(self, vertex) -> bool:
        index = self._to_index(vertex)
        if index is None:
            return False
        return self._is_point_chain(index)

    # Liberties

    def _has_liberties(self, start: int) -> bool:
        sign = self._signs[start]
        visited = {start}
        stack = [start]
        while stack:
            current = stack.pop()
            for n in self._adjacency[current]:
                s = self._signs[n]
                if s == EMPTY:
                    return True
                if s == sign and n not in visited:
                    visited.add(n)
                    stack.append(n)
        return False

    def has_liberties(self, vertex) -> bool:
        """Whether the chain at ``vertex`` touches at least one empty point."""
        index = self._to_index(vertex)
        if index is None:
            return False
        return self._has_liberties(index)

    # Moves

    def make_pseudo_move(self, sign: Sign, vertex) -> Optional[list]:
        """Put a ``sign`` stone on ``vertex`` and resolve captures.

        Returns the captured vertices (possibly empty), or None when the move
        is rejected, in which case the board is left untouched. A lone stone
        without liberties is only accepted if it captures two or more chains.
        """
        sign = Sign(sign)
        if not sign.is_stone:
            raise ValueError(f"Move sign must be a stone color, got {sign!r}")

        index = self._to_index(vertex)
        if index is None:
            return None

        adjacent = self._adjacency[index]
        if all(self._signs[n] == sign for n in adjacent):
            logger.debug("Rejected %s at %s: no empty or enemy neighbor", sign.name, vertex)
            return None

        opponent = sign.opponent
        move = _Transaction(self._signs)
        move.write(index, sign)

        check_multi_dead_chains = False
        check_capture = False
        if not self._has_liberties(index):
            if self._is_point_chain(index):
                check_multi_dead_chains = True
            else:
                check_capture = True

        dead = []
        dead_chains = 0
        for n in adjacent:
            if self._signs[n] != opponent or self._has_liberties(n):
                continue
            chain = self._component(n, {opponent})
            dead_chains += 1
            for c in chain:
                move.write(c, EMPTY)
            dead.extend(chain)

        if check_multi_dead_chains and dead_chains <= 1:
            move.rollback()
            logger.debug("Rejected %s at %s: lone stone captures %d chain(s)",
                         sign.name, vertex, dead_chains)
            return None
        if check_capture and not dead:
            move.rollback()
            logger.debug("Rejected %s at %s: suicide", sign.name, vertex)
            return None

        if dead:
            logger.debug("%s at %s captures %d stone(s) in %d chain(s)",
                         sign.name, vertex, len(dead), dead_chains)
        return self._vertices(dead)

    # Dead stones

    def classify_regions(self) -> List[Region]:
        """Assign every empty region to a color, or to EMPTY when undecided.

        A region counts as a color's territory when at most one of its empty
        points is reachable only from that side, and it holds no more enemy
        stones than the opposing reading does.
        """
        done = set()
        regions = []

        for index in range(self._size):
            if self._signs[index] != EMPTY or index in done:
                continue

            black_area = self._component(index, _BLACK_AREA)
            white_area = self._component(index, _WHITE_AREA)
            black_dead = [i for i in black_area if self._signs[i] == WHITE]
            white_dead = [i for i in white_area if self._signs[i] == BLACK]

            black_set, white_set = set(black_area), set(white_area)
            black_dead_set, white_dead_set = set(black_dead), set(white_dead)
            black_diff = sum(1 for i in black_area
                             if i not in black_dead_set and i not in white_set)
            white_diff = sum(1 for i in white_area
                             if i not in white_dead_set and i not in black_set)

            favor_white = white_diff <= 1 and len(white_dead) <= len(black_dead)
            favor_black = black_diff <= 1 and len(black_dead) <= len(white_dead)

            if favor_black and not favor_white:
                owner, area, dead = BLACK, black_area, black_dead
            elif favor_white and not favor_black:
                owner, area, dead = WHITE, white_area, white_dead
            else:
                owner, area, dead = EMPTY, self._component(index, _EMPTY_ONLY), []

            done.update(area)
            regions.append(Region(owner, self._vertices(area), self._vertices(dead)))

        return regions

    def floating_stones(self) -> list:
        """Stones judged dead in the current position, region by region."""
        result = []
        for region in self.classify_regions():
            result.extend(region.dead)
        return result

    def __str__(self):
        return "\n".join(" ".join(SYMBOLS[Sign(int(s))] for s in row) for row in self.data)


class FlatPseudoBoard(PseudoBoard):
    """Same board, with vertices given as row-major indices."""

    def _to_index(self, vertex) -> Optional[int]:
        if 0 <= vertex < self._size:
            return int(vertex)
        return None

    def _from_index(self, index: int):
        return index

    def from_xy(self, x: int, y: int):
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return -1

    def to_xy(self, vertex) -> Tuple[int, int]:
        y, x = divmod(vertex, self.width)
        return (x, y)
