"""Level map files: parsing, floor hitboxes and marker positions.

A map file holds, line by line: the background texture path; a level line
made of a single-digit count followed by that many space-separated level
names; the map width; then six rows of tiles. ``F`` tiles are floor,
``E`` tiles extend a floor edge, other letters mark entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .geometry import Rect, Vec2
from .textutil import getnbr

_TILE = 80
_ROWS = 6
_SCREEN_HEIGHT = 720
_FOOT_OFFSET = 95
_FLOOR_OFFSET = 15
_EDGE_WIDTH = 45
_ROW_SHIFT = 3


@dataclass
class Hitbox:
    """A solid rectangle and the height a body standing on it rests at."""

    rect: Rect
    y: float


@dataclass
class MapData:
    """A parsed level map."""

    texture: str
    levels: list[str]
    size: int
    rows: list[str]
    hitboxes: list[Hitbox] = field(default_factory=list)
    player_pos: Vec2 = field(default_factory=Vec2)

    def position_of(self, ch: str, x_dec: float = 0, y_dec: float = 0) -> Vec2:
        """World position of the first ``ch`` tile, scanning rows top to bottom.

        ``y_dec`` shifts the result vertically; ``x_dec`` has no effect.
        Returns the origin when the tile is absent.
        """
        for row_index, row in enumerate(self.rows):
            column = row.find(ch)
            if column != -1:
                y = (_SCREEN_HEIGHT - (_ROWS - row_index) * _TILE) + _FOOT_OFFSET + y_dec
                return Vec2(column * _TILE, y)
        return Vec2(0, 0)


def hitbox_from_row(row: str, top: int, start: int) -> Hitbox:
    """Build the hitbox of the floor run in ``row`` that begins at ``start``."""
    left = top_px = width = height = 0.0
    floors = 0
    for index, cell in enumerate(row[start:], start):
        if cell == "F":
            floors += 1
            height = _TILE
            width += _TILE
        if cell == "E":
            width += _EDGE_WIDTH
        if floors == 1:
            top_px = top * _TILE + _FLOOR_OFFSET
            left = index * _TILE
        if cell not in ("F", "E") and floors >= 1:
            break
    return Hitbox(Rect(left, top_px, width, height), top * _TILE + _FLOOR_OFFSET)


def find_hitboxes(rows: list[str], size: int, count: int) -> list[Hitbox]:
    """Collect up to ``count`` floor hitboxes, row by row, left to right."""
    hitboxes: list[Hitbox] = []
    row_index = 0
    column = 0
    steps = 0
    while row_index < len(rows) and len(hitboxes) < count:
        column = rows[row_index].find("F", column)
        if steps >= size or column == -1:
            row_index += 1
            steps = 0
            column = 0
        else:
            hitbox = hitbox_from_row(rows[row_index], row_index + _ROW_SHIFT, column)
            hitboxes.append(hitbox)
            column = int((hitbox.rect.left + hitbox.rect.width) / _TILE)
        steps += 1
    return hitboxes


def parse_map(text: str, hitbox_count: int) -> MapData:
    """Parse map file contents. Raises ``ValueError`` on a malformed map."""
    lines = text.split("\n")
    if len(lines) < 3 + _ROWS:
        raise ValueError(f"map needs {3 + _ROWS} lines, got {len(lines)}")
    texture, level_line, size_line = lines[0], lines[1], lines[2]
    if not level_line or level_line[0] not in "0123456789":
        raise ValueError(f"bad level line: {level_line!r}")
    level_count = int(level_line[0])
    rest = level_line[2:]
    levels = rest.split(" ") if rest else []
    if len(levels) != level_count:
        raise ValueError(f"expected {level_count} levels, found {len(levels)}")
    size = getnbr(size_line[:2]) + 1
    rows = lines[3 : 3 + _ROWS]
    data = MapData(texture=texture, levels=levels, size=size, rows=rows)
    data.hitboxes = find_hitboxes(rows, size, hitbox_count)
    data.player_pos = data.position_of("P")
    return data


def load_map(path: str | Path, hitbox_count: int) -> MapData:
    """Read and parse a map file."""
    return parse_map(Path(path).read_text(encoding="utf-8"), hitbox_count)