"""Game scenes: parallax backgrounds, level contents and the end credits."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

from .entities import (
    CHESTPLATE_IMAGE,
    SWORD_IMAGE,
    Fire,
    Item,
    Mob,
    Npc,
    create_boss,
    create_fire,
    create_item,
    create_mob,
    create_npc,
)
from .geometry import Rect, Vec2
from .mapfile import MapData, load_map
from .textutil import strtok

SCENE_FONT = "./asset/font/Sabo.ttf"
CREDITS_FONT = "./asset/font/font.ttf"
SCENE_RECT = Rect(0, 0, 10240, 720)

SKY_IMAGE = "./asset/bg/sky.png"
TOWER_IMAGE = "./asset/bg/tower.png"
TOWN_IMAGE = "./asset/bg/town.png"
MOUNTAIN_IMAGE = "./asset/bg/montain.png"

CLAW_IMAGE = "./asset/mob/claw.png"
AXE_IMAGE = "./asset/mob/axe.png"
MINIBOSS_IMAGE = "./asset/mob/mboss.png"
BOSS_IMAGE = "./asset/mob/boss.png"

RIGHT = 1
LEFT = 2

_LAYER_IMAGES = (SKY_IMAGE, SKY_IMAGE, TOWER_IMAGE, TOWN_IMAGE, MOUNTAIN_IMAGE)
_PARALLAX = (8, 8, 6, 4, 2)
_SKY_LIMIT = 8960
_SKY_SPEED = 0.2
_LAYER_OFFSET = Vec2(-1280, 0)

_CREDITS_SIZE = 20
_CREDITS_TOP = 720
_CREDITS_SPACING = 25
_CREDITS_X = 50
_CREDITS_STEP = 15
_CREDITS_PERIOD = 0.005
_CREDITS_GONE = -200

_MAPS = (
    ("tuto.txt", 7),
    ("nexus.txt", 7),
    ("lvl_one.txt", 8),
    ("lvl_two.txt", 9),
    ("lvl_three.txt", 9),
    ("lvl_four.txt", 9),
)

# Per scene: (image, marker, is boss) for each enemy.
_MOBS: tuple[tuple[tuple[str, str, bool], ...], ...] = (
    ((CLAW_IMAGE, "c", False),),
    (),
    ((AXE_IMAGE, "a", False), (CLAW_IMAGE, "c", False), (AXE_IMAGE, "a", False)),
    (
        (AXE_IMAGE, "a", False),
        (CLAW_IMAGE, "c", False),
        (CLAW_IMAGE, "c", False),
        (AXE_IMAGE, "a", False),
        (MINIBOSS_IMAGE, "m", True),
    ),
    (
        (CLAW_IMAGE, "c", False),
        (AXE_IMAGE, "a", False),
        (AXE_IMAGE, "a", False),
        (AXE_IMAGE, "a", False),
    ),
    ((AXE_IMAGE, "a", False), (CLAW_IMAGE, "c", False), (BOSS_IMAGE, "B", True)),
)

# Per scene: (image, stat, kind) for each item.
_ITEMS: tuple[tuple[tuple[str, int, int], ...], ...] = (
    ((CHESTPLATE_IMAGE, 10, 1),),
    (),
    ((SWORD_IMAGE, 10, 0),),
    ((SWORD_IMAGE, 10, 0),),
    (),
    (),
)

_NPC_SCENE = 1

_TUTORIAL_TEXTS = (
    ("Use LEFT RIGHT arrows to move", 20, Vec2(350, 420)),
    ("Use SPACE to jump", 25, Vec2(1500, 420)),
    ("use R to roll", 25, Vec2(2400, 420)),
    ("use Z or E to attack", 25, Vec2(3100, 420)),
    ("use A to interact with object", 25, Vec2(4350, 500)),
    ("use t to open inventory", 25, Vec2(4650, 570)),
    ("light the fire and use it to continue", 25, Vec2(6400, 320)),
)


@dataclass
class Label:
    """A line of text drawn centred on ``pos``."""

    text: str
    size: int
    pos: Vec2
    font: str = CREDITS_FONT


@dataclass
class Background:
    """Five parallax layers plus the level's own foreground image.

    The two sky layers drift slowly on their own; the other layers scroll
    with the player at different speeds.
    """

    foreground: str
    rects: list[Rect] = field(default_factory=lambda: [SCENE_RECT] * len(_PARALLAX))
    sky: list[Vec2] = field(default_factory=lambda: [Vec2(0, 0), Vec2(-10240, 0)])
    layer_offset: Vec2 = _LAYER_OFFSET

    @property
    def images(self) -> list[str]:
        """Image paths of all layers, back to front."""
        return [*_LAYER_IMAGES, self.foreground]

    def scroll(self, direction: int) -> None:
        """Shift the layers for a step to the right (1) or to the left (2)."""
        if direction == RIGHT:
            sign = -1
        elif direction == LEFT:
            sign = 1
        else:
            raise ValueError(f"unknown direction: {direction}")
        self.rects = [
            replace(rect, left=rect.left + sign * speed)
            for rect, speed in zip(self.rects, _PARALLAX)
        ]

    def drift(self) -> None:
        """Move the sky layers a little, wrapping them around at the edge."""
        moved = []
        for pos in self.sky:
            x = -_SKY_LIMIT if pos.x >= _SKY_LIMIT else pos.x
            moved.append(Vec2(x + _SKY_SPEED, pos.y))
        self.sky = moved


@dataclass
class Scene:
    """One level: its map, background, bonfire, enemies, texts and items."""

    map: MapData
    background: Background
    fire: Fire
    mobs: list[Mob] = field(default_factory=list)
    texts: list[Label] = field(default_factory=list)
    items: list[Item] = field(default_factory=list)
    npc: Npc | None = None


@dataclass
class Credits:
    """End credits scrolling up the screen."""

    lines: list[Label]
    elapsed: float = 0.0

    def advance(self, dt: float) -> bool:
        """Add ``dt`` seconds; once enough time has passed, move every line up.

        Returns whether the lines moved.
        """
        self.elapsed += dt
        if self.elapsed <= _CREDITS_PERIOD:
            return False
        for line in self.lines:
            line.pos = Vec2(_CREDITS_X, line.pos.y - _CREDITS_STEP)
        self.elapsed = 0.0
        return True

    def finished(self) -> bool:
        """Whether the last line has scrolled off the top (always true with no lines)."""
        if not self.lines:
            return True
        return self.lines[-1].pos.y < _CREDITS_GONE


def load_credits(path: str | Path) -> Credits:
    """Read the credits file, one line of text per non-empty line."""
    text = Path(path).read_text(encoding="utf-8")
    lines = [
        Label(
            line,
            _CREDITS_SIZE,
            Vec2(_CREDITS_X, _CREDITS_TOP + index * _CREDITS_SPACING),
            CREDITS_FONT,
        )
        for index, line in enumerate(strtok(text, "\n"))
    ]
    return Credits(lines=lines)


def _build_scene(index: int, map_data: MapData) -> Scene:
    mobs = [
        (create_boss if boss else create_mob)(map_data, image, marker)
        for image, marker, boss in _MOBS[index]
    ]
    items = [create_item(image, map_data, stat, kind) for image, stat, kind in _ITEMS[index]]
    texts = (
        [Label(text, size, pos, SCENE_FONT) for text, size, pos in _TUTORIAL_TEXTS]
        if index == 0
        else []
    )
    return Scene(
        map=map_data,
        background=Background(map_data.texture),
        fire=create_fire(map_data),
        mobs=mobs,
        texts=texts,
        items=items,
        npc=create_npc() if index == _NPC_SCENE else None,
    )


def build_scenes(map_dir: str | Path = "./map") -> list[Scene]:
    """Load the six levels from ``map_dir`` and populate them."""
    directory = Path(map_dir)
    return [
        _build_scene(index, load_map(directory / name, hitboxes))
        for index, (name, hitboxes) in enumerate(_MAPS)
    ]