"""Game entities: the player, enemies, the NPC, items, fires, HUD and inventory."""

from __future__ import annotations

from dataclasses import dataclass, field

from .animation import AnimatedObject
from .geometry import Rect, Vec2
from .mapfile import MapData

PLAYER_IMAGE = "./asset/mob/knight.png"
NPC_IMAGE = "./asset/mob/npc.png"
FIRE_IMAGE = "./asset/obj/fire.png"
FIRE_FX_IMAGE = "./asset/fx/fire.png"
HEART_IMAGE = "./asset/hud/heart.png"
STAMINA_IMAGE = "./asset/hud/stamina.png"
INVENTORY_IMAGE = "./asset/obj/inventory.png"
CHESTPLATE_IMAGE = "./asset/obj/d_chestplate.png"
SWORD_IMAGE = "./asset/obj/d_sword.png"

PLAYER_SCALE = 2.25
HURT_STATE = 5
HUD_SLOTS = 5

# Player animation rows: state -> (frame period, sheet width, can be hit).
_PLAYER_FRAMES: dict[int, tuple[float, int, bool]] = {
    0: (0.11, 1200, True),
    1: (0.06, 1200, True),
    8: (0.06, 1200, False),
    2: (0.07, 360, False),
    3: (0.07, 360, False),
    4: (0.06, 1440, False),
    5: (0.09, 720, False),
    6: (0.07, 480, False),
    7: (0.086, 600, False),
}
_PLAYER_FRAME_STEP = 120

# Mob animation rows: state -> (sheet width, can be hit).
_MOB_FRAMES: dict[int, tuple[int, bool]] = {
    0: (600, True),
    1: (600, True),
    2: (600, True),
    3: (600, False),
    4: (600, False),
    5: (300, False),
    6: (400, False),
}
_MOB_FRAME_STEP = 100
_MOB_PERIOD = 0.1


def _make_obj(image: str, pos: Vec2, scale: Vec2, rect: Rect) -> AnimatedObject:
    return AnimatedObject(rects=[rect], pos=pos, image=image, scale=scale)


@dataclass
class Player:
    """The knight controlled by the player."""

    obj: AnimatedObject
    hitbox: Rect = field(default_factory=Rect)
    attack_box: Rect = field(default_factory=Rect)
    hit: bool = True
    can_move: bool = True
    falling: bool = False
    souls: int = 0
    lvl: int = 0
    atk: int = 1
    defense: int = 0
    life: float = 0.0
    stamina: float = 0.0
    velocity: float = 9.0
    gravity: float = 0.9

    def _update_hitboxes(self) -> None:
        pos = self.obj.pos
        top = pos.y - 85.5
        if self.obj.scale.x < 0:
            self.hitbox = Rect(pos.x - 10, top, 47.25, 86)
            self.attack_box = Rect(pos.x - 105, top, 90, 86)
        else:
            self.hitbox = Rect(pos.x - 36, top, 47.25, 86)
            self.attack_box = Rect(pos.x + 15, top, 90, 86)

    def animate(self, dt: float) -> None:
        """Advance the current animation by ``dt`` seconds and refresh the hitboxes."""
        frame = _PLAYER_FRAMES.get(self.obj.state)
        if frame is not None:
            period, width, hittable = frame
            self.hit = hittable
            self.obj.tick(dt, period, _PLAYER_FRAME_STEP, width)
        self._update_hitboxes()


@dataclass
class Mob:
    """An enemy."""

    obj: AnimatedObject
    hitbox: Rect
    kind: str
    life: float
    atk: float
    hit: bool = True

    def animate(self, dt: float) -> None:
        """Advance the current animation by ``dt`` seconds."""
        frame = _MOB_FRAMES.get(self.obj.state)
        if frame is None:
            return
        width, hittable = frame
        self.obj.tick(dt, _MOB_PERIOD, _MOB_FRAME_STEP, width)
        self.hit = hittable


@dataclass
class Npc:
    """A non-player character standing in the hub."""

    obj: AnimatedObject
    hitbox: Rect


@dataclass
class Item:
    """A piece of equipment lying in a level."""

    obj: AnimatedObject
    hitbox: Rect
    attack: float = 0.0
    defense: float = 0.0
    display: bool = True


@dataclass
class Fire:
    """A bonfire that, once lit, leads to the next level."""

    obj: AnimatedObject
    fx: AnimatedObject
    hitbox: Rect
    levels: list[str]


@dataclass
class Hud:
    """Heart and stamina icons."""

    hearts: list[AnimatedObject]
    stamina: list[AnimatedObject]


@dataclass
class Inventory:
    """The inventory panel and the equipment icons shown in it."""

    items: list[AnimatedObject]
    pos: Vec2 = field(default_factory=lambda: Vec2(80, 320))
    image: str = INVENTORY_IMAGE
    scale: Vec2 = field(default_factory=lambda: Vec2(1.75, 1.75))
    origin: Vec2 = field(default_factory=lambda: Vec2(166, 81))
    display: bool = False


def create_player(map_data: MapData) -> Player:
    """Create the player at the map's ``P`` marker, facing right."""
    obj = AnimatedObject(
        rects=[Rect(0, row * 80, 120, 80) for row in range(9)],
        pos=map_data.player_pos,
        image=PLAYER_IMAGE,
        scale=Vec2(PLAYER_SCALE, PLAYER_SCALE),
        state=0,
        loop=4,
    )
    player = Player(obj=obj)
    player._update_hitboxes()
    return player


def _mob_rects() -> list[Rect]:
    return [Rect(0, row * 64, 100, 64) for row in range(7)]


def _build_mob(
    map_data: MapData, asset: str, ch: str, scale: float, box: tuple[float, float, float, float],
    atk: float, life: float,
) -> Mob:
    pos = map_data.position_of(ch)
    obj = AnimatedObject(rects=_mob_rects(), pos=pos, image=asset, scale=Vec2(-scale, scale), loop=2)
    dx, dy, width, height = box
    hitbox = Rect(pos.x - dx, pos.y - dy, width, height)
    return Mob(obj=obj, hitbox=hitbox, kind=ch, life=life, atk=atk)


def create_mob(map_data: MapData, asset: str, ch: str) -> Mob:
    """Create a regular enemy at the map's ``ch`` marker."""
    return _build_mob(map_data, asset, ch, 2.7, (30, 100, 60, 100), atk=1, life=2)


def create_boss(map_data: MapData, asset: str, ch: str) -> Mob:
    """Create a boss at the map's ``ch`` marker."""
    return _build_mob(map_data, asset, ch, 3.2, (50, 120, 110, 120), atk=2, life=5)


def create_npc() -> Npc:
    """Create the hub NPC."""
    pos = Vec2(980, 580)
    obj = AnimatedObject(
        rects=[Rect(0, 0, 180, 180)], pos=pos, image=NPC_IMAGE, scale=Vec2(-0.85, 0.85), loop=2
    )
    return Npc(obj=obj, hitbox=Rect(pos.x - 30, pos.y - 110, 60, 110))


def create_item(path: str, map_data: MapData, stat: float, kind: int) -> Item:
    """Create an item: kind 0 is a sword at ``s``, any other kind a chestplate at ``C``."""
    if kind == 0:
        pos = map_data.position_of("s")
        obj = _make_obj(path, pos, Vec2(0.7, 0.7), Rect(0, 0, 40, 80))
        hitbox = Rect(pos.x - 14, pos.y - 56, 28, 56)
        return Item(obj=obj, hitbox=hitbox, attack=stat)
    pos = map_data.position_of("C")
    obj = _make_obj(path, pos, Vec2(0.3, 0.3), Rect(0, 0, 174, 162))
    hitbox = Rect(pos.x - 26.1, pos.y - 24.3, 52.2, 48.6)
    return Item(obj=obj, hitbox=hitbox, defense=stat)


def create_fire(map_data: MapData) -> Fire:
    """Create the level's bonfire at the ``f`` marker."""
    pos = map_data.position_of("f")
    scale = 2
    frame = 32
    obj = AnimatedObject(
        rects=[Rect(0, row * frame, frame, frame) for row in range(3)],
        pos=pos,
        image=FIRE_IMAGE,
        scale=Vec2(scale, scale),
        loop=2,
    )
    size = frame * scale
    # The sprite is anchored at its bottom centre.
    hitbox = Rect(pos.x - size / 2, pos.y - size, size, size)
    fx = _make_obj(FIRE_FX_IMAGE, pos, Vec2(1, 1), Rect(0, 0, 96, 96))
    return Fire(obj=obj, fx=fx, hitbox=hitbox, levels=list(map_data.levels))


def _hud_x(slot: int) -> float:
    return (-175 + slot * 17) * 3


def create_hud() -> Hud:
    """Create the row of hearts and the row of stamina icons."""
    hearts = [
        _make_obj(HEART_IMAGE, Vec2(_hud_x(slot), 50), Vec2(3, 3), Rect(0, 0, 16, 16))
        for slot in range(HUD_SLOTS)
    ]
    stamina = [
        _make_obj(STAMINA_IMAGE, Vec2(_hud_x(slot), 100), Vec2(2, 2), Rect(0, 0, 16, 22))
        for slot in range(HUD_SLOTS)
    ]
    return Hud(hearts=hearts, stamina=stamina)


def create_inventory() -> Inventory:
    """Create the hidden inventory panel with its chestplate and sword slots."""
    items = [
        _make_obj(CHESTPLATE_IMAGE, Vec2(-158, 445), Vec2(0.3, 0.3), Rect(0, 0, 174, 162)),
        _make_obj(SWORD_IMAGE, Vec2(-98, 445), Vec2(0.68, 0.68), Rect(0, 0, 40, 80)),
    ]
    return Inventory(items=items)


def _attack(player: Player, mobs: list[Mob], damage: float) -> list[Mob]:
    struck = [mob for mob in mobs if mob.hitbox.intersects(player.attack_box)]
    for mob in struck:
        mob.life -= damage
        mob.obj.state = HURT_STATE
    return struck


def speed_attack(player: Player, mobs: list[Mob]) -> list[Mob]:
    """Hit every mob in reach for the player's attack; return the mobs struck."""
    return _attack(player, mobs, player.atk)


def heavy_attack(player: Player, mobs: list[Mob]) -> list[Mob]:
    """Hit every mob in reach for one more than the player's attack; return the mobs struck."""
    return _attack(player, mobs, player.atk + 1)