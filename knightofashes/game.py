"""Game state and rules: menus, input, movement, falling, fights and level changes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from pathlib import Path

from .animation import AnimatedObject
from .entities import (
    PLAYER_SCALE,
    Hud,
    Inventory,
    Player,
    create_hud,
    create_inventory,
    create_player,
    heavy_attack,
    speed_attack,
)
from .geometry import Vec2
from .mapfile import MapData
from .menu import Menu, MenuAction, main_menu, settings_menu
from .scene import LEFT, RIGHT, Credits, Scene, build_scenes, load_credits
from .textutil import getnbr

MAIN_MUSIC = "./asset/music/main.ogg"
END_MUSIC = "./asset/music/end.ogg"
DEFAULT_MAP_DIR = "./map"
DEFAULT_CREDITS = "./end.txt"

_STEP = 8
_VIEW_Y = 360
_DEATH_DEPTH = 1280
_HUB_SCENE = 1
_FALL_GRAVITY = 9.0
_REST_VELOCITY = 9.0
_REST_GRAVITY = 0.9
_JUMP_GROWTH = 1.1
_FALL_GROWTH = 1.07
_CEILING = -1
_MIN_BLOCK_HEIGHT = 10
_MIN_BLOCK_WIDTH = 1

_INVENTORY_POS = Vec2(80, 320)
_INVENTORY_ITEM_POS = (Vec2(-158, 445), Vec2(-98, 445))
_HUD_SPACING = 17
_HUD_SCALE = 3
_HEART_Y = 50
_STAMINA_Y = 100

_JUMP_STATE = 2
_FALL_STATE = 3
_ATTACK_STATE = 5

_FIRE_PERIOD = 0.1
_FIRE_STEP = 32
_FIRE_WIDTH = 128
_NPC_PERIOD = 0.5
_NPC_STEP = 180
_NPC_WIDTH = 360


class Key(Enum):
    """Keys the game reacts to."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    SPACE = auto()
    ENTER = auto()
    A = auto()
    E = auto()
    H = auto()
    R = auto()
    T = auto()
    Z = auto()
    OTHER = auto()


_RELEASE_STATES = {
    Key.SPACE: _JUMP_STATE,
    Key.R: 4,
    Key.E: 5,
    Key.Z: 6,
    Key.H: 7,
}


def player_can_move(player: Player, map_data: MapData, direction: int) -> bool:
    """Whether the player is clear of every wall of the map for a step left or right."""
    for hitbox in map_data.hitboxes:
        overlap = hitbox.rect.intersection(player.hitbox)
        if overlap is None:
            continue
        blocked = overlap.height >= _MIN_BLOCK_HEIGHT and overlap.width >= _MIN_BLOCK_WIDTH
        if blocked and direction in (RIGHT, LEFT):
            return False
    return True


def _shifted(obj: AnimatedObject, dx: float) -> None:
    obj.pos = Vec2(obj.pos.x + dx, obj.pos.y)


@dataclass
class Game:
    """The whole game: menus, scenes, the player and what surrounds them.

    ``index`` selects the menu while in the menus and the scene while playing.
    ``sounds`` collects the sounds that inputs ask to play, for the front end
    to drain.
    """

    map_dir: str | Path = DEFAULT_MAP_DIR
    credits_path: str | Path = DEFAULT_CREDITS
    index: int = 0
    in_game: bool = False
    is_end: bool = False
    eric: bool = False
    running: bool = True
    fullscreen: bool = False
    music: str = MAIN_MUSIC
    music_playing: bool = True
    view_center: Vec2 = field(default_factory=lambda: Vec2(640, _VIEW_Y))
    menus: list[Menu] = field(default_factory=lambda: [main_menu(), settings_menu()])
    scenes: list[Scene] = field(default_factory=list)
    player: Player | None = None
    hud: Hud | None = None
    inventory: Inventory = field(default_factory=create_inventory)
    credits: Credits | None = None
    sounds: list[str] = field(default_factory=list)

    def _scene(self) -> Scene:
        return self.scenes[self.index]

    def _player(self) -> Player:
        if self.player is None:
            raise RuntimeError("the game has not started")
        return self.player

    def _center_view(self) -> None:
        self.view_center = Vec2(self._player().obj.pos.x, _VIEW_Y)

    def _queue_sound(self, sound: str | None) -> None:
        if sound is not None:
            self.sounds.append(sound)

    def start(self) -> None:
        """Load the levels and put the player at the start of the tutorial."""
        self.in_game = True
        self.index = 0
        self.scenes = build_scenes(self.map_dir)
        self.player = create_player(self._scene().map)
        self._center_view()
        self.hud = create_hud()

    def menu_key(self, key: Key) -> None:
        """React to a key pressed in the menus."""
        if self.in_game:
            return
        menu = self.menus[self.index]
        if key is Key.UP:
            menu.move_cursor(-1)
            self._queue_sound(menu.sound)
        if key is Key.DOWN:
            menu.move_cursor(1)
            self._queue_sound(menu.sound)
        if key is Key.ENTER:
            action = menu.select()
            self._queue_sound(menu.sound)
            self._apply(action)

    def _apply(self, action: MenuAction) -> None:
        if action is MenuAction.QUIT:
            self.running = False
        elif action is MenuAction.START_GAME:
            self.start()
        elif action is MenuAction.OPEN_SETTINGS:
            self.index = 1
        elif action is MenuAction.TOGGLE_ERIC:
            self.eric = not self.eric
        elif action is MenuAction.TOGGLE_FULLSCREEN:
            self.fullscreen = not self.fullscreen
        elif action is MenuAction.TOGGLE_MUSIC:
            self.music_playing = not self.music_playing
        elif action is MenuAction.BACK:
            self.index = 0

    def key_released(self, key: Key) -> None:
        """React to a key released while playing; ignored mid-jump, roll or attack."""
        if not self.in_game or self.player is None:
            return
        player = self.player
        if player.obj.state >= _JUMP_STATE:
            return
        if key is Key.T:
            self.inventory.display = not self.inventory.display
        player.obj.state = _RELEASE_STATES.get(key, 0)
        if key is Key.E:
            heavy_attack(player, self._scene().mobs)
        elif key is Key.Z:
            speed_attack(player, self._scene().mobs)
        if key is Key.A:
            self.handle_actions()
        if key is Key.DOWN:
            self.index = (self.index + 1) % len(self.scenes)
            player.obj.pos = self._scene().map.player_pos
            self._center_view()
        if key is Key.UP:
            print(f"pos.x: {player.obj.pos.x:f}; pos.y: {player.obj.pos.y:f}")

    def update(self, dt: float, left_held: bool = False, right_held: bool = False) -> None:
        """Advance the game by ``dt`` seconds with the arrow keys in the given state."""
        if not self.in_game or self.player is None:
            return
        player = self.player
        if player.obj.state == _JUMP_STATE:
            self._jump()
        self._move_player(left_held, right_held)
        player.animate(dt)
        scene = self._scene()
        scene.background.drift()
        if scene.fire.obj.state > 0:
            scene.fire.obj.tick(dt, _FIRE_PERIOD, _FIRE_STEP, _FIRE_WIDTH)
        if self.index == _HUB_SCENE and scene.npc is not None:
            scene.npc.obj.tick(dt, _NPC_PERIOD, _NPC_STEP, _NPC_WIDTH)
        for mob in scene.mobs:
            mob.animate(dt)

    def _jump(self) -> None:
        player = self._player()
        player.falling = True
        pos = player.obj.pos
        player.obj.pos = Vec2(pos.x, pos.y - (player.velocity - player.gravity))
        if player.gravity <= player.velocity:
            player.gravity *= _JUMP_GROWTH
        else:
            player.obj.state = _FALL_STATE

    def _move_player(self, left_held: bool, right_held: bool) -> None:
        player = self._player()
        floor = self.on_floor()
        for held, direction, sign in ((left_held, LEFT, -1), (right_held, RIGHT, 1)):
            if not held or player.obj.state >= _ATTACK_STATE:
                continue
            if player.obj.state < _JUMP_STATE:
                player.obj.state = 1
            if player_can_move(player, self._scene().map, direction):
                player.obj.scale = Vec2(sign * PLAYER_SCALE, PLAYER_SCALE)
                self.move(direction)
        state = player.obj.state
        if state == _FALL_STATE or (floor is None and state != _JUMP_STATE):
            if not player.falling:
                player.gravity = _FALL_GRAVITY
                player.falling = True
                player.obj.state = _FALL_STATE
            self.fall(floor)

    def move(self, direction: int) -> None:
        """Take one step right (1) or left (2), dragging the HUD and inventory along."""
        player = self._player()
        if player.can_move and direction in (RIGHT, LEFT):
            step = _STEP if direction == RIGHT else -_STEP
            self._scene().background.scroll(direction)
            _shifted(player.obj, step)
            pos = self.inventory.pos
            self.inventory.pos = Vec2(pos.x + step, pos.y)
            if self.hud is not None:
                for icon in (*self.hud.hearts, *self.hud.stamina):
                    _shifted(icon, step)
            for slot in self.inventory.items:
                _shifted(slot, step)
        self._center_view()

    def on_floor(self) -> float | None:
        """The resting height of the first floor the player touches, or ``None``."""
        player = self._player()
        for hitbox in self._scene().map.hitboxes:
            if hitbox.rect.intersects(player.hitbox):
                return hitbox.y
        return None

    def fall(self, floor_y: float | None) -> None:
        """One step of falling; land on ``floor_y`` when there is a floor."""
        player = self._player()
        pos = player.obj.pos
        y = pos.y - (player.velocity - player.gravity)
        player.gravity *= _FALL_GROWTH
        if floor_y is None:
            if y <= _CEILING:
                y = _CEILING
        else:
            player.obj.state = 0
            player.velocity = _REST_VELOCITY
            player.gravity = _REST_GRAVITY
            player.falling = False
            y = floor_y
        player.obj.pos = Vec2(pos.x, y)
        self.die()

    def die(self) -> None:
        """Respawn a player who fell out of the level: in the tutorial, or at the hub."""
        player = self._player()
        if player.obj.pos.y < _DEATH_DEPTH:
            return
        if self.index != 0:
            self.index = _HUB_SCENE
        player.obj.pos = self._scene().map.player_pos
        self._center_view()
        player.gravity = _FALL_GRAVITY

    def handle_actions(self) -> None:
        """Use the bonfire or pick up items the player is touching."""
        player = self._player()
        if player.hitbox.intersects(self._scene().fire.hitbox):
            self._use_fire()
        for slot, item in enumerate(self._scene().items):
            if player.hitbox.intersects(item.hitbox):
                self._pick_up(slot)

    def _use_fire(self) -> None:
        fire = self._scene().fire
        if fire.obj.state == 0:
            fire.obj.state = 1
        elif fire.obj.state == 1:
            self.index = getnbr(self._scene().map.levels[-1])
            if self.index == 0:
                self._finish()
            self.reset_position()

    def _finish(self) -> None:
        self.credits = load_credits(self.credits_path)
        self.music = END_MUSIC
        self.music_playing = True
        self.is_end = True

    def _pick_up(self, slot: int) -> None:
        player = self._player()
        slots = self.inventory.items
        if slots[slot].display and slot + 1 < len(slots):
            slots[slot + 1].display = True
        slots[slot].display = True
        item = self._scene().items[slot]
        item.display = False
        player.atk += int(item.attack)
        player.defense += int(item.defense)

    def reset_position(self) -> None:
        """Put the player at the current level's start and the HUD and inventory home."""
        player = self._player()
        player.obj.pos = self._scene().map.player_pos
        self.inventory.pos = _INVENTORY_POS
        for slot, pos in zip(self.inventory.items, _INVENTORY_ITEM_POS):
            slot.pos = pos
        if self.hud is not None:
            for slot, (heart, stamina) in enumerate(zip(self.hud.hearts, self.hud.stamina)):
                x = slot * _HUD_SPACING * _HUD_SCALE
                heart.pos = Vec2(x, _HEART_Y)
                stamina.pos = Vec2(x, _STAMINA_Y)
        self._center_view()


__all__ = ["Game", "Key", "player_can_move", "replace"]