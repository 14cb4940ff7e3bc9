"""The windowed front end: asset loading, drawing and the main loop."""

from __future__ import annotations

import argparse
from itertools import takewhile
from pathlib import Path

import pygame

from .animation import AnimatedObject
from .game import Game, Key
from .geometry import Rect, Vec2
from .scene import Background, Label

TITLE = "DARK SOULS"
WINDOW_SIZE = (1280, 720)
FULLSCREEN_SIZE = (1920, 1080)
FRAME_RATE = 60
ICON_PATH = "./asset/icon/icon.png"

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
_OUTLINE = 2

_KEYS = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_a: Key.A,
    pygame.K_e: Key.E,
    pygame.K_h: Key.H,
    pygame.K_r: Key.R,
    pygame.K_t: Key.T,
    pygame.K_z: Key.Z,
}


def translate_key(pygame_key: int) -> Key:
    """The game key for a pygame key code; unknown keys give ``Key.OTHER``."""
    return _KEYS.get(pygame_key, Key.OTHER)


def _mixer_ready() -> bool:
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
    except pygame.error:
        return False
    return True


class AssetCache:
    """Loads images, fonts and sounds relative to ``root`` and keeps them."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)
        self._images: dict[str, pygame.Surface] = {}
        self._fonts: dict[tuple[str, int], pygame.font.Font] = {}
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        if not pygame.font.get_init():
            pygame.font.init()

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def image(self, path: str) -> pygame.Surface:
        """The image at ``path``. Raises ``FileNotFoundError`` when it is missing."""
        if path not in self._images:
            file = self._resolve(path)
            if not file.is_file():
                raise FileNotFoundError(file)
            self._images[path] = pygame.image.load(str(file))
        return self._images[path]

    def font(self, path: str, size: int) -> pygame.font.Font:
        """The font at ``path`` in ``size``; the default font when the file is missing."""
        key = (path, size)
        if key not in self._fonts:
            file = self._resolve(path)
            self._fonts[key] = pygame.font.Font(str(file) if file.is_file() else None, size)
        return self._fonts[key]

    def sound(self, path: str) -> pygame.mixer.Sound | None:
        """The sound at ``path`` at full volume, or ``None`` when no audio is available.

        Raises ``FileNotFoundError`` when the file is missing.
        """
        if path not in self._sounds:
            file = self._resolve(path)
            if not file.is_file():
                raise FileNotFoundError(file)
            if not _mixer_ready():
                return None
            sound = pygame.mixer.Sound(str(file))
            sound.set_volume(1.0)
            self._sounds[path] = sound
        return self._sounds[path]


class Renderer:
    """Draws the game onto a canvas the size of the default view."""

    def __init__(self, canvas: pygame.Surface, assets: AssetCache) -> None:
        self.canvas = canvas
        self.assets = assets
        self._camera = Vec2(0, 0)

    def draw(self, game: Game) -> None:
        """Clear the canvas and draw the menu, the credits or the current scene."""
        self.canvas.fill(BLACK)
        width, height = self.canvas.get_size()
        self._camera = Vec2(game.view_center.x - width / 2, game.view_center.y - height / 2)
        if not game.in_game:
            self._draw_menu(game)
        elif game.is_end:
            self._draw_end(game)
        else:
            self._draw_scene(game)

    def _screen(self, pos: Vec2) -> tuple[float, float]:
        return pos.x - self._camera.x, pos.y - self._camera.y

    def _load(self, path: str) -> pygame.Surface | None:
        # A texture that failed to load draws nothing.
        try:
            return self.assets.image(path)
        except (FileNotFoundError, pygame.error):
            return None

    def _draw_image(
        self,
        path: str,
        rect: Rect | None,
        pos: Vec2,
        scale: Vec2,
        origin: Vec2 | None = None,
    ) -> None:
        image = self._load(path)
        if image is None:
            return
        if rect is not None:
            area = pygame.Rect(int(rect.left), int(rect.top), int(rect.width), int(rect.height))
            area = area.clip(image.get_rect())
            if area.width <= 0 or area.height <= 0:
                return
            frame = image.subsurface(area)
            local_w, local_h = rect.width, rect.height
        else:
            frame = image
            local_w, local_h = image.get_size()
        if origin is None:
            origin = Vec2(local_w / 2, local_h)
        size = (max(1, round(frame.get_width() * abs(scale.x))),
                max(1, round(frame.get_height() * abs(scale.y))))
        frame = pygame.transform.scale(frame, size)
        if scale.x < 0 or scale.y < 0:
            frame = pygame.transform.flip(frame, scale.x < 0, scale.y < 0)
        x_ends = (pos.x - origin.x * scale.x, pos.x + (local_w - origin.x) * scale.x)
        y_ends = (pos.y - origin.y * scale.y, pos.y + (local_h - origin.y) * scale.y)
        left, top = self._screen(Vec2(min(x_ends), min(y_ends)))
        self.canvas.blit(frame, (round(left), round(top)))

    def _draw_obj(self, obj: AnimatedObject) -> None:
        self._draw_image(obj.image, obj.current_rect(), obj.pos, obj.scale)

    def _draw_button(self, obj: AnimatedObject) -> None:
        image = self._load(obj.image)
        if image is None:
            return
        width, height = image.get_size()
        self._draw_image(obj.image, obj.current_rect(), obj.pos, obj.scale,
                         Vec2(width / 2, height / 2))

    def _draw_label(self, label: Label) -> None:
        font = self.assets.font(label.font, label.size)
        body = font.render(label.text, True, WHITE)
        outline = font.render(label.text, True, BLACK)
        width, height = body.get_size()
        surface = pygame.Surface((width + 2 * _OUTLINE, height + 2 * _OUTLINE), pygame.SRCALPHA)
        for dx in range(-_OUTLINE, _OUTLINE + 1):
            for dy in range(-_OUTLINE, _OUTLINE + 1):
                if dx or dy:
                    surface.blit(outline, (_OUTLINE + dx, _OUTLINE + dy))
        surface.blit(body, (_OUTLINE, _OUTLINE))
        x, y = self._screen(label.pos)
        self.canvas.blit(surface, (round(x - surface.get_width() / 2),
                                   round(y - surface.get_height() / 2)))

    def _draw_tiled(self, path: str, pos: Vec2, rect: Rect) -> None:
        image = self._load(path)
        if image is None:
            return
        tile_w, tile_h = image.get_size()
        if tile_w == 0 or tile_h == 0:
            return
        screen_x, screen_y = self._screen(pos)
        screen_x, screen_y = int(screen_x), int(screen_y)
        top = int(rect.top) % tile_h
        draw_h = min(int(rect.height), tile_h - top)
        limit = min(screen_x + int(rect.width), self.canvas.get_width())
        x = screen_x - int(rect.left) % tile_w
        if x < 0:
            x += (-x // tile_w) * tile_w
            if x > max(screen_x, 0):
                x -= tile_w
        while x < limit:
            src_left = max(0, screen_x - x)
            src_right = min(tile_w, limit - x)
            if src_right > src_left:
                self.canvas.blit(image, (x + src_left, screen_y),
                                 (src_left, top, src_right - src_left, draw_h))
            x += tile_w

    def _draw_background(self, background: Background) -> None:
        images = background.images
        for layer, (path, rect) in enumerate(zip(images, background.rects)):
            pos = background.sky[layer] if layer < len(background.sky) else background.layer_offset
            self._draw_tiled(path, pos, rect)
        self._draw_image(images[-1], None, Vec2(0, 0), Vec2(1, 1), Vec2(0, 0))

    def _draw_menu(self, game: Game) -> None:
        menu = game.menus[game.index]
        for label in menu.labels:
            self._draw_label(label)
        for button in menu.buttons:
            self._draw_button(button)

    def _draw_end(self, game: Game) -> None:
        if game.credits is None:
            return
        for label in game.credits.lines:
            self._draw_label(label)

    def _draw_scene(self, game: Game) -> None:
        scene = game.scenes[game.index]
        self._draw_background(scene.background)
        for mob in scene.mobs:
            self._draw_obj(mob.obj)
        for label in scene.texts:
            self._draw_label(label)
        for item in takewhile(lambda it: it.display, scene.items):
            self._draw_obj(item.obj)
        if game.hud is not None:
            for icon in (*game.hud.hearts, *game.hud.stamina):
                self._draw_obj(icon)
        if game.index == 1 and scene.npc is not None:
            self._draw_obj(scene.npc.obj)
        self._draw_obj(scene.fire.obj)
        if game.player is not None:
            self._draw_obj(game.player.obj)
        inventory = game.inventory
        if inventory.display:
            self._draw_image(inventory.image, None, inventory.pos, inventory.scale,
                             inventory.origin)
            for slot in inventory.items:
                if slot.display:
                    self._draw_obj(slot)


class _Music:
    """Keeps the streamed music in step with what the game asks for."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.track: str | None = None
        self.started = False
        self.playing = False
        self.enabled = _mixer_ready()

    def sync(self, game: Game) -> None:
        if not self.enabled:
            return
        if game.music != self.track:
            self.track = game.music
            pygame.mixer.music.stop()
            try:
                pygame.mixer.music.load(str(self.root / game.music))
            except pygame.error:
                self.enabled = False
                return
            pygame.mixer.music.set_volume(1.0)
            self.started = self.playing = False
        if game.music_playing and not self.playing:
            if self.started:
                pygame.mixer.music.unpause()
            else:
                pygame.mixer.music.play()
                self.started = True
            self.playing = True
        elif not game.music_playing and self.playing:
            pygame.mixer.music.pause()
            self.playing = False


def _play_sounds(game: Game, assets: AssetCache) -> None:
    for path in game.sounds:
        try:
            sound = assets.sound(path)
        except (FileNotFoundError, pygame.error):
            continue
        if sound is not None:
            sound.play()
    game.sounds.clear()


def _handle_event(game: Game, event: pygame.event.Event) -> None:
    if event.type == pygame.QUIT:
        game.running = False
    elif game.in_game:
        if event.type == pygame.KEYUP:
            game.key_released(translate_key(event.key))
    elif event.type == pygame.KEYDOWN:
        game.menu_key(translate_key(event.key))


def _advance_end(game: Game, dt: float) -> None:
    if game.is_end and game.credits is not None:
        game.credits.advance(dt)
        if game.credits.finished():
            game.running = False


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="A side-scrolling action game.")
    parser.add_argument("--root", default=".",
                        help="directory holding the asset and map folders and end.txt")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Open the window and run the game until it is closed."""
    args = _parse_args(argv)
    root = Path(args.root)
    pygame.init()
    try:
        window = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        icon = root / ICON_PATH
        if icon.is_file():
            pygame.display.set_icon(pygame.image.load(str(icon)))
        pygame.mouse.set_visible(False)
        assets = AssetCache(root)
        canvas = pygame.Surface(WINDOW_SIZE)
        renderer = Renderer(canvas, assets)
        game = Game(map_dir=root / "map", credits_path=root / "end.txt")
        music = _Music(root)
        fullscreen = game.fullscreen
        clock = pygame.time.Clock()
        while game.running:
            music.sync(game)
            dt = clock.tick(FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                _handle_event(game, event)
            _play_sounds(game, assets)
            pressed = pygame.key.get_pressed()
            game.update(dt, bool(pressed[pygame.K_LEFT]), bool(pressed[pygame.K_RIGHT]))
            _advance_end(game, dt)
            if game.fullscreen != fullscreen:
                fullscreen = game.fullscreen
                size = FULLSCREEN_SIZE if fullscreen else WINDOW_SIZE
                window = pygame.display.set_mode(size, pygame.RESIZABLE)
            renderer.draw(game)
            window.blit(pygame.transform.scale(canvas, window.get_size()), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0