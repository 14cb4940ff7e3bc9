import pygame
import pytest

from knightofashes.app import AssetCache, Renderer, translate_key
from knightofashes.game import Game, Key
from knightofashes.geometry import Vec2
from knightofashes.scene import Credits, Label

RED = (255, 0, 0)


@pytest.fixture
def assets(tmp_path):
    return AssetCache(tmp_path)


@pytest.fixture
def canvas():
    return pygame.Surface((1280, 720))


def _write_maps(root):
    map_dir = root / "map"
    map_dir.mkdir()
    blank = "." * 20
    rows = [blank, blank, blank, blank, "..P..f" + "." * 14, blank]
    text = "\n".join(["./asset/bg/none.png", "1 1", "20", *rows]) + "\n"
    for name in ("tuto.txt", "nexus.txt", "lvl_one.txt", "lvl_two.txt",
                 "lvl_three.txt", "lvl_four.txt"):
        (map_dir / name).write_text(text, encoding="utf-8")
    return map_dir


@pytest.mark.parametrize(
    "code, key",
    [
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_RIGHT, Key.RIGHT),
        (pygame.K_UP, Key.UP),
        (pygame.K_DOWN, Key.DOWN),
        (pygame.K_SPACE, Key.SPACE),
        (pygame.K_RETURN, Key.ENTER),
        (pygame.K_a, Key.A),
        (pygame.K_e, Key.E),
        (pygame.K_h, Key.H),
        (pygame.K_r, Key.R),
        (pygame.K_t, Key.T),
        (pygame.K_z, Key.Z),
    ],
)
def test_translate_known_keys(code, key):
    assert translate_key(code) is key


def test_translate_unknown_key():
    assert translate_key(pygame.K_q) is Key.OTHER


def test_image_loads_and_is_cached(tmp_path, assets):
    surface = pygame.Surface((4, 3))
    pygame.image.save(surface, str(tmp_path / "a.png"))
    first = assets.image("a.png")
    assert first.get_size() == (4, 3)
    assert assets.image("a.png") is first


def test_missing_image_raises(assets):
    with pytest.raises(FileNotFoundError):
        assets.image("./asset/nothing.png")


def test_missing_sound_raises(assets):
    with pytest.raises(FileNotFoundError):
        assets.sound("./asset/sound/nothing.ogg")


def test_font_falls_back_and_is_cached(assets):
    font = assets.font("./asset/font/missing.ttf", 30)
    assert font.size("start")[0] > 0
    assert assets.font("./asset/font/missing.ttf", 30) is font
    assert assets.font("./asset/font/missing.ttf", 20) is not font


def test_draw_clears_canvas(canvas, assets):
    canvas.fill(RED)
    Renderer(canvas, assets).draw(Game())
    assert canvas.get_at((5, 5))[:3] == (0, 0, 0)


def test_draw_menu_shows_labels(canvas, assets):
    game = Game()
    Renderer(canvas, assets).draw(game)
    label_pixels = [canvas.get_at((x, y))[:3]
                    for x in range(610, 671) for y in range(390, 411)]
    corner_pixels = [canvas.get_at((x, y))[:3]
                     for x in range(0, 40) for y in range(0, 40)]
    assert max(max(p) for p in label_pixels) > 128
    assert max(max(p) for p in corner_pixels) <= 128


def test_draw_end_shows_credits(canvas, assets):
    game = Game(in_game=True, is_end=True)
    game.credits = Credits([Label("credits", 20, Vec2(50, 360))])
    Renderer(canvas, assets).draw(game)
    label_pixels = [canvas.get_at((x, y))[:3]
                    for x in range(35, 66) for y in range(352, 369)]
    empty_pixels = [canvas.get_at((x, y))[:3]
                    for x in range(600, 700) for y in range(600, 700)]
    assert max(max(p) for p in label_pixels) > 128
    assert max(max(p) for p in empty_pixels) <= 128


def test_draw_scene_shows_player(tmp_path, canvas, assets):
    map_dir = _write_maps(tmp_path)
    knight_dir = tmp_path / "asset" / "mob"
    knight_dir.mkdir(parents=True)
    sheet = pygame.Surface((1200, 720))
    sheet.fill(RED)
    pygame.image.save(sheet, str(knight_dir / "knight.png"))
    game = Game(map_dir=map_dir)
    game.start()
    Renderer(canvas, assets).draw(game)
    assert canvas.get_at((640, 600))[:3] == RED
    assert canvas.get_at((640, 300))[:3] != RED