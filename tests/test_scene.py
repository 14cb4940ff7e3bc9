from pathlib import Path

import pytest

from knightofashes.geometry import Rect, Vec2
from knightofashes.scene import (
    Background,
    Credits,
    Label,
    build_scenes,
    load_credits,
)

_ROWS = [
    "....................",
    "..C.................",
    "..P.f.c.a.m.B.s.....",
    "....................",
    "....................",
    "FFFFFFFFFFFFFFFFFFFF",
]
_MAP_TEXT = "./asset/bg/forest.png\n1 2\n20\n" + "\n".join(_ROWS) + "\n"
_MAP_NAMES = ["tuto.txt", "nexus.txt", "lvl_one.txt", "lvl_two.txt", "lvl_three.txt", "lvl_four.txt"]


@pytest.fixture
def map_dir(tmp_path: Path) -> Path:
    for name in _MAP_NAMES:
        (tmp_path / name).write_text(_MAP_TEXT, encoding="utf-8")
    return tmp_path


def test_background_layers_start_from_scene_rect():
    bg = Background("./asset/bg/forest.png")
    assert bg.rects == [Rect(0, 0, 10240, 720)] * 5
    assert bg.images[-1] == "./asset/bg/forest.png"
    assert bg.images[0] == "./asset/bg/sky.png"
    assert len(bg.images) == 6


def test_scroll_right_then_left_is_identity():
    bg = Background("fg.png")
    original = list(bg.rects)
    bg.scroll(1)
    assert bg.rects != original
    bg.scroll(2)
    assert bg.rects == original


def test_scroll_right_moves_near_layers_further():
    bg = Background("fg.png")
    bg.scroll(1)
    shifts = [rect.left for rect in bg.rects]
    assert shifts == sorted(shifts)
    assert all(shift < 0 for shift in shifts)


def test_scroll_rejects_unknown_direction():
    with pytest.raises(ValueError):
        Background("fg.png").scroll(3)


def test_drift_moves_sky_forward():
    bg = Background("fg.png")
    bg.drift()
    assert bg.sky[0].x == pytest.approx(0.2)
    assert bg.sky[1].x == pytest.approx(-10240 + 0.2)


def test_drift_wraps_at_limit():
    bg = Background("fg.png", sky=[Vec2(8960, 0), Vec2(0, 0)])
    bg.drift()
    assert bg.sky[0].x == pytest.approx(-8960 + 0.2)


def test_load_credits_skips_empty_lines(tmp_path):
    path = tmp_path / "end.txt"
    path.write_text("first\n\nsecond\nthird\n", encoding="utf-8")
    credits = load_credits(path)
    assert [line.text for line in credits.lines] == ["first", "second", "third"]
    assert credits.lines[0].pos == Vec2(50, 720)
    ys = [line.pos.y for line in credits.lines]
    assert ys == sorted(ys)


def test_credits_advance_waits_for_period():
    credits = Credits(lines=[Label("a", 20, Vec2(50, 720))])
    assert credits.advance(0.001) is False
    assert credits.lines[0].pos.y == 720
    assert credits.advance(0.01) is True
    assert credits.lines[0].pos.y < 720


def test_credits_finish_once_last_line_is_gone():
    credits = Credits(lines=[Label("a", 20, Vec2(50, 0)), Label("b", 20, Vec2(50, 25))])
    assert credits.finished() is False
    while not credits.finished():
        credits.advance(1.0)
    assert credits.lines[-1].pos.y < -200
    assert credits.lines[0].pos.y < credits.lines[-1].pos.y


def test_empty_credits_are_finished():
    assert Credits(lines=[]).finished() is True


def test_build_scenes_populates_six_levels(map_dir):
    scenes = build_scenes(map_dir)
    assert [len(scene.mobs) for scene in scenes] == [1, 0, 3, 5, 4, 3]
    assert [len(scene.items) for scene in scenes] == [1, 0, 1, 1, 0, 0]
    assert [scene.npc is not None for scene in scenes] == [False, True, False, False, False, False]
    assert len(scenes[0].texts) == 7
    assert all(not scene.texts for scene in scenes[1:])


def test_build_scenes_uses_map_contents(map_dir):
    scenes = build_scenes(map_dir)
    assert scenes[0].background.foreground == "./asset/bg/forest.png"
    assert scenes[0].texts[0].text == "Use LEFT RIGHT arrows to move"
    assert scenes[0].fire.obj.pos == scenes[0].map.position_of("f")
    assert [mob.kind for mob in scenes[3].mobs] == ["a", "c", "c", "a", "m"]
    assert [mob.kind for mob in scenes[5].mobs] == ["a", "c", "B"]


def test_build_scenes_items_and_bosses(map_dir):
    scenes = build_scenes(map_dir)
    assert scenes[0].items[0].defense == 10
    assert scenes[2].items[0].attack == 10
    assert scenes[3].mobs[-1].life == 5
    assert scenes[3].mobs[0].life == 2


def test_build_scenes_missing_map(tmp_path):
    with pytest.raises(FileNotFoundError):
        build_scenes(tmp_path)