import pytest

from knightofashes.geometry import Rect, Vec2
from knightofashes.mapfile import (
    Hitbox,
    MapData,
    find_hitboxes,
    hitbox_from_row,
    load_map,
    parse_map,
)

ROWS = [
    "..........",
    "..........",
    "..........",
    "....P.....",
    "..c..f....",
    "FFFF.FF..F",
]
SAMPLE = "./asset/bg/tuto.png\n2 3 0\n10\n" + "\n".join(ROWS) + "\n"


def test_header_fields():
    data = parse_map(SAMPLE, 7)
    assert data.texture == "./asset/bg/tuto.png"
    assert data.levels == ["3", "0"]
    assert data.size == 11
    assert data.rows == ROWS


def test_player_position():
    data = parse_map(SAMPLE, 7)
    assert data.player_pos == Vec2(ROWS[3].index("P") * 80, 575)
    assert data.player_pos == data.position_of("P")


def test_position_of_missing_is_origin():
    data = parse_map(SAMPLE, 7)
    assert data.position_of("Z") == Vec2(0, 0)


def test_position_offsets():
    data = parse_map(SAMPLE, 7)
    base = data.position_of("f")
    assert data.position_of("f", 0, 12).y - base.y == 12
    assert data.position_of("f", 30, 0) == base


def test_hitboxes_one_per_floor_run():
    data = parse_map(SAMPLE, 7)
    assert len(data.hitboxes) == 3
    assert data.hitboxes[0].rect == Rect(0, 655, 320, 80)
    for hitbox in data.hitboxes:
        assert hitbox.y == hitbox.rect.top
        assert hitbox.rect.height == 80
    lefts = [hitbox.rect.left for hitbox in data.hitboxes]
    assert lefts == sorted(lefts)


def test_hitbox_count_limits_result():
    all_boxes = find_hitboxes(ROWS, 11, 7)
    two = find_hitboxes(ROWS, 11, 2)
    assert two == all_boxes[:2]
    assert find_hitboxes(ROWS, 11, 0) == []


def test_hitbox_from_row_top():
    hitbox = hitbox_from_row("FF", 0, 0)
    assert hitbox.y == 15
    assert hitbox.rect.top == 15
    assert hitbox.rect.width == 160


def test_single_floor_left_follows_run_end():
    assert hitbox_from_row("F.", 0, 0).rect.left == 80


def test_edge_tiles_extend_width():
    plain = hitbox_from_row("FF.", 1, 0)
    edged = hitbox_from_row("FFE.", 1, 0)
    assert edged.rect.width - plain.rect.width == 45


def test_row_without_floor_gives_empty_rect():
    hitbox = hitbox_from_row("....", 2, 0)
    assert hitbox == Hitbox(Rect(0, 0, 0, 0), 2 * 80 + 15)


def test_too_few_rows_raises():
    text = "tex\n0\n5\n" + "\n".join(ROWS[:3])
    with pytest.raises(ValueError):
        parse_map(text, 3)


def test_bad_level_count_raises():
    with pytest.raises(ValueError):
        parse_map(SAMPLE.replace("2 3 0", "x 3 0"), 3)
    with pytest.raises(ValueError):
        parse_map(SAMPLE.replace("2 3 0", "3 3 0"), 3)


def test_zero_levels():
    data = parse_map(SAMPLE.replace("2 3 0", "0"), 3)
    assert data.levels == []


def test_load_map_matches_parse(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    loaded = load_map(path, 7)
    assert isinstance(loaded, MapData)
    assert loaded == parse_map(SAMPLE, 7)


def test_load_map_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_map(tmp_path / "absent.txt", 7)