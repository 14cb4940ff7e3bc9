# knightofashes

A small side-scrolling action RPG drawn with pygame. A knight crosses a
tutorial level, a hub with an NPC and four further levels with monsters and
bosses, picks up a chestplate and swords, and lights the bonfire at the end of
each level to move on. Lighting the last fire rolls the credits; the window
closes once they have scrolled away.

## Installing

```
pip install .
```

## Playing

The game reads its images, fonts, sounds and music from an `asset/` folder,
its levels from a `map/` folder and its credits from `end.txt`. Run it from
the directory that holds them, or point `--root` at that directory:

```
knightofashes
knightofashes --root path/to/game-data
```

Missing images and sounds are skipped and a missing font falls back to
pygame's default font, but the six map files (`tuto.txt`, `nexus.txt`,
`lvl_one.txt`, `lvl_two.txt`, `lvl_three.txt`, `lvl_four.txt`) and
`end.txt` must be present.

### Menus

- Up / Down: move the cursor (moving above the first entry jumps to the last)
- Enter: choose

The title menu offers start, option and quit. The option menu toggles
"eric mode" (a flag shown as yes/no), a 1920×1080 window size, and the music,
and has back and quit entries.

### In game

Actions happen when a key is released, and only while the knight is idle or
walking.

| Key         | Action                                        |
|-------------|-----------------------------------------------|
| Left/Right  | walk (held)                                   |
| Space       | jump                                          |
| R           | roll                                          |
| Z           | quick attack: damage equal to the attack stat |
| E           | heavy attack: one more damage                 |
| H           | play the extra animation row                  |
| A           | light or use a bonfire, pick up items         |
| T           | open or close the inventory                   |
| Down        | skip to the next level                        |
| Up          | print the knight's position on standard output|

Touching a bonfire and pressing A lights it; pressing A again takes you to
the level its map names. Falling out of a level puts you back at its start in
the tutorial, and at the hub elsewhere. Picking up a sword adds to the attack
stat, a chestplate to the defence stat.

## What it does not do

Monsters do not attack or move, and nothing lowers the knight's health or
stamina: the hearts and stamina icons are only drawn. Monsters whose life
drops to zero stay in the level. Falling is the only way to die. There is no
saving or loading.

## Map files

Each level is a plain text file:

1. the path of the level's foreground image;
2. a single-digit count, then that many level names separated by spaces; the
   last one, read as a number, is the scene the bonfire leads to (0 ends the
   game);
3. a number; the map's size is that number plus one;
4. six rows of tiles. `F` is floor, `E` extends a floor run by 45 pixels,
   `P` is the player start, `f` the bonfire, `c`, `a` monsters, `m` and `B`
   bosses, `s` a sword and `C` a chestplate.

`knightofashes.mapfile.parse_map(text, hitbox_count)` and
`load_map(path, hitbox_count)` read a map into a `MapData` with up to
`hitbox_count` floor hitboxes; `MapData.position_of(ch)` gives the world
position of a marker. A malformed map raises `ValueError`.

## Using the game logic

The rules live apart from the window, so they can be driven without pygame's
display:

```python
from knightofashes.game import Game, Key

game = Game(map_dir="map", credits_path="end.txt")
game.menu_key(Key.ENTER)        # "start" is selected: loads the levels
game.update(1 / 60, right_held=True)
game.key_released(Key.SPACE)
```

`knightofashes.app.Renderer` draws a `Game` onto a pygame surface, and
`AssetCache` loads and keeps images, fonts and sounds.

## Tests

```
pip install .[test]
pytest
```