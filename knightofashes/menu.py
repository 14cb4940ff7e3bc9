"""Title and settings menus: cursor movement and selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from .animation import AnimatedObject
from .geometry import Rect, Vec2
from .scene import Label

MENU_FONT = "./asset/font/font.ttf"
TITLE_IMAGE = "./asset/bg/title.png"
CURSOR_IMAGE = "./asset/btn/btn.png"

SOUND_OK = "./asset/sound/ok.ogg"
SOUND_MOVE = "./asset/sound/move.ogg"
SOUND_START = "./asset/sound/start.ogg"
SOUNDS = (SOUND_OK, SOUND_MOVE, SOUND_START)


class MainChoice(IntEnum):
    """Entries of the title menu."""

    PLAY = 0
    SETTINGS = 1
    QUIT = 2


class SettingsChoice(IntEnum):
    """Entries of the settings menu."""

    MODE = 0
    SCREEN = 1
    MUSIC = 2
    BACK = 3
    QUIT_SET = 4


class MenuAction(Enum):
    """What selecting a menu entry asks the game to do."""

    START_GAME = "start_game"
    OPEN_SETTINGS = "open_settings"
    QUIT = "quit"
    TOGGLE_ERIC = "toggle_eric"
    TOGGLE_FULLSCREEN = "toggle_fullscreen"
    TOGGLE_MUSIC = "toggle_music"
    BACK = "back"


# Settings entries with an on/off value: entry -> index of its value label.
_OPTION_LABELS = {
    SettingsChoice.MODE: 2,
    SettingsChoice.SCREEN: 4,
    SettingsChoice.MUSIC: 6,
}

_SETTINGS_ACTIONS = {
    SettingsChoice.MODE: MenuAction.TOGGLE_ERIC,
    SettingsChoice.SCREEN: MenuAction.TOGGLE_FULLSCREEN,
    SettingsChoice.MUSIC: MenuAction.TOGGLE_MUSIC,
    SettingsChoice.BACK: MenuAction.BACK,
    SettingsChoice.QUIT_SET: MenuAction.QUIT,
}

_MAIN_ACTIONS = {
    MainChoice.PLAY: (MenuAction.START_GAME, SOUND_START),
    MainChoice.SETTINGS: (MenuAction.OPEN_SETTINGS, SOUND_OK),
    MainChoice.QUIT: (MenuAction.QUIT, None),
}


def _button(image: str, rect: Rect, pos: Vec2, scale: Vec2) -> AnimatedObject:
    return AnimatedObject(rects=[rect], pos=pos, image=image, scale=scale)


def _label(text: str, size: int, x: float, y: float) -> Label:
    return Label(text, size, Vec2(x, y), MENU_FONT)


@dataclass
class Menu:
    """A menu with a cursor button that moves between its entries.

    ``sound`` holds the sound the last input asks to play, if any.
    ``options`` holds the on/off values shown by the settings menu.
    """

    choices: type[IntEnum]
    labels: list[Label]
    buttons: list[AnimatedObject]
    cursor_button: int
    positions: list[Vec2]
    cursor: int = 0
    options: dict[SettingsChoice, bool] = field(default_factory=dict)
    sound: str | None = None

    @property
    def choice(self) -> IntEnum:
        """The entry under the cursor."""
        return self.choices(self.cursor)

    def cursor_position(self) -> Vec2:
        """Where the cursor button stands for the current entry."""
        return self.positions[self.cursor]

    def move_cursor(self, step: int) -> None:
        """Move the cursor by ``step`` entries; moving above the top jumps to the last."""
        count = len(self.positions)
        if self.cursor + step < 0:
            self.cursor = count - 1
        else:
            self.cursor = (self.cursor + step) % count
        self.buttons[self.cursor_button].pos = self.cursor_position()
        self.sound = SOUND_MOVE

    def select(self) -> MenuAction:
        """Act on the entry under the cursor and say what the game should do."""
        if self.choices is MainChoice:
            action, self.sound = _MAIN_ACTIONS[MainChoice(self.cursor)]
            return action
        entry = SettingsChoice(self.cursor)
        self.sound = SOUND_OK
        if entry in _OPTION_LABELS:
            enabled = not self.options.get(entry, False)
            self.options[entry] = enabled
            self.labels[_OPTION_LABELS[entry]].text = "yes" if enabled else "no"
        return _SETTINGS_ACTIONS[entry]


def main_menu() -> Menu:
    """Build the title menu: start, option, quit."""
    buttons = [
        _button(TITLE_IMAGE, Rect(0, 0, 1050, 120), Vec2(640, 200), Vec2(0.9, 0.9)),
        _button(CURSOR_IMAGE, Rect(0, 0, 150, 30), Vec2(640, 409), Vec2(1.3, 1.1)),
    ]
    labels = [
        _label("start", 30, 640, 400),
        _label("option", 30, 640, 450),
        _label("quit", 30, 640, 500),
    ]
    positions = [Vec2(640, 409), Vec2(640, 459), Vec2(640, 509)]
    return Menu(
        choices=MainChoice,
        labels=labels,
        buttons=buttons,
        cursor_button=1,
        positions=positions,
    )


def settings_menu() -> Menu:
    """Build the settings menu with eric mode and fullscreen off and music on."""
    buttons = [_button(CURSOR_IMAGE, Rect(0, 0, 150, 30), Vec2(740, 309), Vec2(1, 1))]
    labels = [
        _label("OPTION", 55, 640, 50),
        _label("eric mode", 30, 540, 300),
        _label("no", 25, 740, 300),
        _label("fullscreen", 30, 540, 350),
        _label("no", 25, 740, 350),
        _label("music", 30, 566, 400),
        _label("yes", 25, 740, 400),
        _label("back", 32, 640, 600),
        _label("quit", 32, 640, 650),
    ]
    positions = [
        Vec2(740, 309),
        Vec2(740, 359),
        Vec2(740, 409),
        Vec2(640, 609),
        Vec2(640, 659),
    ]
    options = {
        SettingsChoice.MODE: False,
        SettingsChoice.SCREEN: False,
        SettingsChoice.MUSIC: True,
    }
    return Menu(
        choices=SettingsChoice,
        labels=labels,
        buttons=buttons,
        cursor_button=0,
        positions=positions,
        options=options,
    )