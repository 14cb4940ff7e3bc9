"""Sprite-sheet animation state for on-screen objects."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .geometry import Rect, Vec2


@dataclass
class AnimatedObject:
    """An object drawn from a sprite sheet.

    ``rects`` holds one texture rectangle per animation row; ``state`` picks
    the row in use and the rectangle's ``left`` edge picks the frame. Rows
    below ``loop`` repeat forever; other rows fall back to row 0 once they
    have played through.
    """

    rects: list[Rect] = field(default_factory=list)
    pos: Vec2 = field(default_factory=Vec2)
    image: str = ""
    scale: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    state: int = 0
    loop: int = 0
    display: bool = False
    elapsed: float = 0.0

    def current_rect(self) -> Rect:
        """The texture rectangle of the current frame."""
        return self.rects[self.state]

    def advance_frame(self, offset: int, max_value: int) -> None:
        """Step the current row by ``offset``, wrapping at ``max_value``."""
        row = self.state
        rect = self.rects[row]
        if rect.left + offset >= max_value:
            self.rects[row] = replace(rect, left=0)
            if self.state >= self.loop:
                self.state = 0
        else:
            self.rects[row] = replace(rect, left=rect.left + offset)

    def tick(self, dt: float, period: float, offset: int, max_value: int) -> bool:
        """Add ``dt`` seconds; advance one frame once more than ``period`` has passed.

        Returns whether a frame was advanced.
        """
        self.elapsed += dt
        if self.elapsed > period:
            self.advance_frame(offset, max_value)
            self.elapsed = 0.0
            return True
        return False