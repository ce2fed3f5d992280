"""Geometry, colours, flags, draw commands and retained state for the UI."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import IntEnum, IntFlag
from typing import Any, ClassVar

VERSION = "2.01"

COMMANDLIST_SIZE = 256 * 1024
ROOTLIST_SIZE = 32
CONTAINERSTACK_SIZE = 32
CLIPSTACK_SIZE = 32
IDSTACK_SIZE = 32
LAYOUTSTACK_SIZE = 16
CONTAINERPOOL_SIZE = 48
TREENODEPOOL_SIZE = 48
MAX_WIDTHS = 16

REAL_FMT = "%.3g"
SLIDER_FMT = "%.2f"
MAX_FMT = 127

HASH_INITIAL = 2166136261
_HASH_PRIME = 16777619
_ID_MASK = (1 << 64) - 1

# Values of Layout.next_type
RELATIVE = 1
ABSOLUTE = 2


@dataclass(frozen=True)
class Vec2:
    """A 2D integer vector."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned integer rectangle."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    def expand(self, n: int) -> Rect:
        """Return the rectangle grown by ``n`` on every side."""
        return Rect(self.x - n, self.y - n, self.w + n * 2, self.h + n * 2)

    def intersect(self, other: Rect) -> Rect:
        """Return the overlap of two rectangles; empty overlaps have zero size."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = max(min(self.x + self.w, other.x + other.w), x1)
        y2 = max(min(self.y + self.h, other.y + other.h), y1)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def contains(self, point: Vec2) -> bool:
        """Whether ``point`` lies inside (right and bottom edges excluded)."""
        return (
            self.x <= point.x < self.x + self.w
            and self.y <= point.y < self.y + self.h
        )


UNCLIPPED_RECT = Rect(0, 0, 0x1000000, 0x1000000)


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not 0 <= value <= 255:
                raise ValueError(f"colour channel {f.name}={value} out of range 0..255")


class ClipResult(IntEnum):
    NONE = 0
    PART = 1
    ALL = 2


class CommandType(IntEnum):
    JUMP = 1
    CLIP = 2
    RECT = 3
    TEXT = 4
    ICON = 5


class ColorId(IntEnum):
    TEXT = 0
    BORDER = 1
    WINDOWBG = 2
    TITLEBG = 3
    TITLETEXT = 4
    PANELBG = 5
    BUTTON = 6
    BUTTONHOVER = 7
    BUTTONFOCUS = 8
    BASE = 9
    BASEHOVER = 10
    BASEFOCUS = 11
    SCROLLBASE = 12
    SCROLLTHUMB = 13


class Icon(IntEnum):
    CLOSE = 1
    CHECK = 2
    COLLAPSED = 3
    EXPANDED = 4


class Res(IntFlag):
    ACTIVE = 1 << 0
    SUBMIT = 1 << 1
    CHANGE = 1 << 2


class Opt(IntFlag):
    ALIGNCENTER = 1 << 0
    ALIGNRIGHT = 1 << 1
    NOINTERACT = 1 << 2
    NOFRAME = 1 << 3
    NORESIZE = 1 << 4
    NOSCROLL = 1 << 5
    NOCLOSE = 1 << 6
    NOTITLE = 1 << 7
    HOLDFOCUS = 1 << 8
    AUTOSIZE = 1 << 9
    POPUP = 1 << 10
    CLOSED = 1 << 11
    EXPANDED = 1 << 12
    PASSWORD = 1 << 13


class Mouse(IntFlag):
    LEFT = 1 << 0
    RIGHT = 1 << 1
    MIDDLE = 1 << 2


class Key(IntFlag):
    SHIFT = 1 << 0
    CTRL = 1 << 1
    ALT = 1 << 2
    BACKSPACE = 1 << 3
    RETURN = 1 << 4


@dataclass
class JumpCommand:
    """Redirects command iteration to the command at ``dst_idx``."""

    type: ClassVar[CommandType] = CommandType.JUMP
    dst_idx: int = -1


@dataclass
class ClipCommand:
    type: ClassVar[CommandType] = CommandType.CLIP
    rect: Rect = field(default_factory=Rect)


@dataclass
class RectCommand:
    type: ClassVar[CommandType] = CommandType.RECT
    rect: Rect = field(default_factory=Rect)
    color: Color = field(default_factory=lambda: Color(0, 0, 0, 0))


@dataclass
class TextCommand:
    type: ClassVar[CommandType] = CommandType.TEXT
    font: Any = None
    pos: Vec2 = field(default_factory=Vec2)
    color: Color = field(default_factory=lambda: Color(0, 0, 0, 0))
    text: str = ""


@dataclass
class IconCommand:
    type: ClassVar[CommandType] = CommandType.ICON
    rect: Rect = field(default_factory=Rect)
    id: int = 0
    color: Color = field(default_factory=lambda: Color(0, 0, 0, 0))


@dataclass
class Layout:
    """Row/column placement state for one layout scope."""

    body: Rect = field(default_factory=Rect)
    next: Rect = field(default_factory=Rect)
    position: Vec2 = field(default_factory=Vec2)
    size: Vec2 = field(default_factory=Vec2)
    max: Vec2 = field(default_factory=Vec2)
    widths: list[int] = field(default_factory=lambda: [0] * MAX_WIDTHS)
    items: int = 0
    item_index: int = 0
    next_row: int = 0
    next_type: int = 0
    indent: int = 0


@dataclass(eq=False)
class Container:
    """Retained state of a window or panel."""

    head_idx: int = -1
    tail_idx: int = -1
    rect: Rect = field(default_factory=Rect)
    body: Rect = field(default_factory=Rect)
    content_size: Vec2 = field(default_factory=Vec2)
    scroll: Vec2 = field(default_factory=Vec2)
    zindex: int = 0
    open: bool = False

    def clear(self) -> None:
        """Reset every field to its default, keeping the object's identity."""
        fresh = Container()
        for f in fields(self):
            setattr(self, f.name, getattr(fresh, f.name))


def _default_colors() -> list[Color]:
    return [
        Color(230, 230, 230, 255),  # TEXT
        Color(25, 25, 25, 255),  # BORDER
        Color(50, 50, 50, 255),  # WINDOWBG
        Color(25, 25, 25, 255),  # TITLEBG
        Color(240, 240, 240, 255),  # TITLETEXT
        Color(0, 0, 0, 0),  # PANELBG
        Color(75, 75, 75, 255),  # BUTTON
        Color(95, 95, 95, 255),  # BUTTONHOVER
        Color(115, 115, 115, 255),  # BUTTONFOCUS
        Color(30, 30, 30, 255),  # BASE
        Color(35, 35, 35, 255),  # BASEHOVER
        Color(40, 40, 40, 255),  # BASEFOCUS
        Color(43, 43, 43, 255),  # SCROLLBASE
        Color(30, 30, 30, 255),  # SCROLLTHUMB
    ]


@dataclass
class Style:
    """Sizes, spacing and colours used when drawing controls."""

    font: Any = None
    size: Vec2 = field(default_factory=lambda: Vec2(68, 10))
    padding: int = 5
    spacing: int = 4
    indent: int = 24
    title_height: int = 24
    scrollbar_size: int = 12
    thumb_size: int = 8
    colors: list[Color] = field(default_factory=_default_colors)


def default_style() -> Style:
    """Return a fresh copy of the default style."""
    return Style()


def clamp(x, low, high):
    """Limit ``x`` to the range ``low..high``."""
    return min(high, max(low, x))


def hash_bytes(data: bytes | bytearray | str, seed: int = HASH_INITIAL) -> int:
    """Fold ``data`` into ``seed`` with FNV-1a, wrapping at 64 bits."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    h = seed
    for byte in data:
        h = ((h ^ byte) * _HASH_PRIME) & _ID_MASK
    return h