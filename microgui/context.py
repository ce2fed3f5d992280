"""The UI context: input state, id and clip stacks, layout and the draw command list."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional, Sequence, Union

from .pool import Pool
from .types import (
    ABSOLUTE,
    CONTAINERPOOL_SIZE,
    HASH_INITIAL,
    MAX_WIDTHS,
    RELATIVE,
    TREENODEPOOL_SIZE,
    UNCLIPPED_RECT,
    ClipCommand,
    ClipResult,
    Color,
    ColorId,
    Container,
    IconCommand,
    JumpCommand,
    Layout,
    Opt,
    RectCommand,
    Rect,
    TextCommand,
    Vec2,
    default_style,
    hash_bytes,
)

TextWidthFn = Callable[[Any, str], int]
TextHeightFn = Callable[[Any], int]
IdData = Union[bytes, bytearray, str, int]

Command = Union[JumpCommand, ClipCommand, RectCommand, TextCommand, IconCommand]


def _id_bytes(data: IdData) -> bytes:
    if isinstance(data, int):
        return (data & ((1 << 64) - 1)).to_bytes(8, "little")
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


class Context:
    """Holds everything one immediate-mode UI needs between and during frames."""

    def __init__(
        self,
        text_width: Optional[TextWidthFn] = None,
        text_height: Optional[TextHeightFn] = None,
    ) -> None:
        self.text_width = text_width
        self.text_height = text_height

        self.style = default_style()
        self.hover = 0
        self.focus = 0
        self.last_id = 0
        self.last_rect = Rect()
        self.last_zindex = 0
        self.updated_focus = False
        self.frame = 0
        self.hover_root: Optional[Container] = None
        self.next_hover_root: Optional[Container] = None
        self.scroll_target: Optional[Container] = None
        self.number_edit_buf = ""
        self.number_edit = 0

        self.command_list: list[Command] = []
        self.root_list: list[Container] = []
        self.container_stack: list[Container] = []
        self.clip_stack: list[Rect] = []
        self.id_stack: list[int] = []
        self.layout_stack: list[Layout] = []

        self.container_pool = Pool(CONTAINERPOOL_SIZE)
        self.containers = [Container() for _ in range(CONTAINERPOOL_SIZE)]
        self.treenode_pool = Pool(TREENODEPOOL_SIZE)

        self.mouse_pos = Vec2()
        self._last_mouse_pos = Vec2()
        self.mouse_delta = Vec2()
        self.scroll_delta = Vec2()
        self.mouse_down = 0
        self.mouse_pressed = 0
        self.key_down = 0
        self.key_pressed = 0
        self.text_input = ""

    # ------------------------------------------------------------------ frames

    def draw_frame(self, rect: Rect, colorid: int) -> None:
        """Draw a filled frame, with a border unless it is a scroll or title part."""
        self.draw_rect(rect, self.style.colors[colorid])
        if colorid in (ColorId.SCROLLBASE, ColorId.SCROLLTHUMB, ColorId.TITLEBG):
            return
        border = self.style.colors[ColorId.BORDER]
        if border.a != 0:
            self.draw_box(rect.expand(1), border)

    # ------------------------------------------------------------ command list

    def _push_command(self, cmd: Command) -> int:
        self.command_list.append(cmd)
        return len(self.command_list) - 1

    def push_jump(self, dst_idx: int) -> int:
        """Append a jump command and return its index."""
        return self._push_command(JumpCommand(dst_idx=dst_idx))

    def set_clip(self, rect: Rect) -> None:
        """Append a clip command."""
        self._push_command(ClipCommand(rect=rect))

    def draw_rect(self, rect: Rect, color: Color) -> None:
        """Append a rect command clipped to the current clip rect, if visible."""
        clipped = rect.intersect(self.get_clip_rect())
        if clipped.w > 0 and clipped.h > 0:
            self._push_command(RectCommand(rect=clipped, color=color))

    def draw_box(self, rect: Rect, color: Color) -> None:
        """Draw a one-pixel outline of ``rect``."""
        self.draw_rect(Rect(rect.x + 1, rect.y, rect.w - 2, 1), color)
        self.draw_rect(Rect(rect.x + 1, rect.y + rect.h - 1, rect.w - 2, 1), color)
        self.draw_rect(Rect(rect.x, rect.y, 1, rect.h), color)
        self.draw_rect(Rect(rect.x + rect.w - 1, rect.y, 1, rect.h), color)

    def _clipped_push(self, rect: Rect, cmd: Command) -> None:
        clipped = self.check_clip(rect)
        if clipped is ClipResult.ALL:
            return
        if clipped is ClipResult.PART:
            self.set_clip(self.get_clip_rect())
        self._push_command(cmd)
        if clipped is not ClipResult.NONE:
            self.set_clip(UNCLIPPED_RECT)

    def draw_text(self, font: Any, text: str, pos: Vec2, color: Color) -> None:
        """Append a text command, wrapped in clip commands if partly clipped."""
        rect = Rect(pos.x, pos.y, self.text_width(font, text), self.text_height(font))
        self._clipped_push(
            rect, TextCommand(font=font, pos=pos, color=color, text=text)
        )

    def draw_icon(self, icon: int, rect: Rect, color: Color) -> None:
        """Append an icon command, wrapped in clip commands if partly clipped."""
        self._clipped_push(rect, IconCommand(rect=rect, id=icon, color=color))

    def commands(self) -> Iterator[Command]:
        """Yield the drawable commands in order, following jump commands."""
        cmds = self.command_list
        idx = 0
        while 0 <= idx < len(cmds):
            cmd = cmds[idx]
            if isinstance(cmd, JumpCommand):
                idx = cmd.dst_idx
            else:
                yield cmd
                idx += 1

    def render(self, handler: Callable[[Command], Any]) -> None:
        """Pass every drawable command to ``handler``, then clear the list."""
        for cmd in self.commands():
            handler(cmd)
        self.command_list = []

    # --------------------------------------------------------------------- ids

    def get_id(self, data: IdData) -> int:
        """Hash ``data`` on top of the current id scope."""
        seed = self.id_stack[-1] if self.id_stack else HASH_INITIAL
        self.last_id = hash_bytes(_id_bytes(data), seed)
        return self.last_id

    def push_id(self, data: IdData) -> None:
        self.id_stack.append(self.get_id(data))

    def pop_id(self) -> None:
        if not self.id_stack:
            raise IndexError("id stack is empty")
        self.id_stack.pop()

    # ---------------------------------------------------------------- clipping

    def push_clip_rect(self, rect: Rect) -> None:
        """Push ``rect`` intersected with the current clip rect."""
        self.clip_stack.append(rect.intersect(self.get_clip_rect()))

    def pop_clip_rect(self) -> None:
        if not self.clip_stack:
            raise IndexError("clip stack is empty")
        self.clip_stack.pop()

    def get_clip_rect(self) -> Rect:
        if not self.clip_stack:
            raise IndexError("clip stack is empty")
        return self.clip_stack[-1]

    def check_clip(self, rect: Rect) -> ClipResult:
        """Tell whether ``rect`` is wholly, partly or not at all clipped."""
        cr = self.get_clip_rect()
        if (
            rect.x > cr.x + cr.w
            or rect.x + rect.w < cr.x
            or rect.y > cr.y + cr.h
            or rect.y + rect.h < cr.y
        ):
            return ClipResult.ALL
        if (
            rect.x >= cr.x
            and rect.x + rect.w <= cr.x + cr.w
            and rect.y >= cr.y
            and rect.y + rect.h <= cr.y + cr.h
        ):
            return ClipResult.NONE
        return ClipResult.PART

    # -------------------------------------------------------------- containers

    def get_layout(self) -> Layout:
        if not self.layout_stack:
            raise IndexError("layout stack is empty")
        return self.layout_stack[-1]

    def pop_container(self) -> None:
        """Record the content size of the current container and leave it."""
        cnt = self.get_current_container()
        layout = self.get_layout()
        cnt.content_size = Vec2(
            layout.max.x - layout.body.x, layout.max.y - layout.body.y
        )
        self.container_stack.pop()
        self.layout_stack.pop()
        self.pop_id()

    def get_current_container(self) -> Container:
        if not self.container_stack:
            raise IndexError("container stack is empty")
        return self.container_stack[-1]

    def container_by_id(self, id_: int, opt: int = 0) -> Optional[Container]:
        """Find or create the container for ``id_``; None if closed and unknown."""
        idx = self.container_pool.get(id_)
        if idx is not None:
            cnt = self.containers[idx]
            if cnt.open or not opt & Opt.CLOSED:
                self.container_pool.update(idx, self.frame)
            return cnt
        if opt & Opt.CLOSED:
            return None
        idx = self.container_pool.init(id_, self.frame)
        cnt = self.containers[idx]
        cnt.clear()
        cnt.head_idx = -1
        cnt.tail_idx = -1
        cnt.open = True
        self.bring_to_front(cnt)
        return cnt

    def get_container(self, name: IdData) -> Container:
        return self.container_by_id(self.get_id(name), 0)

    def bring_to_front(self, container: Container) -> None:
        self.last_zindex += 1
        container.zindex = self.last_zindex

    def set_focus(self, id_: int) -> None:
        self.focus = id_
        self.updated_focus = True

    # ------------------------------------------------------------ frame cycle

    def begin(self) -> None:
        """Start a new frame."""
        if self.text_width is None or self.text_height is None:
            raise RuntimeError("text_width and text_height callbacks must be set")
        self.command_list = []
        self.root_list = []
        self.scroll_target = None
        self.hover_root = self.next_hover_root
        self.next_hover_root = None
        self.mouse_delta = Vec2(
            self.mouse_pos.x - self._last_mouse_pos.x,
            self.mouse_pos.y - self._last_mouse_pos.y,
        )
        self.frame += 1

    def end(self) -> None:
        """Finish the frame: apply input effects and link root containers."""
        for name, stack in (
            ("container", self.container_stack),
            ("clip", self.clip_stack),
            ("id", self.id_stack),
            ("layout", self.layout_stack),
        ):
            if stack:
                raise RuntimeError(f"{name} stack is not empty at end of frame")

        if self.scroll_target is not None:
            scroll = self.scroll_target.scroll
            self.scroll_target.scroll = Vec2(
                scroll.x + self.scroll_delta.x, scroll.y + self.scroll_delta.y
            )

        if not self.updated_focus:
            self.focus = 0
        self.updated_focus = False

        root = self.next_hover_root
        if (
            self.mouse_pressed
            and root is not None
            and 0 <= root.zindex < self.last_zindex
        ):
            self.bring_to_front(root)

        self.key_pressed = 0
        self.text_input = ""
        self.mouse_pressed = 0
        self.scroll_delta = Vec2()
        self._last_mouse_pos = self.mouse_pos

        self.root_list.sort(key=lambda c: c.zindex)

        for i, cnt in enumerate(self.root_list):
            if i == 0:
                first = self.command_list[0]
                if not isinstance(first, JumpCommand):
                    raise RuntimeError("first command is not a jump")
                first.dst_idx = cnt.head_idx + 1
            else:
                prev = self.root_list[i - 1]
                self.command_list[prev.tail_idx].dst_idx = cnt.head_idx + 1
            if i == len(self.root_list) - 1:
                self.command_list[cnt.tail_idx].dst_idx = len(self.command_list)

    # ------------------------------------------------------------------- input

    def input_mouse_move(self, x: int, y: int) -> None:
        self.mouse_pos = Vec2(x, y)

    def input_mouse_down(self, x: int, y: int, button: int) -> None:
        self.input_mouse_move(x, y)
        self.mouse_down |= button
        self.mouse_pressed |= button

    def input_mouse_up(self, x: int, y: int, button: int) -> None:
        self.input_mouse_move(x, y)
        self.mouse_down &= ~button

    def input_scroll(self, x: int, y: int) -> None:
        self.scroll_delta = Vec2(self.scroll_delta.x + x, self.scroll_delta.y + y)

    def input_key_down(self, key: int) -> None:
        self.key_pressed |= key
        self.key_down |= key

    def input_key_up(self, key: int) -> None:
        self.key_down &= ~key

    def input_text(self, text: str) -> None:
        self.text_input = text

    # ------------------------------------------------------------------ layout

    def push_layout(self, body: Rect, scroll: Vec2) -> None:
        """Open a layout scope over ``body``, offset by ``scroll``."""
        layout = Layout(
            body=Rect(body.x - scroll.x, body.y - scroll.y, body.w, body.h),
            max=Vec2(-0x1000000, -0x1000000),
        )
        self.layout_stack.append(layout)
        self.layout_row(1, [0], 0)

    def layout_begin_column(self) -> None:
        self.push_layout(self.layout_next(), Vec2(0, 0))

    def layout_end_column(self) -> None:
        """Close a column, letting the parent grow to cover it."""
        b = self.get_layout()
        self.layout_stack.pop()
        a = self.get_layout()
        a.position = Vec2(
            max(a.position.x, b.position.x + b.body.x - a.body.x), a.position.y
        )
        a.next_row = max(a.next_row, b.next_row + b.body.y - a.body.y)
        a.max = Vec2(max(a.max.x, b.max.x), max(a.max.y, b.max.y))

    def layout_row(
        self, items: int, widths: Optional[Sequence[int]], height: int
    ) -> None:
        """Start a row of ``items`` cells with the given widths and height."""
        layout = self.get_layout()
        widths = list(widths or [])
        if len(widths) > MAX_WIDTHS:
            raise ValueError(f"at most {MAX_WIDTHS} widths per row")
        layout.widths[: len(widths)] = widths
        layout.items = items
        layout.position = Vec2(layout.indent, layout.next_row)
        layout.size = Vec2(layout.size.x, height)
        layout.item_index = 0

    def layout_width(self, width: int) -> None:
        layout = self.get_layout()
        layout.size = Vec2(width, layout.size.y)

    def layout_height(self, height: int) -> None:
        layout = self.get_layout()
        layout.size = Vec2(layout.size.x, height)

    def layout_set_next(self, rect: Rect, relative: bool) -> None:
        """Make the next cell ``rect``, relative to the body or absolute."""
        layout = self.get_layout()
        layout.next = rect
        layout.next_type = RELATIVE if relative else ABSOLUTE

    def layout_next(self) -> Rect:
        """Return the rectangle of the next cell and advance the layout."""
        layout = self.get_layout()
        style = self.style

        if layout.next_type:
            next_type = layout.next_type
            layout.next_type = 0
            res = layout.next
            if next_type == ABSOLUTE:
                self.last_rect = res
                return res
            x, y, w, h = res.x, res.y, res.w, res.h
        else:
            if layout.item_index == layout.items:
                self.layout_row(layout.items, None, layout.size.y)
            x, y = layout.position.x, layout.position.y
            w = layout.widths[layout.item_index] if layout.items > 0 else layout.size.x
            h = layout.size.y
            if w == 0:
                w = style.size.x + style.padding * 2
            if h == 0:
                h = style.size.y + style.padding * 2
            if w < 0:
                w += layout.body.w - x + 1
            if h < 0:
                h += layout.body.h - y + 1
            layout.item_index += 1

        layout.position = Vec2(
            layout.position.x + w + style.spacing, layout.position.y
        )
        layout.next_row = max(layout.next_row, y + h + style.spacing)

        x += layout.body.x
        y += layout.body.y

        layout.max = Vec2(max(layout.max.x, x + w), max(layout.max.y, y + h))

        self.last_rect = Rect(x, y, w, h)
        return self.last_rect