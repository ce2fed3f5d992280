"""Root containers, windows, popups, panels and their scrollbars."""

from __future__ import annotations

from .context import Context, IdData
from .controls import draw_control_text, mouse_over, update_control
from .types import (
    UNCLIPPED_RECT,
    ColorId,
    Container,
    Icon,
    Mouse,
    Opt,
    Rect,
    Res,
    Vec2,
    clamp,
)

_MIN_WINDOW_W = 96
_MIN_WINDOW_H = 64


def _div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _scrollbar_vertical(
    ctx: Context, cnt: Container, body: Rect, content: Vec2
) -> None:
    maxscroll = content.y - body.h
    if maxscroll <= 0 or body.h <= 0:
        cnt.scroll = Vec2(cnt.scroll.x, 0)
        return

    id_ = ctx.get_id("!scrollbary")
    base = Rect(body.x + body.w, body.y, ctx.style.scrollbar_size, body.h)

    update_control(ctx, id_, base, 0)
    scroll_y = cnt.scroll.y
    if ctx.focus == id_ and ctx.mouse_down == Mouse.LEFT:
        scroll_y += _div(ctx.mouse_delta.y * content.y, base.h)
    scroll_y = clamp(scroll_y, 0, maxscroll)
    cnt.scroll = Vec2(cnt.scroll.x, scroll_y)

    ctx.draw_frame(base, ColorId.SCROLLBASE)
    thumb_h = max(ctx.style.thumb_size, _div(base.h * body.h, content.y))
    thumb_y = base.y + _div(scroll_y * (base.h - thumb_h), maxscroll)
    ctx.draw_frame(Rect(base.x, thumb_y, base.w, thumb_h), ColorId.SCROLLTHUMB)

    # scrolled by the mouse wheel while the mouse is over the body
    if mouse_over(ctx, body):
        ctx.scroll_target = cnt


def _scrollbar_horizontal(
    ctx: Context, cnt: Container, body: Rect, content: Vec2
) -> None:
    maxscroll = content.x - body.w
    if maxscroll <= 0 or body.w <= 0:
        cnt.scroll = Vec2(0, cnt.scroll.y)
        return

    id_ = ctx.get_id("!scrollbarx")
    base = Rect(body.x, body.y + body.h, body.w, ctx.style.scrollbar_size)

    update_control(ctx, id_, base, 0)
    scroll_x = cnt.scroll.x
    if ctx.focus == id_ and ctx.mouse_down == Mouse.LEFT:
        scroll_x += _div(ctx.mouse_delta.x * content.x, base.w)
    scroll_x = clamp(scroll_x, 0, maxscroll)
    cnt.scroll = Vec2(scroll_x, cnt.scroll.y)

    ctx.draw_frame(base, ColorId.SCROLLBASE)
    thumb_w = max(ctx.style.thumb_size, _div(base.w * body.w, content.x))
    thumb_x = base.x + _div(scroll_x * (base.w - thumb_w), maxscroll)
    ctx.draw_frame(Rect(thumb_x, base.y, thumb_w, base.h), ColorId.SCROLLTHUMB)

    if mouse_over(ctx, body):
        ctx.scroll_target = cnt


def scrollbars(ctx: Context, container: Container, body: Rect) -> Rect:
    """Draw the container's scrollbars; return the body shrunk to make room."""
    sz = ctx.style.scrollbar_size
    pad = ctx.style.padding
    content = Vec2(
        container.content_size.x + pad * 2, container.content_size.y + pad * 2
    )
    ctx.push_clip_rect(body)
    w, h = body.w, body.h
    if content.y > container.body.h:
        w -= sz
    if content.x > container.body.w:
        h -= sz
    body = Rect(body.x, body.y, w, h)
    _scrollbar_vertical(ctx, container, body, content)
    _scrollbar_horizontal(ctx, container, body, content)
    ctx.pop_clip_rect()
    return body


def push_container_body(
    ctx: Context, container: Container, body: Rect, opt: int = 0
) -> None:
    """Lay out the container's body, with scrollbars unless NOSCROLL is set."""
    if not opt & Opt.NOSCROLL:
        body = scrollbars(ctx, container, body)
    ctx.push_layout(body.expand(-ctx.style.padding), container.scroll)
    container.body = body


def begin_root_container(ctx: Context, container: Container) -> None:
    """Enter a root container, opening its command block and resetting clipping."""
    ctx.container_stack.append(container)
    ctx.root_list.append(container)
    container.head_idx = ctx.push_jump(-1)
    nxt = ctx.next_hover_root
    if container.rect.contains(ctx.mouse_pos) and (
        nxt is None or container.zindex > nxt.zindex
    ):
        ctx.next_hover_root = container
    # an inner root container must not be clipped to an outer one
    ctx.clip_stack.append(UNCLIPPED_RECT)


def end_root_container(ctx: Context) -> None:
    """Close the current root container's command block and leave it."""
    cnt = ctx.get_current_container()
    cnt.tail_idx = ctx.push_jump(-1)
    ctx.command_list[cnt.head_idx].dst_idx = len(ctx.command_list)
    ctx.pop_clip_rect()
    ctx.pop_container()


def begin_window(ctx: Context, title: str, rect: Rect, opt: int = 0) -> Res:
    """Begin a window; ACTIVE is set if it is open and must be ended."""
    id_ = ctx.get_id(title)
    cnt = ctx.container_by_id(id_, opt)
    if cnt is None or not cnt.open:
        return Res(0)
    ctx.id_stack.append(id_)

    if cnt.rect.w == 0:
        cnt.rect = rect
    begin_root_container(ctx, cnt)
    rect = body = cnt.rect

    if not opt & Opt.NOFRAME:
        ctx.draw_frame(rect, ColorId.WINDOWBG)

    if not opt & Opt.NOTITLE:
        tr = Rect(rect.x, rect.y, rect.w, ctx.style.title_height)
        ctx.draw_frame(tr, ColorId.TITLEBG)

        title_id = ctx.get_id("!title")
        update_control(ctx, title_id, tr, opt)
        draw_control_text(ctx, title, tr, ColorId.TITLETEXT, opt)
        if title_id == ctx.focus and ctx.mouse_down == Mouse.LEFT:
            r = cnt.rect
            cnt.rect = Rect(
                r.x + ctx.mouse_delta.x, r.y + ctx.mouse_delta.y, r.w, r.h
            )
        body = Rect(body.x, body.y + tr.h, body.w, body.h - tr.h)

        if not opt & Opt.NOCLOSE:
            close_id = ctx.get_id("!close")
            r = Rect(tr.x + tr.w - tr.h, tr.y, tr.h, tr.h)
            ctx.draw_icon(Icon.CLOSE, r, ctx.style.colors[ColorId.TITLETEXT])
            update_control(ctx, close_id, r, opt)
            if ctx.mouse_pressed == Mouse.LEFT and close_id == ctx.focus:
                cnt.open = False

    push_container_body(ctx, cnt, body, opt)

    if not opt & Opt.NORESIZE:
        sz = ctx.style.title_height
        resize_id = ctx.get_id("!resize")
        r = Rect(rect.x + rect.w - sz, rect.y + rect.h - sz, sz, sz)
        update_control(ctx, resize_id, r, opt)
        if resize_id == ctx.focus and ctx.mouse_down == Mouse.LEFT:
            cur = cnt.rect
            cnt.rect = Rect(
                cur.x,
                cur.y,
                max(_MIN_WINDOW_W, cur.w + ctx.mouse_delta.x),
                max(_MIN_WINDOW_H, cur.h + ctx.mouse_delta.y),
            )

    if opt & Opt.AUTOSIZE:
        lb = ctx.get_layout().body
        cur = cnt.rect
        cnt.rect = Rect(
            cur.x,
            cur.y,
            cnt.content_size.x + (cur.w - lb.w),
            cnt.content_size.y + (cur.h - lb.h),
        )

    # a popup closes when the mouse is pressed anywhere else
    if opt & Opt.POPUP and ctx.mouse_pressed and ctx.hover_root is not cnt:
        cnt.open = False

    ctx.push_clip_rect(cnt.body)
    return Res.ACTIVE


def end_window(ctx: Context) -> None:
    """End a window begun by an active ``begin_window``."""
    ctx.pop_clip_rect()
    end_root_container(ctx)


def open_popup(ctx: Context, name: IdData) -> None:
    """Open the popup ``name`` at the mouse cursor and bring it to the front."""
    cnt = ctx.get_container(name)
    # hover root, so that begin_window does not close it straight away
    ctx.next_hover_root = cnt
    ctx.hover_root = cnt
    cnt.rect = Rect(ctx.mouse_pos.x, ctx.mouse_pos.y, 1, 1)
    cnt.open = True
    ctx.bring_to_front(cnt)


def begin_popup(ctx: Context, name: str) -> Res:
    """Begin the popup ``name``; ACTIVE is set while it is open."""
    opt = (
        Opt.POPUP
        | Opt.AUTOSIZE
        | Opt.NORESIZE
        | Opt.NOSCROLL
        | Opt.NOTITLE
        | Opt.CLOSED
    )
    return begin_window(ctx, name, Rect(0, 0, 0, 0), opt)


def end_popup(ctx: Context) -> None:
    """End a popup begun by an active ``begin_popup``."""
    end_window(ctx)


def begin_panel(ctx: Context, name: IdData, opt: int = 0) -> None:
    """Begin a panel filling the next layout cell of the current container."""
    ctx.push_id(name)
    cnt = ctx.container_by_id(ctx.last_id, opt)
    if cnt is None:
        ctx.pop_id()
        raise ValueError("panel container is closed")
    cnt.rect = ctx.layout_next()
    if not opt & Opt.NOFRAME:
        ctx.draw_frame(cnt.rect, ColorId.PANELBG)
    ctx.container_stack.append(cnt)
    push_container_body(ctx, cnt, cnt.rect, opt)
    ctx.push_clip_rect(cnt.body)


def end_panel(ctx: Context) -> None:
    """End the current panel."""
    ctx.pop_clip_rect()
    ctx.pop_container()