"""Immediate-mode controls: labels, buttons, text boxes, sliders and headers.

Controls that edit a value take the current value and return a
``(result_flags, new_value)`` pair. The caller keeps the value between
frames. Controls without a label of their own take a ``key`` that
identifies them within the current id scope.
"""

from __future__ import annotations

from typing import Tuple

from .context import Context, IdData
from .types import (
    REAL_FMT,
    SLIDER_FMT,
    ColorId,
    Icon,
    Key,
    Mouse,
    Opt,
    Rect,
    Res,
    Vec2,
    clamp,
)


def _half(n: int) -> int:
    """Halve ``n``, rounding toward zero."""
    return n // 2 if n >= 0 else -((-n) // 2)


def in_hover_root(ctx: Context) -> bool:
    """Whether the current root container is the one under the mouse."""
    for cnt in reversed(ctx.container_stack):
        if cnt is ctx.hover_root:
            return True
        # only root containers have a head command; stop at the current root
        if cnt.head_idx >= 0:
            break
    return False


def mouse_over(ctx: Context, rect: Rect) -> bool:
    """Whether the mouse is over ``rect``, inside the clip rect and hover root."""
    return (
        rect.contains(ctx.mouse_pos)
        and ctx.get_clip_rect().contains(ctx.mouse_pos)
        and in_hover_root(ctx)
    )


def update_control(ctx: Context, id_: int, rect: Rect, opt: int = 0) -> None:
    """Update hover and focus state for the control ``id_`` occupying ``rect``."""
    over = mouse_over(ctx, rect)

    if ctx.focus == id_:
        ctx.updated_focus = True
    if opt & Opt.NOINTERACT:
        return
    if over and not ctx.mouse_down:
        ctx.hover = id_

    if ctx.focus == id_:
        if ctx.mouse_pressed and not over:
            ctx.set_focus(0)
        if not ctx.mouse_down and not opt & Opt.HOLDFOCUS:
            ctx.set_focus(0)

    if ctx.hover == id_:
        if ctx.mouse_pressed:
            ctx.set_focus(id_)
        elif not over:
            ctx.hover = 0


def draw_control_frame(
    ctx: Context, id_: int, rect: Rect, colorid: int, opt: int = 0
) -> None:
    """Draw a control's frame, shifted to the hover or focus colour as needed."""
    if opt & Opt.NOFRAME:
        return
    if ctx.focus == id_:
        colorid += 2
    elif ctx.hover == id_:
        colorid += 1
    ctx.draw_frame(rect, colorid)


def draw_control_text(
    ctx: Context, text: str, rect: Rect, colorid: int, opt: int = 0
) -> None:
    """Draw ``text`` vertically centred in ``rect``, aligned per ``opt``."""
    font = ctx.style.font
    tw = ctx.text_width(font, text)
    ctx.push_clip_rect(rect)
    y = rect.y + _half(rect.h - ctx.text_height(font))
    if opt & Opt.ALIGNCENTER:
        x = rect.x + _half(rect.w - tw)
    elif opt & Opt.ALIGNRIGHT:
        x = rect.x + rect.w - tw - ctx.style.padding
    else:
        x = rect.x + ctx.style.padding
    ctx.draw_text(font, text, Vec2(x, y), ctx.style.colors[colorid])
    ctx.pop_clip_rect()


def text(ctx: Context, content: str) -> None:
    """Draw ``content`` word-wrapped to the available width, one row per line."""
    font = ctx.style.font
    color = ctx.style.colors[ColorId.TEXT]
    size = len(content)
    ctx.layout_begin_column()
    ctx.layout_row(1, [-1], ctx.text_height(font))
    p = 0
    end = 0
    while end < size:
        r = ctx.layout_next()
        width = 0
        end = start = p
        while end < size and content[end] != "\n":
            word = p
            while p < size and content[p] not in " \n":
                p += 1
            width += ctx.text_width(font, content[word:p])
            if width > r.w and end != start:
                break
            if p < size:
                width += ctx.text_width(font, content[p])
            end = p
            p += 1
        ctx.draw_text(font, content[start:end], Vec2(r.x, r.y), color)
        p = end + 1
    ctx.layout_end_column()


def label(ctx: Context, content: str) -> None:
    """Draw ``content`` in the next layout cell."""
    draw_control_text(ctx, content, ctx.layout_next(), ColorId.TEXT, 0)


def button(ctx: Context, label: str, icon: int = 0, opt: int = Opt.ALIGNCENTER) -> Res:
    """Draw a button; the result has SUBMIT set on the frame it is clicked."""
    res = Res(0)
    id_ = ctx.get_id(label) if label else ctx.get_id(icon)
    r = ctx.layout_next()
    update_control(ctx, id_, r, opt)
    if ctx.mouse_pressed == Mouse.LEFT and ctx.focus == id_:
        res |= Res.SUBMIT
    draw_control_frame(ctx, id_, r, ColorId.BUTTON, opt)
    if label:
        draw_control_text(ctx, label, r, ColorId.TEXT, opt)
    if icon:
        ctx.draw_icon(icon, r, ctx.style.colors[ColorId.TEXT])
    return res


def checkbox(ctx: Context, label: str, state: bool) -> Tuple[Res, bool]:
    """Draw a checkbox; clicking toggles the state and sets CHANGE."""
    res = Res(0)
    id_ = ctx.get_id(label)
    r = ctx.layout_next()
    box = Rect(r.x, r.y, r.h, r.h)
    update_control(ctx, id_, r, 0)
    if ctx.mouse_pressed == Mouse.LEFT and ctx.focus == id_:
        res |= Res.CHANGE
        state = not state
    draw_control_frame(ctx, id_, box, ColorId.BASE, 0)
    if state:
        ctx.draw_icon(Icon.CHECK, box, ctx.style.colors[ColorId.TEXT])
    r = Rect(r.x + box.w, r.y, r.w - box.w, r.h)
    draw_control_text(ctx, label, r, ColorId.TEXT, 0)
    return res, state


def textbox_raw(
    ctx: Context, text: str, id_: int, rect: Rect, opt: int = 0
) -> Tuple[Res, str]:
    """Edit ``text`` in ``rect`` under the id ``id_``; return flags and new text."""
    res = Res(0)
    update_control(ctx, id_, rect, opt | Opt.HOLDFOCUS)
    length = len(text)

    if ctx.focus == id_:
        if ctx.text_input:
            text += ctx.text_input
            res |= Res.CHANGE
        if ctx.key_pressed & Key.BACKSPACE and length > 0:
            text = text[: length - 1]
            res |= Res.CHANGE
        if ctx.key_pressed & Key.RETURN:
            ctx.set_focus(0)
            res |= Res.SUBMIT

    draw_control_frame(ctx, id_, rect, ColorId.BASE, opt)
    shown = "*" * length if opt & Opt.PASSWORD else text

    if ctx.focus == id_:
        color = ctx.style.colors[ColorId.TEXT]
        font = ctx.style.font
        textw = ctx.text_width(font, shown)
        texth = ctx.text_height(font)
        ofx = rect.w - ctx.style.padding - textw - 1
        textx = rect.x + min(ofx, ctx.style.padding)
        texty = rect.y + _half(rect.h - texth)
        ctx.push_clip_rect(rect)
        ctx.draw_text(font, shown, Vec2(textx, texty), color)
        ctx.draw_rect(Rect(textx + textw, texty, 1, texth), color)
        ctx.pop_clip_rect()
    else:
        draw_control_text(ctx, shown, rect, ColorId.TEXT, opt)

    return res, text


def textbox(ctx: Context, key: IdData, text: str, opt: int = 0) -> Tuple[Res, str]:
    """Edit ``text`` in the next layout cell; ``key`` identifies the box."""
    id_ = ctx.get_id(key)
    r = ctx.layout_next()
    return textbox_raw(ctx, text, id_, r, opt)


def number_textbox(
    ctx: Context, value: float, rect: Rect, id_: int
) -> Tuple[bool, float]:
    """Handle typed entry of a number (shift-click to start).

    Returns whether the control is still being edited, and the value, which
    is replaced by the parsed text once editing ends.
    """
    if (
        ctx.mouse_pressed == Mouse.LEFT
        and ctx.key_down & Key.SHIFT
        and ctx.hover == id_
    ):
        ctx.number_edit = id_
        ctx.number_edit_buf = REAL_FMT % value
    if ctx.number_edit == id_:
        res, ctx.number_edit_buf = textbox_raw(ctx, ctx.number_edit_buf, id_, rect, 0)
        if res & Res.SUBMIT or ctx.focus != id_:
            try:
                value = float(ctx.number_edit_buf)
            except ValueError:
                value = 0.0
            ctx.number_edit = 0
        else:
            return True, value
    return False, value


def slider(
    ctx: Context,
    key: IdData,
    value: float,
    low: float,
    high: float,
    step: float = 0,
    fmt: str = SLIDER_FMT,
    opt: int = Opt.ALIGNCENTER,
) -> Tuple[Res, float]:
    """Draw a slider over ``low..high``; return flags and the clamped value."""
    res = Res(0)
    last = value
    v = last
    id_ = ctx.get_id(key)
    base = ctx.layout_next()

    editing, v = number_textbox(ctx, v, base, id_)
    if editing:
        return res, value

    update_control(ctx, id_, base, opt)

    if ctx.focus == id_ and (ctx.mouse_down | ctx.mouse_pressed) == Mouse.LEFT:
        v = low + (ctx.mouse_pos.x - base.x) * (high - low) / base.w
        if step:
            v = int((v + step / 2) / step) * step

    value = clamp(v, low, high)
    v = value
    if last != v:
        res |= Res.CHANGE

    draw_control_frame(ctx, id_, base, ColorId.BASE, opt)
    w = ctx.style.thumb_size
    x = int((v - low) * (base.w - w) / (high - low))
    thumb = Rect(base.x + x, base.y, w, base.h)
    draw_control_frame(ctx, id_, thumb, ColorId.BUTTON, opt)
    draw_control_text(ctx, fmt % v, base, ColorId.TEXT, opt)

    return res, value


def number(
    ctx: Context,
    key: IdData,
    value: float,
    step: float,
    fmt: str = SLIDER_FMT,
    opt: int = Opt.ALIGNCENTER,
) -> Tuple[Res, float]:
    """Draw a number changed by dragging horizontally, ``step`` per pixel."""
    res = Res(0)
    id_ = ctx.get_id(key)
    base = ctx.layout_next()
    last = value

    editing, value = number_textbox(ctx, value, base, id_)
    if editing:
        return res, value

    update_control(ctx, id_, base, opt)

    if ctx.focus == id_ and ctx.mouse_down == Mouse.LEFT:
        value += ctx.mouse_delta.x * step
    if value != last:
        res |= Res.CHANGE

    draw_control_frame(ctx, id_, base, ColorId.BASE, opt)
    draw_control_text(ctx, fmt % value, base, ColorId.TEXT, opt)

    return res, value


def _header(ctx: Context, label: str, is_treenode: bool, opt: int) -> Res:
    id_ = ctx.get_id(label)
    pool = ctx.treenode_pool
    idx = pool.get(id_)
    ctx.layout_row(1, [-1], 0)

    active = idx is not None
    expanded = (not active) if opt & Opt.EXPANDED else active
    r = ctx.layout_next()
    update_control(ctx, id_, r, 0)

    clicked = ctx.mouse_pressed == Mouse.LEFT and ctx.focus == id_
    active = active != clicked

    if idx is not None:
        if active:
            pool.update(idx, ctx.frame)
        else:
            pool.free(idx)
    elif active:
        pool.init(id_, ctx.frame)

    if is_treenode:
        if ctx.hover == id_:
            ctx.draw_frame(r, ColorId.BUTTONHOVER)
    else:
        draw_control_frame(ctx, id_, r, ColorId.BUTTON, 0)
    ctx.draw_icon(
        Icon.EXPANDED if expanded else Icon.COLLAPSED,
        Rect(r.x, r.y, r.h, r.h),
        ctx.style.colors[ColorId.TEXT],
    )
    shift = r.h - ctx.style.padding
    r = Rect(r.x + shift, r.y, r.w - shift, r.h)
    draw_control_text(ctx, label, r, ColorId.TEXT, 0)

    return Res.ACTIVE if expanded else Res(0)


def header(ctx: Context, label: str, opt: int = 0) -> Res:
    """Draw a collapsible header; ACTIVE is set while it is expanded."""
    return _header(ctx, label, False, opt)


def begin_tree_node(ctx: Context, label: str, opt: int = 0) -> Res:
    """Draw a tree node; while expanded, indent and scope ids until the end call."""
    res = _header(ctx, label, True, opt)
    if res & Res.ACTIVE:
        ctx.get_layout().indent += ctx.style.indent
        ctx.id_stack.append(ctx.last_id)
    return res


def end_tree_node(ctx: Context) -> None:
    """Close a tree node opened by an expanded ``begin_tree_node``."""
    ctx.get_layout().indent -= ctx.style.indent
    ctx.pop_id()