from contextlib import contextmanager

import pytest

from microgui import controls
from microgui.context import Context
from microgui.types import (
    REAL_FMT,
    SLIDER_FMT,
    UNCLIPPED_RECT,
    ColorId,
    Container,
    Icon,
    IconCommand,
    Key,
    Mouse,
    Opt,
    Rect,
    RectCommand,
    Res,
    TextCommand,
    Vec2,
    hash_bytes,
)

CHAR_W = 8
TEXT_H = 10


def make_ctx():
    return Context(lambda font, s: len(s) * CHAR_W, lambda font: TEXT_H)


@contextmanager
def frame(ctx, root):
    ctx.begin()
    ctx.hover_root = root
    ctx.container_stack.append(root)
    ctx.clip_stack.append(UNCLIPPED_RECT)
    ctx.push_layout(Rect(0, 0, 200, 200), Vec2())
    yield
    ctx.layout_stack.clear()
    ctx.container_stack.clear()
    ctx.clip_stack.clear()
    ctx.id_stack.clear()
    ctx.end()


@pytest.fixture
def ctx():
    return make_ctx()


@pytest.fixture
def root():
    return Container(head_idx=0, open=True)


def texts(ctx):
    return [c.text for c in ctx.command_list if isinstance(c, TextCommand)]


def test_in_hover_root_true_for_current_root(ctx, root):
    with frame(ctx, root):
        assert controls.in_hover_root(ctx) is True


def test_in_hover_root_stops_at_inner_root(ctx, root):
    with frame(ctx, root):
        ctx.container_stack.append(Container(head_idx=5))
        assert controls.in_hover_root(ctx) is False


def test_mouse_over(ctx, root):
    ctx.input_mouse_move(5, 5)
    with frame(ctx, root):
        assert controls.mouse_over(ctx, Rect(0, 0, 20, 20)) is True
        assert controls.mouse_over(ctx, Rect(50, 50, 20, 20)) is False


def test_button_hover_then_click_submits(ctx, root):
    ctx.input_mouse_move(5, 5)
    with frame(ctx, root):
        first = controls.button(ctx, "OK")
    assert first == Res(0)
    assert ctx.hover == hash_bytes(b"OK")
    with frame(ctx, root):
        ctx.input_mouse_down(5, 5, Mouse.LEFT)
        second = controls.button(ctx, "OK")
        assert ctx.focus == hash_bytes(b"OK")
    assert second & Res.SUBMIT


def test_noninteractive_control_never_hovers(ctx, root):
    ctx.input_mouse_move(5, 5)
    with frame(ctx, root):
        controls.update_control(ctx, 42, Rect(0, 0, 50, 50), Opt.NOINTERACT)
        assert ctx.hover == 0


def test_button_icon_only_draws_icon(ctx, root):
    with frame(ctx, root):
        controls.button(ctx, "", Icon.CLOSE)
        icons = [c.id for c in ctx.command_list if isinstance(c, IconCommand)]
    assert icons == [Icon.CLOSE]


def test_draw_control_frame_noframe_draws_nothing(ctx, root):
    with frame(ctx, root):
        controls.draw_control_frame(ctx, 1, Rect(0, 0, 50, 20), ColorId.BUTTON, Opt.NOFRAME)
        assert ctx.command_list == []


def test_draw_control_frame_uses_focus_and_hover_colours(ctx, root):
    with frame(ctx, root):
        ctx.focus = 1
        ctx.hover = 2
        controls.draw_control_frame(ctx, 1, Rect(0, 0, 50, 20), ColorId.BUTTON)
        focused = ctx.command_list[0]
        ctx.command_list.clear()
        controls.draw_control_frame(ctx, 2, Rect(0, 0, 50, 20), ColorId.BUTTON)
        hovered = ctx.command_list[0]
    assert isinstance(focused, RectCommand)
    assert focused.color == ctx.style.colors[ColorId.BUTTONFOCUS]
    assert hovered.color == ctx.style.colors[ColorId.BUTTONHOVER]


@pytest.mark.parametrize("opt", [0, Opt.ALIGNCENTER, Opt.ALIGNRIGHT])
def test_draw_control_text_alignment(ctx, root, opt):
    rect = Rect(10, 0, 100, 20)
    with frame(ctx, root):
        controls.draw_control_text(ctx, "ab", rect, ColorId.TEXT, opt)
        cmd = next(c for c in ctx.command_list if isinstance(c, TextCommand))
    tw = 2 * CHAR_W
    left = cmd.pos.x - rect.x
    right = rect.x + rect.w - (cmd.pos.x + tw)
    assert cmd.pos.y * 2 + TEXT_H == rect.h
    if opt == Opt.ALIGNCENTER:
        assert left == right
    elif opt == Opt.ALIGNRIGHT:
        assert right == ctx.style.padding
    else:
        assert left == ctx.style.padding


def test_text_splits_on_newlines(ctx, root):
    with frame(ctx, root):
        controls.text(ctx, "one\ntwo")
        assert texts(ctx) == ["one", "two"]


def test_text_wraps_to_width(ctx, root):
    words = ["word"] * 20
    content = " ".join(words)
    with frame(ctx, root):
        controls.text(ctx, content)
        lines = texts(ctx)
    assert len(lines) > 1
    assert all(len(line) * CHAR_W <= 200 for line in lines)
    assert " ".join(lines).split() == words


def test_text_empty_draws_nothing(ctx, root):
    with frame(ctx, root):
        controls.text(ctx, "")
        assert texts(ctx) == []


def test_label_draws_text(ctx, root):
    with frame(ctx, root):
        controls.label(ctx, "hello")
        assert texts(ctx) == ["hello"]


def test_checkbox_click_toggles(ctx, root):
    ctx.input_mouse_move(5, 5)
    with frame(ctx, root):
        res, state = controls.checkbox(ctx, "check", False)
    assert (res, state) == (Res(0), False)
    with frame(ctx, root):
        ctx.input_mouse_down(5, 5, Mouse.LEFT)
        res, state = controls.checkbox(ctx, "check", False)
        icons = [c.id for c in ctx.command_list if isinstance(c, IconCommand)]
    assert res & Res.CHANGE
    assert state is True
    assert icons == [Icon.CHECK]


def test_textbox_raw_appends_input(ctx, root):
    with frame(ctx, root):
        ctx.focus = 7
        ctx.input_text("xy")
        res, value = controls.textbox_raw(ctx, "ab", 7, Rect(0, 0, 100, 20))
    assert value == "abxy"
    assert res & Res.CHANGE


def test_textbox_raw_backspace_and_return(ctx, root):
    with frame(ctx, root):
        ctx.focus = 7
        ctx.input_key_down(Key.BACKSPACE | Key.RETURN)
        res, value = controls.textbox_raw(ctx, "abc", 7, Rect(0, 0, 100, 20))
        assert ctx.focus == 0
    assert value == "ab"
    assert res & Res.SUBMIT and res & Res.CHANGE


def test_textbox_raw_unfocused_ignores_input(ctx, root):
    with frame(ctx, root):
        ctx.input_text("zz")
        res, value = controls.textbox_raw(ctx, "abc", 7, Rect(0, 0, 100, 20))
    assert (res, value) == (Res(0), "abc")


def test_textbox_password_masks_text(ctx, root):
    with frame(ctx, root):
        _, value = controls.textbox_raw(ctx, "abc", 7, Rect(0, 0, 100, 20), Opt.PASSWORD)
        shown = texts(ctx)
    assert value == "abc"
    assert shown == ["*" * len(value)]


def test_textbox_uses_key_for_id(ctx, root):
    with frame(ctx, root):
        ctx.focus = hash_bytes(b"name")
        ctx.input_text("q")
        res, value = controls.textbox(ctx, "name", "")
    assert value == "q"
    assert res & Res.CHANGE


def _start_number_edit(ctx, root, value):
    ctx.hover = 99
    with frame(ctx, root):
        ctx.input_key_down(Key.SHIFT)
        ctx.input_mouse_down(5, 5, Mouse.LEFT)
        editing, out = controls.number_textbox(ctx, value, Rect(0, 0, 100, 20), 99)
    return editing, out


def test_number_textbox_shift_click_starts_edit(ctx, root):
    editing, out = _start_number_edit(ctx, root, 2.0)
    assert editing is True
    assert out == 2.0
    assert ctx.number_edit == 99
    assert ctx.number_edit_buf == REAL_FMT % 2.0


def test_number_textbox_submit_parses(ctx, root):
    _start_number_edit(ctx, root, 2.0)
    with frame(ctx, root):
        ctx.input_text("5")
        ctx.input_key_down(Key.RETURN)
        editing, out = controls.number_textbox(ctx, 2.0, Rect(0, 0, 100, 20), 99)
    assert editing is False
    assert out == float(REAL_FMT % 2.0 + "5")
    assert ctx.number_edit == 0


def test_number_textbox_bad_text_gives_zero(ctx, root):
    _start_number_edit(ctx, root, 2.0)
    with frame(ctx, root):
        ctx.input_text("x")
        ctx.input_key_down(Key.RETURN)
        editing, out = controls.number_textbox(ctx, 2.0, Rect(0, 0, 100, 20), 99)
    assert (editing, out) == (False, 0.0)


def test_slider_clamps_value(ctx, root):
    with frame(ctx, root):
        res, value = controls.slider(ctx, "s", 50.0, 0.0, 10.0)
        shown = texts(ctx)
    assert value == 10.0
    assert res & Res.CHANGE
    assert shown == [SLIDER_FMT % value]


def test_slider_unchanged_in_range(ctx, root):
    with frame(ctx, root):
        res, value = controls.slider(ctx, "s", 3.0, 0.0, 10.0)
    assert (res, value) == (Res(0), 3.0)


def test_slider_click_sets_value_on_step(ctx, root):
    with frame(ctx, root):
        ctx.focus = hash_bytes(b"s")
        ctx.input_mouse_down(50, 5, Mouse.LEFT)
        ctx.layout_set_next(Rect(0, 0, 100, 20), False)
        res, value = controls.slider(ctx, "s", 0.0, 0.0, 10.0, 3.0)
    assert res & Res.CHANGE
    assert 0.0 < value <= 10.0
    assert value % 3.0 == 0


def test_number_drag_changes_value(ctx, root):
    ctx.input_mouse_move(10, 5)
    with frame(ctx, root):
        ctx.focus = hash_bytes(b"n")
        ctx.input_mouse_down(10, 5, Mouse.LEFT)
        res, value = controls.number(ctx, "n", 1.0, 0.5)
    assert res & Res.CHANGE
    assert value > 1.0


def test_number_without_focus_unchanged(ctx, root):
    with frame(ctx, root):
        res, value = controls.number(ctx, "n", 1.5, 0.5)
        shown = texts(ctx)
    assert (res, value) == (Res(0), 1.5)
    assert shown == [SLIDER_FMT % 1.5]


def test_header_click_expands_next_frame(ctx, root):
    ctx.input_mouse_move(5, 5)
    with frame(ctx, root):
        first = controls.header(ctx, "Section")
    with frame(ctx, root):
        ctx.input_mouse_down(5, 5, Mouse.LEFT)
        second = controls.header(ctx, "Section")
    with frame(ctx, root):
        third = controls.header(ctx, "Section")
    assert first == Res(0)
    assert second == Res(0)
    assert third == Res.ACTIVE
    assert ctx.treenode_pool.get(hash_bytes(b"Section")) is not None


def test_header_expanded_option(ctx, root):
    with frame(ctx, root):
        res = controls.header(ctx, "Section", Opt.EXPANDED)
        icons = [c.id for c in ctx.command_list if isinstance(c, IconCommand)]
    assert res == Res.ACTIVE
    assert icons == [Icon.EXPANDED]


def test_tree_node_indents_and_scopes_ids(ctx, root):
    with frame(ctx, root):
        res = controls.begin_tree_node(ctx, "node", Opt.EXPANDED)
        assert res == Res.ACTIVE
        assert ctx.get_layout().indent == ctx.style.indent
        assert ctx.id_stack == [hash_bytes(b"node")]
        controls.end_tree_node(ctx)
        assert ctx.get_layout().indent == 0
        assert ctx.id_stack == []


def test_collapsed_tree_node_does_not_indent(ctx, root):
    with frame(ctx, root):
        res = controls.begin_tree_node(ctx, "node")
        assert res == Res(0)
        assert ctx.get_layout().indent == 0
        assert ctx.id_stack == []


def test_end_tree_node_without_scope_raises(ctx, root):
    with frame(ctx, root):
        with pytest.raises(IndexError):
            controls.end_tree_node(ctx)