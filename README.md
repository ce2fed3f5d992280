# microgui

microgui is a small immediate-mode user-interface library. In each frame you
describe your widgets: windows, panels, popups, buttons, checkboxes, sliders,
text boxes, headers and tree nodes. The library turns those calls into a flat
list of draw commands (rectangles, text, icons and clip regions), and your own
renderer draws them.

It uses only the standard library. You supply two callbacks that measure text,
and you pass input events to the context.

## Installing

```
pip install .
```

## A frame

```python
from microgui.context import Context
from microgui.containers import begin_window, end_window
from microgui.controls import button, checkbox, label, slider
from microgui.types import CommandType, Mouse, Rect, Res

ctx = Context(
    text_width=lambda font, text: 8 * len(text),
    text_height=lambda font: 12,
)

volume = 0.5
enabled = False


def frame():
    global volume, enabled
    ctx.begin()
    if begin_window(ctx, "Settings", Rect(10, 10, 300, 200)):
        label(ctx, "Hello")
        if button(ctx, "Apply") & Res.SUBMIT:
            print("applied")
        _, enabled = checkbox(ctx, "Enabled", enabled)
        res, volume = slider(ctx, "volume", volume, 0.0, 1.0)
        end_window(ctx)
    ctx.end()


ctx.input_mouse_move(40, 60)
ctx.input_mouse_down(40, 60, Mouse.LEFT)
frame()


def draw(cmd):
    if cmd.type is CommandType.RECT:
        ...  # fill cmd.rect with cmd.color
    elif cmd.type is CommandType.TEXT:
        ...  # draw cmd.text at cmd.pos with cmd.color and cmd.font
    elif cmd.type is CommandType.ICON:
        ...  # draw icon cmd.id centred in cmd.rect
    elif cmd.type is CommandType.CLIP:
        ...  # clip to cmd.rect; types.UNCLIPPED_RECT means "no clipping"


ctx.render(draw)
```

`Context.begin()` raises `RuntimeError` if either text callback is missing.
`Context.end()` raises `RuntimeError` if a window, panel, clip, id or layout
scope was left open. At the end of the frame, `end()` also puts root
containers into z-order.

`Context.commands()` yields the drawable commands in draw order and follows
the internal jump commands without consuming anything.
`Context.render(handler)` passes each of those commands to `handler` and then
clears the list.

## Input

Call these before each frame: `input_mouse_move(x, y)`,
`input_mouse_down(x, y, button)`, `input_mouse_up(x, y, button)`,
`input_scroll(x, y)`, `input_key_down(key)`, `input_key_up(key)` and
`input_text(text)`. Buttons are `Mouse` flags and keys are `Key` flags
(`SHIFT`, `CTRL`, `ALT`, `BACKSPACE`, `RETURN`). The "pressed" state and typed
text last for a single frame.

## Widgets

All widgets are functions in `microgui.controls` that take the context as
their first argument.

- `text(ctx, content)`: word-wrapped text.
- `label(ctx, content)`: one line of text.
- `button(ctx, label, icon=0, opt=Opt.ALIGNCENTER)` returns `Res`. `SUBMIT` is
  set on the frame the button is clicked.
- `checkbox(ctx, label, state)` returns `(Res, new_state)`.
- `textbox(ctx, key, text, opt=0)` returns `(Res, new_text)`. `Opt.PASSWORD`
  shows the text masked with `*`. Return submits and drops focus.
- `slider(ctx, key, value, low, high, step=0, fmt="%.2f", opt=Opt.ALIGNCENTER)`
  returns `(Res, new_value)`, with the value clamped to `low..high`.
- `number(ctx, key, value, step, fmt="%.2f", opt=Opt.ALIGNCENTER)` returns
  `(Res, new_value)`. Dragging horizontally changes the value by `step` per
  pixel.
- `header(ctx, label, opt=0)` is a collapsible header. `Res.ACTIVE` is set
  while it is expanded.
- `begin_tree_node(ctx, label, opt=0)` / `end_tree_node(ctx)`: while the node
  is expanded, its contents are indented and its ids are scoped. Call
  `end_tree_node` only when `begin_tree_node` returned `ACTIVE`.

Shift-click a slider or number box to type a value into it.

Widgets that edit a value take the current value and return it updated. Keep
the value yourself between frames. `key` is any string, bytes or int that
identifies the widget within the current id scope.

`Res` flags have these meanings:

- `ACTIVE`: expanded, or open and needing to be ended.
- `SUBMIT`: clicked or submitted.
- `CHANGE`: the value changed this frame.

## Containers

These functions are in `microgui.containers`.

- `begin_window(ctx, title, rect, opt=0)` / `end_window(ctx)`: a movable,
  resizable and closable window with scrollbars. Call `end_window` only when
  `begin_window` returned `ACTIVE`.
- `open_popup(ctx, name)`, `begin_popup(ctx, name)` / `end_popup(ctx)`: an
  auto-sized popup that opens at the mouse cursor. It closes when you click
  anywhere else.
- `begin_panel(ctx, name, opt=0)` / `end_panel(ctx)`: a scrollable region in
  the next layout cell.

The `Opt` flags (`NOFRAME`, `NOTITLE`, `NOCLOSE`, `NORESIZE`, `NOSCROLL`,
`AUTOSIZE`, `POPUP`, `CLOSED`, …) change how a window or panel behaves.

## Layout

The `Context` methods `layout_row(items, widths, height)`,
`layout_width(width)`, `layout_height(height)`,
`layout_set_next(rect, relative)`, `layout_begin_column()` and
`layout_end_column()` control where the next widgets go.

- A width or height of `0` uses the style's default size.
- A negative width or height is measured back from the far edge of the body.
  For example, `-1` fills the rest of the body.
- A row can have at most 16 widths. More raises `ValueError`.

## Modules

- `microgui.types`: `Vec2`, `Rect`, `Color`, the flag and enum types, command
  records, `Layout`, `Container`, `Style`, `default_style()`, `clamp()` and
  `hash_bytes()`.
- `microgui.pool`: `Pool`, a fixed-size id store that reuses the least
  recently updated slot. It raises `RuntimeError` when every slot is in use in
  the current frame.
- `microgui.context`: `Context`, which holds input, the id, clip, layout and
  container stacks, the command list and the layout engine.
- `microgui.controls`: widgets.
- `microgui.containers`: windows, popups, panels and scrollbars.

## What it does not do

microgui produces draw commands and nothing more. It has these limits:

- It does not open windows, draw pixels or load fonts.
- It has no icon images. Icon commands carry only an `Icon` number.
- It does not read events from any input device.

Connecting it to a graphics or windowing library is up to you.

## Tests

```
pip install .[test]
pytest
```