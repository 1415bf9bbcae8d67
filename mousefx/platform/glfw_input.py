"""GLFW-based polled input source."""

from __future__ import annotations

import glfw

from mousefx.core.input import InputSource, InputState, MouseButton


_BUTTONS = {
    MouseButton.LEFT: glfw.MOUSE_BUTTON_LEFT,
    MouseButton.RIGHT: glfw.MOUSE_BUTTON_RIGHT,
    MouseButton.MIDDLE: glfw.MOUSE_BUTTON_MIDDLE,
}


def _glfw_button(button: int) -> int:
    try:
        return _BUTTONS[MouseButton(button)]
    except ValueError:
        # glfw numbers extra buttons 3..7 directly
        return int(button)


class GlfwInputSource(InputSource):
    """
    Опрашивает окно GLFW: позиция курсора, зажатые кнопки, размер окна.

    The window is owned by the caller; events must be pumped with
    glfw.poll_events() before each poll().
    """

    def __init__(self, window, buttons=(0, 1, 2)):
        if not window:
            raise RuntimeError("GlfwInputSource requires a GLFW window")
        self._window = window
        self._buttons = tuple(int(b) for b in buttons)

    def poll(self) -> InputState:
        x, y = glfw.get_cursor_pos(self._window)
        width, height = glfw.get_window_size(self._window)
        held = frozenset(
            b for b in self._buttons
            if glfw.get_mouse_button(self._window, _glfw_button(b)) == glfw.PRESS
        )
        return InputState(
            x=float(x),
            y=float(y),
            buttons=held,
            viewport_rect=(0.0, 0.0, float(max(1, width)), float(max(1, height))),
        )
