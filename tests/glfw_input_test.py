import pytest

glfw = pytest.importorskip("glfw")

from mousefx.core import MouseButton  # noqa: E402
from mousefx.platform import glfw_input  # noqa: E402
from mousefx.platform.glfw_input import GlfwInputSource  # noqa: E402


@pytest.fixture
def fake_window(monkeypatch):
    state = {"pos": (120.0, 80.0), "size": (640, 480), "pressed": {glfw.MOUSE_BUTTON_RIGHT}}

    monkeypatch.setattr(glfw_input.glfw, "get_cursor_pos", lambda win: state["pos"])
    monkeypatch.setattr(glfw_input.glfw, "get_window_size", lambda win: state["size"])
    monkeypatch.setattr(
        glfw_input.glfw, "get_mouse_button",
        lambda win, button: glfw.PRESS if button in state["pressed"] else glfw.RELEASE,
    )
    return state


def test_poll_reads_window(fake_window):
    source = GlfwInputSource(window=object())
    state = source.poll()

    assert (state.x, state.y) == (120.0, 80.0)
    assert state.viewport_rect == (0.0, 0.0, 640.0, 480.0)
    assert state.is_held(MouseButton.RIGHT)
    assert not state.is_held(MouseButton.LEFT)


def test_minimized_window_keeps_positive_rect(fake_window):
    fake_window["size"] = (0, 0)
    state = GlfwInputSource(window=object()).poll()
    assert state.viewport_rect == (0.0, 0.0, 1.0, 1.0)


def test_requires_window():
    with pytest.raises(RuntimeError):
        GlfwInputSource(window=None)
