import pytest

from mousefx.core import InputState, ManualInputSource, MouseButton


def test_manual_source_defaults_to_center():
    mouse = ManualInputSource(width=640, height=480)
    state = mouse.poll()
    assert (state.x, state.y) == (320.0, 240.0)
    assert state.viewport_rect == (0.0, 0.0, 640.0, 480.0)
    assert state.buttons == frozenset()


def test_press_release_is_level_state():
    mouse = ManualInputSource()
    mouse.press(MouseButton.LEFT)
    assert mouse.poll().is_held(0)
    assert mouse.poll().is_held(MouseButton.LEFT)
    assert not mouse.poll().is_held(MouseButton.RIGHT)
    mouse.release(MouseButton.LEFT)
    assert not mouse.poll().is_held(0)


def test_snapshot_does_not_follow_source():
    mouse = ManualInputSource()
    before = mouse.poll()
    mouse.move_to(1.0, 2.0)
    mouse.press(MouseButton.MIDDLE)
    assert before.buttons == frozenset()
    assert (mouse.poll().x, mouse.poll().y) == (1.0, 2.0)


def test_state_is_frozen():
    state = InputState(x=1.0, y=2.0)
    with pytest.raises(AttributeError):
        state.x = 3.0
