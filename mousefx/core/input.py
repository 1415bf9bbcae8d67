"""Polled input: cursor position, held mouse buttons and viewport rect."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Tuple


class MouseButton(IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass(frozen=True)
class InputState:
    """Snapshot of the pointer for one frame.

    x, y are window pixels with the origin in the top-left corner.
    viewport_rect is (px, py, width, height) in the same pixels.
    """
    x: float
    y: float
    buttons: FrozenSet[int] = field(default_factory=frozenset)
    viewport_rect: Tuple[float, float, float, float] = (0.0, 0.0, 1.0, 1.0)

    def is_held(self, button: int) -> bool:
        return int(button) in self.buttons


class InputSource(ABC):
    """Something the per-frame update can poll."""

    @abstractmethod
    def poll(self) -> InputState:
        ...


class ManualInputSource(InputSource):
    """
    Источник ввода, управляемый вручную.

    Для headless-прогонов, тестов и хостов, которые сами получают события
    мыши и хотят отдать их в опрашиваемом виде.
    """

    def __init__(self, width: float = 800.0, height: float = 600.0):
        self._rect = (0.0, 0.0, float(width), float(height))
        self._x = width / 2.0
        self._y = height / 2.0
        self._buttons: set[int] = set()

    def move_to(self, x: float, y: float) -> None:
        self._x = float(x)
        self._y = float(y)

    def press(self, button: int = MouseButton.LEFT) -> None:
        self._buttons.add(int(button))

    def release(self, button: int = MouseButton.LEFT) -> None:
        self._buttons.discard(int(button))

    def resize(self, width: float, height: float) -> None:
        self._rect = (0.0, 0.0, float(width), float(height))

    def center(self) -> Tuple[float, float]:
        px, py, pw, ph = self._rect
        return px + pw / 2.0, py + ph / 2.0

    def poll(self) -> InputState:
        return InputState(
            x=self._x,
            y=self._y,
            buttons=frozenset(self._buttons),
            viewport_rect=self._rect,
        )
