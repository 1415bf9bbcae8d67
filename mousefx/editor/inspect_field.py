# mousefx/editor/inspect_field.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class InspectField:
    """
    Описание одного поля для инспектора.

    path      – путь к полю ("enabled", "config.plane_y" и т.п.)
    label     – подпись в UI
    kind      – тип виджета: 'float', 'int', 'bool', 'vec3', 'string', 'enum', ...
    min, max  – ограничения
    step      – шаг (для спинбоксов)
    choices   – для enum: список (value, label)
    getter, setter – если нужно обращаться к полю вручную.
    non_serializable – при True поле не попадает в сохранённые данные
    read_only – виджет будет только для чтения
    """
    path: str | None = None
    label: str | None = None
    kind: str = "float"
    min: float | None = None
    max: float | None = None
    step: float | None = None
    choices: list[tuple[Any, str]] | None = None
    getter: Optional[Callable[[Any], Any]] = None
    setter: Optional[Callable[[Any, Any], None]] = None
    non_serializable: bool = False
    read_only: bool = False

    def get_value(self, obj):
        if self.getter:
            return self.getter(obj)
        if self.path is None:
            raise ValueError("InspectField: path or getter must be set")
        return _resolve_path_get(obj, self.path)

    def set_value(self, obj, value):
        if self.read_only:
            raise AttributeError(f"InspectField '{self.label}' is read only")
        if self.setter:
            self.setter(obj, value)
            return
        if self.path is None:
            raise ValueError("InspectField: path or setter must be set")
        _resolve_path_set(obj, self.path, value)


def _resolve_path_get(obj, path: str):
    cur = obj
    for part in path.split("."):
        cur = getattr(cur, part)
    return cur


def _resolve_path_set(obj, path: str, value):
    parts = path.split(".")
    cur = obj
    for part in parts[:-1]:
        cur = getattr(cur, part)
    setattr(cur, parts[-1], value)

