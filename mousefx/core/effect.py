"""
Effect targets: objects that accept named float / vector3 writes.

VisualEffectComponent keeps a blackboard of exposed properties, the way a
particle system graph exposes its parameters. Writes to names that are not
exposed (or exposed with another kind) are ignored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

import numpy as np

from mousefx import log
from mousefx.geombase import GeneralPose3
from mousefx.editor.inspect_field import InspectField
from mousefx.core.component import Component
from mousefx.util import as_vec3

FLOAT = "float"
VECTOR3 = "vector3"


class EffectTarget(ABC):
    """Receiver of the per-frame property writes."""

    @abstractmethod
    def set_float(self, name: str, value: float) -> None:
        ...

    @abstractmethod
    def set_vector3(self, name: str, value: np.ndarray) -> None:
        ...

    @abstractmethod
    def world_pose(self) -> GeneralPose3:
        """World transform of the target; local space is its inverse."""
        ...


class VisualEffectComponent(Component, EffectTarget):
    """
    Компонент-эффект с набором именованных свойств.

    Имена сравниваются точно, с учётом регистра.
    """

    inspect_fields = {
        "properties": InspectField(
            label="Exposed properties",
            kind="dict",
            getter=lambda obj: obj.exposed_properties(),
            setter=lambda obj, value: obj.expose_all(value),
        ),
    }

    def __init__(self, floats: Iterable[str] = ("Emit",), vectors: Iterable[str] = ("MouseWorld",)):
        super().__init__(enabled=True)
        self._kinds: Dict[str, str] = {}
        self._floats: Dict[str, float] = {}
        self._vectors: Dict[str, np.ndarray] = {}
        self.write_count = 0
        for name in floats:
            self.expose_float(name)
        for name in vectors:
            self.expose_vector3(name)

    # --- Blackboard ---

    def expose_float(self, name: str, default: float = 0.0) -> None:
        self._kinds[name] = FLOAT
        self._floats[name] = float(default)

    def expose_vector3(self, name: str, default=(0.0, 0.0, 0.0)) -> None:
        self._kinds[name] = VECTOR3
        self._vectors[name] = as_vec3(default).copy()

    def exposed_properties(self) -> Dict[str, str]:
        return dict(self._kinds)

    def expose_all(self, kinds: Dict[str, str]) -> None:
        self._kinds.clear()
        self._floats.clear()
        self._vectors.clear()
        for name, kind in kinds.items():
            if kind == FLOAT:
                self.expose_float(name)
            elif kind == VECTOR3:
                self.expose_vector3(name)
            else:
                raise ValueError(f"Unknown property kind '{kind}' for '{name}'")

    def has_float(self, name: str) -> bool:
        return self._kinds.get(name) == FLOAT

    def has_vector3(self, name: str) -> bool:
        return self._kinds.get(name) == VECTOR3

    def get_float(self, name: str) -> Optional[float]:
        return self._floats.get(name)

    def get_vector3(self, name: str) -> Optional[np.ndarray]:
        vec = self._vectors.get(name)
        return None if vec is None else vec.copy()

    # --- EffectTarget ---

    def set_float(self, name: str, value: float) -> None:
        self.write_count += 1
        if not self.has_float(name):
            return
        self._floats[name] = float(value)

    def set_vector3(self, name: str, value) -> None:
        self.write_count += 1
        if not self.has_vector3(name):
            return
        self._vectors[name] = as_vec3(value).copy()

    def world_pose(self) -> GeneralPose3:
        if self.entity is None:
            log.debug("[VisualEffectComponent] no entity, using identity world pose")
            return GeneralPose3.identity()
        return self.entity.transform.global_pose()
