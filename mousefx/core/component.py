"""
Pure Python Component base class.

Subclasses are registered by class name in COMPONENT_REGISTRY, which
Entity.deserialize uses to rebuild components from saved data.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Type

import numpy as np

if TYPE_CHECKING:
    from mousefx.core.entity import Entity
    from mousefx.core.scene import Scene

from mousefx.editor.inspect_field import InspectField

COMPONENT_REGISTRY: Dict[str, Type["Component"]] = {}


class Component:
    """Base class for all entity components."""

    # Class-level inspect fields - enabled is inherited by all subclasses
    inspect_fields: Dict[str, InspectField] = {
        "enabled": InspectField(path="enabled", label="Enabled", kind="bool"),
    }

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._started = False

        # Entity reference (set by Entity.add_component)
        self.entity: Optional[Entity] = None

        # Scene reference (set by on_added)
        self._scene: Optional[Scene] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        COMPONENT_REGISTRY[cls.__name__] = cls

    @property
    def scene(self) -> Optional[Scene]:
        return self._scene

    def type_name(self) -> str:
        return type(self).__name__

    @classmethod
    def all_inspect_fields(cls) -> Dict[str, InspectField]:
        """Collect inspect_fields from the whole class hierarchy."""
        fields: Dict[str, InspectField] = {}
        for klass in reversed(cls.__mro__):
            own = klass.__dict__.get("inspect_fields")
            if own:
                fields.update(own)
        return fields

    # =========================================================================
    # Lifecycle methods (override in subclasses)
    # =========================================================================

    def start(self) -> None:
        """Called once before the first update after joining a scene."""
        pass

    def update(self, dt: float) -> None:
        """Called every frame."""
        pass

    def on_destroy(self) -> None:
        """Called when component is destroyed."""
        pass

    def on_added(self, scene: Scene) -> None:
        """Called when entity is added to scene."""
        self._scene = scene

    def on_removed(self) -> None:
        """Called when entity is removed from scene."""
        self._scene = None

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize_data(self) -> Dict[str, Any]:
        """Serialize component data through its inspect fields."""
        result = {}
        for name, field in self.all_inspect_fields().items():
            if field.non_serializable or field.read_only:
                continue
            result[name] = _to_plain(field.get_value(self))
        return result

    def deserialize_data(self, data: Dict[str, Any], context: Any = None) -> None:
        if not data:
            return
        fields = self.all_inspect_fields()
        for name, value in data.items():
            field = fields.get(name)
            if field is None:
                raise ValueError(f"{self.type_name()}: unknown field '{name}'")
            field.set_value(self, value)

    def serialize(self) -> Dict[str, Any]:
        """Serialize component with type info."""
        return {
            "type": self.type_name(),
            "data": self.serialize_data()
        }

    @classmethod
    def deserialize(cls, data: Dict[str, Any], context: Any = None) -> "Component":
        comp = cls()
        comp.deserialize_data(data, context)
        return comp


def _to_plain(value):
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, np.ndarray):
        return value.tolist()
    return value


__all__ = ["Component", "COMPONENT_REGISTRY"]
