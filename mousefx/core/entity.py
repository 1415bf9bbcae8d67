"""Scene entity storing components (Unity-like architecture)."""

from __future__ import annotations

from typing import List, Optional, Type, TypeVar, TYPE_CHECKING

import numpy as np

from mousefx.geombase import GeneralPose3
from mousefx.kinematic import Transform3
from mousefx.core.component import Component, COMPONENT_REGISTRY

if TYPE_CHECKING:  # pragma: no cover
    from mousefx.core.scene import Scene


C = TypeVar("C", bound=Component)


class Entity:
    """Container of components with transform data."""

    def __init__(self, pose: GeneralPose3 = None, name: str = "entity"):
        self.transform = Transform3(pose, name=name)
        self.transform.entity = self
        self.active = True
        self.name = name
        self._components: List[Component] = []
        self.scene: Optional["Scene"] = None

    def add_component(self, component: Component) -> Component:
        component.entity = self
        self._components.append(component)
        if self.scene is not None:
            component.on_added(self.scene)
            self.scene.register_component(component)
        return component

    def remove_component(self, component: Component):
        if component not in self._components:
            return
        self._components.remove(component)
        if self.scene is not None:
            self.scene.unregister_component(component)
            component.on_removed()
        component.on_destroy()
        component.entity = None

    def get_component(self, component_type: Type[C]) -> Optional[C]:
        for comp in self._components:
            if isinstance(comp, component_type):
                return comp
        return None

    def find_component(self, component_type: Type[C]) -> C:
        comp = self.get_component(component_type)
        if comp is None:
            raise ValueError(f"Component of type {component_type} not found in entity {self.name}")
        return comp

    @property
    def components(self) -> List[Component]:
        return list(self._components)

    def add_child(self, child: "Entity") -> "Entity":
        self.transform.add_child(child.transform)
        return child

    def on_added(self, scene: "Scene"):
        self.scene = scene
        for component in self._components:
            component.on_added(scene)
            scene.register_component(component)

    def on_removed(self):
        for component in self._components:
            if self.scene is not None:
                self.scene.unregister_component(component)
            component.on_removed()
        self.scene = None

    def serialize(self):
        pose = self.transform.local_pose()
        return {
            "name": self.name,
            "pose": {
                "position": pose.lin.tolist(),
                "rotation": pose.ang.tolist(),
                "scale": pose.scale.tolist(),
            },
            "components": [comp.serialize() for comp in self._components],
        }

    @classmethod
    def deserialize(cls, data, context=None):
        pose_data = data.get("pose", {})
        ent = cls(
            pose=GeneralPose3(
                lin=np.array(pose_data.get("position", [0.0, 0.0, 0.0])),
                ang=np.array(pose_data.get("rotation", [0.0, 0.0, 0.0, 1.0])),
                scale=np.array(pose_data.get("scale", [1.0, 1.0, 1.0])),
            ),
            name=data.get("name", "entity"),
        )

        for c in data.get("components", []):
            comp_cls = COMPONENT_REGISTRY.get(c["type"])
            if comp_cls is None:
                raise ValueError(f"Unknown component type '{c['type']}'")
            ent.add_component(comp_cls.deserialize(c.get("data", {}), context))

        return ent

    def __repr__(self):
        return f"Entity({self.name!r})"
