"""Simple scene graph storing entities and driving per-frame updates."""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from mousefx import log
from mousefx.core.component import Component
from mousefx.core.entity import Entity
from mousefx.core.input import InputSource, ManualInputSource

if TYPE_CHECKING:  # pragma: no cover
    from mousefx.core.camera import CameraComponent


def is_overrides_method(obj, method_name, base_class):
    return getattr(obj.__class__, method_name) is not getattr(base_class, method_name)


class Scene:
    """
    Контейнер сущностей.

    Хост вызывает update(dt) раз в кадр. Компоненты стартуют лениво, перед
    первым update после добавления, поэтому к моменту start() все сущности,
    добавленные при настройке сцены, уже на месте.
    """

    def __init__(self, input_source: Optional[InputSource] = None):
        self.entities: List[Entity] = []
        self.input: InputSource = input_source if input_source is not None else ManualInputSource()
        self.update_list: List[Component] = []
        self.cameras: List["CameraComponent"] = []
        self._pending_start: List[Component] = []

    def add(self, entity: Entity) -> Entity:
        """Add entity to the scene, including all its children."""
        self.entities.append(entity)
        entity.on_added(self)
        for child_trans in entity.transform.children:
            child = child_trans.entity
            if child is None or child.scene is self:
                continue
            self.add(child)
        return entity

    def remove(self, entity: Entity):
        self.entities.remove(entity)
        entity.on_removed()

    def register_component(self, component: Component):
        from mousefx.core.camera import CameraComponent

        if isinstance(component, CameraComponent):
            self.cameras.append(component)

        if is_overrides_method(component, "update", Component):
            self.update_list.append(component)

        if not component._started:
            self._pending_start.append(component)

    def unregister_component(self, component: Component):
        if component in self.cameras:
            self.cameras.remove(component)
        if component in self.update_list:
            self.update_list.remove(component)
        if component in self._pending_start:
            self._pending_start.remove(component)

    @property
    def pending_start_count(self) -> int:
        return len(self._pending_start)

    def main_camera(self) -> Optional["CameraComponent"]:
        """Camera flagged as main, otherwise the first registered one."""
        for camera in self.cameras:
            if camera.is_main:
                return camera
        return self.cameras[0] if self.cameras else None

    def start_pending(self):
        pending, self._pending_start = self._pending_start, []
        for component in pending:
            component._started = True
            try:
                component.start()
            except Exception as e:
                log.error(e, f"[Scene] {component.type_name()}.start() failed")
                component.enabled = False

    def update(self, dt: float):
        self.start_pending()
        for component in list(self.update_list):
            entity = component.entity
            if not component.enabled or (entity is not None and not entity.active):
                continue
            component.update(dt)
