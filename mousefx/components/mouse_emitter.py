"""VfxMouseEmitterComponent — отправляет в эффект точку под курсором и флаг эмиссии.

Every frame the cursor ray is intersected with a plane; the hit point goes
to the effect's vector property and the held state of a mouse button to its
float property. Two plane modes exist so that a camera looking almost along
the world plane can switch to a plane that always faces it.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from mousefx import log
from mousefx.geombase import Plane3
from mousefx.editor.inspect_field import InspectField
from mousefx.core.camera import CameraComponent
from mousefx.core.component import Component
from mousefx.core.effect import EffectTarget, VisualEffectComponent
from mousefx.core.input import InputSource, InputState

WORLD_UP = np.array([0.0, 1.0, 0.0])
ORIGIN = np.zeros(3)

MIN_CAMERA_PLANE_DISTANCE = 0.01


class PlaneMode(enum.Enum):
    WORLD_PLANE = "world_plane"          # plane y = plane_y
    VIEWPOINT_PLANE = "viewpoint_plane"  # plane facing the camera at a fixed distance


def _plane_mode(value) -> PlaneMode:
    """Enum member, its value ("world_plane") or its name ("WORLD_PLANE")."""
    if isinstance(value, str) and value in PlaneMode.__members__:
        return PlaneMode[value]
    return PlaneMode(value)


class EmitterError(enum.Enum):
    MISSING_EFFECT_TARGET = "missing_effect_target"
    MISSING_VIEWPOINT = "missing_viewpoint"


@dataclass(frozen=True)
class MouseEmitterConfig:
    """Immutable emitter settings. Use dataclasses.replace() to derive new ones."""

    emit_property_name: str = "Emit"
    vector_property_name: str = "MouseWorld"
    mouse_button: int = 0
    plane_mode: PlaneMode = PlaneMode.WORLD_PLANE
    plane_y: float = 0.0
    camera_plane_distance: float = 5.0
    send_local_space: bool = True
    enable_diagnostics: bool = True
    diagnostics_interval: float = 0.5

    def __post_init__(self):
        for name in (self.emit_property_name, self.vector_property_name):
            if not isinstance(name, str) or not name:
                raise ValueError(f"Property names must be non-empty strings, got {name!r}")
        if isinstance(self.mouse_button, bool) or int(self.mouse_button) != self.mouse_button:
            raise ValueError(f"mouse_button must be an integer, got {self.mouse_button!r}")
        if int(self.mouse_button) < 0:
            raise ValueError(f"mouse_button must be >= 0, got {self.mouse_button}")
        if float(self.diagnostics_interval) <= 0.0:
            raise ValueError(f"diagnostics_interval must be > 0, got {self.diagnostics_interval}")

        object.__setattr__(self, "plane_mode", _plane_mode(self.plane_mode))
        object.__setattr__(self, "mouse_button", int(self.mouse_button))
        object.__setattr__(self, "plane_y", float(self.plane_y))
        object.__setattr__(self, "diagnostics_interval", float(self.diagnostics_interval))
        object.__setattr__(self, "send_local_space", bool(self.send_local_space))
        object.__setattr__(self, "enable_diagnostics", bool(self.enable_diagnostics))

        distance = float(self.camera_plane_distance)
        if not distance >= MIN_CAMERA_PLANE_DISTANCE:
            log.warn(
                f"[MouseEmitterConfig] camera_plane_distance={distance} clamped to {MIN_CAMERA_PLANE_DISTANCE}"
            )
            distance = MIN_CAMERA_PLANE_DISTANCE
        object.__setattr__(self, "camera_plane_distance", distance)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["plane_mode"] = self.plane_mode.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MouseEmitterConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json_file(cls, path) -> "MouseEmitterConfig":
        with open(Path(path), "r", encoding="utf8") as f:
            return cls.from_dict(json.load(f))


@dataclass(frozen=True)
class MousePlaneSample:
    """Result of one frame."""
    ok: bool
    enter: float
    world_point: np.ndarray
    sent_point: np.ndarray
    emit: float = 0.0


def make_plane(config: MouseEmitterConfig, camera: CameraComponent) -> Plane3:
    """Plane for the current frame; rebuilt from the camera pose every call."""
    if config.plane_mode is PlaneMode.WORLD_PLANE:
        return Plane3(WORLD_UP, np.array([0.0, config.plane_y, 0.0]))

    forward = camera.forward()
    return Plane3(forward, camera.position() + forward * config.camera_plane_distance)


def sample_mouse_point(
    config: MouseEmitterConfig,
    camera: CameraComponent,
    target: EffectTarget,
    state: InputState,
) -> MousePlaneSample:
    """Intersect the cursor ray with the configured plane.

    On a miss (parallel ray or plane behind the camera) the point falls back
    to the origin of the space that is sent.
    """
    ray = camera.screen_point_to_ray(state.x, state.y, state.viewport_rect)
    plane = make_plane(config, camera)
    ok, enter = plane.raycast(ray)

    if ok:
        world_point = ray.point_at(enter)
        if config.send_local_space:
            sent_point = target.world_pose().inverse_transform_point(world_point)
        else:
            sent_point = world_point.copy()
    else:
        world_point = ORIGIN.copy()
        sent_point = ORIGIN.copy()

    emit = 1.0 if state.is_held(config.mouse_button) else 0.0
    return MousePlaneSample(ok=ok, enter=enter, world_point=world_point, sent_point=sent_point, emit=emit)


def _config_field(name: str, label: str, kind: str, **meta) -> InspectField:
    return InspectField(
        label=label,
        kind=kind,
        getter=lambda obj: getattr(obj.config, name),
        setter=lambda obj, value: obj.configure(replace(obj.config, **{name: value})),
        **meta,
    )


def _fmt(v: np.ndarray) -> str:
    return f"({v[0]:.2f},{v[1]:.2f},{v[2]:.2f})"


class VfxMouseEmitterComponent(Component):
    """
    Компонент: мышь → точка на плоскости → свойства эффекта.

    References left as None are resolved in start(): the effect from the
    same entity, the camera from Scene.main_camera(), the input from
    Scene.input. A missing effect or camera disables the component.
    """

    inspect_fields = {
        "emit_property_name": _config_field("emit_property_name", "Emit property", "string"),
        "vector_property_name": _config_field("vector_property_name", "Vector property", "string"),
        "mouse_button": _config_field("mouse_button", "Mouse button", "int", min=0, step=1),
        "plane_mode": _config_field(
            "plane_mode", "Plane mode", "enum",
            choices=[(PlaneMode.WORLD_PLANE.value, "World Y plane"),
                     (PlaneMode.VIEWPOINT_PLANE.value, "Camera plane")],
        ),
        "plane_y": _config_field("plane_y", "Plane Y", "float", step=0.1),
        "camera_plane_distance": _config_field(
            "camera_plane_distance", "Camera plane distance", "float",
            min=MIN_CAMERA_PLANE_DISTANCE, step=0.1,
        ),
        "send_local_space": _config_field("send_local_space", "Send as local", "bool"),
        "enable_diagnostics": _config_field("enable_diagnostics", "Log diagnostics", "bool"),
        "diagnostics_interval": _config_field("diagnostics_interval", "Log interval (s)", "float", min=0.01),
    }

    def __init__(
        self,
        effect: Optional[EffectTarget] = None,
        camera: Optional[CameraComponent] = None,
        input_source: Optional[InputSource] = None,
        config: Optional[MouseEmitterConfig] = None,
    ):
        super().__init__(enabled=True)
        self.effect = effect
        self.camera = camera
        self.input_source = input_source
        self._config = config if config is not None else MouseEmitterConfig()
        self.errors: List[EmitterError] = []
        self.last_sample: Optional[MousePlaneSample] = None
        self._log_timer = 0.0

    @property
    def config(self) -> MouseEmitterConfig:
        return self._config

    def configure(self, config: MouseEmitterConfig) -> None:
        """Replace the whole configuration; takes effect from the next frame."""
        if not isinstance(config, MouseEmitterConfig):
            raise TypeError("configure() expects a MouseEmitterConfig")
        self._config = config

    # --- Lifecycle ---

    def start(self) -> None:
        if self.effect is None and self.entity is not None:
            self.effect = self.entity.get_component(VisualEffectComponent)
        if self.camera is None and self.scene is not None:
            self.camera = self.scene.main_camera()
        if self.input_source is None and self.scene is not None:
            self.input_source = self.scene.input

        log.info(
            f"[VfxMouseEmitter] start effect={_describe(self.effect)} camera={_describe(self.camera)}"
        )

        self.errors = _check_references(self.effect, self.camera)
        if EmitterError.MISSING_EFFECT_TARGET in self.errors:
            log.error("[VfxMouseEmitter] Effect target missing. Add a VisualEffectComponent or assign 'effect'.")
        if EmitterError.MISSING_VIEWPOINT in self.errors:
            log.error("[VfxMouseEmitter] Camera missing. Assign 'camera' or mark a scene camera as main.")
        if self.errors:
            self.enabled = False

    def update(self, dt: float) -> None:
        if self.effect is None or self.camera is None or self.input_source is None:
            return

        cfg = self._config
        sample = sample_mouse_point(cfg, self.camera, self.effect, self.input_source.poll())

        self.effect.set_float(cfg.emit_property_name, sample.emit)
        self.effect.set_vector3(cfg.vector_property_name, sample.sent_point)
        self.last_sample = sample

        if cfg.enable_diagnostics:
            self._log_timer += dt
            if self._log_timer > cfg.diagnostics_interval:
                self._log_timer = 0.0
                log.info(
                    f"[VfxMouseEmitter] ok={sample.ok} enter={sample.enter:.2f} "
                    f"world={_fmt(sample.world_point)} sent={_fmt(sample.sent_point)} "
                    f"planeMode={cfg.plane_mode.name} local={cfg.send_local_space}"
                )


def _check_references(effect, camera) -> List[EmitterError]:
    errors = []
    if effect is None:
        errors.append(EmitterError.MISSING_EFFECT_TARGET)
    if camera is None:
        errors.append(EmitterError.MISSING_VIEWPOINT)
    return errors


def _describe(obj) -> str:
    if obj is None:
        return "NULL"
    entity = getattr(obj, "entity", None)
    return entity.name if entity is not None else type(obj).__name__
