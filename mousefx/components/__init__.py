from mousefx.components.mouse_emitter import (
    EmitterError,
    MouseEmitterConfig,
    MousePlaneSample,
    PlaneMode,
    VfxMouseEmitterComponent,
    make_plane,
    sample_mouse_point,
)

__all__ = [
    "EmitterError",
    "MouseEmitterConfig",
    "MousePlaneSample",
    "PlaneMode",
    "VfxMouseEmitterComponent",
    "make_plane",
    "sample_mouse_point",
]
