"""Ray emitters and their serialization registry."""

from typing import Any

from raysketch.emitters.base import Emitter, RayTraceStyle
from raysketch.emitters.circular import CircleEmitter
from raysketch.emitters.directional import DirectionalEmitter
from raysketch.emitters.linear import LinearEmitter

EMITTER_TYPES: dict[str, type[Emitter]] = {
    CircleEmitter.kind: CircleEmitter,
    DirectionalEmitter.kind: DirectionalEmitter,
    LinearEmitter.kind: LinearEmitter,
}


def emitter_from_dict(data: dict[str, Any]) -> Emitter:
    """Rebuild an emitter from ``Emitter.to_dict`` output.

    Raises:
        ValueError: If the emitter type is unknown.
    """
    kind = str(data.get("type", "")).lower()
    if kind not in EMITTER_TYPES:
        raise ValueError(f"Unknown emitter type: {kind}")
    return EMITTER_TYPES[kind].from_dict(data)  # type: ignore[attr-defined]


__all__ = [
    "CircleEmitter",
    "DirectionalEmitter",
    "EMITTER_TYPES",
    "Emitter",
    "LinearEmitter",
    "RayTraceStyle",
    "emitter_from_dict",
]
