"""Settings/control binding layer.

Every tunable parameter is declared once as a :class:`ParameterSpec`
(label, panel folder, numeric range or enum domain) and bound to a
callback that pushes the value into the scene.  :class:`ControlBindings`
owns the canonical :class:`~prismatic.model.PrismSettings` record; all
writers (panel widgets, pointer drags, the auto-rotate tick) go through
it, and display listeners are told which names changed so that no
widget shows a stale value.

Ranged numeric parameters are clamped on write, except the three
orientation angles: those accumulate freely under drag and auto-rotate
and only the widget indicator is limited to ``[-pi, pi]``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, fields
from typing import Any, Literal

from prismatic.model import MATERIAL_RANGES, PrismSettings, ShapeKind
from prismatic.model._util import _clamp
from prismatic.scene import PrismScene

logger = logging.getLogger(__name__)

ValueType = Literal["float", "bool", "enum"]

Callback = Callable[[Any], None]
Listener = Callable[[frozenset[str]], None]

FOLDERS: tuple[str, ...] = (
    "Shape", "Rotation", "Glass Properties", "Lighting", "Atmosphere",
)
"""Panel folders in display order."""

ORIENTATION_PARAMETERS: tuple[str, ...] = ("rotate_x", "rotate_y", "rotate_z")

_SETTINGS_FIELDS = frozenset(f.name for f in fields(PrismSettings))


@dataclass(frozen=True)
class RangeHint:
    """Closed numeric range of a parameter.

    Attributes:
        min_value: Lower bound.
        max_value: Upper bound.
        step: Optional widget step size.
    """

    min_value: float
    max_value: float
    step: float | None = None

    def __post_init__(self) -> None:
        if not self.min_value < self.max_value:
            raise ValueError(
                f"min_value must be below max_value, got "
                f"[{self.min_value}, {self.max_value}]"
            )


@dataclass(frozen=True)
class ParameterSpec:
    """Declaration of one tunable parameter.

    Attributes:
        name: Field name in :class:`~prismatic.model.PrismSettings`.
        label: Human-readable widget label.
        folder: Panel folder the widget belongs to.
        value_type: ``"float"``, ``"bool"`` or ``"enum"``.
        range_hint: Numeric range; required for ``"float"``.
        choices: Allowed values; required for ``"enum"``.
        clamp: Whether writes are clamped into *range_hint*.
    """

    name: str
    label: str
    folder: str
    value_type: ValueType
    range_hint: RangeHint | None = None
    choices: tuple[str, ...] | None = None
    clamp: bool = True

    def __post_init__(self) -> None:
        if self.value_type == "float" and self.range_hint is None:
            raise ValueError(f"float parameter {self.name!r} needs a range_hint")
        if self.value_type == "enum" and not self.choices:
            raise ValueError(f"enum parameter {self.name!r} needs choices")
        if self.value_type not in ("float", "bool", "enum"):
            raise ValueError(
                f"value_type must be 'float', 'bool' or 'enum', "
                f"got {self.value_type!r}"
            )

    def coerce(self, value: Any) -> Any:
        """Convert *value* to this parameter's type, clamping if ranged.

        Raises:
            ValueError: If a float is not finite or an enum value is not
                one of the choices.
        """
        if self.value_type == "bool":
            return bool(value)
        if self.value_type == "enum":
            if str(value) not in self.choices:
                raise ValueError(
                    f"{self.name} must be one of {list(self.choices)}, "
                    f"got {value!r}"
                )
            return str(value)
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"{self.name} must be finite, got {value}")
        if self.clamp:
            stored = _clamp(
                value, self.range_hint.min_value, self.range_hint.max_value,
            )
            if stored != value:
                logger.debug("Clamped %s from %s to %s", self.name, value, stored)
            return stored
        return value


def default_specs() -> list[ParameterSpec]:
    """Declarations of every panel parameter, in panel order."""
    angle = RangeHint(-math.pi, math.pi)
    specs = [
        ParameterSpec(
            "shape", "Type", "Shape", "enum",
            choices=tuple(str(k) for k in ShapeKind),
        ),
        ParameterSpec("bipyramid_gap", "Bi-Pyramid Gap", "Shape", "float", RangeHint(0.0, 1.0)),
        ParameterSpec("rotate_x", "Rotate X", "Rotation", "float", angle, clamp=False),
        ParameterSpec("rotate_y", "Rotate Y", "Rotation", "float", angle, clamp=False),
        ParameterSpec("rotate_z", "Rotate Z", "Rotation", "float", angle, clamp=False),
        ParameterSpec("auto_rotate", "Auto Rotate", "Rotation", "bool"),
        ParameterSpec("auto_rotate_speed", "Rotate Speed", "Rotation", "float", RangeHint(0.1, 2.0)),
    ]
    material_labels = {
        "transmission": "Transmission",
        "ior": "IOR",
        "dispersion": "Dispersion",
        "thickness": "Thickness",
        "roughness": "Roughness",
    }
    for name, label in material_labels.items():
        lo, hi = MATERIAL_RANGES[name]
        specs.append(ParameterSpec(name, label, "Glass Properties", "float", RangeHint(lo, hi)))
    specs += [
        ParameterSpec("show_beam", "Show Light Beam", "Lighting", "bool"),
        ParameterSpec("beam_opacity", "Beam Opacity", "Lighting", "float", RangeHint(0.0, 0.5)),
        ParameterSpec("light_intensity", "Light Intensity", "Lighting", "float", RangeHint(0.0, 500.0)),
        ParameterSpec("fog_density", "Fog Density", "Atmosphere", "float", RangeHint(0.0, 0.08)),
        ParameterSpec("particles_visible", "Dust Particles", "Atmosphere", "bool"),
    ]
    return specs


class ControlBindings:
    """Canonical settings record with per-parameter update callbacks.

    Args:
        settings: The record to own.  Defaults to a fresh
            :class:`~prismatic.model.PrismSettings`.
    """

    def __init__(self, settings: PrismSettings | None = None) -> None:
        self.settings = settings if settings is not None else PrismSettings()
        self._specs: dict[str, ParameterSpec] = {}
        self._callbacks: dict[str, Callback | None] = {}
        self._listeners: list[Listener] = []

    # ---- Registration / queries ----

    def register(self, spec: ParameterSpec, callback: Callback | None = None) -> None:
        """Declare *spec* and bind *callback* to its changes.

        The callback receives the stored (coerced) value after the
        settings record has been updated.  Re-registering a name
        replaces its spec and callback.

        Raises:
            ValueError: If *spec* names no settings field.
        """
        if spec.name not in _SETTINGS_FIELDS:
            raise ValueError(f"no settings field named {spec.name!r}")
        self._specs[spec.name] = spec
        self._callbacks[spec.name] = callback

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def spec(self, name: str) -> ParameterSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise ValueError(f"unknown parameter {name!r}") from None

    def specs(self) -> list[ParameterSpec]:
        return list(self._specs.values())

    def folders(self) -> dict[str, list[ParameterSpec]]:
        """Registered specs grouped by folder, in panel order.

        Known folders come first in :data:`FOLDERS` order; any others
        follow in order of first registration.
        """
        grouped: dict[str, list[ParameterSpec]] = {f: [] for f in FOLDERS}
        for spec in self._specs.values():
            grouped.setdefault(spec.folder, []).append(spec)
        return {f: specs for f, specs in grouped.items() if specs}

    def get(self, name: str) -> Any:
        self.spec(name)
        return getattr(self.settings, name)

    # ---- Writes ----

    def set(self, name: str, value: Any) -> Any:
        """Write one parameter, run its callback and refresh displays.

        Returns:
            The value actually stored.
        """
        stored = self._write(name, value)
        self._notify(frozenset({name}))
        return stored

    def update(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Write several parameters with a single display refresh.

        Returns:
            Mapping of each name to the value actually stored.
        """
        stored = {name: self._write(name, value) for name, value in values.items()}
        if stored:
            self._notify(frozenset(stored))
        return stored

    def apply_all(self) -> None:
        """Push every registered value through its callback.

        Used at startup and after replacing the settings record so the
        scene matches the record.
        """
        for name in self._specs:
            self._write(name, getattr(self.settings, name))
        self._notify(frozenset(self._specs))

    def _write(self, name: str, value: Any) -> Any:
        spec = self.spec(name)
        stored = spec.coerce(value)
        if name == "shape":
            stored = ShapeKind(stored)
        setattr(self.settings, name, stored)
        callback = self._callbacks[name]
        if callback is not None:
            callback(stored)
        logger.debug("%s = %r", name, stored)
        return stored

    # ---- Display listeners ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the changed names after every write.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, names: Iterable[str]) -> None:
        names = frozenset(names)
        for listener in list(self._listeners):
            listener(names)


def bind_scene(bindings: ControlBindings, scene: PrismScene) -> None:
    """Register every default parameter with a callback into *scene*."""
    settings = bindings.settings

    def _orientation(_value: float) -> None:
        scene.set_orientation(*settings.orientation)

    def _material(name: str) -> Callback:
        return lambda value: scene.material.set(name, value)

    callbacks: dict[str, Callback | None] = {
        "shape": scene.set_active_shape,
        "bipyramid_gap": scene.update_bipyramid_gap,
        "rotate_x": _orientation,
        "rotate_y": _orientation,
        "rotate_z": _orientation,
        # Read by the interaction controller on every tick.
        "auto_rotate": None,
        "auto_rotate_speed": None,
        "show_beam": scene.set_beam_visible,
        "beam_opacity": scene.set_beam_opacity,
        "light_intensity": scene.set_light_intensity,
        "fog_density": scene.set_fog_density,
        "particles_visible": scene.set_particles_visible,
    }
    for name in MATERIAL_RANGES:
        callbacks[name] = _material(name)

    for spec in default_specs():
        bindings.register(spec, callbacks[spec.name])


def default_bindings(
    scene: PrismScene, settings: PrismSettings | None = None,
) -> ControlBindings:
    """Bindings for every default parameter, already applied to *scene*."""
    bindings = ControlBindings(settings)
    bind_scene(bindings, scene)
    bindings.apply_all()
    return bindings
