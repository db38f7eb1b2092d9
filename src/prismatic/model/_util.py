"""Shared serialisation helpers for model dataclasses."""

from __future__ import annotations

import dataclasses

_field_defaults_cache: dict[tuple[type, frozenset[str]], dict] = {}


def _field_defaults(cls: type, *, exclude: frozenset[str] = frozenset()) -> dict:
    """Return ``{field_name: default}`` for the init fields of a dataclass.

    Fields declared with ``init=False`` or a ``default_factory`` are
    skipped, as are names in *exclude*.  ``to_dict()`` methods use the
    result to write only the fields that differ from their defaults.
    Results are cached per ``(cls, exclude)`` pair.
    """
    key = (cls, exclude)
    if key not in _field_defaults_cache:
        _field_defaults_cache[key] = {
            f.name: f.default
            for f in dataclasses.fields(cls)
            if f.init
            and f.default is not dataclasses.MISSING
            and f.name not in exclude
        }
    return _field_defaults_cache[key]


def _clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* into the closed interval ``[lo, hi]``."""
    return min(hi, max(lo, value))
