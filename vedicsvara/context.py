#!/usr/bin/env python3
"""
VedicSvara - Recitation Context

The discourse facts the ekaśruti rules consult: grammatical case and
distance of address, ritual setting, metrical verse, the Subrahmaṇyā hymn.
Built once per call from a plain mapping and never mutated.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .phonology import nfc


VOCATIVE_CASES = frozenset({"vocative", "sambuddhi", "saṃbuddhi", "sambodhana"})
FAR = "far"

# Accepted input key -> ProsodyContext field
KEY_ALIASES: Dict[str, str] = {
    "case": "grammatical_case",
    "grammaticalCase": "grammatical_case",
    "grammatical_case": "grammatical_case",
    "vibhakti": "grammatical_case",

    "distance": "distance_category",
    "distanceCategory": "distance_category",
    "distance_category": "distance_category",
    "distanceMeters": "distance_meters",
    "distance_meters": "distance_meters",
    "distanceThreshold": "distance_threshold",
    "distance_threshold": "distance_threshold",

    "ritual": "ritual",
    "yajna": "ritual",
    "yajnakarman": "ritual",
    "yajñakarman": "ritual",
    "japa": "japa",
    "sama": "sama",
    "sāma": "sama",
    "saman": "sama",
    "sāman": "sama",
    "compoundInitialStressed": "compound_initial_stressed",
    "compound_initial_stressed": "compound_initial_stressed",
    "compound_initial": "compound_initial_stressed",

    "chandas": "chandas",
    "metrical": "chandas",
    "vibhasha_chandas": "chandas",
    "meter": "meter",
    "metre": "meter",
    "meterName": "meter",
    "vedic_meter": "meter",

    "subrahmanya": "subrahmanya",
    "subrahmaṇyā": "subrahmanya",
    "subrahmaṇya": "subrahmanya",
    "subrahma": "subrahmanya",
    "skanda": "subrahmanya",
    "karttikeya": "subrahmanya",
}

_NORMALISED_ALIASES = {nfc(key): target for key, target in KEY_ALIASES.items()}

_BOOLEAN_FIELDS = ("ritual", "japa", "sama", "compound_initial_stressed", "chandas", "subrahmanya")


@dataclass(frozen=True)
class ProsodyContext:
    grammatical_case: Optional[str] = None
    distance_category: Optional[str] = None
    distance_meters: Optional[float] = None
    distance_threshold: Optional[float] = None
    ritual: bool = False
    japa: bool = False
    sama: bool = False
    compound_initial_stressed: bool = False
    chandas: bool = False
    meter: Optional[str] = None
    subrahmanya: bool = False
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProsodyContext":
        """
        Build a context from a plain mapping

        Keys are matched after NFC normalisation against the known aliases;
        anything unrecognised is kept under `extra`. Flags accept any truthy
        value.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"context must be a mapping, got {type(data).__name__}")

        values: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in data.items():
            target = _NORMALISED_ALIASES.get(nfc(str(key)))
            if target is None:
                extra[key] = value
            elif target in _BOOLEAN_FIELDS:
                # Several aliases may feed one flag; any truthy one sets it
                values[target] = bool(values.get(target)) or bool(value)
            elif value is not None:
                values[target] = value

        for name in ("grammatical_case", "distance_category", "meter"):
            if name in values:
                values[name] = nfc(str(values[name])).strip().lower()
        for name in ("distance_meters", "distance_threshold"):
            if name in values:
                values[name] = _as_float(name, values[name])

        return cls(extra=MappingProxyType(extra), **values)

    @classmethod
    def coerce(cls, value: Union["ProsodyContext", Mapping[str, Any], None]) -> "ProsodyContext":
        if value is None:
            return cls()
        if isinstance(value, ProsodyContext):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise TypeError(f"context must be a mapping or ProsodyContext, got {type(value).__name__}")

    @property
    def is_vocative(self) -> bool:
        return self.grammatical_case in VOCATIVE_CASES

    def is_far(self, default_threshold: float = 10.0) -> bool:
        """Far when categorised so, or at or beyond the distance threshold"""
        if self.distance_category == FAR:
            return True
        if self.distance_meters is None:
            return False
        threshold = self.distance_threshold if self.distance_threshold is not None else default_threshold
        return self.distance_meters >= threshold

    @property
    def has_distance(self) -> bool:
        return self.distance_category is not None or self.distance_meters is not None

    @property
    def is_metrical(self) -> bool:
        return self.chandas or bool(self.meter)


def _as_float(name: str, value: Any) -> Optional[float]:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be a number, got {value!r}") from None
