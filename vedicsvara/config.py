#!/usr/bin/env python3
"""
VedicSvara - Engine Configuration

Thresholds, lexical tables and confidence weights for the prosody engine.
Defaults can be overlaid from a JSON file:

    {
        "distance_threshold_m": 12,
        "lexical_anudatta": {"indra": true},
        "meters": {"bṛhatī": 9},
        "confidence": {"per_context_signal": 0.08}
    }
"""

import json
import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Union

from .phonology import nfc, strip_pitch_marks

logger = logging.getLogger(__name__)


def normalize_token(token: str) -> str:
    """Lexicon key for a word: NFC, pitch marks removed, case-folded"""
    return strip_pitch_marks(nfc(token)).casefold()


DEFAULT_LEXICAL_ANUDATTA = (
    "deva", "devasya", "devatā", "brāhmaṇa", "brāhmaṇasya", "brahmaṇa",
    "देव", "देवस्य", "देवता", "ब्राह्मण", "ब्राह्मणस्य", "ब्रह्मण",
)

DEFAULT_SACRED_SYLLABLES = ("om", "oṃ", "oṁ", "ॐ", "o3m")

# Syllables per pāda
DEFAULT_METERS = {
    "gāyatrī": 8,
    "anuṣṭubh": 8,
    "triṣṭubh": 11,
    "jagatī": 12,
    "paṅkti": 8,
    "virāj": 10,
}

DEFAULT_DOMAIN_MARKERS = ("subrahmaṇya", "subrahmaṇyom", "skanda", "kumāra", "kārttikeya", "guha")


def freeze_lexicon(entries: Union[Mapping[str, bool], Iterable[str]]) -> Mapping[str, bool]:
    """Read-only lexicon keyed by normalize_token; accepts a mapping or a word list"""
    if isinstance(entries, Mapping):
        items = entries.items()
    else:
        items = ((entry, True) for entry in entries)
    return MappingProxyType({normalize_token(str(k)): bool(v) for k, v in items})


@dataclass(frozen=True)
class ConfidenceWeights:
    base: float = 0.5
    per_context_signal: float = 0.1
    max_context_bonus: float = 0.3
    per_accent_mark: float = 0.04
    max_mark_bonus: float = 0.16
    domain_marker_bonus: float = 0.04

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"confidence.{f.name} must be a number")
            if value < 0 or value > 1:
                raise ValueError(f"confidence.{f.name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class EngineConfig:
    """Immutable engine settings; share one instance freely"""
    distance_threshold_m: float = 10.0
    lexical_anudatta: Mapping[str, bool] = field(
        default_factory=lambda: freeze_lexicon(DEFAULT_LEXICAL_ANUDATTA))
    sacred_syllables: FrozenSet[str] = field(
        default_factory=lambda: frozenset(normalize_token(s) for s in DEFAULT_SACRED_SYLLABLES))
    limited_max_syllables: int = 2
    extended_min_syllables: int = 4
    meters: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_METERS)))
    domain_markers: FrozenSet[str] = field(
        default_factory=lambda: frozenset(normalize_token(s) for s in DEFAULT_DOMAIN_MARKERS))
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    def __post_init__(self):
        # Normalise whatever the caller passed so lookups are consistent
        object.__setattr__(self, "lexical_anudatta", freeze_lexicon(self.lexical_anudatta))
        object.__setattr__(self, "sacred_syllables",
                           frozenset(normalize_token(s) for s in self.sacred_syllables))
        object.__setattr__(self, "domain_markers",
                           frozenset(normalize_token(s) for s in self.domain_markers))
        object.__setattr__(self, "meters",
                           MappingProxyType({nfc(k).lower(): int(v) for k, v in self.meters.items()}))

        if isinstance(self.distance_threshold_m, bool) or \
                not isinstance(self.distance_threshold_m, (int, float)) or self.distance_threshold_m < 0:
            raise ValueError("distance_threshold_m must be a non-negative number")
        if self.limited_max_syllables < 1:
            raise ValueError("limited_max_syllables must be at least 1")
        if self.extended_min_syllables <= self.limited_max_syllables + 1:
            raise ValueError("extended_min_syllables must leave room for the moderate tier")
        if any(v <= 0 for v in self.meters.values()):
            raise ValueError("meter syllable counts must be positive")

    def is_lexically_anudatta(self, token: str) -> bool:
        return self.lexical_anudatta.get(normalize_token(token), False)

    def is_known_meter(self, name) -> bool:
        return bool(name) and nfc(str(name)).lower() in self.meters

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], base: "EngineConfig" = None) -> "EngineConfig":
        """
        Overlay a mapping on the defaults (or on `base`)

        `lexical_anudatta` and `meters` extend the base tables; every other
        key replaces the base value.

        Raises:
            ValueError: unknown keys or invalid values
        """
        if not isinstance(data, Mapping):
            raise ValueError("configuration must be a JSON object")
        base = base or cls()

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        changes: Dict[str, Any] = {}
        for key, value in data.items():
            if key == "lexical_anudatta":
                merged = dict(base.lexical_anudatta)
                merged.update(freeze_lexicon(value))
                changes[key] = merged
            elif key == "meters":
                if not isinstance(value, Mapping):
                    raise ValueError("meters must be an object of name -> syllables")
                merged_meters = dict(base.meters)
                merged_meters.update(value)
                changes[key] = merged_meters
            elif key == "confidence":
                if not isinstance(value, Mapping):
                    raise ValueError("confidence must be an object")
                try:
                    changes[key] = replace(base.confidence, **value)
                except TypeError as e:
                    raise ValueError(f"Invalid confidence weights: {e}") from e
            elif key in ("sacred_syllables", "domain_markers"):
                if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                    raise ValueError(f"{key} must be a list of strings")
                changes[key] = frozenset(value)
            else:
                changes[key] = value

        try:
            return replace(base, **changes)
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "EngineConfig":
        """Load a JSON overlay; a missing path yields the defaults"""
        if not path or not Path(path).exists():
            logger.warning("Config file %s not found, using defaults", path)
            return cls()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed configuration file {path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Cannot read configuration file {path}: {e}") from e

        logger.debug("Loaded configuration overlay from %s", path)
        return cls.from_dict(data)


DEFAULT_CONFIG = EngineConfig()
