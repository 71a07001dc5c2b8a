#!/usr/bin/env python3
"""
VedicSvara - Result Types

Value objects passed between the rule stages and returned to callers.
Every "mutation" returns a new object.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .phonology import Script


class ProsodyMode(Enum):
    MONOTONE_FORCED = "monotone-forced"
    MONOTONE_OPTIONAL = "monotone-optional"
    NATURAL_ACCENT = "natural-accent"
    MIXED_PROSODY = "mixed-prosody"
    UDAATTA_REPLACED = "udaatta-replaced"
    LEXICAL_ANUDATTA = "lexical-anudatta"
    LOCAL_MONOTONE = "local-monotone"

    @property
    def is_monotone(self) -> bool:
        return self.value.startswith("monotone")


def sutra_sort_key(sutra: str) -> Tuple[int, ...]:
    """'1.2.9' sorts before '1.2.33'"""
    return tuple(int(part) if part.isdigit() else 0 for part in sutra.split("."))


@dataclass(frozen=True)
class ProsodyOption:
    form: str
    mode: ProsodyMode
    sources: Tuple[str, ...] = ()
    span: Optional[Tuple[int, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"form": self.form, "mode": self.mode.value, "sources": list(self.sources)}
        if self.span is not None:
            data["span"] = list(self.span)
        return data


@dataclass(frozen=True)
class SuppressedOption:
    option: ProsodyOption
    by_rule: str

    def to_dict(self) -> Dict[str, Any]:
        return {**self.option.to_dict(), "suppressed_by": self.by_rule}


@dataclass(frozen=True)
class RuleDecision:
    """Outcome of one rule's applicability test"""
    applies: bool
    reason: str
    sutra: str
    blocked_by: Tuple[str, ...] = ()
    details: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def blocked(self) -> bool:
        return bool(self.blocked_by)


@dataclass(frozen=True)
class RuleApplication:
    applies: bool
    transformed: str


@dataclass(frozen=True)
class AggregateResult:
    """Every prosodic realisation the rules allow for one input"""
    input: str
    options: Tuple[ProsodyOption, ...] = ()
    primary_decision: str = "natural"
    applied_sutras: Tuple[str, ...] = ()
    reasoning: Tuple[str, ...] = ()
    confidence: float = 0.0
    is_valid: bool = True
    errors: Tuple[str, ...] = ()
    suppressed: Tuple[SuppressedOption, ...] = ()
    script: Script = Script.UNKNOWN
    domain_active: bool = False

    @classmethod
    def invalid(cls, text: str, error: str) -> "AggregateResult":
        return cls(
            input=text,
            primary_decision="invalid-input",
            confidence=0.0,
            is_valid=False,
            errors=(error,),
        )

    @property
    def modes(self) -> List[ProsodyMode]:
        return [option.mode for option in self.options]

    def options_with_mode(self, mode: ProsodyMode) -> List[ProsodyOption]:
        return [option for option in self.options if option.mode == mode]

    def with_option(self, option: ProsodyOption) -> "AggregateResult":
        """
        Add an option; an existing option with the same mode and form
        absorbs the new sources instead of being duplicated
        """
        options = list(self.options)
        for idx, existing in enumerate(options):
            if existing.mode == option.mode and existing.form == option.form:
                merged = existing.sources + tuple(s for s in option.sources if s not in existing.sources)
                options[idx] = replace(existing, sources=merged)
                break
        else:
            options.append(option)
        return replace(self, options=tuple(options)).with_sutras(option.sources)

    def without_modes(self, prefix: str, by_rule: str) -> "AggregateResult":
        """Drop options whose mode tag starts with prefix, keeping provenance"""
        kept, dropped = [], []
        for option in self.options:
            (dropped if option.mode.value.startswith(prefix) else kept).append(option)
        if not dropped:
            return self
        return replace(
            self,
            options=tuple(kept),
            suppressed=self.suppressed + tuple(SuppressedOption(o, by_rule) for o in dropped),
        )

    def with_reasoning(self, *lines: str) -> "AggregateResult":
        return replace(self, reasoning=self.reasoning + tuple(lines))

    def with_sutras(self, sutras) -> "AggregateResult":
        merged = set(self.applied_sutras) | set(sutras)
        return replace(self, applied_sutras=tuple(sorted(merged, key=sutra_sort_key)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": self.input,
            "is_valid": self.is_valid,
            "primary_decision": self.primary_decision,
            "options": [option.to_dict() for option in self.options],
            "applied_sutras": list(self.applied_sutras),
            "reasoning": list(self.reasoning),
            "confidence": self.confidence,
            "errors": list(self.errors),
            "suppressed": [s.to_dict() for s in self.suppressed],
            "script": self.script.value,
            "domain_active": self.domain_active,
        }
