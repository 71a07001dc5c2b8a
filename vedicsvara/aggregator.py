#!/usr/bin/env python3
"""
VedicSvara - Main Prosody Aggregator

Execution Order:
1. Validate: reject non-text, mark empty text invalid
2. Distant address: 1.2.33 ekaśruti for far vocatives
3. Ritual: 1.2.34 ekaśruti unless japa / sāma / sacred syllable ...
4. Verse: 1.2.36 optional ekaśruti in chandas
5. Domain: 1.2.37 + 1.2.38 in the Subrahmaṇyā hymn, else 1.2.39 local
   assimilation
6. Decide: primary decision tag and confidence

Each stage is an (AggregateResult, ProsodyContext) -> AggregateResult
transform; new rules are added by appending a stage.
"""

import logging
import numpy as np
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Sequence, Union

from .accent_classifier import AccentClassifier
from .assimilation import LocalAssimilationDetector
from .config import DEFAULT_CONFIG, EngineConfig, normalize_token
from .context import ProsodyContext
from .domain_override import SubrahmanyaOverride
from .ekashruti import (
    ChandasEkashrutiEvaluator,
    EkashrutiEvaluator,
    RitualEkashrutiEvaluator,
)
from .models import AggregateResult, ProsodyMode
from .phonology import PITCH_MARKS, detect_script, nfc, nfd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateOptions:
    """Per-call switches for aggregate()"""
    # Treat the input as Subrahmaṇyā hymn text without a context flag
    assume_domain: bool = False

    @classmethod
    def coerce(cls, value: Union["AggregateOptions", Mapping, None]) -> "AggregateOptions":
        if value is None:
            return cls()
        if isinstance(value, AggregateOptions):
            return value
        if isinstance(value, Mapping):
            return cls(assume_domain=bool(value.get("assume_domain", value.get("assumeDomain", False))))
        raise TypeError(f"options must be a mapping or AggregateOptions, got {type(value).__name__}")


class ProsodyStage:
    """One step of the pipeline"""

    name = "stage"

    def __call__(self, result: AggregateResult, context: ProsodyContext) -> AggregateResult:
        raise NotImplementedError


class EvaluatorStage(ProsodyStage):
    """Runs one ekaśruti evaluator and merges its options"""

    def __init__(self, evaluator: EkashrutiEvaluator):
        self.evaluator = evaluator
        self.name = evaluator.SUTRA

    def __call__(self, result: AggregateResult, context: ProsodyContext) -> AggregateResult:
        decision = self.evaluator.evaluate(result.input, context)
        logger.debug("%s: applies=%s (%s)", decision.sutra, decision.applies, decision.reason)

        if not decision.applies and not decision.blocked:
            return result

        for option in self.evaluator.options(result.input, context):
            result = result.with_option(option)
        # A blocking decision is provenance too
        return result.with_sutras([decision.sutra]).with_reasoning(f"{decision.sutra}: {decision.reason}")


class DomainStage(ProsodyStage):
    """Subrahmaṇyā override or, outside the domain, local assimilation"""

    name = "domain"

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 classifier: Optional[AccentClassifier] = None,
                 lexicon: Optional[Mapping[str, bool]] = None):
        self.config = config or DEFAULT_CONFIG
        self.override = SubrahmanyaOverride(self.config, classifier)
        self.detector = LocalAssimilationDetector(classifier)
        self.lexicon = lexicon

    def __call__(self, result: AggregateResult, context: ProsodyContext) -> AggregateResult:
        if self.override.is_active(context):
            return self.override.integrate(result, context, self.lexicon)
        return self.detector.integrate(result)


def integrate_domain(result: AggregateResult,
                     context=None,
                     config: Optional[EngineConfig] = None,
                     lexicon: Optional[Mapping[str, bool]] = None) -> AggregateResult:
    """
    Post-process result for the Subrahmaṇyā domain

    Runs the domain override when the context marks the domain and local
    assimilation otherwise; never both.
    """
    return DomainStage(config, lexicon=lexicon)(result, ProsodyContext.coerce(context))


class ProsodyEngine:
    """
    Main orchestrator for accent prosody resolution
    """

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 stages: Optional[Sequence[ProsodyStage]] = None):
        """
        Initialize engine

        Args:
            config: Engine configuration (defaults if not provided)
            stages: Replacement stage list (default: 1.2.33, 1.2.34, 1.2.36, domain)
        """
        self.config = config or DEFAULT_CONFIG
        self.classifier = AccentClassifier()

        if stages is None:
            stages = [
                EvaluatorStage(EkashrutiEvaluator(self.config, self.classifier)),
                EvaluatorStage(RitualEkashrutiEvaluator(self.config, self.classifier)),
                EvaluatorStage(ChandasEkashrutiEvaluator(self.config, self.classifier)),
                DomainStage(self.config, self.classifier),
            ]
        self.stages: List[ProsodyStage] = list(stages)

    def aggregate(self, text: str, context=None, options=None) -> AggregateResult:
        """
        Resolve every prosodic realisation of text under context

        Args:
            text: IAST or Devanagari text, accented or not
            context: ProsodyContext or plain mapping of discourse facts
            options: AggregateOptions or mapping ({"assume_domain": True})

        Returns:
            AggregateResult; invalid (confidence 0) for empty text
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        ctx = ProsodyContext.coerce(context)
        opts = AggregateOptions.coerce(options)

        if not text.strip():
            return AggregateResult.invalid(text, "Empty input text")

        text = nfc(text)
        stage_ctx = replace(ctx, subrahmanya=True) if opts.assume_domain else ctx

        result = AggregateResult(input=text, script=detect_script(text))
        for stage in self.stages:
            result = stage(result, stage_ctx)

        return replace(
            result,
            primary_decision=self.primary_decision(result),
            confidence=self.confidence(text, ctx),
        )

    @staticmethod
    def primary_decision(result: AggregateResult) -> str:
        if result.domain_active:
            return "accented"
        if len(result.options) > 1:
            return "options"
        if not result.options:
            return "natural"

        mode = result.options[0].mode
        if mode.is_monotone:
            return "monotone"
        if mode == ProsodyMode.NATURAL_ACCENT:
            return "natural"
        return mode.value

    def context_signals(self, context: ProsodyContext) -> int:
        """Number of explicit discourse facts the caller supplied"""
        signals = [
            context.subrahmanya,
            context.ritual,
            context.japa,
            context.sama,
            context.chandas,
            self.config.is_known_meter(context.meter),
            context.is_vocative and context.has_distance,
        ]
        return sum(1 for signal in signals if signal)

    def confidence(self, text: str, context: ProsodyContext) -> float:
        """
        Additive confidence score in [0, 1]

        More context signals or accent marks never lower the score.
        """
        if not text.strip():
            return 0.0

        weights = self.config.confidence
        marks = sum(1 for char in nfd(text) if char in PITCH_MARKS)
        has_marker = any(normalize_token(token) in self.config.domain_markers for token in text.split())

        score = weights.base
        score += min(self.context_signals(context) * weights.per_context_signal, weights.max_context_bonus)
        score += min(marks * weights.per_accent_mark, weights.max_mark_bonus)
        if has_marker:
            score += weights.domain_marker_bonus

        return round(float(np.clip(score, 0.0, 1.0)), 3)


_engine = ProsodyEngine()


def aggregate(text: str, context=None, options=None) -> AggregateResult:
    """Resolve text with the default engine"""
    return _engine.aggregate(text, context, options)
