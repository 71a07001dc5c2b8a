#!/usr/bin/env python3
"""
VedicSvara - Step 2: Ekaśruti (Monotone) Evaluators

Three rules that flatten pitch accent to a single tone:
- 1.2.33 ekaśruti dūrāt sambuddhau: distant vocative address (forced)
- 1.2.34 yajñakarmaṇy ajapanyūṅkhasāmasu: ritual recitation (forced,
  with exceptions)
- 1.2.36 vibhāṣā chandasi: metrical verse (optional)

Every evaluator exposes the same three calls:
    evaluate(text, context) -> RuleDecision
    apply(text, context, flatten=True) -> RuleApplication
    options(text, context) -> List[ProsodyOption]
"""

import logging
from typing import List, Optional

from .accent_classifier import AccentClassifier, AccentType
from .config import DEFAULT_CONFIG, EngineConfig, normalize_token
from .context import ProsodyContext
from .models import ProsodyMode, ProsodyOption, RuleApplication, RuleDecision
from .phonology import count_syllables, nfc

logger = logging.getLogger(__name__)


class EkashrutiEvaluator:
    """1.2.33: monotone when calling out to someone far away"""

    SUTRA = "1.2.33"

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 classifier: Optional[AccentClassifier] = None):
        self.config = config or DEFAULT_CONFIG
        self.classifier = classifier or AccentClassifier()

    def _check(self, text: str, context) -> ProsodyContext:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        return ProsodyContext.coerce(context)

    def flatten(self, text: str) -> str:
        """Strip every pitch mark"""
        return self.classifier.strip_accents(text)

    def evaluate(self, text: str, context=None) -> RuleDecision:
        ctx = self._check(text, context)

        if not ctx.is_vocative:
            return RuleDecision(False, "Not a vocative (sambuddhi) address", self.SUTRA)
        if not ctx.is_far(self.config.distance_threshold_m):
            return RuleDecision(False, "Vocative address is not from a distance", self.SUTRA)

        logger.debug("%s applies to %r", self.SUTRA, text)
        return RuleDecision(True, "Distant vocative address is recited in monotone", self.SUTRA)

    def apply(self, text: str, context=None, flatten: bool = True) -> RuleApplication:
        decision = self.evaluate(text, context)
        if decision.applies and flatten:
            return RuleApplication(True, self.flatten(text))
        return RuleApplication(decision.applies, text)

    def options(self, text: str, context=None) -> List[ProsodyOption]:
        decision = self.evaluate(text, context)
        if not decision.applies:
            return []
        return [ProsodyOption(self.flatten(text), ProsodyMode.MONOTONE_FORCED, (self.SUTRA,))]


class RitualEkashrutiEvaluator(EkashrutiEvaluator):
    """1.2.34: monotone during sacrificial recitation, except japa, nyūṅkha and sāman"""

    SUTRA = "1.2.34"

    def blockers(self, text: str, ctx: ProsodyContext) -> List[str]:
        """Names of the exceptions that keep the natural accent"""
        found = []
        tokens = [normalize_token(token) for token in text.split()]
        if any(token in self.config.sacred_syllables for token in tokens):
            found.append("sacred-syllable")
        if ctx.japa:
            found.append("japa")
        if ctx.sama:
            found.append("sāma")
        if count_syllables(text) <= 1:
            found.append("monosyllable")
        if ctx.compound_initial_stressed:
            found.append("compound-initial-stress")
        return found

    def evaluate(self, text: str, context=None) -> RuleDecision:
        ctx = self._check(text, context)

        if not ctx.ritual:
            return RuleDecision(False, "No ritual (yajñakarman) context", self.SUTRA)

        blocked_by = self.blockers(text, ctx)
        if blocked_by:
            logger.debug("%s blocked for %r by %s", self.SUTRA, text, blocked_by)
            return RuleDecision(
                False,
                f"Ritual monotone blocked by {', '.join(blocked_by)}",
                self.SUTRA,
                blocked_by=tuple(blocked_by),
            )

        return RuleDecision(True, "Ritual recitation is in monotone", self.SUTRA)

    def options(self, text: str, context=None) -> List[ProsodyOption]:
        decision = self.evaluate(text, context)
        if decision.applies:
            return [ProsodyOption(self.flatten(text), ProsodyMode.MONOTONE_FORCED, (self.SUTRA,))]
        if decision.blocked:
            return [ProsodyOption(nfc(text), ProsodyMode.NATURAL_ACCENT, (self.SUTRA,))]
        return []


class ChandasEkashrutiEvaluator(EkashrutiEvaluator):
    """1.2.36: in metrical verse monotone is optional"""

    SUTRA = "1.2.36"

    LIMITED = "limited"
    MODERATE = "moderate"
    EXTENDED = "extended"

    def flexibility(self, text: str) -> str:
        syllables = count_syllables(text)
        if syllables <= self.config.limited_max_syllables:
            return self.LIMITED
        if syllables >= self.config.extended_min_syllables:
            return self.EXTENDED
        return self.MODERATE

    def mixed_form(self, text: str) -> str:
        """Low tones flattened, high and circumflex peaks kept"""
        return self.classifier.strip_accents(text, [AccentType.ANUDATTA])

    def evaluate(self, text: str, context=None) -> RuleDecision:
        ctx = self._check(text, context)

        if not ctx.is_metrical:
            return RuleDecision(False, "Not in metrical verse (chandas)", self.SUTRA)

        tier = self.flexibility(text)
        details = {
            "flexibility": tier,
            "syllables": count_syllables(text),
            "meter": ctx.meter,
            "known_meter": self.config.is_known_meter(ctx.meter),
        }
        if details["known_meter"]:
            details["pada_syllables"] = self.config.meters[ctx.meter]

        return RuleDecision(True, f"Monotone is optional in verse ({tier} flexibility)",
                            self.SUTRA, details=details)

    def options(self, text: str, context=None) -> List[ProsodyOption]:
        decision = self.evaluate(text, context)
        if not decision.applies:
            return []

        found = [
            ProsodyOption(nfc(text), ProsodyMode.NATURAL_ACCENT, (self.SUTRA,)),
            ProsodyOption(self.flatten(text), ProsodyMode.MONOTONE_OPTIONAL, (self.SUTRA,)),
        ]
        if decision.details["flexibility"] == self.EXTENDED:
            found.append(ProsodyOption(self.mixed_form(text), ProsodyMode.MIXED_PROSODY, (self.SUTRA,)))
        return found
