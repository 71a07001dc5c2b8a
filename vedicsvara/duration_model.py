#!/usr/bin/env python3
"""
VedicSvara - Duration Model

Vowel quantity in mātrās and the svarita split (1.2.32 svaritasyārdhaṃ ...):
the first half-mātrā of a svarita vowel is pitched as udātta, the rest
falls as anudātta.

Key Features:
- Static short/long vowel duration table (IAST and Devanagari)
- Svarita decomposition into udātta-initial and anudātta-fall segments
- Per-reciter mātrā calibration
- Millisecond segment timings and duration validation
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Optional, Tuple

from .accent_classifier import AccentClassifier, AccentType
from .phonology import LONG_VOWELS, SHORT_VOWELS, nfc

logger = logging.getLogger(__name__)


ARDHA_MATRA = 0.5

# Short vowels are one mātrā, long vowels and diphthongs two
VOWEL_DURATIONS = MappingProxyType({
    **{vowel: 1.0 for vowel in SHORT_VOWELS},
    **{vowel: 2.0 for vowel in LONG_VOWELS},
})

UDATTA_INITIAL = "udātta-initial"
ANUDATTA_FALL = "anudātta-fall"


def duration_units(base_vowel: str) -> float:
    """Mātrā count of a bare vowel; 0.0 when the vowel is unknown"""
    return VOWEL_DURATIONS.get(nfc(base_vowel), 0.0)


@dataclass(frozen=True)
class SvaritaSegment:
    role: str
    units: float
    proportion_of_total: float


@dataclass(frozen=True)
class SvaritaDecomposition:
    """Result of splitting one vowel's svarita contour"""
    applies: bool
    reasoning: str
    base_vowel: str = ""
    duration_units: float = 0.0
    segments: Tuple[SvaritaSegment, ...] = ()

    def to_dict(self) -> dict:
        return {
            "applies": self.applies,
            "reasoning": self.reasoning,
            "base_vowel": self.base_vowel,
            "duration_units": self.duration_units,
            "segments": [
                {"role": s.role, "units": s.units, "proportion_of_total": s.proportion_of_total}
                for s in self.segments
            ],
        }


class SvaritaDecomposer:
    """Splits a svarita vowel into its two pitch segments"""

    SUTRA = "1.2.32"

    def __init__(self, classifier: Optional[AccentClassifier] = None):
        self.classifier = classifier or AccentClassifier()

    def decompose(self, vowel: str, strict: bool = False) -> SvaritaDecomposition:
        """
        Decompose a svarita vowel

        Args:
            vowel: Accented vowel (unmarked vowels count as svarita unless strict)
            strict: Require an explicit svarita mark

        Returns:
            SvaritaDecomposition; applies is False for any other accent
        """
        analysis = self.classifier.classify(vowel, strict=strict)
        if not analysis.is_valid:
            return SvaritaDecomposition(applies=False, reasoning=analysis.error or "Invalid vowel")

        if analysis.accent_type != AccentType.SVARITA:
            return SvaritaDecomposition(
                applies=False,
                reasoning=f"{self.SUTRA} applies only to svarita, found {analysis.accent_type.value}",
                base_vowel=analysis.base_vowel,
                duration_units=duration_units(analysis.base_vowel),
            )

        total = duration_units(analysis.base_vowel)
        fall = max(total - ARDHA_MATRA, 0.0)

        def proportion(units: float) -> float:
            return units / total if total > 0 else 0.0

        segments = (
            SvaritaSegment(UDATTA_INITIAL, ARDHA_MATRA, proportion(ARDHA_MATRA)),
            SvaritaSegment(ANUDATTA_FALL, fall, proportion(fall)),
        )
        logger.debug("Decomposed %r: %.1f mātrā -> %s", vowel, total, segments)

        return SvaritaDecomposition(
            applies=True,
            reasoning=f"{self.SUTRA}: first half-mātrā udātta, remaining {fall:g} anudātta",
            base_vowel=analysis.base_vowel,
            duration_units=total,
            segments=segments,
        )


@dataclass
class MatraCalibration:
    """Per-reciter timing calibration"""
    reciter_name: str
    matra_base_ms: float = 100.0      # One short vowel
    sample_size: int = 0


@dataclass(frozen=True)
class SegmentTiming:
    role: str
    start_ms: float
    end_ms: float

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms


@dataclass
class DurationResult:
    """Result of duration validation"""
    is_valid: bool
    actual_ms: float
    expected_ms: float
    matra_count: float
    deviation_percent: float
    tolerance: float = field(default=0.25)


class DurationModel:
    """
    Converts mātrā counts to milliseconds for a calibrated reciter
    """

    DEFAULT_MATRA_MS = 100.0
    DEFAULT_TOLERANCE = 0.25

    def __init__(self, calibration: Optional[MatraCalibration] = None):
        self.calibration = calibration

    @property
    def matra_ms(self) -> float:
        return self.calibration.matra_base_ms if self.calibration else self.DEFAULT_MATRA_MS

    def calibrate_from_samples(self,
                               reciter_name: str,
                               vowel_durations: List[float]) -> MatraCalibration:
        """
        Calibrate the mātrā length from sample short-vowel measurements

        Args:
            reciter_name: Name of reciter for identification
            vowel_durations: Short vowel durations in seconds

        Returns:
            MatraCalibration object
        """
        if not vowel_durations:
            self.calibration = MatraCalibration(reciter_name, self.DEFAULT_MATRA_MS, 0)
            return self.calibration

        durations_ms = [d * 1000 for d in vowel_durations]
        if any(d <= 0 for d in durations_ms):
            raise ValueError("vowel durations must be positive")

        # Median is robust to outliers
        self.calibration = MatraCalibration(
            reciter_name=reciter_name,
            matra_base_ms=float(np.median(durations_ms)),
            sample_size=len(vowel_durations),
        )
        logger.debug("Calibrated %s: %.1f ms per mātrā", reciter_name, self.calibration.matra_base_ms)
        return self.calibration

    def expected_duration_ms(self, base_vowel: str) -> float:
        return duration_units(base_vowel) * self.matra_ms

    def segment_timings(self,
                        decomposition: SvaritaDecomposition,
                        onset_ms: float = 0.0) -> List[SegmentTiming]:
        """
        Lay the svarita segments out on a time axis

        Returns:
            One SegmentTiming per segment; empty when the decomposition
            does not apply
        """
        if not decomposition.applies:
            return []

        timings = []
        cursor = onset_ms
        for segment in decomposition.segments:
            end = cursor + segment.units * self.matra_ms
            timings.append(SegmentTiming(segment.role, cursor, end))
            cursor = end
        return timings

    def validate_duration(self,
                          actual_duration_s: float,
                          base_vowel: str,
                          tolerance: Optional[float] = None) -> DurationResult:
        """
        Check a measured vowel against its expected quantity

        Args:
            actual_duration_s: Measured duration in seconds
            base_vowel: Bare vowel the measurement belongs to
            tolerance: Allowed relative deviation (default 25%)
        """
        tolerance = self.DEFAULT_TOLERANCE if tolerance is None else tolerance
        actual_ms = actual_duration_s * 1000
        expected_ms = self.expected_duration_ms(base_vowel)

        deviation = abs(actual_ms - expected_ms) / expected_ms * 100 if expected_ms > 0 else 0.0
        is_valid = expected_ms > 0 and deviation <= tolerance * 100

        return DurationResult(
            is_valid=is_valid,
            actual_ms=actual_ms,
            expected_ms=expected_ms,
            matra_count=actual_ms / self.matra_ms if self.matra_ms > 0 else 0.0,
            deviation_percent=deviation,
            tolerance=tolerance,
        )


_decomposer = SvaritaDecomposer()

decompose = _decomposer.decompose
