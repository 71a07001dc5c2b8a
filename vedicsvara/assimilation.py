#!/usr/bin/env python3
"""
VedicSvara - Local Assimilation Detector

1.2.39 svaritāt saṃhitāyām anudāttānām: in continuous recitation the
anudātta vowels that directly follow a svarita are pronounced in monotone.

Positions are indices into tokenize_phonemes(text). Consonants and spaces
between vowels are skipped; a vowel with any other accent ends the run.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .accent_classifier import AccentClassifier, AccentType
from .models import AggregateResult, ProsodyMode, ProsodyOption
from .phonology import detect_script, nfc, tokenize_phonemes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Run:
    """Inclusive span of anudātta phonemes following a svarita"""
    start: int
    end: int


class LocalAssimilationDetector:

    SUTRA = "1.2.39"

    def __init__(self, classifier: Optional[AccentClassifier] = None):
        self.classifier = classifier or AccentClassifier()

    def _analyse(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        script = detect_script(text)
        phonemes = tokenize_phonemes(text, script)
        return phonemes, [self.classifier.classify(p, script=script, strict=True) for p in phonemes]

    def detect_runs(self, text: str) -> List[Run]:
        """
        Find every anudātta run that follows a svarita vowel

        Returns:
            Non-overlapping runs, left to right
        """
        phonemes, analyses = self._analyse(text)
        runs: List[Run] = []

        i = 0
        while i < len(phonemes):
            if not (analyses[i].is_valid and analyses[i].accent_type == AccentType.SVARITA):
                i += 1
                continue

            first = last = None
            j = i + 1
            while j < len(phonemes):
                analysis = analyses[j]
                if not analysis.is_valid:
                    j += 1
                    continue
                if analysis.accent_type != AccentType.ANUDATTA:
                    break
                if first is None:
                    first = j
                last = j
                j += 1

            if first is not None:
                runs.append(Run(first, last))
            # j is the vowel that broke the run; it may start the next one
            i = j if j > i + 1 else i + 1

        logger.debug("Runs in %r: %s", text, runs)
        return runs

    def apply_run(self, text: str, run: Run) -> str:
        """
        Strip the pitch marks of every vowel inside run

        Raises:
            ValueError: run lies outside the text
        """
        phonemes, analyses = self._analyse(text)
        if run.start < 0 or run.end >= len(phonemes) or run.start > run.end:
            raise ValueError(f"Run {run} is out of range for {len(phonemes)} phonemes")

        rewritten = list(phonemes)
        for idx in range(run.start, run.end + 1):
            if analyses[idx].is_valid:
                rewritten[idx] = analyses[idx].base_vowel
        return nfc("".join(rewritten))

    def options(self, text: str) -> List[ProsodyOption]:
        return [
            ProsodyOption(self.apply_run(text, run), ProsodyMode.LOCAL_MONOTONE,
                          (self.SUTRA,), span=(run.start, run.end))
            for run in self.detect_runs(text)
        ]

    def integrate(self, result: AggregateResult) -> AggregateResult:
        """Merge one local-monotone option per run into result"""
        found = self.options(result.input)
        if not found:
            return result
        for option in found:
            result = result.with_option(option)
        return result.with_reasoning(
            f"{self.SUTRA}: {len(found)} anudātta run(s) after svarita recited in monotone")
