#!/usr/bin/env python3
"""
VedicSvara - Step 3: Subrahmaṇyā Domain Override

Inside the Subrahmaṇyā hymn:
- 1.2.37 na subrahmaṇyāyāṃ svaritasya tūdāttaḥ: no ekaśruti, and every
  svarita is pronounced as udātta
- 1.2.38 devabrahmaṇor anudāttaḥ: the words deva and brahmaṇa take
  anudātta throughout

Outside the domain the caller runs local assimilation (1.2.39) instead.
"""

import logging
import re
from dataclasses import replace
from typing import List, Optional

from .accent_classifier import AccentClassifier, AccentType
from .config import DEFAULT_CONFIG, EngineConfig, freeze_lexicon, normalize_token
from .context import ProsodyContext
from .models import AggregateResult, ProsodyMode, ProsodyOption
from .phonology import detect_script, nfc, tokenize_phonemes

logger = logging.getLogger(__name__)

_EDGE_PUNCTUATION = ".,;:!?।॥\"'()"
_WHITESPACE = re.compile(r"(\s+)")


class SubrahmanyaOverride:
    """Rewrites the option set of an AggregateResult for the hymn domain"""

    SVARITA_SUTRA = "1.2.37"
    LEXICAL_SUTRA = "1.2.38"

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 classifier: Optional[AccentClassifier] = None):
        self.config = config or DEFAULT_CONFIG
        self.classifier = classifier or AccentClassifier()

    @staticmethod
    def is_active(context) -> bool:
        return ProsodyContext.coerce(context).subrahmanya

    def _rewrite(self, text: str, source: Optional[AccentType], target: AccentType) -> str:
        """Re-mark every vowel of text whose accent is source (any accent if None)"""
        script = detect_script(text)
        return nfc("".join(
            self.classifier.replace_accent(phoneme, target, script, only=source)
            for phoneme in tokenize_phonemes(text, script)
        ))

    def convert_svarita(self, text: str) -> str:
        """Every explicitly marked svarita becomes udātta"""
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")
        return self._rewrite(text, AccentType.SVARITA, AccentType.UDATTA)

    def _table(self, lexicon):
        return self.config.lexical_anudatta if lexicon is None else freeze_lexicon(lexicon)

    def lexical_words(self, text: str, lexicon=None) -> List[str]:
        """Words of text found in the lexical-anudātta table"""
        table = self._table(lexicon)
        found = []
        for word in text.split():
            key = normalize_token(word.strip(_EDGE_PUNCTUATION))
            if key and table.get(key, False):
                found.append(word)
        return found

    def lexical_form(self, text: str, lexicon=None) -> Optional[str]:
        """
        Apply 1.2.38 on top of the udātta-converted form

        Returns:
            The rewritten text, or None when no word is in the lexicon
        """
        table = self._table(lexicon)
        converted = self.convert_svarita(text)
        if not self.lexical_words(converted, table):
            return None

        pieces = []
        for piece in _WHITESPACE.split(converted):
            key = normalize_token(piece.strip(_EDGE_PUNCTUATION))
            if key and table.get(key, False):
                piece = self._rewrite(piece, None, AccentType.ANUDATTA)
            pieces.append(piece)
        return nfc("".join(pieces))

    def integrate(self, result: AggregateResult, context=None, lexicon=None) -> AggregateResult:
        """
        Apply the domain pass to result

        Does nothing unless the context marks the Subrahmaṇyā domain.
        """
        if not self.is_active(context):
            return result

        text = result.input
        result = result.without_modes("monotone", by_rule=self.SVARITA_SUTRA)
        if result.suppressed:
            logger.debug("%s suppressed %d monotone option(s)", self.SVARITA_SUTRA, len(result.suppressed))

        result = result.with_option(
            ProsodyOption(self.convert_svarita(text), ProsodyMode.UDAATTA_REPLACED, (self.SVARITA_SUTRA,))
        ).with_reasoning(
            f"{self.SVARITA_SUTRA}: Subrahmaṇyā forbids ekaśruti; svarita is pronounced udātta"
        )

        lexical = self.lexical_form(text, lexicon)
        if lexical is not None:
            words = ", ".join(self.lexical_words(text, lexicon))
            result = result.with_option(
                ProsodyOption(lexical, ProsodyMode.LEXICAL_ANUDATTA,
                              (self.SVARITA_SUTRA, self.LEXICAL_SUTRA))
            ).with_reasoning(f"{self.LEXICAL_SUTRA}: {words} take anudātta throughout")

        return replace(result.with_sutras([self.SVARITA_SUTRA]), domain_active=True)
