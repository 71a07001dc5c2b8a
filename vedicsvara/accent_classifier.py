#!/usr/bin/env python3
"""
VedicSvara - Step 1: Accent Classifier

Classifies the pitch accent carried by a single vowel:
- Udātta (high tone, acute / U+0951)
- Anudātta (low tone, grave / U+0952)
- Svarita (circumflex tone, circumflex / U+1CDA)

Accent definitions implemented:
- 1.2.29 uccair udāttaḥ
- 1.2.30 nīcair anudāttaḥ
- 1.2.31 samāhāraḥ svaritaḥ

Also provides the inverse operations (apply a mark to a bare vowel) and
mark stripping, which every later stage uses to build candidate forms.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .phonology import (
    Script,
    detect_script,
    is_vowel,
    nfc,
    nfd,
    tokenize_phonemes,
)

logger = logging.getLogger(__name__)


class AccentType(Enum):
    UDATTA = "udātta"
    ANUDATTA = "anudātta"
    SVARITA = "svarita"
    UNMARKED = "unmarked"


@dataclass(frozen=True)
class AccentedVowel:
    """One vowel plus zero or one pitch mark"""
    input: str
    base_vowel: str = ""
    accent_type: AccentType = AccentType.UNMARKED
    accent_marks: Tuple[str, ...] = ()
    script: Script = Script.UNKNOWN
    is_valid: bool = True
    error: Optional[str] = None

    @property
    def has_explicit_mark(self) -> bool:
        return bool(self.accent_marks)


class AccentClassifier:
    """Maps accented vowels to (base vowel, accent type) and back"""

    # Combining marks recognised in either script
    MARK_TO_ACCENT: Dict[str, AccentType] = {
        "\u0300": AccentType.ANUDATTA,  # combining grave
        "\u0301": AccentType.UDATTA,    # combining acute
        "\u0302": AccentType.SVARITA,   # combining circumflex
        "\u0951": AccentType.UDATTA,    # Devanagari stress sign udatta
        "\u0952": AccentType.ANUDATTA,  # Devanagari stress sign anudatta
        "\u1CDA": AccentType.SVARITA,   # Vedic tone double svarita
    }

    # Marks written by apply_accent, per script
    ACCENT_MARKERS: Dict[Script, Dict[AccentType, str]] = {
        Script.IAST: {
            AccentType.UDATTA: "\u0301",
            AccentType.ANUDATTA: "\u0300",
            AccentType.SVARITA: "\u0302",
        },
        Script.DEVANAGARI: {
            AccentType.UDATTA: "\u0951",
            AccentType.ANUDATTA: "\u0952",
            AccentType.SVARITA: "\u1CDA",
        },
    }

    def classify(self,
                 vowel: str,
                 script: Union[Script, str, None] = None,
                 strict: bool = False) -> AccentedVowel:
        """
        Classify the accent of one vowel

        Args:
            vowel: A vowel, optionally carrying one pitch mark
            script: 'IAST' or 'Devanagari' (auto-detected if not provided)
            strict: Unmarked vowels stay UNMARKED instead of defaulting
                    to SVARITA

        Returns:
            AccentedVowel; is_valid is False for empty input, non-vowels
            and conflicting marks
        """
        if not isinstance(vowel, str):
            raise TypeError(f"vowel must be a string, got {type(vowel).__name__}")

        text = vowel.strip()
        if not text:
            return AccentedVowel(input=vowel, is_valid=False, error="Invalid vowel input")

        resolved_script = Script.coerce(script) or detect_script(text)
        base, marks = self._extract_marks(text)

        accents = {self.MARK_TO_ACCENT[mark] for mark in marks}
        if len(accents) > 1:
            logger.debug("Conflicting marks %r on %r", marks, vowel)
            return AccentedVowel(input=vowel, base_vowel=base, accent_marks=marks,
                                 script=resolved_script, is_valid=False,
                                 error="Conflicting accent marks on one vowel")

        if not is_vowel(base):
            return AccentedVowel(input=vowel, base_vowel=base, accent_marks=marks,
                                 script=resolved_script, is_valid=False,
                                 error=f"Input is not a vowel: {vowel!r}")

        if accents:
            accent_type = accents.pop()
        elif strict:
            accent_type = AccentType.UNMARKED
        else:
            accent_type = AccentType.SVARITA

        return AccentedVowel(
            input=vowel,
            base_vowel=base,
            accent_type=accent_type,
            accent_marks=marks,
            script=resolved_script,
        )

    def _extract_marks(self, text: str) -> Tuple[str, Tuple[str, ...]]:
        """Split text into (NFC base, pitch marks in order)"""
        # NFD splits precomposed forms such as U+00E1 into base + mark
        decomposed = nfd(text)
        marks = tuple(char for char in decomposed if char in self.MARK_TO_ACCENT)
        base = nfc("".join(char for char in decomposed if char not in self.MARK_TO_ACCENT))
        return base, marks

    def classify_sequence(self, text: str, strict: bool = True) -> List[AccentedVowel]:
        """Classify every phoneme of text; consonants come back invalid"""
        if not isinstance(text, str):
            raise TypeError("text must be a string")
        script = detect_script(text)
        return [self.classify(phoneme, script=script, strict=strict)
                for phoneme in tokenize_phonemes(text, script)]

    def apply_accent(self,
                     vowel: str,
                     accent_type: AccentType,
                     script: Union[Script, str, None] = None) -> str:
        """
        Attach a pitch mark to a bare vowel

        Raises:
            ValueError: vowel is not a Sanskrit vowel
        """
        if not isinstance(vowel, str):
            raise TypeError(f"vowel must be a string, got {type(vowel).__name__}")
        if not is_vowel(vowel):
            raise ValueError("Input must be a vowel")

        if accent_type == AccentType.UNMARKED:
            return nfc(vowel)

        resolved = Script.coerce(script) or detect_script(vowel)
        markers = self.ACCENT_MARKERS.get(resolved, self.ACCENT_MARKERS[Script.IAST])
        vowel = nfc(vowel)
        if resolved != Script.DEVANAGARI and len(vowel) == 2:
            # IAST ai / au carry the mark on the first letter
            return nfc(vowel[0] + markers[accent_type] + vowel[1])
        return nfc(vowel + markers[accent_type])

    def apply_udatta(self, vowel: str, script: Union[Script, str, None] = None) -> str:
        return self.apply_accent(vowel, AccentType.UDATTA, script)

    def apply_anudatta(self, vowel: str, script: Union[Script, str, None] = None) -> str:
        return self.apply_accent(vowel, AccentType.ANUDATTA, script)

    def apply_svarita(self, vowel: str, script: Union[Script, str, None] = None) -> str:
        return self.apply_accent(vowel, AccentType.SVARITA, script)

    def get_accent_variants(self, vowel: str,
                            script: Union[Script, str, None] = None) -> Dict[str, str]:
        """All three accented forms of a bare vowel"""
        return {
            "base": self.apply_accent(vowel, AccentType.UNMARKED),
            "udatta": self.apply_udatta(vowel, script),
            "anudatta": self.apply_anudatta(vowel, script),
            "svarita": self.apply_svarita(vowel, script),
        }

    def replace_accent(self, phoneme: str, accent_type: AccentType,
                       script: Union[Script, str, None] = None,
                       only: Optional[AccentType] = None) -> str:
        """
        Re-mark a vowel phoneme; non-vowel phonemes come back unchanged

        Args:
            only: Re-mark the vowel only when it currently carries this accent
        """
        analysis = self.classify(phoneme, script=script, strict=True)
        if not analysis.is_valid or (only is not None and analysis.accent_type != only):
            return phoneme
        return self.apply_accent(analysis.base_vowel, accent_type, analysis.script)

    def strip_accents(self, text: str,
                      accent_types: Optional[Iterable[AccentType]] = None) -> str:
        """
        Remove pitch marks from text

        Args:
            text: Any text
            accent_types: Only remove marks of these types (all if None)
        """
        if not isinstance(text, str):
            raise TypeError("text must be a string")
        targets = set(accent_types) if accent_types is not None else None
        kept = []
        for char in nfd(text):
            accent = self.MARK_TO_ACCENT.get(char)
            if accent is not None and (targets is None or accent in targets):
                continue
            kept.append(char)
        return nfc("".join(kept))

    def is_udatta(self, vowel: str, strict: bool = False) -> bool:
        analysis = self.classify(vowel, strict=strict)
        return analysis.is_valid and analysis.accent_type == AccentType.UDATTA

    def is_anudatta(self, vowel: str, strict: bool = False) -> bool:
        analysis = self.classify(vowel, strict=strict)
        return analysis.is_valid and analysis.accent_type == AccentType.ANUDATTA

    def is_svarita(self, vowel: str, strict: bool = False) -> bool:
        analysis = self.classify(vowel, strict=strict)
        return analysis.is_valid and analysis.accent_type == AccentType.SVARITA


_classifier = AccentClassifier()

classify = _classifier.classify
classify_sequence = _classifier.classify_sequence
apply_accent = _classifier.apply_accent
apply_udatta = _classifier.apply_udatta
apply_anudatta = _classifier.apply_anudatta
apply_svarita = _classifier.apply_svarita
get_accent_variants = _classifier.get_accent_variants
replace_accent = _classifier.replace_accent
strip_accents = _classifier.strip_accents
is_udatta = _classifier.is_udatta
is_anudatta = _classifier.is_anudatta
is_svarita = _classifier.is_svarita
