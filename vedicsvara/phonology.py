#!/usr/bin/env python3
"""
VedicSvara - Phonology Collaborators

Small, stateless helpers the accent engine leans on:
- Vowel predicate for IAST and Devanagari (independent vowels and vowel signs)
- Script detection
- Phoneme tokenization into grapheme-cluster-sized units
- Syllable counting (vowel nuclei only, no scansion)

The tokenizer keeps every character of the input, so joining its output
reproduces the NFC form of the text. Indices into the token list are the
"positions" used by the multi-vowel scans.
"""

import unicodedata
from enum import Enum
from typing import List, Optional, Union


class Script(Enum):
    IAST = "IAST"
    DEVANAGARI = "Devanagari"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Union["Script", str, None]) -> Optional["Script"]:
        """Accept a Script, its value or name in any case, or None"""
        if value is None or isinstance(value, Script):
            return value
        if not isinstance(value, str):
            raise TypeError(f"script must be a Script or string, got {type(value).__name__}")
        lowered = value.strip().lower()
        for member in cls:
            if lowered in (member.value.lower(), member.name.lower()):
                return member
        raise ValueError(f"Unsupported script: {value!r}")


def nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def nfd(text: str) -> str:
    return unicodedata.normalize("NFD", text)


IAST_SHORT_VOWELS = ("a", "i", "u", "ṛ", "ḷ")
IAST_LONG_VOWELS = ("ā", "ī", "ū", "ṝ", "ḹ", "e", "ai", "o", "au")

DEVANAGARI_SHORT_VOWELS = ("अ", "इ", "उ", "ऋ", "ऌ", "ि", "ु", "ृ", "ॢ")
DEVANAGARI_LONG_VOWELS = ("आ", "ई", "ऊ", "ॠ", "ॡ", "ए", "ऐ", "ओ", "औ",
                          "ा", "ी", "ू", "ॄ", "ॣ", "े", "ै", "ो", "ौ")

SHORT_VOWELS = frozenset(nfc(v) for v in IAST_SHORT_VOWELS + DEVANAGARI_SHORT_VOWELS)
LONG_VOWELS = frozenset(nfc(v) for v in IAST_LONG_VOWELS + DEVANAGARI_LONG_VOWELS)
ALL_VOWELS = SHORT_VOWELS | LONG_VOWELS

# Devanagari vowel signs attach to a consonant and replace its inherent 'a'
DEVANAGARI_VOWEL_SIGNS = frozenset("ािीुूृॄॢॣेैोौ")
DEVANAGARI_VIRAMA = "्"

# Combining pitch marks: IAST grave, acute, circumflex and the Vedic
# Devanagari udatta, anudatta, double svarita
PITCH_MARKS = frozenset("\u0300\u0301\u0302\u0951\u0952\u1CDA")

# Second halves of the IAST diphthongs ai / au
_DIPHTHONG_TAILS = ("i", "u")


def is_vowel(text) -> bool:
    """True when text is exactly one Sanskrit vowel with no pitch mark"""
    if not isinstance(text, str) or not text:
        return False
    return nfc(text) in ALL_VOWELS


def is_devanagari_consonant(char: str) -> bool:
    if not char:
        return False
    cp = ord(char[0])
    return 0x0915 <= cp <= 0x0939 or 0x0958 <= cp <= 0x095F


def detect_script(text: str) -> Script:
    """Detect whether text is written in Devanagari or IAST transliteration"""
    for char in text:
        cp = ord(char)
        # Devanagari, Devanagari Extended, Vedic Extensions
        if 0x0900 <= cp <= 0x097F or 0xA8E0 <= cp <= 0xA8FF or 0x1CD0 <= cp <= 0x1CFF:
            return Script.DEVANAGARI
    if any(char.isalpha() for char in text):
        return Script.IAST
    return Script.UNKNOWN


def tokenize_phonemes(text: str, script: Optional[Script] = None) -> List[str]:
    """
    Split text into phoneme-sized grapheme clusters

    Each cluster is one base character plus every combining mark that
    follows it (pitch marks, macrons, underdots, virama). In IAST an
    'a' followed by 'i' or 'u' is merged into one diphthong when the pair
    carries at most one pitch mark ('ai', 'ái', 'aí').

    Args:
        text: Word or phrase to split
        script: Script override (auto-detected if not provided)

    Returns:
        List of NFC clusters whose concatenation is the NFC text
    """
    if not isinstance(text, str):
        raise TypeError("text must be a string")

    clusters: List[str] = []
    for char in nfd(text):
        if clusters and unicodedata.combining(char):
            clusters[-1] += char
        else:
            clusters.append(char)
    clusters = [nfc(cluster) for cluster in clusters]

    script = script or detect_script(text)
    if script == Script.DEVANAGARI:
        return clusters

    merged: List[str] = []
    for cluster in clusters:
        if (merged and strip_pitch_marks(merged[-1]) == "a"
                and strip_pitch_marks(cluster) in _DIPHTHONG_TAILS
                and _pitch_mark_count(merged[-1] + cluster) <= 1):
            merged[-1] = nfc(merged[-1] + cluster)
        else:
            merged.append(cluster)
    return merged


def strip_pitch_marks(text: str) -> str:
    """Text with every pitch mark removed (length marks and underdots stay)"""
    return nfc("".join(c for c in nfd(text) if c not in PITCH_MARKS))


def _pitch_mark_count(text: str) -> int:
    return sum(1 for c in nfd(text) if c in PITCH_MARKS)


def count_syllables(text: str) -> int:
    """
    Count vowel nuclei in a word

    Devanagari consonants carry an inherent 'a' unless followed by a vowel
    sign or closed by virama; those inherent vowels count too.
    """
    if not isinstance(text, str):
        raise TypeError("text must be a string")

    phonemes = tokenize_phonemes(text)
    count = 0
    for idx, phoneme in enumerate(phonemes):
        if is_vowel(strip_pitch_marks(phoneme)):
            count += 1
        elif is_devanagari_consonant(phoneme) and DEVANAGARI_VIRAMA not in phoneme:
            following = phonemes[idx + 1] if idx + 1 < len(phonemes) else ""
            if not following or following[0] not in DEVANAGARI_VOWEL_SIGNS:
                count += 1
    return count
