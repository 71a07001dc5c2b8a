"""
VedicSvara - Vedic Accent Prosody Resolution Engine

Classifies udātta / anudātta / svarita pitch marks, splits svarita into
timed segments, and decides when recitation goes monotone (ekaśruti).

Usage:
    from vedicsvara import aggregate, decompose

    result = aggregate("devá", {"case": "vocative", "distanceCategory": "far"})
    print(result.primary_decision)     # "monotone"

    decompose("â").segments            # udātta-initial 0.5, anudātta-fall 0.5
"""

from .accent_classifier import AccentClassifier, AccentType, AccentedVowel, classify
from .aggregator import AggregateOptions, ProsodyEngine, aggregate, integrate_domain
from .assimilation import LocalAssimilationDetector, Run
from .config import ConfidenceWeights, EngineConfig
from .context import ProsodyContext
from .duration_model import DurationModel, SvaritaDecomposer, decompose
from .ekashruti import ChandasEkashrutiEvaluator, EkashrutiEvaluator, RitualEkashrutiEvaluator
from .models import AggregateResult, ProsodyMode, ProsodyOption
from .phonology import Script

__version__ = "1.0.0"
__all__ = [
    "aggregate",
    "classify",
    "decompose",
    "integrate_domain",
    "ProsodyEngine",
    "AggregateOptions",
    "AggregateResult",
    "ProsodyMode",
    "ProsodyOption",
    "ProsodyContext",
    "EngineConfig",
    "ConfidenceWeights",
    "AccentClassifier",
    "AccentType",
    "AccentedVowel",
    "Script",
    "SvaritaDecomposer",
    "DurationModel",
    "EkashrutiEvaluator",
    "RitualEkashrutiEvaluator",
    "ChandasEkashrutiEvaluator",
    "LocalAssimilationDetector",
    "Run",
]
