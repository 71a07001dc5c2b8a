"""
Unit Tests for the Local Assimilation Detector (1.2.39)
"""

import pytest

from vedicsvara.assimilation import LocalAssimilationDetector, Run
from vedicsvara.models import AggregateResult, ProsodyMode


@pytest.fixture
def detector():
    return LocalAssimilationDetector()


class TestDetectRuns:

    def test_detect_when_svarita_then_two_anudatta_then_single_run(self, detector):
        assert detector.detect_runs("âàà") == [Run(1, 2)]

    def test_detect_when_no_svarita_then_no_runs(self, detector):
        assert detector.detect_runs("àáà") == []

    def test_detect_when_svarita_not_followed_by_anudatta_then_no_runs(self, detector):
        assert detector.detect_runs("âá") == []

    def test_detect_when_consonants_between_then_skipped(self, detector):
        # t-a-n-v-a-s: phonemes t, â, n, v, à, s
        assert detector.detect_runs("tânvàs") == [Run(4, 4)]

    def test_detect_when_udatta_interrupts_then_run_ends(self, detector):
        assert detector.detect_runs("âàáà") == [Run(1, 1)]

    def test_detect_when_two_svaritas_then_independent_runs(self, detector):
        assert detector.detect_runs("âàâàà") == [Run(1, 1), Run(3, 4)]

    def test_detect_when_unmarked_vowel_then_run_ends(self, detector):
        assert detector.detect_runs("âaà") == []

    def test_detect_when_svarita_on_diphthong_then_run_found(self, detector):
        # d, âi, v, y, à, m
        assert detector.detect_runs("dâivyàm") == [Run(4, 4)]

    def test_detect_when_devanagari_then_vowel_signs_scanned(self, detector):
        # द, ो᳚, व, ि॒ -> svarita on o, anudatta on i
        assert detector.detect_runs("दो᳚वि॒") == [Run(3, 3)]


class TestApplyRun:

    def test_apply_when_run_then_only_run_vowels_stripped(self, detector):
        assert detector.apply_run("âàà", Run(1, 2)) == "âaa"

    def test_apply_when_partial_run_then_rest_kept(self, detector):
        assert detector.apply_run("âàâàà", Run(3, 4)) == "âàâaa"

    def test_apply_when_out_of_range_then_raises(self, detector):
        with pytest.raises(ValueError, match="out of range"):
            detector.apply_run("âà", Run(1, 5))


class TestOptions:

    def test_options_when_runs_then_one_local_monotone_each(self, detector):
        options = detector.options("âàâàà")
        assert [(o.form, o.span) for o in options] == [("âaâàà", (1, 1)), ("âàâaa", (3, 4))]
        assert all(o.mode == ProsodyMode.LOCAL_MONOTONE for o in options)
        assert all(o.sources == ("1.2.39",) for o in options)

    def test_integrate_when_runs_then_sutra_recorded(self, detector):
        result = detector.integrate(AggregateResult(input="âàà"))
        assert result.modes == [ProsodyMode.LOCAL_MONOTONE]
        assert result.applied_sutras == ("1.2.39",)
        assert result.reasoning

    def test_integrate_when_no_runs_then_result_unchanged(self, detector):
        base = AggregateResult(input="devá")
        assert detector.integrate(base) is base
