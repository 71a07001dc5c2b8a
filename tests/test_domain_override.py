"""
Unit Tests for the Subrahmaṇyā Domain Override (1.2.37, 1.2.38)
"""

import pytest

from vedicsvara.aggregator import integrate_domain
from vedicsvara.config import EngineConfig
from vedicsvara.domain_override import SubrahmanyaOverride
from vedicsvara.models import AggregateResult, ProsodyMode, ProsodyOption

DOMAIN = {"subrahmanya": True}


@pytest.fixture
def override():
    return SubrahmanyaOverride()


def seeded(text: str) -> AggregateResult:
    """A result already carrying ekaśruti options from earlier rules"""
    return (AggregateResult(input=text)
            .with_option(ProsodyOption("indra", ProsodyMode.MONOTONE_FORCED, ("1.2.33",)))
            .with_option(ProsodyOption("indra", ProsodyMode.MONOTONE_OPTIONAL, ("1.2.36",)))
            .with_option(ProsodyOption(text, ProsodyMode.NATURAL_ACCENT, ("1.2.36",))))


class TestConvertSvarita:

    def test_convert_when_svarita_then_udatta(self, override):
        assert override.convert_svarita("índrâ gâhi") == "índrá gáhi"

    def test_convert_when_unmarked_then_untouched(self, override):
        assert override.convert_svarita("deva") == "deva"

    def test_convert_when_devanagari_then_vedic_udatta(self, override):
        assert override.convert_svarita("दो᳚") == "दो॑"


class TestLexicalForm:

    def test_lexical_when_deva_then_every_vowel_anudatta(self, override):
        assert override.lexical_form("deva") == "dèvà"

    def test_lexical_when_diphthong_then_marked_once(self, override):
        assert override.lexical_form("dáivya", {"daivya": True}) == "dàivyà"

    def test_lexical_when_phrase_then_only_listed_word_rewritten(self, override):
        assert override.lexical_form("devâ índra") == "dèvà índra"

    def test_lexical_when_punctuated_then_still_matched(self, override):
        assert override.lexical_words("brāhmaṇasya,") == ["brāhmaṇasya,"]

    def test_lexical_when_not_listed_then_none(self, override):
        assert override.lexical_form("índra") is None

    def test_lexical_when_injected_table_then_used_instead(self, override):
        assert override.lexical_form("índra", lexicon={"Indra": True}) == "ìndrà"
        assert override.lexical_form("deva", lexicon={"indra": True}) is None

    def test_lexical_when_config_table_then_used(self):
        override = SubrahmanyaOverride(EngineConfig(lexical_anudatta={"agni": True}))
        assert override.lexical_form("agní") == "àgnì"


class TestIntegrate:

    def test_integrate_when_domain_then_no_monotone_modes(self, override):
        result = override.integrate(seeded("índrâ"), DOMAIN)
        assert not any(mode.value.startswith("monotone") for mode in result.modes)
        assert result.domain_active

    def test_integrate_when_domain_then_suppressed_options_keep_provenance(self, override):
        result = override.integrate(seeded("índrâ"), DOMAIN)
        assert [(s.option.mode, s.by_rule) for s in result.suppressed] == [
            (ProsodyMode.MONOTONE_FORCED, "1.2.37"),
            (ProsodyMode.MONOTONE_OPTIONAL, "1.2.37"),
        ]
        assert "1.2.33" in result.applied_sutras

    def test_integrate_when_domain_then_udaatta_replaced_inserted(self, override):
        result = override.integrate(AggregateResult(input="índrâ"), DOMAIN)
        [option] = result.options_with_mode(ProsodyMode.UDAATTA_REPLACED)
        assert option.form == "índrá"
        assert "1.2.37" in result.applied_sutras
        assert "1.2.38" not in result.applied_sutras

    def test_integrate_when_lexical_word_then_both_sutras(self, override):
        result = override.integrate(AggregateResult(input="deva"), DOMAIN)
        [option] = result.options_with_mode(ProsodyMode.LEXICAL_ANUDATTA)
        assert option.form == "dèvà"
        assert option.sources == ("1.2.37", "1.2.38")
        assert result.applied_sutras == ("1.2.37", "1.2.38")
        assert any("1.2.38" in line for line in result.reasoning)

    def test_integrate_when_domain_absent_then_result_unchanged(self, override):
        base = seeded("índrâ")
        assert override.integrate(base, {}) is base


class TestIntegrateDomain:

    def test_integrate_domain_when_domain_then_local_assimilation_skipped(self):
        result = integrate_domain(AggregateResult(input="âàà"), DOMAIN)
        assert ProsodyMode.LOCAL_MONOTONE not in result.modes
        assert "1.2.39" not in result.applied_sutras

    def test_integrate_domain_when_no_domain_then_local_assimilation_runs(self):
        result = integrate_domain(AggregateResult(input="âàà"), {})
        assert ProsodyMode.LOCAL_MONOTONE in result.modes
        assert not result.domain_active

    def test_integrate_domain_when_lexicon_injected_then_used(self):
        result = integrate_domain(AggregateResult(input="soma"), DOMAIN, lexicon={"soma": True})
        assert result.options_with_mode(ProsodyMode.LEXICAL_ANUDATTA)[0].form == "sòmà"
