"""
Unit Tests for ProsodyContext and EngineConfig
"""

import pytest

from vedicsvara.config import ConfidenceWeights, EngineConfig, normalize_token
from vedicsvara.context import ProsodyContext


class TestProsodyContext:

    def test_from_mapping_when_camel_case_keys_then_fields_set(self):
        ctx = ProsodyContext.from_mapping({
            "case": "Vocative",
            "distanceCategory": "FAR",
            "distanceMeters": "12",
            "distanceThreshold": 5,
        })
        assert ctx.grammatical_case == "vocative"
        assert ctx.distance_category == "far"
        assert ctx.distance_meters == 12.0
        assert ctx.distance_threshold == 5.0

    @pytest.mark.parametrize("key", ["subrahmanya", "subrahmaṇyā", "subrahmaṇya", "skanda", "karttikeya"])
    def test_from_mapping_when_domain_alias_then_subrahmanya(self, key):
        assert ProsodyContext.from_mapping({key: True}).subrahmanya

    def test_from_mapping_when_vedic_hymn_only_then_domain_not_set(self):
        ctx = ProsodyContext.from_mapping({"vedic_hymn": True})
        assert not ctx.subrahmanya
        assert ctx.extra["vedic_hymn"] is True

    def test_from_mapping_when_aliases_disagree_then_any_truthy_wins(self):
        ctx = ProsodyContext.from_mapping({"ritual": False, "yajna": True})
        assert ctx.ritual

    def test_from_mapping_when_metre_alias_then_meter_lowercased(self):
        assert ProsodyContext.from_mapping({"metre": "Gāyatrī"}).meter == "gāyatrī"

    def test_from_mapping_when_bad_distance_then_raises(self):
        with pytest.raises(TypeError, match="distance_meters"):
            ProsodyContext.from_mapping({"distanceMeters": "far away"})

    def test_coerce_when_none_then_empty_context(self):
        assert ProsodyContext.coerce(None) == ProsodyContext()

    def test_coerce_when_list_then_raises(self):
        with pytest.raises(TypeError):
            ProsodyContext.coerce(["vocative"])

    def test_is_vocative_when_sambuddhi_then_true(self):
        assert ProsodyContext(grammatical_case="sambuddhi").is_vocative

    @pytest.mark.parametrize("ctx,expected", [
        (ProsodyContext(distance_category="far"), True),
        (ProsodyContext(distance_category="near"), False),
        (ProsodyContext(distance_meters=10), True),
        (ProsodyContext(distance_meters=9.9), False),
        (ProsodyContext(distance_meters=4, distance_threshold=3), True),
        (ProsodyContext(), False),
    ])
    def test_is_far_when_distance_given_then_threshold_inclusive(self, ctx, expected):
        assert ctx.is_far(10) is expected

    def test_is_metrical_when_meter_only_then_true(self):
        assert ProsodyContext(meter="triṣṭubh").is_metrical


class TestEngineConfig:

    def test_defaults_when_created_then_deva_in_lexicon(self, config):
        assert config.is_lexically_anudatta("deva")
        assert config.is_lexically_anudatta("DEVÁ")
        assert config.is_lexically_anudatta("देव")
        assert not config.is_lexically_anudatta("agni")

    def test_defaults_when_created_then_tables_read_only(self, config):
        with pytest.raises(TypeError):
            config.lexical_anudatta["indra"] = True  # type: ignore

    def test_normalize_token_when_accented_then_bare_casefolded(self):
        assert normalize_token("Bráhmaṇa") == "brahmaṇa"

    def test_is_known_meter_when_case_differs_then_true(self, config):
        assert config.is_known_meter("Triṣṭubh")
        assert not config.is_known_meter("bṛhatī")
        assert not config.is_known_meter(None)

    def test_init_when_tiers_overlap_then_raises(self):
        with pytest.raises(ValueError, match="moderate"):
            EngineConfig(limited_max_syllables=3, extended_min_syllables=4)

    def test_init_when_negative_threshold_then_raises(self):
        with pytest.raises(ValueError):
            EngineConfig(distance_threshold_m=-1)

    def test_weights_when_out_of_range_then_raises(self):
        with pytest.raises(ValueError, match="within"):
            ConfidenceWeights(base=1.5)

    def test_from_dict_when_lexicon_given_then_extends_defaults(self):
        config = EngineConfig.from_dict({"lexical_anudatta": {"indra": True}, "meters": {"Bṛhatī": 9}})
        assert config.is_lexically_anudatta("indra")
        assert config.is_lexically_anudatta("deva")
        assert config.meters["bṛhatī"] == 9

    def test_from_dict_when_lexicon_entry_false_then_disabled(self):
        config = EngineConfig.from_dict({"lexical_anudatta": {"deva": False}})
        assert not config.is_lexically_anudatta("deva")

    def test_from_dict_when_confidence_partial_then_other_weights_kept(self):
        config = EngineConfig.from_dict({"confidence": {"per_context_signal": 0.05}})
        assert config.confidence.per_context_signal == 0.05
        assert config.confidence.base == 0.5

    def test_from_dict_when_unknown_key_then_raises(self):
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            EngineConfig.from_dict({"threshold": 3})

    def test_from_dict_when_unknown_weight_then_raises(self):
        with pytest.raises(ValueError, match="confidence"):
            EngineConfig.from_dict({"confidence": {"bogus": 0.1}})

    def test_from_json_when_file_then_overlay_applied(self, config_file):
        config = EngineConfig.from_json(config_file({"distance_threshold_m": 25,
                                                     "sacred_syllables": ["om", "praṇava"]}))
        assert config.distance_threshold_m == 25
        assert "praṇava" in config.sacred_syllables

    def test_from_json_when_malformed_then_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Malformed"):
            EngineConfig.from_json(path)

    def test_from_json_when_path_is_directory_then_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Cannot read"):
            EngineConfig.from_json(tmp_path)

    def test_from_json_when_missing_then_defaults(self, tmp_path):
        assert EngineConfig.from_json(tmp_path / "absent.json") == EngineConfig()
