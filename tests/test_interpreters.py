from specimen.interpreters import (
    aggression_from_runs,
    chaos_from_entropy,
    curiosity_from_rare,
    diversity_bonus,
    entropy_resistance_bonus,
    interpret_generic_resistance,
    interpret_generic_stat,
    interpret_psychic_stat,
    interpret_strength_stat,
    loyalty_from_repeats,
    raw_score_to_stat,
)
from specimen.regions import MOTIFS


class TestGenericStat:
    def test_empty_segment_is_minimum(self):
        assert interpret_generic_stat("", ("ATG",)).value == 1

    def test_homogeneous_segment(self):
        # 1 motif + no diversity + 2 (capped) repeats
        assert interpret_generic_stat("A" * 100, ("AAA",)).value == 4

    def test_diverse_motif_rich_segment(self):
        # 3 (capped motifs) + 3 (entropy > 2.5) + at least one repeat ("TATA")
        segment = "ATGGTATAGCAGGCAACG" + "ATCGWXYZ" * 10
        result = interpret_generic_stat(segment, MOTIFS['STRENGTH'] + MOTIFS['ENDURANCE'])
        assert 8 <= result.value <= 9

    def test_debug_trace(self):
        plain = interpret_generic_stat("A" * 100, ("AAA",))
        traced = interpret_generic_stat("A" * 100, ("AAA",), 'Sensory', debug=True)
        assert plain.debug_info is None
        assert traced.value == plain.value
        assert traced.debug_info.region == 'Sensory'
        assert traced.debug_info.breakdown['value'] == traced.value
        assert traced.debug_info.dominant_symbol == 'A'


class TestGenericResistance:
    def test_empty_segment_is_zero(self):
        assert interpret_generic_resistance("", ("AAA",)).value == 0

    def test_homogeneous_segment(self):
        # 50 (capped motifs) + 30 (full share) + 0 (no entropy)
        assert interpret_generic_resistance("A" * 50, MOTIFS['COLD']).value == 80

    def test_high_entropy_bonus(self):
        result = interpret_generic_resistance("ATCGWXYZ" * 6, ("QQQ",))
        # share 6/48 -> round(3.75) = 4; entropy 3.0 -> 20
        assert result.value == 24

    def test_bonus_steps(self):
        assert diversity_bonus(0.99) == 0
        assert diversity_bonus(1.0) == 1
        assert diversity_bonus(2.0) == 2
        assert diversity_bonus(2.5) == 3
        assert entropy_resistance_bonus(2.0) == 0
        assert entropy_resistance_bonus(2.5) == 10
        assert entropy_resistance_bonus(2.51) == 20


class TestPowerStats:
    def test_score_mapping(self):
        assert raw_score_to_stat(100) == 10
        assert raw_score_to_stat(-100) == 1
        assert raw_score_to_stat(0) == 1
        assert raw_score_to_stat(50) == 6

    def test_strength_of_homogeneous_segment(self):
        # specialization 40 + 8 + 0, chaos 0 + 0 + 2 -> raw 46
        assert interpret_strength_stat("A" * 100).value == 5

    def test_psychic_of_pure_alien_segment(self):
        # specialization 50 + 0 + 20, chaos 0 + 1 + 20 -> raw 49
        assert interpret_psychic_stat("W" * 100).value == 5

    def test_psychic_of_pure_cat_segment_is_minimum(self):
        assert interpret_psychic_stat("A" * 100).value == 1

    def test_power_debug_breakdown(self):
        result = interpret_strength_stat("A" * 100, debug=True)
        assert result.debug_info.breakdown['raw_score'] == 46
        assert result.debug_info.breakdown['mapping'] == "46/100 -> 5/10"


class TestBehaviorAxes:
    def test_aggression(self):
        assert aggression_from_runs(0) == 1
        assert aggression_from_runs(5) == 3
        assert aggression_from_runs(100) == 10

    def test_curiosity_and_loyalty(self):
        assert curiosity_from_rare(0) == 1
        assert curiosity_from_rare(12) == 10
        assert loyalty_from_repeats(4) == 5

    def test_chaos(self):
        assert chaos_from_entropy(0.0) == 1
        assert chaos_from_entropy(2.0) == 7
        assert chaos_from_entropy(3.0) == 10
