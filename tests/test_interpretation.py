import json

import numpy as np
import pytest

from specimen.errors import InvalidGenomeError
from specimen.genome import Species, generate_genome
from specimen.interpretation import (
    interpret_behavior,
    interpret_body_plan,
    interpret_colour,
    interpret_defense,
    interpret_genome,
)

UNIFORM_CAT = 'A' * 1000


class TestRegionInterpreters:
    def test_body_plan(self):
        value = interpret_body_plan(UNIFORM_CAT).value
        # four distinct repeats (AA..AAAAA) in each half
        assert value == {'legs': 4, 'tails': 4, 'size': 'massive'}

    def test_defense(self):
        genome = 'A' * 300 + 'ATG' + 'T' * 97 + 'A' * 600
        value = interpret_defense(genome).value
        assert value['skin_type'] == 'scales'
        assert value['has_claws'] is True
        assert value['has_fangs'] is False

    def test_colour(self):
        assert interpret_colour('A' * 24) == '#000000'
        assert interpret_colour('G' * 8 + 'T' * 8 + 'C' * 8) == '#ff40c0'
        # short segment pads missing symbols with 0
        assert interpret_colour('G' * 4) == '#800000'

    def test_behavior(self):
        behavior = interpret_behavior(UNIFORM_CAT).value
        assert behavior.to_dict() == {'aggression': 1, 'curiosity': 1, 'loyalty': 5, 'chaos': 1}


class TestInterpretGenome:
    def test_uniform_genome(self):
        p = interpret_genome(UNIFORM_CAT).phenotype
        assert p.physical_traits.to_dict() == {
            'eyes': 4, 'legs': 4, 'wings': 4, 'tails': 4,
            'skinType': 'fur', 'size': 'massive', 'colour': '#000000',
            'hasClaws': False, 'hasFangs': False,
        }
        assert p.stats.to_dict() == {
            'strength': 5, 'agility': 3, 'endurance': 3,
            'intelligence': 3, 'perception': 3, 'psychic': 1,
        }
        assert p.resistances.to_dict() == {
            'poison': 30, 'acid': 30, 'fire': 30, 'cold': 80,
            'psychic': 30, 'radiation': 30,
        }

    def test_rejects_invalid_genome(self):
        with pytest.raises(InvalidGenomeError):
            interpret_genome('A' * 999)
        with pytest.raises(InvalidGenomeError):
            interpret_genome('B' * 1000)

    @pytest.mark.parametrize('seed', range(10))
    def test_raw_phenotype_within_ranges(self, seed):
        genome = generate_genome(Species.HYBRID, np.random.default_rng(seed))
        assert interpret_genome(genome).phenotype.range_violations() == []

    def test_deterministic(self):
        genome = generate_genome(Species.HYBRID, np.random.default_rng(5))
        assert interpret_genome(genome) == interpret_genome(genome)

    def test_debug_does_not_change_values(self):
        genome = generate_genome(Species.HYBRID, np.random.default_rng(6))
        plain = interpret_genome(genome)
        traced = interpret_genome(genome, debug=True)
        assert plain.debug_info is None
        assert traced.phenotype == plain.phenotype
        assert set(traced.debug_info) == {'morphology', 'metabolism', 'cognition', 'power'}
        # traces serialize to plain JSON
        json.dumps({k: v.to_dict() for k, v in traced.debug_info.items()})
