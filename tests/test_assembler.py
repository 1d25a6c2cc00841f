import json

import numpy as np
import pytest

from specimen.assembler import (
    assemble,
    assemble_traced,
    map_range,
    map_resistance_range,
    normalize,
)
from specimen.errors import InvalidGenomeError
from specimen.genome import Species, generate_genome
from specimen.interpretation import interpret_genome


def _genomes(species, count=15):
    rng = np.random.default_rng(2024)
    return [generate_genome(species, rng) for _ in range(count)]


class TestRangeMapping:
    def test_map_range_endpoints(self):
        assert map_range(1, 3, 9) == 3
        assert map_range(10, 3, 9) == 9
        assert map_range(5, 3, 9) == 6

    def test_map_resistance_range_endpoints(self):
        assert map_resistance_range(0, 30, 90) == 30
        assert map_resistance_range(100, 30, 90) == 90
        assert map_resistance_range(50, 50, 100) == 75


class TestCat:
    def test_uniform_cat(self):
        p = assemble('A' * 1000, Species.CAT)
        assert p.species is Species.CAT
        assert p.resistances is None
        traits = p.physical_traits
        assert (traits.eyes, traits.legs, traits.wings, traits.tails) == (2, 4, 0, 1)
        assert traits.skin_type == 'fur'
        assert traits.has_claws and traits.has_fangs
        assert traits.size == 'massive'
        assert p.stats.to_dict() == {
            'strength': 5, 'agility': 7, 'endurance': 5,
            'intelligence': 6, 'perception': 8, 'psychic': 1,
        }
        assert p.behavior.to_dict() == {'aggression': 2, 'curiosity': 7, 'loyalty': 6, 'chaos': 5}

    @pytest.mark.parametrize('genome', _genomes(Species.CAT))
    def test_cat_invariants(self, genome):
        p = assemble(genome, 'cat')
        assert p.range_violations() == []
        assert p.resistances is None
        assert p.stats.psychic == 1
        assert 6 <= p.stats.agility <= 10
        assert 7 <= p.behavior.curiosity <= 10

    def test_rejects_alien_symbols(self):
        with pytest.raises(InvalidGenomeError):
            assemble('W' * 1000, Species.CAT)


class TestAlien:
    def test_uniform_alien(self):
        p = assemble('W' * 1000, Species.ALIEN)
        assert p.species is Species.ALIEN
        assert p.physical_traits.wings == 4
        # raw 'fur' remapped by the leading W
        assert p.physical_traits.skin_type == 'scales'
        assert p.stats.to_dict() == {
            'strength': 6, 'agility': 3, 'endurance': 5,
            'intelligence': 5, 'perception': 6, 'psychic': 6,
        }
        assert p.resistances.to_dict() == {
            'poison': 48, 'acid': 48, 'fire': 30, 'cold': 80,
            'psychic': 58, 'radiation': 65,
        }
        assert p.behavior.to_dict() == {'aggression': 3, 'curiosity': 5, 'loyalty': 5, 'chaos': 4}

    @pytest.mark.parametrize('genome', _genomes(Species.ALIEN))
    def test_alien_invariants(self, genome):
        p = assemble(genome, 'alien')
        assert p.range_violations() == []
        assert p.physical_traits.wings >= 1
        assert p.physical_traits.skin_type != 'fur'
        assert p.stats.psychic >= 3
        assert p.resistances.radiation >= 50
        assert p.resistances.psychic >= 40

    def test_rejects_cat_symbols(self):
        with pytest.raises(InvalidGenomeError):
            assemble('A' * 1000, Species.ALIEN)


class TestHybrid:
    def test_hybrid_keeps_raw_values(self):
        genome = _genomes(Species.HYBRID, 1)[0]
        raw = interpret_genome(genome).phenotype
        p = assemble(genome)
        assert p.species is Species.HYBRID
        assert p == raw

    @pytest.mark.parametrize('genome', _genomes(Species.HYBRID))
    def test_hybrid_invariants(self, genome):
        assert assemble(genome, 'cat-alien').range_violations() == []


class TestPurity:
    def test_normalize_does_not_touch_input(self):
        raw = interpret_genome('W' * 1000)
        before = raw.phenotype.to_dict()
        normalize(raw, Species.ALIEN)
        normalize(raw, Species.CAT)
        assert raw.phenotype.to_dict() == before

    @pytest.mark.parametrize('species', list(Species))
    def test_deterministic(self, species):
        genome = _genomes(species, 1)[0]
        assert assemble(genome, species) == assemble(genome, species)

    @pytest.mark.parametrize('species', list(Species))
    def test_debug_is_a_side_channel(self, species):
        genome = _genomes(species, 1)[0]
        traced = assemble_traced(genome, species, debug=True)
        assert traced.value == assemble(genome, species)
        breakdown = traced.debug_info.breakdown
        assert {'morphology', 'metabolism', 'cognition', 'power', 'raw_phenotype'} <= set(breakdown)
        json.dumps(traced.debug_info.to_dict())
        assert assemble_traced(genome, species).debug_info is None
