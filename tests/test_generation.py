import json

import numpy as np
import pytest

from specimen.__main__ import main
from specimen.catalog import ABILITIES, RULES
from specimen.errors import InvalidInputError
from specimen.generation import GenerationConfig, generate_specimen
from specimen.genome import Species

ALWAYS = [{'abilityId': 'BOON', 'priority': 1, 'chance': 1.0,
           'exclusiveGroup': None, 'conditions': []}]
BOON = [{'_id': 'BOON', 'key': 'BOON', 'name': 'Boon', 'description': 'Always there'}]


class TestConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.species is Species.HYBRID
        assert config.debug is False
        assert config.seed is None

    def test_species_string_is_parsed(self):
        assert GenerationConfig(species='alien').species is Species.ALIEN
        with pytest.raises(InvalidInputError):
            GenerationConfig(species='dog')

    def test_dict_round_trip(self):
        config = GenerationConfig(species=Species.CAT, debug=True, seed=4)
        assert config.to_dict() == {'species': 'cat', 'debug': True, 'seed': 4}
        assert GenerationConfig.from_dict(config.to_dict()) == config


class TestGenerateSpecimen:
    @pytest.mark.parametrize('species', list(Species))
    def test_specimen_matches_species(self, species):
        specimen = generate_specimen(GenerationConfig(species=species, seed=8), RULES, ABILITIES)
        assert specimen.species is species
        assert set(specimen.genome) <= set(species.symbols)
        assert specimen.phenotype.range_violations() == []
        assert specimen.debug_info is None

    def test_same_seed_same_specimen(self):
        config = GenerationConfig(species='cat-alien', seed=77)
        a = generate_specimen(config, RULES, ABILITIES)
        b = generate_specimen(config, RULES, ABILITIES)
        assert a.to_dict() == b.to_dict()

    def test_explicit_rng_wins_over_seed(self):
        config = GenerationConfig(seed=1)
        a = generate_specimen(config, rng=np.random.default_rng(2))
        b = generate_specimen(GenerationConfig(seed=2))
        assert a.genome == b.genome

    def test_unconditional_ability_granted(self):
        specimen = generate_specimen(GenerationConfig(seed=3), ALWAYS, BOON)
        assert [a.name for a in specimen.abilities] == ['Boon']

    def test_no_rules_no_abilities(self):
        assert generate_specimen(GenerationConfig(seed=3)).abilities == []

    def test_serialization(self):
        specimen = generate_specimen(GenerationConfig(species='cat', seed=5), ALWAYS, BOON)
        d = json.loads(specimen.to_json())
        assert d['type'] == 'cat'
        assert d['genome'] == specimen.genome
        assert d['resistances'] is None
        assert d['abilities'][0]['_id'] == 'BOON'
        assert 'debugInfo' not in d

    def test_debug_trace_attached(self):
        specimen = generate_specimen(GenerationConfig(species='alien', seed=5, debug=True))
        d = json.loads(specimen.to_json())
        assert d['debugInfo']['region'] == 'Genome'
        assert 'raw_phenotype' in d['debugInfo']['breakdown']


class TestDemo:
    def test_demo_prints_specimen(self, capsys):
        assert main(['alien', '3']) == 0
        out = capsys.readouterr().out
        assert 'SPECIMEN (alien, seed 3)' in out
        assert '--- Abilities ---' in out

    def test_demo_rejects_unknown_species(self, capsys):
        assert main(['dog']) == 1
        assert 'Unknown species' in capsys.readouterr().err
