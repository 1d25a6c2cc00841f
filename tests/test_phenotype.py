import pytest

from specimen.errors import InvalidInputError
from specimen.genome import Species
from specimen.phenotype import Phenotype, Stats


def test_to_dict_uses_document_keys(make_phenotype):
    d = make_phenotype().to_dict()
    assert d['type'] == 'cat-alien'
    assert d['physicalTraits']['skinType'] == 'fur'
    assert d['physicalTraits']['hasClaws'] is True
    assert d['stats']['agility'] == 6
    assert d['resistances']['fire'] == 60


def test_from_dict_restores_phenotype(make_phenotype):
    original = make_phenotype(species=Species.CAT, resistances=False)
    restored = Phenotype.from_dict(original.to_dict())
    assert restored == original
    assert restored.resistances is None


def test_json(make_phenotype):
    original = make_phenotype()
    assert Phenotype.from_json(original.to_json()) == original


def test_from_dict_missing_fields(make_phenotype):
    d = make_phenotype().to_dict()
    del d['stats']['psychic']
    with pytest.raises(InvalidInputError):
        Phenotype.from_dict(d)
    with pytest.raises(InvalidInputError):
        Phenotype.from_dict({'stats': {}})


def test_from_dict_rejects_empty_resistances(make_phenotype):
    d = make_phenotype().to_dict()
    d['resistances'] = {}
    with pytest.raises(InvalidInputError):
        Phenotype.from_dict(d)


def test_category(make_phenotype):
    p = make_phenotype()
    assert p.category('trait')['legs'] == 4
    assert p.category('stat')['psychic'] == 3
    assert p.category('behavior')['curiosity'] == 8
    assert p.category('resistance')['poison'] == 40
    assert p.category('mood') is None
    assert make_phenotype(resistances=False).category('resistance') is None


def test_range_violations(make_phenotype):
    assert make_phenotype().range_violations() == []

    bad = make_phenotype(strength=11, skin_type='feathers', legs=-1)
    problems = bad.range_violations()
    assert "stat strength=11 outside 1-10" in problems
    assert "trait legs=-1 outside 0-10" in problems
    assert any('feathers' in p for p in problems)


def test_stats_are_frozen(make_phenotype):
    p = make_phenotype()
    with pytest.raises(AttributeError):
        p.stats.strength = 9
    assert isinstance(p.stats, Stats)
