import pytest

from specimen.genome import Species
from specimen.phenotype import Behavior, Phenotype, PhysicalTraits, Resistances, Stats


class FixedRng:
    """Stand-in random source that replays a fixed list of rolls."""

    def __init__(self, rolls):
        self.rolls = list(rolls)

    def random(self):
        return self.rolls.pop(0)


@pytest.fixture
def fixed_rng():
    return FixedRng


@pytest.fixture
def make_phenotype():
    """Build a phenotype with sensible defaults; keyword args override fields."""

    def build(species=Species.HYBRID, resistances=True, **overrides):
        traits = dict(eyes=2, legs=4, wings=0, tails=1, skin_type='fur', size='medium',
                      colour='#408040', has_claws=True, has_fangs=False)
        stats = dict(strength=5, agility=6, endurance=5, intelligence=4,
                     perception=7, psychic=3)
        res = dict(poison=40, acid=20, fire=60, cold=10, psychic=50, radiation=30)
        behavior = dict(aggression=3, curiosity=8, loyalty=5, chaos=2)
        for key, value in overrides.items():
            for group in (traits, stats, behavior):
                if key in group:
                    group[key] = value
                    break
            else:
                if key.startswith('res_'):
                    res[key[4:]] = value
                else:
                    raise KeyError(key)
        return Phenotype(
            physical_traits=PhysicalTraits(**traits),
            stats=Stats(**stats),
            behavior=Behavior(**behavior),
            resistances=Resistances(**res) if resistances else None,
            species=species,
        )

    return build
