"""
Phenotype - the assembled, species-normalized specimen traits

Four groups, each a frozen dataclass so a phenotype can never be edited
after assembly (regenerate instead):

    PhysicalTraits  counts 0-10, skin/size categories, colour, claws/fangs
    Stats           six stats, 1-10
    Resistances     six resistances, 0-100 (absent for cats)
    Behavior        four behaviour axes, 1-10

Serialized field names follow the stored document shape
(physicalTraits.skinType, hasClaws, ...), which is also the key space
ability rule conditions refer to.
"""

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError
from .genome import Species


SKIN_TYPES = ('fur', 'scales', 'chitin', 'skin')
SIZES = ('tiny', 'small', 'medium', 'large', 'massive')

TRAIT_COUNT_RANGE = (0, 10)
STAT_RANGE = (1, 10)
RESISTANCE_RANGE = (0, 100)
BEHAVIOR_RANGE = (1, 10)

# python attribute -> stored document key
_TRAIT_KEYS = {
    'eyes': 'eyes',
    'legs': 'legs',
    'wings': 'wings',
    'tails': 'tails',
    'skin_type': 'skinType',
    'size': 'size',
    'colour': 'colour',
    'has_claws': 'hasClaws',
    'has_fangs': 'hasFangs',
}


# =============================================================================
# TRAIT GROUPS
# =============================================================================

@dataclass(frozen=True)
class PhysicalTraits:
    """Body plan and appearance."""
    eyes: int
    legs: int
    wings: int
    tails: int
    skin_type: str
    size: str
    colour: str
    has_claws: bool
    has_fangs: bool

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, attr) for attr, key in _TRAIT_KEYS.items()}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'PhysicalTraits':
        values = {}
        for attr, key in _TRAIT_KEYS.items():
            if key in d:
                values[attr] = d[key]
            elif attr in d:
                values[attr] = d[attr]
            else:
                raise InvalidInputError(f"Physical traits missing '{key}'")
        return cls(**values)


@dataclass(frozen=True)
class Stats:
    strength: int
    agility: int
    endurance: int
    intelligence: int
    perception: int
    psychic: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Stats':
        return cls(**_pick(cls, d, 'Stats'))


@dataclass(frozen=True)
class Resistances:
    poison: int
    acid: int
    fire: int
    cold: int
    psychic: int
    radiation: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Resistances':
        return cls(**_pick(cls, d, 'Resistances'))


@dataclass(frozen=True)
class Behavior:
    aggression: int
    curiosity: int
    loyalty: int
    chaos: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Behavior':
        return cls(**_pick(cls, d, 'Behavior'))


def _pick(cls, d: Dict[str, Any], label: str) -> Dict[str, Any]:
    missing = [f.name for f in fields(cls) if f.name not in d]
    if missing:
        raise InvalidInputError(f"{label} missing {', '.join(missing)}")
    return {f.name: d[f.name] for f in fields(cls)}


# =============================================================================
# PHENOTYPE
# =============================================================================

@dataclass(frozen=True)
class Phenotype:
    """
    Complete specimen phenotype.

    resistances is None for species that carry none (cats).
    """
    physical_traits: PhysicalTraits
    stats: Stats
    behavior: Behavior
    resistances: Optional[Resistances] = None
    species: Species = Species.HYBRID

    def category(self, source: str) -> Optional[Dict[str, Any]]:
        """
        Field mapping for a rule condition source.

        source is one of 'trait', 'stat', 'resistance', 'behavior'. Unknown
        sources and absent groups give None.
        """
        if source == 'trait':
            return self.physical_traits.to_dict()
        if source == 'stat':
            return self.stats.to_dict()
        if source == 'resistance':
            return self.resistances.to_dict() if self.resistances is not None else None
        if source == 'behavior':
            return self.behavior.to_dict()
        return None

    def range_violations(self) -> List[str]:
        """Every field outside its declared range or category set."""
        problems = []
        traits = self.physical_traits
        for name in ('eyes', 'legs', 'wings', 'tails'):
            problems.extend(_check(f"trait {name}", getattr(traits, name), TRAIT_COUNT_RANGE))
        if traits.skin_type not in SKIN_TYPES:
            problems.append(f"trait skinType '{traits.skin_type}' is not a known skin type")
        if traits.size not in SIZES:
            problems.append(f"trait size '{traits.size}' is not a known size")
        if not (isinstance(traits.colour, str) and len(traits.colour) == 7
                and traits.colour.startswith('#')):
            problems.append(f"trait colour '{traits.colour}' is not #rrggbb")
        for name, value in self.stats.to_dict().items():
            problems.extend(_check(f"stat {name}", value, STAT_RANGE))
        if self.resistances is not None:
            for name, value in self.resistances.to_dict().items():
                problems.extend(_check(f"resistance {name}", value, RESISTANCE_RANGE))
        for name, value in self.behavior.to_dict().items():
            problems.extend(_check(f"behavior {name}", value, BEHAVIOR_RANGE))
        return problems

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored document shape."""
        return {
            'type': self.species.value,
            'physicalTraits': self.physical_traits.to_dict(),
            'stats': self.stats.to_dict(),
            'resistances': self.resistances.to_dict() if self.resistances is not None else None,
            'behavior': self.behavior.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Phenotype':
        """Deserialize from the stored document shape."""
        try:
            traits = d['physicalTraits']
            stats = d['stats']
            behavior = d['behavior']
        except (KeyError, TypeError) as e:
            raise InvalidInputError(f"Phenotype record missing {e}") from e
        resistances = d.get('resistances')
        return cls(
            physical_traits=PhysicalTraits.from_dict(traits),
            stats=Stats.from_dict(stats),
            behavior=Behavior.from_dict(behavior),
            resistances=Resistances.from_dict(resistances) if resistances is not None else None,
            species=Species.parse(d.get('type', Species.HYBRID.value)),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, s: str) -> 'Phenotype':
        return cls.from_dict(json.loads(s))


def _check(label: str, value: Any, bounds: Tuple[int, int]) -> List[str]:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        return [f"{label} is not an integer ({value!r})"]
    if not low <= value <= high:
        return [f"{label}={value} outside {low}-{high}"]
    return []


__all__ = [
    'SKIN_TYPES',
    'SIZES',
    'TRAIT_COUNT_RANGE',
    'STAT_RANGE',
    'RESISTANCE_RANGE',
    'BEHAVIOR_RANGE',
    'PhysicalTraits',
    'Stats',
    'Resistances',
    'Behavior',
    'Phenotype',
]
