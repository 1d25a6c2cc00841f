"""
Phenotype Assembler - raw interpretation to species-normalized phenotype

assemble(genome, species) = normalize(interpret_genome(genome), species)

normalize() never edits its input; it builds a fresh Phenotype:

    ALIEN      always winged, never furred, psychic 3-10, resistances
               shifted upward, stats/behaviour remapped to alien ranges
    CAT        fixed cat body (2 eyes, 4 legs, 1 tail, no wings, fur,
               claws, fangs), psychic at the floor, no resistances,
               stats/behaviour remapped to cat ranges
    CAT-ALIEN  raw interpretation kept as-is
"""

import logging
from dataclasses import replace
from typing import Union

from .genome import Species, require_valid_genome
from .interpretation import GenomeInterpretation, interpret_genome
from .interpreters import DebugInfo, InterpretationResult
from .phenotype import STAT_RANGE, Behavior, Phenotype, PhysicalTraits, Resistances, Stats
from .sequence import round_half_up

log = logging.getLogger(__name__)


# =============================================================================
# RANGE MAPPING
# =============================================================================

def map_range(value: int, target_min: int, target_max: int) -> int:
    """Map a 1..10 value linearly onto [target_min, target_max]."""
    return round_half_up(target_min + (value - 1) * (target_max - target_min) / 9)


def map_resistance_range(value: int, target_min: int, target_max: int) -> int:
    """Map a 0..100 value linearly onto [target_min, target_max]."""
    return round_half_up(target_min + value * (target_max - target_min) / 100)


# =============================================================================
# SPECIES NORMALIZATION
# =============================================================================

def _alien_skin(skin_type: str, genome: str) -> str:
    if skin_type != 'fur':
        return skin_type
    first = genome[:1] or 'W'
    if first in ('W', 'A'):
        return 'scales'
    if first in ('X', 'T'):
        return 'chitin'
    return 'skin'


def normalize_alien(raw: GenomeInterpretation) -> Phenotype:
    p = raw.phenotype
    traits = replace(
        p.physical_traits,
        wings=max(1, p.physical_traits.wings),
        skin_type=_alien_skin(p.physical_traits.skin_type, raw.genome),
    )
    stats = Stats(
        strength=map_range(p.stats.strength, 3, 9),
        agility=p.stats.agility,
        endurance=map_range(p.stats.endurance, 4, 10),
        intelligence=map_range(p.stats.intelligence, 4, 10),
        perception=map_range(p.stats.perception, 5, 10),
        psychic=map_range(max(p.stats.psychic, 1), 3, 10),
    )
    r = p.resistances
    resistances = Resistances(
        poison=map_resistance_range(r.poison, 30, 90),
        acid=map_resistance_range(r.acid, 30, 90),
        fire=r.fire,
        cold=r.cold,
        psychic=map_resistance_range(r.psychic, 40, 100),
        radiation=map_resistance_range(r.radiation, 50, 100),
    )
    behavior = Behavior(
        aggression=map_range(p.behavior.aggression, 3, 10),
        curiosity=map_range(p.behavior.curiosity, 5, 10),
        loyalty=p.behavior.loyalty,
        chaos=map_range(p.behavior.chaos, 4, 10),
    )
    return Phenotype(traits, stats, behavior, resistances, Species.ALIEN)


def normalize_cat(raw: GenomeInterpretation) -> Phenotype:
    p = raw.phenotype
    traits = PhysicalTraits(
        eyes=2,
        legs=4,
        wings=0,
        tails=1,
        skin_type='fur',
        size=p.physical_traits.size,
        colour=p.physical_traits.colour,
        has_claws=True,
        has_fangs=True,
    )
    stats = Stats(
        strength=map_range(p.stats.strength, 3, 7),
        agility=map_range(p.stats.agility, 6, 10),
        endurance=map_range(p.stats.endurance, 4, 8),
        intelligence=map_range(p.stats.intelligence, 5, 9),
        perception=map_range(p.stats.perception, 7, 10),
        psychic=STAT_RANGE[0],
    )
    behavior = Behavior(
        aggression=map_range(p.behavior.aggression, 2, 8),
        curiosity=map_range(p.behavior.curiosity, 7, 10),
        loyalty=map_range(p.behavior.loyalty, 3, 9),
        chaos=map_range(p.behavior.chaos, 5, 9),
    )
    return Phenotype(traits, stats, behavior, None, Species.CAT)


def normalize(raw: GenomeInterpretation, species: Union[Species, str]) -> Phenotype:
    """Apply the species transformation to a raw interpretation."""
    species = Species.parse(species)
    if species == Species.ALIEN:
        return normalize_alien(raw)
    if species == Species.CAT:
        return normalize_cat(raw)
    return replace(raw.phenotype, species=Species.HYBRID)


# =============================================================================
# ASSEMBLY
# =============================================================================

def assemble_traced(
    genome: str,
    species: Union[Species, str] = Species.HYBRID,
    debug: bool = False,
) -> InterpretationResult[Phenotype]:
    """
    Validate, interpret and normalize a genome.

    The genome must use only the species' alphabet. With debug on, the
    result's debug_info holds the per-region traces plus the raw
    (pre-normalization) phenotype.

    Raises:
        InvalidGenomeError: bad length, or symbols outside the species alphabet
    """
    species = Species.parse(species)
    require_valid_genome(genome, species)
    raw = interpret_genome(genome, debug=debug)
    phenotype = normalize(raw, species)

    result = InterpretationResult(phenotype)
    if debug:
        result.debug_info = DebugInfo(
            region='Genome',
            breakdown=dict(raw.debug_info or {}, raw_phenotype=raw.phenotype.to_dict()),
        )
        log.debug("Assembled %s phenotype: %s", species.value, phenotype.to_dict())
    return result


def assemble(genome: str, species: Union[Species, str] = Species.HYBRID) -> Phenotype:
    """Pure genome -> Phenotype; identical inputs give identical phenotypes."""
    return assemble_traced(genome, species).value


__all__ = [
    'map_range',
    'map_resistance_range',
    'normalize_alien',
    'normalize_cat',
    'normalize',
    'assemble_traced',
    'assemble',
]
