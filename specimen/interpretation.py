"""
Region Interpreters - genome string to raw phenotype

One interpreter per biological region, each reading its own slice of the
genome through the formula templates in interpreters.py:

    Morphology  (0-399)   legs, tails, size, eyes, wings, skin, claws, fangs,
                          colour + perception, agility, endurance
    Metabolism  (400-599) poison, acid, fire, cold resistances
    Cognition   (600-799) intelligence + aggression, curiosity, loyalty, chaos
    Power       (800-999) strength, psychic + psychic, radiation resistances

interpret_genome() runs all four and merges them into an un-normalized
Phenotype. Species normalization happens afterwards in assembler.py.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .interpreters import (
    DebugInfo,
    InterpretationResult,
    aggression_from_runs,
    chaos_from_entropy,
    create_debug_info,
    curiosity_from_rare,
    interpret_generic_resistance,
    interpret_generic_stat,
    interpret_psychic_stat,
    interpret_strength_stat,
    loyalty_from_repeats,
)
from .genome import Species, require_valid_genome
from .phenotype import Behavior, Phenotype, PhysicalTraits, Resistances, Stats
from .regions import (
    COLOR_CHANNEL_WIDTH,
    COLOR_VALUES,
    MOTIFS,
    RESISTANCE_SLICES,
    SKIN_TYPE_BY_SYMBOL,
    SUBREGIONS,
    size_for_count,
)
from .sequence import (
    calculate_entropy,
    count_rare_symbols,
    count_symbol_runs,
    count_symbols,
    detect_tandem_repeats,
    extract_region,
    find_dominant_symbol,
    find_motifs,
    rgb_to_hex,
)

log = logging.getLogger(__name__)

MAX_APPENDAGES = 10


def _subregion(genome: str, key: str) -> str:
    sub = SUBREGIONS[key]
    return extract_region(genome, sub.start, sub.end)


def _appendages(segment: str) -> int:
    return min(MAX_APPENDAGES, len(detect_tandem_repeats(segment)))


# =============================================================================
# MORPHOLOGY
# =============================================================================

def interpret_body_plan(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Body Plan -> legs (first half), tails (second half), size."""
    segment = _subregion(genome, 'BODY_PLAN')
    half = len(segment) // 2
    legs = _appendages(segment[:half])
    tails = _appendages(segment[half:])

    dominant = find_dominant_symbol(segment)
    dominant_count = count_symbols(segment)[dominant]
    size = size_for_count(dominant_count)

    value = {'legs': legs, 'tails': tails, 'size': size}
    result = InterpretationResult(value)
    if debug:
        info = create_debug_info('Body Plan', segment, include_dominant=True,
                                 include_repeats=True)
        info.breakdown = dict(value, dominant_count=dominant_count)
        result.debug_info = info
    return result


def interpret_sensory(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Sensory -> eyes, perception."""
    segment = _subregion(genome, 'SENSORY')
    eyes = _appendages(segment)
    perception = interpret_generic_stat(segment, MOTIFS['PERCEPTION'], 'Sensory', debug)

    value = {'eyes': eyes, 'perception': perception.value}
    result = InterpretationResult(value)
    if debug:
        info = create_debug_info('Sensory', segment, motifs=MOTIFS['PERCEPTION'],
                                 include_entropy=True, include_repeats=True)
        info.breakdown = dict(value, perception_breakdown=perception.debug_info)
        result.debug_info = info
    return result


def interpret_locomotion(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Locomotion -> wings, agility."""
    segment = _subregion(genome, 'LOCOMOTION')
    wings = _appendages(segment)
    agility = interpret_generic_stat(segment, MOTIFS['AGILITY'], 'Locomotion', debug)

    value = {'wings': wings, 'agility': agility.value}
    result = InterpretationResult(value)
    if debug:
        info = create_debug_info('Locomotion', segment, motifs=MOTIFS['AGILITY'],
                                 include_entropy=True, include_repeats=True)
        info.breakdown = dict(value, agility_breakdown=agility.debug_info)
        result.debug_info = info
    return result


def interpret_colour(segment: str) -> str:
    """
    Average three consecutive channel slices (R, G, B) at the segment start
    through COLOR_VALUES and format as hex. Missing symbols count as 0.
    """
    channels = []
    for i in range(3):
        chunk = segment[i * COLOR_CHANNEL_WIDTH:(i + 1) * COLOR_CHANNEL_WIDTH]
        values = [COLOR_VALUES.get(s, 0) for s in chunk]
        values += [0] * (COLOR_CHANNEL_WIDTH - len(values))
        channels.append(float(np.mean(values)))
    return rgb_to_hex(*channels)


def interpret_defense(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Defense -> skin type, claws, fangs, colour, endurance."""
    segment = _subregion(genome, 'DEFENSE')
    dominant = find_dominant_symbol(segment)
    skin_type = SKIN_TYPE_BY_SYMBOL[dominant]
    has_claws = bool(find_motifs(segment, MOTIFS['CLAWS']))
    has_fangs = bool(find_motifs(segment, MOTIFS['FANGS']))
    colour = interpret_colour(segment)
    endurance = interpret_generic_stat(segment, MOTIFS['ENDURANCE'], 'Defense', debug)

    value = {
        'skin_type': skin_type,
        'has_claws': has_claws,
        'has_fangs': has_fangs,
        'colour': colour,
        'endurance': endurance.value,
    }
    result = InterpretationResult(value)
    if debug:
        motifs = MOTIFS['CLAWS'] + MOTIFS['FANGS'] + MOTIFS['ENDURANCE']
        info = create_debug_info('Defense', segment, motifs=motifs, include_entropy=True,
                                 include_dominant=True)
        info.breakdown = dict(value, endurance_breakdown=endurance.debug_info)
        result.debug_info = info
    return result


def interpret_morphology(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Morphology region -> PhysicalTraits plus perception, agility, endurance."""
    body = interpret_body_plan(genome, debug)
    sensory = interpret_sensory(genome, debug)
    locomotion = interpret_locomotion(genome, debug)
    defense = interpret_defense(genome, debug)

    traits = PhysicalTraits(
        eyes=sensory.value['eyes'],
        legs=body.value['legs'],
        wings=locomotion.value['wings'],
        tails=body.value['tails'],
        skin_type=defense.value['skin_type'],
        size=body.value['size'],
        colour=defense.value['colour'],
        has_claws=defense.value['has_claws'],
        has_fangs=defense.value['has_fangs'],
    )
    value = {
        'physical_traits': traits,
        'perception': sensory.value['perception'],
        'agility': locomotion.value['agility'],
        'endurance': defense.value['endurance'],
    }
    result = InterpretationResult(value)
    if debug:
        result.debug_info = DebugInfo(
            region='Morphology',
            breakdown={
                'body_plan': body.debug_info,
                'sensory': sensory.debug_info,
                'locomotion': locomotion.debug_info,
                'defense': defense.debug_info,
            },
        )
    return result


# =============================================================================
# METABOLISM
# =============================================================================

def _resistance(genome: str, name: str, motif_key: str, region: str,
                debug: bool) -> InterpretationResult[int]:
    start, end = RESISTANCE_SLICES[name]
    return interpret_generic_resistance(
        extract_region(genome, start, end), MOTIFS[motif_key], region, debug
    )


def interpret_metabolism(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, int]]:
    """
    Metabolism region -> poison, acid (Toxin Processing halves) and
    fire, cold (Thermal Regulation halves).
    """
    parts = {
        'poison': _resistance(genome, 'poison', 'POISON', 'Toxin Processing', debug),
        'acid': _resistance(genome, 'acid', 'ACID', 'Toxin Processing', debug),
        'fire': _resistance(genome, 'fire', 'FIRE', 'Thermal Regulation', debug),
        'cold': _resistance(genome, 'cold', 'COLD', 'Thermal Regulation', debug),
    }
    result = InterpretationResult({name: part.value for name, part in parts.items()})
    if debug:
        result.debug_info = DebugInfo(
            region='Metabolism',
            breakdown={name: part.debug_info for name, part in parts.items()},
        )
    return result


# =============================================================================
# COGNITION
# =============================================================================

def interpret_behavior(genome: str, debug: bool = False) -> InterpretationResult[Behavior]:
    """
    Behavioral Drivers -> four axes, each from a different measure:

        aggression  runs of 3+ identical symbols
        curiosity   rare symbols (fewer than 5 occurrences)
        loyalty     distinct tandem repeats
        chaos       entropy
    """
    segment = _subregion(genome, 'BEHAVIOR')
    runs = count_symbol_runs(segment, 3)
    rare = count_rare_symbols(segment, 5)
    repeats = detect_tandem_repeats(segment)
    entropy = calculate_entropy(segment)

    behavior = Behavior(
        aggression=aggression_from_runs(runs),
        curiosity=curiosity_from_rare(rare),
        loyalty=loyalty_from_repeats(len(repeats)),
        chaos=chaos_from_entropy(entropy),
    )
    result = InterpretationResult(behavior)
    if debug:
        info = create_debug_info('Behavioral Drivers', segment, include_entropy=True)
        info.repeating_patterns = repeats
        info.breakdown = {
            'runs': runs,
            'rare_count': rare,
            'repeat_count': len(repeats),
            'entropy': entropy,
            'behavior': behavior.to_dict(),
        }
        result.debug_info = info
    return result


def interpret_cognition(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, Any]]:
    """Cognition region -> intelligence plus Behavior."""
    intelligence = interpret_generic_stat(
        _subregion(genome, 'INTELLIGENCE'), MOTIFS['INTELLIGENCE'], 'Intelligence Core', debug
    )
    behavior = interpret_behavior(genome, debug)

    result = InterpretationResult({
        'intelligence': intelligence.value,
        'behavior': behavior.value,
    })
    if debug:
        result.debug_info = DebugInfo(
            region='Cognition',
            breakdown={
                'intelligence': intelligence.debug_info,
                'behavior': behavior.debug_info,
            },
        )
    return result


# =============================================================================
# POWER
# =============================================================================

def interpret_power(genome: str, debug: bool = False) -> InterpretationResult[Dict[str, int]]:
    """Power region -> strength, psychic stats and psychic, radiation resistances."""
    strength = interpret_strength_stat(_subregion(genome, 'PHYSICAL_POWER'), debug)
    psychic = interpret_psychic_stat(_subregion(genome, 'PSYCHIC'), debug)
    psychic_resistance = _resistance(genome, 'psychic', 'PSYCHIC_RESISTANCE',
                                     'Psychic Potential', debug)
    radiation = _resistance(genome, 'radiation', 'RADIATION', 'Psychic Potential', debug)

    result = InterpretationResult({
        'strength': strength.value,
        'psychic': psychic.value,
        'psychic_resistance': psychic_resistance.value,
        'radiation_resistance': radiation.value,
    })
    if debug:
        result.debug_info = DebugInfo(
            region='Power',
            breakdown={
                'strength': strength.debug_info,
                'psychic': psychic.debug_info,
                'psychic_resistance': psychic_resistance.debug_info,
                'radiation_resistance': radiation.debug_info,
            },
        )
    return result


# =============================================================================
# FULL INTERPRETATION
# =============================================================================

@dataclass(frozen=True)
class GenomeInterpretation:
    """Raw (un-normalized) phenotype of a genome plus optional per-region traces."""
    genome: str
    phenotype: Phenotype
    debug_info: Optional[Dict[str, DebugInfo]] = None


def interpret_genome(genome: str, debug: bool = False) -> GenomeInterpretation:
    """
    Interpret every region of a validated genome.

    Raises:
        InvalidGenomeError: wrong length or symbols outside the alphabet
    """
    require_valid_genome(genome)

    morphology = interpret_morphology(genome, debug)
    metabolism = interpret_metabolism(genome, debug)
    cognition = interpret_cognition(genome, debug)
    power = interpret_power(genome, debug)

    stats = Stats(
        strength=power.value['strength'],
        agility=morphology.value['agility'],
        endurance=morphology.value['endurance'],
        intelligence=cognition.value['intelligence'],
        perception=morphology.value['perception'],
        psychic=power.value['psychic'],
    )
    resistances = Resistances(
        poison=metabolism.value['poison'],
        acid=metabolism.value['acid'],
        fire=metabolism.value['fire'],
        cold=metabolism.value['cold'],
        psychic=power.value['psychic_resistance'],
        radiation=power.value['radiation_resistance'],
    )
    phenotype = Phenotype(
        physical_traits=morphology.value['physical_traits'],
        stats=stats,
        behavior=cognition.value['behavior'],
        resistances=resistances,
        species=Species.HYBRID,
    )

    debug_info = None
    if debug:
        debug_info = {
            'morphology': morphology.debug_info,
            'metabolism': metabolism.debug_info,
            'cognition': cognition.debug_info,
            'power': power.debug_info,
        }
        log.debug("Interpreted genome: stats=%s resistances=%s",
                  stats.to_dict(), resistances.to_dict())
    return GenomeInterpretation(genome=genome, phenotype=phenotype, debug_info=debug_info)


__all__ = [
    'interpret_body_plan',
    'interpret_sensory',
    'interpret_locomotion',
    'interpret_colour',
    'interpret_defense',
    'interpret_morphology',
    'interpret_metabolism',
    'interpret_behavior',
    'interpret_cognition',
    'interpret_power',
    'GenomeInterpretation',
    'interpret_genome',
]
