"""
Trait Formulas - turn one genome segment into one number

Two reusable templates cover most of the phenotype:

    generic stat        1..10   motif variety + entropy steps + tandem repeats
    generic resistance  0..100  motif hits + dominant share + entropy bonus

Strength and Psychic have their own "opposing forces" interpreters: a
specialization score (what the stat rewards) minus a chaos penalty (what
works against it), mapped from roughly -100..+100 onto 1..10.

Every interpreter takes a debug flag. With debug on, the result carries a
DebugInfo describing how the value was reached; the value itself is the
same either way.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar

from .sequence import (
    ALIEN_SYMBOLS,
    calculate_entropy,
    count_alien_dna,
    count_cat_dna,
    count_rare_symbols,
    count_symbol_runs,
    count_symbols,
    count_unique_motifs,
    detect_tandem_repeats,
    find_dominant_symbol,
    find_motifs,
    measure_fragmentation,
    round_half_up,
    symbol_share,
)
from .regions import MOTIFS

T = TypeVar('T')

STAT_MIN, STAT_MAX = 1, 10
RESISTANCE_MIN, RESISTANCE_MAX = 0, 100
BEHAVIOR_MIN, BEHAVIOR_MAX = 1, 10

# Entropy steps for the generic stat diversity bonus (threshold, bonus)
DIVERSITY_STEPS = ((2.5, 3), (2.0, 2), (1.0, 1))


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass
class DebugInfo:
    """Trace of how a region or trait value was derived."""
    region: str
    symbol_frequencies: Dict[str, int] = field(default_factory=dict)
    found_motifs: List[str] = field(default_factory=list)
    entropy: Optional[float] = None
    dominant_symbol: Optional[str] = None
    repeating_patterns: Optional[List[str]] = None
    breakdown: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to dictionary (nested traces included)."""
        return {
            'region': self.region,
            'symbol_frequencies': dict(self.symbol_frequencies),
            'found_motifs': list(self.found_motifs),
            'entropy': self.entropy,
            'dominant_symbol': self.dominant_symbol,
            'repeating_patterns': self.repeating_patterns,
            'breakdown': _plain(self.breakdown),
        }


@dataclass
class InterpretationResult(Generic[T]):
    """A derived value plus the optional debug trace that explains it."""
    value: T
    debug_info: Optional[DebugInfo] = None


def _plain(obj: Any) -> Any:
    if isinstance(obj, DebugInfo):
        return obj.to_dict()
    if isinstance(obj, dict):
        return {k: _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    return obj


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def raw_score_to_stat(raw_score: float) -> int:
    """Map an opposing-forces score (-100..+100) onto the 1..10 stat scale."""
    return round_half_up(clamp(1 + (raw_score / 100) * 9, STAT_MIN, STAT_MAX))


def create_debug_info(
    region: str,
    segment: str,
    motifs: Optional[Iterable[str]] = None,
    include_entropy: bool = False,
    include_dominant: bool = False,
    include_repeats: bool = False,
) -> DebugInfo:
    """Build the common part of a debug trace for a segment."""
    info = DebugInfo(region=region, symbol_frequencies=count_symbols(segment))
    if motifs is not None:
        info.found_motifs = [m.motif for m in find_motifs(segment, motifs)]
    if include_entropy:
        info.entropy = calculate_entropy(segment)
    if include_dominant:
        info.dominant_symbol = find_dominant_symbol(segment)
    if include_repeats:
        info.repeating_patterns = detect_tandem_repeats(segment)
    return info


# =============================================================================
# GENERIC TEMPLATES
# =============================================================================

def diversity_bonus(entropy: float) -> int:
    """0-3 bonus stepped at entropy 1.0 / 2.0 / 2.5."""
    for threshold, bonus in DIVERSITY_STEPS:
        if entropy >= threshold:
            return bonus
    return 0


def interpret_generic_stat(
    segment: str,
    motifs: Iterable[str],
    region: str = "",
    debug: bool = False,
) -> InterpretationResult[int]:
    """
    value = clamp(1 + motif_bonus + diversity_bonus + repeat_bonus, 1, 10)

    motif_bonus   = min(3, distinct motifs present)
    repeat_bonus  = min(2, distinct tandem repeats)
    """
    motifs = tuple(motifs)
    unique_motifs = count_unique_motifs(segment, motifs)
    entropy = calculate_entropy(segment)
    repeats = detect_tandem_repeats(segment)

    motif_bonus = min(3, unique_motifs)
    entropy_bonus = diversity_bonus(entropy)
    repeat_bonus = min(2, len(repeats))
    value = int(clamp(1 + motif_bonus + entropy_bonus + repeat_bonus, STAT_MIN, STAT_MAX))

    result = InterpretationResult(value)
    if debug:
        info = create_debug_info(region, segment, motifs=motifs, include_entropy=True,
                                 include_dominant=True)
        info.repeating_patterns = repeats
        info.breakdown = {
            'unique_motifs': unique_motifs,
            'motif_bonus': motif_bonus,
            'diversity_bonus': entropy_bonus,
            'repeat_bonus': repeat_bonus,
            'value': value,
        }
        result.debug_info = info
    return result


def entropy_resistance_bonus(entropy: float) -> int:
    if entropy > 2.5:
        return 20
    if entropy > 2.0:
        return 10
    return 0


def interpret_generic_resistance(
    segment: str,
    motifs: Iterable[str],
    region: str = "",
    debug: bool = False,
) -> InterpretationResult[int]:
    """
    value = clamp(motif_bonus + frequency_bonus + entropy_bonus, 0, 100)

    motif_bonus     = min(50, motif occurrences * 10)
    frequency_bonus = round(dominant symbol share * 30)
    entropy_bonus   = 20 above 2.5 bits, 10 above 2.0, else 0
    """
    motifs = tuple(motifs)
    matches = find_motifs(segment, motifs)
    share = symbol_share(segment)
    entropy = calculate_entropy(segment)

    motif_bonus = min(50, len(matches) * 10)
    frequency_bonus = round_half_up(share * 30)
    entropy_bonus = entropy_resistance_bonus(entropy)
    value = int(clamp(motif_bonus + frequency_bonus + entropy_bonus,
                      RESISTANCE_MIN, RESISTANCE_MAX))

    result = InterpretationResult(value)
    if debug:
        info = create_debug_info(region, segment, include_dominant=True)
        info.found_motifs = [m.motif for m in matches]
        info.entropy = entropy
        info.breakdown = {
            'motif_occurrences': len(matches),
            'motif_bonus': motif_bonus,
            'dominant_share': share,
            'frequency_bonus': frequency_bonus,
            'entropy_bonus': entropy_bonus,
            'value': value,
        }
        result.debug_info = info
    return result


# =============================================================================
# DEDICATED POWER STATS
# =============================================================================

def interpret_strength_stat(segment: str, debug: bool = False) -> InterpretationResult[int]:
    """
    Strength - raw power from dominance and repetition.

    Favors homogeneity, long runs and strength motifs; penalized by
    entropy, rare symbols and a fragmented dominant symbol.
    """
    length = max(1, len(segment))
    dominant = find_dominant_symbol(segment)
    counts = count_symbols(segment)

    dominant_concentration = counts[dominant] / length * 40
    consecutive_runs = min(40, count_symbol_runs(segment, 4) * 8)
    motif_density = min(20, len(find_motifs(segment, MOTIFS['STRENGTH'])) * 2)
    specialization = dominant_concentration + consecutive_runs + motif_density

    entropy = calculate_entropy(segment)
    entropy_penalty = entropy / 3 * 50
    rare_penalty = count_rare_symbols(segment, 5) * 5
    fragmentation_penalty = min(20, measure_fragmentation(segment, dominant) * 2)
    chaos = entropy_penalty + rare_penalty + fragmentation_penalty

    raw_score = specialization - chaos
    value = raw_score_to_stat(raw_score)

    result = InterpretationResult(value)
    if debug:
        info = create_debug_info('Physical Power', segment, motifs=MOTIFS['STRENGTH'],
                                 include_dominant=True)
        info.entropy = entropy
        info.breakdown = {
            'specialization_score': round_half_up(specialization),
            'specialization_components': {
                'dominant_concentration': round_half_up(dominant_concentration),
                'consecutive_runs': consecutive_runs,
                'motif_density': motif_density,
            },
            'chaos_penalty': round_half_up(chaos),
            'chaos_components': {
                'entropy_penalty': round_half_up(entropy_penalty),
                'rare_symbol_penalty': rare_penalty,
                'fragmentation_penalty': fragmentation_penalty,
            },
            'raw_score': round_half_up(raw_score),
            'mapping': f"{round_half_up(raw_score)}/100 -> {value}/10",
        }
        result.debug_info = info
    return result


def interpret_psychic_stat(segment: str, debug: bool = False) -> InterpretationResult[int]:
    """
    Psychic - potential carried by alien bases.

    Favors alien concentration, psychic motifs and long alien stretches;
    penalized by cat bases, scattered alien bases and motif poverty.
    """
    length = max(1, len(segment))
    alien_count = count_alien_dna(segment)
    cat_count = count_cat_dna(segment)
    matches = find_motifs(segment, MOTIFS['PSYCHIC'])

    alien_fragments = measure_fragmentation(segment, ALIEN_SYMBOLS)
    alien_concentration = alien_count / length * 50
    motif_density = min(30, len(matches) * 5)
    mean_alien_run = max(1, math.ceil(alien_count / max(1, alien_fragments)))
    alien_run_bonus = min(20, mean_alien_run * 4)
    specialization = alien_concentration + motif_density + alien_run_bonus

    cat_interference = cat_count / length * 50
    disorder_penalty = (
        min(30, alien_fragments / max(1, alien_count) * 100) if alien_count > 0 else 0
    )
    unique_motifs = count_unique_motifs(segment, MOTIFS['PSYCHIC'])
    motif_poverty = (2 - unique_motifs) * 10 if unique_motifs < 2 else 0
    chaos = cat_interference + disorder_penalty + motif_poverty

    raw_score = specialization - chaos
    value = raw_score_to_stat(raw_score)

    result = InterpretationResult(value)
    if debug:
        info = create_debug_info('Psychic Potential', segment, include_entropy=True)
        info.found_motifs = [m.motif for m in matches]
        info.breakdown = {
            'specialization_score': round_half_up(specialization),
            'specialization_components': {
                'alien_concentration': round_half_up(alien_concentration),
                'esoteric_motif_density': motif_density,
                'alien_run_bonus': alien_run_bonus,
            },
            'chaos_penalty': round_half_up(chaos),
            'chaos_components': {
                'cat_dna_interference': round_half_up(cat_interference),
                'disorder_penalty': round_half_up(disorder_penalty),
                'motif_poverty_penalty': motif_poverty,
            },
            'raw_score': round_half_up(raw_score),
            'mapping': f"{round_half_up(raw_score)}/100 -> {value}/10",
        }
        result.debug_info = info
    return result


# =============================================================================
# BEHAVIOR AXES
# =============================================================================

def aggression_from_runs(runs: int) -> int:
    return int(clamp(1 + runs // 2, BEHAVIOR_MIN, BEHAVIOR_MAX))


def curiosity_from_rare(rare_count: int) -> int:
    return int(clamp(1 + rare_count, BEHAVIOR_MIN, BEHAVIOR_MAX))


def loyalty_from_repeats(repeat_count: int) -> int:
    return int(clamp(1 + repeat_count, BEHAVIOR_MIN, BEHAVIOR_MAX))


def chaos_from_entropy(entropy: float) -> int:
    return int(clamp(1 + math.floor(entropy * 3), BEHAVIOR_MIN, BEHAVIOR_MAX))


__all__ = [
    'DebugInfo',
    'InterpretationResult',
    'clamp',
    'raw_score_to_stat',
    'create_debug_info',
    'diversity_bonus',
    'interpret_generic_stat',
    'entropy_resistance_bonus',
    'interpret_generic_resistance',
    'interpret_strength_stat',
    'interpret_psychic_stat',
    'aggression_from_runs',
    'curiosity_from_rare',
    'loyalty_from_repeats',
    'chaos_from_entropy',
]
