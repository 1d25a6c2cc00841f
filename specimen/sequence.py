"""
Sequence Analytics - statistical and pattern primitives over genome segments

Stateless helpers used by every region interpreter. All of them are total:
empty input gives zero counts / zero entropy, symbols outside the alphabet
are ignored, nothing raises.

ALPHABET:
    A T C G  - cat bases
    W X Y Z  - alien bases

USAGE:
    from specimen.sequence import calculate_entropy, detect_tandem_repeats

    calculate_entropy("ATCGATCG")            # 2.0
    detect_tandem_repeats("GCGCGC", 2, 2)    # ['CG', 'GC']
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterable, List


# =============================================================================
# ALPHABET
# =============================================================================

CAT_SYMBOLS = ('A', 'T', 'C', 'G')
ALIEN_SYMBOLS = ('W', 'X', 'Y', 'Z')
SYMBOLS = CAT_SYMBOLS + ALIEN_SYMBOLS

# Tie-break order for dominant symbol selection
DOMINANCE_ORDER = ('A', 'C', 'G', 'T', 'W', 'X', 'Y', 'Z')


@dataclass(frozen=True)
class MotifMatch:
    """A single motif occurrence inside a segment."""
    motif: str
    position: int


# =============================================================================
# FREQUENCY
# =============================================================================

def extract_region(genome: str, start: int, end: int) -> str:
    """Slice a genome by inclusive [start, end] offsets."""
    return genome[start:end + 1]


def count_symbols(segment: str) -> Dict[str, int]:
    """Count every alphabet symbol in the segment (absent symbols map to 0)."""
    counts = {symbol: 0 for symbol in SYMBOLS}
    for symbol in segment:
        if symbol in counts:
            counts[symbol] += 1
    return counts


def find_dominant_symbol(segment: str) -> str:
    """
    Most frequent symbol in the segment.

    Ties go to the earlier symbol in DOMINANCE_ORDER. An empty segment
    reports 'A'.
    """
    counts = count_symbols(segment)
    dominant = DOMINANCE_ORDER[0]
    max_count = 0
    for symbol in DOMINANCE_ORDER:
        if counts[symbol] > max_count:
            max_count = counts[symbol]
            dominant = symbol
    return dominant


def symbol_share(segment: str) -> float:
    """Fraction of the segment taken by its dominant symbol (0 when empty)."""
    if not segment:
        return 0.0
    counts = count_symbols(segment)
    return counts[find_dominant_symbol(segment)] / len(segment)


def calculate_entropy(segment: str) -> float:
    """
    Shannon entropy of the symbol distribution, in bits.

    0 for an empty or single-symbol segment, log2(k) for a segment split
    evenly across k symbols (3.0 at most for the full alphabet).
    """
    if not segment:
        return 0.0
    counts = np.array(list(count_symbols(segment).values()), dtype=float)
    total = counts.sum()
    if total == 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-(p * np.log2(p)).sum())


def count_rare_symbols(segment: str, threshold: int = 5) -> int:
    """Number of distinct symbols that occur, but fewer than threshold times."""
    return sum(1 for count in count_symbols(segment).values() if 0 < count < threshold)


def count_cat_dna(segment: str) -> int:
    """Number of cat bases (ATCG) in the segment."""
    return sum(1 for symbol in segment if symbol in CAT_SYMBOLS)


def count_alien_dna(segment: str) -> int:
    """Number of alien bases (WXYZ) in the segment."""
    return sum(1 for symbol in segment if symbol in ALIEN_SYMBOLS)


# =============================================================================
# PATTERNS
# =============================================================================

def detect_tandem_repeats(segment: str, min_len: int = 2, max_len: int = 5) -> List[str]:
    """
    Unique patterns that are immediately followed by an identical copy.

    "ATAT" is a tandem repeat of "AT". The result is the set of distinct
    patterns (sorted), not the number of occurrences.
    """
    repeats = set()
    n = len(segment)
    for length in range(max(1, min_len), max_len + 1):
        for i in range(0, n - 2 * length + 1):
            pattern = segment[i:i + length]
            if pattern == segment[i + length:i + 2 * length]:
                repeats.add(pattern)
    return sorted(repeats)


def count_symbol_runs(segment: str, min_run_length: int = 3) -> int:
    """Number of maximal single-symbol runs at least min_run_length long."""
    runs = 0
    current = ''
    length = 0
    for symbol in segment:
        if symbol == current:
            length += 1
            continue
        if length >= min_run_length:
            runs += 1
        current = symbol
        length = 1
    if length >= min_run_length:
        runs += 1
    return runs


def measure_fragmentation(segment: str, targets: Iterable[str]) -> int:
    """
    Count the separate stretches made of target symbols.

    "WWAWXA" with targets "WX" has 2 fragments.
    """
    targets = set(targets)
    fragments = 0
    inside = False
    for symbol in segment:
        if symbol in targets:
            if not inside:
                fragments += 1
                inside = True
        else:
            inside = False
    return fragments


def find_motifs(segment: str, motifs: Iterable[str]) -> List[MotifMatch]:
    """All occurrences of each motif, overlapping ones included."""
    matches = []
    for motif in motifs:
        if not motif:
            continue
        position = segment.find(motif)
        while position != -1:
            matches.append(MotifMatch(motif, position))
            position = segment.find(motif, position + 1)
    return matches


def count_unique_motifs(segment: str, motifs: Iterable[str]) -> int:
    """Number of distinct motifs present at least once."""
    return len({motif for motif in motifs if motif and motif in segment})


# =============================================================================
# COLOUR
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert 0-255 channel values to '#rrggbb' (rounded and clamped)."""
    channels = [min(255, max(0, round_half_up(c))) for c in (r, g, b)]
    return '#' + ''.join(f"{c:02x}" for c in channels)


__all__ = [
    'CAT_SYMBOLS',
    'ALIEN_SYMBOLS',
    'SYMBOLS',
    'DOMINANCE_ORDER',
    'MotifMatch',
    'extract_region',
    'count_symbols',
    'find_dominant_symbol',
    'symbol_share',
    'calculate_entropy',
    'count_rare_symbols',
    'count_cat_dna',
    'count_alien_dna',
    'detect_tandem_repeats',
    'count_symbol_runs',
    'measure_fragmentation',
    'find_motifs',
    'count_unique_motifs',
    'round_half_up',
    'rgb_to_hex',
]
