"""
Genome Region Map

Static layout of the 1000-symbol genome: which offsets feed which part of
the phenotype, the motif sets each interpreter searches for, and the
lookup tables for categorical traits.

LAYOUT (inclusive offsets):
    Morphology   0-399   Body Plan / Sensory / Locomotion / Defense
    Metabolism 400-599   Toxin Processing / Thermal Regulation
    Cognition  600-799   Intelligence Core / Behavioral Drivers
    Power      800-999   Physical Power / Psychic Potential

The leaf subregions partition [0, 999] exactly; check_partition() verifies it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


GENOME_LENGTH = 1000


# =============================================================================
# REGION DEFINITIONS
# =============================================================================

@dataclass(frozen=True)
class Subregion:
    """A named leaf range of the genome, inclusive on both ends."""
    name: str
    start: int
    end: int
    purpose: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


@dataclass(frozen=True)
class Region:
    """A top-level genome region made of contiguous subregions."""
    name: str
    start: int
    end: int
    description: str = ""
    subregions: Tuple[Subregion, ...] = field(default_factory=tuple)

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


GENOME_REGIONS: Dict[str, Region] = {
    'MORPHOLOGY': Region(
        name='Morphology', start=0, end=399,
        description='Controls physical structure and appearance',
        subregions=(
            Subregion('Body Plan', 0, 99, 'Determines legs, tails, size'),
            Subregion('Sensory', 100, 199, 'Determines eyes, perception stat'),
            Subregion('Locomotion', 200, 299, 'Determines wings, agility stat'),
            Subregion('Defense', 300, 399,
                      'Determines skin type, claws, fangs, endurance, colour'),
        ),
    ),
    'METABOLISM': Region(
        name='Metabolism', start=400, end=599,
        description='Controls internal systems and resistances',
        subregions=(
            Subregion('Toxin Processing', 400, 499, 'Determines poison, acid resistances'),
            Subregion('Thermal Regulation', 500, 599, 'Determines fire, cold resistances'),
        ),
    ),
    'COGNITION': Region(
        name='Cognition', start=600, end=799,
        description='Controls mental attributes and behavior',
        subregions=(
            Subregion('Intelligence Core', 600, 699, 'Determines intelligence stat'),
            Subregion('Behavioral Drivers', 700, 799,
                      'Determines aggression, curiosity, loyalty, chaos'),
        ),
    ),
    'POWER': Region(
        name='Power', start=800, end=999,
        description='Controls raw attributes',
        subregions=(
            Subregion('Physical Power', 800, 899, 'Determines strength stat'),
            Subregion('Psychic Potential', 900, 999,
                      'Determines psychic stat, psychic/radiation resistances'),
        ),
    ),
}


def _subregion_index() -> Dict[str, Subregion]:
    keys = {
        'Body Plan': 'BODY_PLAN',
        'Sensory': 'SENSORY',
        'Locomotion': 'LOCOMOTION',
        'Defense': 'DEFENSE',
        'Toxin Processing': 'TOXIN',
        'Thermal Regulation': 'THERMAL',
        'Intelligence Core': 'INTELLIGENCE',
        'Behavioral Drivers': 'BEHAVIOR',
        'Physical Power': 'PHYSICAL_POWER',
        'Psychic Potential': 'PSYCHIC',
    }
    return {
        keys[sub.name]: sub
        for region in GENOME_REGIONS.values()
        for sub in region.subregions
    }


# Quick access by constant name, e.g. SUBREGIONS['DEFENSE'].start
SUBREGIONS: Dict[str, Subregion] = _subregion_index()

# Fixed halves used by the resistance interpreters
RESISTANCE_SLICES: Dict[str, Tuple[int, int]] = {
    'poison': (400, 449),
    'acid': (450, 499),
    'fire': (500, 549),
    'cold': (550, 599),
    'psychic': (900, 949),
    'radiation': (950, 999),
}


# =============================================================================
# MOTIFS
# =============================================================================

MOTIFS: Dict[str, Tuple[str, ...]] = {
    # Boolean traits
    'CLAWS': ('ATG', 'WXZ'),
    'FANGS': ('CGT', 'YXW'),

    # Stats
    'STRENGTH': ('ATG', 'GTA', 'TAG', 'WXYZ', 'XYZW'),
    'AGILITY': ('AGT', 'GAT', 'TGA', 'WYXZ', 'XWZY'),
    'ENDURANCE': ('CAG', 'GCA', 'ACG', 'YWX', 'XYW'),
    'INTELLIGENCE': ('GCG', 'CGC', 'GCGC', 'ZYZ', 'YZY'),
    'PERCEPTION': ('TAC', 'ACT', 'CTA', 'XWY', 'WYX'),
    'PSYCHIC': ('CGAT', 'ATCG', 'YXWZ', 'WZYX'),

    # Resistances
    'POISON': ('ATT', 'TTA', 'AAT', 'WXX', 'XXW'),
    'ACID': ('CGG', 'GGC', 'CCG', 'YZZ', 'ZZY'),
    'FIRE': ('GGG', 'GGGG', 'ZZZ', 'ZZZZ'),
    'COLD': ('AAA', 'AAAA', 'WWW', 'WWWW'),
    'PSYCHIC_RESISTANCE': ('CGCG', 'GCGC', 'YXYX', 'XYXY'),
    'RADIATION': ('ATCG', 'GCTA', 'WXYZ', 'ZYXW'),
}


# =============================================================================
# SYMBOL MAPPINGS
# =============================================================================

# Defense-region dominant symbol -> skin type
SKIN_TYPE_BY_SYMBOL: Dict[str, str] = {
    'A': 'fur', 'T': 'scales', 'C': 'chitin', 'G': 'skin',
    'W': 'fur', 'X': 'scales', 'Y': 'chitin', 'Z': 'skin',
}

# Body Plan dominant symbol count (out of 100) -> size class
SIZE_THRESHOLDS: Tuple[Tuple[int, int, str], ...] = (
    (0, 19, 'tiny'),
    (20, 39, 'small'),
    (40, 59, 'medium'),
    (60, 79, 'large'),
    (80, 100, 'massive'),
)

# Symbol -> colour channel contribution (0-255)
COLOR_VALUES: Dict[str, int] = {
    'A': 0, 'T': 64, 'C': 192, 'G': 255,
    'W': 0, 'X': 64, 'Y': 192, 'Z': 255,
}

# Width of each colour channel slice at the start of the Defense region
COLOR_CHANNEL_WIDTH = 8


def size_for_count(count: int) -> str:
    """Size class for a dominant-symbol count; 'medium' outside the table."""
    for low, high, size in SIZE_THRESHOLDS:
        if low <= count <= high:
            return size
    return 'medium'


# =============================================================================
# PARTITION CHECKS
# =============================================================================

def leaf_subregions() -> List[Subregion]:
    """All leaf subregions ordered by start offset."""
    leaves = [sub for region in GENOME_REGIONS.values() for sub in region.subregions]
    return sorted(leaves, key=lambda s: s.start)


def check_partition(length: int = GENOME_LENGTH) -> List[str]:
    """
    Verify the leaf subregions tile [0, length - 1] exactly.

    Returns a list of problems; empty when the layout has no gaps, no
    overlaps and every subregion sits inside its parent region.
    """
    problems = []
    expected = 0
    for sub in leaf_subregions():
        if sub.start > expected:
            problems.append(f"Gap at offsets {expected}-{sub.start - 1}")
        elif sub.start < expected:
            problems.append(f"Overlap at offsets {sub.start}-{expected - 1} ({sub.name})")
        if sub.end < sub.start:
            problems.append(f"Empty subregion {sub.name}")
        expected = max(expected, sub.end + 1)
    if expected < length:
        problems.append(f"Gap at offsets {expected}-{length - 1}")
    elif expected > length:
        problems.append(f"Subregions run past genome end ({expected - 1})")

    for region in GENOME_REGIONS.values():
        for sub in region.subregions:
            if not (region.contains(sub.start) and region.contains(sub.end)):
                problems.append(f"{sub.name} lies outside region {region.name}")
    return problems


def region_for_offset(offset: int) -> Optional[Tuple[Region, Subregion]]:
    """Find the (region, subregion) owning an offset, or None when out of range."""
    for region in GENOME_REGIONS.values():
        if region.contains(offset):
            for sub in region.subregions:
                if sub.contains(offset):
                    return region, sub
    return None


__all__ = [
    'GENOME_LENGTH',
    'Subregion',
    'Region',
    'GENOME_REGIONS',
    'SUBREGIONS',
    'RESISTANCE_SLICES',
    'MOTIFS',
    'SKIN_TYPE_BY_SYMBOL',
    'SIZE_THRESHOLDS',
    'COLOR_VALUES',
    'COLOR_CHANNEL_WIDTH',
    'size_for_count',
    'leaf_subregions',
    'check_partition',
    'region_for_offset',
]
