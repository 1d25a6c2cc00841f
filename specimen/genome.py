"""
Genome strings - species alphabets, validation and random generation

A genome is an immutable 1000-symbol string. Which symbols it uses decides
its species:

    cat        A T C G
    alien      W X Y Z
    cat-alien  all eight (hybrid)

Generation is the only random step before interpretation, so it takes an
explicit numpy Generator. Pass a seeded one for reproducible genomes.

USAGE:
    import numpy as np
    from specimen.genome import Species, generate_genome, validate_genome

    genome = generate_genome(Species.ALIEN, rng=np.random.default_rng(7))
    report = validate_genome(genome)
    assert report.valid
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import InvalidGenomeError, InvalidInputError
from .regions import GENOME_LENGTH
from .sequence import ALIEN_SYMBOLS, CAT_SYMBOLS, SYMBOLS

log = logging.getLogger(__name__)

# Invalid symbols reported individually before summarising the rest
MAX_REPORTED_SYMBOLS = 10


# =============================================================================
# SPECIES
# =============================================================================

class Species(Enum):
    """Specimen families, keyed by the alphabet their genome uses."""
    CAT = "cat"
    ALIEN = "alien"
    HYBRID = "cat-alien"

    @property
    def symbols(self) -> Tuple[str, ...]:
        """Symbols a genome of this species may contain."""
        if self == Species.CAT:
            return CAT_SYMBOLS
        if self == Species.ALIEN:
            return ALIEN_SYMBOLS
        return SYMBOLS

    @classmethod
    def parse(cls, value: Union[str, 'Species']) -> 'Species':
        """Accept a Species, its value ('cat-alien') or its name ('HYBRID')."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for species in cls:
            if text.lower() == species.value or text.upper() == species.name:
                return species
        if text.lower() == 'hybrid':
            return cls.HYBRID
        raise InvalidInputError(f"Unknown species '{value}'")


# =============================================================================
# VALIDATION
# =============================================================================

@dataclass
class ValidationResult:
    """Outcome of validate_genome: overall flag plus every problem found."""
    valid: bool
    errors: List[str] = field(default_factory=list)


def validate_genome(genome: str, species: Optional[Species] = None) -> ValidationResult:
    """
    Check genome length and alphabet.

    With species given, symbols outside that species' alphabet count as
    invalid too. Only the first ten bad symbols are listed individually.
    """
    errors = []
    if not isinstance(genome, str):
        return ValidationResult(False, [f"Genome must be a string, got {type(genome).__name__}"])

    if len(genome) != GENOME_LENGTH:
        errors.append(f"Genome length must be {GENOME_LENGTH}, got {len(genome)}")

    allowed = set(species.symbols if species is not None else SYMBOLS)
    invalid = [(i, s) for i, s in enumerate(genome) if s not in allowed]
    for position, symbol in invalid[:MAX_REPORTED_SYMBOLS]:
        errors.append(f"Invalid symbol '{symbol}' at position {position}")
    remaining = len(invalid) - MAX_REPORTED_SYMBOLS
    if remaining > 0:
        errors.append(f"... and {remaining} more invalid symbol(s)")

    return ValidationResult(not errors, errors)


def is_valid_genome(genome: str, species: Optional[Species] = None) -> bool:
    return validate_genome(genome, species).valid


def require_valid_genome(genome: str, species: Optional[Species] = None) -> str:
    """Return the genome unchanged, or raise InvalidGenomeError listing the problems."""
    report = validate_genome(genome, species)
    if not report.valid:
        label = f" for species '{species.value}'" if species is not None else ""
        raise InvalidGenomeError(f"Invalid genome{label}", report.errors)
    return genome


# =============================================================================
# SPECIES DETECTION
# =============================================================================

def is_pure_cat_genome(genome: str) -> bool:
    """True when no alien bases are present."""
    return not any(s in ALIEN_SYMBOLS for s in genome)


def is_pure_alien_genome(genome: str) -> bool:
    """True when no cat bases are present."""
    return not any(s in CAT_SYMBOLS for s in genome)


def is_hybrid_genome(genome: str) -> bool:
    """True when both cat and alien bases are present."""
    return any(s in CAT_SYMBOLS for s in genome) and any(s in ALIEN_SYMBOLS for s in genome)


def detect_species(genome: str) -> Species:
    """
    Species implied by the genome's alphabet.

    A genome that mixes both families is a hybrid. An empty string has no
    alien bases and reads as cat.
    """
    if is_hybrid_genome(genome):
        return Species.HYBRID
    if genome and is_pure_alien_genome(genome):
        return Species.ALIEN
    return Species.CAT


# =============================================================================
# GENERATION
# =============================================================================

def generate_genome(
    species: Union[Species, str] = Species.HYBRID,
    rng: Optional[np.random.Generator] = None,
) -> str:
    """
    Draw a uniform random genome from the species alphabet.

    Args:
        species: Target species (decides the alphabet)
        rng: Random source; a fresh unseeded generator when omitted

    Returns:
        A validated 1000-symbol genome string
    """
    species = Species.parse(species)
    rng = rng if rng is not None else np.random.default_rng()

    symbols = np.array(species.symbols)
    genome = ''.join(symbols[rng.integers(0, len(symbols), size=GENOME_LENGTH)])

    require_valid_genome(genome, species)
    log.debug("Generated %s genome (%d symbols)", species.value, len(genome))
    return genome


__all__ = [
    'Species',
    'ValidationResult',
    'validate_genome',
    'is_valid_genome',
    'require_valid_genome',
    'is_pure_cat_genome',
    'is_pure_alien_genome',
    'is_hybrid_genome',
    'detect_species',
    'generate_genome',
]
