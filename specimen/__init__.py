# Specimen - Genome-Encoded Creature Generation
#
# A 1000-symbol genome (ATCG cat bases, WXYZ alien bases) is read region by
# region into a phenotype, normalized per species, then run through an
# ability rule set.
#
# PIPELINE:
# ├── sequence.py        - Symbol counts, entropy, repeats, motifs
# ├── regions.py         - Region map, motif sets, lookup tables
# ├── interpreters.py    - Generic stat/resistance + opposing-forces stats
# ├── interpretation.py  - Per-region interpreters -> raw phenotype
# ├── assembler.py       - Species normalization (cat / alien / hybrid)
# ├── abilities.py       - Condition rules, rolls, exclusive groups
# └── generation.py      - generate -> assemble -> grant, in one call
#
# Supporting: genome.py (species, validation, generation), phenotype.py
# (trait dataclasses), errors.py (exception hierarchy)

# =============================================================================
# PRIMARY EXPORTS: Pipeline
# =============================================================================

from .generation import (
    GenerationConfig,
    Specimen,
    generate_specimen,
)

from .assembler import (
    assemble,
    assemble_traced,
    normalize,
)

from .abilities import (
    Ability,
    AbilityEngine,
    AbilityGrant,
    AbilityRule,
    Condition,
    grant_abilities,
)

# =============================================================================
# SUPPORTING MODULES
# =============================================================================

# Genome alphabet, validation and random generation
from .genome import (
    Species,
    ValidationResult,
    validate_genome,
    generate_genome,
    detect_species,
)

# Phenotype data model
from .phenotype import (
    Phenotype,
    PhysicalTraits,
    Stats,
    Resistances,
    Behavior,
)

# Raw interpretation
from .interpretation import (
    GenomeInterpretation,
    interpret_genome,
)

from .interpreters import (
    DebugInfo,
    InterpretationResult,
)

# Region map
from .regions import (
    GENOME_LENGTH,
    GENOME_REGIONS,
    SUBREGIONS,
    MOTIFS,
)

# Errors
from .errors import (
    SpecimenError,
    InvalidInputError,
    InvalidGenomeError,
    InvalidRuleError,
)

__version__ = "1.0.0"

__all__ = [
    # Pipeline
    'GenerationConfig',
    'Specimen',
    'generate_specimen',
    'assemble',
    'assemble_traced',
    'normalize',
    'Ability',
    'AbilityEngine',
    'AbilityGrant',
    'AbilityRule',
    'Condition',
    'grant_abilities',
    # Genome
    'Species',
    'ValidationResult',
    'validate_genome',
    'generate_genome',
    'detect_species',
    # Phenotype
    'Phenotype',
    'PhysicalTraits',
    'Stats',
    'Resistances',
    'Behavior',
    # Interpretation
    'GenomeInterpretation',
    'interpret_genome',
    'DebugInfo',
    'InterpretationResult',
    # Regions
    'GENOME_LENGTH',
    'GENOME_REGIONS',
    'SUBREGIONS',
    'MOTIFS',
    # Errors
    'SpecimenError',
    'InvalidInputError',
    'InvalidGenomeError',
    'InvalidRuleError',
]
