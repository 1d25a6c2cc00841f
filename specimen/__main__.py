"""
Generate and print one specimen

Usage:
    python -m specimen [species] [seed]

species is cat, alien or cat-alien (default); seed defaults to 42.
"""

import logging
import sys

from .catalog import ABILITIES, RULES
from .errors import SpecimenError
from .generation import GenerationConfig, generate_specimen


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = GenerationConfig(
            species=argv[0] if len(argv) > 0 else 'cat-alien',
            seed=int(argv[1]) if len(argv) > 1 else 42,
        )
        specimen = generate_specimen(config, RULES, ABILITIES)
    except (SpecimenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    p = specimen.phenotype
    print("\n" + "=" * 60)
    print(f"SPECIMEN ({p.species.value}, seed {config.seed})")
    print("=" * 60)
    print(f"Genome: {specimen.genome[:40]}...")

    print("\n--- Physical Traits ---")
    for key, value in p.physical_traits.to_dict().items():
        print(f"  {key:12} {value}")

    print("\n--- Stats ---")
    for key, value in p.stats.to_dict().items():
        print(f"  {key:12} {value:3d} {'#' * value}")

    print("\n--- Resistances ---")
    if p.resistances is None:
        print("  (none)")
    else:
        for key, value in p.resistances.to_dict().items():
            print(f"  {key:12} {value:3d}")

    print("\n--- Behavior ---")
    for key, value in p.behavior.to_dict().items():
        print(f"  {key:12} {value:3d}")

    print("\n--- Abilities ---")
    if not specimen.abilities:
        print("  (none)")
    for ability in specimen.abilities:
        print(f"  {ability.name}: {ability.description}")
    print()
    return 0


if __name__ == '__main__':
    sys.exit(main())
