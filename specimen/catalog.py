"""
Starter ability catalogue

A small built-in rule set in the stored record shape, used by the
`python -m specimen` demo and handy as fixture data. Records carry the
ability key as their id; a data store would use its own ids instead.
"""

from typing import Any, Dict, List


def _ability(key: str, name: str, description: str, is_passive: bool) -> Dict[str, Any]:
    return {'_id': key, 'key': key, 'name': name,
            'description': description, 'isPassive': is_passive}


def _rule(key: str, chance: float, priority: int, group, *conditions) -> Dict[str, Any]:
    return {
        'abilityId': key,
        'chance': chance,
        'priority': priority,
        'exclusiveGroup': group,
        'conditions': [
            {'source': source, 'key': field_key, 'op': op, 'value': value}
            for source, field_key, op, value in conditions
        ],
    }


ABILITIES: List[Dict[str, Any]] = [
    _ability('HIGH_JUMP', 'High Jump',
             'Can jump to extraordinary heights using powerful leg muscles', True),
    _ability('WALL_CLING', 'Wall Cling',
             'Can cling to vertical surfaces using sharp claws', True),
    _ability('GLIDE', 'Glide',
             'Can glide through the air using wing membranes', True),
    _ability('BURST_SPRINT', 'Burst Sprint',
             'Can achieve incredible bursts of speed over short distances', True),
    _ability('SERPENTINE_MOVEMENT', 'Serpentine Movement',
             'Can move efficiently with snake-like undulation', True),
    _ability('DIMENSION_BLINK', 'Dimension Blink',
             'Can briefly phase through dimensions to teleport short distances', False),
    _ability('RENDING_CLAWS', 'Rending Claws',
             'Claws capable of tearing through tough materials', True),
    _ability('VENOM_BITE', 'Venom Bite',
             'Delivers potent toxins through fanged bite', False),
    _ability('ACID_SPIT', 'Acid Spit',
             'Can project corrosive acid at range', False),
    _ability('CHARGE_ATTACK', 'Charge Attack',
             'Devastating charging tackle using mass and strength', False),
    _ability('NATURAL_ARMOUR', 'Natural Armour',
             'Thick protective skin provides damage resistance', True),
    _ability('TOXIN_METABOLISM', 'Toxin Metabolism',
             'Can metabolize and neutralize most toxins', True),
    _ability('THERMAL_ADAPTATION', 'Thermal Adaptation',
             'Body can adapt to extreme temperatures', True),
]

# Rarity-weighted: most chances sit around 8.5%
RULES: List[Dict[str, Any]] = [
    _rule('HIGH_JUMP', 0.085, 50, 'movement',
          ('stat', 'strength', '>=', 5),
          ('stat', 'agility', '>=', 4),
          ('trait', 'legs', '>=', 3)),
    _rule('WALL_CLING', 0.084, 45, None,
          ('trait', 'hasClaws', '=', True),
          ('stat', 'agility', '>=', 6),
          ('trait', 'size', '!=', 'massive')),
    _rule('GLIDE', 0.086, 55, 'movement',
          ('trait', 'wings', '>=', 1),
          ('stat', 'endurance', '>=', 4)),
    _rule('BURST_SPRINT', 0.087, 40, 'movement',
          ('stat', 'agility', '>=', 7),
          ('stat', 'endurance', '>=', 3)),
    _rule('SERPENTINE_MOVEMENT', 0.085, 35, 'movement',
          ('trait', 'legs', '<=', 2),
          ('stat', 'agility', '>=', 5)),
    _rule('DIMENSION_BLINK', 0.082, 80, 'movement',
          ('stat', 'psychic', '>=', 8),
          ('stat', 'agility', '>=', 6)),
    _rule('RENDING_CLAWS', 0.086, 50, None,
          ('trait', 'hasClaws', '=', True),
          ('stat', 'strength', '>=', 6)),
    _rule('VENOM_BITE', 0.084, 55, None,
          ('trait', 'hasFangs', '=', True),
          ('resistance', 'poison', '>=', 50)),
    _rule('ACID_SPIT', 0.083, 60, None,
          ('resistance', 'acid', '>=', 60),
          ('stat', 'intelligence', '>=', 4)),
    _rule('CHARGE_ATTACK', 0.085, 50, None,
          ('stat', 'strength', '>=', 7),
          ('trait', 'size', 'in', ['large', 'massive']),
          ('stat', 'endurance', '>=', 5)),
    _rule('NATURAL_ARMOUR', 0.086, 50, None,
          ('trait', 'skinType', 'in', ['scales', 'chitin']),
          ('stat', 'endurance', '>=', 6)),
    _rule('TOXIN_METABOLISM', 0.085, 40, None,
          ('resistance', 'poison', '>=', 70)),
    # two routes to the same ability
    _rule('THERMAL_ADAPTATION', 0.085, 45, None,
          ('resistance', 'fire', '>=', 60),
          ('stat', 'endurance', '>=', 4)),
    _rule('THERMAL_ADAPTATION', 0.085, 45, None,
          ('resistance', 'cold', '>=', 60),
          ('stat', 'endurance', '>=', 4)),
]


__all__ = ['ABILITIES', 'RULES']
