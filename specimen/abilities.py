"""
Ability Rule Engine - decide which special abilities a specimen gets

Rules and abilities arrive as plain records from the data store:

    rule     {abilityId, priority, chance, exclusiveGroup, conditions: [...]}
    condition {source: stat|trait|resistance|behavior, key, op, value}
    ability  {_id, key, name, description, isPassive}

SELECTION (independent rolls):
    1. Rules are taken in descending priority (ties keep input order).
    2. Every rule whose conditions all hold rolls once: granted when
       roll <= chance.
    3. Per exclusive group only the highest-priority success survives;
       ungrouped successes all survive.
    4. An ability granted by several rules appears once.

Conditions fail closed: a missing category, missing key or None value makes
the condition false, as does an unknown operator or a membership test
against a non-list value.

USAGE:
    engine = AbilityEngine(rule_records, ability_records)
    granted = engine.evaluate(phenotype, rng=np.random.default_rng(3))
"""

import logging
import numbers
import numpy as np
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .errors import InvalidRuleError
from .phenotype import Phenotype

log = logging.getLogger(__name__)

SOURCES = ('stat', 'trait', 'resistance', 'behavior')
OPERATORS = ('>=', '<=', '=', '!=', 'in', 'not_in')


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class Condition:
    """One test against a phenotype field."""
    source: str
    key: str
    op: str
    value: Any

    def to_dict(self) -> dict:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {'source': self.source, 'key': self.key, 'op': self.op, 'value': value}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Condition':
        if isinstance(d, Condition):
            return d
        if not isinstance(d, dict):
            raise InvalidRuleError(f"Condition must be a mapping, got {type(d).__name__}")
        for name in ('source', 'key', 'op'):
            if not isinstance(d.get(name), str):
                raise InvalidRuleError(f"Condition field '{name}' must be a string")
        if 'value' not in d:
            raise InvalidRuleError("Condition is missing 'value'")
        value = d['value']
        if isinstance(value, list):
            value = tuple(value)
        return cls(source=d['source'], key=d['key'], op=d['op'], value=value)


@dataclass(frozen=True)
class AbilityRule:
    """Gate + probability for granting one ability."""
    ability_id: str
    priority: int
    chance: float
    conditions: Tuple[Condition, ...] = field(default_factory=tuple)
    exclusive_group: Optional[str] = None
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            '_id': self.id,
            'abilityId': self.ability_id,
            'priority': self.priority,
            'chance': self.chance,
            'exclusiveGroup': self.exclusive_group,
            'conditions': [c.to_dict() for c in self.conditions],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'AbilityRule':
        """
        Build a rule from a stored record (camelCase or snake_case keys).

        Raises:
            InvalidRuleError: missing ability id, non-integer priority,
                chance outside [0, 1], or malformed conditions
        """
        if isinstance(d, AbilityRule):
            return d
        if not isinstance(d, dict):
            raise InvalidRuleError(f"Ability rule must be a mapping, got {type(d).__name__}")

        ability_id = _first(d, 'abilityId', 'ability_id')
        if ability_id is None or ability_id == '':
            raise InvalidRuleError("Ability rule is missing 'abilityId'")

        priority = d.get('priority')
        if isinstance(priority, bool) or not isinstance(priority, numbers.Integral):
            raise InvalidRuleError(f"Ability rule priority must be an integer, got {priority!r}")

        chance = d.get('chance')
        if isinstance(chance, bool) or not isinstance(chance, numbers.Real):
            raise InvalidRuleError(f"Ability rule chance must be a number, got {chance!r}")
        if not 0.0 <= float(chance) <= 1.0:
            raise InvalidRuleError(f"Ability rule chance must be within [0, 1], got {chance}")

        conditions = d.get('conditions', [])
        if not isinstance(conditions, (list, tuple)):
            raise InvalidRuleError("Ability rule conditions must be a list")

        group = _first(d, 'exclusiveGroup', 'exclusive_group')
        if group is not None and not isinstance(group, str):
            raise InvalidRuleError(f"Exclusive group must be a string or null, got {group!r}")

        rule_id = _first(d, '_id', 'id')
        return cls(
            ability_id=str(ability_id),
            priority=int(priority),
            chance=float(chance),
            conditions=tuple(Condition.from_dict(c) for c in conditions),
            exclusive_group=group or None,
            id=str(rule_id) if rule_id is not None else None,
        )


@dataclass(frozen=True)
class Ability:
    """Opaque ability payload handed back when granted."""
    id: str
    name: str
    description: str = ""
    key: Optional[str] = None
    is_passive: Optional[bool] = None

    def to_dict(self) -> dict:
        return {
            '_id': self.id,
            'key': self.key,
            'name': self.name,
            'description': self.description,
            'isPassive': self.is_passive,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Ability':
        if isinstance(d, Ability):
            return d
        if not isinstance(d, dict):
            raise InvalidRuleError(f"Ability must be a mapping, got {type(d).__name__}")
        ability_id = _first(d, '_id', 'id')
        if ability_id is None or ability_id == '':
            raise InvalidRuleError("Ability record is missing '_id'")
        if not isinstance(d.get('name'), str):
            raise InvalidRuleError(f"Ability {ability_id} is missing a name")
        return cls(
            id=str(ability_id),
            name=d['name'],
            description=d.get('description') or "",
            key=d.get('key'),
            is_passive=_first(d, 'isPassive', 'is_passive'),
        )


@dataclass(frozen=True)
class AbilityGrant:
    """A granted ability with the rule and roll that produced it."""
    ability: Ability
    rule: AbilityRule
    roll: float


def _first(d: Dict[str, Any], *names: str) -> Any:
    for name in names:
        if name in d and d[name] is not None:
            return d[name]
    return None


def load_rules(records: Iterable[Union[dict, AbilityRule]]) -> List[AbilityRule]:
    return [AbilityRule.from_dict(r) for r in records]


def load_abilities(records: Iterable[Union[dict, Ability]]) -> Dict[str, Ability]:
    """Index ability records by id."""
    abilities = {}
    for record in records:
        ability = Ability.from_dict(record)
        abilities[ability.id] = ability
    return abilities


# =============================================================================
# CONDITION EVALUATION
# =============================================================================

def _strict_equal(a: Any, b: Any) -> bool:
    # True must not match 1
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def _contains(collection: Any, value: Any) -> Optional[bool]:
    if not isinstance(collection, (list, tuple)):
        return None
    return any(_strict_equal(value, item) for item in collection)


def evaluate_condition(condition: Condition, phenotype: Phenotype) -> bool:
    """Test one condition; anything missing or unknown evaluates to False."""
    fields = phenotype.category(condition.source)
    if fields is None:
        return False
    actual = fields.get(condition.key)
    if actual is None:
        return False

    op = condition.op
    expected = condition.value
    try:
        if op == '>=':
            return bool(actual >= expected)
        if op == '<=':
            return bool(actual <= expected)
    except TypeError:
        return False
    if op == '=':
        return _strict_equal(actual, expected)
    if op == '!=':
        return not _strict_equal(actual, expected)
    if op == 'in':
        return _contains(expected, actual) is True
    if op == 'not_in':
        return _contains(expected, actual) is False
    return False


def evaluate_rule(rule: AbilityRule, phenotype: Phenotype) -> bool:
    """All conditions must hold; a rule without conditions always does."""
    return all(evaluate_condition(c, phenotype) for c in rule.conditions)


# =============================================================================
# ENGINE
# =============================================================================

def sort_rules(rules: Iterable[AbilityRule]) -> List[AbilityRule]:
    """Descending priority; equal priorities keep their input order."""
    return sorted(rules, key=lambda r: r.priority, reverse=True)


class AbilityEngine:
    """
    Holds one rule set and ability table and evaluates phenotypes against it.

    Rules and abilities are fixed at construction. An rng given here is
    shared by every call that does not pass its own, so successive
    evaluate() calls on it draw fresh rolls.
    """

    def __init__(
        self,
        rules: Iterable[Union[dict, AbilityRule]],
        abilities: Iterable[Union[dict, Ability]],
        rng: Optional[np.random.Generator] = None,
    ):
        self.rules = sort_rules(load_rules(rules))
        self.abilities = load_abilities(abilities)
        self.rng = rng

        for rule in self.rules:
            if rule.ability_id not in self.abilities:
                log.warning("Ability rule %s references unknown ability %s; it will be skipped",
                            rule.id or '<unsaved>', rule.ability_id)

    def eligible_rules(self, phenotype: Phenotype) -> List[AbilityRule]:
        """Rules (priority order) whose conditions hold and whose ability exists."""
        return [
            rule for rule in self.rules
            if rule.ability_id in self.abilities and evaluate_rule(rule, phenotype)
        ]

    def roll(self, phenotype: Phenotype,
             rng: Optional[np.random.Generator] = None) -> List[AbilityGrant]:
        """
        Roll every eligible rule and resolve exclusive groups.

        Returns the surviving grants in priority order.
        """
        rng = rng if rng is not None else self.rng
        if rng is None:
            rng = np.random.default_rng()

        successes = []
        for rule in self.eligible_rules(phenotype):
            roll = float(rng.random())
            granted = roll <= rule.chance
            log.debug("Rule %s -> %s: roll %.4f vs chance %.4f (%s)",
                      rule.id or '<unsaved>', rule.ability_id, roll, rule.chance,
                      'granted' if granted else 'missed')
            if granted:
                successes.append(AbilityGrant(self.abilities[rule.ability_id], rule, roll))

        used_groups = set()
        seen_abilities = set()
        grants = []
        for grant in successes:
            group = grant.rule.exclusive_group
            if group is not None:
                if group in used_groups:
                    continue
                used_groups.add(group)
            if grant.ability.id in seen_abilities:
                continue
            seen_abilities.add(grant.ability.id)
            grants.append(grant)
        return grants

    def evaluate(self, phenotype: Phenotype,
                 rng: Optional[np.random.Generator] = None) -> List[Ability]:
        """Granted abilities for a phenotype."""
        return [grant.ability for grant in self.roll(phenotype, rng)]

    def __repr__(self) -> str:
        return f"AbilityEngine(rules={len(self.rules)}, abilities={len(self.abilities)})"


def grant_abilities(
    phenotype: Phenotype,
    rules: Iterable[Union[dict, AbilityRule]],
    abilities: Iterable[Union[dict, Ability]],
    rng: Optional[np.random.Generator] = None,
) -> List[Ability]:
    """One-shot convenience wrapper around AbilityEngine.evaluate."""
    return AbilityEngine(rules, abilities).evaluate(phenotype, rng)


__all__ = [
    'SOURCES',
    'OPERATORS',
    'Condition',
    'AbilityRule',
    'Ability',
    'AbilityGrant',
    'load_rules',
    'load_abilities',
    'evaluate_condition',
    'evaluate_rule',
    'sort_rules',
    'AbilityEngine',
    'grant_abilities',
]
