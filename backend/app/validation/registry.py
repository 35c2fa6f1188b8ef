"""
Inventra Backend — Rule Registry
==================================

What:  Maps an entity key to its ordered rule set.
How:   A read-only mapping built once from the hand-authored tables.
Who:   Injected into FieldValidationMiddleware; queried once per bound request.

Concurrency:
    The mapping is a MappingProxyType over tuples, populated before the first
    request and never mutated afterwards, so concurrent reads need no locking.
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from app.validation.rules import RuleDefinition, RuleSet
from app.validation.tables import RULE_TABLES


class RuleRegistry:
    """Case-insensitive, immutable lookup of rule sets by entity key."""

    def __init__(self, tables: Mapping[str, Iterable[RuleDefinition]]):
        rule_sets = {}
        for key, rules in tables.items():
            normalized = key.lower()
            if normalized in rule_sets:
                raise ValueError(f"Duplicate entity key '{key}' in rule tables")
            rule_sets[normalized] = _freeze(key, rules)
        self._rule_sets: Mapping[str, RuleSet] = MappingProxyType(rule_sets)

    def resolve(self, entity_key: str) -> Optional[RuleSet]:
        """Returns the rule set for `entity_key`, or None if it is not registered."""
        return self._rule_sets.get(entity_key.lower())

    def entity_keys(self) -> List[str]:
        return sorted(self._rule_sets)

    def __contains__(self, entity_key: object) -> bool:
        return isinstance(entity_key, str) and entity_key.lower() in self._rule_sets

    def __len__(self) -> int:
        return len(self._rule_sets)


def _freeze(entity_key: str, rules: Iterable[RuleDefinition]) -> Tuple[RuleDefinition, ...]:
    """Copies a table into a tuple, rejecting repeated field names."""
    frozen = tuple(rules)
    names = [rule.name for rule in frozen]
    duplicates = {name for name in names if names.count(name) > 1}
    if duplicates:
        raise ValueError(
            f"Rule table '{entity_key}' repeats field(s): {', '.join(sorted(duplicates))}"
        )
    return frozen


def build_default_registry() -> RuleRegistry:
    """Builds the registry from the application's rule tables."""
    return RuleRegistry(RULE_TABLES)


# Process-wide default, built at import time
rule_registry = build_default_registry()
