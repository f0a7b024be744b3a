from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

MINIMUM_AGE = 18


@dataclass(frozen=True)
class Rule:
    tag: str
    check: Callable[[Any], bool]
    param: str = ""


@dataclass(frozen=True)
class Violation:
    field: str
    tag: str
    param: str
    value: Any


def _size(value: Any) -> int | float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return len(value)


def required() -> Rule:
    return Rule(tag="required", check=lambda value: value is not None and value != "" and value != 0)


def min_length(limit: int) -> Rule:
    return Rule(tag="min", param=str(limit), check=lambda value: _size(value) >= limit)


def max_length(limit: int) -> Rule:
    return Rule(tag="max", param=str(limit), check=lambda value: _size(value) <= limit)


def accept_age(minimum: int = MINIMUM_AGE) -> Rule:
    return Rule(tag="acceptAge", check=lambda value: isinstance(value, int) and value >= minimum)


# Field order here is the order violations are reported in.
USER_CREATE_RULES: dict[str, list[Rule]] = {
    "firstName": [required(), min_length(2)],
    "lastName": [required()],
    "email": [required()],
    "password": [required(), min_length(8), max_length(16)],
    "age": [required(), accept_age()],
}


def validate(payload: Mapping[str, Any], rules: Mapping[str, list[Rule]] = USER_CREATE_RULES) -> list[Violation]:
    """Check ``payload`` against ``rules``; an empty list means the payload is valid.

    Rules for a field are evaluated in order and stop at the first failure, so a
    field contributes at most one violation. A missing field fails ``required``
    before any other rule sees it.
    """

    violations: list[Violation] = []
    for field, field_rules in rules.items():
        value = payload.get(field)
        for rule in field_rules:
            if not rule.check(value):
                violations.append(Violation(field=field, tag=rule.tag, param=rule.param, value=value))
                break
    return violations
