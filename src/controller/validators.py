"""Validation of untrusted theme state against compiled constraints."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from model import Constraint, State

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyResult:
    """Outcome for one property: the value that was supplied and whether it was allowed."""

    value: str | None
    passed: bool


@dataclass(frozen=True)
class ValidationResult:
    """Sanitized state plus per-property results.

    ``values`` always holds exactly the constrained properties.
    ``passed`` is True only if every property passed.
    """

    passed: bool
    values: State
    results: dict[str, PropertyResult] = field(default_factory=dict)


def validate_value(
    constraint: Constraint, value: str | None, fallback: str | None = None
) -> tuple[str, bool]:
    """Sanitize a single value: own value, then fallback, then base.

    Args:
        constraint: Compiled constraint of the property
        value: Candidate value (may be None when absent)
        fallback: Value to use when the candidate is not allowed

    Returns:
        Tuple of (sanitized value, whether the candidate itself was allowed)
    """
    if value is not None and value in constraint.allowed:
        return value, True
    if fallback is not None and fallback in constraint.allowed:
        return fallback, False
    return constraint.base, False


def validate(
    constraints: Mapping[str, Constraint],
    candidate: Mapping[str, str],
    fallback: Mapping[str, str] | None = None,
) -> ValidationResult:
    """Validate a candidate state, falling back per property.

    Properties not in ``constraints`` are dropped. Constrained properties
    missing from ``candidate`` get the fallback value if it is allowed,
    otherwise the base value, and never count as passed.
    """
    fallback = fallback or {}
    values: State = {}
    results: dict[str, PropertyResult] = {}

    for prop in candidate:
        if prop not in constraints:
            log.debug(f"Dropping unhandled property '{prop}'")

    for prop, constraint in constraints.items():
        supplied = candidate.get(prop)
        value, passed = validate_value(constraint, supplied, fallback.get(prop))
        if supplied is not None and not passed:
            log.debug(f"Invalid value {supplied!r} for '{prop}', using {value!r}")
        values[prop] = value
        results[prop] = PropertyResult(value=supplied, passed=passed)

    return ValidationResult(
        passed=all(result.passed for result in results.values()),
        values=values,
        results=results,
    )
