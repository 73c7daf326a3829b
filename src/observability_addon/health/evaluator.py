"""Evaluate feedback reported by spokes against the probe registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from observability_addon.health.errors import (
    ConditionNotSatisfiedError,
    HealthCheckError,
    NoFieldsReportedError,
    ProbeValueNilError,
    UnknownProbeKeyError,
    UnknownResourceError,
)
from observability_addon.health.models import (
    EvaluationVerdict,
    FeedbackField,
    FeedbackValue,
    ProbeRule,
    ProbeSpec,
    ResourceIdentifier,
)
from observability_addon.health.registry import ProbeRegistry

logger = logging.getLogger(__name__)


def _check_string_equals(spec: ProbeSpec, resource: ResourceIdentifier, value: FeedbackValue) -> None:
    if value.string is None:
        raise ProbeValueNilError(resource, value.name)
    expected = str(spec.expectation)
    if value.string != expected:
        raise ConditionNotSatisfiedError(resource, value.name, value.string, f"{expected!r}")


def _check_integer_at_least(spec: ProbeSpec, resource: ResourceIdentifier, value: FeedbackValue) -> None:
    if value.integer is None:
        raise ProbeValueNilError(resource, value.name)
    threshold = int(spec.expectation)
    if value.integer < threshold:
        raise ConditionNotSatisfiedError(resource, value.name, value.integer, f">= {threshold}")


_RULE_CHECKS: dict[ProbeRule, Callable[[ProbeSpec, ResourceIdentifier, FeedbackValue], None]] = {
    ProbeRule.STRING_EQUALS: _check_string_equals,
    ProbeRule.INTEGER_AT_LEAST: _check_integer_at_least,
}


def check_health(fields: Sequence[FeedbackField], registry: ProbeRegistry) -> None:
    """
    Raise the first HealthCheckError found in the reported fields; return None when healthy.
    """
    if not fields:
        raise NoFieldsReportedError()
    for field in fields:
        if not field.values:
            # The resource may not be deployed on the spoke yet
            logger.debug("Skipping %s: no feedback values reported", field.resource)
            continue
        spec = registry.lookup(field.resource)
        if spec is None:
            raise UnknownResourceError(field.resource)
        check = _RULE_CHECKS[spec.rule]
        for value in field.values:
            if value.name != spec.key:
                raise UnknownProbeKeyError(field.resource, value.name, spec.key)
            check(spec, field.resource, value)


def evaluate(fields: Sequence[FeedbackField], registry: ProbeRegistry) -> EvaluationVerdict:
    """Evaluate reported fields and return a healthy or unhealthy verdict."""
    try:
        check_health(fields, registry)
    except HealthCheckError as e:
        logger.info("Addon not healthy: %s", e)
        return EvaluationVerdict.from_error(e)
    return EvaluationVerdict.ok()
