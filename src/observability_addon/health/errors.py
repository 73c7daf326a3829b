"""Typed failures raised while evaluating spoke feedback."""

from __future__ import annotations

from observability_addon.health.models import HealthReason, ResourceIdentifier


class HealthCheckError(Exception):
    """Base class: the addon is not healthy yet. Callers re-evaluate later."""

    reason: HealthReason

    def __init__(self, message: str, resource: ResourceIdentifier | None = None) -> None:
        super().__init__(f"{self.reason.value}: {message}")
        self.resource = resource


class NoFieldsReportedError(HealthCheckError):
    reason = HealthReason.NO_FIELDS_REPORTED

    def __init__(self) -> None:
        super().__init__("no feedback fields were reported by the health prober")


class UnknownProbeKeyError(HealthCheckError):
    reason = HealthReason.UNKNOWN_PROBE_KEY

    def __init__(self, resource: ResourceIdentifier, key: str, expected_key: str) -> None:
        super().__init__(
            f"{resource} reported unknown probe key {key!r} (expected {expected_key!r})",
            resource,
        )
        self.key = key


class ProbeValueNilError(HealthCheckError):
    reason = HealthReason.PROBE_VALUE_NIL

    def __init__(self, resource: ResourceIdentifier, key: str) -> None:
        super().__init__(f"{resource} reported no value for probe key {key!r}", resource)
        self.key = key


class ConditionNotSatisfiedError(HealthCheckError):
    reason = HealthReason.CONDITION_NOT_SATISFIED

    def __init__(self, resource: ResourceIdentifier, key: str, observed: str | int, expected: str) -> None:
        super().__init__(f"{resource} {key} is {observed!r}, expected {expected}", resource)
        self.key = key
        self.observed = observed


class UnknownResourceError(HealthCheckError):
    reason = HealthReason.UNKNOWN_RESOURCE

    def __init__(self, resource: ResourceIdentifier) -> None:
        super().__init__(f"no health check defined for {resource}", resource)
