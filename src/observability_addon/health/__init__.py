"""Health layer: evaluate feedback reported by spoke clusters."""

from observability_addon.health.collector import FeedbackCollector
from observability_addon.health.errors import (
    ConditionNotSatisfiedError,
    HealthCheckError,
    NoFieldsReportedError,
    ProbeValueNilError,
    UnknownProbeKeyError,
    UnknownResourceError,
)
from observability_addon.health.evaluator import check_health, evaluate
from observability_addon.health.models import (
    EvaluationVerdict,
    FeedbackField,
    FeedbackValue,
    HealthReason,
    ProbeRule,
    ProbeSpec,
    ResourceIdentifier,
)
from observability_addon.health.registry import ProbeRegistry, default_registry

__all__ = [
    "FeedbackCollector",
    "ConditionNotSatisfiedError",
    "HealthCheckError",
    "NoFieldsReportedError",
    "ProbeValueNilError",
    "UnknownProbeKeyError",
    "UnknownResourceError",
    "check_health",
    "evaluate",
    "EvaluationVerdict",
    "FeedbackField",
    "FeedbackValue",
    "HealthReason",
    "ProbeRule",
    "ProbeSpec",
    "ResourceIdentifier",
    "ProbeRegistry",
    "default_registry",
]
