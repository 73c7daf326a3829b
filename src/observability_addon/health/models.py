"""Structured models for probe declarations, spoke feedback and verdicts."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from observability_addon.health.errors import HealthCheckError


class ProbeRule(str, Enum):
    """How a reported feedback value is interpreted."""

    STRING_EQUALS = "string-equals"
    INTEGER_AT_LEAST = "integer-at-least"


# Expected literal / threshold used when a ProbeSpec does not set one
DEFAULT_EXPECTATIONS: dict[ProbeRule, str | int] = {
    ProbeRule.STRING_EQUALS: "True",
    ProbeRule.INTEGER_AT_LEAST: 1,
}


class HealthReason(str, Enum):
    """Machine-readable reasons for an unhealthy verdict."""

    NO_FIELDS_REPORTED = "no-fields-reported"
    UNKNOWN_PROBE_KEY = "unknown-probe-key"
    PROBE_VALUE_NIL = "probe-value-nil"
    CONDITION_NOT_SATISFIED = "condition-not-satisfied"
    UNKNOWN_RESOURCE = "unknown-resource"


class ResourceIdentifier(BaseModel):
    """Identifies one probed resource instance on a spoke cluster."""

    model_config = ConfigDict(frozen=True)

    group: str = ""
    resource: str
    name: str = ""
    namespace: str = ""

    def __str__(self) -> str:
        return f"{self.resource}/{self.namespace}/{self.name}"


class ProbeSpec(BaseModel):
    """Declares the expected feedback for one monitored resource kind."""

    model_config = ConfigDict(frozen=True)

    resource: ResourceIdentifier
    key: str = Field(..., description="Feedback value name reported for this resource")
    path: str = Field(default="", description="JSONPath the spoke agent evaluates to produce the value")
    rule: ProbeRule
    expected: str | int | None = Field(
        default=None,
        description="Expected literal (string-equals) or minimum (integer-at-least); rule default if unset",
    )

    @model_validator(mode="after")
    def _expected_matches_rule(self) -> ProbeSpec:
        if self.expected is None:
            return self
        expected_type = str if self.rule == ProbeRule.STRING_EQUALS else int
        if not isinstance(self.expected, expected_type):
            raise ValueError(
                f"{self.rule.value} probe for {self.resource} needs a {expected_type.__name__} expectation, "
                f"got {self.expected!r}"
            )
        return self

    @property
    def expectation(self) -> str | int:
        if self.expected is not None:
            return self.expected
        return DEFAULT_EXPECTATIONS[self.rule]

    def to_probe_field(self) -> dict[str, Any]:
        """Render as a ManifestWork feedback configuration entry."""
        return {
            "resourceIdentifier": {
                "group": self.resource.group,
                "resource": self.resource.resource,
                "name": self.resource.name,
                "namespace": self.resource.namespace,
            },
            "feedbackRules": [
                {
                    "type": "JSONPaths",
                    "jsonPaths": [{"name": self.key, "path": self.path}],
                }
            ],
        }


class FeedbackValue(BaseModel):
    """A single (key, value) observation; both slots unset means absent."""

    model_config = ConfigDict(frozen=True)

    name: str
    string: str | None = None
    integer: int | None = None


class FeedbackField(BaseModel):
    """Feedback reported for one probed resource instance."""

    model_config = ConfigDict(frozen=True)

    resource: ResourceIdentifier
    values: list[FeedbackValue] = Field(default_factory=list)


class EvaluationVerdict(BaseModel):
    """Outcome of one health evaluation; reason is set exactly when unhealthy."""

    model_config = ConfigDict(frozen=True)

    healthy: bool
    reason: HealthReason | None = None
    message: str = ""

    @classmethod
    def ok(cls) -> EvaluationVerdict:
        return cls(healthy=True, message="All probed resources are healthy.")

    @classmethod
    def from_error(cls, err: HealthCheckError) -> EvaluationVerdict:
        return cls(healthy=False, reason=err.reason, message=str(err))

    @model_validator(mode="after")
    def _reason_iff_unhealthy(self) -> EvaluationVerdict:
        if self.healthy != (self.reason is None):
            raise ValueError("a verdict carries a reason if and only if it is unhealthy")
        return self
