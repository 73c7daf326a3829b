"""Values document handed to the templating layer, and the fragments it is built from."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def canonical_json(obj: Any) -> str:
    """Deterministic JSON text: sorted keys, compact separators, no NaN/Infinity."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), allow_nan=False, ensure_ascii=False)


class ResourceValue(BaseModel):
    """A named secret or config map with its payload encoded as JSON text."""

    model_config = ConfigDict(frozen=True)

    name: str
    data: str


class CollectionValues(BaseModel):
    """Log collection section (ClusterLogForwarder and the resources it references)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = False
    clf_annotations: str = Field(default="", alias="clfAnnotations")
    clf_spec: str = Field(default="", alias="clfSpec")
    secrets: list[ResourceValue] = Field(default_factory=list)
    configmaps: list[ResourceValue] = Field(default_factory=list)

    @model_validator(mode="after")
    def _disabled_is_empty(self) -> CollectionValues:
        if not self.enabled and (self.clf_annotations or self.clf_spec or self.secrets or self.configmaps):
            raise ValueError("disabled collection section must not carry resources")
        return self


class StorageValues(BaseModel):
    """Log storage section (LokiStack on the hub)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = False
    secrets: list[ResourceValue] = Field(default_factory=list)
    ls_spec: str = Field(default="", alias="lsSpec")

    @model_validator(mode="after")
    def _disabled_is_empty(self) -> StorageValues:
        if not self.enabled and (self.ls_spec or self.secrets):
            raise ValueError("disabled storage section must not carry resources")
        return self


class UnmanagedValues(BaseModel):
    """Resources declared by the user."""

    model_config = ConfigDict(frozen=True)

    collection: CollectionValues = Field(default_factory=CollectionValues)


class ManagedValues(BaseModel):
    """Resources synthesized by the addon for the default stack."""

    model_config = ConfigDict(frozen=True)

    collection: CollectionValues = Field(default_factory=CollectionValues)
    storage: StorageValues = Field(default_factory=StorageValues)


class LoggingValues(BaseModel):
    """Top-level logging values document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = False
    openshift_logging_channel: str = Field(default="", alias="openshiftLoggingChannel")
    unmanaged: UnmanagedValues = Field(default_factory=UnmanagedValues)
    managed: ManagedValues = Field(default_factory=ManagedValues)

    def to_values(self) -> dict[str, Any]:
        """Render as the nested key/value mapping the chart consumes."""
        return self.model_dump(by_alias=True)

    def to_json(self) -> str:
        return canonical_json(self.to_values())


class ResourceFragment(BaseModel):
    """A secret or config map supplied by the caller: name plus opaque data."""

    name: str
    data: dict[str, Any] = Field(default_factory=dict)


class CollaboratorFragments(BaseModel):
    """Everything the composer may place into the document, gathered by the caller."""

    # User-declared collection
    clf_annotations: dict[str, str] = Field(default_factory=dict)
    clf_spec: dict[str, Any] = Field(default_factory=dict)
    secrets: list[ResourceFragment] = Field(default_factory=list)
    configmaps: list[ResourceFragment] = Field(default_factory=list)

    # Default stack, spoke side
    managed_collection_secrets: list[ResourceFragment] = Field(default_factory=list)
    managed_collection_configmaps: list[ResourceFragment] = Field(default_factory=list)
    managed_clf_spec: dict[str, Any] = Field(default_factory=dict)

    # Default stack, hub side
    managed_storage_secrets: list[ResourceFragment] = Field(default_factory=list)
    managed_lokistack_spec: dict[str, Any] = Field(default_factory=dict)
