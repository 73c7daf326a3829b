"""Compose the logging values document from resolved options and fragments."""

from __future__ import annotations

import logging
from typing import Any

from observability_addon.values.models import (
    CollaboratorFragments,
    CollectionValues,
    LoggingValues,
    ManagedValues,
    ResourceFragment,
    ResourceValue,
    StorageValues,
    UnmanagedValues,
    canonical_json,
)
from observability_addon.values.options import Branch, FeatureOptions, active_branches

logger = logging.getLogger(__name__)


class ValuesBuildError(Exception):
    """A fragment could not be serialized; no document is produced."""


def _serialize(obj: Any, what: str) -> str:
    try:
        return canonical_json(obj)
    except (TypeError, ValueError) as e:
        raise ValuesBuildError(f"failed to serialize {what}: {e}") from e


def _resource_values(fragments: list[ResourceFragment], what: str) -> list[ResourceValue]:
    return [
        ResourceValue(name=f.name, data=_serialize(f.data, f"{what} {f.name}"))
        for f in fragments
    ]


def _unmanaged_values(fragments: CollaboratorFragments) -> UnmanagedValues:
    return UnmanagedValues(
        collection=CollectionValues(
            enabled=True,
            configmaps=_resource_values(fragments.configmaps, "configmap"),
            secrets=_resource_values(fragments.secrets, "secret"),
            # The logging operator reads feature flags from forwarder annotations
            clf_annotations=_serialize(fragments.clf_annotations, "ClusterLogForwarder annotations"),
            clf_spec=_serialize(fragments.clf_spec, "ClusterLogForwarder spec"),
        )
    )


def _managed_collection_values(fragments: CollaboratorFragments) -> CollectionValues:
    return CollectionValues(
        enabled=True,
        configmaps=_resource_values(fragments.managed_collection_configmaps, "configmap"),
        secrets=_resource_values(fragments.managed_collection_secrets, "secret"),
        clf_spec=_serialize(fragments.managed_clf_spec, "managed ClusterLogForwarder spec"),
    )


def _managed_storage_values(fragments: CollaboratorFragments) -> StorageValues:
    return StorageValues(
        enabled=True,
        secrets=_resource_values(fragments.managed_storage_secrets, "secret"),
        ls_spec=_serialize(fragments.managed_lokistack_spec, "LokiStack spec"),
    )


def build_values(options: FeatureOptions, fragments: CollaboratorFragments) -> LoggingValues:
    """
    Build the values document. Only branches selected by the options are populated;
    all others stay disabled and empty. Raises ValuesBuildError on serialization failure.
    """
    branches = active_branches(options)
    logger.debug("Active values branches: %s", sorted(b.value for b in branches))

    unmanaged = UnmanagedValues()
    if Branch.UNMANAGED_COLLECTION in branches:
        unmanaged = _unmanaged_values(fragments)

    managed = ManagedValues()
    if Branch.MANAGED_COLLECTION in branches:
        managed = ManagedValues(collection=_managed_collection_values(fragments))
    elif Branch.MANAGED_STORAGE in branches:
        managed = ManagedValues(storage=_managed_storage_values(fragments))

    return LoggingValues(
        enabled=options.unmanaged_collection_enabled or options.default_stack_enabled,
        openshift_logging_channel=options.subscription_channel,
        unmanaged=unmanaged,
        managed=managed,
    )
