"""Values layer: compose the logging values document for the templating layer."""

from observability_addon.values.composer import ValuesBuildError, build_values
from observability_addon.values.loader import IntentsLoader, ObjectKey, get_object_keys
from observability_addon.values.models import (
    CollaboratorFragments,
    CollectionValues,
    LoggingValues,
    ManagedValues,
    ResourceFragment,
    ResourceValue,
    StorageValues,
    UnmanagedValues,
)
from observability_addon.values.options import (
    AddonIntents,
    Branch,
    FeatureOptions,
    active_branches,
    resolve_options,
)

__all__ = [
    "ValuesBuildError",
    "build_values",
    "IntentsLoader",
    "ObjectKey",
    "get_object_keys",
    "CollaboratorFragments",
    "CollectionValues",
    "LoggingValues",
    "ManagedValues",
    "ResourceFragment",
    "ResourceValue",
    "StorageValues",
    "UnmanagedValues",
    "AddonIntents",
    "Branch",
    "FeatureOptions",
    "active_branches",
    "resolve_options",
]
