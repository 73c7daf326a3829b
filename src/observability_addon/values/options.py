"""Resolve feature options from the addon's declared intents."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from observability_addon.config import Settings


class AddonIntents(BaseModel):
    """Declared configuration for one managed cluster's addon."""

    customized_variables: dict[str, str] = Field(
        default_factory=dict,
        description="AddOnDeploymentConfig customizedVariables name -> value",
    )
    cluster_labels: dict[str, str] = Field(default_factory=dict, description="ManagedCluster labels")


class FeatureOptions(BaseModel):
    """Resolved toggles that select which values branches are populated."""

    model_config = ConfigDict(frozen=True)

    unmanaged_collection_enabled: bool = False
    default_stack_enabled: bool = False
    is_hub_cluster: bool = False
    subscription_channel: str = ""


class Branch(str, Enum):
    """Sections of the values document that can be populated."""

    UNMANAGED_COLLECTION = "unmanaged.collection"
    MANAGED_COLLECTION = "managed.collection"
    MANAGED_STORAGE = "managed.storage"


# (default_stack_enabled, is_hub_cluster) -> managed branches
_MANAGED_BRANCHES: dict[tuple[bool, bool], frozenset[Branch]] = {
    (False, False): frozenset(),
    (False, True): frozenset(),
    (True, False): frozenset({Branch.MANAGED_COLLECTION}),
    (True, True): frozenset({Branch.MANAGED_STORAGE}),
}


def active_branches(options: FeatureOptions) -> frozenset[Branch]:
    """Return the set of values branches enabled by the options."""
    branches = _MANAGED_BRANCHES[(options.default_stack_enabled, options.is_hub_cluster)]
    if options.unmanaged_collection_enabled:
        branches = branches | {Branch.UNMANAGED_COLLECTION}
    return branches


def resolve_options(intents: AddonIntents, settings: Settings) -> FeatureOptions:
    """Read the feature toggles from declared intents."""
    variables = intents.customized_variables
    return FeatureOptions(
        unmanaged_collection_enabled=(
            variables.get(settings.unmanaged_collection_variable) == settings.unmanaged_collection_value
        ),
        default_stack_enabled=variables.get(settings.default_stack_variable, "").lower() == "true",
        is_hub_cluster=intents.cluster_labels.get(settings.hub_cluster_label, "").lower() == "true",
        subscription_channel=(
            variables.get(settings.subscription_channel_variable) or settings.default_subscription_channel
        ),
    )
