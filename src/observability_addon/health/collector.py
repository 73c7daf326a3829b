"""Collect probe feedback for a managed cluster from the addon's ManifestWorks."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client
from kubernetes.client.rest import ApiException

from observability_addon.health.models import FeedbackField, FeedbackValue, ResourceIdentifier
from observability_addon.health.registry import ProbeRegistry

logger = logging.getLogger(__name__)

WORK_GROUP = "work.open-cluster-management.io"
WORK_VERSION = "v1"
WORK_PLURAL = "manifestworks"
ADDON_NAME_LABEL = "open-cluster-management.io/addon-name"


def _parse_feedback_value(raw: dict[str, Any]) -> FeedbackValue:
    """Convert a statusFeedback value; types other than String/Integer are absent."""
    field_value = raw.get("fieldValue") or {}
    kind = field_value.get("type")
    if kind == "String":
        return FeedbackValue(name=raw.get("name", ""), string=field_value.get("string"))
    if kind == "Integer":
        return FeedbackValue(name=raw.get("name", ""), integer=field_value.get("integer"))
    return FeedbackValue(name=raw.get("name", ""))


def _resource_identifier(meta: dict[str, Any]) -> ResourceIdentifier:
    return ResourceIdentifier(
        group=meta.get("group") or "",
        resource=meta.get("resource") or "",
        name=meta.get("name") or "",
        namespace=meta.get("namespace") or "",
    )


def fields_from_manifestworks(works: list[dict[str, Any]], registry: ProbeRegistry) -> list[FeedbackField]:
    """Extract feedback fields for the registry's probed resources from ManifestWork objects."""
    probed = {spec.resource for spec in registry}
    fields: list[FeedbackField] = []
    for work in works:
        manifests = ((work.get("status") or {}).get("resourceStatus") or {}).get("manifests") or []
        for manifest in manifests:
            identifier = _resource_identifier(manifest.get("resourceMeta") or {})
            if identifier not in probed:
                continue
            raw_values = (manifest.get("statusFeedback") or {}).get("values") or []
            fields.append(
                FeedbackField(
                    resource=identifier,
                    values=[_parse_feedback_value(v) for v in raw_values],
                )
            )
    return fields


class FeedbackCollector:
    """Reads status feedback reported by a spoke for the addon's probed resources."""

    def __init__(self, api_client: client.ApiClient, registry: ProbeRegistry, addon_name: str) -> None:
        self.registry = registry
        self.addon_name = addon_name
        self._custom = client.CustomObjectsApi(api_client)

    def collect(self, cluster_name: str) -> list[FeedbackField]:
        """Collect feedback fields from ManifestWorks in the cluster namespace."""
        try:
            work_list = self._custom.list_namespaced_custom_object(
                group=WORK_GROUP,
                version=WORK_VERSION,
                namespace=cluster_name,
                plural=WORK_PLURAL,
                label_selector=f"{ADDON_NAME_LABEL}={self.addon_name}",
            )
        except ApiException as e:
            logger.warning("Failed to list manifestworks for %s: %s", cluster_name, e.reason)
            raise
        works = work_list.get("items") or []
        fields = fields_from_manifestworks(works, self.registry)
        logger.debug("Collected %d feedback fields from %d manifestworks", len(fields), len(works))
        return fields
