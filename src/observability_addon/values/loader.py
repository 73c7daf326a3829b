"""Load addon intents and resource fragments from the hub cluster."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, NamedTuple

from kubernetes import client
from kubernetes.client.rest import ApiException

from observability_addon.config import Settings
from observability_addon.values.managed import build_managed_clf_spec, build_managed_lokistack_spec
from observability_addon.values.models import CollaboratorFragments, ResourceFragment
from observability_addon.values.options import (
    AddonIntents,
    Branch,
    FeatureOptions,
    active_branches,
    resolve_options,
)

logger = logging.getLogger(__name__)

ADDON_GROUP = "addon.open-cluster-management.io"
ADDON_VERSION = "v1alpha1"
CLUSTER_GROUP = "cluster.open-cluster-management.io"
CLUSTER_VERSION = "v1"


class ObjectKey(NamedTuple):
    name: str
    namespace: str


def get_object_keys(config_refs: list[dict[str, Any]], group: str, resource: str) -> list[ObjectKey]:
    """Return keys of the config references matching group and resource."""
    keys = []
    for ref in config_refs:
        if (ref.get("group") or "") != group:
            continue
        if ref.get("resource") != resource:
            continue
        keys.append(ObjectKey(name=ref.get("name", ""), namespace=ref.get("namespace", "")))
    return keys


class IntentsLoader:
    """Reads the hub objects that declare a managed cluster's observability configuration."""

    def __init__(self, api_client: client.ApiClient, settings: Settings) -> None:
        self.settings = settings
        self._custom = client.CustomObjectsApi(api_client)
        self._core = client.CoreV1Api(api_client)

    def _get_optional(self, what: str, fn: Callable[..., Any], **kwargs: Any) -> Any | None:
        """Call a read API; a missing object is logged and returns None."""
        try:
            return fn(**kwargs)
        except ApiException as e:
            if e.status == 404:
                logger.warning("%s not found: %s", what, kwargs.get("name"))
                return None
            raise

    def _config_refs(self, addon: dict[str, Any]) -> list[dict[str, Any]]:
        """Status references followed by spec configs not already referenced in status."""
        refs: list[dict[str, Any]] = []
        seen: set[tuple[str, str, str, str]] = set()
        candidates = list((addon.get("status") or {}).get("configReferences") or [])
        candidates.extend((addon.get("spec") or {}).get("configs") or [])
        for ref in candidates:
            key = (
                ref.get("group") or "",
                ref.get("resource") or "",
                ref.get("namespace") or "",
                ref.get("name") or "",
            )
            if key in seen:
                continue
            seen.add(key)
            refs.append(ref)
        return refs

    def load_addon(self, cluster_name: str) -> dict[str, Any]:
        return self._custom.get_namespaced_custom_object(
            group=ADDON_GROUP,
            version=ADDON_VERSION,
            namespace=cluster_name,
            plural="managedclusteraddons",
            name=self.settings.addon_name,
        )

    def load_intents(self, cluster_name: str, addon: dict[str, Any] | None = None) -> AddonIntents:
        """Collect customized variables and cluster labels for the cluster."""
        addon = addon if addon is not None else self.load_addon(cluster_name)
        variables: dict[str, str] = {}
        for key in get_object_keys(self._config_refs(addon), ADDON_GROUP, "addondeploymentconfigs"):
            adc = self._get_optional(
                "AddOnDeploymentConfig",
                self._custom.get_namespaced_custom_object,
                group=ADDON_GROUP,
                version=ADDON_VERSION,
                namespace=key.namespace,
                plural="addondeploymentconfigs",
                name=key.name,
            )
            if adc is None:
                continue
            for var in (adc.get("spec") or {}).get("customizedVariables") or []:
                variables[var.get("name", "")] = var.get("value", "")

        cluster = self._custom.get_cluster_custom_object(
            group=CLUSTER_GROUP,
            version=CLUSTER_VERSION,
            plural="managedclusters",
            name=cluster_name,
        )
        labels = dict((cluster.get("metadata") or {}).get("labels") or {})
        return AddonIntents(customized_variables=variables, cluster_labels=labels)

    def _secret(self, name: str, namespace: str) -> ResourceFragment | None:
        secret = self._get_optional("Secret", self._core.read_namespaced_secret, name=name, namespace=namespace)
        if secret is None:
            return None
        return ResourceFragment(name=name, data=dict(secret.data or {}))

    def _configmap(self, name: str, namespace: str) -> ResourceFragment | None:
        cm = self._get_optional("ConfigMap", self._core.read_namespaced_config_map, name=name, namespace=namespace)
        if cm is None:
            return None
        return ResourceFragment(name=name, data=dict(cm.data or {}))

    def load_fragments(
        self,
        cluster_name: str,
        options: FeatureOptions,
        addon: dict[str, Any] | None = None,
    ) -> CollaboratorFragments:
        """Gather the fragments needed by the branches the options activate."""
        branches = active_branches(options)
        fragments = CollaboratorFragments()
        s = self.settings

        if Branch.UNMANAGED_COLLECTION in branches:
            addon = addon if addon is not None else self.load_addon(cluster_name)
            refs = self._config_refs(addon)
            for key in get_object_keys(refs, s.clf_group, s.clf_resource):
                clf = self._get_optional(
                    "ClusterLogForwarder",
                    self._custom.get_namespaced_custom_object,
                    group=s.clf_group,
                    version=s.clf_version,
                    namespace=key.namespace,
                    plural=s.clf_resource,
                    name=key.name,
                )
                if clf is None:
                    continue
                fragments.clf_annotations = dict((clf.get("metadata") or {}).get("annotations") or {})
                fragments.clf_spec = dict(clf.get("spec") or {})
                # Only one forwarder is deployed per spoke
                break
            secrets = [self._secret(k.name, k.namespace) for k in get_object_keys(refs, "", "secrets")]
            fragments.secrets = [f for f in secrets if f is not None]
            configmaps = [self._configmap(k.name, k.namespace) for k in get_object_keys(refs, "", "configmaps")]
            fragments.configmaps = [f for f in configmaps if f is not None]

        if Branch.MANAGED_COLLECTION in branches:
            # The mTLS client certificate is issued into the cluster namespace
            secret = self._secret(s.managed_collection_secret, cluster_name)
            fragments.managed_collection_secrets = [secret] if secret else []
            ca_bundle = self._configmap(s.managed_collection_ca_configmap, s.addon_install_namespace)
            fragments.managed_collection_configmaps = [ca_bundle] if ca_bundle else []
            fragments.managed_clf_spec = build_managed_clf_spec(s, cluster_name)

        if Branch.MANAGED_STORAGE in branches:
            secret = self._secret(s.lokistack_storage_secret, s.addon_install_namespace)
            fragments.managed_storage_secrets = [secret] if secret else []
            fragments.managed_lokistack_spec = build_managed_lokistack_spec(s)

        return fragments

    def load(self, cluster_name: str) -> tuple[FeatureOptions, CollaboratorFragments]:
        """Resolve the cluster's options and gather the fragments its active branches need."""
        addon = self.load_addon(cluster_name)
        options = resolve_options(self.load_intents(cluster_name, addon), self.settings)
        logger.debug("Resolved options for %s: %s", cluster_name, options)
        return options, self.load_fragments(cluster_name, options, addon)
