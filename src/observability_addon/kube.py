"""Kubernetes client loading shared by the hub adapters."""

from __future__ import annotations

from typing import Any

from kubernetes import client, config


def load_api_client(kubeconfig: str | None = None, context: str | None = None) -> client.ApiClient:
    """Load in-cluster or kubeconfig-based configuration and return an ApiClient."""
    try:
        config.load_incluster_config()
        return client.ApiClient(client.Configuration.get_default_copy())
    except config.ConfigException:
        pass
    kwargs: dict[str, Any] = {}
    if kubeconfig:
        kwargs["config_file"] = str(kubeconfig)
    if context:
        kwargs["context"] = context
    config.load_kube_config(**kwargs)
    return client.ApiClient(client.Configuration.get_default_copy())
