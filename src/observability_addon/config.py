"""Configuration and environment for the observability addon."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Addon settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="OBS_ADDON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")
    addon_name: str = Field(
        default="multicluster-observability-addon",
        description="Name of the ManagedClusterAddOn and its AddOnDeploymentConfig",
    )
    addon_install_namespace: str = Field(
        default="open-cluster-management",
        description="Hub namespace holding the addon's configuration objects",
    )

    # Log forwarding on the spoke
    clf_group: str = Field(default="observability.openshift.io")
    clf_version: str = Field(default="v1")
    clf_resource: str = Field(default="clusterlogforwarders")
    clf_name: str = Field(default="mcoa-instance", description="ClusterLogForwarder deployed on spokes")
    clf_namespace: str = Field(default="openshift-logging")
    clf_probe_key: str = Field(default="status")
    clf_probe_path: str = Field(default='.status.conditions[?(@.type=="Ready")].status')

    # Tracing on the spoke
    otelcol_group: str = Field(default="opentelemetry.io")
    otelcol_resource: str = Field(default="opentelemetrycollectors")
    otelcol_name: str = Field(default="mcoa-instance", description="OpenTelemetryCollector deployed on spokes")
    otelcol_namespace: str = Field(default="mcoa-opentelemetry")
    otelcol_probe_key: str = Field(default="replicas")
    otelcol_probe_path: str = Field(default=".spec.replicas")

    # Feature intents (AddOnDeploymentConfig customized variables / cluster labels)
    unmanaged_collection_variable: str = Field(default="platformLogsCollection")
    unmanaged_collection_value: str = Field(
        default="clusterlogforwarders.v1.observability.openshift.io",
        description="Value of the collection variable that requests a user-managed forwarder",
    )
    default_stack_variable: str = Field(default="platformLogsDefault")
    subscription_channel_variable: str = Field(default="openshiftLoggingChannel")
    default_subscription_channel: str = Field(default="stable-6.0")
    hub_cluster_label: str = Field(default="local-cluster")

    # Default (managed) stack
    lokistack_name: str = Field(default="mcoa-managed-instance")
    lokistack_namespace: str = Field(default="openshift-logging")
    lokistack_size: str = Field(default="1x.extra-small")
    lokistack_storage_class: str = Field(default="gp3-csi")
    lokistack_storage_secret: str = Field(default="logging-storage-secret")
    lokistack_storage_secret_type: str = Field(default="s3")
    lokistack_schema_version: str = Field(default="v13")
    lokistack_schema_effective_date: str = Field(default="2024-10-25")
    lokistack_mtls_ca_configmap: str = Field(
        default="mcoa-managed-instance-ca",
        description="ConfigMap holding the CA that signs spoke client certificates",
    )
    log_tenants: list[str] = Field(
        default_factory=lambda: ["application", "infrastructure", "audit"],
        description="Log tenants forwarded by spokes and served by the hub LokiStack",
    )
    hub_lokistack_url: str | None = Field(
        default=None,
        description="Route of the hub LokiStack gateway; derived from hub_apps_domain if unset",
    )
    hub_apps_domain: str | None = Field(
        default=None,
        description="Hub ingress domain, e.g. apps.hub.example.com",
    )
    managed_collection_secret: str = Field(
        default="mcoa-managed-collection-tls",
        description="mTLS client secret spokes use to push to the hub LokiStack",
    )
    managed_collection_ca_configmap: str = Field(
        default="mcoa-managed-collection-ca",
        description="Hub CA bundle spokes use to verify the LokiStack gateway",
    )
    managed_collection_service_account: str = Field(default="mcoa-logcollector")

    def hub_lokistack_endpoint(self) -> str:
        """Return the hub LokiStack gateway URL; raises ValueError when it cannot be determined."""
        if self.hub_lokistack_url:
            return self.hub_lokistack_url.rstrip("/")
        if self.hub_apps_domain:
            return f"https://{self.lokistack_name}-{self.lokistack_namespace}.{self.hub_apps_domain}"
        raise ValueError(
            "hub_lokistack_url or hub_apps_domain must be set to forward logs with the default stack"
        )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
