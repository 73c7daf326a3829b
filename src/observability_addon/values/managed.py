"""Specs synthesized for the default (managed) logging stack."""

from __future__ import annotations

from typing import Any

from observability_addon.config import Settings


def build_managed_clf_spec(settings: Settings, cluster_name: str) -> dict[str, Any]:
    """ClusterLogForwarder spec that ships every tenant to the hub LokiStack over mTLS."""
    endpoint = settings.hub_lokistack_endpoint()
    tls = {
        "ca": {"key": "ca-bundle.crt", "configMapName": settings.managed_collection_ca_configmap},
        "certificate": {"key": "tls.crt", "secretName": settings.managed_collection_secret},
        "key": {"key": "tls.key", "secretName": settings.managed_collection_secret},
    }
    outputs = []
    pipelines = []
    for tenant in settings.log_tenants:
        output_name = f"hub-lokistack-{tenant}"
        outputs.append(
            {
                "name": output_name,
                "type": "otlp",
                "otlp": {"url": f"{endpoint}/api/logs/v1/{tenant}/otlp/v1/logs"},
                "tls": tls,
            }
        )
        pipelines.append(
            {
                "name": f"mcoa-{tenant}",
                "inputRefs": [tenant],
                "outputRefs": [output_name],
                "filterRefs": ["cluster-name"],
            }
        )
    return {
        "serviceAccount": {"name": settings.managed_collection_service_account},
        "filters": [
            {
                "name": "cluster-name",
                "type": "openshiftLabels",
                "openshiftLabels": {"cluster_name": cluster_name},
            }
        ],
        "outputs": outputs,
        "pipelines": pipelines,
    }


def build_managed_lokistack_spec(settings: Settings) -> dict[str, Any]:
    """LokiStack spec for the hub, accepting mTLS-authenticated writes from spokes."""
    tenants = list(settings.log_tenants)
    authentication = [
        {
            "tenantName": tenant,
            "tenantId": tenant,
            "mTLS": {"ca": {"caKey": "service-ca.crt", "caName": settings.lokistack_mtls_ca_configmap}},
        }
        for tenant in tenants
    ]
    return {
        "managementState": "Managed",
        "size": settings.lokistack_size,
        "storageClassName": settings.lokistack_storage_class,
        "storage": {
            "secret": {
                "name": settings.lokistack_storage_secret,
                "type": settings.lokistack_storage_secret_type,
            },
            "schemas": [
                {
                    "version": settings.lokistack_schema_version,
                    "effectiveDate": settings.lokistack_schema_effective_date,
                }
            ],
        },
        # Spokes authenticate with client certificates, so tenants are declared statically
        "tenants": {
            "mode": "static",
            "authentication": authentication,
            "authorization": {
                "roles": [
                    {
                        "name": "mcoa-logs",
                        "permissions": ["read", "write"],
                        "resources": ["logs"],
                        "tenants": tenants,
                    }
                ],
                "roleBindings": [
                    {
                        "name": "mcoa-logs",
                        "roles": ["mcoa-logs"],
                        "subjects": [{"kind": "group", "name": "mcoa-logs-access"}],
                    }
                ],
            },
        },
    }
