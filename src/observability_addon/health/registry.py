"""Probe registry: which resources are probed and how their feedback is read."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from observability_addon.config import Settings
from observability_addon.health.models import ProbeRule, ProbeSpec, ResourceIdentifier


class ProbeRegistry:
    """Immutable lookup of ProbeSpec by resource kind."""

    def __init__(self, specs: Iterable[ProbeSpec]) -> None:
        by_kind: dict[str, ProbeSpec] = {}
        for spec in specs:
            kind = spec.resource.resource
            if kind in by_kind:
                raise ValueError(f"duplicate probe declared for resource kind {kind!r}")
            by_kind[kind] = spec
        self._by_kind = by_kind

    def lookup(self, resource: ResourceIdentifier) -> ProbeSpec | None:
        return self._by_kind.get(resource.resource)

    def probe_fields(self) -> list[dict[str, Any]]:
        """Feedback configuration the spoke agent needs to report these probes."""
        return [spec.to_probe_field() for spec in self]

    def __iter__(self) -> Iterator[ProbeSpec]:
        return iter(self._by_kind.values())

    def __len__(self) -> int:
        return len(self._by_kind)

    def __contains__(self, kind: object) -> bool:
        return kind in self._by_kind


def default_registry(settings: Settings) -> ProbeRegistry:
    """Registry for the log forwarder and trace collector deployed by the addon."""
    return ProbeRegistry(
        [
            ProbeSpec(
                resource=ResourceIdentifier(
                    group=settings.clf_group,
                    resource=settings.clf_resource,
                    name=settings.clf_name,
                    namespace=settings.clf_namespace,
                ),
                key=settings.clf_probe_key,
                path=settings.clf_probe_path,
                rule=ProbeRule.STRING_EQUALS,
            ),
            ProbeSpec(
                resource=ResourceIdentifier(
                    group=settings.otelcol_group,
                    resource=settings.otelcol_resource,
                    name=settings.otelcol_name,
                    namespace=settings.otelcol_namespace,
                ),
                key=settings.otelcol_probe_key,
                path=settings.otelcol_probe_path,
                rule=ProbeRule.INTEGER_AT_LEAST,
            ),
        ]
    )
