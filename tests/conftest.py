# --- test import path bootstrap (src/ layout) ---
import sys as _sys
from pathlib import Path as _Path

_SRC = _Path(__file__).resolve().parents[1] / "src"
if _SRC.is_dir():
    _p = str(_SRC)
    if _p not in _sys.path:
        _sys.path.insert(0, _p)
# --- end bootstrap ---

import pytest

from observability_addon.config import Settings
from observability_addon.health import ProbeRegistry, ResourceIdentifier, default_registry


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, hub_apps_domain="apps.hub.example.com")


@pytest.fixture
def registry(settings: Settings) -> ProbeRegistry:
    return default_registry(settings)


@pytest.fixture
def clf_id(settings: Settings) -> ResourceIdentifier:
    return ResourceIdentifier(
        group=settings.clf_group,
        resource=settings.clf_resource,
        name=settings.clf_name,
        namespace=settings.clf_namespace,
    )


@pytest.fixture
def otelcol_id(settings: Settings) -> ResourceIdentifier:
    return ResourceIdentifier(
        group=settings.otelcol_group,
        resource=settings.otelcol_resource,
        name=settings.otelcol_name,
        namespace=settings.otelcol_namespace,
    )
