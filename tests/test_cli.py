import json
from unittest.mock import MagicMock, patch

import pytest

from observability_addon import __version__
from observability_addon.health import FeedbackField, FeedbackValue, ResourceIdentifier
from observability_addon.main import main
from observability_addon.values import CollaboratorFragments, FeatureOptions


def test_cli_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cli_probes_prints_feedback_rules(capsys) -> None:
    assert main(["probes"]) == 0
    out = capsys.readouterr().out
    rules = json.loads(out)
    assert [r["resourceIdentifier"]["resource"] for r in rules] == ["clusterlogforwarders", "opentelemetrycollectors"]


def test_cli_health_exit_codes() -> None:
    clf = ResourceIdentifier(
        group="observability.openshift.io",
        resource="clusterlogforwarders",
        name="mcoa-instance",
        namespace="openshift-logging",
    )
    collector = MagicMock()
    with patch("observability_addon.main.load_api_client"), patch(
        "observability_addon.main.FeedbackCollector", return_value=collector
    ):
        collector.collect.return_value = [FeedbackField(resource=clf, values=[FeedbackValue(name="status", string="True")])]
        assert main(["health", "cluster-1"]) == 0
        collector.collect.return_value = []
        assert main(["health", "cluster-1"]) == 1


def test_cli_values_prints_document(capsys) -> None:
    loader = MagicMock()
    loader.load.return_value = (
        FeatureOptions(default_stack_enabled=True, is_hub_cluster=True, subscription_channel="stable-6.0"),
        CollaboratorFragments(managed_lokistack_spec={"size": "1x.demo"}),
    )
    with patch("observability_addon.main.load_api_client"), patch(
        "observability_addon.main.IntentsLoader", return_value=loader
    ):
        assert main(["values", "local-cluster"]) == 0
    loader.load.assert_called_once_with("local-cluster")
    out = capsys.readouterr().out
    assert "managed.storage" in out
    assert "1x.demo" in out


def test_cli_errors_exit_2(capsys) -> None:
    with patch("observability_addon.main.load_api_client", side_effect=RuntimeError("no kubeconfig")):
        assert main(["health", "cluster-1"]) == 2
    assert "no kubeconfig" in capsys.readouterr().err
