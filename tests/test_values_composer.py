import itertools
import json

import pytest

from observability_addon.values import (
    CollaboratorFragments,
    CollectionValues,
    FeatureOptions,
    ResourceFragment,
    StorageValues,
    ValuesBuildError,
    build_values,
)


@pytest.fixture
def fragments() -> CollaboratorFragments:
    return CollaboratorFragments(
        clf_annotations={"observability.openshift.io/tech-preview-otlp-output": "enabled", "a": "b"},
        clf_spec={"serviceAccount": {"name": "collector"}, "outputs": [{"name": "out", "type": "loki"}]},
        secrets=[ResourceFragment(name="loki-auth", data={"token": "dG9rZW4="})],
        configmaps=[ResourceFragment(name="ca-bundle", data={"ca.crt": "----"})],
        managed_collection_secrets=[ResourceFragment(name="mcoa-managed-collection-tls", data={"tls.crt": "x"})],
        managed_clf_spec={"outputs": [{"name": "hub"}]},
        managed_storage_secrets=[ResourceFragment(name="logging-storage-secret", data={"bucket": "b"})],
        managed_lokistack_spec={"size": "1x.extra-small"},
    )


def _options(unmanaged=False, default=False, hub=False) -> FeatureOptions:
    return FeatureOptions(
        unmanaged_collection_enabled=unmanaged,
        default_stack_enabled=default,
        is_hub_cluster=hub,
        subscription_channel="stable-6.0",
    )


def test_scenario_c_unmanaged_on_spoke(fragments) -> None:
    values = build_values(_options(unmanaged=True), fragments)
    assert values.enabled is True
    assert values.unmanaged.collection.enabled is True
    assert values.managed.collection.enabled is False
    assert values.managed.storage.enabled is False

    collection = values.unmanaged.collection
    assert json.loads(collection.clf_annotations) == fragments.clf_annotations
    assert json.loads(collection.clf_spec) == fragments.clf_spec
    assert [s.name for s in collection.secrets] == ["loki-auth"]
    assert json.loads(collection.secrets[0].data) == {"token": "dG9rZW4="}
    assert [c.name for c in collection.configmaps] == ["ca-bundle"]


def test_scenario_d_default_stack_on_hub(fragments) -> None:
    values = build_values(_options(default=True, hub=True), fragments)
    assert values.enabled is True
    assert values.managed.storage.enabled is True
    assert values.managed.collection.enabled is False
    assert values.unmanaged.collection.enabled is False
    assert json.loads(values.managed.storage.ls_spec) == {"size": "1x.extra-small"}
    assert [s.name for s in values.managed.storage.secrets] == ["logging-storage-secret"]


def test_default_stack_on_spoke(fragments) -> None:
    values = build_values(_options(default=True), fragments)
    collection = values.managed.collection
    assert collection.enabled is True
    assert json.loads(collection.clf_spec) == {"outputs": [{"name": "hub"}]}
    assert collection.clf_annotations == ""
    assert [s.name for s in collection.secrets] == ["mcoa-managed-collection-tls"]
    assert values.managed.storage == StorageValues()


def test_unmanaged_and_managed_together(fragments) -> None:
    values = build_values(_options(unmanaged=True, default=True), fragments)
    assert values.unmanaged.collection.enabled is True
    assert values.managed.collection.enabled is True
    assert values.managed.storage.enabled is False


def test_everything_off_is_empty(fragments) -> None:
    values = build_values(_options(), fragments)
    assert values.enabled is False
    assert values.unmanaged.collection == CollectionValues()
    assert values.managed.collection == CollectionValues()
    assert values.managed.storage == StorageValues()
    assert values.openshift_logging_channel == "stable-6.0"


@pytest.mark.parametrize("unmanaged, default, hub", list(itertools.product([False, True], repeat=3)))
def test_enabled_flag_and_disabled_branches(fragments, unmanaged: bool, default: bool, hub: bool) -> None:
    values = build_values(_options(unmanaged, default, hub), fragments)
    assert values.enabled is (unmanaged or default)
    for section in (values.unmanaged.collection, values.managed.collection):
        if not section.enabled:
            assert section.secrets == [] and section.configmaps == []
            assert section.clf_spec == "" and section.clf_annotations == ""
    if not values.managed.storage.enabled:
        assert values.managed.storage.secrets == [] and values.managed.storage.ls_spec == ""


def test_compose_is_byte_identical(fragments) -> None:
    options = _options(unmanaged=True, default=True)
    first = build_values(options, fragments).to_json()
    second = build_values(options, fragments.model_copy(deep=True)).to_json()
    assert first == second


def test_serialization_is_key_order_independent() -> None:
    a = CollaboratorFragments(clf_annotations={"x": "1", "y": "2"}, clf_spec={"b": 1, "a": {"d": 2, "c": 3}})
    b = CollaboratorFragments(clf_annotations={"y": "2", "x": "1"}, clf_spec={"a": {"c": 3, "d": 2}, "b": 1})
    options = _options(unmanaged=True)
    assert build_values(options, a).to_json() == build_values(options, b).to_json()
    assert build_values(options, a).unmanaged.collection.clf_spec == '{"a":{"c":3,"d":2},"b":1}'


def test_to_values_uses_chart_keys(fragments) -> None:
    doc = build_values(_options(unmanaged=True, default=True, hub=True), fragments).to_values()
    assert set(doc) == {"enabled", "openshiftLoggingChannel", "unmanaged", "managed"}
    assert set(doc["unmanaged"]["collection"]) == {"enabled", "clfAnnotations", "clfSpec", "secrets", "configmaps"}
    assert set(doc["managed"]["storage"]) == {"enabled", "secrets", "lsSpec"}
    assert doc["managed"]["storage"]["secrets"][0] == {
        "name": "logging-storage-secret",
        "data": '{"bucket":"b"}',
    }


@pytest.mark.parametrize("bad", [{"x": {1, 2}}, {"x": float("nan")}, {"x": object()}])
def test_unserializable_spec_fails_the_build(bad) -> None:
    with pytest.raises(ValuesBuildError):
        build_values(_options(unmanaged=True), CollaboratorFragments(clf_spec=bad))


def test_unserializable_secret_fails_the_build() -> None:
    fragments = CollaboratorFragments(managed_storage_secrets=[ResourceFragment(name="s", data={"k": b"\x00"})])
    with pytest.raises(ValuesBuildError, match="secret s"):
        build_values(_options(default=True, hub=True), fragments)


def test_inactive_branch_fragments_are_not_serialized() -> None:
    fragments = CollaboratorFragments(clf_spec={"x": {1, 2}})
    values = build_values(_options(default=True, hub=True), fragments)
    assert values.unmanaged.collection.enabled is False


def test_disabled_section_cannot_carry_resources() -> None:
    with pytest.raises(ValueError):
        CollectionValues(enabled=False, clf_spec="{}")
    with pytest.raises(ValueError):
        StorageValues(enabled=False, ls_spec="{}")
