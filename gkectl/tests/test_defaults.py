import pytest

from gkectl.exceptions import RemoteError
from gkectl.models import ClusterRequest, Operation
from gkectl.modules.defaults import DefaultsResolver

from .conftest import FakeRunner


def test_default_image_type_query(fake_runner):
    resolver = DefaultsResolver(fake_runner)

    assert resolver.default_image_type("australia-southeast1") == "COS_CONTAINERD"
    assert fake_runner.queries == [[
        "-q", "container", "get-server-config",
        "--format=get(defaultImageType)",
        "--region", "australia-southeast1",
    ]]


def test_default_stable_version_query(fake_runner):
    resolver = DefaultsResolver(fake_runner)

    assert resolver.default_stable_version("asia-northeast1") == "1.29.6-gke.1038001"
    args = fake_runner.queries[0]
    assert "--filter=channels.channel=STABLE" in args
    assert "--flatten=channels" in args
    assert args[-2:] == ["--region", "asia-northeast1"]


def test_resolve_fills_missing_fields(fake_runner):
    request = ClusterRequest(Operation.CREATE, owner="kasunt", suffix="demo", region="australia-southeast1",
                             machine_type="e2-standard-8", node_count=3)

    resolved = DefaultsResolver(fake_runner).resolve(request)

    assert resolved.kubernetes_version == "1.29.6-gke.1038001"
    assert resolved.image_type == "COS_CONTAINERD"
    assert all(q[-1] == "australia-southeast1" for q in fake_runner.queries)


def test_resolve_skips_version_when_given(fake_runner):
    request = ClusterRequest(Operation.CREATE, owner="kasunt", suffix="demo",
                             machine_type="e2-standard-4", node_count=1, kubernetes_version="1.30.1")

    resolved = DefaultsResolver(fake_runner).resolve(request)

    assert resolved.kubernetes_version == "1.30.1"
    assert len(fake_runner.queries) == 1
    assert "--format=get(defaultImageType)" in fake_runner.queries[0]


def test_resolve_leaves_delete_alone(fake_runner):
    request = ClusterRequest(Operation.DELETE, owner="kasunt", suffix="demo")

    assert DefaultsResolver(fake_runner).resolve(request) is request
    assert fake_runner.queries == []


@pytest.mark.parametrize("runner", [FakeRunner(version=""), FakeRunner(image_type="")])
def test_empty_default_is_an_error(runner):
    request = ClusterRequest(Operation.CREATE, owner="kasunt", suffix="demo", machine_type="e2-standard-4", node_count=1)

    with pytest.raises(RemoteError, match="GKE reported no"):
        DefaultsResolver(runner).resolve(request)


def test_multiline_output_uses_first_line():
    runner = FakeRunner(version="1.29.6-gke.1038001\n1.29.5-gke.1000000")
    assert DefaultsResolver(runner).default_stable_version("asia-northeast1") == "1.29.6-gke.1038001"


def test_zonal_request_queries_the_zone(fake_runner):
    request = ClusterRequest(Operation.CREATE, owner="kasunt", suffix="demo", zone="us-central1-a",
                             machine_type="e2-standard-4", node_count=1)

    DefaultsResolver(fake_runner).resolve(request)

    assert len(fake_runner.queries) == 2
    for query in fake_runner.queries:
        assert query[-2:] == ["--zone", "us-central1-a"]
        assert "--region" not in query


def test_empty_zonal_default_names_the_zone():
    runner = FakeRunner(image_type="")

    with pytest.raises(RemoteError, match="zone us-central1-a"):
        DefaultsResolver(runner).default_image_type("asia-northeast1", "us-central1-a")
