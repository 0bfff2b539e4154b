import pytest

from gkectl.config import Settings
from gkectl.exceptions import RemoteError
from gkectl.models import DEFAULT_SCOPES, ClusterRequest, Operation
from gkectl.modules.cluster import ClusterExecutor, describe_request, executor_from_settings

from .conftest import FakeRunner


def resolved_create(**overrides):
    fields = dict(
        owner="kasunt",
        suffix="demo",
        region="australia-southeast1",
        machine_type="e2-standard-8",
        node_count=3,
        kubernetes_version="1.29.6-gke.1038001",
        image_type="COS_CONTAINERD",
    )
    fields.update(overrides)
    return ClusterRequest(Operation.CREATE, **fields)


def option(args, name):
    return args[args.index(name) + 1]


def test_create_args_regional(fake_runner):
    args = ClusterExecutor(fake_runner, "test-project").create_args(resolved_create())

    assert args[:5] == ["-q", "container", "clusters", "create", "kasunt-demo"]
    assert option(args, "--cluster-version") == "1.29.6-gke.1038001"
    assert option(args, "--region") == "australia-southeast1"
    assert "--zone" not in args
    assert option(args, "--machine-type") == "e2-standard-8"
    assert option(args, "--image-type") == "COS_CONTAINERD"
    assert option(args, "--num-nodes") == option(args, "--min-nodes") == option(args, "--max-nodes") == "3"
    assert option(args, "--scopes") == ",".join(DEFAULT_SCOPES)
    assert option(args, "--labels") == "owner=kasunt,team=fe-presale,created-by=gkectl"
    assert "--enable-network-policy" in args
    assert option(args, "--project") == "test-project"


def test_create_args_zonal(fake_runner):
    args = ClusterExecutor(fake_runner, "test-project").create_args(resolved_create(zone="us-central1-a"))

    assert option(args, "--zone") == "us-central1-a"
    assert "--region" not in args


def test_create_requires_resolved_request(fake_runner):
    with pytest.raises(ValueError, match="image_type"):
        ClusterExecutor(fake_runner, "test-project").create_args(resolved_create(image_type=None))


def test_delete_args(fake_runner):
    request = ClusterRequest(Operation.DELETE, owner="kasunt", suffix="demo", zone="australia-southeast1-b")

    args = ClusterExecutor(fake_runner, "test-project").delete_args(request)

    assert args == [
        "-q", "container", "clusters", "delete", "kasunt-demo",
        "--zone", "australia-southeast1-b",
        "--project", "test-project",
    ]


def test_create_enables_services_first(fake_runner):
    ClusterExecutor(fake_runner, "test-project").execute(resolved_create())

    assert [m[:3] for m in fake_runner.mutations] == [
        ["services", "enable", "container.googleapis.com"],
        ["services", "enable", "dns.googleapis.com"],
        ["-q", "container", "clusters"],
    ]


def test_service_failure_aborts_create():
    runner = FakeRunner(fail_on="dns.googleapis.com", fail_code=7)

    with pytest.raises(RemoteError) as excinfo:
        ClusterExecutor(runner, "test-project").create(resolved_create())

    assert excinfo.value.exit_code == 7
    assert not any("clusters" in m for m in runner.mutations)


def test_delete_is_a_single_call(fake_runner):
    request = ClusterRequest(Operation.DELETE, owner="kasunt", suffix="demo")

    ClusterExecutor(fake_runner, "test-project").execute(request)

    assert len(fake_runner.mutations) == 1
    assert fake_runner.mutations[0][:5] == ["-q", "container", "clusters", "delete", "kasunt-demo"]
    assert option(fake_runner.mutations[0], "--region") == "asia-northeast1"


def test_scopes_and_labels_are_injectable(fake_runner):
    executor = ClusterExecutor(fake_runner, "p", scopes=["scope-a", "scope-b"], team="platform",
                               created_by="ci", services=[])

    executor.execute(resolved_create())

    args = fake_runner.mutations[0]
    assert option(args, "--scopes") == "scope-a,scope-b"
    assert option(args, "--labels") == "owner=kasunt,team=platform,created-by=ci"


def test_executor_from_settings(fake_runner):
    settings = Settings(cluster={"team": "sales", "services": ["container.googleapis.com"]})

    executor = executor_from_settings(fake_runner, "test-project", settings)

    assert executor.team == "sales"
    assert executor.services == ("container.googleapis.com",)
    assert executor.scopes == DEFAULT_SCOPES


def test_project_is_required(fake_runner):
    with pytest.raises(ValueError):
        ClusterExecutor(fake_runner, "")


def test_describe_request(fake_runner):
    executor = ClusterExecutor(fake_runner, "test-project")
    summary = describe_request(ClusterRequest(Operation.DELETE, owner="kasunt", suffix="demo"), executor)

    assert summary == {
        "name": "kasunt-demo",
        "operation": "delete",
        "location": "asia-northeast1",
        "zonal": False,
        "project": "test-project",
    }
