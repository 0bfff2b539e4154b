"""GKE cluster create and delete."""
import logging
from typing import Dict, List, Optional, Sequence

from gkectl.models import DEFAULT_SCOPES, DEFAULT_SERVICES, ClusterRequest, Operation
from gkectl.modules.gcloud import GcloudRunner

logger = logging.getLogger("gkectl.cluster")


class ClusterExecutor:
    """Turns a resolved ClusterRequest into a single gcloud mutation.

    Args:
        runner: gcloud runner used for every call
        project: Project the cluster lives in
        scopes: OAuth scopes attached to cluster nodes
        team: Value of the ``team`` label
        created_by: Value of the ``created-by`` label
        services: Services enabled before creating a cluster
    """

    def __init__(
        self,
        runner: GcloudRunner,
        project: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        team: str = "fe-presale",
        created_by: str = "gkectl",
        services: Sequence[str] = DEFAULT_SERVICES,
    ):
        if not project:
            raise ValueError("A project is required")
        self.runner = runner
        self.project = project
        self.scopes = tuple(scopes)
        self.team = team
        self.created_by = created_by
        self.services = tuple(services)

    def labels(self, request: ClusterRequest) -> Dict[str, str]:
        return {
            "owner": request.owner,
            "team": self.team,
            "created-by": self.created_by,
        }

    def location_args(self, request: ClusterRequest) -> List[str]:
        if request.is_zonal:
            return ["--zone", request.zone]
        return ["--region", request.region]

    def create_args(self, request: ClusterRequest) -> List[str]:
        """Build the ``clusters create`` arguments for ``request``."""
        missing = [
            field for field in ("kubernetes_version", "machine_type", "node_count", "image_type")
            if getattr(request, field) in (None, "")
        ]
        if missing:
            raise ValueError(f"Create request is not fully resolved, missing: {', '.join(missing)}")

        nodes = str(request.node_count)
        labels = ",".join(f"{key}={value}" for key, value in self.labels(request).items())
        return [
            "-q", "container", "clusters", "create", request.name,
            "--cluster-version", request.kubernetes_version,
            *self.location_args(request),
            "--machine-type", request.machine_type,
            "--image-type", request.image_type,
            "--num-nodes", nodes,
            "--min-nodes", nodes,
            "--max-nodes", nodes,
            "--scopes", ",".join(self.scopes),
            "--labels", labels,
            "--enable-network-policy",
            "--project", self.project,
        ]

    def delete_args(self, request: ClusterRequest) -> List[str]:
        """Build the ``clusters delete`` arguments for ``request``."""
        return [
            "-q", "container", "clusters", "delete", request.name,
            *self.location_args(request),
            "--project", self.project,
        ]

    def enable_services(self) -> None:
        for service in self.services:
            logger.info(f"🔌 Enabling {service}")
            self.runner.mutate(["services", "enable", service, "--project", self.project])

    def create(self, request: ClusterRequest) -> int:
        args = self.create_args(request)
        logger.info(
            f"🚀 Creating cluster {request.name} with {request.node_count} nodes "
            f"of type {request.machine_type} in {self.project}"
        )
        self.enable_services()
        status = self.runner.mutate(args)
        if not self.runner.dry_run:
            logger.info(f"✅ Cluster {request.name} created in {request.location}")
        return status

    def delete(self, request: ClusterRequest) -> int:
        args = self.delete_args(request)
        logger.info(f"🗑️ Deleting cluster {request.name} in {self.project}")
        status = self.runner.mutate(args)
        if not self.runner.dry_run:
            logger.info(f"✅ Cluster {request.name} deleted")
        return status

    def execute(self, request: ClusterRequest) -> int:
        if request.operation == Operation.CREATE:
            return self.create(request)
        return self.delete(request)


def executor_from_settings(runner: GcloudRunner, project: str, settings) -> ClusterExecutor:
    """Build an executor using the cluster policy from ``settings``."""
    cluster = settings.cluster
    return ClusterExecutor(
        runner,
        project,
        scopes=cluster.scopes,
        team=cluster.team,
        created_by=cluster.created_by,
        services=cluster.services,
    )


def describe_request(request: ClusterRequest, executor: Optional[ClusterExecutor] = None) -> Dict[str, object]:
    """Summarize ``request`` for debug logging."""
    summary = {
        "name": request.name,
        "operation": request.operation.value,
        "location": request.location,
        "zonal": request.is_zonal,
    }
    if request.operation == Operation.CREATE:
        summary.update({
            "machine_type": request.machine_type,
            "node_count": request.node_count,
            "kubernetes_version": request.kubernetes_version,
            "image_type": request.image_type,
        })
    if executor is not None:
        summary["project"] = executor.project
    return summary
