from typing import Optional

import typer

from gkectl.commands.base import execute_request, parse_request
from gkectl.models import Operation
from gkectl.options import help_for


def create_cluster_cmd(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "-o", help=help_for("owner")),
    suffix: Optional[str] = typer.Option(None, "-n", help=help_for("suffix")),
    node_count: Optional[int] = typer.Option(None, "-a", min=1, help=help_for("node_count")),
    machine_type: Optional[str] = typer.Option(None, "-m", help=help_for("machine_type")),
    region: Optional[str] = typer.Option(None, "-r", help=help_for("region")),
    kubernetes_version: Optional[str] = typer.Option(None, "-v", help=help_for("kubernetes_version")),
    zone: Optional[str] = typer.Option(None, "-z", help=help_for("zone")),
):
    """Provision a GKE cluster named <owner>-<suffix>."""
    request = parse_request(ctx, Operation.CREATE, {
        "owner": owner,
        "suffix": suffix,
        "node_count": node_count,
        "machine_type": machine_type,
        "region": region,
        "kubernetes_version": kubernetes_version,
        "zone": zone,
    })
    execute_request(ctx, request)
