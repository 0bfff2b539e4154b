from typing import Optional

import typer

from gkectl.commands.base import execute_request, parse_request
from gkectl.models import Operation
from gkectl.options import help_for


def delete_cluster_cmd(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "-o", help=help_for("owner")),
    suffix: Optional[str] = typer.Option(None, "-n", help=help_for("suffix")),
    region: Optional[str] = typer.Option(None, "-r", help=help_for("region")),
    zone: Optional[str] = typer.Option(None, "-z", help=help_for("zone")),
):
    """Delete the GKE cluster named <owner>-<suffix> without prompting."""
    request = parse_request(ctx, Operation.DELETE, {
        "owner": owner,
        "suffix": suffix,
        "region": region,
        "zone": zone,
    })
    execute_request(ctx, request)
