from typing import Optional

import typer

from gkectl.commands import create_cluster_cmd, delete_cluster_cmd
from gkectl.commands.base import AppContext

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Create and delete GKE clusters.",
)

app.command("create")(create_cluster_cmd)
app.command("delete")(delete_cluster_cmd)


# Global options callback
@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log mutating gcloud commands instead of running them"),
    config: Optional[str] = typer.Option(None, "--config", help="Path to a YAML configuration file"),
):
    """gkectl - GKE cluster lifecycle CLI."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help(), err=True)
        raise typer.Exit(code=1)

    # Tests and embedding callers may hand in a prepared context
    if ctx.obj is None:
        ctx.obj = AppContext(debug=debug, dry_run=dry_run, config_path=config)
    else:
        ctx.obj.debug = ctx.obj.debug or debug
        ctx.obj.dry_run = ctx.obj.dry_run or dry_run
        ctx.obj.config_path = ctx.obj.config_path or config


if __name__ == "__main__":
    app()
