"""Shared plumbing for the create and delete commands."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, NoReturn, Optional

import typer

from gkectl.config import Settings
from gkectl.exceptions import GkectlError, PreconditionError, RemoteError, UsageError
from gkectl.logger import setup_logger, setup_logging
from gkectl.models import ClusterRequest, Operation
from gkectl.modules.cluster import describe_request, executor_from_settings
from gkectl.modules.defaults import DefaultsResolver
from gkectl.modules.gcloud import GcloudRunner, get_default_project
from gkectl.options import build_request

logger = logging.getLogger("gkectl.commands")

USAGE_ERROR_EXIT_CODE = 2


@dataclass
class AppContext:
    """Per-invocation state handed from the global callback to a verb.

    Settings and the runner are loaded on first use, after the verb's own
    flags were parsed, so ``<verb> -h`` never depends on configuration.
    """
    settings: Optional[Settings] = None
    runner: Optional[GcloudRunner] = None
    debug: bool = False
    dry_run: bool = False
    config_path: Optional[str] = None

    def load(self) -> None:
        """Load settings, build the runner and configure logging.

        Raises:
            PreconditionError: If the configuration cannot be loaded
        """
        if self.settings is None:
            self.settings = Settings.load(self.config_path)
        if self.runner is None:
            self.runner = GcloudRunner(self.settings.gcloud, dry_run=self.dry_run)
        elif self.dry_run:
            self.runner.dry_run = True

        setup_logging(self.settings.logging, self.debug)
        if self.debug:
            logger.debug("Debug mode enabled")
        if self.settings.source:
            logger.debug(f"Using configuration from {self.settings.source}")


def parse_request(ctx: typer.Context, operation: Operation, values: Dict[str, Any]) -> ClusterRequest:
    """Build the request or stop with a usage error before anything remote runs."""
    state: AppContext = ctx.obj
    try:
        state.load()
    except PreconditionError as e:
        setup_logger()
        _report(state, e)
        raise typer.Exit(code=1)

    cluster = state.settings.cluster
    defaults = {
        "region": cluster.region,
        "machine_type": cluster.machine_type,
        "node_count": cluster.node_count,
    }
    try:
        return build_request(operation, values, defaults)
    except UsageError as e:
        usage_error(ctx, str(e))


def usage_error(ctx: typer.Context, message: str) -> NoReturn:
    """Print the usage line and ``message`` to stderr and exit with status 2."""
    typer.echo(ctx.get_usage(), err=True)
    typer.echo(f"Try '{ctx.command_path} -h' for help.", err=True)
    typer.echo("", err=True)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=USAGE_ERROR_EXIT_CODE)


def execute_request(ctx: typer.Context, request: ClusterRequest) -> None:
    """Resolve the project and provider defaults, then run the one mutation.

    Failures end the process: precondition errors with status 1, gcloud
    failures with gcloud's own status.
    """
    state: AppContext = ctx.obj
    runner = state.runner
    try:
        project = get_default_project(runner, state.settings.project)
        if request.operation == Operation.CREATE:
            request = DefaultsResolver(runner).resolve(request)
        executor = executor_from_settings(runner, project, state.settings)
        logger.debug(f"Resolved request: {describe_request(request, executor)}")
        executor.execute(request)
    except RemoteError as e:
        _report(state, e)
        raise typer.Exit(code=e.exit_code)
    except GkectlError as e:
        _report(state, e)
        raise typer.Exit(code=1)


def _report(state: AppContext, error: GkectlError) -> None:
    logger.error(f"❌ {error}", exc_info=state.debug)
