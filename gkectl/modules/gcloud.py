"""Thin wrapper around the gcloud CLI."""
import logging
import shlex
import subprocess
from typing import List, Optional, Sequence

from gkectl.exceptions import PreconditionError, RemoteError

logger = logging.getLogger("gkectl.gcloud")

NO_PROJECT_MESSAGE = (
    "No default project set. Please set a default project with "
    "'gcloud config set project <project name>'"
)


class GcloudRunner:
    """Runs gcloud commands one at a time.

    Queries capture stdout and hand it back. Mutations inherit the parent's
    stdout/stderr so gcloud's output reaches the user unchanged. In dry-run
    mode mutations are only logged.
    """

    def __init__(self, executable: str = "gcloud", dry_run: bool = False):
        self.executable = executable
        self.dry_run = dry_run

    def command(self, args: Sequence[str]) -> List[str]:
        return [self.executable, *args]

    def query(self, args: Sequence[str]) -> str:
        """Run a read-only gcloud command and return its stripped stdout.

        Raises:
            RemoteError: If gcloud exits non-zero
        """
        cmd = self.command(args)
        logger.debug(f"Running: {shlex.join(cmd)}")
        result = self._run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise RemoteError(
                f"gcloud exited with status {result.returncode}: {stderr or shlex.join(cmd)}",
                returncode=result.returncode,
                command=cmd,
                stderr=stderr,
            )
        return (result.stdout or "").strip()

    def mutate(self, args: Sequence[str]) -> int:
        """Run a gcloud command that changes remote state.

        Returns:
            int: gcloud's exit status (always 0, failures raise)

        Raises:
            RemoteError: If gcloud exits non-zero
        """
        cmd = self.command(args)
        if self.dry_run:
            logger.info(f"🧪 Would run: {shlex.join(cmd)}")
            return 0

        logger.debug(f"Running: {shlex.join(cmd)}")
        result = self._run(cmd)
        if result.returncode != 0:
            raise RemoteError(
                f"gcloud exited with status {result.returncode}",
                returncode=result.returncode,
                command=cmd,
            )
        return result.returncode

    def _run(self, cmd: List[str], **kwargs) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(cmd, check=False, **kwargs)
        except FileNotFoundError as e:
            raise PreconditionError(f"gcloud executable not found: {self.executable}") from e


def get_default_project(runner: GcloudRunner, configured: Optional[str] = None) -> str:
    """Return the project to operate in.

    ``configured`` wins; otherwise the active gcloud configuration is asked.

    Raises:
        PreconditionError: If no project can be determined
    """
    if configured:
        return configured

    try:
        project = runner.query(["config", "get-value", "project"])
    except RemoteError as e:
        raise PreconditionError(NO_PROJECT_MESSAGE) from e

    # gcloud prints "(unset)" on some versions when nothing is configured
    if not project or project == "(unset)":
        raise PreconditionError(NO_PROJECT_MESSAGE)
    return project
