import logging

import pytest

from gkectl.commands.base import AppContext
from gkectl.config import Settings
from gkectl.exceptions import RemoteError


class FakeRunner:
    """Records gcloud calls instead of running them."""

    def __init__(
        self,
        project="test-project",
        image_type="COS_CONTAINERD",
        version="1.29.6-gke.1038001",
        fail_on=None,
        fail_code=1,
        dry_run=False,
    ):
        self.executable = "gcloud"
        self.project = project
        self.image_type = image_type
        self.version = version
        self.fail_on = fail_on
        self.fail_code = fail_code
        self.dry_run = dry_run
        self.queries = []
        self.mutations = []

    @property
    def calls(self):
        return self.queries + self.mutations

    def command(self, args):
        return [self.executable, *args]

    def query(self, args):
        args = list(args)
        self.queries.append(args)
        joined = " ".join(args)
        if "config get-value project" in joined:
            return self.project
        if "channels.defaultVersion" in joined:
            return self.version
        if "defaultImageType" in joined:
            return self.image_type
        return ""

    def mutate(self, args):
        args = list(args)
        if self.dry_run:
            return 0
        self.mutations.append(args)
        if self.fail_on and self.fail_on in " ".join(args):
            raise RemoteError(
                f"gcloud exited with status {self.fail_code}",
                returncode=self.fail_code,
                command=self.command(args),
            )
        return 0


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def app_context(fake_runner):
    return AppContext(settings=Settings(), runner=fake_runner)


@pytest.fixture(autouse=True)
def reset_gkectl_logger():
    yield
    logger = logging.getLogger("gkectl")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
