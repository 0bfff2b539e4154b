"""Server-side GKE defaults for a region or zone."""
import logging
from typing import List, Optional

from gkectl.exceptions import RemoteError
from gkectl.models import ClusterRequest, Operation, ProviderDefaults
from gkectl.modules.gcloud import GcloudRunner

logger = logging.getLogger("gkectl.defaults")


class DefaultsResolver:
    """Fills create-only fields the caller left unset by asking GKE.

    Zonal requests are resolved against the zone so the defaults match
    where the cluster actually lands.
    """

    def __init__(self, runner: GcloudRunner):
        self.runner = runner

    def default_image_type(self, region: str, zone: Optional[str] = None) -> str:
        return self._server_config(
            region,
            zone,
            "default image type",
            ["--format=get(defaultImageType)"],
        )

    def default_stable_version(self, region: str, zone: Optional[str] = None) -> str:
        return self._server_config(
            region,
            zone,
            "default STABLE channel version",
            [
                "--flatten=channels",
                "--filter=channels.channel=STABLE",
                "--format=get(channels.defaultVersion)",
            ],
        )

    def fetch(self, request: ClusterRequest) -> ProviderDefaults:
        """Query only the defaults ``request`` is still missing."""
        version = None
        image_type = None
        if not request.kubernetes_version:
            version = self.default_stable_version(request.region, request.zone)
        if not request.image_type:
            image_type = self.default_image_type(request.region, request.zone)
        return ProviderDefaults(image_type=image_type, kubernetes_version=version)

    def resolve(self, request: ClusterRequest) -> ClusterRequest:
        """Return ``request`` with version and image type filled in.

        Delete requests are returned as they are.
        """
        if request.operation != Operation.CREATE:
            return request
        return request.with_defaults(self.fetch(request))

    def _server_config(self, region: str, zone: Optional[str], what: str, selectors: List[str]) -> str:
        location = ["--zone", zone] if zone else ["--region", region]
        args = ["-q", "container", "get-server-config", *selectors, *location]
        value = self.runner.query(args)
        if not value:
            raise RemoteError(
                f"GKE reported no {what} for {location[0][2:]} {location[1]}",
                command=self.runner.command(args),
            )
        # Several channels could match; the first line is the relevant one
        value = value.splitlines()[0].strip()
        logger.debug(f"Resolved {what} for {location[1]}: {value}")
        return value
