"""Data models for GKE cluster lifecycle requests."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


DEFAULT_REGION = 'asia-northeast1'
DEFAULT_MACHINE_TYPE = 'e2-standard-4'
DEFAULT_NODE_COUNT = 1

# OAuth scopes attached to every node of a created cluster
DEFAULT_SCOPES: Tuple[str, ...] = (
    'https://www.googleapis.com/auth/devstorage.read_only',
    'https://www.googleapis.com/auth/logging.write',
    'https://www.googleapis.com/auth/monitoring',
    'https://www.googleapis.com/auth/servicecontrol',
    'https://www.googleapis.com/auth/service.management.readonly',
    'https://www.googleapis.com/auth/trace.append',
    'https://www.googleapis.com/auth/ndev.clouddns.readwrite',
)


# APIs that must be enabled before a cluster can be created
DEFAULT_SERVICES: Tuple[str, ...] = ('container.googleapis.com', 'dns.googleapis.com')


class Operation(str, Enum):
    """Cluster lifecycle operations."""
    CREATE = 'create'
    DELETE = 'delete'


def build_name(owner: str, suffix: str) -> str:
    """Build the canonical cluster name from its owner and suffix."""
    return f"{owner}-{suffix}"


@dataclass(frozen=True)
class ProviderDefaults:
    """Server-side defaults reported by GKE for one region."""
    image_type: Optional[str] = None
    kubernetes_version: Optional[str] = None


@dataclass(frozen=True)
class ClusterRequest:
    """A fully parsed request for one create or delete call.

    ``machine_type``, ``node_count``, ``kubernetes_version`` and ``image_type``
    only apply to create requests and stay ``None`` for deletes.
    """
    operation: Operation
    owner: str
    suffix: str
    region: str = DEFAULT_REGION
    zone: Optional[str] = None
    machine_type: Optional[str] = None
    node_count: Optional[int] = None
    kubernetes_version: Optional[str] = None
    image_type: Optional[str] = None

    def __post_init__(self):
        if not self.owner or not self.suffix:
            raise ValueError("Cluster owner and name suffix must both be non-empty")

    @property
    def name(self) -> str:
        return build_name(self.owner, self.suffix)

    @property
    def is_zonal(self) -> bool:
        return bool(self.zone)

    @property
    def location(self) -> str:
        """Zone for zonal clusters, region otherwise."""
        return self.zone if self.zone else self.region

    def with_defaults(self, defaults: ProviderDefaults) -> 'ClusterRequest':
        """Return a copy with unset version and image type taken from ``defaults``."""
        return replace(
            self,
            kubernetes_version=self.kubernetes_version or defaults.kubernetes_version,
            image_type=self.image_type or defaults.image_type,
        )
