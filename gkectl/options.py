"""Command line flags for the create and delete verbs.

Every flag takes exactly one value. ``FLAGS`` is the single source of truth
for which verb accepts which flag, which flags are required and what the
defaults are; the Typer commands take their help text from it and hand the
raw values to ``build_request``.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional

from gkectl.exceptions import UsageError
from gkectl.models import (
    DEFAULT_MACHINE_TYPE,
    DEFAULT_NODE_COUNT,
    DEFAULT_REGION,
    ClusterRequest,
    Operation,
)

BOTH = frozenset({Operation.CREATE, Operation.DELETE})
CREATE_ONLY = frozenset({Operation.CREATE})


@dataclass(frozen=True)
class FlagSpec:
    """One single-valued command line flag."""
    flag: str
    field: str
    verbs: FrozenSet[Operation]
    help: str
    required: bool = False
    default: Any = None


FLAGS: Dict[str, FlagSpec] = {spec.field: spec for spec in (
    FlagSpec("-n", "suffix", BOTH, "Suffix of the cluster name (the full name is <owner>-<suffix>)", required=True),
    FlagSpec("-o", "owner", BOTH, "Name of the cluster owner", required=True),
    FlagSpec("-r", "region", BOTH, f"Region (default {DEFAULT_REGION})", default=DEFAULT_REGION),
    FlagSpec("-z", "zone", BOTH, "Zone; when given the cluster is zonal instead of regional"),
    FlagSpec("-a", "node_count", CREATE_ONLY, f"Number of nodes (default {DEFAULT_NODE_COUNT})", default=DEFAULT_NODE_COUNT),
    FlagSpec("-m", "machine_type", CREATE_ONLY, f"Machine type (default {DEFAULT_MACHINE_TYPE})", default=DEFAULT_MACHINE_TYPE),
    FlagSpec("-v", "kubernetes_version", CREATE_ONLY, "Kubernetes version (default: the region's STABLE channel version)"),
)}


def flags_for(operation: Operation) -> Dict[str, FlagSpec]:
    return {field: spec for field, spec in FLAGS.items() if operation in spec.verbs}


def help_for(field: str) -> str:
    return FLAGS[field].help


def build_request(
    operation: Operation,
    values: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None,
) -> ClusterRequest:
    """Validate raw flag values and build a ClusterRequest.

    Args:
        operation: The verb being run
        values: Parsed flag values keyed by field name; ``None`` means unset
        defaults: Overrides for the built-in flag defaults, keyed by field name

    Returns:
        ClusterRequest with every flag default applied. The version is left
        unset when not supplied so the provider default can be looked up.

    Raises:
        UsageError: If required flags are missing, a flag does not apply to
            the verb, or a value is invalid
    """
    accepted = flags_for(operation)
    defaults = defaults or {}

    unknown = [
        FLAGS[field].flag if field in FLAGS else field
        for field, value in values.items()
        if value is not None and field not in accepted
    ]
    if unknown:
        raise UsageError(f"Option(s) not valid for {operation.value}: {', '.join(sorted(unknown))}")

    missing = sorted(
        spec.flag for field, spec in accepted.items()
        if spec.required and not _present(values.get(field))
    )
    if missing:
        raise UsageError(f"Missing required option(s): {', '.join(missing)}")

    resolved: Dict[str, Any] = {}
    for field, spec in accepted.items():
        value = values.get(field)
        if value is None:
            value = defaults.get(field, spec.default)
        elif isinstance(value, str):
            value = value.strip()
            if not value:
                raise UsageError(f"Option {spec.flag} requires a non-empty value")
        resolved[field] = value

    node_count = resolved.get("node_count")
    if node_count is not None:
        try:
            node_count = int(node_count)
        except (TypeError, ValueError):
            raise UsageError(f"Option -a expects a positive integer, got {node_count!r}")
        if node_count < 1:
            raise UsageError(f"Option -a expects a positive integer, got {node_count}")
        resolved["node_count"] = node_count

    return ClusterRequest(operation=operation, **resolved)


def _present(value: Any) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None
