"""Aggregation of resolved relation sets into UI-facing flags."""

from accessgate_core.aggregator.aggregator import (
    PermissionAggregator,
    PermissionRecord,
    build_record,
    compose_with_resources,
)

__all__ = ["PermissionAggregator", "PermissionRecord", "build_record", "compose_with_resources"]
