"""Simulated compute node."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from infrawatch.nodes.health import (
    DEFAULT_THRESHOLDS,
    HealthStatus,
    HealthThresholds,
    status_for_health,
)


def node_id_for(index: int) -> str:
    """Identifier of the node at zero-based ``index``: node-01, node-02, ..."""
    return f"node-{index + 1:02d}"


@dataclass(frozen=True)
class Node:
    """One node of the simulated fleet.

    Attributes:
        node_id: Stable identifier, unique within a population.
        region: Region the node was placed in at creation.
        load: Load percentage, 0-100.
        health: Health score, 0-100.
        thresholds: Bands used to derive ``status``.
    """

    node_id: str
    region: str
    load: float
    health: float
    thresholds: HealthThresholds = field(default=DEFAULT_THRESHOLDS, repr=False)

    @property
    def status(self) -> HealthStatus:
        return status_for_health(self.health, self.thresholds)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        del data["thresholds"]
        data["status"] = self.status.value
        return data
