"""Node health population simulation."""

from infrawatch.nodes.dynamics import DEFAULT_DYNAMICS, NodeDynamics
from infrawatch.nodes.health import (
    DEFAULT_THRESHOLDS,
    STATUS_COLORS,
    HealthStatus,
    HealthThresholds,
    status_for_health,
)
from infrawatch.nodes.node import Node, node_id_for
from infrawatch.nodes.population import (
    DEFAULT_POPULATION_SIZE,
    DEFAULT_REGIONS,
    NodePopulation,
    NodeSimulator,
    PopulationStats,
    create_population,
    tick,
    tick_node,
)

__all__ = [
    "DEFAULT_DYNAMICS",
    "DEFAULT_POPULATION_SIZE",
    "DEFAULT_REGIONS",
    "DEFAULT_THRESHOLDS",
    "HealthStatus",
    "HealthThresholds",
    "Node",
    "NodeDynamics",
    "NodePopulation",
    "NodeSimulator",
    "PopulationStats",
    "STATUS_COLORS",
    "create_population",
    "node_id_for",
    "status_for_health",
    "tick",
    "tick_node",
]
