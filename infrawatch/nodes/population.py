"""Node health population simulator.

A population is a fixed-size, immutable collection of nodes spread
round-robin across regions. ``tick`` derives the next population from the
previous one without touching it, so a renderer can keep reading the old
snapshot while the next one is computed.

Health evolves as a state-dependent biased random walk:

- every node drifts by a small symmetric delta;
- a down node sometimes gets a recovery boost (the delta becomes positive
  and larger), modeling auto-remediation;
- a degraded node occasionally declines further before recovering.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, replace
from typing import Iterator, Sequence

from infrawatch.nodes.dynamics import DEFAULT_DYNAMICS, NodeDynamics
from infrawatch.nodes.health import DEFAULT_THRESHOLDS, HealthStatus, HealthThresholds
from infrawatch.nodes.node import Node, node_id_for
from infrawatch.random_source import RandomSource, chance, resolve_rng, symmetric
from infrawatch.rounding import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_REGIONS: tuple[str, ...] = ("us-east", "us-west", "eu-central", "ap-south")
DEFAULT_POPULATION_SIZE = 24


@dataclass(frozen=True)
class PopulationStats:
    """Fleet-level counters for one population snapshot.

    Attributes:
        size: Number of nodes.
        healthy: Nodes currently healthy.
        degraded: Nodes currently degraded.
        down: Nodes currently down.
        mean_load: Average load, 0.0 for an empty population.
        mean_health: Average health, 0.0 for an empty population.
    """

    size: int = 0
    healthy: int = 0
    degraded: int = 0
    down: int = 0
    mean_load: float = 0.0
    mean_health: float = 0.0


@dataclass(frozen=True)
class NodePopulation:
    """Ordered, immutable snapshot of the simulated fleet."""

    nodes: tuple[Node, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def get(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None

    def by_region(self) -> dict[str, tuple[Node, ...]]:
        """Nodes grouped by region, regions in first-seen order."""
        groups: dict[str, list[Node]] = {}
        for node in self.nodes:
            groups.setdefault(node.region, []).append(node)
        return {region: tuple(nodes) for region, nodes in groups.items()}

    @property
    def stats(self) -> PopulationStats:
        if not self.nodes:
            return PopulationStats()
        counts = Counter(node.status for node in self.nodes)
        size = len(self.nodes)
        return PopulationStats(
            size=size,
            healthy=counts[HealthStatus.HEALTHY],
            degraded=counts[HealthStatus.DEGRADED],
            down=counts[HealthStatus.DOWN],
            mean_load=sum(n.load for n in self.nodes) / size,
            mean_health=sum(n.health for n in self.nodes) / size,
        )


def _clamp(v: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, v))


def _initial_health(rng: RandomSource, dynamics: NodeDynamics) -> float:
    if chance(rng, dynamics.healthy_share):
        return rng.uniform(*dynamics.healthy_range)
    if chance(rng, dynamics.degraded_share):
        return rng.uniform(*dynamics.degraded_range)
    return rng.uniform(*dynamics.down_range)


def create_population(
    count: int = DEFAULT_POPULATION_SIZE,
    regions: Sequence[str] = DEFAULT_REGIONS,
    rng: RandomSource | None = None,
    dynamics: NodeDynamics | None = None,
    thresholds: HealthThresholds | None = None,
    seed: int | None = None,
) -> NodePopulation:
    """Seed a new population, biased toward a healthy fleet.

    Node ``i`` is placed in ``regions[i % len(regions)]`` and named
    ``node-NN`` (1-based, zero-padded). Initial load and health are rounded
    to whole numbers.

    Args:
        count: Number of nodes. Zero or negative yields an empty population.
        regions: Region names, assigned round-robin. Empty yields an empty
            population.
        rng: Source of randomness. Defaults to ``random.Random(seed)``.
        dynamics: Process constants.
        thresholds: Health bands used for each node's status.
        seed: Seed used only when ``rng`` is not given.
    """
    if count <= 0:
        return NodePopulation()
    if not regions:
        logger.warning("No regions given; creating an empty population of %d requested nodes", count)
        return NodePopulation()

    rng = resolve_rng(rng, seed)
    dynamics = dynamics or DEFAULT_DYNAMICS
    thresholds = thresholds or DEFAULT_THRESHOLDS

    nodes = []
    for i in range(count):
        load = rng.uniform(*dynamics.initial_load_range)
        health = _initial_health(rng, dynamics)
        nodes.append(Node(
            node_id=node_id_for(i),
            region=regions[i % len(regions)],
            load=round_half_up(load),
            health=round_half_up(health),
            thresholds=thresholds,
        ))

    population = NodePopulation(tuple(nodes))
    logger.info(
        "Created population of %d nodes across %d regions: %s",
        len(population),
        len(regions),
        population.stats,
    )
    return population


def _health_delta(node: Node, rng: RandomSource, dynamics: NodeDynamics) -> float:
    delta = symmetric(rng, dynamics.health_noise)
    status = node.status
    if status is HealthStatus.DOWN and chance(rng, dynamics.recovery_probability):
        return abs(delta) * dynamics.recovery_factor
    if status is HealthStatus.DEGRADED and chance(rng, dynamics.decline_probability):
        return -abs(delta) * dynamics.decline_factor
    return delta


def tick_node(node: Node, rng: RandomSource, dynamics: NodeDynamics = DEFAULT_DYNAMICS) -> Node:
    """Evolve one node by a single step, returning a new Node."""
    load = _clamp(node.load + symmetric(rng, dynamics.load_noise))
    health = round_half_up(_clamp(node.health + _health_delta(node, rng, dynamics)))
    updated = replace(node, load=load, health=health)
    if updated.status is not node.status:
        logger.debug(
            "%s (%s) %s -> %s at health %d",
            node.node_id,
            node.region,
            node.status.value,
            updated.status.value,
            health,
        )
    return updated


def tick(
    population: NodePopulation,
    rng: RandomSource | None = None,
    dynamics: NodeDynamics | None = None,
    seed: int | None = None,
) -> NodePopulation:
    """Return the population one step later. ``population`` is not modified.

    Nodes are processed in order, each independently. Identifiers and
    regions carry over unchanged.
    """
    rng = resolve_rng(rng, seed)
    dynamics = dynamics or DEFAULT_DYNAMICS
    return NodePopulation(tuple(tick_node(node, rng, dynamics) for node in population))


class NodeSimulator:
    """Owner of the randomness and constants for one node fleet.

    Args:
        dynamics: Process constants.
        rng: Source of randomness. Defaults to ``random.Random(seed)``.
        thresholds: Health bands applied to created nodes.
        seed: Seed used only when ``rng`` is not given.
    """

    def __init__(
        self,
        dynamics: NodeDynamics | None = None,
        rng: RandomSource | None = None,
        thresholds: HealthThresholds | None = None,
        seed: int | None = None,
    ):
        self.dynamics = dynamics or DEFAULT_DYNAMICS
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self._rng = resolve_rng(rng, seed)

    def create_population(
        self,
        count: int = DEFAULT_POPULATION_SIZE,
        regions: Sequence[str] = DEFAULT_REGIONS,
    ) -> NodePopulation:
        return create_population(
            count, regions, rng=self._rng, dynamics=self.dynamics, thresholds=self.thresholds
        )

    def tick(self, population: NodePopulation) -> NodePopulation:
        return tick(population, rng=self._rng, dynamics=self.dynamics)
