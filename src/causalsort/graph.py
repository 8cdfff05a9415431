"""
Reference graph over content-addressed messages.

Nodes are dense integer indices into an arena of identifiers; an
identifier -> index map gives O(1) lookup while edges are inserted. Edges
point from a message to each message it references, so a topological order
lists dependents before their dependencies (newest first).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List

from causalsort.errors import CausalCycleError
from causalsort.identifiers import Multihash

__all__ = ["CausalGraph"]

logger = logging.getLogger(__name__)


@dataclass
class CausalGraph:
    """Directed graph of identifiers connected by reference edges.

    Attributes:
        identifiers: Node arena; the position of an identifier is its node index
        index: Maps each identifier to its node index
        targets: Adjacency lists; ``targets[u]`` holds every ``v`` with an edge u -> v
    """

    identifiers: List[Multihash] = field(default_factory=list)
    index: Dict[Multihash, int] = field(default_factory=dict)
    targets: List[List[int]] = field(default_factory=list)
    _edge_count: int = field(default=0, repr=False)

    @property
    def node_count(self) -> int:
        return len(self.identifiers)

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def node_for(self, identifier: Multihash) -> int:
        """Return the node index for an identifier, creating the node on first sight."""
        node = self.index.get(identifier)
        if node is None:
            node = len(self.identifiers)
            self.identifiers.append(identifier)
            self.index[identifier] = node
            self.targets.append([])
        return node

    def add_edge(self, source: int, target: int) -> None:
        """Record that ``source`` references ``target``.

        Parallel edges are kept; they count once per occurrence towards the
        target's in-degree and are consumed the same way, so ordering is
        unaffected.
        """
        self.targets[source].append(target)
        self._edge_count += 1

    def topological_order(self) -> List[int]:
        """Order every node so each edge points from an earlier to a later node.

        Kahn's algorithm with a FIFO ready queue seeded in node-creation
        order. Among nodes with no path between them, the one created first
        is emitted first.

        Returns:
            All node indices, dependents before dependencies

        Raises:
            CausalCycleError: If the references contain a cycle
        """
        in_degree = [0] * self.node_count
        for outgoing in self.targets:
            for target in outgoing:
                in_degree[target] += 1

        ready = deque(node for node, degree in enumerate(in_degree) if degree == 0)
        order: List[int] = []

        while ready:
            node = ready.popleft()
            order.append(node)
            for target in self.targets[node]:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    ready.append(target)

        if len(order) != self.node_count:
            cycle = self._find_cycle(in_degree)
            logger.error(
                "Reference cycle detected: %d of %d nodes could not be ordered",
                self.node_count - len(order),
                self.node_count,
            )
            raise CausalCycleError([self.identifiers[node] for node in cycle])

        return order

    def _find_cycle(self, in_degree: List[int]) -> List[int]:
        """Extract one cycle from the nodes Kahn's algorithm could not emit.

        Every leftover node still has an incoming edge from another leftover
        node, so walking those edges backwards must revisit a node.
        """
        predecessor: Dict[int, int] = {}
        for source, outgoing in enumerate(self.targets):
            if in_degree[source] == 0:
                continue
            for target in outgoing:
                if in_degree[target] > 0:
                    predecessor.setdefault(target, source)

        start = next(node for node, degree in enumerate(in_degree) if degree > 0)
        seen: Dict[int, int] = {}
        path: List[int] = []
        node = start
        while node not in seen:
            seen[node] = len(path)
            path.append(node)
            node = predecessor[node]

        # path walks edges backwards; reverse to follow reference direction
        cycle = path[seen[node]:]
        cycle.reverse()
        return cycle
