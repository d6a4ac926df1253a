"""Scene graph lookup used by the recorder.

The recorder only needs `get_node(node_id)`; any host scene graph exposing
that method (and nodes with `transform.position` / `transform.rotation`)
can be recorded. `SceneGraph` is a small dict-backed implementation for
scripts and tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class Transform:
    """Live, mutable transform of a scene node. Rotation is (x, y, z, w)."""

    position: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 1.0])
    scale: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])


@dataclass
class SceneNode:
    id: str
    transform: Transform = field(default_factory=Transform)


class TransformLike(Protocol):
    position: Sequence[float]
    rotation: Sequence[float]


class NodeLike(Protocol):
    transform: TransformLike


class NodeLookup(Protocol):
    """Anything the recorder can pull node transforms from."""

    def get_node(self, node_id: str) -> NodeLike | None: ...


class SceneGraph:
    """In-memory scene graph keyed by node id."""

    def __init__(self, nodes: Sequence[SceneNode] = ()) -> None:
        self._nodes: dict[str, SceneNode] = {}
        for node in nodes:
            self.add_node(node)

    def add_node(self, node: SceneNode) -> None:
        """Add a node, replacing any existing node with the same id."""
        self._nodes[node.id] = node

    def remove_node(self, node_id: str) -> None:
        """Remove a node. Unknown ids are ignored."""
        self._nodes.pop(node_id, None)

    def get_node(self, node_id: str) -> SceneNode | None:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"SceneGraph(nodes={list(self._nodes)})"
