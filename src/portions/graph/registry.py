"""Append-only node storage with stable integer handles."""

from __future__ import annotations

from dataclasses import dataclass

from portions.schema import NodeKind


@dataclass(frozen=True)
class PortionNode:
    """One vertex of a portion graph."""

    name: str
    kind: NodeKind


class NodeRegistry:
    """Owns the node list and deduplicates by ``(name, kind)``.

    Indices are positions in insertion order and are never reused or
    reassigned until :meth:`clear`.  With ``hash_index=False`` lookups scan
    the list; both modes return identical results.
    """

    def __init__(self, *, hash_index: bool = True) -> None:
        self._nodes: list[PortionNode] = []
        self._index: dict[tuple[str, NodeKind], int] | None = {} if hash_index else None

    @property
    def nodes(self) -> tuple[PortionNode, ...]:
        return tuple(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, index: int) -> PortionNode:
        if index < 0:
            msg = f"Invalid node index: {index}"
            raise IndexError(msg)
        return self._nodes[index]

    def clear(self) -> None:
        self._nodes.clear()
        if self._index is not None:
            self._index.clear()

    def find(self, name: str, kind: NodeKind) -> int | None:
        if self._index is not None:
            return self._index.get((name, kind))
        for i, node in enumerate(self._nodes):
            if node.kind == kind and node.name == name:
                return i
        return None

    def get_or_create(self, name: str, kind: NodeKind) -> int:
        """Index of the ``(name, kind)`` node, appending it if missing."""
        if not name:
            msg = f"Node name must be non-empty (kind={kind})"
            raise ValueError(msg)
        existing = self.find(name, kind)
        if existing is not None:
            return existing
        self._nodes.append(PortionNode(name, kind))
        index = len(self._nodes) - 1
        if self._index is not None:
            self._index[(name, kind)] = index
        return index
