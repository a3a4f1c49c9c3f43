"""Graph package: portion graph construction for a single class."""

from __future__ import annotations

from portions.graph.portion import PortionConnection, PortionGraph, UnresolvedCall
from portions.graph.registry import NodeRegistry, PortionNode

__all__ = [
    "NodeRegistry",
    "PortionConnection",
    "PortionGraph",
    "PortionNode",
    "UnresolvedCall",
]
