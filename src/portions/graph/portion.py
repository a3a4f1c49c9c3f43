"""Portion graph: intra-class relationships between attributes and operations.

A rebuild runs four passes over one class of the object model:

1. **Members**: one node per attribute, then per operation, in declaration
   order.  This fixes every in-class index before any edge is inferred.
2. **External references**: base-class member references inside operation
   bodies become ``ExternalReference`` nodes named after the declared class,
   connected to the operation that makes the reference.
3. **Attribute usage**: attribute -> operation for every operation whose
   statements use the attribute.
4. **Intra-class calls**: callee -> caller for calls whose target's declared
   class is the class being built.

Connections point from supplier (depended upon) to consumer (dependent).
Nothing in the model is treated as fatal: unresolved names simply produce no
node or edge.  A call that targets this class but names no known operation
is logged and recorded in :attr:`PortionGraph.diagnostics`.

Known limitation: a base-class member reference whose name matches an
in-class operation is treated as already covered by pass 4, even when it
reaches a different, inherited method of the same name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger

from portions.graph.registry import NodeRegistry, PortionNode
from portions.schema import NodeKind, StatementKind

if TYPE_CHECKING:
    from portions.model.facade import ClassifierView, ObjectModelView, StatementView

# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PortionConnection:
    """Directed edge: ``supplier`` is depended upon by ``consumer``."""

    supplier: int
    consumer: int


@dataclass(frozen=True)
class UnresolvedCall:
    """A call that targets the current class but names no operation of it."""

    class_name: str
    caller: str
    func_name: str


def _declared_class(stmt: StatementView) -> ClassifierView | None:
    decl_type = stmt.decl_type
    if decl_type is None:
        return None
    return decl_type.get_class()


# ---------------------------------------------------------------------------
# Graph
# ---------------------------------------------------------------------------


class PortionGraph:
    """Nodes and connections for one class, rebuilt from scratch on demand.

    :meth:`clear_and_add_class` is the only mutator.  Between rebuilds the
    graph is a read-only snapshot; calls on one instance must not overlap.
    """

    def __init__(self, model: ObjectModelView, *, hash_index: bool = True) -> None:
        self._model = model
        self._registry = NodeRegistry(hash_index=hash_index)
        self._connections: list[PortionConnection] = []
        self._diagnostics: list[UnresolvedCall] = []
        self._class_name = ""

    # -- Read surface ------------------------------------------------------

    @property
    def class_name(self) -> str:
        return self._class_name

    @property
    def nodes(self) -> tuple[PortionNode, ...]:
        return self._registry.nodes

    @property
    def connections(self) -> tuple[PortionConnection, ...]:
        return tuple(self._connections)

    @property
    def diagnostics(self) -> tuple[UnresolvedCall, ...]:
        return tuple(self._diagnostics)

    def find_node(self, name: str, kind: NodeKind) -> int | None:
        return self._registry.find(name, kind)

    def get_node(self, index: int) -> PortionNode:
        return self._registry[index]

    def suppliers_of(self, index: int) -> list[int]:
        """Nodes that *index* depends on, in connection order."""
        return [c.supplier for c in self._connections if c.consumer == index]

    def consumers_of(self, index: int) -> list[int]:
        """Nodes that depend on *index*, in connection order."""
        return [c.consumer for c in self._connections if c.supplier == index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "class_name": self._class_name,
            "nodes": [{"index": i, "name": n.name, "kind": str(n.kind)} for i, n in enumerate(self.nodes)],
            "connections": [{"supplier": c.supplier, "consumer": c.consumer} for c in self._connections],
        }

    # -- Rebuild -----------------------------------------------------------

    def clear_and_add_class(self, class_name: str) -> None:
        """Discard the current graph and build the one for *class_name*.

        An unknown name, or a type that is not a class, leaves the graph empty.
        """
        self._registry.clear()
        self._connections.clear()
        self._diagnostics.clear()
        self._class_name = class_name

        type_ = self._model.find_type(class_name)
        cls = type_.get_class() if type_ is not None else None
        if cls is None:
            logger.debug("No class named {!r}, portion graph left empty", class_name)
            return

        self._add_class_members(cls)
        self._add_external_references(cls)
        self._add_attribute_connections(cls)
        self._add_operation_connections(cls)
        logger.debug(
            "Built portion graph for {}: {} nodes, {} connections",
            class_name,
            len(self._registry),
            len(self._connections),
        )

    def _connect(self, supplier: int, consumer: int) -> None:
        self._connections.append(PortionConnection(supplier, consumer))

    def _add_class_members(self, cls: ClassifierView) -> None:
        for attr in cls.attributes:
            if attr.name:
                self._registry.get_or_create(attr.name, NodeKind.ATTRIBUTE)
        for oper in cls.operations:
            if oper.name:
                self._registry.get_or_create(oper.name, NodeKind.OPERATION)

    def _add_external_references(self, cls: ClassifierView) -> None:
        for oper in cls.operations:
            consumer = self._registry.find(oper.name, NodeKind.OPERATION)
            if consumer is None:
                continue
            for stmt in oper.statements:
                if not stmt.has_base_class_member_ref:
                    continue
                # Same-named in-class operation: covered by the call pass, even
                # if the reference really targets an overridden base version.
                if self._registry.find(stmt.func_name, NodeKind.OPERATION) is not None:
                    continue
                called_class = _declared_class(stmt)
                ext_name = called_class.name if called_class is not None else ""
                if not ext_name:
                    logger.debug("Unresolved base-class reference {!r} in {}", stmt.func_name, oper.name)
                    continue
                supplier = self._registry.get_or_create(ext_name, NodeKind.EXTERNAL_REFERENCE)
                self._connect(supplier, consumer)

    def _add_attribute_connections(self, cls: ClassifierView) -> None:
        for attr in cls.attributes:
            supplier = self._registry.find(attr.name, NodeKind.ATTRIBUTE)
            if supplier is None:
                continue
            for oper in cls.operations:
                consumer = self._registry.find(oper.name, NodeKind.OPERATION)
                if consumer is not None and oper.statements.check_attr_used(attr.name):
                    self._connect(supplier, consumer)

    def _add_operation_connections(self, cls: ClassifierView) -> None:
        for caller in cls.operations:
            consumer = self._registry.find(caller.name, NodeKind.OPERATION)
            if consumer is None:
                continue
            for stmt in caller.statements:
                if stmt.kind != StatementKind.CALL or _declared_class(stmt) is not cls:
                    continue
                # TODO: model operator overloads as operations; calls to them currently end up unresolved here.
                callee = cls.get_operation_any(stmt.func_name)
                if callee is None:
                    logger.warning(
                        "Call to {}.{} from {} matches no operation of the class",
                        cls.name,
                        stmt.func_name,
                        caller.name,
                    )
                    self._diagnostics.append(UnresolvedCall(cls.name, caller.name, stmt.func_name))
                    continue
                supplier = self._registry.find(callee.name, NodeKind.OPERATION)
                if supplier is not None:
                    self._connect(supplier, consumer)
