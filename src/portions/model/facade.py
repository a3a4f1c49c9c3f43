"""Read-only interface the portion graph builder consumes.

The builder never mutates the model and never depends on how it was
produced; any object graph satisfying these protocols can be handed to
:class:`~portions.graph.PortionGraph`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from portions.schema import StatementKind


@runtime_checkable
class TypeView(Protocol):
    @property
    def name(self) -> str: ...

    def get_class(self) -> ClassifierView | None: ...


@runtime_checkable
class StatementView(Protocol):
    @property
    def kind(self) -> StatementKind: ...

    @property
    def has_base_class_member_ref(self) -> bool: ...

    @property
    def func_name(self) -> str: ...

    @property
    def decl_type(self) -> TypeView | None: ...


class StatementsView(Protocol):
    def __iter__(self) -> Iterator[StatementView]: ...

    def check_attr_used(self, attr_name: str) -> bool: ...


@runtime_checkable
class AttributeView(Protocol):
    @property
    def name(self) -> str: ...


class OperationView(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def statements(self) -> StatementsView: ...


@runtime_checkable
class ClassifierView(TypeView, Protocol):
    @property
    def attributes(self) -> Sequence[AttributeView]: ...

    @property
    def operations(self) -> Sequence[OperationView]: ...

    def get_operation_any(self, name: str) -> OperationView | None: ...


class ObjectModelView(Protocol):
    """Entry point: resolve a type by name."""

    def find_type(self, name: str) -> TypeView | None: ...
