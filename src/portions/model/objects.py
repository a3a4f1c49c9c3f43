"""In-memory object model: types, classifiers, members and statements.

Statements form a closed tagged union (:data:`Statement`); callers branch on
``kind`` or ``isinstance`` rather than on subclass overrides.  Instances are
built once (directly or via :mod:`portions.model.snapshot`) and treated as an
immutable snapshot afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from portions.schema import StatementKind, is_nest_kind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class ModelType:
    """A named type that is not a class (builtin, typedef, enum...)."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_class(self) -> ModelClassifier | None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class ModelClassifier(ModelType):
    """A class-like type owning attributes and operations in declaration order."""

    def __init__(
        self,
        name: str,
        attributes: Iterable[ModelAttribute] = (),
        operations: Iterable[ModelOperation] = (),
    ) -> None:
        super().__init__(name)
        self._attributes: list[ModelAttribute] = list(attributes)
        self._operations: list[ModelOperation] = list(operations)

    def get_class(self) -> ModelClassifier:
        return self

    @property
    def attributes(self) -> tuple[ModelAttribute, ...]:
        return tuple(self._attributes)

    @property
    def operations(self) -> tuple[ModelOperation, ...]:
        return tuple(self._operations)

    def add_attribute(self, attribute: ModelAttribute) -> None:
        self._attributes.append(attribute)

    def add_operation(self, operation: ModelOperation) -> None:
        self._operations.append(operation)

    def get_operation_any(self, name: str) -> ModelOperation | None:
        """First operation called *name*, ignoring parameter signatures.

        Overloads are not told apart; whichever was declared first wins.
        """
        for oper in self._operations:
            if oper.name == name:
                return oper
        return None


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CallStatement:
    """Call of ``func_name`` on a target whose static type is ``decl_type``."""

    func_name: str
    decl_type: ModelType | None = None
    base_class_ref: bool = False

    @property
    def kind(self) -> StatementKind:
        return StatementKind.CALL

    @property
    def has_base_class_member_ref(self) -> bool:
        return self.base_class_ref


@dataclass(frozen=True)
class VarRefStatement:
    """Read or write of a variable; ``decl_type`` is the owner's static type."""

    var_name: str
    decl_type: ModelType | None = None
    base_class_ref: bool = False

    @property
    def kind(self) -> StatementKind:
        return StatementKind.VAR_REF

    @property
    def func_name(self) -> str:
        return self.var_name

    @property
    def has_base_class_member_ref(self) -> bool:
        return self.base_class_ref


@dataclass(frozen=True)
class NestStatement:
    """Scope marker with no target of its own."""

    nest_kind: StatementKind = StatementKind.OPEN_NEST

    def __post_init__(self) -> None:
        if not is_nest_kind(self.nest_kind):
            msg = f"Not a nesting statement kind: {self.nest_kind!r}"
            raise ValueError(msg)

    @property
    def kind(self) -> StatementKind:
        return self.nest_kind

    @property
    def func_name(self) -> str:
        return ""

    @property
    def decl_type(self) -> None:
        return None

    @property
    def has_base_class_member_ref(self) -> bool:
        return False


Statement = CallStatement | VarRefStatement | NestStatement


class ModelStatements:
    """Ordered statement sequence of one operation body."""

    def __init__(self, statements: Iterable[Statement] = ()) -> None:
        self._statements: tuple[Statement, ...] = tuple(statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __getitem__(self, index: int) -> Statement:
        return self._statements[index]

    def check_attr_used(self, attr_name: str) -> bool:
        """True if any own-class variable reference names *attr_name*.

        Base-class member references are excluded: they reach an inherited
        member, not the class's own attribute.
        """
        return any(
            isinstance(stmt, VarRefStatement) and not stmt.base_class_ref and stmt.var_name == attr_name
            for stmt in self._statements
        )


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModelAttribute:
    name: str
    type_name: str = ""


@dataclass(frozen=True)
class ModelOperation:
    name: str
    statements: ModelStatements = field(default_factory=ModelStatements)


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class ObjectModel:
    """Name-indexed collection of types; one object per type name."""

    def __init__(self, types: Iterable[ModelType] = ()) -> None:
        self._types: dict[str, ModelType] = {}
        for type_ in types:
            self.add_type(type_)

    def add_type(self, type_: ModelType) -> None:
        if type_.name in self._types:
            msg = f"Type already defined: {type_.name!r}"
            raise ValueError(msg)
        self._types[type_.name] = type_

    def find_type(self, name: str) -> ModelType | None:
        return self._types.get(name)

    def classifiers(self) -> list[ModelClassifier]:
        """Classes in insertion order."""
        return [cls for t in self._types.values() if (cls := t.get_class()) is not None]

    def __len__(self) -> int:
        return len(self._types)
