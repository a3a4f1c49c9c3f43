"""JSON snapshot format for object models.

A snapshot lists every type once.  Statements name their declared type by
string; names are resolved after all types exist, so forward references are
fine.  Unknown or empty type names resolve to ``None``, which the graph
builder treats as an unresolved target.

Example::

    {
      "types": [
        {"name": "Base", "operations": [{"name": "helper"}]},
        {
          "name": "Widget",
          "attributes": [{"name": "size", "type": "int"}],
          "operations": [
            {
              "name": "grow",
              "statements": [
                {"kind": "var_ref", "name": "size", "decl_type": "Widget"},
                {"kind": "call", "name": "helper", "decl_type": "Base", "base_class_ref": true}
              ]
            }
          ]
        },
        {"name": "int", "classifier": false}
      ]
    }
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from portions.model.objects import (
    CallStatement,
    ModelAttribute,
    ModelClassifier,
    ModelOperation,
    ModelStatements,
    ModelType,
    NestStatement,
    ObjectModel,
    Statement,
    VarRefStatement,
)
from portions.schema import StatementKind, is_nest_kind


class AttributeSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(min_length=1)
    type_name: str = Field(default="", alias="type", description="Declared attribute type name.")


class StatementSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: StatementKind
    name: str = Field(default="", description="Called function or referenced variable name.")
    decl_type: str = Field(default="", description="Static type of the call/reference target.")
    base_class_ref: bool = Field(default=False, description="Target is a member inherited from a base class.")


class OperationSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    statements: list[StatementSpec] = Field(default_factory=list)


class TypeSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    classifier: bool = Field(default=True, description="False for non-class types (builtins, typedefs).")
    attributes: list[AttributeSpec] = Field(default_factory=list)
    operations: list[OperationSpec] = Field(default_factory=list)


class ModelSnapshot(BaseModel):
    """Validated snapshot document."""

    model_config = ConfigDict(extra="forbid")

    types: list[TypeSpec] = Field(default_factory=list)

    def to_model(self) -> ObjectModel:
        """Build an :class:`ObjectModel`; raises ``ValueError`` on duplicate type names."""
        model = ObjectModel()
        classes: list[tuple[TypeSpec, ModelClassifier]] = []
        for spec in self.types:
            if spec.classifier:
                cls = ModelClassifier(spec.name)
                classes.append((spec, cls))
                model.add_type(cls)
            else:
                model.add_type(ModelType(spec.name))

        for spec, cls in classes:
            for attr in spec.attributes:
                cls.add_attribute(ModelAttribute(attr.name, attr.type_name))
            for oper in spec.operations:
                stmts = ModelStatements(_build_statement(model, s) for s in oper.statements)
                cls.add_operation(ModelOperation(oper.name, stmts))

        logger.debug("Loaded model snapshot: {} types, {} classes", len(model), len(classes))
        return model


def _build_statement(model: ObjectModel, spec: StatementSpec) -> Statement:
    if is_nest_kind(spec.kind):
        return NestStatement(spec.kind)
    decl_type = model.find_type(spec.decl_type) if spec.decl_type else None
    if spec.decl_type and decl_type is None:
        logger.debug("Unknown declared type {!r} for statement {!r}", spec.decl_type, spec.name)
    if spec.kind == StatementKind.CALL:
        return CallStatement(spec.name, decl_type, spec.base_class_ref)
    return VarRefStatement(spec.name, decl_type, spec.base_class_ref)


def load_snapshot(path: Path | str) -> ObjectModel:
    """Read and validate a JSON snapshot file.

    Propagates ``FileNotFoundError`` and ``pydantic.ValidationError``; malformed
    JSON surfaces as a ``ValidationError`` as well.
    """
    text = Path(path).read_text(encoding="utf-8")
    return ModelSnapshot.model_validate_json(text).to_model()
