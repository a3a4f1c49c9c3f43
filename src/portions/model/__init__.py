"""Model package: in-memory object model consumed by the portion graph."""

from __future__ import annotations

from portions.model.facade import (
    AttributeView,
    ClassifierView,
    ObjectModelView,
    OperationView,
    StatementsView,
    StatementView,
    TypeView,
)
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
from portions.model.snapshot import ModelSnapshot, load_snapshot

__all__ = [
    "AttributeView",
    "CallStatement",
    "ClassifierView",
    "ModelAttribute",
    "ModelClassifier",
    "ModelOperation",
    "ModelSnapshot",
    "ModelStatements",
    "ModelType",
    "NestStatement",
    "ObjectModel",
    "ObjectModelView",
    "OperationView",
    "Statement",
    "StatementView",
    "StatementsView",
    "TypeView",
    "VarRefStatement",
    "load_snapshot",
]
