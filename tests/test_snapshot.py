"""Tests for JSON model snapshot validation and loading."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from portions.model import CallStatement, ModelSnapshot, NestStatement, VarRefStatement, load_snapshot


def _model(data: dict):
    return ModelSnapshot.model_validate(data).to_model()


def _one_call_class(name: str, decl_type: str) -> dict:
    """Snapshot type with a single operation making a single call."""
    call = {"kind": "call", "name": "g", "decl_type": decl_type}
    return {"name": name, "operations": [{"name": "f", "statements": [call]}]}


class TestToModel:
    def test_types_and_classes(self, widget_model):
        assert [c.name for c in widget_model.classifiers()] == ["Base", "Widget", "Simple"]
        assert widget_model.find_type("int").get_class() is None

    def test_attribute_type_alias(self, widget_model):
        size = widget_model.find_type("Widget").attributes[0]
        assert size.name == "size"
        assert size.type_name == "int"

    def test_statement_variants(self, widget_model):
        paint = widget_model.find_type("Widget").get_operation_any("paint")
        kinds = [type(s) for s in paint.statements]
        assert kinds == [VarRefStatement, NestStatement, VarRefStatement, CallStatement, NestStatement]

    def test_decl_type_resolves_to_same_object(self, widget_model):
        widget = widget_model.find_type("Widget")
        grow_call = list(widget.get_operation_any("paint").statements)[3]
        assert grow_call.decl_type is widget

    def test_forward_reference(self):
        model = _model({"types": [_one_call_class("A", "B"), {"name": "B", "operations": [{"name": "g"}]}]})
        stmt = model.find_type("A").operations[0].statements[0]
        assert stmt.decl_type is model.find_type("B")

    def test_unknown_decl_type_is_none(self):
        model = _model({"types": [_one_call_class("A", "Ghost")]})
        assert model.find_type("A").operations[0].statements[0].decl_type is None

    def test_duplicate_type_names(self):
        with pytest.raises(ValueError, match="already defined"):
            _model({"types": [{"name": "A"}, {"name": "A", "classifier": False}]})

    def test_empty_snapshot(self):
        assert len(_model({})) == 0


class TestValidation:
    def test_unknown_statement_kind(self):
        with pytest.raises(ValidationError):
            bad = {"name": "A", "operations": [{"name": "f", "statements": [{"kind": "jump"}]}]}
            ModelSnapshot.model_validate({"types": [bad]})

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            ModelSnapshot.model_validate({"types": [{"name": "A", "methods": []}]})

    def test_empty_member_name(self):
        with pytest.raises(ValidationError):
            ModelSnapshot.model_validate({"types": [{"name": "A", "attributes": [{"name": ""}]}]})


class TestLoadSnapshot:
    def test_load_from_file(self, tmp_path, widget_snapshot):
        path = tmp_path / "model.json"
        path.write_text(json.dumps(widget_snapshot), encoding="utf-8")
        model = load_snapshot(path)
        assert model.find_type("Widget") is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_snapshot(str(path))
