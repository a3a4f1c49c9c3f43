"""Shared test fixtures for class portions."""

from __future__ import annotations

import pytest

from portions.graph import PortionGraph
from portions.model import ModelSnapshot, ObjectModel

# Widget exercises every pass:
#   grow   -> base-class reference to Base::helper (external node "Base")
#   paint  -> uses size/color, calls grow
#   reset  -> base-class reference shadowed by the in-class "reset"
#   blend  -> unresolvable in-class call, base reference with no declared type
WIDGET_SNAPSHOT: dict = {
    "types": [
        {"name": "int", "classifier": False},
        {
            "name": "Base",
            "attributes": [{"name": "id", "type": "int"}],
            "operations": [{"name": "helper"}, {"name": "reset"}],
        },
        {
            "name": "Widget",
            "attributes": [{"name": "size", "type": "int"}, {"name": "color", "type": "int"}],
            "operations": [
                {
                    "name": "grow",
                    "statements": [
                        {"kind": "var_ref", "name": "size", "decl_type": "Widget"},
                        {"kind": "call", "name": "helper", "decl_type": "Base", "base_class_ref": True},
                    ],
                },
                {
                    "name": "paint",
                    "statements": [
                        {"kind": "var_ref", "name": "color", "decl_type": "Widget"},
                        {"kind": "open_nest"},
                        {"kind": "var_ref", "name": "size", "decl_type": "Widget"},
                        {"kind": "call", "name": "grow", "decl_type": "Widget"},
                        {"kind": "close_nest"},
                    ],
                },
                {
                    "name": "reset",
                    "statements": [
                        {"kind": "call", "name": "reset", "decl_type": "Base", "base_class_ref": True},
                        {"kind": "var_ref", "name": "size", "decl_type": "Widget"},
                    ],
                },
                {
                    "name": "blend",
                    "statements": [
                        {"kind": "call", "name": "operator+", "decl_type": "Widget"},
                        {"kind": "call", "name": "log", "base_class_ref": True},
                    ],
                },
            ],
        },
        {
            "name": "Simple",
            "attributes": [{"name": "a"}, {"name": "b"}],
            "operations": [
                {"name": "f", "statements": [{"kind": "var_ref", "name": "a", "decl_type": "Simple"}]},
                {"name": "g", "statements": [{"kind": "call", "name": "f", "decl_type": "Simple"}]},
            ],
        },
    ]
}


@pytest.fixture
def widget_model() -> ObjectModel:
    return ModelSnapshot.model_validate(WIDGET_SNAPSHOT).to_model()


@pytest.fixture(params=[True, False], ids=["hash-index", "linear-scan"])
def graph(request, widget_model) -> PortionGraph:
    """Empty PortionGraph over the Widget model, once per lookup strategy."""
    return PortionGraph(widget_model, hash_index=request.param)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no stray portions.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def widget_snapshot() -> dict:
    return WIDGET_SNAPSHOT
