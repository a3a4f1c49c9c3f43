"""Tests for the append-only node registry."""

from __future__ import annotations

import pytest

from portions.graph import NodeRegistry, PortionNode
from portions.schema import NodeKind


@pytest.fixture(params=[True, False], ids=["hash-index", "linear-scan"])
def registry(request) -> NodeRegistry:
    return NodeRegistry(hash_index=request.param)


def test_get_or_create_appends_in_order(registry):
    assert registry.get_or_create("a", NodeKind.ATTRIBUTE) == 0
    assert registry.get_or_create("f", NodeKind.OPERATION) == 1
    assert registry.nodes == (PortionNode("a", NodeKind.ATTRIBUTE), PortionNode("f", NodeKind.OPERATION))


def test_get_or_create_returns_existing(registry):
    first = registry.get_or_create("a", NodeKind.ATTRIBUTE)
    registry.get_or_create("b", NodeKind.ATTRIBUTE)
    assert registry.get_or_create("a", NodeKind.ATTRIBUTE) == first
    assert len(registry) == 2


def test_same_name_different_kind_is_distinct(registry):
    attr = registry.get_or_create("x", NodeKind.ATTRIBUTE)
    oper = registry.get_or_create("x", NodeKind.OPERATION)
    ext = registry.get_or_create("x", NodeKind.EXTERNAL_REFERENCE)
    assert len({attr, oper, ext}) == 3


def test_find_does_not_mutate(registry):
    assert registry.find("a", NodeKind.ATTRIBUTE) is None
    assert len(registry) == 0
    registry.get_or_create("a", NodeKind.ATTRIBUTE)
    assert registry.find("a", NodeKind.ATTRIBUTE) == 0
    assert registry.find("a", NodeKind.OPERATION) is None


def test_empty_name_rejected(registry):
    with pytest.raises(ValueError, match="non-empty"):
        registry.get_or_create("", NodeKind.OPERATION)
    assert len(registry) == 0


def test_clear_resets_numbering(registry):
    registry.get_or_create("a", NodeKind.ATTRIBUTE)
    registry.get_or_create("b", NodeKind.ATTRIBUTE)
    registry.clear()
    assert len(registry) == 0
    assert registry.find("a", NodeKind.ATTRIBUTE) is None
    assert registry.get_or_create("b", NodeKind.ATTRIBUTE) == 0


def test_getitem(registry):
    registry.get_or_create("a", NodeKind.ATTRIBUTE)
    assert registry[0] == PortionNode("a", NodeKind.ATTRIBUTE)
    with pytest.raises(IndexError):
        registry[1]
    with pytest.raises(IndexError):
        registry[-1]
