"""Kind discriminators for portion graphs and the statements they are built from.

Values double as the display names used by renderers and JSON snapshots, so
they must stay stable.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Node kinds
# ---------------------------------------------------------------------------


class NodeKind(StrEnum):
    ATTRIBUTE = "Attribute"
    OPERATION = "Operation"
    # Symbol outside the class, reached through a base-class member reference
    EXTERNAL_REFERENCE = "ExternalReference"


# ---------------------------------------------------------------------------
# Statement kinds
# ---------------------------------------------------------------------------


class StatementKind(StrEnum):
    CALL = "call"
    VAR_REF = "var_ref"
    # Nesting markers (scope open/close, else branches)
    OPEN_NEST = "open_nest"
    CLOSE_NEST = "close_nest"
    ELSE_NEST = "else_nest"


# ---------------------------------------------------------------------------
# Groupings
# ---------------------------------------------------------------------------

_MEMBER_KINDS: frozenset[NodeKind] = frozenset({NodeKind.ATTRIBUTE, NodeKind.OPERATION})

_NEST_KINDS: frozenset[StatementKind] = frozenset(
    {
        StatementKind.OPEN_NEST,
        StatementKind.CLOSE_NEST,
        StatementKind.ELSE_NEST,
    }
)


def is_member_kind(kind: NodeKind) -> bool:
    """True for nodes that stand for the class's own attributes and operations."""
    return kind in _MEMBER_KINDS


def is_nest_kind(kind: StatementKind) -> bool:
    return kind in _NEST_KINDS
