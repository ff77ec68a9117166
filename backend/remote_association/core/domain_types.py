"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Cardinality has exactly two members: ONE and MANY
    - Scope tokens FIRST/LAST/ALL are the built-in query shapes; any other
      token is a custom scope passed through to the remote API verbatim
    - Batch resolution always queries with Scope.ALL

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare equal to the raw tokens used in declaration options
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AssociationName = NewType("AssociationName", str)
TargetType = NewType("TargetType", str)


# ─── Defaults ────────────────────────────────────────────────────

DEFAULT_PRIMARY_KEY = "id"
FOREIGN_KEY_SUFFIX = "_id"


# ─── Enums ───────────────────────────────────────────────────────

class Cardinality(str, Enum):
    """How many remote entities an association yields."""
    ONE = "one"
    MANY = "many"


class Scope(str, Enum):
    """Built-in query shapes understood by every RemoteClient."""
    FIRST = "first"
    LAST = "last"
    ALL = "all"


DEFAULT_SCOPES = {
    Cardinality.ONE: Scope.FIRST.value,
    Cardinality.MANY: Scope.ALL.value,
}
