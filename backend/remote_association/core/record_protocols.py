"""Boundary Protocols — contracts between the resolution core and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure/; dependency arrows point inward only
    - The remote API is reached only through RemoteClient.fetch
    - Records are read through read_field(); nothing assumes a concrete base class

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: fetch() does IO, but the pure helpers that consume its
      result (batch_partition) are never async themselves
    - read_field() accepts mappings and attribute objects alike for remote
      records: the HTTP client returns models, ad-hoc clients often return dicts.
      Local records must be attribute objects, since they carry association state
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

# A scalar correlation value, or the list of them sent by batch resolution
ParamValue = Any
Params = Mapping[str, ParamValue]


@runtime_checkable
class RemoteClient(Protocol):
    """Contract for the remote resource API, implemented by infrastructure."""
    async def fetch(
        self, target_type: str, scope: str, params: Params,
    ) -> Sequence[Any]:
        """Return matching remote records, or raise RemoteNotFoundError."""
        ...


def read_field(record: Any, field: str) -> Any:
    """Read a named field from an attribute object or a mapping.

    This is the whole capability required of local and remote records: local
    records expose their primary key field, remote records their foreign key.
    Association slots are attached separately by association_state.state_of().
    """
    if isinstance(record, Mapping):
        return record[field]
    return getattr(record, field)
