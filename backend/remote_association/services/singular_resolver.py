"""Singular Resolver — on-demand fetch-and-memoize of one association for one record.

Invariants:
    - At most one RemoteClient call per (record, association) until reset()
    - A memoized or prefetched slot is returned as-is, even when it holds None / []
    - Cardinality ONE stores a single record or None, never a sequence
    - Cardinality MANY stores a list, possibly empty
    - RemoteNotFoundError becomes an empty result and is memoized; every other
      failure propagates unchanged and memoizes nothing

Design Decisions:
    - Generic accessor keyed by association name: no per-association methods
    - Only RemoteNotFoundError is absorbed: "no relation" is distinct from
      "lookup failed" (transport, auth, malformed payloads)
"""

import logging
from typing import Any

from remote_association.core.association_definition import AssociationDefinition
from remote_association.core.association_registry import AssociationRegistry
from remote_association.core.association_state import state_of
from remote_association.core.errors import RemoteNotFoundError
from remote_association.core.record_protocols import RemoteClient, read_field

logger = logging.getLogger(__name__)


def empty_result(definition: AssociationDefinition) -> Any:
    """The value stored when nothing matches: None for ONE, [] for MANY."""
    return None if definition.is_singular else []


def shape_result(definition: AssociationDefinition, remote_records: Any) -> Any:
    """Fit a fetched sequence to the association's cardinality."""
    items = list(remote_records or ())
    if definition.is_singular:
        return items[0] if items else None
    return items


class SingularResolver:
    """Lazily resolves one association on one record."""

    def __init__(self, registry: AssociationRegistry, client: RemoteClient):
        self._registry = registry
        self._client = client

    async def resolve(self, record: Any, name: str) -> Any:
        """Return the associated remote record(s), fetching on first access."""
        state = state_of(record)
        if state.is_resolved(name):
            return state.get(name, None)

        definition = self._registry.lookup(type(record), name)
        key = read_field(record, definition.primary_key)
        params = definition.build_params(key)
        logger.debug(
            f"Fetching {definition.target_type} for {type(record).__name__}.{name}",
            extra={
                "association": name,
                "target_type": definition.target_type,
                "scope": definition.scope,
            },
        )
        try:
            fetched = await self._client.fetch(
                definition.target_type, definition.scope, params,
            )
        except RemoteNotFoundError:
            logger.info(
                f"No {definition.target_type} found for "
                f"{type(record).__name__}.{name}={key!r}",
                extra={
                    "association": name,
                    "target_type": definition.target_type,
                    "error_code": "REMOTE_NOT_FOUND",
                },
            )
            return state.store(name, empty_result(definition))
        return state.store(name, shape_result(definition, fetched))

    def assign(self, record: Any, name: str, value: Any) -> Any:
        """Overwrite the slot in memory. No remote call, nothing persisted."""
        self._registry.lookup(type(record), name)
        return state_of(record).store(name, value)

    def reset(self, record: Any, name: str | None = None) -> None:
        """Forget memoized values so the next access fetches again."""
        state_of(record).clear(name)
