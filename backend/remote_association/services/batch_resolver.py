"""Batch Resolver — eager, grouped fetch of associations for a collection of records.

Invariants:
    - Exactly one RemoteClient call per requested association, whatever the
      number of records or distinct keys; zero calls for an empty collection
    - Every call uses scope "all" with the distinct primary keys as a list
    - Every record gets its slot assigned AND its prefetch flag set, even when
      nothing matched, so a later singular access never re-fetches
    - An undeclared name raises AssociationNotFoundError before its fetch;
      records already filled for earlier names stay filled
    - Failures other than not-found propagate unchanged

Design Decisions:
    - Sequential by default: predictable ordering, one request in flight
    - concurrent=True looks every name up first, then gathers the fetches; each
      association is applied as soon as its own fetch completes (disjoint slots),
      and the first failure in request order is re-raised after all settle
    - Cardinality ONE slots receive the first match (or None) so singular reads
      and batch reads return the same shape
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from remote_association.core.association_definition import AssociationDefinition
from remote_association.core.association_registry import AssociationRegistry
from remote_association.core.association_state import state_of
from remote_association.core.batch_partition import (
    collect_keys, index_by_key, matches_for,
)
from remote_association.core.domain_types import Scope
from remote_association.core.errors import RemoteNotFoundError
from remote_association.core.record_protocols import RemoteClient, read_field
from remote_association.services.singular_resolver import shape_result

logger = logging.getLogger(__name__)


class BatchResolver:
    """Prefetches associations for many records in one round trip per association."""

    def __init__(
        self,
        registry: AssociationRegistry,
        client: RemoteClient,
        concurrent: bool = False,
    ):
        self._registry = registry
        self._client = client
        self._concurrent = concurrent

    async def resolve_all(
        self,
        records: Iterable[Any],
        names: Iterable[str],
        local_type: type | None = None,
    ) -> Sequence[Any]:
        """Resolve every name for every record; returns the (mutated) records.

        A single name may be passed as a bare string.

        Records are expected to share one local type. Definitions are looked up
        against local_type, or the type of the first record when omitted.
        """
        if not isinstance(records, Sequence):
            records = list(records)
        if not records:
            return records

        local_type = local_type or type(records[0])
        if isinstance(names, str):
            names = (names,)
        requested = list(dict.fromkeys(names))
        if self._concurrent and len(requested) > 1:
            await self._resolve_concurrently(records, requested, local_type)
        else:
            for name in requested:
                definition = self._registry.lookup(local_type, name)
                await self._resolve_one(records, definition)
        return records

    async def _resolve_concurrently(
        self, records: Sequence[Any], names: list[str], local_type: type,
    ) -> None:
        definitions = [self._registry.lookup(local_type, name) for name in names]
        results = await asyncio.gather(
            *(self._resolve_one(records, d) for d in definitions),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _resolve_one(
        self, records: Sequence[Any], definition: AssociationDefinition,
    ) -> None:
        keys = collect_keys(records, definition.primary_key)
        params = definition.build_params(keys)
        try:
            remote_records = await self._client.fetch(
                definition.target_type, Scope.ALL.value, params,
            )
        except RemoteNotFoundError:
            remote_records = []

        index = index_by_key(remote_records or (), definition.foreign_key)
        for record in records:
            matches = matches_for(index, read_field(record, definition.primary_key))
            state = state_of(record)
            state.store(definition.name, shape_result(definition, matches))
            state.mark_prefetched(definition.name)

        logger.info(
            f"Prefetched {definition.target_type} for "
            f"{len(records)} {definition.local_type.__name__} record(s)",
            extra={
                "association": definition.name,
                "target_type": definition.target_type,
                "record_count": len(records),
                "key_count": len(keys),
                "result_count": len(remote_records or ()),
            },
        )
