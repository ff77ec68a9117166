"""Remote Associations — accessor facade over the registry, client and both resolvers.

Invariants:
    - One registry, one client, one SingularResolver, one BatchResolver per facade
    - get() / set() are the per-record accessor pair; includes() / load() prefetch
    - A facade built from settings owns its HTTP client and closes it on aclose()

Design Decisions:
    - Facade instead of generated attributes on model classes: the same model can
      be resolved against different registries or clients (tests, tenants)
    - from_settings() is the only place configuration reaches the resolvers
"""

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from remote_association.config import Settings, get_settings
from remote_association.core.association_registry import AssociationRegistry
from remote_association.core.record_protocols import RemoteClient
from remote_association.infrastructure.resource_client import ResourceClient
from remote_association.services.batch_resolver import BatchResolver
from remote_association.services.relation_loader import load_with_remote
from remote_association.services.singular_resolver import SingularResolver


class RemoteAssociations:
    """Entry point for reading, writing and prefetching remote associations."""

    def __init__(
        self,
        registry: AssociationRegistry,
        client: RemoteClient,
        concurrent: bool = False,
        owns_client: bool = False,
    ):
        self.registry = registry
        self.client = client
        self._singular = SingularResolver(registry, client)
        self._batch = BatchResolver(registry, client, concurrent=concurrent)
        self._owns_client = owns_client

    @classmethod
    def from_settings(
        cls, registry: AssociationRegistry, settings: Settings | None = None,
    ) -> "RemoteAssociations":
        settings = settings or get_settings()
        client = ResourceClient(
            settings.remote_api_base_url,
            token=settings.remote_api_token,
            timeout_seconds=settings.remote_api_timeout_seconds,
            format=settings.remote_api_format,
        )
        return cls(
            registry, client,
            concurrent=settings.batch_concurrent,
            owns_client=True,
        )

    async def get(self, record: Any, name: str) -> Any:
        return await self._singular.resolve(record, name)

    def set(self, record: Any, name: str, value: Any) -> Any:
        return self._singular.assign(record, name, value)

    def reset(self, record: Any, name: str | None = None) -> None:
        self._singular.reset(record, name)

    async def includes(self, records: Iterable[Any], *names: str) -> Sequence[Any]:
        """Prefetch names for records; analogous to an ORM's eager includes()."""
        return await self._batch.resolve_all(records, names)

    async def load(self, db: AsyncSession, stmt: Select, *names: str) -> Sequence[Any]:
        return await load_with_remote(db, stmt, self._batch, *names)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "RemoteAssociations":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
