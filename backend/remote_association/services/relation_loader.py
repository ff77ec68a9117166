"""Relation Loader — run a local SQLAlchemy query and prefetch remote associations.

Invariants:
    - The query runs once; remote fetches happen only after rows are loaded
    - Rows are de-duplicated by identity (.unique()) before batch resolution
    - Returns the loaded records, each with the requested associations prefetched

Design Decisions:
    - Takes an AsyncSession and a Select, not a model class: callers keep full
      control over filters, ordering and eager loading of local relations
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession

from remote_association.services.batch_resolver import BatchResolver

logger = logging.getLogger(__name__)


async def load_with_remote(
    db: AsyncSession,
    stmt: Select,
    batch_resolver: BatchResolver,
    *names: str,
) -> Sequence[Any]:
    """Execute stmt and prefetch the named remote associations on every row."""
    result = await db.execute(stmt)
    records = list(result.scalars().unique().all())
    logger.debug(
        f"Loaded {len(records)} local record(s) for remote prefetch",
        extra={"record_count": len(records)},
    )
    return await batch_resolver.resolve_all(records, names)
