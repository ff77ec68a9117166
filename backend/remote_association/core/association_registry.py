"""Association Registry — per local type mapping from association name to definition.

Invariants:
    - (local_type, name) is unique: redefinition requires override=True
    - lookup() walks the local type's MRO, so subclasses see inherited declarations
    - After freeze() the registry is read-only (single writer, then many readers)
    - No IO, no global state: one explicit instance is passed to every resolver

Design Decisions:
    - Explicit object over class-level metaprogramming: declarations are visible
      at the call site and tests build their own isolated registry
    - Duplicate declarations are an error by default; intentional overrides say so
"""

import logging
from collections.abc import Mapping
from typing import Any

from remote_association.core.association_definition import (
    AssociationDefinition, AssociationOptions, build_definition,
)
from remote_association.core.domain_types import Cardinality
from remote_association.core.errors import (
    AssociationNotFoundError, DuplicateAssociationError, RegistryFrozenError,
)

logger = logging.getLogger(__name__)


class AssociationRegistry:
    """Holds every remote association declared for every local type."""

    def __init__(self) -> None:
        self._definitions: dict[type, dict[str, AssociationDefinition]] = {}
        self._frozen = False

    # ─── Declaration ─────────────────────────────────────────────

    def define(
        self,
        local_type: type,
        name: str,
        options: AssociationOptions | Mapping[str, Any] | None = None,
        cardinality: Cardinality = Cardinality.ONE,
        override: bool = False,
    ) -> AssociationDefinition:
        """Validate options, fill defaults and register the definition."""
        if self._frozen:
            raise RegistryFrozenError(name, local_type)
        by_name = self._definitions.setdefault(local_type, {})
        if name in by_name and not override:
            raise DuplicateAssociationError(name, local_type)
        definition = build_definition(local_type, name, options, cardinality)
        by_name[name] = definition
        logger.debug(
            f"Declared remote association {local_type.__name__}.{name}",
            extra={
                "local_type": local_type.__name__,
                "association": name,
                "target_type": definition.target_type,
            },
        )
        return definition

    def has_one_remote(
        self, local_type: type, name: str, override: bool = False, **options: Any,
    ) -> AssociationDefinition:
        """Declare a to-one association (default scope "first")."""
        return self.define(local_type, name, options, Cardinality.ONE, override)

    def has_many_remote(
        self, local_type: type, name: str, override: bool = False, **options: Any,
    ) -> AssociationDefinition:
        """Declare a to-many association (default scope "all")."""
        return self.define(local_type, name, options, Cardinality.MANY, override)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ─── Lookup ──────────────────────────────────────────────────

    def lookup(self, local_type: type, name: str) -> AssociationDefinition:
        """Return the definition or raise AssociationNotFoundError."""
        for klass in local_type.__mro__:
            definition = self._definitions.get(klass, {}).get(name)
            if definition is not None:
                return definition
        raise AssociationNotFoundError(name, local_type)

    def all_for(self, local_type: type) -> frozenset[str]:
        names: set[str] = set()
        for klass in local_type.__mro__:
            names.update(self._definitions.get(klass, {}))
        return frozenset(names)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        local_type, name = key
        if not isinstance(local_type, type):
            return False
        return name in self.all_for(local_type)

    def __len__(self) -> int:
        return sum(len(by_name) for by_name in self._definitions.values())
