"""Association Definition — immutable description of one declared remote relationship.

Invariants:
    - Every field is set once build_definition() returns (no partial definitions)
    - AssociationOptions accepts only class_name, primary_key, foreign_key, scope
    - Omitted options are defaulted from naming conventions and cardinality
    - build_params() is the only place the remote query parameter map is shaped

Design Decisions:
    - Pydantic model for raw options (extra="forbid"): typos in declarations fail
      loudly instead of silently falling back to a default
    - Frozen dataclass for the resolved definition: hashable, cheap, no validation
      cost on every lookup
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from remote_association.core import naming
from remote_association.core.domain_types import (
    Cardinality, DEFAULT_PRIMARY_KEY, DEFAULT_SCOPES,
)
from remote_association.core.errors import (
    ErrorContext, InvalidAssociationOptionsError,
)


class AssociationOptions(BaseModel):
    """Options recognized by has_one_remote / has_many_remote."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    class_name: str | None = None
    primary_key: str | None = None
    foreign_key: str | None = None
    scope: str | None = None

    @field_validator("class_name", "primary_key", "foreign_key", "scope", mode="before")
    @classmethod
    def reject_blank(cls, v: Any) -> Any:
        """Symbols and enums are accepted as their string value; blanks are not."""
        if hasattr(v, "value"):
            v = v.value
        if isinstance(v, str) and not v.strip():
            raise ValueError("must not be blank")
        return v


@dataclass(frozen=True)
class AssociationDefinition:
    """Resolved settings for one (local type, association name) pair."""

    name: str
    local_type: type
    target_type: str
    primary_key: str
    foreign_key: str
    scope: str
    cardinality: Cardinality

    @property
    def is_singular(self) -> bool:
        return self.cardinality is Cardinality.ONE

    def build_params(self, keys: object) -> dict[str, object]:
        """Returns the parameter map used to query the remote API."""
        return {self.foreign_key: keys}


def parse_options(
    options: AssociationOptions | Mapping[str, Any] | None,
    context: ErrorContext | None = None,
) -> AssociationOptions:
    """Validate raw declaration options, mapping pydantic errors to our hierarchy."""
    if options is None:
        return AssociationOptions()
    if isinstance(options, AssociationOptions):
        return options
    try:
        return AssociationOptions.model_validate({str(k): v for k, v in options.items()})
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"])
        raise InvalidAssociationOptionsError(
            f"Invalid option '{field}': {first['msg']}", field, context,
        )


def build_definition(
    local_type: type,
    name: str,
    options: AssociationOptions | Mapping[str, Any] | None = None,
    cardinality: Cardinality = Cardinality.ONE,
) -> AssociationDefinition:
    """Fill defaults for every omitted option and freeze the result."""
    ctx = ErrorContext(local_type=local_type.__name__, association=name)
    if not name or not str(name).isidentifier():
        raise InvalidAssociationOptionsError(
            f"Association name {name!r} is not a valid identifier", "name", ctx,
        )
    opts = parse_options(options, ctx)
    cardinality = Cardinality(cardinality)
    return AssociationDefinition(
        name=name,
        local_type=local_type,
        target_type=opts.class_name or naming.classify(name),
        primary_key=opts.primary_key or DEFAULT_PRIMARY_KEY,
        foreign_key=opts.foreign_key or naming.foreign_key(local_type.__name__),
        scope=opts.scope or DEFAULT_SCOPES[cardinality],
        cardinality=cardinality,
    )
