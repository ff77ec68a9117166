"""Association State — per-record slots and prefetch flags for remote associations.

Invariants:
    - Only the resolvers (and the explicit setter) write to a record's state
    - A name in `loaded` means the slot is memoized, even when its value is None
    - A name in `prefetched` means batch resolution already ran for it
    - State lives on the record instance; nothing is shared between records

Design Decisions:
    - Typed mapping keyed by association name instead of generated attributes:
      no runtime method synthesis, works for any object that accepts attributes
    - Created lazily on first access: ORM instances loaded by SQLAlchemy never
      run __init__, so the state cannot be set up in a constructor
"""

from dataclasses import dataclass, field
from typing import Any

STATE_ATTRIBUTE = "_remote_association_state"

_MISSING = object()


@dataclass
class RemoteAssociationState:
    """Association slots for one local record."""

    values: dict[str, Any] = field(default_factory=dict)
    loaded: set[str] = field(default_factory=set)
    prefetched: set[str] = field(default_factory=set)

    def is_resolved(self, name: str) -> bool:
        """True when a later access must not hit the remote API."""
        return name in self.loaded or name in self.prefetched

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def store(self, name: str, value: Any) -> Any:
        """Memoize value for name and return it."""
        self.values[name] = value
        self.loaded.add(name)
        return value

    def mark_prefetched(self, name: str) -> None:
        self.prefetched.add(name)

    def clear(self, name: str | None = None) -> None:
        """Forget one association (or all of them) so the next access re-fetches."""
        if name is None:
            self.values.clear()
            self.loaded.clear()
            self.prefetched.clear()
            return
        self.values.pop(name, None)
        self.loaded.discard(name)
        self.prefetched.discard(name)


def state_of(record: object) -> RemoteAssociationState:
    """Return the record's association state, attaching an empty one on first use."""
    state = getattr(record, STATE_ATTRIBUTE, _MISSING)
    if state is _MISSING or state is None:
        state = RemoteAssociationState()
        # object.__setattr__ bypasses SQLAlchemy attribute instrumentation
        try:
            object.__setattr__(record, STATE_ATTRIBUTE, state)
        except (AttributeError, TypeError) as e:
            raise TypeError(
                f"{type(record).__name__} cannot carry remote association state; "
                "local records must accept new attributes (no dicts or __slots__)"
            ) from e
    return state


class RemoteAssociationMixin:
    """Mixin for local models (ORM or plain) that carry remote associations."""

    @property
    def remote_state(self) -> RemoteAssociationState:
        return state_of(self)

    def remote_resources_prefetched(self, name: str) -> bool:
        return name in state_of(self).prefetched
