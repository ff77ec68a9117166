"""Error Hierarchy — typed, categorized exceptions for association resolution.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Declaration errors surface at import/startup; resolution errors at call time
    - RemoteNotFoundError is the only remote failure the resolvers absorb
    - to_response() produces a flat, JSON-serializable envelope

Design Decisions:
    - Single hierarchy with RemoteAssociationError base: callers can catch one type
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    local_type: str | None = None
    association: str | None = None
    target_type: str | None = None
    debug_info: dict[str, Any] | None = None


class RemoteAssociationError(Exception):
    """Base exception for all remote association errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to a structured error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "local_type": self.context.local_type,
                    "association": self.context.association,
                    "target_type": self.context.target_type,
                },
            }
        }


def _type_name(local_type: type | str | None) -> str | None:
    if local_type is None or isinstance(local_type, str):
        return local_type
    return local_type.__name__


# ─── Declaration Errors ─────────────────────────────────────────

class AssociationNotFoundError(RemoteAssociationError):
    """No association with this name was declared for the local type."""
    def __init__(
        self, association: str, local_type: type | str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.association = association
        ctx.local_type = _type_name(local_type)
        super().__init__(
            f"Can't find settings for {association} association",
            "ASSOCIATION_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx,
        )
        self.association = association


class DuplicateAssociationError(RemoteAssociationError):
    """Association name already declared for the local type."""
    def __init__(
        self, association: str, local_type: type | str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.association = association
        ctx.local_type = _type_name(local_type)
        super().__init__(
            f"Association '{association}' is already defined for {ctx.local_type}. "
            "Pass override=True to redefine it.",
            "DUPLICATE_ASSOCIATION", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx,
        )
        self.association = association


class InvalidAssociationOptionsError(RemoteAssociationError):
    """Declaration options failed validation."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ASSOCIATION_OPTIONS", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class RegistryFrozenError(RemoteAssociationError):
    """Declaration attempted after the registry was frozen."""
    def __init__(
        self, association: str, local_type: type | str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.association = association
        ctx.local_type = _type_name(local_type)
        super().__init__(
            f"Registry is frozen; cannot declare '{association}' on {ctx.local_type}",
            "REGISTRY_FROZEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx,
        )


# ─── Remote Errors ──────────────────────────────────────────────

class RemoteNotFoundError(RemoteAssociationError):
    """Remote API reported that nothing matches the query."""
    def __init__(
        self, target_type: str, scope: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.target_type = target_type
        super().__init__(
            f"{target_type} not found (scope '{scope}')",
            "REMOTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx,
        )
        self.target_type = target_type
        self.scope = scope


class RemoteAPIError(RemoteAssociationError):
    """Remote API call failed for any reason other than not-found."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Remote API error ({api_error_type}): {message}",
            "REMOTE_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context,
        )
        self.api_error_type = api_error_type
        self.status_code = status_code
