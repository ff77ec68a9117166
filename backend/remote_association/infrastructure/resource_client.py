"""Resource Client — RemoteClient implementation over a REST resource API (httpx).

Invariants:
    - Collection path is the pluralized snake_case target type: Profile -> /profiles
    - Scope "all" returns every item; "first" / "last" return at most one item;
      any other scope is a custom member route: GET /profiles/<scope>
    - List parameters are sent as repeated name[] pairs (author_id[]=1&author_id[]=2)
    - 404 -> RemoteNotFoundError; every other failure -> RemoteAPIError
    - No retries: a failed call fails the resolution that issued it

Design Decisions:
    - Thin wrapper over httpx.AsyncClient: transport, auth and timeouts stay here,
      resolvers only see fetch() and the core error hierarchy
    - Items become RemoteResource (pydantic, extra="allow"): attribute access to
      whatever fields the API returns, no per-resource schema required
    - transport argument lets tests plug in httpx.MockTransport
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, PrivateAttr

from remote_association.core import naming
from remote_association.core.domain_types import Scope
from remote_association.core.errors import (
    ErrorContext, RemoteAPIError, RemoteNotFoundError,
)
from remote_association.core.record_protocols import Params

logger = logging.getLogger(__name__)

_COLLECTION_SCOPES = frozenset(s.value for s in Scope)


class RemoteResource(BaseModel):
    """One entity returned by the remote API; every JSON field is an attribute."""

    model_config = ConfigDict(extra="allow")

    _target_type: str = PrivateAttr(default="")

    @classmethod
    def build(cls, target_type: str, data: Mapping[str, Any]) -> "RemoteResource":
        resource = cls.model_validate(dict(data))
        resource._target_type = target_type
        return resource

    @property
    def target_type(self) -> str:
        return self._target_type


def build_query(params: Params) -> list[tuple[str, Any]]:
    """Flatten a parameter map, expanding sequences into repeated name[] pairs."""
    query: list[tuple[str, Any]] = []
    for name, value in params.items():
        if isinstance(value, (list, tuple, set, frozenset)):
            query.extend((f"{name}[]", v) for v in value)
        else:
            query.append((name, value))
    return query


class ResourceClient:
    """Fetches remote entities by type, scope and parameters."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 30.0,
        format: str = "json",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._suffix = f".{format}" if format else ""
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    def resource_path(self, target_type: str, scope: str) -> str:
        collection = naming.collection_name(target_type)
        if scope in _COLLECTION_SCOPES:
            return f"/{collection}{self._suffix}"
        return f"/{collection}/{scope}{self._suffix}"

    async def fetch(
        self, target_type: str, scope: str, params: Params,
    ) -> list[RemoteResource]:
        """GET the resource and return the matching entities for scope."""
        scope = getattr(scope, "value", scope)
        path = self.resource_path(target_type, scope)
        payload = await self._get_json(target_type, scope, path, build_query(params))
        items = [
            RemoteResource.build(target_type, item)
            for item in self._items(payload, target_type)
        ]
        if scope == Scope.FIRST.value:
            items = items[:1]
        elif scope == Scope.LAST.value:
            items = items[-1:]
        logger.debug(
            f"GET {path} returned {len(items)} {target_type}",
            extra={
                "target_type": target_type,
                "scope": scope,
                "result_count": len(items),
            },
        )
        return items

    async def _get_json(
        self, target_type: str, scope: str, path: str, query: list[tuple[str, Any]],
    ) -> Any:
        context = ErrorContext(target_type=target_type)
        try:
            response = await self._client.get(path, params=query)
        except httpx.TimeoutException as e:
            logger.error(f"Remote API timeout on {path}: {e}")
            raise RemoteAPIError(f"timeout on {path}", "timeout", context=context)
        except httpx.HTTPError as e:
            logger.error(f"Remote API connection error on {path}: {e}")
            raise RemoteAPIError(str(e), "connection_error", context=context)

        if response.status_code == httpx.codes.NOT_FOUND:
            raise RemoteNotFoundError(target_type, scope, context=context)
        if response.is_error:
            error_type = "server_error" if response.is_server_error else "client_error"
            logger.warning(
                f"Remote API returned {response.status_code} for {path}",
                extra={"target_type": target_type, "status_code": response.status_code},
            )
            raise RemoteAPIError(
                f"HTTP {response.status_code} on {path}", error_type,
                status_code=response.status_code, context=context,
            )
        if not response.content:
            return []
        try:
            return response.json()
        except ValueError:
            raise RemoteAPIError(
                f"response from {path} is not valid JSON", "malformed",
                status_code=response.status_code, context=context,
            )

    @staticmethod
    def _items(payload: Any, target_type: str) -> list[Mapping[str, Any]]:
        if payload is None:
            return []
        if isinstance(payload, Mapping):
            payload = [payload]
        if not isinstance(payload, list) or not all(
            isinstance(item, Mapping) for item in payload
        ):
            raise RemoteAPIError(
                f"expected {target_type} object(s), got {type(payload).__name__}",
                "malformed", context=ErrorContext(target_type=target_type),
            )
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ResourceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
