"""ASGI middleware resolving the tenant of every request from its host.

For each HTTP request outside the exempt paths the middleware:
- resolves the ``Host`` header against the tenant store and admin domain
- attaches an immutable ``HostContext`` to ``request.state.host_context``
  and makes it current via ``host_context_scope`` for the request's lifetime
- binds ``host``, ``resolution`` and ``tenant_id`` into structlog contextvars
- rejects unknown hosts with 404 (configurable) and lookup failures with 503
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.observability_context import ObservationContext
from tenancy.application.context import host_context_scope
from tenancy.application.observability import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)
from tenancy.application.resolver import TenantResolver
from tenancy.dependencies import HOST_CONTEXT_STATE_KEY, open_tenant_lookup
from tenancy.domain.resolution import HostContext, ResolutionResult
from tenancy.domain.value_objects import Hostname
from tenancy.ports.exceptions import LookupFailedError
from tenancy.ports.repositories import ITenantLookup

TENANT_ID_HEADER = "X-Tenant-ID"

LookupProvider = Callable[[], AbstractAsyncContextManager[ITenantLookup]]


class HostResolutionMiddleware:
    """Resolve the request host and expose the result to downstream handlers."""

    def __init__(
        self,
        app: ASGIApp,
        lookup_provider: LookupProvider | None = None,
        settings: TenancySettings | None = None,
        probe: TenantResolutionProbe | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application
            lookup_provider: Factory returning an async context manager that
                yields a tenant lookup for one request. Defaults to a
                PostgreSQL-backed repository on a fresh read session.
            settings: Tenancy settings (defaults to the cached settings)
            probe: Optional domain probe for observability
        """
        self.app = app
        self._lookup_provider = lookup_provider or open_tenant_lookup
        self._settings = settings or get_tenancy_settings()
        self._probe = probe or DefaultTenantResolutionProbe()
        admin_domain = self._settings.admin_domain
        self._admin_domain = Hostname.parse(admin_domain) if admin_domain else None

    def _is_exempt(self, path: str) -> bool:
        for prefix in self._settings.exempt_paths:
            if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
                return True
        return False

    async def _resolve(
        self, host: str, probe: TenantResolutionProbe
    ) -> ResolutionResult:
        """Resolve ``host`` through a lookup opened for this request only.

        Failures opening or closing the lookup are reported as
        ``LookupFailedError``, like failures of the lookup itself.
        """
        try:
            async with self._lookup_provider() as lookup:
                resolver = TenantResolver(
                    lookup=lookup,
                    admin_domain=self._admin_domain,
                    probe=probe,
                    lookup_timeout=self._settings.lookup_timeout_seconds,
                )
                return await resolver.resolve(host)
        except LookupFailedError:
            raise
        except Exception as e:
            probe.lookup_failed(host=host, error=e)
            raise LookupFailedError(
                f"Tenant lookup for '{host}' unavailable: {e}", host=host
            ) from e

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self._is_exempt(scope["path"]):
            await self.app(scope, receive, send)
            return

        host = Headers(scope=scope).get("host", "").strip()
        state = scope.setdefault("state", {})
        probe = self._probe.with_context(
            ObservationContext(request_id=state.get("request_id"))
        )

        try:
            resolution = await self._resolve(host, probe)
        except LookupFailedError:
            response = JSONResponse(
                {"detail": "Tenant lookup unavailable"},
                status_code=503,
            )
            await response(scope, receive, send)
            return

        context = HostContext(host=host, resolution=resolution)
        state[HOST_CONTEXT_STATE_KEY] = context

        if context.is_not_found and self._settings.reject_unknown_hosts:
            probe.unknown_host_rejected(host=host, path=scope["path"])
            response = JSONResponse({"detail": "Unknown host"}, status_code=404)
            await response(scope, receive, send)
            return

        log_context: dict[str, Any] = {
            "host": host,
            "resolution": context.kind.value,
        }
        tenant = context.tenant
        if tenant is not None:
            log_context["tenant_id"] = tenant.id.value

        async def send_with_tenant(message: Message) -> None:
            if tenant is not None and message["type"] == "http.response.start":
                MutableHeaders(scope=message)[TENANT_ID_HEADER] = tenant.id.value
            await send(message)

        with host_context_scope(context):
            with structlog.contextvars.bound_contextvars(**log_context):
                await self.app(scope, receive, send_with_tenant)
