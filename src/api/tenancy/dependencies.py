"""FastAPI dependencies for the tenancy bounded context.

Host resolution itself runs in ``HostResolutionMiddleware``; the
dependencies here read its result for route handlers.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        tenant: Annotated[Tenant, Depends(require_tenant)],
    ):
        # tenant is the Tenant owning the request host
        ...
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Annotated, AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_read_session, open_read_session
from infrastructure.settings import TenancySettings, get_tenancy_settings
from tenancy.application.branding import Branding, branding_for
from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import HostContext
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.ports.repositories import ITenantLookup

HOST_CONTEXT_STATE_KEY = "host_context"


@asynccontextmanager
async def open_tenant_lookup() -> AsyncIterator[ITenantLookup]:
    """Open a tenant lookup backed by a fresh read session.

    Used by the middleware, which cannot take part in FastAPI's
    dependency injection.
    """
    async with open_read_session() as session:
        yield TenantRepository(session=session)


def get_tenant_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> TenantRepository:
    """Get TenantRepository instance bound to a read session."""
    return TenantRepository(session=session)


def get_host_context(request: Request) -> HostContext:
    """Get the host context attached by HostResolutionMiddleware.

    Raises:
        HTTPException 500: If the request did not pass through the
            middleware (e.g. an exempt path)
    """
    context = getattr(request.state, HOST_CONTEXT_STATE_KEY, None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Host context is not available for this request",
        )
    return context


def require_tenant(
    context: Annotated[HostContext, Depends(get_host_context)],
) -> Tenant:
    """Require the request host to belong to a tenant.

    Raises:
        HTTPException 404: If the host is the admin domain or unknown
    """
    tenant = context.tenant
    if tenant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No tenant for this host",
        )
    return tenant


def require_admin(
    context: Annotated[HostContext, Depends(get_host_context)],
) -> HostContext:
    """Require the request to arrive under the admin domain.

    Answers 404 rather than 403 so tenant hosts do not reveal admin routes.
    """
    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not found",
        )
    return context


def get_branding(
    context: Annotated[HostContext, Depends(get_host_context)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> Branding:
    """Presentation defaults for the request's resolution."""
    return branding_for(
        context.resolution,
        admin_brand_name=settings.admin_brand_name,
        default_color=settings.default_color,
    )
