"""HTTP routes exposing host resolution."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from tenancy.application.branding import Branding
from tenancy.dependencies import (
    get_branding,
    get_host_context,
    get_tenant_repository,
    require_admin,
)
from tenancy.domain.resolution import HostContext
from tenancy.infrastructure.tenant_repository import TenantRepository
from tenancy.ports.exceptions import LookupFailedError
from tenancy.presentation.models import HostContextResponse, TenantResponse

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)


@router.get("/context")
async def get_context(
    context: Annotated[HostContext, Depends(get_host_context)],
    branding: Annotated[Branding, Depends(get_branding)],
) -> HostContextResponse:
    """Describe how the current request host was resolved.

    Returns the host, the resolution outcome, the tenant (if any) and the
    branding selected for it.
    """
    return HostContextResponse.from_context(context, branding)


@router.get("/tenants")
async def list_tenants(
    _: Annotated[HostContext, Depends(require_admin)],
    repository: Annotated[TenantRepository, Depends(get_tenant_repository)],
) -> list[TenantResponse]:
    """List all tenants.

    Only served on the admin domain.

    Raises:
        HTTPException: 404 on any host other than the admin domain
        HTTPException: 503 if the tenant store is unavailable
    """
    try:
        tenants = await repository.list_all()
    except LookupFailedError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tenant store unavailable",
        )
    return [TenantResponse.from_domain(tenant) for tenant in tenants]
