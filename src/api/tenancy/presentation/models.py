"""Pydantic models for tenancy API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tenancy.application.branding import Branding
from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import HostContext
from tenancy.domain.value_objects import ResolutionKind


class TenantResponse(BaseModel):
    """Response model for tenant."""

    id: str = Field(..., description="Tenant ID (ULID format)")
    domain: str = Field(..., description="Normalized host owned by the tenant")
    name: str = Field(..., description="Tenant display name")
    color: str | None = Field(default=None, description="Tenant brand colour")

    @classmethod
    def from_domain(cls, tenant: Tenant) -> TenantResponse:
        """Convert domain Tenant aggregate to API response."""
        return cls(
            id=tenant.id.value,
            domain=tenant.domain.value,
            name=tenant.name,
            color=tenant.color,
        )


class BrandingResponse(BaseModel):
    """Presentation defaults for the current host."""

    name: str
    color: str

    @classmethod
    def from_branding(cls, branding: Branding) -> BrandingResponse:
        return cls(name=branding.name, color=branding.color)


class HostContextResponse(BaseModel):
    """Resolution of the current request host."""

    host: str = Field(..., description="Host as received")
    resolution: ResolutionKind = Field(..., description="Resolution outcome")
    tenant: TenantResponse | None = Field(
        default=None, description="Resolved tenant, if any"
    )
    branding: BrandingResponse

    @classmethod
    def from_context(
        cls, context: HostContext, branding: Branding
    ) -> HostContextResponse:
        tenant = context.tenant
        return cls(
            host=context.host,
            resolution=context.kind,
            tenant=TenantResponse.from_domain(tenant) if tenant else None,
            branding=BrandingResponse.from_branding(branding),
        )
