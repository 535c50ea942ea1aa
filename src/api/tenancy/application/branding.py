"""Presentation defaults selected from a host resolution."""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.resolution import (
    AdminResolved,
    ResolutionResult,
    TenantResolved,
)

UNKNOWN_BRAND_NAME = "Unknown site"


@dataclass(frozen=True)
class Branding:
    """Name and colour a page should be rendered with."""

    name: str
    color: str


def branding_for(
    resolution: ResolutionResult,
    admin_brand_name: str,
    default_color: str,
) -> Branding:
    """Select branding for a resolution.

    Tenants use their own name and colour, falling back to ``default_color``.
    The admin domain uses the configured admin brand. Unknown hosts get a
    neutral brand.
    """
    if isinstance(resolution, TenantResolved):
        tenant = resolution.tenant
        return Branding(name=tenant.name, color=tenant.color or default_color)
    if isinstance(resolution, AdminResolved):
        return Branding(name=admin_brand_name, color=default_color)
    return Branding(name=UNKNOWN_BRAND_NAME, color=default_color)
