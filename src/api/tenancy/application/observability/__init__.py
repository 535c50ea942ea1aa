"""Observability for tenancy application operations."""

from tenancy.application.observability.resolution_probe import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)

__all__ = [
    "DefaultTenantResolutionProbe",
    "TenantResolutionProbe",
]
