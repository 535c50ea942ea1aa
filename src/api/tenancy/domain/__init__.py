"""Tenancy domain: tenants, host names and resolution outcomes."""

from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import (
    AdminResolved,
    HostContext,
    HostNotFound,
    ResolutionResult,
    TenantResolved,
)
from tenancy.domain.value_objects import Hostname, ResolutionKind, TenantId

__all__ = [
    "AdminResolved",
    "HostContext",
    "HostNotFound",
    "Hostname",
    "ResolutionKind",
    "ResolutionResult",
    "Tenant",
    "TenantId",
    "TenantResolved",
]
