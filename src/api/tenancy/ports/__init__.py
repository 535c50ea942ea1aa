"""Ports for the tenancy bounded context."""

from tenancy.ports.exceptions import DuplicateTenantDomainError, LookupFailedError
from tenancy.ports.repositories import ITenantLookup, ITenantRepository

__all__ = [
    "DuplicateTenantDomainError",
    "ITenantLookup",
    "ITenantRepository",
    "LookupFailedError",
]
