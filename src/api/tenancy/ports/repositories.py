"""Repository protocols (ports) for the tenancy bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import Hostname


@runtime_checkable
class ITenantLookup(Protocol):
    """Read-only capability to find the tenant owning a host.

    This is the only dependency host resolution has on storage.
    """

    async def get_by_domain(self, domain: Hostname) -> Tenant | None:
        """Retrieve the tenant whose domain exactly equals ``domain``.

        Args:
            domain: Normalized host name

        Returns:
            The Tenant, or None if no tenant owns the domain

        Raises:
            LookupFailedError: If the store cannot be queried
            DuplicateTenantDomainError: If several tenants share the domain
        """
        ...


@runtime_checkable
class ITenantRepository(ITenantLookup, Protocol):
    """Tenant queries used by the admin-facing routes."""

    async def list_all(self) -> list[Tenant]:
        """List all tenants ordered by domain.

        Raises:
            LookupFailedError: If the store cannot be queried
        """
        ...
