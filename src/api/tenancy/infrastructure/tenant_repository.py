"""PostgreSQL implementation of the tenant lookup port.

The repository is read-only: tenants are provisioned by administrative
tooling outside this service.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import Hostname, TenantId
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.observability import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)
from tenancy.ports.exceptions import DuplicateTenantDomainError, LookupFailedError
from tenancy.ports.repositories import ITenantRepository


class TenantRepository(ITenantRepository):
    """Repository reading Tenant aggregates from PostgreSQL.

    Database errors are translated to ``LookupFailedError`` so callers can
    tell an outage apart from an unknown host.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: TenantRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a database session.

        Args:
            session: AsyncSession scoped to the current request
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTenantRepositoryProbe()

    async def get_by_domain(self, domain: Hostname) -> Tenant | None:
        """Fetch the tenant owning a domain.

        All matching rows are read so that a broken uniqueness constraint is
        reported instead of silently picking one row.

        Args:
            domain: Normalized host name

        Returns:
            The Tenant aggregate, or None if not found

        Raises:
            DuplicateTenantDomainError: If more than one tenant has the domain
            LookupFailedError: If the query fails
        """
        stmt = select(TenantModel).where(TenantModel.domain == domain.value)
        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            self._probe.query_failed(operation="get_by_domain", error=e)
            raise LookupFailedError(
                f"Failed to look up tenant for '{domain.value}': {e}",
                host=domain.value,
            ) from e

        if not models:
            self._probe.tenant_not_found(domain.value)
            return None

        if len(models) > 1:
            self._probe.duplicate_tenant_domain(domain.value, len(models))
            raise DuplicateTenantDomainError(host=domain.value, count=len(models))

        tenant = _to_domain(models[0])
        self._probe.tenant_retrieved(tenant.id.value, domain.value)
        return tenant

    async def list_all(self) -> list[Tenant]:
        """Fetch all tenants ordered by domain.

        Raises:
            LookupFailedError: If the query fails
        """
        stmt = select(TenantModel).order_by(TenantModel.domain)
        try:
            result = await self._session.execute(stmt)
            models = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            self._probe.query_failed(operation="list_all", error=e)
            raise LookupFailedError(f"Failed to list tenants: {e}") from e

        tenants = [_to_domain(model) for model in models]
        self._probe.tenants_listed(len(tenants))
        return tenants


def _to_domain(model: TenantModel) -> Tenant:
    """Reconstitute a Tenant aggregate from its row.

    Stored domains are trusted to be normalized already.
    """
    return Tenant(
        id=TenantId(value=model.id),
        domain=Hostname(value=model.domain),
        name=model.name,
        color=model.color,
    )
