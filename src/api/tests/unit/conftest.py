"""Unit test fixtures with mocked dependencies."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenancy.application.observability import TenantResolutionProbe
from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import Hostname, TenantId
from tenancy.ports.repositories import ITenantLookup


@pytest.fixture
def tenant_a() -> Tenant:
    """Tenant owning a.example.com."""
    return Tenant(
        id=TenantId.generate(),
        domain=Hostname(value="a.example.com"),
        name="Tenant A",
        color="#ff0000",
    )


@pytest.fixture
def tenant_b() -> Tenant:
    """Tenant owning b.example.com, without a brand colour."""
    return Tenant(
        id=TenantId.generate(),
        domain=Hostname(value="b.example.com"),
        name="Tenant B",
    )


@pytest.fixture
def mock_lookup(tenant_a: Tenant, tenant_b: Tenant) -> AsyncMock:
    """Tenant lookup answering for tenant_a and tenant_b."""
    tenants = {tenant.domain: tenant for tenant in (tenant_a, tenant_b)}

    async def get_by_domain(domain: Hostname) -> Tenant | None:
        return tenants.get(domain)

    lookup = AsyncMock(spec=ITenantLookup)
    lookup.get_by_domain.side_effect = get_by_domain
    return lookup


@pytest.fixture
def mock_probe() -> MagicMock:
    """Resolution probe whose with_context returns itself."""
    probe = MagicMock(spec=TenantResolutionProbe)
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def lookup_provider(mock_lookup: AsyncMock):
    """Lookup provider yielding mock_lookup, as used by the middleware."""

    @asynccontextmanager
    async def provider():
        yield mock_lookup

    return provider
