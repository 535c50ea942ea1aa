"""Unit tests for host-based tenant resolution.

Covers:
- Registered tenant domains resolve to their tenant
- The admin domain resolves to AdminResolved only when configured
- Unknown and malformed hosts resolve to HostNotFound
- Lookup failures, duplicates and timeouts surface as LookupFailedError
- Cancellation is never converted into a lookup failure
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from tenancy.application.resolver import TenantResolver, resolve
from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import AdminResolved, HostNotFound, TenantResolved
from tenancy.domain.value_objects import Hostname
from tenancy.ports.exceptions import DuplicateTenantDomainError, LookupFailedError
from tenancy.ports.repositories import ITenantLookup

ADMIN_DOMAIN = Hostname(value="admin.example.com")


class TestResolveScenario:
    """Tenants A and B plus admin.example.com."""

    @pytest.mark.asyncio
    async def test_tenant_host_resolves_to_tenant(
        self, mock_lookup: AsyncMock, tenant_a: Tenant, mock_probe: MagicMock
    ):
        result = await resolve("a.example.com", mock_lookup, ADMIN_DOMAIN, mock_probe)

        assert result == TenantResolved(tenant=tenant_a)

    @pytest.mark.asyncio
    async def test_every_registered_tenant_resolves(
        self, mock_lookup: AsyncMock, tenant_a: Tenant, tenant_b: Tenant
    ):
        for tenant in (tenant_a, tenant_b):
            result = await resolve(tenant.domain.value, mock_lookup, ADMIN_DOMAIN)
            assert result == TenantResolved(tenant=tenant)

    @pytest.mark.asyncio
    async def test_admin_host_resolves_to_admin(
        self, mock_lookup: AsyncMock, mock_probe: MagicMock
    ):
        result = await resolve(
            "admin.example.com", mock_lookup, ADMIN_DOMAIN, mock_probe
        )

        assert result == AdminResolved()
        mock_probe.admin_domain_resolved.assert_called_once_with(
            host="admin.example.com"
        )

    @pytest.mark.asyncio
    async def test_unknown_host_resolves_to_not_found(
        self, mock_lookup: AsyncMock, mock_probe: MagicMock
    ):
        result = await resolve("c.example.com", mock_lookup, ADMIN_DOMAIN, mock_probe)

        assert result == HostNotFound()
        mock_probe.host_not_found.assert_called_once_with(host="c.example.com")

    @pytest.mark.asyncio
    async def test_admin_host_without_admin_config_is_not_found(
        self, mock_lookup: AsyncMock
    ):
        """Without an admin domain no host ever resolves to Admin."""
        result = await resolve("admin.example.com", mock_lookup, None)

        assert result == HostNotFound()

    @pytest.mark.asyncio
    async def test_lookup_is_consulted_before_admin_domain(
        self, mock_lookup: AsyncMock, tenant_a: Tenant
    ):
        """A tenant registered under the admin domain takes precedence."""
        result = await resolve("a.example.com", mock_lookup, tenant_a.domain)

        assert result == TenantResolved(tenant=tenant_a)

    @pytest.mark.asyncio
    async def test_resolution_is_idempotent(self, mock_lookup: AsyncMock):
        hosts = ["a.example.com", "admin.example.com", "c.example.com"]
        first = [await resolve(h, mock_lookup, ADMIN_DOMAIN) for h in hosts]
        second = [await resolve(h, mock_lookup, ADMIN_DOMAIN) for h in hosts]

        assert first == second


class TestResolveNormalization:
    """Tests for host normalization before lookup."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw_host",
        ["A.Example.com", "a.example.com.", "a.example.com:8443", " a.example.com "],
    )
    async def test_host_variants_resolve_to_same_tenant(
        self, raw_host: str, mock_lookup: AsyncMock, tenant_a: Tenant
    ):
        result = await resolve(raw_host, mock_lookup, ADMIN_DOMAIN)

        assert result == TenantResolved(tenant=tenant_a)

    @pytest.mark.asyncio
    async def test_lookup_receives_normalized_hostname(self, mock_lookup: AsyncMock):
        await resolve("A.EXAMPLE.COM:80", mock_lookup, ADMIN_DOMAIN)

        mock_lookup.get_by_domain.assert_awaited_once_with(
            Hostname(value="a.example.com")
        )

    @pytest.mark.asyncio
    async def test_internationalized_host_matches_punycode_domain(self):
        tenant = Tenant.create(domain="xn--bcher-kva.example", name="Bücher")
        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.return_value = tenant

        result = await resolve("Bücher.example", lookup, ADMIN_DOMAIN)

        assert result == TenantResolved(tenant=tenant)
        lookup.get_by_domain.assert_awaited_once_with(
            Hostname(value="xn--bcher-kva.example")
        )

    @pytest.mark.asyncio
    async def test_admin_domain_matches_with_port(self, mock_lookup: AsyncMock):
        result = await resolve("Admin.Example.com:8000", mock_lookup, ADMIN_DOMAIN)

        assert result == AdminResolved()

    @pytest.mark.asyncio
    async def test_junk_after_ipv6_admin_domain_is_not_admin(
        self, mock_lookup: AsyncMock
    ):
        admin = Hostname(value="[::1]")

        assert await resolve("[::1]:8000", mock_lookup, admin) == AdminResolved()
        assert await resolve("[::1]garbage", mock_lookup, admin) == HostNotFound()
        assert await resolve("[::1]:abc", mock_lookup, admin) == HostNotFound()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_host", ["", "bad_host", "a..b"])
    async def test_malformed_host_is_not_found_without_lookup(
        self, raw_host: str, mock_lookup: AsyncMock, mock_probe: MagicMock
    ):
        result = await resolve(raw_host, mock_lookup, ADMIN_DOMAIN, mock_probe)

        assert result == HostNotFound()
        mock_lookup.get_by_domain.assert_not_awaited()
        mock_probe.invalid_host.assert_called_once()


class TestResolveErrors:
    """Tests for lookup failure handling."""

    @pytest.mark.asyncio
    async def test_storage_error_is_wrapped_as_lookup_failed(
        self, mock_probe: MagicMock
    ):
        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = ConnectionRefusedError("db down")

        with pytest.raises(LookupFailedError) as exc_info:
            await resolve("a.example.com", lookup, ADMIN_DOMAIN, mock_probe)

        assert exc_info.value.host == "a.example.com"
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)
        mock_probe.lookup_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_lookup_failed_error_propagates_unchanged(self):
        lookup = AsyncMock(spec=ITenantLookup)
        error = LookupFailedError("store unavailable", host="a.example.com")
        lookup.get_by_domain.side_effect = error

        with pytest.raises(LookupFailedError) as exc_info:
            await resolve("a.example.com", lookup, ADMIN_DOMAIN)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_duplicate_domain_is_lookup_failure(self):
        """Duplicated domains must not resolve to an arbitrary tenant."""
        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = DuplicateTenantDomainError(
            host="a.example.com", count=2
        )

        with pytest.raises(LookupFailedError):
            await resolve("a.example.com", lookup, ADMIN_DOMAIN)

    @pytest.mark.asyncio
    async def test_failure_on_admin_domain_is_not_masked(self):
        """A failed lookup on the admin host is still a failure."""
        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = RuntimeError("boom")

        with pytest.raises(LookupFailedError):
            await resolve("admin.example.com", lookup, ADMIN_DOMAIN)

    @pytest.mark.asyncio
    async def test_timeout_is_lookup_failure(self, mock_probe: MagicMock):
        async def slow_lookup(domain: Hostname) -> Tenant | None:
            await asyncio.sleep(1)
            return None

        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = slow_lookup

        with pytest.raises(LookupFailedError, match="timed out"):
            await resolve(
                "a.example.com",
                lookup,
                ADMIN_DOMAIN,
                mock_probe,
                lookup_timeout=0.01,
            )

        mock_probe.lookup_timed_out.assert_called_once_with(
            host="a.example.com", timeout=0.01
        )
        mock_probe.lookup_failed.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("lookup_timeout", [None, 5.0])
    async def test_timeout_error_from_lookup_is_ordinary_failure(
        self, lookup_timeout: float | None, mock_probe: MagicMock
    ):
        """A driver's own TimeoutError is not an expired lookup deadline."""
        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = TimeoutError("driver timeout")

        with pytest.raises(LookupFailedError, match="failed"):
            await resolve(
                "a.example.com",
                lookup,
                ADMIN_DOMAIN,
                mock_probe,
                lookup_timeout=lookup_timeout,
            )

        mock_probe.lookup_timed_out.assert_not_called()
        mock_probe.lookup_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        started = asyncio.Event()

        async def blocking_lookup(domain: Hostname) -> Tenant | None:
            started.set()
            await asyncio.sleep(10)
            return None

        lookup = AsyncMock(spec=ITenantLookup)
        lookup.get_by_domain.side_effect = blocking_lookup

        task = asyncio.create_task(resolve("a.example.com", lookup, ADMIN_DOMAIN))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task


class TestTenantResolver:
    """Tests for the TenantResolver wrapper."""

    def test_admin_domain_is_normalized(self, mock_lookup: AsyncMock):
        resolver = TenantResolver(lookup=mock_lookup, admin_domain="ADMIN.example.com.")

        assert resolver.admin_domain == ADMIN_DOMAIN

    def test_invalid_admin_domain_is_rejected(self, mock_lookup: AsyncMock):
        with pytest.raises(ValueError):
            TenantResolver(lookup=mock_lookup, admin_domain="not a domain")

    @pytest.mark.asyncio
    async def test_resolve_uses_bound_configuration(
        self, mock_lookup: AsyncMock, tenant_b: Tenant, mock_probe: MagicMock
    ):
        resolver = TenantResolver(
            lookup=mock_lookup,
            admin_domain="admin.example.com",
            probe=mock_probe,
        )

        assert await resolver.resolve("b.example.com") == TenantResolved(
            tenant=tenant_b
        )
        assert await resolver.resolve("admin.example.com") == AdminResolved()
        mock_probe.tenant_resolved.assert_called_once_with(
            host="b.example.com", tenant_id=tenant_b.id.value
        )

    @pytest.mark.asyncio
    async def test_concurrent_resolutions_are_independent(
        self, mock_lookup: AsyncMock, tenant_a: Tenant, tenant_b: Tenant
    ):
        resolver = TenantResolver(lookup=mock_lookup, admin_domain="admin.example.com")

        results = await asyncio.gather(
            *(
                resolver.resolve(host)
                for host in ["a.example.com", "b.example.com", "admin.example.com"]
                * 10
            )
        )

        assert results[:3] == [
            TenantResolved(tenant=tenant_a),
            TenantResolved(tenant=tenant_b),
            AdminResolved(),
        ]
        assert results == results[:3] * 10
