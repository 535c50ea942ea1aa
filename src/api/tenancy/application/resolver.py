"""Host-based tenant resolution.

Given the host of an inbound request, decides whether the request belongs
to a tenant, to the administrative domain, or to nobody. Resolution is a
pure function of (host, tenant store, admin domain): it keeps no state
between calls and never writes.
"""

from __future__ import annotations

import asyncio

from tenancy.application.observability import (
    DefaultTenantResolutionProbe,
    TenantResolutionProbe,
)
from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import (
    AdminResolved,
    HostNotFound,
    ResolutionResult,
    TenantResolved,
)
from tenancy.domain.value_objects import Hostname
from tenancy.ports.exceptions import LookupFailedError
from tenancy.ports.repositories import ITenantLookup


async def resolve(
    host: str,
    tenant_lookup: ITenantLookup,
    admin_domain: Hostname | None,
    probe: TenantResolutionProbe | None = None,
    lookup_timeout: float | None = None,
) -> ResolutionResult:
    """Resolve a request host.

    The tenant store is always consulted first, so a tenant registered under
    the admin domain wins over the admin resolution.

    Args:
        host: Raw host of the request (``Host`` header value)
        tenant_lookup: Lookup capability over the tenant store
        admin_domain: Normalized admin domain, or None if not configured
        probe: Optional domain probe for observability
        lookup_timeout: Optional bound on the lookup in seconds

    Returns:
        TenantResolved, AdminResolved or HostNotFound

    Raises:
        LookupFailedError: If the store failed, timed out, or holds
            several tenants for the host
    """
    probe = probe or DefaultTenantResolutionProbe()

    try:
        hostname = Hostname.parse(host)
    except ValueError as e:
        probe.invalid_host(raw_host=host, reason=str(e))
        return HostNotFound()

    tenant = await _lookup_tenant(hostname, tenant_lookup, probe, lookup_timeout)

    if tenant is not None:
        probe.tenant_resolved(host=hostname.value, tenant_id=tenant.id.value)
        return TenantResolved(tenant=tenant)

    if admin_domain is not None and admin_domain == hostname:
        probe.admin_domain_resolved(host=hostname.value)
        return AdminResolved()

    probe.host_not_found(host=hostname.value)
    return HostNotFound()


async def _lookup_tenant(
    hostname: Hostname,
    tenant_lookup: ITenantLookup,
    probe: TenantResolutionProbe,
    lookup_timeout: float | None,
) -> Tenant | None:
    """Run the lookup, converting every storage failure to LookupFailedError.

    Only an expired ``lookup_timeout`` counts as a timeout; a ``TimeoutError``
    raised by the lookup itself is an ordinary failure.
    ``asyncio.CancelledError`` is not an ``Exception`` and propagates untouched.
    """
    deadline = asyncio.timeout(lookup_timeout)
    try:
        async with deadline:
            return await tenant_lookup.get_by_domain(hostname)
    except LookupFailedError as e:
        probe.lookup_failed(host=hostname.value, error=e)
        raise
    except Exception as e:
        if lookup_timeout is not None and deadline.expired():
            probe.lookup_timed_out(host=hostname.value, timeout=lookup_timeout)
            raise LookupFailedError(
                f"Tenant lookup for '{hostname.value}' timed out",
                host=hostname.value,
            ) from e
        probe.lookup_failed(host=hostname.value, error=e)
        raise LookupFailedError(
            f"Tenant lookup for '{hostname.value}' failed: {e}",
            host=hostname.value,
        ) from e


class TenantResolver:
    """Resolves hosts against a tenant lookup and the configured admin domain.

    Holds only immutable configuration, so a single instance may serve any
    number of concurrent requests as long as the lookup itself is safe to
    share.
    """

    def __init__(
        self,
        lookup: ITenantLookup,
        admin_domain: str | Hostname | None = None,
        probe: TenantResolutionProbe | None = None,
        lookup_timeout: float | None = None,
    ):
        """Initialize the resolver.

        Args:
            lookup: Tenant lookup capability
            admin_domain: Administrative host; normalized on construction
            probe: Optional domain probe for observability
            lookup_timeout: Optional bound on each lookup in seconds

        Raises:
            ValueError: If admin_domain is not a valid host name
        """
        if isinstance(admin_domain, str):
            admin_domain = Hostname.parse(admin_domain)
        self._lookup = lookup
        self._admin_domain = admin_domain
        self._probe = probe or DefaultTenantResolutionProbe()
        self._lookup_timeout = lookup_timeout

    @property
    def admin_domain(self) -> Hostname | None:
        return self._admin_domain

    async def resolve(self, host: str) -> ResolutionResult:
        """Resolve a request host.

        See ``resolve`` for the full contract.
        """
        return await resolve(
            host,
            self._lookup,
            self._admin_domain,
            probe=self._probe,
            lookup_timeout=self._lookup_timeout,
        )
