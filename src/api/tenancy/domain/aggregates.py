"""Tenant aggregate for the tenancy context."""

from __future__ import annotations

from dataclasses import dataclass

from tenancy.domain.value_objects import Hostname, TenantId


@dataclass(frozen=True)
class Tenant:
    """Tenant aggregate representing one customer organization.

    Each tenant owns exactly one host. Requests arriving under that host
    are handled on the tenant's behalf.

    Business rules:
    - Tenant domains are globally unique across the system
    - Tenants are read-only from the point of view of request handling;
      they are created and updated by administrative tooling

    Attributes:
        id: Tenant identifier
        domain: Normalized host owned by the tenant
        name: Display name
        color: Optional brand colour used for presentation
    """

    id: TenantId
    domain: Hostname
    name: str
    color: str | None = None

    @classmethod
    def create(cls, domain: str, name: str, color: str | None = None) -> Tenant:
        """Factory method for a new tenant.

        Args:
            domain: Raw domain; normalized with ``Hostname.parse``
            name: Display name
            color: Optional brand colour

        Returns:
            A new Tenant with a generated identifier

        Raises:
            ValueError: If the domain is not a valid host name
        """
        return cls(
            id=TenantId.generate(),
            domain=Hostname.parse(domain),
            name=name,
            color=color,
        )
