"""Domain-Oriented Observability for tenancy infrastructure."""

from tenancy.infrastructure.observability.repository_probe import (
    DefaultTenantRepositoryProbe,
    TenantRepositoryProbe,
)

__all__ = [
    "DefaultTenantRepositoryProbe",
    "TenantRepositoryProbe",
]
