"""Infrastructure adapters for the tenancy bounded context."""

from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.tenant_repository import TenantRepository

__all__ = ["TenantModel", "TenantRepository"]
