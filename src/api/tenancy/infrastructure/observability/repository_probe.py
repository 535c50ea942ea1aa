"""Domain probe for tenant repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantRepositoryProbe(Protocol):
    """Domain probe for tenant repository operations."""

    def tenant_retrieved(self, tenant_id: str, domain: str) -> None:
        """Record that a tenant was retrieved by domain."""
        ...

    def tenant_not_found(self, domain: str) -> None:
        """Record that no tenant owns a domain."""
        ...

    def duplicate_tenant_domain(self, domain: str, count: int) -> None:
        """Record that several tenants share one domain."""
        ...

    def tenants_listed(self, count: int) -> None:
        """Record that tenants were listed."""
        ...

    def query_failed(self, operation: str, error: Exception) -> None:
        """Record that a repository query raised a database error."""
        ...

    def with_context(self, context: ObservationContext) -> TenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantRepositoryProbe:
    """Default implementation of TenantRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantRepositoryProbe(logger=self._logger, context=context)

    def tenant_retrieved(self, tenant_id: str, domain: str) -> None:
        self._logger.debug(
            "tenant_retrieved",
            tenant_id=tenant_id,
            domain=domain,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, domain: str) -> None:
        self._logger.debug(
            "tenant_not_found",
            domain=domain,
            **self._get_context_kwargs(),
        )

    def duplicate_tenant_domain(self, domain: str, count: int) -> None:
        self._logger.error(
            "tenant_domain_not_unique",
            domain=domain,
            count=count,
            **self._get_context_kwargs(),
        )

    def tenants_listed(self, count: int) -> None:
        self._logger.debug(
            "tenants_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def query_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "tenant_query_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )
