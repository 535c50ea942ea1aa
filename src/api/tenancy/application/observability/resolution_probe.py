"""Domain probe for host-based tenant resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to resolving a request host into a
tenant, the admin domain, or an unknown host.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolutionProbe(Protocol):
    """Domain probe for tenant resolution operations."""

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a host resolved to a tenant."""
        ...

    def admin_domain_resolved(self, host: str) -> None:
        """Record that a host resolved to the admin domain."""
        ...

    def host_not_found(self, host: str) -> None:
        """Record that a host matched neither a tenant nor the admin domain."""
        ...

    def invalid_host(self, raw_host: str, reason: str) -> None:
        """Record that the request host could not be normalized."""
        ...

    def lookup_failed(self, host: str, error: Exception) -> None:
        """Record that the tenant lookup failed."""
        ...

    def lookup_timed_out(self, host: str, timeout: float) -> None:
        """Record that the tenant lookup exceeded its timeout."""
        ...

    def unknown_host_rejected(self, host: str, path: str) -> None:
        """Record that a request was rejected because its host is unknown."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolutionProbe:
    """Default implementation of TenantResolutionProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolutionProbe(logger=self._logger, context=context)

    def tenant_resolved(self, host: str, tenant_id: str) -> None:
        """Record that a host resolved to a tenant."""
        self._logger.debug(
            "tenant_resolved_from_host",
            host=host,
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def admin_domain_resolved(self, host: str) -> None:
        """Record that a host resolved to the admin domain."""
        self._logger.debug(
            "admin_domain_resolved",
            host=host,
            **self._get_context_kwargs(),
        )

    def host_not_found(self, host: str) -> None:
        """Record that a host matched neither a tenant nor the admin domain."""
        self._logger.info(
            "tenant_host_not_found",
            host=host,
            **self._get_context_kwargs(),
        )

    def invalid_host(self, raw_host: str, reason: str) -> None:
        """Record that the request host could not be normalized."""
        self._logger.warning(
            "tenant_host_invalid",
            raw_host=raw_host,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, host: str, error: Exception) -> None:
        """Record that the tenant lookup failed."""
        self._logger.error(
            "tenant_lookup_failed",
            host=host,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def lookup_timed_out(self, host: str, timeout: float) -> None:
        """Record that the tenant lookup exceeded its timeout."""
        self._logger.error(
            "tenant_lookup_timed_out",
            host=host,
            timeout_seconds=timeout,
            **self._get_context_kwargs(),
        )

    def unknown_host_rejected(self, host: str, path: str) -> None:
        """Record that a request was rejected because its host is unknown."""
        self._logger.info(
            "tenant_unknown_host_rejected",
            host=host,
            path=path,
            **self._get_context_kwargs(),
        )
