"""Host resolution results and the per-request host context.

A resolution is exactly one of ``TenantResolved``, ``AdminResolved`` or
``HostNotFound``. ``HostNotFound`` is a regular outcome, not an error; the
caller decides how to reject the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from tenancy.domain.aggregates import Tenant
from tenancy.domain.value_objects import ResolutionKind


@dataclass(frozen=True)
class TenantResolved:
    """The host belongs to a known tenant."""

    tenant: Tenant
    kind: ClassVar[ResolutionKind] = ResolutionKind.TENANT


@dataclass(frozen=True)
class AdminResolved:
    """The host is the configured administrative domain."""

    kind: ClassVar[ResolutionKind] = ResolutionKind.ADMIN


@dataclass(frozen=True)
class HostNotFound:
    """The host matched neither a tenant nor the admin domain."""

    kind: ClassVar[ResolutionKind] = ResolutionKind.NOT_FOUND


ResolutionResult = Union[TenantResolved, AdminResolved, HostNotFound]


@dataclass(frozen=True)
class HostContext:
    """Resolution attached to a single request.

    Attributes:
        host: The host as received (whitespace trimmed, not normalized)
        resolution: Outcome of resolving the host
    """

    host: str
    resolution: ResolutionResult

    @property
    def kind(self) -> ResolutionKind:
        return self.resolution.kind

    @property
    def tenant(self) -> Tenant | None:
        """The resolved tenant, or None for admin and unknown hosts."""
        if isinstance(self.resolution, TenantResolved):
            return self.resolution.tenant
        return None

    @property
    def is_tenant(self) -> bool:
        return isinstance(self.resolution, TenantResolved)

    @property
    def is_admin(self) -> bool:
        return isinstance(self.resolution, AdminResolved)

    @property
    def is_not_found(self) -> bool:
        return isinstance(self.resolution, HostNotFound)
