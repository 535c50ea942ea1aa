"""Application layer for the tenancy bounded context."""

from tenancy.application.branding import Branding, branding_for
from tenancy.application.context import get_current_host_context, host_context_scope
from tenancy.application.resolver import TenantResolver, resolve

__all__ = [
    "Branding",
    "TenantResolver",
    "branding_for",
    "get_current_host_context",
    "host_context_scope",
    "resolve",
]
