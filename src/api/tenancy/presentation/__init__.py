"""Tenancy presentation layer: middleware and routes."""

from tenancy.presentation.middleware import HostResolutionMiddleware
from tenancy.presentation.routes import router

__all__ = ["HostResolutionMiddleware", "router"]
