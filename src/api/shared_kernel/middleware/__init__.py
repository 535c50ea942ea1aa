"""Shared middleware for cross-cutting concerns.

This module contains ASGI middleware shared across bounded contexts.
Tenant resolution itself lives in the tenancy bounded context.
"""

from shared_kernel.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware

__all__ = ["REQUEST_ID_HEADER", "RequestIDMiddleware"]
