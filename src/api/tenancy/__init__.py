"""Tenancy bounded context.

Resolves the tenant owning the host of each inbound request.
"""
