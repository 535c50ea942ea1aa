"""Unit tests for scoped host context propagation."""

import asyncio

import pytest

from tenancy.application.context import get_current_host_context, host_context_scope
from tenancy.domain.aggregates import Tenant
from tenancy.domain.resolution import AdminResolved, HostContext, TenantResolved


def test_no_context_outside_scope():
    assert get_current_host_context() is None


def test_scope_sets_and_resets_context():
    context = HostContext(host="admin.example.com", resolution=AdminResolved())

    with host_context_scope(context) as current:
        assert current is context
        assert get_current_host_context() is context

    assert get_current_host_context() is None


def test_scope_resets_on_error():
    context = HostContext(host="admin.example.com", resolution=AdminResolved())

    with pytest.raises(RuntimeError):
        with host_context_scope(context):
            raise RuntimeError("handler failed")

    assert get_current_host_context() is None


def test_nested_scopes_restore_outer_context(tenant_a: Tenant):
    outer = HostContext(host="admin.example.com", resolution=AdminResolved())
    inner = HostContext(
        host="a.example.com", resolution=TenantResolved(tenant=tenant_a)
    )

    with host_context_scope(outer):
        with host_context_scope(inner):
            assert get_current_host_context() is inner
        assert get_current_host_context() is outer


@pytest.mark.asyncio
async def test_concurrent_tasks_see_their_own_context(
    tenant_a: Tenant, tenant_b: Tenant
):
    """Contexts must not leak between concurrently handled requests."""

    async def handle(context: HostContext) -> HostContext | None:
        with host_context_scope(context):
            await asyncio.sleep(0)
            return get_current_host_context()

    contexts = [
        HostContext(host=t.domain.value, resolution=TenantResolved(tenant=t))
        for t in (tenant_a, tenant_b)
    ]

    seen = await asyncio.gather(*(handle(c) for c in contexts))

    assert seen == contexts
