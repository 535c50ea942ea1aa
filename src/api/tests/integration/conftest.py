"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_read_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from tenancy.infrastructure.models import TenantModel
from tenancy.infrastructure.tenant_repository import TenantRepository


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        HOSTMAP_DB_HOST, HOSTMAP_DB_PORT, etc.
    """
    return DatabaseSettings(
        _env_file=None,
        host=os.getenv("HOSTMAP_DB_HOST", "localhost"),
        port=int(os.getenv("HOSTMAP_DB_PORT", "5432")),
        database=os.getenv("HOSTMAP_DB_DATABASE", "hostmap"),
        username=os.getenv("HOSTMAP_DB_USERNAME", "hostmap"),
        password=SecretStr(os.getenv("HOSTMAP_DB_PASSWORD", "hostmap_dev_password")),
    )


@pytest_asyncio.fixture
async def async_session(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session on a schema containing an empty tenants table."""
    engine = create_read_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(delete(TenantModel))

    sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
    async with sessionmaker() as session:
        yield session

    async with engine.begin() as conn:
        await conn.execute(delete(TenantModel))
    await engine.dispose()


@pytest.fixture
def tenant_repository(async_session: AsyncSession) -> TenantRepository:
    return TenantRepository(session=async_session)
