"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import TenancySettings, get_settings, get_tenancy_settings
from infrastructure.version import __version__
from shared_kernel.middleware import RequestIDMiddleware
from tenancy.presentation import HostResolutionMiddleware
from tenancy.presentation import routes as tenancy_routes
from tenancy.presentation.middleware import LookupProvider


@asynccontextmanager
async def hostmap_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Startup logging of the effective tenancy configuration
    - Database engine disposal on shutdown
    """
    probe = DefaultStartupProbe()
    tenancy: TenancySettings = app.state.tenancy_settings
    if tenancy.admin_domain:
        probe.admin_domain_configured(tenancy.admin_domain)
    else:
        probe.admin_domain_not_configured()
    probe.application_started(app_name=app.title, version=__version__)

    yield

    await close_database_connections()
    probe.application_stopped()


def create_app(
    lookup_provider: LookupProvider | None = None,
    tenancy_settings: TenancySettings | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        lookup_provider: Tenant lookup factory for the resolution middleware
            (defaults to the PostgreSQL repository)
        tenancy_settings: Tenancy settings (defaults to environment settings)
    """
    settings = get_settings()
    tenancy_settings = tenancy_settings or get_tenancy_settings()
    configure_logging(debug=settings.debug)

    app = FastAPI(
        title=settings.app_name,
        description="Host-based tenant resolution",
        version=__version__,
        lifespan=hostmap_lifespan,
    )
    app.state.tenancy_settings = tenancy_settings
    app.dependency_overrides[get_tenancy_settings] = lambda: tenancy_settings

    # Last added runs first: request IDs are assigned before resolution
    app.add_middleware(
        HostResolutionMiddleware,
        lookup_provider=lookup_provider,
        settings=tenancy_settings,
    )
    app.add_middleware(RequestIDMiddleware)

    app.include_router(tenancy_routes.router)

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
