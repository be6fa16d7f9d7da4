"""
FastAPI application main module.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from .config import Config, CORS_ORIGINS
from .middleware import NoStoreMiddleware
from .routers.metrics import router as metrics_router
from .tasks.metric_poller import DashboardPoller, create_dashboard_poller
from .utils.logging_config import setup_logging
from .utils.models import utc_timestamp
from .utils.x1_rpc import X1RpcClient

# Configure logging
logger = setup_logging('x1_dashboard')


def create_app(poller: Optional[DashboardPoller] = None, start_polling: bool = True) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        poller: Pre-built poller; by default one is created against the
            configured RPC endpoint when the app starts
        start_polling: Start the background polling loops on startup

    Returns:
        FastAPI: The configured application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for FastAPI app.
        Handles startup and shutdown events.
        """
        logger.info("Starting up application...")
        client = None
        dashboard_poller = poller
        if dashboard_poller is None:
            logger.info(f"Connecting to RPC endpoint {Config.RPC_ENDPOINT}")
            client = X1RpcClient(Config.RPC_ENDPOINT)
            dashboard_poller = create_dashboard_poller(client)
        app.state.poller = dashboard_poller

        try:
            if start_polling:
                dashboard_poller.start()
            yield
        finally:
            await dashboard_poller.close()
            if client is not None:
                await client.close()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=Config.API_TITLE,
        description=Config.API_DESCRIPTION,
        version=Config.API_VERSION,
        debug=Config.DEBUG,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Type", "X-Request-ID"],
        max_age=600,
    )

    # Keep metric responses out of HTTP caches
    app.add_middleware(NoStoreMiddleware)

    # Prometheus exposition; /metrics belongs to the dashboard routes
    app.mount("/prometheus", make_asgi_app())

    app.include_router(metrics_router)

    @app.get("/health", tags=["Diagnostics"])
    async def health():
        """Liveness check"""
        return {
            "status": "ok",
            "timestamp": utc_timestamp(),
        }

    return app


app = create_app()
