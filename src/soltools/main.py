"""SOL Tools - Main application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import gradio as gr
import uvicorn
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from soltools.api.routes import health
from soltools.config import get_settings
from soltools.config.logging import configure_logging, get_logger
from soltools.core.exceptions import ConfigurationError
from soltools.ui.app import create_dashboard
from soltools.ui.controller import AppController

log = get_logger(__name__)

DASHBOARD_PATH = "/dashboard"


def create_app(controller: AppController | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        controller: Controller to serve (default: a new one with its own runtime).

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    controller = controller or AppController.create()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        """Stop the runtime thread and close the HTTP client on shutdown."""
        yield
        controller.shutdown()
        log.info("shutdown_complete")

    application = FastAPI(
        title=settings.app_name,
        description="Solana transaction history explorer",
        version=settings.app_version,
        lifespan=lifespan,
    )
    application.state.controller = controller

    # Register API routes
    application.include_router(health.router, prefix="/api")

    @application.get("/", include_in_schema=False)
    async def root() -> RedirectResponse:
        return RedirectResponse(DASHBOARD_PATH)

    # Mount Gradio dashboard
    # Must be mounted AFTER registering API routes
    dashboard = create_dashboard(controller)
    application = gr.mount_gradio_app(
        app=application,
        blocks=dashboard,
        path=DASHBOARD_PATH,
    )
    log.info("dashboard_mounted", path=DASHBOARD_PATH)

    return application


def main() -> None:
    """Run the application with uvicorn.

    Raises:
        ConfigurationError: If the environment holds invalid settings.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    configure_logging()
    log.info("starting", url=f"http://{settings.host}:{settings.port}{DASHBOARD_PATH}")
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
