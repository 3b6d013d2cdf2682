from fastapi import FastAPI
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from app.core.config import Settings, settings as default_settings
from app.core.errors import register_error_handlers
from app.core.rate_limit import create_limiters
from app.core.security import add_security_middleware
from app.api import forms, site
from app.services.email_service import EmailService

# Configure logging
logging.basicConfig(
    level=default_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting lead capture backend...")
    if app.state.settings.smtp_verify_on_startup:
        await app.state.email_service.verify_connection()
    yield
    # Shutdown
    logger.info("Shutting down lead capture backend...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Lead Capture Backend",
        description="Relays booking and contact form submissions to the business inbox",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.email_service = EmailService(settings)
    app.state.limiters = create_limiters(settings)

    add_security_middleware(app, settings, app.state.limiters["global"])
    register_error_handlers(app)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    # Include API routes; the site catch-all must come last
    app.include_router(forms.router, prefix="/api", tags=["forms"])
    app.include_router(site.router, tags=["site"])

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("app.main:app", host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
