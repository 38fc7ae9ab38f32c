"""
FastAPI application entry point for the blog admin API.

Authentication runs in front of this service and attaches the acting
identity to request.state.actor; see blogadmin.platform.actor.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogadmin.api.errors import register_error_handlers
from blogadmin.api.routes import articles
from blogadmin.api.routes import comments
from blogadmin.api.routes import tags
from blogadmin.api.routes import categories
from blogadmin.api.routes import users
from blogadmin.config.admin_settings import get_admin_settings

# Configure structured logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting blog admin API")

    # Database connectivity check - surface misconfigurations in deploy logs
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        logger.error(
            "DATABASE_URL is not set. All data endpoints will return 503."
        )
        app.state.database_configured = False
    else:
        # Mask credentials for safe logging
        masked = database_url.split("@")[-1] if "@" in database_url else "(no @ found)"
        logger.info("DATABASE_URL configured", extra={"host_db": masked})
        app.state.database_configured = True

    settings = get_admin_settings()
    logger.info(
        "Admin settings loaded",
        extra={
            "admin_roles": list(settings.admin_roles),
            "list_max_limit": settings.list_max_limit,
            "autocomplete_max_limit": settings.autocomplete_max_limit,
        },
    )

    yield

    # Shutdown
    logger.info("Shutting down blog admin API")


# Create FastAPI app
app = FastAPI(
    title="Blog Admin API",
    description="CRUD data layer for articles, comments, tags and categories",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (configure for the admin frontend domain)
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Data-layer errors -> 400/403/404, anything else -> 500
register_error_handlers(app)

app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(tags.router)
app.include_router(categories.router)

# Users are provisioned elsewhere; read-only here
app.include_router(users.router)


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV") == "development"
    )
