# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Elevion API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    ElevionException,
    application_error_handler,
    elevion_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.routers import (
    ai_content,
    bug_monitoring,
    contact,
    feedback,
    health,
    marketplace,
    moderation,
    portfolio,
    price_optimization,
    quote,
    social_media,
    subscriptions,
)
from app.auth import routes as auth_routes
from lib.log_handler import install_database_log_handler
from lib.utils import ApplicationError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup: log the environment and start persisting ERROR logs to the
    `logs` table (the bug monitor's input).
    """
    logger.info(f"Starting Elevion API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if install_database_log_handler(source="api"):
        logger.info("Database log handler installed")

    yield

    logger.info("Shutting down Elevion API")


# Create FastAPI application
app = FastAPI(
    title="Elevion API",
    description="""
## Elevion Business Platform API

Backend for the Elevion marketing site, client marketplace and internal
AI-assisted tools.

### Areas

| Area | What it does |
|------|--------------|
| **Portfolio / Contact** | Content for the marketing site |
| **Marketplace** | Seller listings and Stripe-backed purchases |
| **Subscriptions** | Plans, subscribe and cancel |
| **AI Content / Quote** | Marketing copy and website quotes from xAI |
| **Social Media** | Post scheduling and analytics through Buffer |
| **Bug Monitoring** | AI triage of error logs and user feedback (admin) |
| **Price Optimization** | AI plan price recommendations (admin) |
| **Moderation** | Review of content blocked by the AI check (admin) |

### Responses

Every endpoint answers with the same envelope:

```json
{"success": true, "message": "OK", "data": {...}}
{"success": false, "message": "Bug report not found: 42", "code": "NOT_FOUND"}
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify Supabase JWTs and read the caller's profile"},
        {"name": "Bug Monitoring", "description": "AI bug triage dashboard (admin)"},
        {"name": "Price Optimization", "description": "AI price recommendations (admin)"},
        {"name": "Moderation", "description": "Content policy violations (admin)"},
        {"name": "Marketplace", "description": "Listings, purchases and orders"},
        {"name": "Subscriptions", "description": "Plans and user subscriptions"},
        {"name": "Portfolio", "description": "Showcase of past projects"},
        {"name": "Quote", "description": "Website build quotes"},
        {"name": "AI Content", "description": "Marketing copy helpers"},
        {"name": "Social Media", "description": "Buffer scheduling and analytics"},
        {"name": "Contact", "description": "Contact form"},
        {"name": "Feedback", "description": "User feedback widget"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ElevionException, elevion_exception_handler)
app.add_exception_handler(ApplicationError, application_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints (/api/auth)
app.include_router(auth_routes.router, prefix="/api")

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Marketing site
app.include_router(portfolio.router)
app.include_router(contact.router)
app.include_router(feedback.router)
app.include_router(quote.router)

# Commerce
app.include_router(marketplace.router)
app.include_router(subscriptions.router)

# AI tools
app.include_router(ai_content.router)
app.include_router(social_media.router)

# Admin dashboards
app.include_router(bug_monitoring.router)
app.include_router(price_optimization.router)
app.include_router(moderation.router)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Elevion API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
