"""Argan HR Admin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ArganError → structured JSON responses
    - CORS and the session cookie configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Signed cookie sessions (Starlette SessionMiddleware): no server-side session
      store; the admin row is re-read on every request so revocation is immediate
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from argan_hr.api.error_handlers import register_error_handlers
from argan_hr.api.routes import (
    admins, audit_logs, auth, case_interactions, cases, client_records, clients,
    contracts, dashboard, documents, external, health, onboarding,
)
from argan_hr.config import get_settings
from argan_hr.infrastructure.database import close_db, init_db
from argan_hr.infrastructure.observability import log_requests, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Argan HR API started")
    yield
    logger.info("Argan HR API shutting down")
    await close_db()


app = FastAPI(
    title="Argan HR Admin API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age_seconds,
    https_only=settings.session_https_only,
    same_site="lax",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

# Routes (explicit registration)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(admins.router)
app.include_router(clients.router)
app.include_router(client_records.router)
app.include_router(contracts.router)
app.include_router(onboarding.router)
app.include_router(cases.router)
app.include_router(case_interactions.router)
app.include_router(dashboard.router)
app.include_router(documents.router)
app.include_router(audit_logs.router)
app.include_router(external.router)

register_error_handlers(app)
