"""
NameScout - FastAPI Application
Wires the throttling components, availability checkers and routers into one app.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from namescout.config import Settings, get_settings
from namescout.errors import AdmissionDenied, admission_denied_handler
from namescout.middleware.rate_limit import EdgeRateLimiter, EdgeRateLimitMiddleware
from namescout.routers.ai import router as ai_router
from namescout.routers.domains import router as domains_router
from namescout.routers.social import router as social_router
from namescout.services.ai_quota import AdmissionGate, CooldownGate, GlobalDailyQuota
from namescout.services.domain_checker import DomainChecker
from namescout.services.name_generator import NameGenerator
from namescout.services.quota_store import QuotaStore
from namescout.services.social_checker import SocialChecker

logger = logging.getLogger("namescout")


# ═══════════════════════════════════════════════════════
#  LIFESPAN - startup / shutdown
# ═══════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("🚀 Starting %s…", settings.APP_NAME)
    logger.info(
        "AI quota: %d/day, %ds cooldown, state in %s",
        settings.AI_DAILY_LIMIT, settings.AI_COOLDOWN_SECONDS, app.state.quota_store.path,
    )
    logger.info(
        "Edge limit: %d requests / %ds per client",
        settings.EDGE_RATE_LIMIT_MAX, settings.EDGE_RATE_LIMIT_WINDOW_SECONDS,
    )
    if not settings.GOOGLE_API_KEY:
        logger.warning("GOOGLE_API_KEY is not set; /api/generate-names will answer 503")

    yield  # ← app runs here

    logger.info("👋 %s shut down.", settings.APP_NAME)


# ═══════════════════════════════════════════════════════
#  APP FACTORY
# ═══════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    clock: Callable[[], float] = time.time,
) -> FastAPI:
    """Build an app with its own limiter state. ``clock`` (epoch seconds) drives the admission gate."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        description="Brand name availability across domains, social handles and AI suggestions",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── Admission gate (durable) ──
    store = QuotaStore(settings.RATE_LIMIT_FILE, clock=clock)
    cooldown = CooldownGate(
        store,
        cooldown_ms=settings.AI_COOLDOWN_SECONDS * 1000,
        sweep_threshold=settings.COOLDOWN_SWEEP_THRESHOLD,
        clock=clock,
    )
    quota = GlobalDailyQuota(store, daily_limit=settings.AI_DAILY_LIMIT, clock=clock)
    app.state.quota_store = store
    app.state.admission_gate = AdmissionGate(store, cooldown, quota, clock=clock)

    # ── Downstream collaborators ──
    app.state.domain_checker = DomainChecker(
        resolver_url=settings.DNS_RESOLVER_URL,
        timeout=settings.DOMAIN_CHECK_TIMEOUT_SECONDS,
    )
    app.state.social_checker = SocialChecker(timeout=settings.SOCIAL_CHECK_TIMEOUT_SECONDS)
    app.state.name_generator = NameGenerator(
        api_key=settings.GOOGLE_API_KEY,
        model=settings.GENAI_MODEL,
    )

    # ── Edge rate limiter (in-memory, all /api/ traffic) ──
    edge_limiter = EdgeRateLimiter(
        max_requests=settings.EDGE_RATE_LIMIT_MAX,
        window_seconds=settings.EDGE_RATE_LIMIT_WINDOW_SECONDS,
    )
    app.state.edge_limiter = edge_limiter
    app.add_middleware(EdgeRateLimitMiddleware, limiter=edge_limiter)

    # ── CORS ──
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "Retry-After",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-Quota-Remaining",
            "X-Quota-Limit",
            "X-Quota-Reset",
        ],
    )

    app.add_exception_handler(AdmissionDenied, admission_denied_handler)

    # ── Routers ──
    app.include_router(domains_router)
    app.include_router(social_router)
    app.include_router(ai_router)

    @app.get("/api/health")
    async def health_check():
        """Simple health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()


# ═══════════════════════════════════════════════════════
#  RUN (for direct execution)
# ═══════════════════════════════════════════════════════

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "namescout.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
