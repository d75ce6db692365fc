import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from hr_assistant.api.v1.health import router as health_router
from hr_assistant.api.v1.analyze import router as analyze_router
from hr_assistant.api.v1.sessions import router as sessions_router
from hr_assistant.core.cors import cors_options
from hr_assistant.core.rate_limit import limiter
from hr_assistant.core.config import settings
from hr_assistant.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="AI HR Assistant API", version="0.1.0", lifespan=lifespan)

app.add_middleware(CORSMiddleware, **cors_options())
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(analyze_router, prefix="/v1", tags=["Analyze"])
app.include_router(sessions_router, prefix="/v1", tags=["Sessions"])
