# icebreaker/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from icebreaker.core.config import settings
from icebreaker.core.logging_config import setup_logging
from icebreaker.db.init_db import init_db
from icebreaker.api.v1.endpoints import auth, health, matches, session
from icebreaker.services.errors import IcebreakerError
from icebreaker import models  # noqa

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IcebreakerError)
async def icebreaker_error_handler(request: Request, exc: IcebreakerError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.on_event("startup")
def on_startup():
    setup_logging()
    init_db()


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(matches.router, prefix="/api/v1")
app.include_router(session.router, prefix="/api/v1")
app.include_router(health.router, prefix="/api/v1/health")
