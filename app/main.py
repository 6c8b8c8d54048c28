from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.deps import build_services
from app.api.routes import agi, analyze
from app.config import settings
from app.services import logger as log_service  # noqa: F401  configures sinks


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    app.state.services = build_services(settings)
    yield
    # Shutdown
    logger.info("Shutting down, releasing remote agent sessions")
    await app.state.services.pool.cleanup()


app = FastAPI(
    title="IdeaCheck",
    description="Startup idea competitive analysis backed by a browser agent",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(analyze.router)
app.include_router(agi.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "service": "ideacheck"}
