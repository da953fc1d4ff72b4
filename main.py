import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.cache.connection import close_redis
from src.core.config import profile_settings
from src.core.logging_config import setup_logging
from src.routers import profile as profile_router

# Configure logging before the app starts handling requests
setup_logging(profile_settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Thinking Profile Engine (catalog: {profile_settings.catalog_path})")
    yield
    await close_redis()
    logger.info("Thinking Profile Engine stopped")


app = FastAPI(title="Thinking Profile Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(profile_router.router, prefix="/api/v1", tags=["profile"])


@app.get("/health", tags=["Health Check"])
async def health():
    """
    Basic liveness check.
    """
    return {"status": "ok", "message": "Thinking Profile Engine is running."}


if __name__ == "__main__":
    import uvicorn
    # Run from the project root: `uvicorn main:app --reload`
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
