import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.db.postgres.base import create_tables
from app.routers import categories, posts
from app.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        create_tables()
    logger.info("Blog API started")

    try:
        yield
    finally:
        logger.info("Blog API exited gracefully")


app = FastAPI(
    title="Blog API",
    description="Posts and categories for the blog",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(posts.router)
app.include_router(categories.router)


@app.get("/")
async def root():
    return {"message": "Blog API is running"}


@app.get("/health")
async def health():
    return {"status": "ok", "message": "Backend is running"}
